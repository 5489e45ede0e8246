"""Identity link repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from atlas.domain.model.identity_link import IdentityLink
from atlas.domain.value import AccountId, AuthProvider


class IdentityLinkRepository(ABC):
    """Repository for IdentityLink entities.

    Manages the relationship between accounts and their external
    identity provider identities.
    """

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[IdentityLink]:
        """Find a link by provider and provider subject id.

        Args:
            provider: The identity provider
            provider_user_id: The subject id on that provider

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_account_id(self, account_id: AccountId) -> list[IdentityLink]:
        """Get all links owned by an account, oldest first.

        Args:
            account_id: The account's unique identifier

        Returns:
            List of links (may be empty)
        """
        pass

    @abstractmethod
    async def save(self, link: IdentityLink) -> IdentityLink:
        """Save a link (create or update).

        A link without an ID is created and returned with its assigned ID.

        Args:
            link: The link to save

        Returns:
            The saved link

        Raises:
            DuplicateIdentityLinkError: If another link claims the same
                provider identity
            DuplicatePrimaryLinkError: If the link is primary and the account
                already has a primary link
        """
        pass
