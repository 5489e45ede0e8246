"""Identity link domain service."""

import logfire

from atlas.domain.model.identity_link import IdentityLink
from atlas.domain.repository import IdentityLinkRepository
from atlas.domain.value import AccountId


class IdentityLinkService:
    """Domain service for federated identity link queries."""

    def __init__(self, identity_link_repository: IdentityLinkRepository) -> None:
        """Initialize identity link service.

        Args:
            identity_link_repository: Identity link repository
        """
        self.identity_link_repository = identity_link_repository

    async def get_links_for_account(self, account_id: AccountId) -> list[IdentityLink]:
        """Get all identities linked to an account, oldest first.

        Args:
            account_id: Account ID

        Returns:
            List of identity links (may be empty)
        """
        with logfire.span(
            "identity_link_service.get_links_for_account", account_id=str(account_id)
        ):
            links = await self.identity_link_repository.find_all_by_account_id(
                account_id
            )
            logfire.info(
                "Identity links loaded", account_id=str(account_id), count=len(links)
            )
            return links
