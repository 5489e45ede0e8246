"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from atlas.domain.model.account import Account
from atlas.domain.value import AccountId


class AccountRepository(ABC):
    """Repository for the Account aggregate.

    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by its email (exact match).

        Args:
            email: The account's email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        An account without an ID is created and returned with its newly
        assigned ID.

        Args:
            account: The account to save

        Returns:
            The saved account

        Raises:
            DuplicateAccountError: If another account owns the same email
        """
        pass
