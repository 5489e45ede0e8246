"""Account domain service."""

import logfire

from atlas.domain.error import NotFoundError
from atlas.domain.model.account import Account
from atlas.domain.repository import AccountRepository
from atlas.domain.value import AccountId


class AccountService:
    """Domain service for account lookups."""

    def __init__(self, account_repository: AccountRepository) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
        """
        self.account_repository = account_repository

    async def find_by_id(self, account_id: AccountId) -> Account | None:
        """Find account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account if found, None otherwise
        """
        with logfire.span("account_service.find_by_id", account_id=str(account_id)):
            account = await self.account_repository.find_by_id(account_id)
            if not account:
                logfire.warn("Account not found", account_id=str(account_id))
            return account

    async def get_by_id(self, account_id: AccountId) -> Account:
        """Get account by ID.

        Raises:
            NotFoundError: If account not found
        """
        account = await self.find_by_id(account_id)
        if not account:
            raise NotFoundError("Account", str(account_id))
        return account

    async def find_by_email(self, email: str) -> Account | None:
        """Find account by email."""
        with logfire.span("account_service.find_by_email", email=email):
            return await self.account_repository.find_by_email(email)
