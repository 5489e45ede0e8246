"""In-memory account repository for testing."""

from typing import Optional

from atlas.domain.error import DuplicateAccountError
from atlas.domain.model.account import Account
from atlas.domain.repository.account import AccountRepository
from atlas.domain.value import AccountId

from .transaction import record_undo


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[AccountId, Account] = {}
        self._next_id = 1

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find account by ID."""
        return self._accounts.get(account_id)

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find account by email."""
        for account in self._accounts.values():
            if account.email == email:
                return account
        return None

    async def save(self, account: Account) -> Account:
        """Save account, assigning an ID on first save."""
        for existing in self._accounts.values():
            if existing.email == account.email and existing.id != account.id:
                raise DuplicateAccountError(account.email)

        account_id = account.id
        if account_id is None:
            account_id = AccountId(self._next_id)
            account = account.evolve(id=account_id)
            self._next_id += 1

        self._record_undo(account_id)
        self._accounts[account_id] = account
        return account

    def _record_undo(self, account_id: AccountId) -> None:
        previous = self._accounts.get(account_id)

        def undo() -> None:
            if previous is None:
                self._accounts.pop(account_id, None)
            else:
                self._accounts[account_id] = previous

        record_undo(undo)
