"""Account repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from atlas.domain.error import DuplicateAccountError
from atlas.domain.model.account import Account
from atlas.domain.repository.account import AccountRepository
from atlas.domain.value import AccountId
from atlas.persistence.mappers import account_to_dict, row_to_account
from atlas.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find account by ID."""
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_account(dict(row))

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find account by email (exact match)."""
        stmt = select(accounts_table).where(accounts_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_account(dict(row))

    async def save(self, account: Account) -> Account:
        """Insert a new account or update an existing one.

        Inserts run in a SAVEPOINT so that a unique violation leaves the
        surrounding transaction usable.

        Raises:
            DuplicateAccountError: If the email is already taken
        """
        account_dict = account_to_dict(account)

        if account.id is None:
            stmt = accounts_table.insert().values(**account_dict).returning(accounts_table)
        else:
            stmt = (
                accounts_table.update()
                .where(accounts_table.c.id == account.id)
                .values(**account_dict)
                .returning(accounts_table)
            )

        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().one()
        except IntegrityError as e:
            if "uq_accounts_email" in str(e.orig):
                raise DuplicateAccountError(account.email) from e
            raise

        await self.session.flush()
        return row_to_account(dict(row))
