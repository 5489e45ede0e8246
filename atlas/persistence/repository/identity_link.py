"""Identity link repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from atlas.domain.error import DuplicateIdentityLinkError, DuplicatePrimaryLinkError
from atlas.domain.model.identity_link import IdentityLink
from atlas.domain.repository.identity_link import IdentityLinkRepository
from atlas.domain.value import AccountId, AuthProvider
from atlas.persistence.mappers import identity_link_to_dict, row_to_identity_link
from atlas.persistence.tables import identity_links_table


class PostgresIdentityLinkRepository(IdentityLinkRepository):
    """PostgreSQL implementation of IdentityLinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[IdentityLink]:
        """Find a link by provider and provider subject id.

        Args:
            provider: Identity provider
            provider_user_id: Provider-specific subject id

        Returns:
            IdentityLink if found, None otherwise
        """
        stmt = select(identity_links_table).where(
            identity_links_table.c.provider == provider.value,
            identity_links_table.c.provider_user_id == provider_user_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_identity_link(dict(row))

    async def find_all_by_account_id(self, account_id: AccountId) -> list[IdentityLink]:
        """Find all links owned by an account, oldest first."""
        stmt = (
            select(identity_links_table)
            .where(identity_links_table.c.account_id == account_id)
            .order_by(identity_links_table.c.linked_at, identity_links_table.c.id)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_identity_link(dict(row)) for row in rows]

    async def save(self, link: IdentityLink) -> IdentityLink:
        """Insert a new link or refresh an existing one.

        Raises:
            DuplicateIdentityLinkError: If the provider identity is already
                linked
            DuplicatePrimaryLinkError: If the account already has a primary
                link
        """
        if link.id is None:
            stmt = (
                identity_links_table.insert()
                .values(**identity_link_to_dict(link))
                .returning(identity_links_table)
            )
        else:
            # Only the last-used timestamp changes after creation
            stmt = (
                identity_links_table.update()
                .where(identity_links_table.c.id == link.id)
                .values(last_used_at=link.last_used_at)
                .returning(identity_links_table)
            )

        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().one()
        except IntegrityError as e:
            if "uq_provider_identity" in str(e.orig):
                raise DuplicateIdentityLinkError(
                    link.provider.value, link.provider_user_id
                ) from e
            if "uq_primary_link_per_account" in str(e.orig):
                raise DuplicatePrimaryLinkError(link.account_id) from e
            raise

        await self.session.flush()
        return row_to_identity_link(dict(row))
