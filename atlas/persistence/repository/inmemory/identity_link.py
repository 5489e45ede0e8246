"""In-memory identity link repository for testing."""

from typing import Optional

from atlas.domain.error import DuplicateIdentityLinkError, DuplicatePrimaryLinkError
from atlas.domain.model.identity_link import IdentityLink
from atlas.domain.repository.identity_link import IdentityLinkRepository
from atlas.domain.value import AccountId, AuthProvider, IdentityLinkId

from .transaction import record_undo


class InMemoryIdentityLinkRepository(IdentityLinkRepository):
    """In-memory implementation of IdentityLinkRepository for testing."""

    def __init__(self) -> None:
        self._links: dict[IdentityLinkId, IdentityLink] = {}
        self._next_id = 1

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[IdentityLink]:
        """Find link by provider and provider subject id."""
        for link in self._links.values():
            if link.provider == provider and link.provider_user_id == provider_user_id:
                return link
        return None

    async def find_all_by_account_id(self, account_id: AccountId) -> list[IdentityLink]:
        """Find all links for an account, oldest first."""
        matches = [link for link in self._links.values() if link.account_id == account_id]
        matches.sort(key=lambda link: (link.linked_at, link.id))
        return matches

    async def save(self, link: IdentityLink) -> IdentityLink:
        """Save link, assigning an ID on first save."""
        for existing in self._links.values():
            if existing.id == link.id:
                continue
            if (
                existing.provider == link.provider
                and existing.provider_user_id == link.provider_user_id
            ):
                raise DuplicateIdentityLinkError(
                    link.provider.value, link.provider_user_id
                )
            if (
                link.is_primary
                and existing.is_primary
                and existing.account_id == link.account_id
            ):
                raise DuplicatePrimaryLinkError(link.account_id)

        link_id = link.id
        if link_id is None:
            link_id = IdentityLinkId(self._next_id)
            link = link.evolve(id=link_id)
            self._next_id += 1

        self._record_undo(link_id)
        self._links[link_id] = link
        return link

    def _record_undo(self, link_id: IdentityLinkId) -> None:
        previous = self._links.get(link_id)

        def undo() -> None:
            if previous is None:
                self._links.pop(link_id, None)
            else:
                self._links[link_id] = previous

        record_undo(undo)
