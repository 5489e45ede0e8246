"""Account aggregate root.

One local user. Accounts are created on the first successful federation for
an unseen email and refreshed on every subsequent login.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from atlas.domain.error import UnsavedEntityError
from atlas.domain.model.common import DomainModel
from atlas.domain.value import AccountId, PersonName


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(DomainModel):
    """Local user account.

    ``id`` is None until the account has been saved; the store assigns it and
    it never changes afterwards. ``email`` is unique across accounts.
    """

    id: Optional[AccountId] = None
    email: str
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    last_login_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        """Display name."""
        return PersonName(first_name=self.first_name, last_name=self.last_name).full_name

    @property
    def saved_id(self) -> AccountId:
        """Store-assigned ID.

        Raises:
            UnsavedEntityError: If the account has not been saved
        """
        if self.id is None:
            raise UnsavedEntityError("Account")
        return self.id
