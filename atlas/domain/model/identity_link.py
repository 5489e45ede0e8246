"""Federated identity link entity.

Binds one (provider, provider subject id) pair to exactly one account.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from atlas.domain.model.common import DomainModel
from atlas.domain.value import AccountId, AuthProvider, IdentityLinkId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdentityLink(DomainModel):
    """External identity linked to an account.

    ``(provider, provider_user_id)`` is globally unique. The first link of an
    account is its primary link. Only ``last_used_at`` changes after creation.
    """

    id: Optional[IdentityLinkId] = None
    account_id: AccountId
    provider: AuthProvider
    provider_user_id: str  # Provider's stable subject id
    provider_email: Optional[str] = None  # Email reported at link time
    provider_username: Optional[str] = None
    is_primary: bool = False
    linked_at: datetime = Field(default_factory=_utcnow)
    last_used_at: datetime = Field(default_factory=_utcnow)
