"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from atlas.domain.model import Account, IdentityLink, MetricEvent
from atlas.domain.value import (
    AccountId,
    AuthProvider,
    IdentityLinkId,
    MetricEventId,
    MetricEventType,
)


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account(
        id=AccountId(row["id"]),
        email=row["email"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        last_login_at=row.get("last_login_at"),
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    The ID is left out; it is assigned by the database on insert.
    """
    return account.model_dump(exclude={"id"})


def row_to_identity_link(row: Dict[str, Any]) -> IdentityLink:
    """Convert database row to IdentityLink domain model.

    Args:
        row: Database row as dict

    Returns:
        IdentityLink domain model
    """
    return IdentityLink(
        id=IdentityLinkId(row["id"]),
        account_id=AccountId(row["account_id"]),
        provider=AuthProvider(row["provider"]),
        provider_user_id=row["provider_user_id"],
        provider_email=row.get("provider_email"),
        provider_username=row.get("provider_username"),
        is_primary=row["is_primary"],
        linked_at=row["linked_at"],
        last_used_at=row["last_used_at"],
    )


def identity_link_to_dict(link: IdentityLink) -> Dict[str, Any]:
    """Convert IdentityLink domain model to database dict."""
    data = link.model_dump(exclude={"id"})
    data["provider"] = link.provider.value
    return data


def row_to_metric_event(row: Dict[str, Any]) -> MetricEvent:
    """Convert database row to MetricEvent domain model."""
    account_id = row.get("account_id")
    return MetricEvent(
        id=MetricEventId(row["id"]),
        event=MetricEventType(row["event"]),
        account_id=AccountId(account_id) if account_id is not None else None,
        metadata=row.get("metadata") or {},
        event_time=row["event_time"],
    )


def metric_event_to_dict(event: MetricEvent) -> Dict[str, Any]:
    """Convert MetricEvent domain model to database dict."""
    data = event.model_dump(exclude={"id"})
    data["event"] = event.event.value
    return data
