"""Domain value objects for Atlas."""

from atlas.domain.value.identifiers import AccountId, IdentityLinkId, MetricEventId
from atlas.domain.value.types import (
    AuthProvider,
    IdentityAssertion,
    MetricEventType,
    PersonName,
)

__all__ = [
    # Identifiers
    "AccountId",
    "IdentityLinkId",
    "MetricEventId",
    # Types
    "AuthProvider",
    "IdentityAssertion",
    "MetricEventType",
    "PersonName",
]
