"""Repository interfaces for the Atlas domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from atlas.domain.repository.account import AccountRepository
from atlas.domain.repository.identity_link import IdentityLinkRepository
from atlas.domain.repository.metric_event import MetricEventRepository
from atlas.domain.repository.transaction import TransactionManager

__all__ = [
    "AccountRepository",
    "IdentityLinkRepository",
    "MetricEventRepository",
    "TransactionManager",
]
