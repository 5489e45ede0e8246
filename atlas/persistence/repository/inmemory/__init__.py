"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .identity_link import InMemoryIdentityLinkRepository
from .metric_event import InMemoryMetricEventRepository
from .transaction import InMemoryTransactionManager

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryIdentityLinkRepository",
    "InMemoryMetricEventRepository",
    "InMemoryTransactionManager",
]
