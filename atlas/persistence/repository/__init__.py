"""PostgreSQL repository implementations."""

from atlas.persistence.repository.account import PostgresAccountRepository
from atlas.persistence.repository.identity_link import PostgresIdentityLinkRepository
from atlas.persistence.repository.metric_event import PostgresMetricEventRepository
from atlas.persistence.repository.transaction import PostgresTransactionManager

__all__ = [
    "PostgresAccountRepository",
    "PostgresIdentityLinkRepository",
    "PostgresMetricEventRepository",
    "PostgresTransactionManager",
]
