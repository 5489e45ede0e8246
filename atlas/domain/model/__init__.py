"""Domain model entities for Atlas."""

from atlas.domain.model.account import Account
from atlas.domain.model.identity_link import IdentityLink
from atlas.domain.model.metric_event import MetricEvent

__all__ = [
    "Account",
    "IdentityLink",
    "MetricEvent",
]
