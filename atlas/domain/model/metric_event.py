"""Metric event entity."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field

from atlas.domain.error import UnsavedEntityError
from atlas.domain.model.common import DomainModel
from atlas.domain.value import AccountId, MetricEventId, MetricEventType


class MetricEvent(DomainModel):
    """Recorded audit/metrics event (login, logout, client interactions)."""

    id: Optional[MetricEventId] = None
    event: MetricEventType
    account_id: Optional[AccountId] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    event_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def saved_id(self) -> MetricEventId:
        """Store-assigned ID.

        Raises:
            UnsavedEntityError: If the event has not been saved
        """
        if self.id is None:
            raise UnsavedEntityError("MetricEvent")
        return self.id
