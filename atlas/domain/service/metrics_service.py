"""Metrics domain service."""

from typing import Any

import logfire

from atlas.domain.model.metric_event import MetricEvent
from atlas.domain.repository import MetricEventRepository
from atlas.domain.value import AccountId, MetricEventType


class MetricsService:
    """Domain service recording audit and client metric events."""

    def __init__(self, metric_event_repository: MetricEventRepository) -> None:
        """Initialize metrics service.

        Args:
            metric_event_repository: Metric event repository
        """
        self.metric_event_repository = metric_event_repository

    async def record(
        self,
        event: MetricEventType,
        account_id: AccountId | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> MetricEvent:
        """Record a metric event.

        Args:
            event: Event type
            account_id: Account the event belongs to, if known
            metadata: Free-form event attributes

        Returns:
            The saved event
        """
        with logfire.span(
            "metrics_service.record",
            metric_event=event.value,
            account_id=str(account_id) if account_id is not None else None,
        ):
            saved = await self.metric_event_repository.save(
                MetricEvent(event=event, account_id=account_id, metadata=metadata or {})
            )
            logfire.info(
                "Metric event recorded", metric_event=event.value, event_id=str(saved.id)
            )
            return saved
