"""Metric event repository interface."""

from abc import ABC, abstractmethod

from atlas.domain.model.metric_event import MetricEvent


class MetricEventRepository(ABC):
    """Append-only store for metric events."""

    @abstractmethod
    async def save(self, event: MetricEvent) -> MetricEvent:
        """Persist a metric event and return it with its assigned ID."""
        pass
