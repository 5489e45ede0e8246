"""In-memory metric event repository for testing."""

from atlas.domain.model.metric_event import MetricEvent
from atlas.domain.repository.metric_event import MetricEventRepository
from atlas.domain.value import MetricEventId


class InMemoryMetricEventRepository(MetricEventRepository):
    """In-memory implementation of MetricEventRepository for testing."""

    def __init__(self) -> None:
        self.events: list[MetricEvent] = []

    async def save(self, event: MetricEvent) -> MetricEvent:
        """Append event, assigning an ID."""
        saved = event.evolve(id=MetricEventId(len(self.events) + 1))
        self.events.append(saved)
        return saved
