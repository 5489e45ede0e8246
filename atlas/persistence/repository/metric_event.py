"""Metric event repository implementation using PostgreSQL."""

from sqlalchemy.ext.asyncio import AsyncSession

from atlas.domain.model.metric_event import MetricEvent
from atlas.domain.repository.metric_event import MetricEventRepository
from atlas.persistence.mappers import metric_event_to_dict, row_to_metric_event
from atlas.persistence.tables import metric_events_table


class PostgresMetricEventRepository(MetricEventRepository):
    """PostgreSQL implementation of MetricEventRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, event: MetricEvent) -> MetricEvent:
        """Append a metric event."""
        stmt = (
            metric_events_table.insert()
            .values(**metric_event_to_dict(event))
            .returning(metric_events_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one()

        await self.session.flush()
        return row_to_metric_event(dict(row))
