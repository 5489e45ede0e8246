"""Save metric use case."""

from typing import Any

from pydantic import BaseModel, Field

from atlas.domain.service import MetricsService
from atlas.domain.value import AccountId, MetricEventType

from ..base import BaseUseCase


class SaveMetricRequest(BaseModel):
    """Client-reported metric event."""

    event: MetricEventType
    account_id: AccountId | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class SaveMetricResponse(BaseModel):
    """Save metric response."""

    event_id: int


class SaveMetricUseCase(BaseUseCase[SaveMetricRequest, SaveMetricResponse]):
    """Use case storing a client-side metric event."""

    def __init__(self, metrics_service: MetricsService) -> None:
        self.metrics_service = metrics_service

    async def execute(self, request: SaveMetricRequest) -> SaveMetricResponse:
        saved = await self.metrics_service.record(
            request.event, request.account_id, request.metadata
        )
        return SaveMetricResponse(event_id=saved.saved_id)
