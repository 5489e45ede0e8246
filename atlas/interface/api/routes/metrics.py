"""Metrics routes."""

import logging
from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status
from pydantic import BaseModel, ConfigDict, Field

from atlas.application.usecase.metrics import SaveMetricUseCase
from atlas.application.usecase.metrics.save_metric import SaveMetricRequest
from atlas.domain.value import MetricEventType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["metrics"], route_class=DishkaRoute)


class MetricEventBody(BaseModel):
    """Client-side metric event.

    Field names follow the front end's JSON (``eventMetadata``, ``userId``).
    """

    model_config = ConfigDict(populate_by_name=True)

    event: MetricEventType
    event_metadata: dict[str, Any] = Field(default_factory=dict, alias="eventMetadata")
    user_id: int | None = Field(default=None, alias="userId")


@router.post("/save-metric", status_code=status.HTTP_201_CREATED)
async def save_metric(
    body: MetricEventBody,
    save_metric_use_case: FromDishka[SaveMetricUseCase],
) -> Response:
    """Store a client-side metric event.

    Returns:
        Empty 201 on success, empty 500 if the event could not be stored
    """
    try:
        await save_metric_use_case.execute(
            SaveMetricRequest(
                event=body.event,
                account_id=body.user_id,
                metadata=body.event_metadata,
            )
        )
    except Exception as e:
        logger.exception(f"Failed to save metric event: {str(e)}")
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(status_code=status.HTTP_201_CREATED)
