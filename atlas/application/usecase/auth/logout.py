"""Logout use case."""

import logfire
from pydantic import BaseModel

from atlas.domain.service import JWTService, MetricsService
from atlas.domain.value import AccountId, MetricEventType

from ..base import BaseUseCase

LOGOUT_METADATA = {"triggerId": "Logout Success", "screen": "N/A"}


class LogoutRequest(BaseModel):
    """Logout request."""

    token: str | None = None  # Session token presented with the request


class LogoutResponse(BaseModel):
    """Logout response."""

    recorded: bool  # Whether a LOGOUT event was stored


class LogoutUseCase(BaseUseCase[LogoutRequest, LogoutResponse]):
    """Use case recording a logout.

    Stateless sessions have nothing to revoke server-side; the route clears
    the cookies whatever happens here.
    """

    def __init__(self, jwt_service: JWTService, metrics_service: MetricsService) -> None:
        """Initialize logout use case.

        Args:
            jwt_service: JWT token domain service
            metrics_service: Audit/metrics sink
        """
        self.jwt_service = jwt_service
        self.metrics_service = metrics_service

    async def execute(self, request: LogoutRequest) -> LogoutResponse:
        """Record a LOGOUT event for the presented token's subject.

        Nothing is recorded without a readable token. Never raises: every
        failure is logged and reported as not recorded.
        """
        with logfire.span("logout", has_token=request.token is not None):
            if not request.token:
                return LogoutResponse(recorded=False)

            try:
                account_id = AccountId(self.jwt_service.claims(request.token).subject_id)
                await self.metrics_service.record(
                    MetricEventType.LOGOUT, account_id, dict(LOGOUT_METADATA)
                )
            except Exception as e:
                logfire.error("Failed to capture logout metric", error=str(e))
                return LogoutResponse(recorded=False)

            return LogoutResponse(recorded=True)
