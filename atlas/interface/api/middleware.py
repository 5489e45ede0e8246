"""HTTP middleware."""

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from atlas.application.usecase.auth import (
    Anonymous,
    AuthenticateRequest,
    AuthenticateRequestUseCase,
    AuthOutcome,
)
from atlas.config import Settings

logger = logging.getLogger(__name__)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Resolve the session cookie of every request into an auth outcome.

    The outcome is stored on ``request.state.auth``. The request always
    continues to the next handler; rejecting anonymous callers is left to
    the route dependencies.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.auth = await self._authenticate(request)
        return await call_next(request)

    async def _authenticate(self, request: Request) -> AuthOutcome:
        try:
            container = request.app.state.dishka_container
            async with container({Request: request}) as request_container:
                settings = await request_container.get(Settings)
                use_case = await request_container.get(AuthenticateRequestUseCase)
                return await use_case.execute(
                    AuthenticateRequest(
                        path=request.url.path,
                        token=request.cookies.get(settings.auth.cookie_name),
                    )
                )
        except Exception:
            logger.exception(f"Authentication failed for path: {request.url.path}")
            return Anonymous()
