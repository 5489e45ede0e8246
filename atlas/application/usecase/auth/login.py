"""Login use case."""

import logfire
from pydantic import BaseModel

from atlas.domain.model.account import Account
from atlas.domain.service import (
    AccountLinkingService,
    AuthService,
    JWTService,
    MetricsService,
)
from atlas.domain.value import AuthProvider, MetricEventType

from ..base import BaseUseCase


class LoginRequest(BaseModel):
    """Login request from OAuth callback.

    These parameters come from the identity provider in the callback URL.
    """

    provider: AuthProvider
    code: str  # OAuth authorization code
    state: str  # State parameter for session verification


class LoginResponse(BaseModel):
    """Login response.

    The route layer turns this into session cookies on a redirect.
    """

    token: str
    account: Account
    token_lifetime_ms: int


class LoginUseCase(BaseUseCase[LoginRequest, LoginResponse]):
    """Use case for federated login.

    Verifier, Identity Linker and Token Codec run in that order; any failure
    aborts before a credential exists.
    """

    def __init__(
        self,
        auth_service: AuthService,
        account_linking_service: AccountLinkingService,
        jwt_service: JWTService,
        metrics_service: MetricsService,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service (identity providers)
            account_linking_service: Links verified identities to accounts
            jwt_service: JWT token domain service
            metrics_service: Audit/metrics sink
        """
        self.auth_service = auth_service
        self.account_linking_service = account_linking_service
        self.jwt_service = jwt_service
        self.metrics_service = metrics_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute federated login.

        Steps:
        1. Complete the OAuth flow and obtain the verified identity
        2. Resolve the identity to a local account (create/link as needed)
        3. Issue the session token
        4. Record a LOGIN event (best effort)

        Args:
            request: Login request with OAuth callback parameters

        Returns:
            Login response with the session token and account

        Raises:
            ValueError: If the provider is not supported
            ProviderError: If the OAuth exchange fails
            TokenIssuanceError: If the token cannot be issued
        """
        with logfire.span("login", provider=request.provider.value):
            assertion = await self.auth_service.complete_login(
                request.provider, request.code, request.state
            )

            logfire.info(
                "OAuth completed",
                provider=assertion.provider.value,
                provider_user_id=assertion.provider_user_id,
            )

            account = await self.account_linking_service.link_identity(assertion)

            token = self.jwt_service.issue(account)

            await self._record_login(account, request.provider)

            return LoginResponse(
                token=token,
                account=account,
                token_lifetime_ms=self.jwt_service.lifetime_ms,
            )

    async def _record_login(self, account: Account, provider: AuthProvider) -> None:
        try:
            await self.metrics_service.record(
                MetricEventType.LOGIN,
                account.id,
                {"provider": provider.value, "screen": "N/A"},
            )
        except Exception as e:
            logfire.warn(
                "Failed to record login event", account_id=str(account.id), error=str(e)
            )
