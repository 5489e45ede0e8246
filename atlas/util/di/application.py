"""Application layer DI providers."""

from dishka import Scope, provide

from atlas.application.usecase.auth import (
    AuthenticateRequestUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
)
from atlas.application.usecase.metrics import SaveMetricUseCase
from atlas.config import SecuritySettings
from atlas.domain.service import (
    AccountLinkingService,
    AccountService,
    AuthService,
    IdentityLinkService,
    JWTService,
    MetricsService,
)
from atlas.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        account_linking_service: AccountLinkingService,
        jwt_service: JWTService,
        metrics_service: MetricsService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            account_linking_service=account_linking_service,
            jwt_service=jwt_service,
            metrics_service=metrics_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(
        self, jwt_service: JWTService, metrics_service: MetricsService
    ) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(jwt_service=jwt_service, metrics_service=metrics_service)

    @provide(scope=Scope.REQUEST)
    def get_authenticate_request_use_case(
        self,
        jwt_service: JWTService,
        account_service: AccountService,
        security_settings: SecuritySettings,
    ) -> AuthenticateRequestUseCase:
        """Provide authenticate request use case."""
        return AuthenticateRequestUseCase(
            jwt_service=jwt_service,
            account_service=account_service,
            security_settings=security_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self,
        account_service: AccountService,
        identity_link_service: IdentityLinkService,
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            account_service=account_service,
            identity_link_service=identity_link_service,
        )

    # Metrics use cases
    @provide(scope=Scope.REQUEST)
    def get_save_metric_use_case(
        self, metrics_service: MetricsService
    ) -> SaveMetricUseCase:
        """Provide save metric use case."""
        return SaveMetricUseCase(metrics_service=metrics_service)
