"""Domain layer DI providers."""

from dishka import Scope, provide

from atlas.config import AuthSettings
from atlas.domain.repository import (
    AccountRepository,
    IdentityLinkRepository,
    MetricEventRepository,
    TransactionManager,
)
from atlas.domain.service import (
    AccountLinkingService,
    AccountService,
    AuthService,
    IdentityLinkService,
    JWTService,
    MetricsService,
    OAuthClient,
)
from atlas.domain.value import AuthProvider
from atlas.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services.

    Services that touch repositories are request scoped so that they share
    the request's database session. The token codec and the provider
    registry hold no per-request state and live as long as the app.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        return AuthService(oauth_clients=oauth_clients)

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_account_service(
        self, account_repository: AccountRepository
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(account_repository=account_repository)

    @provide
    def get_identity_link_service(
        self, identity_link_repository: IdentityLinkRepository
    ) -> IdentityLinkService:
        """Provide identity link domain service."""
        return IdentityLinkService(identity_link_repository=identity_link_repository)

    @provide
    def get_account_linking_service(
        self,
        account_repository: AccountRepository,
        identity_link_repository: IdentityLinkRepository,
        transaction_manager: TransactionManager,
    ) -> AccountLinkingService:
        """Provide account linking domain service."""
        return AccountLinkingService(
            account_repository=account_repository,
            identity_link_repository=identity_link_repository,
            transaction_manager=transaction_manager,
        )

    @provide
    def get_metrics_service(
        self, metric_event_repository: MetricEventRepository
    ) -> MetricsService:
        """Provide metrics domain service."""
        return MetricsService(metric_event_repository=metric_event_repository)
