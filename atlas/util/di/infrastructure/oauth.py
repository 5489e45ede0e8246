"""Registry of identity provider clients."""

from dishka import Scope, provide

from atlas.adapter.google.client import GoogleOAuthClient
from atlas.domain.service.auth_service import OAuthClient
from atlas.domain.value import AuthProvider
from atlas.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Maps each supported provider to its client for ``AuthService``.

    Clients are requested by their specific type so that each one can be
    mocked independently; a provider missing here is unsupported.
    """

    scope = Scope.APP

    @provide
    def get_oauth_clients(
        self, google: GoogleOAuthClient
    ) -> dict[AuthProvider, OAuthClient]:
        return {AuthProvider.GOOGLE: google}
