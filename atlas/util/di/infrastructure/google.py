"""Google infrastructure providers."""

from dishka import Scope, provide

from atlas.adapter.google.client import GoogleOAuthClient, RealGoogleOAuthClient
from atlas.config import Settings
from atlas.util.di.base import ProviderBase
from atlas.util.error import ConfigurationError


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: Settings) -> GoogleOAuthClient:
        """Provide Google OAuth client.

        Returns:
            Google OpenID Connect client

        Raises:
            ConfigurationError: If Google OAuth credentials are not configured
        """
        if not settings.auth.google.client_id:
            raise ConfigurationError("auth.google.client_id", "must be configured")
        if not settings.auth.google.client_secret:
            raise ConfigurationError("auth.google.client_secret", "must be configured")

        return RealGoogleOAuthClient(
            client_id=settings.auth.google.client_id,
            client_secret=settings.auth.google.client_secret,
            redirect_uri=settings.auth.google_callback_url,
            scope=settings.auth.google.scope,
        )
