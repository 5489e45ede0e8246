"""Google OpenID Connect adapter."""

from .client import (
    GoogleOAuthClient,
    GoogleOAuthError,
    MockGoogleOAuthClient,
    RealGoogleOAuthClient,
)

__all__ = [
    "GoogleOAuthClient",
    "GoogleOAuthError",
    "MockGoogleOAuthClient",
    "RealGoogleOAuthClient",
]
