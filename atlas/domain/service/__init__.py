"""Domain services."""

from .account_linking_service import MAX_LINK_ATTEMPTS, AccountLinkingService
from .account_service import AccountService
from .auth_service import AuthService, OAuthClient
from .identity_link_service import IdentityLinkService
from .jwt_service import JWTService
from .metrics_service import MetricsService

__all__ = [
    "MAX_LINK_ATTEMPTS",
    "AccountLinkingService",
    "AccountService",
    "AuthService",
    "IdentityLinkService",
    "JWTService",
    "MetricsService",
    "OAuthClient",
]
