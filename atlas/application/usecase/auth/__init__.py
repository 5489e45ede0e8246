"""Authentication use cases."""

from .authenticate_request import (
    Anonymous,
    AuthenticateRequest,
    AuthenticateRequestUseCase,
    Authenticated,
    AuthOutcome,
    Principal,
    PublicPathMatcher,
)
from .get_current_user import GetCurrentUserUseCase
from .login import LoginUseCase
from .logout import LogoutUseCase

__all__ = [
    "Anonymous",
    "AuthenticateRequest",
    "AuthenticateRequestUseCase",
    "Authenticated",
    "AuthOutcome",
    "GetCurrentUserUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "Principal",
    "PublicPathMatcher",
]
