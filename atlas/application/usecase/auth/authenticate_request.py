"""Authenticate request use case.

Turns the session credential presented with a request into an
:data:`AuthOutcome`. Failures never surface as errors here: every invalid,
expired or orphaned credential yields :class:`Anonymous`, and access control
is left to the route layer.
"""

from typing import Literal, Union

import logfire
from pydantic import BaseModel, ConfigDict

from atlas.config import SecuritySettings
from atlas.domain.model.account import Account
from atlas.domain.service import AccountService, JWTService
from atlas.domain.value import AccountId

from ..base import BaseUseCase

ROLE_USER = "ROLE_USER"


class Principal(BaseModel):
    """Authenticated caller."""

    model_config = ConfigDict(frozen=True)

    name: str  # Account email
    authorities: tuple[str, ...] = (ROLE_USER,)
    account: Account


class Authenticated(BaseModel):
    """Request carries a valid credential for an existing account."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["authenticated"] = "authenticated"
    principal: Principal

    @property
    def is_authenticated(self) -> bool:
        return True


class Anonymous(BaseModel):
    """Request carries no usable credential."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["anonymous"] = "anonymous"

    @property
    def is_authenticated(self) -> bool:
        return False


AuthOutcome = Union[Authenticated, Anonymous]


class PublicPathMatcher:
    """Matches request paths against an ordered allow-list.

    ``/prefix/**`` matches the prefix and everything beneath it, each ``*``
    elsewhere matches exactly one path segment, and any other pattern must
    match the path exactly.
    """

    def __init__(self, patterns: list[str]) -> None:
        self.patterns = list(patterns)

    def matches(self, path: str) -> bool:
        return any(self._match(pattern, path) for pattern in self.patterns)

    @staticmethod
    def _match(pattern: str, path: str) -> bool:
        if pattern.endswith("/**"):
            prefix = pattern[:-3]
            return path == prefix or path.startswith(prefix + "/")

        if "*" in pattern:
            pattern_parts = pattern.split("/")
            path_parts = path.split("/")
            if len(pattern_parts) != len(path_parts):
                return False
            return all(
                p == "*" and s != "" or p == s
                for p, s in zip(pattern_parts, path_parts)
            )

        return path == pattern


class AuthenticateRequest(BaseModel):
    """Authenticate request input."""

    path: str
    token: str | None = None  # Value of the session cookie, if any


class AuthenticateRequestUseCase(BaseUseCase[AuthenticateRequest, AuthOutcome]):
    """Use case resolving a request's session credential to a principal."""

    def __init__(
        self,
        jwt_service: JWTService,
        account_service: AccountService,
        security_settings: SecuritySettings,
    ) -> None:
        """Initialize authenticate request use case.

        Args:
            jwt_service: JWT token domain service
            account_service: Account domain service
            security_settings: Public path allow-list
        """
        self.jwt_service = jwt_service
        self.account_service = account_service
        self.public_paths = PublicPathMatcher(security_settings.public_paths)

    async def execute(self, request: AuthenticateRequest) -> AuthOutcome:
        """Resolve the request's credential.

        Steps:
        1. Public paths are skipped without any lookup
        2. A missing or invalid token is anonymous
        3. Claims are read and the subject account is loaded
        4. An unknown subject is anonymous

        Never raises.
        """
        if self.public_paths.matches(request.path):
            return Anonymous()

        if not request.token:
            return Anonymous()

        if not self.jwt_service.validate(request.token):
            logfire.debug("Invalid session token presented", path=request.path)
            return Anonymous()

        try:
            claims = self.jwt_service.claims(request.token)
        except Exception as e:
            logfire.error("Cannot set user authentication", error=str(e))
            return Anonymous()

        try:
            account = await self.account_service.find_by_id(
                AccountId(claims.subject_id)
            )
        except Exception as e:
            logfire.error(
                "Account lookup failed during authentication",
                account_id=str(claims.subject_id),
                error=str(e),
            )
            return Anonymous()

        if not account:
            logfire.warn(
                "Session token subject no longer exists",
                account_id=str(claims.subject_id),
            )
            return Anonymous()

        return Authenticated(principal=Principal(name=account.email, account=account))
