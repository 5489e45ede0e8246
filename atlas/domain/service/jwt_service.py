"""JWT token domain service (session token codec)."""

from datetime import datetime, timezone
from typing import Any, Callable

import jwt
import logfire

from atlas.config import AuthSettings
from atlas.domain.model.account import Account
from atlas.util.jwt import (
    JWTError,
    TokenClaims,
    TokenExpiredError,
    TokenIssuanceError,
    TokenParsingError,
    create_token,
    decode_token,
    expiry_of,
    parse_claims,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JWTService:
    """Issues and checks stateless session credentials.

    The signature and the expiry are the only server-side checks: there is no
    session store. Expiry comparison is strict (``expiry < now``) with no
    clock-skew leeway.
    """

    def __init__(
        self,
        auth_settings: AuthSettings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings (key, algorithm, lifetime)
            clock: Returns the current timezone-aware time; UTC wall clock
                by default
        """
        self.auth_settings = auth_settings
        self.clock = clock or _utcnow

    def issue(self, account: Account) -> str:
        """Issue a signed token for a persisted account.

        Args:
            account: Account to issue the token for

        Returns:
            Compact JWT string

        Raises:
            TokenIssuanceError: If the account has no ID or signing fails
        """
        with logfire.span("jwt_service.issue", account_id=account.id):
            if account.id is None:
                raise TokenIssuanceError(
                    "Account must be persisted before a token can be issued"
                )

            try:
                token = create_token(
                    self.build_claims(account), self.clock(), self.auth_settings
                )
            except TokenIssuanceError as e:
                logfire.error(
                    "Failed to generate JWT token", account_id=account.id, error=str(e)
                )
                raise
            except Exception as e:
                logfire.error(
                    "Failed to generate JWT token", account_id=account.id, error=str(e)
                )
                raise TokenIssuanceError("Failed to generate JWT token") from e

            logfire.info("JWT token issued", account_id=account.id)
            return token

    def validate(self, token: Any) -> bool:
        """Check signature, structure and expiry.

        Never raises: missing, blank, malformed, badly signed, expired and
        unexpected failures all yield False.
        """
        if token is None:
            return False

        try:
            if not token.strip():
                return False
            self._verified_payload(token)
            return True
        except (JWTError, jwt.InvalidTokenError) as e:
            logfire.debug("JWT token validation failed", error=str(e))
            return False
        except Exception as e:
            logfire.error(
                "Unexpected error during JWT token validation",
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    def claims(self, token: str) -> TokenClaims:
        """Extract verified claims.

        Callers on the request path call :meth:`validate` first.

        Raises:
            TokenParsingError: For any malformed, unverifiable, expired or
                incomplete token; the root cause is chained
        """
        try:
            return parse_claims(self._verified_payload(token))
        except Exception as e:
            logfire.error("Failed to extract claims from JWT token", error=str(e))
            raise TokenParsingError(
                "Failed to extract claims from token", cause=e
            ) from e

    def is_expired(self, token: str) -> bool:
        """Whether the token's expiry lies in the past.

        Unparseable tokens count as expired.
        """
        try:
            payload = decode_token(token, self.auth_settings)
            return expiry_of(payload) < self.clock()
        except Exception as e:
            logfire.debug(
                "Error checking token expiration, treating as expired", error=str(e)
            )
            return True

    @property
    def lifetime_ms(self) -> int:
        """Configured token lifetime in milliseconds."""
        return self.auth_settings.jwt_expiration_ms

    @staticmethod
    def build_claims(account: Account) -> dict[str, Any]:
        """Identity claims for an account (no timestamps)."""
        claims: dict[str, Any] = {
            "sub": str(account.id),
            "userId": account.id,
            "email": account.email,
            "firstName": account.first_name,
            "lastName": account.last_name,
        }

        if account.avatar_url is not None:
            claims["profilePicture"] = account.avatar_url

        return claims

    def _verified_payload(self, token: str) -> dict[str, Any]:
        payload = decode_token(token, self.auth_settings)
        if expiry_of(payload) < self.clock():
            raise TokenExpiredError("Token has expired")
        return payload
