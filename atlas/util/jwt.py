"""JWT token utilities.

Session credentials are compact HMAC-signed JWTs. Signature and structure are
verified here; expiry is compared by the caller against its own clock so that
the comparison stays strict (``expiry < now``) and testable.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from pydantic import BaseModel

from atlas.config import AuthSettings

# HMAC keys shorter than 256 bits are refused
MIN_KEY_BYTES = 32

REQUIRED_CLAIMS = ["sub", "userId", "email", "iat", "exp"]


class TokenClaims(BaseModel):
    """Claims carried by a session credential."""

    subject_id: int
    email: str
    first_name: str
    last_name: str
    avatar_url: str | None = None
    issued_at: datetime
    expires_at: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


class TokenIssuanceError(JWTError):
    """Signing or pre-condition failure while issuing a token."""

    pass


class TokenParsingError(JWTError):
    """Failure while extracting claims from a token."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class TokenExpiredError(JWTError):
    """Token expiry lies in the past."""

    pass


def create_token(
    claims: dict[str, Any], issued_at: datetime, settings: AuthSettings
) -> str:
    """Sign a claim set into a compact JWT.

    Args:
        claims: Identity claims (without iat/exp)
        issued_at: Issue time (timezone aware)
        settings: Authentication settings

    Returns:
        Encoded JWT token

    Raises:
        TokenIssuanceError: If the signing key is missing or too short
    """
    secret = settings.jwt_secret
    if not secret or len(secret.encode("utf-8")) < MIN_KEY_BYTES:
        raise TokenIssuanceError(
            f"JWT signing key must be at least {MIN_KEY_BYTES} bytes"
        )

    expiry = issued_at + timedelta(milliseconds=settings.jwt_expiration_ms)

    payload = {
        **claims,
        "iat": int(issued_at.timestamp()),
        "exp": int(expiry.timestamp()),
    }

    return jwt.encode(payload, secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str | bytes, settings: AuthSettings) -> dict[str, Any]:
    """Verify signature and required claims, and return the raw payload.

    Expiry and issued-at are not checked here.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, badly signed or
            misses a required claim
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={
            "verify_exp": False,
            "verify_iat": False,
            "verify_nbf": False,
            "require": REQUIRED_CLAIMS,
        },
    )


def expiry_of(payload: dict[str, Any]) -> datetime:
    """Expiry of a decoded payload as an aware UTC datetime."""
    return datetime.fromtimestamp(payload["exp"], tz=timezone.utc)


def parse_claims(payload: dict[str, Any]) -> TokenClaims:
    """Map a decoded payload to :class:`TokenClaims`."""
    return TokenClaims(
        subject_id=int(payload["sub"]),
        email=payload["email"],
        first_name=payload.get("firstName", ""),
        last_name=payload.get("lastName", ""),
        avatar_url=payload.get("profilePicture"),
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=expiry_of(payload),
    )
