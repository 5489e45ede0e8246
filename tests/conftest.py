"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from atlas.config import AuthSettings, Settings
from atlas.domain.model.account import Account
from atlas.domain.value import AccountId, AuthProvider, IdentityAssertion

T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_account(
    account_id: int | None = 1,
    email: str = "ann@example.com",
    first_name: str = "Ann",
    last_name: str = "Lee",
    avatar_url: str | None = None,
) -> Account:
    """Build an account for tests."""
    return Account(
        id=AccountId(account_id) if account_id is not None else None,
        email=email,
        first_name=first_name,
        last_name=last_name,
        avatar_url=avatar_url,
    )


def make_assertion(
    sub: str = "g-1",
    email: str = "ann@example.com",
    name: str | None = "Ann Lee",
    avatar_url: str | None = None,
) -> IdentityAssertion:
    """Build a Google identity assertion for tests."""
    return IdentityAssertion(
        provider=AuthProvider.GOOGLE,
        provider_user_id=sub,
        email=email,
        name=name,
        avatar_url=avatar_url,
        email_verified=True,
    )


@pytest.fixture
def auth_settings() -> AuthSettings:
    """Auth settings with a fixed signing key and one hour lifetime."""
    return AuthSettings(
        jwt_secret="test-signing-key-that-is-long-enough-for-hs512-signatures-0123456789",
        jwt_expiration_ms=60 * 60 * 1000,
    )


@pytest.fixture
def settings() -> Settings:
    """Test environment settings."""
    return Settings(environment="test")
