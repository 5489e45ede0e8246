"""Unit tests for AuthenticateRequestUseCase."""

from dishka import AsyncContainer
import pytest

from atlas.application.usecase.auth import (
    Anonymous,
    AuthenticateRequest,
    AuthenticateRequestUseCase,
    Authenticated,
    PublicPathMatcher,
)
from atlas.config import AuthSettings, SecuritySettings, Settings
from atlas.domain.model import Account
from atlas.domain.repository import AccountRepository
from atlas.domain.service import AccountService, JWTService
from tests.conftest import FakeClock, make_account
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _saved_account(container: AsyncContainer) -> Account:
    repo = await container.get(AccountRepository)
    return await repo.save(
        Account(email="ann@x.io", first_name="Ann", last_name="Lee")
    )


class FailingAccountService(AccountService):
    """Account store that is down."""

    async def find_by_id(self, account_id):
        raise ConnectionError("database unavailable")


class TestAuthenticateRequest:
    """Tests for AuthenticateRequestUseCase."""

    @pytest.mark.asyncio
    async def test_valid_token_authenticates(self, unit_env: AsyncContainer):
        """A valid token for an existing account yields an authenticated principal."""
        account = await _saved_account(unit_env)
        jwt_service = await unit_env.get(JWTService)
        use_case = await unit_env.get(AuthenticateRequestUseCase)

        outcome = await use_case.execute(
            AuthenticateRequest(path="/api/user/me", token=jwt_service.issue(account))
        )

        assert isinstance(outcome, Authenticated)
        assert outcome.is_authenticated is True
        assert outcome.principal.name == "ann@x.io"
        assert outcome.principal.authorities == ("ROLE_USER",)
        assert outcome.principal.account.id == account.id

    @pytest.mark.asyncio
    async def test_no_token_is_anonymous(self, unit_env: AsyncContainer):
        """Requests without a cookie are anonymous."""
        use_case = await unit_env.get(AuthenticateRequestUseCase)

        outcome = await use_case.execute(AuthenticateRequest(path="/api/user/me"))

        assert isinstance(outcome, Anonymous)
        assert outcome.is_authenticated is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    async def test_malformed_token_is_anonymous(self, unit_env: AsyncContainer, token):
        """Malformed tokens are folded into anonymous without raising."""
        use_case = await unit_env.get(AuthenticateRequestUseCase)

        outcome = await use_case.execute(
            AuthenticateRequest(path="/api/user/me", token=token)
        )

        assert isinstance(outcome, Anonymous)

    @pytest.mark.asyncio
    async def test_expired_token_is_anonymous(self, unit_env: AsyncContainer):
        """Expired tokens are anonymous."""
        account = await _saved_account(unit_env)
        settings = await unit_env.get(Settings)
        clock = FakeClock()
        token = JWTService(settings.auth, clock=clock).issue(account)

        use_case = AuthenticateRequestUseCase(
            jwt_service=JWTService(settings.auth),
            account_service=await unit_env.get(AccountService),
            security_settings=settings.security,
        )
        outcome = await use_case.execute(
            AuthenticateRequest(path="/api/user/me", token=token)
        )

        assert isinstance(outcome, Anonymous)

    @pytest.mark.asyncio
    async def test_token_signed_with_other_key_is_anonymous(
        self, unit_env: AsyncContainer
    ):
        """Forged tokens are anonymous."""
        account = await _saved_account(unit_env)
        forger = JWTService(
            AuthSettings(
                jwt_secret="forged-signing-key-that-is-long-enough-for-hs512-signatures-42"
            )
        )
        use_case = await unit_env.get(AuthenticateRequestUseCase)

        outcome = await use_case.execute(
            AuthenticateRequest(path="/api/user/me", token=forger.issue(account))
        )

        assert isinstance(outcome, Anonymous)

    @pytest.mark.asyncio
    async def test_unknown_subject_is_anonymous(self, unit_env: AsyncContainer):
        """A valid token for a deleted account is anonymous."""
        jwt_service = await unit_env.get(JWTService)
        use_case = await unit_env.get(AuthenticateRequestUseCase)

        outcome = await use_case.execute(
            AuthenticateRequest(
                path="/api/user/me", token=jwt_service.issue(make_account(account_id=404))
            )
        )

        assert isinstance(outcome, Anonymous)

    @pytest.mark.asyncio
    async def test_account_store_failure_is_anonymous(self, unit_env: AsyncContainer):
        """Account lookup errors do not escape."""
        account = await _saved_account(unit_env)
        jwt_service = await unit_env.get(JWTService)
        use_case = AuthenticateRequestUseCase(
            jwt_service=jwt_service,
            account_service=FailingAccountService(await unit_env.get(AccountRepository)),
            security_settings=SecuritySettings(),
        )

        outcome = await use_case.execute(
            AuthenticateRequest(path="/api/user/me", token=jwt_service.issue(account))
        )

        assert isinstance(outcome, Anonymous)

    @pytest.mark.asyncio
    async def test_public_path_skips_authentication(self, unit_env: AsyncContainer):
        """Public paths are anonymous even with a valid token."""
        account = await _saved_account(unit_env)
        jwt_service = await unit_env.get(JWTService)
        use_case = await unit_env.get(AuthenticateRequestUseCase)

        outcome = await use_case.execute(
            AuthenticateRequest(
                path="/login/oauth2/code/google", token=jwt_service.issue(account)
            )
        )

        assert isinstance(outcome, Anonymous)


class TestPublicPathMatcher:
    """Tests for PublicPathMatcher."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/oauth2/authorization/google", True),
            ("/oauth2", True),
            ("/oauth2x/authorization", False),
            ("/login/oauth2/code/google", True),
            ("/error", True),
            ("/error/detail", False),
            ("/health", True),
            ("/api/save-metric", True),
            ("/api/user/me", False),
            ("/api/logout", False),
        ],
    )
    def test_default_patterns(self, path, expected):
        """Default allow-list covers the OAuth endpoints and public API paths."""
        matcher = PublicPathMatcher(SecuritySettings().public_paths)

        assert matcher.matches(path) is expected

    def test_single_segment_wildcard(self):
        """A bare * matches exactly one non-empty segment."""
        matcher = PublicPathMatcher(["/api/*/status"])

        assert matcher.matches("/api/jobs/status") is True
        assert matcher.matches("/api/jobs/more/status") is False
        assert matcher.matches("/api//status") is False
