"""Google OAuth 2.0 / OpenID Connect client implementation.

Implements the authorization code flow with PKCE. The identity is read from
the OpenID userinfo endpoint using the access token obtained directly from
Google's token endpoint over TLS.
"""

import hashlib
import secrets
import time
from base64 import urlsafe_b64encode
from typing import Callable
from urllib.parse import urlencode

import httpx
import logfire

from atlas.adapter.error import ProviderError
from atlas.domain.service.auth_service import OAuthClient
from atlas.domain.value.types import AuthProvider, IdentityAssertion

# Abandoned logins are forgotten after this long
PKCE_VERIFIER_TTL_SECONDS = 600

# Oldest pending logins are dropped beyond this many
MAX_PENDING_AUTHORIZATIONS = 10_000


class GoogleOAuthError(ProviderError):
    """Google OAuth error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(
            message, provider=AuthProvider.GOOGLE.value, status_code=status_code
        )


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleOAuthClient(GoogleOAuthClient):
    """Google OpenID Connect client with PKCE support."""

    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    user_info_url = "https://openidconnect.googleapis.com/v1/userinfo"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scope: str = "openid email profile",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize Google OAuth client.

        Args:
            client_id: Google OAuth client ID
            client_secret: Google OAuth client secret
            redirect_uri: Callback URL registered with Google
            scope: Requested scopes
            clock: Monotonic seconds, used to expire pending verifiers
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scope = scope
        self.clock = clock

        # PKCE verifier and issue time per state, oldest first; single-process only
        self._pkce_verifiers: dict[str, tuple[str, float]] = {}

    @staticmethod
    def _generate_pkce_pair() -> tuple[str, str]:
        """Generate PKCE code verifier and challenge.

        Returns:
            Tuple of (verifier, challenge)
        """
        code_verifier = urlsafe_b64encode(secrets.token_bytes(32)).decode("utf-8")
        code_verifier = code_verifier.rstrip("=")

        challenge_bytes = hashlib.sha256(code_verifier.encode("utf-8")).digest()
        code_challenge = urlsafe_b64encode(challenge_bytes).decode("utf-8")
        code_challenge = code_challenge.rstrip("=")

        return code_verifier, code_challenge

    def _prune_verifiers(self, reserve: int = 0) -> None:
        """Drop expired verifiers and cap how many logins may be pending.

        Args:
            reserve: Slots to free for verifiers about to be stored
        """
        cutoff = self.clock() - PKCE_VERIFIER_TTL_SECONDS
        expired = [
            state for state, (_, issued_at) in self._pkce_verifiers.items()
            if issued_at < cutoff
        ]
        for state in expired:
            del self._pkce_verifiers[state]

        evict = max(len(self._pkce_verifiers) + reserve - MAX_PENDING_AUTHORIZATIONS, 0)
        for state in list(self._pkce_verifiers)[:evict]:
            del self._pkce_verifiers[state]

        if expired or evict:
            logfire.debug(
                "Pending Google authorizations pruned",
                expired=len(expired),
                evicted=evict,
            )

    async def initiate_authorization(self, state: str) -> str:
        """Build the Google authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        self._prune_verifiers(reserve=1)
        code_verifier, code_challenge = self._generate_pkce_pair()
        self._pkce_verifiers[state] = (code_verifier, self.clock())

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope,
            "state": state,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
            "prompt": "select_account",
        }

        logfire.info(
            "Google OAuth authorization initiated",
            state=state,
            redirect_uri=self.redirect_uri,
        )

        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> IdentityAssertion:
        """Exchange the code and read the verified identity.

        Args:
            code: Authorization code from Google callback
            state: State parameter for verification

        Returns:
            Identity assertion built from the userinfo claims

        Raises:
            GoogleOAuthError: If the OAuth flow fails or the identity is
                incomplete
        """
        self._prune_verifiers()
        pending = self._pkce_verifiers.pop(state, None)
        if not pending:
            raise GoogleOAuthError("Invalid state or PKCE verifier not found")
        code_verifier, _ = pending

        access_token = await self._exchange_code_for_token(code, code_verifier)
        user_info = await self._get_user_info(access_token)

        if not user_info.get("sub") or not user_info.get("email"):
            logfire.error("Google userinfo missing subject or email")
            raise GoogleOAuthError("Google account did not provide an email address")

        logfire.info("Google OAuth completed", sub=user_info["sub"])

        return IdentityAssertion(
            provider=AuthProvider.GOOGLE,
            provider_user_id=user_info["sub"],
            email=user_info["email"],
            name=user_info.get("name"),
            avatar_url=user_info.get("picture"),
            email_verified=bool(user_info.get("email_verified", False)),
        )

    async def _exchange_code_for_token(self, code: str, code_verifier: str) -> str:
        """Exchange authorization code for access token.

        Raises:
            GoogleOAuthError: If token exchange fails
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "code_verifier": code_verifier,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=30.0,
                )

                if response.status_code != 200:
                    logfire.error(
                        "Google token exchange failed",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise GoogleOAuthError(
                        f"Token exchange failed: {response.status_code}",
                        status_code=response.status_code,
                    )

                return response.json()["access_token"]

        except httpx.HTTPError as e:
            logfire.error("Google token exchange HTTP error", error=str(e))
            raise GoogleOAuthError(f"HTTP error during token exchange: {e}") from e

    async def _get_user_info(self, access_token: str) -> dict:
        """Get the OpenID userinfo claims.

        Raises:
            GoogleOAuthError: If the request fails
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.user_info_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=30.0,
                )

                if response.status_code != 200:
                    logfire.error(
                        "Google user info request failed",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise GoogleOAuthError(
                        f"User info request failed: {response.status_code}",
                        status_code=response.status_code,
                    )

                return response.json()

        except httpx.HTTPError as e:
            logfire.error("Google user info HTTP error", error=str(e))
            raise GoogleOAuthError(f"HTTP error fetching user info: {e}") from e


class MockGoogleOAuthClient(GoogleOAuthClient):
    """Mock Google OAuth client for testing.

    Returns a deterministic assertion without making real API calls. Tests
    may replace ``assertion`` or set ``error`` to simulate a failed exchange.
    """

    def __init__(self, assertion: IdentityAssertion | None = None) -> None:
        self.assertion = assertion or IdentityAssertion(
            provider=AuthProvider.GOOGLE,
            provider_user_id="mockgoogle123",
            email="mock@example.com",
            name="Mock User",
            avatar_url="https://example.com/avatar.jpg",
            email_verified=True,
        )
        self.error: Exception | None = None

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://accounts.google.com/o/oauth2/v2/auth?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> IdentityAssertion:
        """Return the configured assertion, or raise the configured error."""
        if self.error is not None:
            raise self.error
        return self.assertion
