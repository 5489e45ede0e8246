"""Identity provider coordination.

The core never talks to a provider directly: each supported provider is
reached through an :class:`OAuthClient` that completes the provider's own
protocol and hands back a verified :class:`IdentityAssertion`.
"""

from abc import ABC, abstractmethod

import logfire

from atlas.domain.value.types import AuthProvider, IdentityAssertion


class OAuthClient(ABC):
    """Identity assertion verifier for one provider."""

    @abstractmethod
    async def initiate_authorization(self, state: str) -> str:
        """Build the provider URL the browser is sent to.

        Args:
            state: Opaque value echoed back on the callback

        Returns:
            Authorization URL
        """

    @abstractmethod
    async def complete_authorization(self, code: str, state: str) -> IdentityAssertion:
        """Exchange the callback code for a verified identity.

        Args:
            code: Authorization code from the callback
            state: State issued by :meth:`initiate_authorization`

        Returns:
            Verified identity assertion

        Raises:
            ProviderError: If the exchange fails or the identity is incomplete
        """


class AuthService:
    """Routes login steps to the client registered for a provider."""

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        self.oauth_clients = oauth_clients

    @property
    def supported_providers(self) -> list[AuthProvider]:
        return list(self.oauth_clients)

    async def initiate_login(self, provider: AuthProvider, state: str) -> str:
        """Authorization URL for ``provider``.

        Raises:
            ValueError: If no client is registered for the provider
        """
        with logfire.span("auth_service.initiate_login", provider=provider.value):
            return await self._client(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: AuthProvider, code: str, state: str
    ) -> IdentityAssertion:
        """Verified identity for a completed callback.

        Raises:
            ValueError: If no client is registered for the provider
            ProviderError: If the provider rejects the exchange
        """
        with logfire.span("auth_service.complete_login", provider=provider.value):
            return await self._client(provider).complete_authorization(code, state)

    def _client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if client is None:
            logfire.warn(
                "Login requested for unsupported provider",
                provider=provider.value,
                supported=[p.value for p in self.supported_providers],
            )
            raise ValueError(f"Unsupported provider: {provider.value}")
        return client
