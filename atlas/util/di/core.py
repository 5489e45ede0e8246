"""Configuration providers.

Settings are read once per container from the environment (and ``.env``);
components that only need one section depend on that section.
"""

from dishka import Scope, provide

from atlas.config import AuthSettings, SecuritySettings, Settings
from atlas.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings and their sections, application scoped."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_security_settings(self, settings: Settings) -> SecuritySettings:
        return settings.security
