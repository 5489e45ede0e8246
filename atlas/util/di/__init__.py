"""Dependency injection wiring."""

from typing import Type

from atlas.util.di.application import ProdApplicationProvider
from atlas.util.di.base import Component, ProviderBase
from atlas.util.di.core import ProdConfigProvider
from atlas.util.di.domain import ProdDomainProvider
from atlas.util.di.infrastructure import (
    GoogleProvider,
    OAuthAggregatorProvider,
    PersistenceProvider,
    ProdGoogleProvider,
    ProdPersistenceProvider,
)

# Every container is built from this list, in this order
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    GoogleProvider,
    PersistenceProvider,
    OAuthAggregatorProvider,
]


def components() -> set[Component]:
    """Names of all swappable components in :data:`PROVIDERS`."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.is_component() and base.__mock_component__ is not None
    }


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "GoogleProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
]
