"""Infrastructure providers.

Implementations are imported so that their component bases see them as
subclasses.
"""

from .google import GoogleProvider, ProdGoogleProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "GoogleProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
]
