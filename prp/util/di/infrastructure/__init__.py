"""Infrastructure providers."""

# Import bases
from .identity import IdentityProviderProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .identity import ProdIdentityProviderProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "IdentityProviderProvider",
    "PersistenceProvider",
    "ProdIdentityProviderProvider",
    "ProdPersistenceProvider",
]
