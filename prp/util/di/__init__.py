"""Dependency injection module."""

from typing import Type

from prp.util.di.application import ProdApplicationProvider
from prp.util.di.base import Component, ProviderBase
from prp.util.di.core import ProdConfigProvider
from prp.util.di.domain import ProdDomainProvider
from prp.util.di.infrastructure import (
    IdentityProviderProvider,
    PersistenceProvider,
    ProdIdentityProviderProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    IdentityProviderProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get the provider class to instantiate for a base.

    - No subclasses: concrete provider, used directly
    - Has subclasses: mockable component, selected by ``__is_mock__``

    Raises:
        ValueError: If the requested implementation is not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ValueError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "IdentityProviderProvider",
    "PersistenceProvider",
    "ProdIdentityProviderProvider",
    "ProdPersistenceProvider",
]
