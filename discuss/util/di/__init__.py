"""Dependency injection module."""

from typing import Type

from discuss.util.di.application import ProdApplicationProvider
from discuss.util.di.base import Component, ProviderBase
from discuss.util.di.core import ProdConfigProvider
from discuss.util.di.domain import ProdDomainProvider
from discuss.util.di.infrastructure import ProdServiceProvider, ServiceProvider

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    ServiceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider family.

    Concrete providers (no ``__mock_component__``) are returned unchanged. For
    a mockable component the subclass whose ``__is_mock__`` matches
    ``use_mock`` is returned; mock subclasses only exist once the test
    providers have been imported.

    Args:
        base: Provider class listed in PROVIDERS
        use_mock: Whether to use the test implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the requested implementation is not defined
    """
    if base.__mock_component__ is None:
        return base

    for impl in base.__subclasses__():
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    # Infrastructure
    "ServiceProvider",
    "ProdServiceProvider",
]
