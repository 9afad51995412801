"""Infrastructure providers."""

# Import bases
from .service import ServiceProvider

# Import implementations (needed for __subclasses__())
from .service import ProdServiceProvider  # noqa: F401

__all__ = [
    "ProdServiceProvider",
    "ServiceProvider",
]
