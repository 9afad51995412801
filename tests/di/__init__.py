"""Mock providers for testing."""

from .service import MockServiceProvider
from .container import build_test_container

__all__ = [
    "MockServiceProvider",
    "build_test_container",
]
