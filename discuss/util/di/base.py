"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Mockable components; "service" is the Comment Service (HTTP vs in-memory)
Component = Literal["service"]


class ProviderBase(Provider):
    """Base for all DI providers.

    Attributes:
        __mock_component__: Component a mockable provider family implements
            (None for concrete providers)
        __is_mock__: Whether this is the test implementation of the component
        __depends_on__: Components that must also be real when this one is
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[frozenset[Component]] = frozenset()
