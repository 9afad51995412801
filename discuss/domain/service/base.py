"""Base class for domain services."""

from typing import Any, ClassVar

import logfire


class Service:
    """Base class for domain services.

    Spans opened with ``span`` are named ``<span_prefix>.<operation>`` so
    every service's traces group under one prefix.
    """

    span_prefix: ClassVar[str] = "service"

    def span(self, operation: str, **attributes: Any) -> logfire.LogfireSpan:
        return logfire.span(f"{self.span_prefix}.{operation}", **attributes)
