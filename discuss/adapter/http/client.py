"""JSON-over-HTTP client for the Comment Service.

Every endpoint is a POST taking and returning JSON. Failed calls map onto the
domain error kinds:

- no connection, timeout, non-JSON or undecodable body -> TransportFailure
- JSON body with an error status -> RejectedOperation (``{"error": ...}``)
"""

from typing import Any, Callable, Mapping, TypeVar

import httpx
import logfire
import pydantic

from discuss.domain.error import RejectedOperation, TransportFailure

T = TypeVar("T")


class ServiceClient:
    """Thin request/response wrapper around a shared ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize service client.

        Args:
            client: HTTP client configured with the service base URL and timeout
        """
        self.client = client

    async def post(self, endpoint: str, payload: Mapping[str, Any]) -> Any:
        """POST a JSON payload and return the decoded JSON answer.

        Args:
            endpoint: Path relative to the service base URL
            payload: JSON body

        Returns:
            Decoded JSON body

        Raises:
            TransportFailure: If the service is unreachable or the answer unreadable
            RejectedOperation: If the service answered with an error
        """
        try:
            response = await self.client.post(endpoint, json=dict(payload))
        except httpx.HTTPError as e:
            logfire.error(
                "Comment Service request failed", endpoint=endpoint, error=str(e)
            )
            raise TransportFailure(
                f"Comment Service unreachable at {self.client.base_url}: {e}"
            ) from e

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            logfire.error(
                "Comment Service returned non-JSON response",
                endpoint=endpoint,
                status_code=response.status_code,
                content_type=content_type,
            )
            if response.is_error:
                raise TransportFailure(
                    f"Backend error: {response.status_code} {response.reason_phrase}"
                )
            raise TransportFailure(
                f"Invalid response from backend: expected JSON but got {content_type or 'nothing'}"
            )

        try:
            data = response.json()
        except ValueError as e:
            logfire.error("Comment Service returned malformed JSON", endpoint=endpoint)
            raise TransportFailure("Malformed JSON from Comment Service") from e

        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            logfire.warn(
                "Comment Service rejected request",
                endpoint=endpoint,
                status_code=response.status_code,
                error=message,
            )
            raise RejectedOperation(
                message or "An error occurred", status_code=response.status_code
            )

        return data

    @staticmethod
    def decode(endpoint: str, data: Any, mapper: Callable[[Any], T]) -> T:
        """Map a decoded payload, treating any shape mismatch as transport failure."""
        try:
            return mapper(data)
        except (KeyError, TypeError, AttributeError, pydantic.ValidationError) as e:
            logfire.error(
                "Unexpected payload from Comment Service",
                endpoint=endpoint,
                error=str(e),
            )
            raise TransportFailure(f"Unexpected payload from {endpoint}: {e}") from e

    @classmethod
    def decode_list(
        cls, endpoint: str, data: Any, mapper: Callable[[Any], T]
    ) -> list[T]:
        """Map a decoded JSON array item by item."""
        if not isinstance(data, list):
            raise TransportFailure(f"Expected a list from {endpoint}")
        return [cls.decode(endpoint, item, mapper) for item in data]
