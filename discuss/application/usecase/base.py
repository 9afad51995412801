"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One user action against the thread, from request model to response model."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
