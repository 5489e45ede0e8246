"""Use case base class."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One application operation: a request model in, a response model out.

    Use cases orchestrate domain services and own no state of their own
    beyond their collaborators.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """Run the operation."""
        ...
