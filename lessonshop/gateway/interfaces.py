"""
Abstract interface for the remote catalog service.

The storefront depends on this abstraction rather than on the HTTP
implementation, which keeps the cart and order logic testable with
simple fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, List

from ..models.lesson import Lesson
from ..models.order import Order
from ..models.result import Result


class CatalogGateway(ABC):
    """
    Abstract interface for catalog service operations.

    Implementations must never raise: every operation returns a
    Result, with the service's error text as the failure message
    when it provided one.
    """

    @abstractmethod
    async def list_lessons(self) -> Result[List[Lesson]]:
        """
        Fetch the full catalog.

        Returns:
            Result containing lessons in service order
        """
        pass

    @abstractmethod
    async def search_lessons(self, query: str) -> Result[List[Lesson]]:
        """
        Search the catalog.

        Args:
            query: Search term (already trimmed, non-empty)

        Returns:
            Result containing matching lessons in service order
        """
        pass

    @abstractmethod
    async def adjust_spaces(self, lesson_id: str, delta: int) -> Result[int]:
        """
        Apply a signed change to a lesson's remaining spaces.

        Args:
            lesson_id: Lesson identifier
            delta: -1 to hold a space, +1 to release one

        Returns:
            Result containing the lesson's spaces after the change
        """
        pass

    @abstractmethod
    async def submit_order(self, order: Order) -> Result[Any]:
        """
        Submit an order.

        Args:
            order: Order built from the cart and customer form

        Returns:
            Result containing the service's response record
        """
        pass
