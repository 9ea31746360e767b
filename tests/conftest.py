"""Pytest configuration and fixtures"""

import copy
from typing import Any, Dict, List, Optional, Tuple

import pytest

from lessonshop.gateway.interfaces import CatalogGateway
from lessonshop.models.lesson import Lesson
from lessonshop.models.order import CustomerForm, Order
from lessonshop.models.result import Result


class FakeCatalogGateway(CatalogGateway):
    """In-memory catalog service keeping its own authoritative spaces."""

    def __init__(self, lessons: List[Lesson]):
        self.server_lessons = copy.deepcopy(lessons)
        self.calls: List[Tuple[str, Any]] = []
        self.orders: List[Dict[str, Any]] = []
        self.fail_adjust: Optional[str] = None
        self.fail_order: Optional[str] = None
        self.fail_list: Optional[str] = None

    def _find(self, lesson_id: str) -> Optional[Lesson]:
        return next((l for l in self.server_lessons if l["id"] == lesson_id), None)

    async def list_lessons(self) -> Result[List[Lesson]]:
        self.calls.append(("list", None))
        if self.fail_list is not None:
            return Result.failure(self.fail_list)
        return Result.success(copy.deepcopy(self.server_lessons))

    async def search_lessons(self, query: str) -> Result[List[Lesson]]:
        self.calls.append(("search", query))
        matches = [
            l for l in self.server_lessons
            if query.lower() in l["subject"].lower() or query.lower() in l["location"].lower()
        ]
        return Result.success(copy.deepcopy(matches))

    async def adjust_spaces(self, lesson_id: str, delta: int) -> Result[int]:
        self.calls.append(("adjust", (lesson_id, delta)))
        if self.fail_adjust is not None:
            return Result.failure(self.fail_adjust)
        lesson = self._find(lesson_id)
        if lesson is None:
            return Result.failure("Lesson not found")
        if lesson["spaces"] + delta < 0:
            return Result.failure("No spaces left")
        lesson["spaces"] += delta
        return Result.success(lesson["spaces"])

    async def submit_order(self, order: Order) -> Result[Any]:
        self.calls.append(("order", order.to_dict()))
        if self.fail_order is not None:
            return Result.failure(self.fail_order)
        self.orders.append(order.to_dict())
        return Result.success({"message": "Order created"})

    def calls_of(self, kind: str) -> List[Any]:
        return [args for name, args in self.calls if name == kind]


@pytest.fixture
def sample_lessons() -> List[Lesson]:
    """Catalog covering several subjects, locations, prices and stock levels."""
    return [
        {"id": "1", "subject": "Math", "location": "London", "price": 100, "spaces": 5},
        {"id": "2", "subject": "English", "location": "Oxford", "price": 80, "spaces": 0},
        {"id": "3", "subject": "Art", "location": "London", "price": 120, "spaces": 2},
        {"id": "4", "subject": "Music", "location": "", "price": 80, "spaces": 3},
        {"id": "5", "subject": "Science", "location": "York", "price": 150, "spaces": 0},
    ]


@pytest.fixture
def fake_gateway(sample_lessons) -> FakeCatalogGateway:
    return FakeCatalogGateway(sample_lessons)


@pytest.fixture
def valid_form() -> CustomerForm:
    return CustomerForm(
        name="  John Smith ",
        phone="+1 555-1234",
        email="john@example.com",
        address=" 1 Main St "
    )
