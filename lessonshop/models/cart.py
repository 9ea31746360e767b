"""
Cart data models.

A cart holds one CartLine per unit added; quantities are never stored,
they are derived by counting lines (see storefront.derivations).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .lesson import Lesson, Number


class LineStatus(Enum):
    """Confirmation status of a cart line's availability hold."""
    PENDING = "pending"        # Decrement request in flight
    CONFIRMED = "confirmed"    # Service accepted the decrement
    FAILED = "failed"          # Decrement failed; dropped on next full fetch
    RELEASING = "releasing"    # Removed while its decrement was in flight


def _coerce_price(value: Any) -> Number:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


@dataclass
class CartLine:
    """
    One unit of a lesson pending purchase.

    Attributes:
        lesson_id: Identifier of the lesson
        subject: Lesson subject at add time
        location: Lesson location at add time
        price: Unit price at add time
        status: Confirmation status of the availability hold

    Examples:
        >>> line = CartLine.from_lesson(lesson)
        >>> line.status
        <LineStatus.PENDING: 'pending'>
    """

    lesson_id: str
    subject: str
    location: str
    price: Number
    status: LineStatus = LineStatus.PENDING

    @classmethod
    def from_lesson(cls, lesson: Lesson) -> 'CartLine':
        """Snapshot the fields of a lesson into a new pending line."""
        return cls(
            lesson_id=lesson["id"],
            subject=lesson.get("subject", ""),
            location=lesson.get("location", ""),
            price=_coerce_price(lesson.get("price")),
        )

    @property
    def is_failed(self) -> bool:
        """Check if the availability hold for this line failed."""
        return self.status == LineStatus.FAILED


@dataclass
class CartSummaryEntry:
    """
    Cart lines aggregated per lesson (derived, never stored).

    Attributes:
        lesson_id: Identifier of the lesson
        subject: Lesson subject
        location: Lesson location
        price: Unit price
        qty: Number of lines for this lesson
        can_increase: Whether the current catalog still has spaces
    """

    lesson_id: str
    subject: str
    location: str
    price: Number
    qty: int = 0
    can_increase: bool = True

    @property
    def line_total(self) -> Number:
        """Price of all units of this lesson."""
        return self.price * self.qty

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary representation of the entry
        """
        return {
            "lesson_id": self.lesson_id,
            "subject": self.subject,
            "location": self.location,
            "price": self.price,
            "qty": self.qty,
            "can_increase": self.can_increase,
        }
