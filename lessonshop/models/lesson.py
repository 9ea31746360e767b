"""
Lesson data models with type safety.

This module provides the TypedDict definition for catalog lessons
and the conversion from raw service payloads.
"""

from typing import Any, Dict, TypedDict, Union


Number = Union[int, float]


class Lesson(TypedDict):
    """
    Lesson data structure (TypedDict for type safety).

    Attributes:
        id: Unique lesson identifier
        subject: Lesson subject (e.g. "Math")
        location: Where the lesson takes place
        price: Price per space, never negative
        spaces: Remaining bookable spaces, never negative

    Examples:
        >>> lesson: Lesson = {
        ...     "id": "64f1c0ffee",
        ...     "subject": "Math",
        ...     "location": "London",
        ...     "price": 100,
        ...     "spaces": 5
        ... }
    """

    id: str
    subject: str
    location: str
    price: Number
    spaces: int


def lesson_id_of(payload: Dict[str, Any]) -> Any:
    """
    Get the identifier of a raw lesson payload.

    The catalog service keys documents by ``_id``; ``id`` is accepted too.
    """
    if payload.get("_id") is not None:
        return payload["_id"]
    return payload.get("id")


def lesson_from_payload(payload: Dict[str, Any]) -> Lesson:
    """
    Build a Lesson from a validated service payload.

    Args:
        payload: Raw lesson record (already checked by LessonValidator)

    Returns:
        Lesson with the identifier normalised to ``id``
    """
    return {
        "id": str(lesson_id_of(payload)),
        "subject": str(payload.get("subject") or ""),
        "location": str(payload.get("location") or ""),
        "price": payload["price"],
        "spaces": int(payload["spaces"]),
    }
