"""
Catalog store: the last catalog snapshot received from the service.
"""

import logging
from typing import Iterator, List, Optional

from ..models.lesson import Lesson


logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Holds the lessons of the last successful fetch or search.

    The snapshot is replaced wholesale by list/search responses and
    only its ``spaces`` fields are patched by availability updates.

    Examples:
        >>> store = CatalogStore()
        >>> store.replace([{"id": "1", "subject": "Math", "location": "London",
        ...                 "price": 10, "spaces": 2}])
        >>> store.patch_spaces("1", 1)
        True
    """

    def __init__(self):
        self._lessons: List[Lesson] = []

    @property
    def lessons(self) -> List[Lesson]:
        """Current snapshot (a new list; the lesson records are shared)."""
        return list(self._lessons)

    def replace(self, lessons: List[Lesson]):
        """Replace the snapshot with a fresh service response."""
        self._lessons = list(lessons)
        logger.debug(f"Catalog replaced: {len(self._lessons)} lessons")

    def find(self, lesson_id: str) -> Optional[Lesson]:
        """First lesson with the given id, or None."""
        for lesson in self._lessons:
            if lesson["id"] == lesson_id:
                return lesson
        return None

    def patch_spaces(self, lesson_id: str, spaces: int) -> bool:
        """
        Set a lesson's remaining spaces to the value confirmed by the service.

        Args:
            lesson_id: Lesson identifier
            spaces: Confirmed remaining spaces

        Returns:
            True if the lesson is in the snapshot and was patched

        Raises:
            ValueError: If spaces is negative
        """
        if spaces < 0:
            raise ValueError(f"spaces must not be negative, got {spaces}")

        lesson = self.find(lesson_id)
        if lesson is None:
            # Snapshot was replaced (e.g. by a search) while the update was in flight
            logger.debug(f"Lesson {lesson_id} not in catalog; spaces update ignored")
            return False

        lesson["spaces"] = spaces
        return True

    def clear(self):
        self._lessons = []

    def __len__(self) -> int:
        return len(self._lessons)

    def __iter__(self) -> Iterator[Lesson]:
        return iter(list(self._lessons))
