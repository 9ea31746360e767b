"""
Cart controller.

Cart mutations are optimistic: the local cart changes before the
availability request is sent, and the catalog store is patched only
when the service confirms. A failed hold is not rolled back; the line
is marked failed and dropped by reconcile() on the next full catalog
fetch.
"""

import logging
from typing import List, Optional

from ..gateway.interfaces import CatalogGateway
from ..models.cart import CartLine, LineStatus
from ..models.lesson import Lesson
from ..models.result import Result
from .catalog_store import CatalogStore


logger = logging.getLogger(__name__)


class CartController:
    """
    Adds and removes cart lines while tracking remote availability.

    Attributes:
        gateway: Catalog service gateway
        store: Catalog store patched with confirmed spaces
        lines: Cart lines, one per unit, in insertion order
        unreleased_holds: Releases the service never confirmed

    Examples:
        >>> cart = CartController(gateway, store)
        >>> await cart.add_to_cart(lesson)
        >>> cart.cart_quantity(lesson)
        1
    """

    def __init__(self, gateway: CatalogGateway, store: CatalogStore):
        self.gateway = gateway
        self.store = store
        self.lines: List[CartLine] = []
        self.unreleased_holds = 0

    def can_add(self, lesson: Optional[Lesson]) -> bool:
        """True if the lesson exists and has spaces left."""
        return lesson is not None and lesson.get("spaces", 0) > 0

    def cart_quantity(self, lesson: Lesson) -> int:
        """Number of cart lines for the lesson."""
        return sum(1 for line in self.lines if line.lesson_id == lesson["id"])

    async def add_to_cart(self, lesson: Optional[Lesson]) -> Optional[Result[int]]:
        """
        Add one unit of a lesson and hold a space for it.

        The line is appended before the request is sent. On success
        the catalog store takes the service's spaces value; on failure
        the line stays in the cart, marked failed. If the line was
        removed while the request was in flight, a confirmed hold is
        released straight away.

        Args:
            lesson: Lesson to add

        Returns:
            The availability Result (the release's, if that one failed),
            or None if nothing was added
        """
        if not self.can_add(lesson):
            logger.debug("Add to cart ignored: lesson unavailable")
            return None

        line = CartLine.from_lesson(lesson)
        self.lines.append(line)

        result = await self.gateway.adjust_spaces(line.lesson_id, -1)
        removed_meanwhile = line.status == LineStatus.RELEASING

        if result.is_failure:
            line.status = LineStatus.FAILED
            logger.warning(
                f"Could not hold a space for lesson {line.lesson_id}: {result.message}"
            )
            return result

        line.status = LineStatus.CONFIRMED
        self.store.patch_spaces(line.lesson_id, result.value)

        if removed_meanwhile:
            logger.debug(f"Releasing held space of removed line for lesson {line.lesson_id}")
            release = await self._release(line.lesson_id)
            if release.is_failure:
                return release

        return result

    async def decrease_from_cart(self, lesson: Lesson) -> Optional[Result[int]]:
        """
        Remove one unit of a lesson and release its space.

        The first matching line is removed before the request is sent.
        Only confirmed holds are released here: a line whose hold failed
        is removed without a request, and a line whose hold is still in
        flight is released by add_to_cart() once the hold is confirmed.

        Args:
            lesson: Lesson to remove one unit of

        Returns:
            The availability Result, or None if no request was sent
        """
        index = next(
            (i for i, line in enumerate(self.lines) if line.lesson_id == lesson["id"]),
            None
        )
        if index is None:
            return None

        removed = self.lines.pop(index)
        if removed.is_failed:
            logger.debug(f"Removed unreserved line for lesson {removed.lesson_id}")
            return None
        if removed.status == LineStatus.PENDING:
            removed.status = LineStatus.RELEASING
            logger.debug(f"Removed line for lesson {removed.lesson_id} before its hold returned")
            return None

        return await self._release(removed.lesson_id)

    async def _release(self, lesson_id: str) -> Result[int]:
        result = await self.gateway.adjust_spaces(lesson_id, 1)

        if result.is_success:
            self.store.patch_spaces(lesson_id, result.value)
        else:
            self.unreleased_holds += 1
            logger.warning(
                f"Could not release a space for lesson {lesson_id}: {result.message}"
            )

        return result

    def reconcile(self) -> int:
        """
        Drop lines whose space hold failed.

        Called after a full catalog fetch, once the store reflects the
        service again.

        Returns:
            Number of lines dropped
        """
        kept = [line for line in self.lines if not line.is_failed]
        dropped = len(self.lines) - len(kept)
        if dropped:
            self.lines[:] = kept
            logger.info(f"Reconciled cart: dropped {dropped} unreserved line(s)")
        return dropped

    def clear(self):
        """Empty the cart."""
        self.lines.clear()
