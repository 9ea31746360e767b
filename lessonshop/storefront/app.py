"""
Storefront state holder.

Owns the catalog store, cart, filters, checkout form, current page,
loading flag and error message, and exposes the derived views as
read-only properties recomputed on every access.
"""

import logging
from typing import Any, List, Optional, Union

from ..gateway.interfaces import CatalogGateway
from ..models.cart import CartLine, CartSummaryEntry
from ..models.filters import DEFAULT_MAX_PRICE, PAGE_TRANSITIONS, FilterState, Page
from ..models.lesson import Lesson, Number
from ..models.order import CustomerForm
from ..models.result import Result
from . import derivations
from .cart import CartController
from .catalog_store import CatalogStore
from .orders import OrderSubmitter


logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load lessons"
SEARCH_FAILED_MESSAGE = "Search failed"
AVAILABILITY_FAILED_MESSAGE = "Failed to update lesson availability"
ORDER_FAILED_MESSAGE = "Failed to submit order"


class Storefront:
    """
    Catalog browser and cart manager for the lesson storefront.

    Every network operation is a coroutine; local state changes that
    must be visible immediately (cart lines, loading flag, cleared
    error) happen before the first await.

    Examples:
        >>> shop = Storefront(gateway)
        >>> await shop.fetch_lessons()
        >>> shop.filters.filter_key = "available"
        >>> lesson = shop.displayed_lessons[0]
        >>> await shop.add_to_cart(lesson)
        >>> shop.form = CustomerForm("John Smith", "+1 555-1234", "", "1 Main St")
        >>> await shop.submit_order()
        True
    """

    def __init__(
        self,
        gateway: CatalogGateway,
        default_max_price: Number = DEFAULT_MAX_PRICE
    ):
        """
        Initialize Storefront.

        Args:
            gateway: Catalog service gateway
            default_max_price: Upper price bound of a fresh filter state
        """
        self.gateway = gateway
        self.default_max_price = default_max_price

        self.store = CatalogStore()
        self.cart_controller = CartController(gateway, self.store)
        self.order_submitter = OrderSubmitter(gateway)

        self.filters = self._initial_filters()
        self.form = CustomerForm()
        self.page = Page.CATALOG
        self.loading = False
        self.error = ""

        self._request_seq = 0

    def _initial_filters(self) -> FilterState:
        return FilterState(max_price=self.default_max_price)

    # ==================== STATE ====================

    @property
    def lessons(self) -> List[Lesson]:
        return self.store.lessons

    @property
    def cart(self) -> List[CartLine]:
        return self.cart_controller.lines

    # ==================== DERIVED VIEWS ====================

    @property
    def displayed_lessons(self) -> List[Lesson]:
        return derivations.displayed_lessons(self.lessons, self.filters)

    @property
    def location_options(self) -> List[str]:
        return derivations.location_options(self.lessons)

    @property
    def cart_summary(self) -> List[CartSummaryEntry]:
        return derivations.cart_summary(self.cart, self.lessons)

    @property
    def cart_total(self) -> Number:
        return derivations.cart_total(self.cart)

    @property
    def cart_count(self) -> int:
        return derivations.cart_count(self.cart)

    @property
    def valid_customer(self) -> bool:
        return derivations.valid_customer(self.form)

    # ==================== CATALOG ====================

    def _begin_request(self) -> int:
        self._request_seq += 1
        self.loading = True
        self.error = ""
        return self._request_seq

    def _apply_catalog(self, result: Result[List[Lesson]], seq: int, fallback: str) -> bool:
        if seq != self._request_seq:
            # No ordering between overlapping requests: the last response wins
            logger.debug(
                f"Applying catalog response #{seq} after newer request "
                f"#{self._request_seq}"
            )

        self.loading = False

        if result.is_failure:
            self.error = result.error_message(fallback)
            return False

        self.store.replace(result.value)
        return True

    async def fetch_lessons(self) -> bool:
        """
        Load the full catalog.

        A successful fetch also drops cart lines whose space hold
        failed, since the store now mirrors the service again.

        Returns:
            True if the catalog was replaced
        """
        seq = self._begin_request()
        result = await self.gateway.list_lessons()

        if not self._apply_catalog(result, seq, LOAD_FAILED_MESSAGE):
            return False

        self._drop_unreserved()
        return True

    def _drop_unreserved(self) -> int:
        dropped = self.cart_controller.reconcile()
        if dropped:
            self.error = (
                f"{dropped} cart item(s) could not be reserved and were removed"
            )
        return dropped

    async def search(self) -> bool:
        """
        Search the catalog with the current search term.

        An empty (or whitespace-only) term loads the full catalog.

        Returns:
            True if the catalog was replaced
        """
        term = self.filters.search_term.strip()
        if not term:
            return await self.fetch_lessons()

        seq = self._begin_request()
        result = await self.gateway.search_lessons(term)
        return self._apply_catalog(result, seq, SEARCH_FAILED_MESSAGE)

    def find_lesson(self, lesson_id: str) -> Optional[Lesson]:
        return self.store.find(lesson_id)

    # ==================== CART ====================

    def can_add(self, lesson: Optional[Lesson]) -> bool:
        return self.cart_controller.can_add(lesson)

    def cart_quantity(self, lesson: Lesson) -> int:
        return self.cart_controller.cart_quantity(lesson)

    def _record_availability_failure(self, result: Optional[Result[int]]):
        if result is not None and result.is_failure:
            self.error = result.error_message(AVAILABILITY_FAILED_MESSAGE)

    async def add_to_cart(self, lesson: Optional[Lesson]):
        result = await self.cart_controller.add_to_cart(lesson)
        self._record_availability_failure(result)

    async def decrease_from_cart(self, lesson: Lesson):
        result = await self.cart_controller.decrease_from_cart(lesson)
        self._record_availability_failure(result)

    # ==================== NAVIGATION ====================

    def go_to(self, page: Union[Page, str]) -> bool:
        """
        Navigate to another page.

        The success page is reached only through a successful order.

        Returns:
            True if the page changed (or was already current)
        """
        target = Page(page)
        if target not in PAGE_TRANSITIONS[self.page]:
            logger.warning(f"Navigation from {self.page.value} to {target.value} not allowed")
            return False

        self.page = target
        return True

    # ==================== ORDER ====================

    async def submit_order(self) -> bool:
        """
        Submit the cart as an order.

        Does nothing when the form is invalid or the cart is empty.
        Lines whose space the service refused are dropped instead of
        ordered, and the order is not sent so the user can review the
        reduced cart. On success the cart, form and filters are reset,
        the success page is shown and the catalog is reloaded. On
        failure the error is recorded and everything else is left for
        a retry.

        Returns:
            True if the order was accepted
        """
        if not self.valid_customer or self.cart_count == 0:
            return False

        if self._drop_unreserved():
            return False

        self.error = ""
        result: Optional[Result[Any]] = await self.order_submitter.submit(
            self.cart, self.form, self.lessons
        )
        if result is None:
            return False

        if result.is_failure:
            self.error = result.error_message(ORDER_FAILED_MESSAGE)
            return False

        self.reset_all()
        self.page = Page.SUCCESS
        await self.fetch_lessons()
        return True

    def reset_all(self):
        """Clear the cart and reset the form and filters to their defaults."""
        self.cart_controller.clear()
        self.form = CustomerForm()
        self.filters = self._initial_filters()
