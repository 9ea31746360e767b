"""
Order submitter.

Builds an order from the cart and checkout form and sends it to the
catalog service. Invalid forms, empty carts and carts holding lines
whose space the service refused are not submitted.
"""

import logging
from typing import Any, Optional, Sequence

from ..gateway.interfaces import CatalogGateway
from ..models.cart import CartLine
from ..models.lesson import Lesson
from ..models.order import CustomerForm, Order, OrderItem
from ..models.result import Result
from ..utils.logger import mask_email
from . import derivations


logger = logging.getLogger(__name__)


class OrderSubmitter:
    """
    Validates and submits orders.

    Examples:
        >>> submitter = OrderSubmitter(gateway)
        >>> result = await submitter.submit(cart_lines, form, lessons)
        >>> if result is None:
        ...     print("Form invalid or cart empty")
    """

    def __init__(self, gateway: CatalogGateway):
        self.gateway = gateway

    def can_submit(self, cart: Sequence[CartLine], form: CustomerForm) -> bool:
        """
        True if the form is valid, the cart is not empty and the service
        has not refused a hold for any of its lines.
        """
        return (
            derivations.valid_customer(form)
            and derivations.cart_count(cart) > 0
            and not any(line.is_failed for line in cart)
        )

    def build_order(
        self,
        cart: Sequence[CartLine],
        form: CustomerForm,
        lessons: Sequence[Lesson]
    ) -> Order:
        """
        Aggregate the cart into an order.

        Args:
            cart: Cart lines
            form: Customer form (fields are trimmed)
            lessons: Catalog snapshot used for the summary

        Returns:
            Order with one item per lesson, in cart order
        """
        summary = derivations.cart_summary(cart, lessons)
        return Order(
            customer=form.trimmed(),
            items=[OrderItem(entry.lesson_id, entry.qty) for entry in summary],
            total=derivations.cart_total(cart),
        )

    async def submit(
        self,
        cart: Sequence[CartLine],
        form: CustomerForm,
        lessons: Sequence[Lesson]
    ) -> Optional[Result[Any]]:
        """
        Submit the order if the form and cart allow it.

        Returns:
            The gateway Result, or None if submission was blocked
        """
        if not self.can_submit(cart, form):
            logger.debug("Order submission blocked: invalid form or empty cart")
            return None

        order = self.build_order(cart, form, lessons)
        logger.info(
            f"Submitting order for {mask_email(order.customer.email)}: "
            f"{len(order.items)} lesson(s), total {order.total}"
        )

        result = await self.gateway.submit_order(order)
        if result.is_failure:
            logger.warning(f"Order submission failed: {result.message}")
        return result
