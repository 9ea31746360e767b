"""
Order data models.

This module provides the customer form and the order payload
sent to the catalog service.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass
class CustomerForm:
    """
    Customer details as typed by the user (free text until validated).

    Attributes:
        name: Customer name
        phone: Contact phone number
        email: Contact e-mail (collected, not validated)
        address: Postal address
    """

    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""

    def trimmed(self) -> 'CustomerForm':
        """Return a copy with surrounding whitespace removed from every field."""
        return CustomerForm(
            name=self.name.strip(),
            phone=self.phone.strip(),
            email=self.email.strip(),
            address=self.address.strip(),
        )


@dataclass
class OrderItem:
    """One ordered lesson and its quantity."""

    lesson_id: str
    quantity: int

    def to_dict(self) -> Dict[str, Any]:
        return {"lessonId": self.lesson_id, "quantity": self.quantity}


@dataclass
class Order:
    """
    Order built at submit time.

    Attributes:
        customer: Trimmed customer details
        items: Ordered lessons with quantities
        total: Sum of unit prices of all cart lines

    Examples:
        >>> order = Order(
        ...     customer=CustomerForm("John Smith", "+1 555-1234", "", "1 Main St"),
        ...     items=[OrderItem("64f1c0ffee", 2)],
        ...     total=200
        ... )
        >>> order.to_dict()["items"]
        [{'lessonId': '64f1c0ffee', 'quantity': 2}]
    """

    customer: CustomerForm
    items: List[OrderItem] = field(default_factory=list)
    total: Union[int, float] = 0

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the wire format expected by the catalog service.

        Returns:
            Dictionary representation of the order
        """
        return {
            "name": self.customer.name,
            "phone": self.customer.phone,
            "email": self.customer.email,
            "address": self.customer.address,
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
        }
