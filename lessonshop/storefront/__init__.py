"""
Storefront engine.

This module provides the catalog store, the pure view derivations,
the cart controller, the order submitter and the Storefront state
holder that wires them together.

Usage:
    >>> from lessonshop.storefront import Storefront
    >>>
    >>> shop = Storefront(gateway)
    >>> await shop.fetch_lessons()
    >>> shop.displayed_lessons
"""

from . import derivations
from .app import Storefront
from .cart import CartController
from .catalog_store import CatalogStore
from .orders import OrderSubmitter

__all__ = [
    "Storefront",
    "CartController",
    "CatalogStore",
    "OrderSubmitter",
    "derivations",
]
