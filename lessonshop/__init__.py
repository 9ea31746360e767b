"""
Lesson storefront client.

Catalog browsing, cart management and order submission against a
remote lesson-booking service.

Usage:
    >>> from lessonshop.gateway import HttpCatalogGateway
    >>> from lessonshop.storefront import Storefront
    >>>
    >>> gateway = HttpCatalogGateway("http://localhost:3000")
    >>> shop = Storefront(gateway)
    >>> await shop.fetch_lessons()
    >>> shop.displayed_lessons
"""

__version__ = "0.1.0"
