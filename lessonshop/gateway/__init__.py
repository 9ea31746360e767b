"""
Catalog service gateway.

This module provides the abstract gateway contract, its HTTP
implementation and the error kinds raised inside it.

Usage:
    >>> from lessonshop.gateway import HttpCatalogGateway
    >>>
    >>> gateway = HttpCatalogGateway("http://localhost:3000")
    >>> result = await gateway.search_lessons("math")
"""

from .errors import DomainRejection, GatewayError, TransportFailure
from .http_gateway import HttpCatalogGateway
from .interfaces import CatalogGateway

__all__ = [
    "CatalogGateway",
    "HttpCatalogGateway",
    "GatewayError",
    "TransportFailure",
    "DomainRejection",
]
