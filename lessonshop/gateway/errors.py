"""
Gateway error kinds.

These exceptions are raised inside the gateway and converted into
failed Results at its boundary; callers never see them raised.
"""

from typing import Optional


class GatewayError(Exception):
    """Base class for catalog service errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class TransportFailure(GatewayError):
    """Network error, or a response that is not the expected structured record."""
    pass


class DomainRejection(GatewayError):
    """The service answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

