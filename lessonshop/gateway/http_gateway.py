"""
HTTP implementation of the catalog gateway.

Endpoints used:
- GET  /lessons          : full catalog
- GET  /search?q=<term>  : catalog search
- PUT  /lessons/<id>     : {"spacesDelta": n}, returns the updated lesson
- POST /orders           : order payload
"""

import logging
from datetime import timedelta
from typing import Any, Awaitable, Callable, List, Optional
from urllib.parse import quote

import httpx

from .errors import DomainRejection, GatewayError, TransportFailure
from .interfaces import CatalogGateway
from ..models.lesson import Lesson, lesson_from_payload
from ..models.order import Order
from ..models.result import Result
from ..resilience.circuit_breaker import CircuitBreaker, CircuitBreakerOpenError
from ..validation.lesson_validator import LessonValidator


logger = logging.getLogger(__name__)

SERVICE_UNAVAILABLE_MESSAGE = "Catalog service unavailable"


class HttpCatalogGateway(CatalogGateway):
    """
    Catalog gateway over HTTP/JSON.

    Examples:
        >>> async with HttpCatalogGateway("http://localhost:3000") as gateway:
        ...     result = await gateway.list_lessons()
        ...     if result.is_success:
        ...         print(len(result.value))
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 10.0,
        circuit_breaker: Optional[CircuitBreaker] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize HttpCatalogGateway.

        Args:
            base_url: Base URL of the catalog service
            timeout: Transport timeout in seconds
            circuit_breaker: Breaker guarding calls (a default one if omitted)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            failure_threshold=5,
            timeout=timedelta(seconds=30),
            expected_exception=TransportFailure
        )
        self.lesson_validator = LessonValidator()
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

        logger.info(f"HttpCatalogGateway initialized with base_url: {self.base_url}")

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazily create the shared client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._http_client

    async def aclose(self):
        """Close the underlying HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> 'HttpCatalogGateway':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    # ==================== INTERNAL HELPERS ====================

    async def _request_json(self, method: str, path: str, **kwargs) -> Any:
        """
        Send a request and decode its JSON body.

        Raises:
            TransportFailure: Network error or undecodable body
            DomainRejection: Non-success status code
        """
        client = await self._get_http_client()

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise TransportFailure(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise DomainRejection(
                response.text or f"HTTP error! status: {response.status_code}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportFailure(f"Invalid JSON response from {path}") from e

    async def _call(
        self,
        operation: str,
        func: Callable[..., Awaitable[Any]],
        *args
    ) -> Result[Any]:
        """Run func through the circuit breaker and wrap the outcome."""
        try:
            value = await self.circuit_breaker.call(func, *args)
        except CircuitBreakerOpenError as e:
            logger.warning(f"{operation} blocked: {e}")
            return Result.failure(SERVICE_UNAVAILABLE_MESSAGE, e)
        except GatewayError as e:
            logger.warning(f"{operation} failed: {e.message}")
            if self.circuit_breaker.is_open:
                logger.error(
                    f"{operation} opened the circuit; further calls fail fast "
                    f"for {self.circuit_breaker.timeout}"
                )
            return Result.failure(e.message, e)

        logger.debug(f"{operation} succeeded")
        return Result.success(value)

    def _parse_lessons(self, data: Any) -> List[Lesson]:
        """
        Validate and convert a lesson list payload.

        Raises:
            TransportFailure: If the payload is not a list of valid lessons
        """
        if not isinstance(data, list):
            raise TransportFailure(
                f"Expected a list of lessons, got {type(data).__name__}"
            )

        lessons: List[Lesson] = []
        for index, item in enumerate(data):
            validation = self.lesson_validator.validate(item)
            if not validation.is_valid:
                raise TransportFailure(
                    f"Invalid lesson record at index {index}: "
                    f"{'; '.join(validation.errors)}"
                )
            lessons.append(lesson_from_payload(item))
        return lessons

    async def _fetch_lessons(self, params: Optional[dict] = None) -> List[Lesson]:
        path = "/search" if params else "/lessons"
        data = await self._request_json("GET", path, params=params)
        return self._parse_lessons(data)

    async def _put_spaces_delta(self, lesson_id: str, delta: int) -> int:
        data = await self._request_json(
            "PUT",
            f"/lessons/{quote(str(lesson_id), safe='')}",
            json={"spacesDelta": delta}
        )
        validation = self.lesson_validator.validate_spaces_update(data)
        if not validation.is_valid:
            raise TransportFailure("; ".join(validation.errors))
        return int(data["spaces"])

    async def _post_order(self, payload: dict) -> Any:
        return await self._request_json("POST", "/orders", json=payload)

    # ==================== OPERATIONS ====================

    async def list_lessons(self) -> Result[List[Lesson]]:
        return await self._call("List lessons", self._fetch_lessons)

    async def search_lessons(self, query: str) -> Result[List[Lesson]]:
        return await self._call("Search lessons", self._fetch_lessons, {"q": query})

    async def adjust_spaces(self, lesson_id: str, delta: int) -> Result[int]:
        return await self._call(
            f"Adjust spaces of {lesson_id} by {delta:+d}",
            self._put_spaces_delta,
            lesson_id,
            delta
        )

    async def submit_order(self, order: Order) -> Result[Any]:
        return await self._call("Submit order", self._post_order, order.to_dict())
