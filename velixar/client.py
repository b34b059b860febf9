"""
Velixar API Client

This module provides the asynchronous client for the Velixar memory service
REST API.
"""

import time
from typing import TYPE_CHECKING, Any, NoReturn
from urllib.parse import quote

if TYPE_CHECKING:
    from typing_extensions import Self

import httpx

from .config import VelixarConfig
from .exceptions import (
    DEFAULT_ERROR_MESSAGE,
    VelixarAPIError,
    VelixarNotFoundError,
)
from .logging import get_logger
from .models import (
    DeleteMemoryResponse,
    GetMemoryResponse,
    SearchResult,
    StoreMemoryRequest,
    StoreMemoryResponse,
)
from .telemetry import TelemetryBeacon


logger = get_logger(__name__)


class VelixarClient:
    """
    Client for the Velixar memory service.

    Each method is a single HTTP round-trip:
    - store: create a memory
    - search: find memories matching a query
    - get: fetch one memory by ID
    - delete: remove one memory by ID

    Example:
        ```python
        async with VelixarClient(VelixarConfig(api_key="vx-...")) as client:
            stored = await client.store("User prefers concise responses", tags=["prefs"])
            results = await client.search("preferences", limit=5)
        ```
    """

    def __init__(
        self,
        config: VelixarConfig,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the Velixar client.

        Args:
            config: VelixarConfig with the API key and endpoint
            http_client: Optional transport to use instead of a client-owned
                ``httpx.AsyncClient``. An injected client is not closed by
                ``close()``.
        """
        from . import __version__

        self.config = config
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=None,
                headers={
                    "User-Agent": f"velixar-python/{__version__}",
                    "X-Client-Version": __version__,
                },
            )
        self._client = http_client
        self._telemetry = TelemetryBeacon(
            http_client, base_url=config.base_url, enabled=config.telemetry
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "VelixarClient":
        """Create a client from ``VELIXAR_*`` environment variables.

        Keyword arguments (``api_key``, ``base_url``, ``telemetry``) override
        the environment.
        """
        return cls(VelixarConfig.from_settings(**overrides))

    async def close(self) -> None:
        """Wait for pending telemetry, then close the HTTP client if owned."""
        await self._telemetry.drain()
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "Self":
        """Support using the client as an async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close the client when exiting the context manager."""
        await self.close()

    def _handle_http_error(self, response: httpx.Response, data: Any) -> NoReturn:
        """Convert a non-2xx response into a VelixarAPIError.

        This method always raises an exception and never returns normally.
        """
        message = None
        if isinstance(data, dict):
            message = data.get("error")
        if not message:
            message = DEFAULT_ERROR_MESSAGE

        logger.debug(
            "Velixar API error", status=response.status_code, error=str(message)
        )
        if response.status_code == 404:
            raise VelixarNotFoundError(response.status_code, str(message))
        raise VelixarAPIError(response.status_code, str(message))

    async def _request(
        self,
        method: str,
        path: str,
        *,
        route: str | None = None,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path appended verbatim to the configured base URL
            route: Path template reported to telemetry (defaults to ``path``)
            params: Query parameters, encoded in insertion order
            json: JSON-serializable request body
            headers: Per-call headers; these override the defaults

        Raises:
            VelixarAPIError: If the server returns a non-2xx status
            httpx.TransportError: If the request could not be sent
            json.JSONDecodeError: If the response body is not JSON
        """
        request_headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        if headers:
            request_headers.update(headers)

        route = route or path
        start = time.perf_counter()
        response = await self._client.request(
            method,
            f"{self.config.base_url}{path}",
            params=params,
            json=json,
            headers=request_headers,
        )

        # The body is decoded even on failure, it carries the error message
        data = response.json()
        elapsed_ms = round((time.perf_counter() - start) * 1000)
        logger.debug(
            "Velixar request",
            method=method,
            route=route,
            status=response.status_code,
            elapsed_ms=elapsed_ms,
        )
        self._telemetry.send(route, response.is_success, elapsed_ms)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._handle_http_error(e.response, data)
        return data

    async def store(
        self,
        content: str,
        *,
        user_id: str | None = None,
        tier: int | None = None,
        memory_type: str | None = None,
        tags: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> StoreMemoryResponse:
        """
        Store a memory.

        Args:
            content: The text to remember
            user_id: Optional user the memory belongs to
            tier: Optional importance/retention hint
            memory_type: Optional category, sent as ``type``
            tags: Optional tags
            metadata: Optional JSON-serializable metadata

        Returns:
            StoreMemoryResponse with the server-assigned ID

        Raises:
            VelixarAPIError: If the server rejects the memory
        """
        payload = StoreMemoryRequest(
            content=content,
            user_id=user_id,
            tier=tier,
            memory_type=memory_type,
            tags=tags,
            metadata=metadata,
        ).to_payload()

        data = await self._request("POST", "/memory", json=payload)
        return StoreMemoryResponse.from_body(data)

    async def search(
        self,
        query: str,
        *,
        user_id: str | None = None,
        limit: int | None = None,
    ) -> SearchResult:
        """
        Search memories.

        Args:
            query: Search text, sent as ``q``
            user_id: Optional user filter, sent as ``user_id``
            limit: Optional maximum number of results

        Returns:
            SearchResult with the matching memories and their count
        """
        params = {"q": query}
        if user_id:
            params["user_id"] = user_id
        if limit:
            params["limit"] = str(limit)

        data = await self._request("GET", "/memory/search", params=params)
        return SearchResult.from_body(data)

    async def get(self, memory_id: str) -> GetMemoryResponse:
        """
        Get a memory by its ID.

        Raises:
            VelixarNotFoundError: If no memory has this ID
        """
        data = await self._request(
            "GET", f"/memory/{quote(memory_id, safe='')}", route="/memory/:id"
        )
        return GetMemoryResponse.from_body(data)

    async def delete(self, memory_id: str) -> DeleteMemoryResponse:
        """
        Delete a memory by its ID.

        Whether deleting an unknown ID is an error is up to the server.
        """
        data = await self._request(
            "DELETE", f"/memory/{quote(memory_id, safe='')}", route="/memory/:id"
        )
        return DeleteMemoryResponse.from_body(data)


def create_velixar_client(
    api_key: str | None = None,
    base_url: str | None = None,
    telemetry: bool | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> VelixarClient:
    """
    Create a Velixar client, falling back to the environment for unset values.

    Args:
        api_key: API key (default: ``VELIXAR_API_KEY``)
        base_url: Service endpoint (default: ``VELIXAR_BASE_URL`` or the
            production endpoint)
        telemetry: Enable usage beacons (default: ``VELIXAR_TELEMETRY`` or off)
        http_client: Optional transport to inject

    Returns:
        A ready-to-use VelixarClient

    Raises:
        VelixarConfigError: If no API key is given or configured

    Example:
        ```python
        client = create_velixar_client(api_key="vx-...", telemetry=True)

        async with create_velixar_client() as client:
            await client.store("User lives in Lisbon", tags=["location"])
        ```
    """
    config = VelixarConfig.from_settings(
        api_key=api_key, base_url=base_url, telemetry=telemetry
    )
    return VelixarClient(config, http_client=http_client)
