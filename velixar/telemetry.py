"""
Opt-in anonymous usage beacons.

A beacon is a detached asyncio task: the request that triggered it never
awaits it, and nothing that happens inside it is visible to the caller.
"""

import asyncio

import httpx

from .config import TELEMETRY_TIMEOUT
from .logging import get_logger
from .models import TelemetryEvent


logger = get_logger(__name__)


class TelemetryBeacon:
    """Fire-and-forget sender of ``TelemetryEvent`` records."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str, enabled: bool):
        from . import __version__

        self.enabled = enabled
        self._http_client = http_client
        self._url = f"{base_url}/telemetry"
        self._version = __version__
        # Holds strong references so pending tasks are not garbage collected
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def send(self, route: str, ok: bool, elapsed_ms: int) -> None:
        """Schedule a beacon and return immediately. Never raises."""
        if not self.enabled:
            return
        try:
            event = TelemetryEvent(v=self._version, m=route, ok=ok, ms=elapsed_ms)
            task = asyncio.get_running_loop().create_task(self._post(event))
        except Exception as e:
            logger.debug("Telemetry beacon not scheduled", route=route, error=str(e))
            return
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _post(self, event: TelemetryEvent) -> None:
        try:
            await self._http_client.post(
                self._url,
                json=event.model_dump(),
                headers={"Content-Type": "application/json"},
                timeout=TELEMETRY_TIMEOUT,
            )
        except Exception as e:
            logger.debug("Telemetry beacon failed", route=event.m, error=str(e))

    async def drain(self) -> None:
        """Wait for beacons still in flight."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
