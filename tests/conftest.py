from collections.abc import AsyncGenerator, Callable

import httpx
import pytest

from velixar import VelixarClient, VelixarConfig


class FakeVelixarServer:
    """Records requests sent through an ``httpx.MockTransport``.

    Responses for API calls are queued with ``reply``. Telemetry beacons are
    recorded separately and answered by ``telemetry_handler``.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.telemetry: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []
        self.telemetry_handler: Callable = lambda request: httpx.Response(204)

    def reply(self, status_code: int = 200, **kwargs) -> None:
        self._responses.append(httpx.Response(status_code, **kwargs))

    async def handle(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/telemetry":
            self.telemetry.append(request)
            response = self.telemetry_handler(request)
            if not isinstance(response, httpx.Response):
                response = await response
            return response

        self.requests.append(request)
        return self._responses.pop(0)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def server() -> FakeVelixarServer:
    return FakeVelixarServer()


@pytest.fixture
async def http_client(server) -> AsyncGenerator[httpx.AsyncClient, None]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(server.handle))
    yield client
    await client.aclose()


@pytest.fixture
async def velixar_client(http_client) -> AsyncGenerator[VelixarClient, None]:
    """A client with the default config talking to the fake server."""
    client = VelixarClient(VelixarConfig(api_key="test-key"), http_client=http_client)
    yield client
    await client.close()


@pytest.fixture
async def telemetry_client(http_client) -> AsyncGenerator[VelixarClient, None]:
    client = VelixarClient(
        VelixarConfig(api_key="test-key", telemetry=True), http_client=http_client
    )
    yield client
    await client.close()
