from typing import Callable, List
from unittest.mock import MagicMock

import httpx
import pytest
from http_contract import Context, io, with_client
from http_contract.settings import Settings


class MockService:
    """An in-process HTTP service for pipelines, recording every request it serves."""

    def __init__(self):
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/json":
            return httpx.Response(
                200,
                headers={"content-type": "application/json"},
                content=b'{"site":"example.com"}',
            )
        if path == "/form":
            return httpx.Response(
                200,
                headers={"content-type": "application/x-www-form-urlencoded"},
                content=b"site=example.com",
            )
        if path == "/text":
            return httpx.Response(200, headers={"content-type": "text/plain"}, content=b"hello")
        if path == "/broken":
            return httpx.Response(200, headers={"content-type": "application/json"}, content=b"{not json")
        if path == "/query":
            return httpx.Response(200, json=dict(request.url.params.multi_items()))
        if path == "/headers":
            return httpx.Response(200, json={name: value for name, value in request.headers.items()})
        if path == "/echo":
            headers = {"x-request-method": request.method}
            if "content-type" in request.headers:
                headers["content-type"] = request.headers["content-type"]
            return httpx.Response(200, headers=headers, content=request.content)
        if path == "/down":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(400, json={"error": f"unknown path {path}"})

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def service() -> MockService:
    return MockService()


@pytest.fixture
def mock_client(service: MockService):
    """Provides an httpx.Client routed to the mock service."""
    with httpx.Client(transport=httpx.MockTransport(service)) as client:
        yield client


@pytest.fixture
def mock_io(mock_client: httpx.Client) -> Callable[[], Context]:
    """Provides a factory of fresh contexts bound to the mock service."""

    def factory() -> Context:
        return io(with_client(mock_client))

    return factory


@pytest.fixture
def mock_settings() -> MagicMock:
    """Provides a mock Settings instance."""
    settings = MagicMock(spec=Settings)
    settings.get_timeout.return_value = 5.0
    settings.get_verify_tls.return_value = True
    settings.get_user_agent.return_value = "http-contract-test"
    settings.get_wire_log_level.return_value = "NONE"
    settings.get_proxy.return_value = None
    return settings
