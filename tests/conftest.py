"""
Pytest configuration for the sunk test suite.

Puts src/ on the path so tests run without installing the package, and
provides an in-process fake Subsonic server driven through httpx.MockTransport.
"""
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import httpx
import pytest

project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from sunk.client import Client  # noqa: E402
from sunk.models import SunkConfig  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def ok(**payload: Any) -> Dict[str, Any]:
    """Build a successful subsonic-response document."""
    return {"subsonic-response": {"status": "ok", "version": "1.16.1", **payload}}


def failed(code: int, message: str) -> Dict[str, Any]:
    """Build a failed subsonic-response document."""
    return {
        "subsonic-response": {
            "status": "failed",
            "version": "1.16.1",
            "error": {"code": code, "message": message},
        }
    }


class FakeServer:
    """Routes requests by operation name and records every request."""

    def __init__(self):
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def reply_json(self, operation: str, document: Any, status_code: int = 200) -> None:
        self.routes[operation] = lambda request: httpx.Response(status_code, json=document)

    def reply_ok(self, operation: str, **payload: Any) -> None:
        self.reply_json(operation, ok(**payload))

    def reply_failed(self, operation: str, code: int, message: str) -> None:
        self.reply_json(operation, failed(code, message))

    def reply_bytes(self, operation: str, content: bytes, content_type: str, status_code: int = 200) -> None:
        self.routes[operation] = lambda request: httpx.Response(
            status_code, content=content, headers={"content-type": content_type}
        )

    def reply_error(self, operation: str, error: Exception) -> None:
        def raise_error(request: httpx.Request) -> httpx.Response:
            raise error

        self.routes[operation] = raise_error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        operation = request.url.path.rsplit("/", 1)[-1]
        route = self.routes.get(operation)
        if route is None:
            return httpx.Response(404, text=f"no route for {operation}")
        return route(request)

    def calls(self, operation: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.rsplit("/", 1)[-1] == operation]


@pytest.fixture
def config() -> SunkConfig:
    """Return a valid SunkConfig for testing."""
    return SunkConfig(
        url="https://music.example.com",
        username="testuser",
        password="testpass",
        client_name="sunk-test",
        api_version="1.16.1",
    )


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def client(config, server):
    """Client whose HTTP traffic goes to the fake server."""
    client = Client(config, transport=httpx.MockTransport(server.handler))
    yield client
    client.close()


@pytest.fixture
def payloads() -> Dict[str, Any]:
    """Entity payloads as found inside subsonic-response."""
    with open(FIXTURES_DIR / "payloads.json", "r") as f:
        return json.load(f)
