import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastmcp import Client  # noqa: E402

from core import course_api  # noqa: E402
from core.leave_store import default_store  # noqa: E402
from tools import mcp_server  # noqa: E402


def envelope(classes: Optional[list[dict[str, Any]]] = None, count: Optional[int] = None, **extra) -> dict[str, Any]:
    """A successful UML API body."""
    data: dict[str, Any] = {"Classes": classes or []}
    if count is not None:
        data["Count"] = count
    body = {"isError": False, "message": None, "statusCode": 200, "data": data}
    body.update(extra)
    return body


class UmlStub:
    """
    Stand-in for the UML API, built on httpx.MockTransport.
    Every outbound request is recorded in ``requests``.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], Any] = lambda request: httpx.Response(200, json=envelope())

    def respond_json(self, body: Any, status_code: int = 200) -> None:
        self.handler = lambda request: httpx.Response(status_code, json=body)

    def _dispatch(self, request: httpx.Request):
        self.requests.append(request)
        return self.handler(request)

    def make_client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self._dispatch),
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(timeout),
        )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test against default settings, whatever the shell has set."""
    for name in (
        "UML_API_BASE_URL",
        "COURSE_DETAILS_TIMEOUT",
        "COURSE_SEARCH_TIMEOUT",
        "MCP_MAX_DURATION",
        "MCP_TRANSPORT",
        "MCP_HOST",
        "MCP_PORT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def store():
    """A freshly seeded store, also installed behind the MCP tools."""
    fresh = default_store()
    previous = mcp_server.set_leave_store(fresh)
    yield fresh
    mcp_server.set_leave_store(previous)


@pytest.fixture
def uml(monkeypatch) -> UmlStub:
    stub = UmlStub()
    monkeypatch.setattr(course_api, "make_client", stub.make_client)
    return stub


@pytest.fixture
def call_tool():
    """Call a tool on the real server through an in-memory FastMCP client."""

    def _call(name: str, arguments: dict[str, Any]):
        async def _run():
            async with Client(mcp_server.mcp) as client:
                return await client.call_tool(name, arguments)

        return asyncio.run(_run())

    return _call


@pytest.fixture
def tool_text(call_tool):
    def _text(name: str, arguments: dict[str, Any]) -> str:
        return call_tool(name, arguments).content[0].text

    return _text
