"""
Shared test fixtures and helpers for the routedoc test suite.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from routedoc import Root


# ============================================================================
# Request Helpers
# ============================================================================


def make_scope(
    method: str = "GET",
    path: str = "/",
    query_string: str = "",
    headers: Optional[List[tuple]] = None,
    scheme: str = "http",
    host: str = "example.com",
) -> dict:
    """Build a minimal ASGI HTTP scope."""
    raw_headers = [(b"host", host.encode("latin-1"))]
    if headers:
        for name, value in headers:
            raw_headers.append(
                (name.encode("latin-1") if isinstance(name, str) else name,
                 value.encode("latin-1") if isinstance(value, str) else value)
            )
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": path,
        "raw_path": path.encode("utf-8"),
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
        "scheme": scheme,
        "server": (host, 80),
        "client": ("127.0.0.1", 12345),
        "root_path": "",
    }


def make_request(path: str = "/doc/swagger.json", **kwargs) -> Request:
    return Request(make_scope(path=path, **kwargs))


async def render(response) -> Tuple[int, Dict[str, str], bytes]:
    """Drive a Starlette response through a fake ASGI send."""
    messages: List[dict] = []

    async def receive():
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message):
        messages.append(message)

    await response(make_scope(), receive, send)
    start = messages[0]
    headers = {k.decode(): v.decode() for k, v in start["headers"]}
    body = b"".join(m.get("body", b"") for m in messages[1:])
    return start["status"], headers, body


async def fetch_json(endpoint, request: Request) -> Tuple[int, Any]:
    status, _, body = await render(await endpoint(request))
    if status == 200:
        return status, json.loads(body)
    return status, body.decode()


def endpoint_of(root: Root, path: str):
    """Find the endpoint registered on the wrapped app for ``path``."""
    for route in root.app.router.routes:
        if route.path == path:
            return route.endpoint
    raise LookupError(path)


async def ok(request: Request):
    return PlainTextResponse("ok")


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def app():
    return Starlette()


@pytest.fixture
def root(app):
    return Root(app, "doc/")
