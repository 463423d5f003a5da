"""
Path helpers and the one-time computation guard.
"""

from __future__ import annotations

import re
import threading
from typing import Any, Callable, Optional, Tuple
from urllib.parse import urlsplit

_COLON_PARAM = re.compile(r"(^|/):([^/]+)")
_BRACE_PARAM = re.compile(r"\{([^}:]+)(?::[^}]*)?\}")


class Once:
    """
    Run a computation at most once.

    The first caller computes under a lock; the result, or the exception
    it raised, is cached and handed to every later caller. A
    ``BaseException`` that is not an ``Exception`` propagates and leaves
    the guard open for the next caller.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._done = False
        self._result: Any = None
        self._error: Optional[BaseException] = None

    @property
    def done(self) -> bool:
        return self._done

    def do(self, fn: Callable[[], Any]) -> Any:
        if not self._done:
            with self._lock:
                if not self._done:
                    try:
                        self._result = fn()
                    except Exception as exc:
                        self._error = exc
                    self._done = True
        if self._error is not None:
            raise self._error
        return self._result


def remove_trailing_slash(path: str) -> str:
    """Drop one trailing slash unless the path is the root."""
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


def connect_path(*paths: str) -> str:
    """Join path segments into one absolute path without a trailing slash."""
    parts = [segment for path in paths for segment in path.split("/") if segment]
    return "/" + "/".join(parts)


def to_router_path(path: str) -> str:
    """Rewrite ``:name`` segments into the router's ``{name}`` syntax."""
    return _COLON_PARAM.sub(r"\1{\2}", path)


def to_swagger_path(path: str) -> str:
    """
    Document path of a route.

    ``/users/:id`` and ``/users/{id:int}`` both become ``/users/{id}``.
    """
    path = _BRACE_PARAM.sub(r"{\1}", to_router_path(path))
    return connect_path(path)


def trim_suffix_slash(s: str, suffix: str) -> str:
    """Remove ``suffix`` from the end of ``s``, ignoring trailing slashes."""
    s = remove_trailing_slash(s)
    suffix = remove_trailing_slash(connect_path(suffix))
    if s.endswith(suffix):
        return s[:len(s) - len(suffix)]
    return s


def parse_request_uri(raw: str) -> Optional[Tuple[str, str]]:
    """
    Split an absolute URI or absolute path into ``(host, path)``.

    Returns ``None`` for anything else (relative references, empty text).
    """
    if not raw:
        return None
    try:
        parts = urlsplit(raw)
    except ValueError:
        return None
    if not parts.scheme and not raw.startswith("/"):
        return None
    host = parts.netloc.rpartition("@")[2]
    return host, parts.path


__all__ = [
    "Once",
    "remove_trailing_slash",
    "connect_path",
    "to_router_path",
    "to_swagger_path",
    "trim_suffix_slash",
    "parse_request_uri",
]
