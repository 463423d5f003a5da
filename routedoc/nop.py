"""
No-op wrapper.

``NopRoot`` exposes the same registration surface as ``Root`` and
registers routes on the router, but records no documentation and
serves no documentation endpoints. Swap it in to switch the docs off
without touching route code::

    root = Root(app, "/doc") if settings.DEBUG else NopRoot(app)
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from starlette.middleware import Middleware
from starlette.routing import Route, Router

from .config import UISetting
from .models import Swagger
from .utils import to_router_path
from .wrapper import Endpoint, _join, _router_of


class NopApi:
    def __init__(self, route: Optional[Route]):
        self._route = route

    def add_param_path(self, p: Any, name: str, description: str = "") -> "NopApi":
        return self

    def add_param_path_nested(self, p: Any) -> "NopApi":
        return self

    def add_param_query(self, p: Any, name: str, description: str = "", required: bool = False) -> "NopApi":
        return self

    def add_param_query_nested(self, p: Any) -> "NopApi":
        return self

    def add_param_form(self, p: Any, name: str, description: str = "", required: bool = False) -> "NopApi":
        return self

    def add_param_form_nested(self, p: Any) -> "NopApi":
        return self

    def add_param_header(self, p: Any, name: str, description: str = "", required: bool = False) -> "NopApi":
        return self

    def add_param_header_nested(self, p: Any) -> "NopApi":
        return self

    def add_param_body(self, p: Any, name: str, description: str = "", required: bool = False) -> "NopApi":
        return self

    def add_param_file(self, name: str, description: str = "", required: bool = False) -> "NopApi":
        return self

    def add_response(self, code: int, description: str, schema: Any = None, header: Any = None) -> "NopApi":
        return self

    def set_request_content_type(self, *types: str) -> "NopApi":
        return self

    def set_response_content_type(self, *types: str) -> "NopApi":
        return self

    def set_operation_id(self, operation_id: str) -> "NopApi":
        return self

    def set_deprecated(self) -> "NopApi":
        return self

    def set_description(self, description: str) -> "NopApi":
        return self

    def set_external_docs(self, description: str, url: str) -> "NopApi":
        return self

    def set_summary(self, summary: str) -> "NopApi":
        return self

    def set_security(self, *names: str) -> "NopApi":
        return self

    def set_security_with_scope(self, *requirements: Mapping[str, Sequence[str]]) -> "NopApi":
        return self

    @property
    def route(self) -> Optional[Route]:
        return self._route


class _NopRouter:
    """Registers plain routes and hands back inert builders."""

    def __init__(self, router: Optional[Router], prefix: str = "", middleware: Sequence[Middleware] = ()):
        self._router = router
        self._prefix = prefix
        self._middleware = list(middleware)

    def add(self, method: str, path: str, endpoint: Endpoint,
            middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> NopApi:
        if self._router is None:
            return NopApi(None)
        route = Route(
            to_router_path(_join(self._prefix, path)),
            endpoint,
            methods=[method.upper()],
            name=name,
            middleware=(self._middleware + list(middleware or [])) or None,
        )
        self._router.routes.append(route)
        return NopApi(route)

    def get(self, path: str, endpoint: Endpoint,
            middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> NopApi:
        return self.add("GET", path, endpoint, middleware, name)

    def post(self, path: str, endpoint: Endpoint,
             middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> NopApi:
        return self.add("POST", path, endpoint, middleware, name)

    def put(self, path: str, endpoint: Endpoint,
            middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> NopApi:
        return self.add("PUT", path, endpoint, middleware, name)

    def delete(self, path: str, endpoint: Endpoint,
               middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> NopApi:
        return self.add("DELETE", path, endpoint, middleware, name)

    def options(self, path: str, endpoint: Endpoint,
                middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> NopApi:
        return self.add("OPTIONS", path, endpoint, middleware, name)

    def head(self, path: str, endpoint: Endpoint,
             middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> NopApi:
        return self.add("HEAD", path, endpoint, middleware, name)

    def patch(self, path: str, endpoint: Endpoint,
              middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> NopApi:
        return self.add("PATCH", path, endpoint, middleware, name)


class NopGroup(_NopRouter):
    def set_description(self, description: str) -> "NopGroup":
        return self

    def set_external_docs(self, description: str, url: str) -> "NopGroup":
        return self

    def set_security(self, *names: str) -> "NopGroup":
        return self

    def set_security_with_scope(self, *requirements: Mapping[str, Sequence[str]]) -> "NopGroup":
        return self

    @property
    def router(self) -> Optional[Router]:
        return self._router


class NopRoot(_NopRouter):
    """
    Root without documentation.

    ``app`` may be ``None``, in which case nothing is registered at all.
    """

    def __init__(self, app: Any = None):
        super().__init__(_router_of(app) if app is not None else None)
        self._app = app

    def group(self, name: str, prefix: str, middleware: Optional[Sequence[Middleware]] = None) -> NopGroup:
        return NopGroup(self._router, prefix, middleware or [])

    def set_request_content_type(self, *types: str) -> "NopRoot":
        return self

    def set_response_content_type(self, *types: str) -> "NopRoot":
        return self

    def set_external_docs(self, description: str, url: str) -> "NopRoot":
        return self

    def add_security_basic(self, name: str, description: str = "") -> "NopRoot":
        return self

    def add_security_api_key(self, name: str, description: str, in_: str) -> "NopRoot":
        return self

    def add_security_oauth2(self, name: str, description: str, flow: str, authorization_url: str = "",
                            token_url: str = "", scopes: Optional[Mapping[str, str]] = None) -> "NopRoot":
        return self

    def set_ui(self, ui: UISetting) -> "NopRoot":
        return self

    def set_scheme(self, *schemes: str) -> "NopRoot":
        return self

    def get_raw(self) -> Optional[Swagger]:
        return None

    def set_raw(self, spec: Swagger) -> "NopRoot":
        return self

    @property
    def app(self) -> Any:
        return self._app


__all__ = [
    "NopApi",
    "NopGroup",
    "NopRoot",
]
