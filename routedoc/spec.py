"""
Specification assembly and the documentation endpoints.

The document is assembled once, on the first request to either
endpoint: group tags and group security are folded into every route,
security references are resolved against the root's security
definitions, operations are merged into the path table and the
definition registry is copied into the document.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response as HTTPResponse

from .assets import SPEC_NAME, render_swagger_ui
from .faults import Fault
from .models import JSONSchema, Operation, PathItem, Response, Swagger
from .security import add_security
from .utils import connect_path, parse_request_uri, trim_suffix_slash

if TYPE_CHECKING:
    from .wrapper import Api, Group, Root

logger = logging.getLogger("routedoc.spec")

SWAGGER_VERSION = "2.0"
DEFAULT_RESPONSE_CODE = "default"
DEFAULT_RESPONSE_DESCRIPTION = "successful operation"

METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


def attach_operation(paths: Dict[str, PathItem], path: str, method: str, operation: Operation) -> None:
    """Put ``operation`` on ``paths[path]`` next to the path's other methods."""
    method = method.lower()
    if method not in METHODS:
        raise ValueError(f"unsupported HTTP method: {method!r}")
    item = paths.get(path)
    if item is None:
        item = paths[path] = PathItem()
    setattr(item, method, operation)


def _transfer(document: Swagger, api: "Api") -> None:
    operation = api.operation
    add_security(operation, document.security_definitions, api.security)
    if not operation.responses:
        operation.responses = {
            DEFAULT_RESPONSE_CODE: Response(description=DEFAULT_RESPONSE_DESCRIPTION),
        }
    attach_operation(document.paths, api.path, api.method, operation)


def assemble(
    document: Swagger,
    groups: Iterable["Group"],
    apis: Iterable["Api"],
    definitions: Mapping[str, JSONSchema],
) -> Swagger:
    """
    Fill ``document`` from the registered routes.

    Raises:
        SecurityDefinitionNotFoundFault: a route or group requires a
            scheme missing from ``document.security_definitions``.
    """
    document.swagger = SWAGGER_VERSION
    document.paths = {}

    for group in groups:
        document.tags.append(group.tag)
        for api in group.apis:
            add_security(api.operation, document.security_definitions, group.security)
            _transfer(document, api)

    for api in apis:
        _transfer(document, api)

    document.definitions = dict(definitions)
    logger.info(
        "Assembled document with %d paths and %d definitions",
        len(document.paths), len(document.definitions),
    )
    return document


def resolve_location(
    referer: Optional[str],
    host: str,
    path: str,
    doc_path: str,
) -> Tuple[str, str]:
    """
    Externally visible ``(host, basePath)`` of the API.

    A parseable referer is the UI page, so its path minus ``doc_path`` is
    the mount point even behind a path-rewriting proxy. Otherwise the
    request itself is the spec URL.
    """
    location = parse_request_uri(referer or "")
    if location is not None:
        ref_host, ref_path = location
        return ref_host, trim_suffix_slash(ref_path, doc_path)
    return host, trim_suffix_slash(path, connect_path(doc_path, SPEC_NAME))


def _error_response(exc: Fault) -> HTTPResponse:
    return PlainTextResponse(str(exc), status_code=500)


def spec_endpoint(root: "Root", doc_path: str) -> Callable[[Request], Any]:
    """Endpoint serving the JSON document with per-request host and basePath."""

    async def swagger_json(request: Request) -> HTTPResponse:
        try:
            spec = root.get_spec()
        except Fault as exc:
            return _error_response(exc)

        host, base_path = resolve_location(
            request.headers.get("referer"),
            request.url.netloc,
            request.url.path,
            doc_path,
        )
        document = dataclasses.replace(spec, host=host, base_path=base_path)
        return JSONResponse(document.to_dict())

    return swagger_json


def doc_endpoint(root: "Root", doc_path: str) -> Callable[[Request], Any]:
    """Endpoint serving the Swagger UI page."""

    async def swagger_ui(request: Request) -> HTTPResponse:
        ui = root.ui
        info = root.get_raw().info
        title = info.title if info is not None else ""
        if ui.detach_spec:
            return HTMLResponse(render_swagger_ui(title, ui.cdn, hide_top=ui.hide_top))

        try:
            spec = root.get_spec()
        except Fault as exc:
            return _error_response(exc)
        return HTMLResponse(
            render_swagger_ui(title, ui.cdn, spec=spec.to_dict(), doc_path=doc_path, hide_top=True)
        )

    return swagger_ui


__all__ = [
    "SWAGGER_VERSION",
    "DEFAULT_RESPONSE_CODE",
    "DEFAULT_RESPONSE_DESCRIPTION",
    "METHODS",
    "attach_operation",
    "assemble",
    "resolve_location",
    "spec_endpoint",
    "doc_endpoint",
]
