"""
Documented routing on top of Starlette.

``Root`` wraps a Starlette application (or a bare ``Router``). Routes
registered through it are added to the router as usual and return an
``Api`` builder that records the operation's documentation::

    app = Starlette()
    root = Root(app, "/doc", Info(title="Pet Store"))
    root.add_security_api_key("JWT", "JWT Token", SECURITY_IN_HEADER)

    pets = root.group("Pets", "/pets").set_security("JWT")
    pets.get("/{id}", get_pet) \\
        .add_param_path(Int64, "id", "ID of pet") \\
        .add_response(200, "successful operation", Pet, None)

The UI is served at ``/doc`` and the JSON document at
``/doc/swagger.json``. The document is assembled on first request and
the registration state is released afterwards.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import Route, Router

from .assets import SPEC_NAME
from .config import UISetting
from .definitions import DefinitionRegistry
from .faults import (
    InvalidAppFault,
    InvalidBodyFault,
    InvalidGroupNameFault,
    InvalidMethodFault,
    InvalidParamFault,
    InvalidResponseHeaderFault,
    InvalidResponseSchemaFault,
    InvalidSchemeFault,
    MultipleBodyFault,
)
from .generator import build_parameter, build_struct_parameters, generate_headers, rename
from .kinds import Kind, indirect_type, is_annotation, kind_of, type_of
from .models import ExternalDocs, Info, Operation, Parameter, Response, SecurityDefinition, Swagger, Tag
from .security import (
    SECURITY_API_KEY,
    SECURITY_BASIC,
    SECURITY_OAUTH2,
    Requirement,
    set_security,
    set_security_with_scope,
)
from .spec import METHODS, assemble, doc_endpoint, spec_endpoint
from .tags import (
    PARAM_IN_BODY,
    PARAM_IN_FORM_DATA,
    PARAM_IN_HEADER,
    PARAM_IN_PATH,
    PARAM_IN_QUERY,
)
from .utils import Once, connect_path, to_router_path, to_swagger_path
from .validator import is_valid_param, is_valid_schema, is_valid_scheme

logger = logging.getLogger("routedoc.wrapper")

DEFAULT_TITLE = "Project APIs"

Endpoint = Callable[..., Any]


def _router_of(app: Any) -> Router:
    if isinstance(app, Starlette):
        return app.router
    if isinstance(app, Router):
        return app
    raise InvalidAppFault(app)


def _join(prefix: str, path: str) -> str:
    joined = prefix + path
    if not joined.startswith("/"):
        joined = "/" + joined
    return joined


# ============================================================================
# Api
# ============================================================================

class Api:
    """
    Documentation builder for one registered route.

    Every method returns the builder, so calls chain.
    """

    def __init__(self, route: Route, method: str, path: str, definitions: DefinitionRegistry):
        self._route = route
        self.method = method.upper()
        self.path = path
        self.definitions = definitions
        self.security: List[Requirement] = []
        self.operation = Operation()

    # ─── Parameters ──────────────────────────────────────────────────────────

    def _add_params(
        self,
        p: Any,
        placement: str,
        name: str,
        description: str,
        required: bool,
        nest: bool,
    ) -> "Api":
        tp = type_of(p)
        if not is_valid_param(tp, nest, False):
            raise InvalidParamFault(placement, p)
        if kind_of(tp) is Kind.STRUCT:
            build_struct_parameters(self.operation, indirect_type(tp), placement)
        else:
            build_parameter(self.operation, tp, placement, name, description, required)
        return self

    def add_param_path(self, p: Any, name: str, description: str = "") -> "Api":
        return self._add_params(p, PARAM_IN_PATH, name, description, True, False)

    def add_param_path_nested(self, p: Any) -> "Api":
        return self._add_params(p, PARAM_IN_PATH, "", "", True, True)

    def add_param_query(self, p: Any, name: str, description: str = "", required: bool = False) -> "Api":
        return self._add_params(p, PARAM_IN_QUERY, name, description, required, False)

    def add_param_query_nested(self, p: Any) -> "Api":
        return self._add_params(p, PARAM_IN_QUERY, "", "", False, True)

    def add_param_form(self, p: Any, name: str, description: str = "", required: bool = False) -> "Api":
        return self._add_params(p, PARAM_IN_FORM_DATA, name, description, required, False)

    def add_param_form_nested(self, p: Any) -> "Api":
        return self._add_params(p, PARAM_IN_FORM_DATA, "", "", False, True)

    def add_param_header(self, p: Any, name: str, description: str = "", required: bool = False) -> "Api":
        return self._add_params(p, PARAM_IN_HEADER, name, description, required, False)

    def add_param_header_nested(self, p: Any) -> "Api":
        return self._add_params(p, PARAM_IN_HEADER, "", "", False, True)

    def add_param_body(self, p: Any, name: str, description: str = "", required: bool = False) -> "Api":
        """
        Describe the request body.

        ``p`` is a value or an annotation; values contribute examples.

        Raises:
            InvalidBodyFault: ``p`` cannot be described as a schema.
            MultipleBodyFault: the route already has a body parameter.
        """
        tp = type_of(p)
        if not is_valid_schema(tp, False):
            raise InvalidBodyFault(p)
        if any(param.in_ == PARAM_IN_BODY for param in self.operation.parameters):
            raise MultipleBodyFault()

        value = None if is_annotation(p) else p
        self.operation.parameters.append(Parameter(
            name=name,
            in_=PARAM_IN_BODY,
            description=description,
            required=required,
            schema=self.definitions.gen_schema(tp, value),
        ))
        return self

    def add_param_file(self, name: str, description: str = "", required: bool = False) -> "Api":
        self.operation.parameters.append(Parameter(
            name=rename(self.operation, name),
            in_=PARAM_IN_FORM_DATA,
            description=description,
            required=required,
            type="file",
        ))
        return self

    # ─── Responses ───────────────────────────────────────────────────────────

    def add_response(self, code: int, description: str, schema: Any = None, header: Any = None) -> "Api":
        """
        Describe the response for a status code.

        ``schema`` describes the body like :meth:`add_param_body`;
        ``header`` is a struct whose fields are the response headers.
        """
        response = Response(description=description)

        if schema is not None:
            tp = type_of(schema)
            if not is_valid_schema(tp, False):
                raise InvalidResponseSchemaFault(schema)
            response.schema = self.definitions.gen_schema(tp, None if is_annotation(schema) else schema)

        if header is not None:
            tp = type_of(header)
            if not is_valid_param(tp, True, False):
                raise InvalidResponseHeaderFault(header)
            response.headers = generate_headers(tp)

        self.operation.responses[str(code)] = response
        return self

    # ─── Operation ───────────────────────────────────────────────────────────

    def set_request_content_type(self, *types: str) -> "Api":
        self.operation.consumes = list(types)
        return self

    def set_response_content_type(self, *types: str) -> "Api":
        self.operation.produces = list(types)
        return self

    def set_operation_id(self, operation_id: str) -> "Api":
        self.operation.operation_id = operation_id
        return self

    def set_deprecated(self) -> "Api":
        self.operation.deprecated = True
        return self

    def set_description(self, description: str) -> "Api":
        self.operation.description = description
        return self

    def set_external_docs(self, description: str, url: str) -> "Api":
        self.operation.external_docs = ExternalDocs(description=description, url=url)
        return self

    def set_summary(self, summary: str) -> "Api":
        self.operation.summary = summary
        return self

    def set_security(self, *names: str) -> "Api":
        """Require all ``names`` together; repeated calls add alternatives."""
        if names:
            set_security(self.security, *names)
        return self

    def set_security_with_scope(self, *requirements: Mapping[str, Sequence[str]]) -> "Api":
        set_security_with_scope(self.security, *requirements)
        return self

    @property
    def route(self) -> Route:
        return self._route

    def __repr__(self) -> str:
        return f"Api({self.method} {self.path})"


# ============================================================================
# Routers
# ============================================================================

class _DocumentedRouter(ABC):
    """Route registration shared by the root and its groups."""

    def __init__(self, router: Optional[Router], definitions: Optional[DefinitionRegistry]):
        self._router = router
        self._definitions = definitions
        self.apis: List[Api] = []

    @abstractmethod
    def _register(
        self,
        method: str,
        path: str,
        endpoint: Endpoint,
        middleware: Optional[Sequence[Middleware]],
        name: Optional[str],
    ) -> Api:
        ...

    def _append_route(self, method: str, full_path: str, endpoint: Endpoint,
                      middleware: Sequence[Middleware], name: Optional[str]) -> Api:
        route = Route(
            to_router_path(full_path),
            endpoint,
            methods=[method.upper()],
            name=name,
            middleware=list(middleware) or None,
        )
        self._router.routes.append(route)
        api = Api(route, method, to_swagger_path(full_path), self._definitions)
        self.apis.append(api)
        logger.debug("Registered %s %s", api.method, api.path)
        return api

    def add(self, method: str, path: str, endpoint: Endpoint,
            middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> Api:
        if method.lower() not in METHODS:
            raise InvalidMethodFault(method)
        return self._register(method, path, endpoint, middleware, name)

    def get(self, path: str, endpoint: Endpoint,
            middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> Api:
        return self._register("GET", path, endpoint, middleware, name)

    def post(self, path: str, endpoint: Endpoint,
             middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> Api:
        return self._register("POST", path, endpoint, middleware, name)

    def put(self, path: str, endpoint: Endpoint,
            middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> Api:
        return self._register("PUT", path, endpoint, middleware, name)

    def delete(self, path: str, endpoint: Endpoint,
               middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> Api:
        return self._register("DELETE", path, endpoint, middleware, name)

    def options(self, path: str, endpoint: Endpoint,
                middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> Api:
        return self._register("OPTIONS", path, endpoint, middleware, name)

    def head(self, path: str, endpoint: Endpoint,
             middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> Api:
        return self._register("HEAD", path, endpoint, middleware, name)

    def patch(self, path: str, endpoint: Endpoint,
              middleware: Optional[Sequence[Middleware]] = None, name: Optional[str] = None) -> Api:
        return self._register("PATCH", path, endpoint, middleware, name)


class Group(_DocumentedRouter):
    """
    Routes sharing a path prefix, middleware, a document tag and security.

    Group middleware wraps the middleware of each route.
    """

    def __init__(self, name: str, prefix: str, middleware: Sequence[Middleware],
                 router: Router, definitions: DefinitionRegistry):
        super().__init__(router, definitions)
        self.prefix = prefix
        self.middleware = list(middleware)
        self.tag = Tag(name=name)
        self.security: List[Requirement] = []

    def _register(self, method, path, endpoint, middleware, name) -> Api:
        api = self._append_route(
            method, _join(self.prefix, path), endpoint,
            self.middleware + list(middleware or []), name,
        )
        api.operation.tags = [self.tag.name]
        return api

    def set_description(self, description: str) -> "Group":
        self.tag.description = description
        return self

    def set_external_docs(self, description: str, url: str) -> "Group":
        self.tag.external_docs = ExternalDocs(description=description, url=url)
        return self

    def set_security(self, *names: str) -> "Group":
        if names:
            set_security(self.security, *names)
        return self

    def set_security_with_scope(self, *requirements: Mapping[str, Sequence[str]]) -> "Group":
        set_security_with_scope(self.security, *requirements)
        return self

    @property
    def router(self) -> Router:
        """The Starlette router the group's routes are added to."""
        return self._router

    def __repr__(self) -> str:
        return f"Group({self.tag.name!r}, prefix={self.prefix!r})"


class Root(_DocumentedRouter):
    """
    Documented entry point wrapping a Starlette application.

    Args:
        app: ``Starlette`` instance or ``Router``.
        doc_path: Mount path of the UI; the JSON document is served at
            ``{doc_path}/swagger.json``.
        info: Document info; defaults to the title "Project APIs".

    Raises:
        InvalidAppFault: ``app`` is not a Starlette application or router.
    """

    def __init__(self, app: Any, doc_path: str, info: Optional[Info] = None):
        router = _router_of(app)
        super().__init__(router, DefinitionRegistry())
        self._app = app
        self.doc_path = doc_path
        self.groups: List[Group] = []
        self.ui = UISetting()
        self._spec = Swagger(
            info=info if info is not None else Info(title=DEFAULT_TITLE),
        )
        self._once = Once()

        router.routes.append(Route(
            connect_path(doc_path), doc_endpoint(self, doc_path),
            methods=["GET"], include_in_schema=False,
        ))
        router.routes.append(Route(
            connect_path(doc_path, SPEC_NAME), spec_endpoint(self, doc_path),
            methods=["GET"], include_in_schema=False,
        ))

    def _register(self, method, path, endpoint, middleware, name) -> Api:
        return self._append_route(method, _join("", path), endpoint, list(middleware or []), name)

    def group(self, name: str, prefix: str, middleware: Optional[Sequence[Middleware]] = None) -> Group:
        """
        Create a route group documented under the tag ``name``.

        Raises:
            InvalidGroupNameFault: ``name`` is empty.
        """
        if not name:
            raise InvalidGroupNameFault()
        group = Group(name, prefix, middleware or [], self._router, self._definitions)
        self.groups.append(group)
        return group

    # ─── Document settings ───────────────────────────────────────────────────

    def set_request_content_type(self, *types: str) -> "Root":
        self._spec.consumes = list(types)
        return self

    def set_response_content_type(self, *types: str) -> "Root":
        self._spec.produces = list(types)
        return self

    def set_external_docs(self, description: str, url: str) -> "Root":
        self._spec.external_docs = ExternalDocs(description=description, url=url)
        return self

    def _check_security(self, name: str) -> bool:
        if not name:
            return False
        if name in self._spec.security_definitions:
            logger.warning("Security definition %r already registered; ignoring", name)
            return False
        return True

    def add_security_basic(self, name: str, description: str = "") -> "Root":
        if self._check_security(name):
            self._spec.security_definitions[name] = SecurityDefinition(
                type=SECURITY_BASIC,
                description=description,
            )
        return self

    def add_security_api_key(self, name: str, description: str, in_: str) -> "Root":
        if self._check_security(name):
            self._spec.security_definitions[name] = SecurityDefinition(
                type=SECURITY_API_KEY,
                description=description,
                name=name,
                in_=in_,
            )
        return self

    def add_security_oauth2(
        self,
        name: str,
        description: str,
        flow: str,
        authorization_url: str = "",
        token_url: str = "",
        scopes: Optional[Dict[str, str]] = None,
    ) -> "Root":
        if self._check_security(name):
            self._spec.security_definitions[name] = SecurityDefinition(
                type=SECURITY_OAUTH2,
                description=description,
                flow=flow,
                authorization_url=authorization_url,
                token_url=token_url,
                scopes=dict(scopes or {}),
            )
        return self

    def set_ui(self, ui: UISetting) -> "Root":
        self.ui = ui
        return self

    def set_scheme(self, *schemes: str) -> "Root":
        """
        Raises:
            InvalidSchemeFault: a scheme other than http, https, ws or wss.
        """
        for scheme in schemes:
            if not is_valid_scheme(scheme):
                raise InvalidSchemeFault(scheme)
        self._spec.schemes = list(schemes)
        return self

    def get_raw(self) -> Swagger:
        return self._spec

    def set_raw(self, spec: Swagger) -> "Root":
        self._spec = spec
        return self

    @property
    def app(self) -> Any:
        """The wrapped application; ``None`` once the document is assembled."""
        return self._app

    @property
    def definitions(self) -> Optional[DefinitionRegistry]:
        return self._definitions

    # ─── Assembly ────────────────────────────────────────────────────────────

    def gen_spec(self) -> Swagger:
        """Assemble the document from the current registrations."""
        return assemble(self._spec, self.groups, self.apis, self._definitions.schemas())

    def get_spec(self) -> Swagger:
        """
        The assembled document.

        Assembly runs once; its result, or its fault, is returned to every
        caller. The registration state is released afterwards.
        """
        return self._once.do(self._build_once)

    def _build_once(self) -> Swagger:
        try:
            return self.gen_spec()
        except Exception as exc:
            logger.error("Document assembly failed: %s", exc)
            raise
        finally:
            self.clean_up()

    def clean_up(self) -> None:
        self._app = None
        self._router = None
        self._definitions = None
        self.groups = []
        self.apis = []

    def __repr__(self) -> str:
        return f"Root(doc_path={self.doc_path!r})"


__all__ = [
    "DEFAULT_TITLE",
    "Api",
    "Group",
    "Root",
]
