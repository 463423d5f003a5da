"""
Swagger 2.0 document model.

Every object is a dataclass; ``to_dict()`` produces the JSON-ready
mapping. Each field declares its JSON key and when it is left out:

- ``empty``: omitted when None, "", False, 0 or an empty container
- ``nil``: omitted only when None (numeric bounds, defaults, examples)
- ``never``: always present
"""

from __future__ import annotations

import dataclasses
import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


def _f(json_name: str, *, omit: str = "empty", default: Any = None, factory: Any = None):
    metadata = {"json": json_name, "omit": omit}
    if factory is not None:
        return dataclasses.field(default_factory=factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


def _encode(value: Any) -> Any:
    if isinstance(value, Model):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_encode(v) for v in value]
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


class Model:
    """Base for document objects."""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            omit = f.metadata.get("omit", "empty")
            if omit == "empty" and _is_empty(value):
                continue
            if omit == "nil" and value is None:
                continue
            out[f.metadata.get("json", f.name)] = _encode(value)
        return out


@dataclass
class Contact(Model):
    """API contact information."""
    name: str = _f("name", default="")
    email: str = _f("email", default="")
    url: str = _f("url", default="")


@dataclass
class License(Model):
    """License information for the API."""
    name: str = _f("name", default="")
    url: str = _f("url", default="")


@dataclass
class Info(Model):
    """Metadata about the API, presented in the UI header."""
    title: str = _f("title", default="")
    description: str = _f("description", default="")
    terms_of_service: str = _f("termsOfService", default="")
    contact: Optional[Contact] = _f("contact")
    license: Optional[License] = _f("license")
    version: str = _f("version", omit="never", default="")


@dataclass
class ExternalDocs(Model):
    """Reference to an external documentation resource."""
    description: str = _f("description", default="")
    url: str = _f("url", omit="never", default="")


@dataclass
class Tag(Model):
    """Document-level tag; one per group."""
    name: str = _f("name", default="")
    description: str = _f("description", default="")
    external_docs: Optional[ExternalDocs] = _f("externalDocs")


@dataclass
class XMLSchema(Model):
    name: str = _f("name", default="")
    namespace: str = _f("namespace", default="")
    prefix: str = _f("prefix", default="")
    attribute: bool = _f("attribute", default=False)
    wrapped: bool = _f("wrapped", default=False)


@dataclass
class JSONSchema(Model):
    """Subset of JSON Schema used by Swagger 2.0 body and response schemas."""
    title: str = _f("title", default="")
    type: str = _f("type", default="")
    items: Optional["JSONSchema"] = _f("items")
    properties: Dict[str, "JSONSchema"] = _f("properties", factory=dict)
    description: str = _f("description", default="")
    default: Any = _f("default", omit="nil")
    example: Any = _f("example", omit="nil")
    read_only: bool = _f("readOnly", default=False)
    ref: str = _f("$ref", default="")
    xml: Optional[XMLSchema] = _f("xml")
    enum: List[Any] = _f("enum", factory=list)
    format: str = _f("format", default="")
    pattern: str = _f("pattern", default="")
    minimum: Optional[float] = _f("minimum", omit="nil")
    maximum: Optional[float] = _f("maximum", omit="nil")
    min_length: Optional[int] = _f("minLength", omit="nil")
    max_length: Optional[int] = _f("maxLength", omit="nil")
    required: List[str] = _f("required", factory=list)
    additional_properties: Optional["JSONSchema"] = _f("additionalProperties")

    def latest(self) -> "JSONSchema":
        """Innermost item schema of a (possibly nested) array schema."""
        if self.items is not None:
            return self.items.latest()
        return self


@dataclass
class Items(Model):
    """Item descriptor of an array-valued non-body parameter or header."""
    type: str = _f("type", default="")
    format: str = _f("format", default="")
    items: Optional["Items"] = _f("items")
    collection_format: str = _f("collectionFormat", default="")
    default: Any = _f("default", omit="nil")
    maximum: Optional[float] = _f("maximum", omit="nil")
    minimum: Optional[float] = _f("minimum", omit="nil")
    max_length: Optional[int] = _f("maxLength", omit="nil")
    min_length: Optional[int] = _f("minLength", omit="nil")
    pattern: str = _f("pattern", default="")
    enum: List[Any] = _f("enum", factory=list)

    def latest(self) -> "Items":
        """Innermost item descriptor of a nested array."""
        if self.items is not None:
            return self.items.latest()
        return self


@dataclass
class Parameter(Model):
    """
    A single operation parameter.

    Body parameters carry ``schema``; every other placement carries a
    primitive ``type``/``format`` (or ``items`` for arrays).
    """
    name: str = _f("name", omit="never", default="")
    in_: str = _f("in", omit="never", default="")
    description: str = _f("description", default="")
    required: bool = _f("required", omit="never", default=False)
    schema: Optional[JSONSchema] = _f("schema")
    type: str = _f("type", default="")
    format: str = _f("format", default="")
    allow_empty_value: bool = _f("allowEmptyValue", default=False)
    items: Optional[Items] = _f("items")
    collection_format: str = _f("collectionFormat", default="")
    default: Any = _f("default", omit="nil")
    maximum: Optional[float] = _f("maximum", omit="nil")
    minimum: Optional[float] = _f("minimum", omit="nil")
    max_length: Optional[int] = _f("maxLength", omit="nil")
    min_length: Optional[int] = _f("minLength", omit="nil")
    pattern: str = _f("pattern", default="")
    enum: List[Any] = _f("enum", factory=list)


@dataclass
class Header(Model):
    """A response header."""
    description: str = _f("description", default="")
    type: str = _f("type", default="")
    format: str = _f("format", default="")
    items: Optional[Items] = _f("items")
    collection_format: str = _f("collectionFormat", default="")
    default: Any = _f("default", omit="nil")
    maximum: Optional[float] = _f("maximum", omit="nil")
    minimum: Optional[float] = _f("minimum", omit="nil")
    max_length: Optional[int] = _f("maxLength", omit="nil")
    min_length: Optional[int] = _f("minLength", omit="nil")
    pattern: str = _f("pattern", default="")
    enum: List[Any] = _f("enum", factory=list)


@dataclass
class Response(Model):
    """An operation response, keyed by status code on the operation."""
    description: str = _f("description", default="")
    schema: Optional[JSONSchema] = _f("schema")
    headers: Dict[str, Header] = _f("headers", factory=dict)
    ref: str = _f("$ref", default="")


@dataclass
class Operation(Model):
    """A single API operation on a path."""
    tags: List[str] = _f("tags", factory=list)
    summary: str = _f("summary", default="")
    description: str = _f("description", default="")
    external_docs: Optional[ExternalDocs] = _f("externalDocs")
    operation_id: str = _f("operationId", default="")
    consumes: List[str] = _f("consumes", factory=list)
    produces: List[str] = _f("produces", factory=list)
    parameters: List[Parameter] = _f("parameters", factory=list)
    responses: Dict[str, Response] = _f("responses", factory=dict)
    schemes: List[str] = _f("schemes", factory=list)
    deprecated: bool = _f("deprecated", default=False)
    security: List[Dict[str, List[str]]] = _f("security", factory=list)


@dataclass
class PathItem(Model):
    """Operations available on a single path, one per HTTP method."""
    ref: str = _f("$ref", default="")
    get: Optional[Operation] = _f("get")
    put: Optional[Operation] = _f("put")
    post: Optional[Operation] = _f("post")
    delete: Optional[Operation] = _f("delete")
    options: Optional[Operation] = _f("options")
    head: Optional[Operation] = _f("head")
    patch: Optional[Operation] = _f("patch")
    parameters: List[Parameter] = _f("parameters", factory=list)


@dataclass
class SecurityDefinition(Model):
    """
    A security scheme usable by operations.

    Basic authentication, an API key (header or query), or one of the
    OAuth2 flows (implicit, password, application, accessCode).
    """
    type: str = _f("type", omit="never", default="")
    description: str = _f("description", default="")
    name: str = _f("name", default="")
    in_: str = _f("in", default="")
    flow: str = _f("flow", default="")
    authorization_url: str = _f("authorizationUrl", default="")
    token_url: str = _f("tokenUrl", default="")
    scopes: Dict[str, str] = _f("scopes", factory=dict)


@dataclass
class Swagger(Model):
    """The root document object."""
    swagger: str = _f("swagger", default="")
    info: Optional[Info] = _f("info")
    host: str = _f("host", default="")
    base_path: str = _f("basePath", default="")
    schemes: List[str] = _f("schemes", factory=list)
    consumes: List[str] = _f("consumes", factory=list)
    produces: List[str] = _f("produces", factory=list)
    paths: Dict[str, PathItem] = _f("paths", omit="never", factory=dict)
    definitions: Dict[str, JSONSchema] = _f("definitions", factory=dict)
    parameters: Dict[str, Parameter] = _f("parameters", factory=dict)
    responses: Dict[str, Response] = _f("responses", factory=dict)
    security_definitions: Dict[str, SecurityDefinition] = _f("securityDefinitions", factory=dict)
    tags: List[Tag] = _f("tags", factory=list)
    external_docs: Optional[ExternalDocs] = _f("externalDocs")


__all__ = [
    "Model",
    "Contact",
    "License",
    "Info",
    "ExternalDocs",
    "Tag",
    "XMLSchema",
    "JSONSchema",
    "Items",
    "Parameter",
    "Header",
    "Response",
    "Operation",
    "PathItem",
    "SecurityDefinition",
    "Swagger",
]
