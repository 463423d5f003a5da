"""
Routedoc faults - structured error types.

Two tiers:
- Declaration faults: programmer errors detected while routes are being
  documented (invalid parameter types, duplicate body parameters, ...).
  They are raised at the call site, before any document exists.
- Security faults: unresolvable security scheme names, detected while the
  document is assembled.

Lenient cases (malformed enum/default tokens, unknown tag directives)
never produce a fault.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class Severity(str, Enum):
    """Fault severity levels."""
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class FaultDomain:
    """
    Fault domains (taxonomy).

    Identifies the functional area where a fault occurred.
    """

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.value = name
        self.description = description

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FaultDomain(name='{self.name}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FaultDomain):
            return self.name == other.name
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(self.name)


FaultDomain.DECLARATION = FaultDomain("declaration", "Route documentation declaration errors")
FaultDomain.SECURITY = FaultDomain("security", "Security definition errors")


DOMAIN_DEFAULTS = {
    FaultDomain.DECLARATION: Severity.FATAL,
    FaultDomain.SECURITY: Severity.ERROR,
}


class Fault(Exception):
    """
    Base fault class - structured, typed fault object.

    Attributes:
        code: Stable machine-readable identifier (e.g., "INVALID_PARAM")
        message: Human-readable summary
        domain: Fault domain
        severity: Fault severity
        metadata: Additional context data
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        domain: FaultDomain,
        severity: Optional[Severity] = None,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.domain = domain
        self.severity = severity or DOMAIN_DEFAULTS.get(domain, Severity.ERROR)
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"Fault(code={self.code!r}, domain={self.domain.value}, "
            f"severity={self.severity.value})"
        )


# ============================================================================
# DECLARATION Faults
# ============================================================================

class DeclarationFault(Fault):
    """Base class for declaration-time programmer errors."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.DECLARATION,
            metadata=metadata,
        )


class InvalidAppFault(DeclarationFault):
    """The object handed to Root is not a Starlette app or router."""

    def __init__(self, app: Any):
        super().__init__(
            code="INVALID_APP",
            message=f"invalid application instance: {app!r}",
        )


class InvalidGroupNameFault(DeclarationFault):
    """Groups need a non-empty name, it becomes a document tag."""

    def __init__(self):
        super().__init__(
            code="INVALID_GROUP_NAME",
            message="invalid name of group",
        )


class InvalidParamFault(DeclarationFault):
    """A non-body parameter cannot be described by the given type."""

    def __init__(self, placement: str, tp: Any):
        super().__init__(
            code="INVALID_PARAM",
            message=f"invalid {placement} param: {tp!r}",
            metadata={"in": placement},
        )


class NestedParamFault(DeclarationFault):
    """A struct field that is not embedded was found in a flattened param."""

    def __init__(self, placement: str, field_name: str):
        super().__init__(
            code="NESTED_PARAM",
            message=f"nested struct field '{field_name}' is not allowed in {placement} params",
            metadata={"in": placement, "field": field_name},
        )


class InvalidBodyFault(DeclarationFault):
    """A body parameter cannot be described by the given type."""

    def __init__(self, tp: Any):
        super().__init__(
            code="INVALID_BODY",
            message=f"invalid body parameter: {tp!r}",
        )


class MultipleBodyFault(DeclarationFault):
    """An operation may carry at most one body parameter."""

    def __init__(self):
        super().__init__(
            code="MULTIPLE_BODY",
            message="multiple body parameters are not allowed",
        )


class InvalidResponseSchemaFault(DeclarationFault):
    """A response schema cannot be described by the given type."""

    def __init__(self, tp: Any):
        super().__init__(
            code="INVALID_RESPONSE_SCHEMA",
            message=f"invalid response schema: {tp!r}",
        )


class InvalidResponseHeaderFault(DeclarationFault):
    """Response headers must be a flat struct."""

    def __init__(self, tp: Any):
        super().__init__(
            code="INVALID_RESPONSE_HEADER",
            message=f"invalid response header: {tp!r}",
        )


class InvalidMethodFault(DeclarationFault):
    """Routes are documented only for the Swagger path-item methods."""

    def __init__(self, method: str):
        super().__init__(
            code="INVALID_METHOD",
            message=f"unsupported HTTP method: {method!r}",
            metadata={"method": method},
        )


class InvalidSchemeFault(DeclarationFault):
    """Only http, https, ws and wss are valid protocol schemes."""

    def __init__(self, scheme: str):
        super().__init__(
            code="INVALID_SCHEME",
            message=f"invalid protocol scheme: {scheme!r}",
            metadata={"scheme": scheme},
        )


# ============================================================================
# SECURITY Faults
# ============================================================================

class SecurityFault(Fault):
    """Base class for security definition faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.SECURITY,
            metadata=metadata,
        )


class SecurityDefinitionNotFoundFault(SecurityFault):
    """An operation references a security scheme that was never registered."""

    def __init__(self, name: str):
        super().__init__(
            code="SECURITY_DEFINITION_NOT_FOUND",
            message=f"not found SecurityDefinition with name: {name}",
            metadata={"name": name},
        )


__all__ = [
    "Severity",
    "FaultDomain",
    "Fault",
    "DeclarationFault",
    "InvalidAppFault",
    "InvalidGroupNameFault",
    "InvalidMethodFault",
    "InvalidParamFault",
    "NestedParamFault",
    "InvalidBodyFault",
    "MultipleBodyFault",
    "InvalidResponseSchemaFault",
    "InvalidResponseHeaderFault",
    "InvalidSchemeFault",
    "SecurityFault",
    "SecurityDefinitionNotFoundFault",
]
