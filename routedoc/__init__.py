"""
Routedoc - Swagger 2.0 documentation for Starlette routes

Routes are registered through a thin wrapper around the application's
router and described as they are declared:
- Parameters: path, query, header and form parameters from scalars,
  arrays or flat structs, request bodies from any object graph
- Schemas: dataclasses become deduplicated ``#/definitions`` entries,
  recursive types included, with examples taken from live values
- Tags: per-field metadata (``routedoc.tag``) for names, bounds, enums,
  defaults, requiredness and XML hints
- Security: basic, API key and OAuth2 schemes, AND/OR requirements
- UI: Swagger UI page and the JSON document served next to the app
"""

__version__ = "0.1.0"

# ============================================================================
# Wrapper
# ============================================================================

from .wrapper import Root, Group, Api, DEFAULT_TITLE
from .nop import NopRoot, NopGroup, NopApi
from .config import UISetting

# ============================================================================
# Document model
# ============================================================================

from .models import (
    Contact,
    License,
    Info,
    ExternalDocs,
    Tag,
    XMLSchema,
    JSONSchema,
    Items,
    Parameter,
    Header,
    Response,
    Operation,
    PathItem,
    SecurityDefinition,
    Swagger,
)

# ============================================================================
# Type model and tags
# ============================================================================

from .kinds import (
    Int8,
    Int16,
    Int32,
    Int64,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Float32,
    Float64,
)
from .tags import (
    tag,
    PARAM_IN_QUERY,
    PARAM_IN_HEADER,
    PARAM_IN_PATH,
    PARAM_IN_FORM_DATA,
    PARAM_IN_BODY,
)
from .security import (
    SECURITY_BASIC,
    SECURITY_OAUTH2,
    SECURITY_API_KEY,
    SECURITY_IN_QUERY,
    SECURITY_IN_HEADER,
    OAUTH2_FLOW_IMPLICIT,
    OAUTH2_FLOW_PASSWORD,
    OAUTH2_FLOW_APPLICATION,
    OAUTH2_FLOW_ACCESS_CODE,
)
from .assets import DEFAULT_CDN, SPEC_NAME
from .spec import SWAGGER_VERSION

# ============================================================================
# Faults
# ============================================================================

from .faults import (
    Fault,
    FaultDomain,
    Severity,
    DeclarationFault,
    InvalidAppFault,
    InvalidGroupNameFault,
    InvalidMethodFault,
    InvalidParamFault,
    NestedParamFault,
    InvalidBodyFault,
    MultipleBodyFault,
    InvalidResponseSchemaFault,
    InvalidResponseHeaderFault,
    InvalidSchemeFault,
    SecurityFault,
    SecurityDefinitionNotFoundFault,
)

__all__ = [
    "__version__",
    # Wrapper
    "Root", "Group", "Api", "DEFAULT_TITLE",
    "NopRoot", "NopGroup", "NopApi",
    "UISetting",
    # Document model
    "Contact", "License", "Info", "ExternalDocs", "Tag", "XMLSchema",
    "JSONSchema", "Items", "Parameter", "Header", "Response", "Operation",
    "PathItem", "SecurityDefinition", "Swagger",
    # Type model and tags
    "Int8", "Int16", "Int32", "Int64",
    "UInt", "UInt8", "UInt16", "UInt32", "UInt64",
    "Float32", "Float64",
    "tag",
    "PARAM_IN_QUERY", "PARAM_IN_HEADER", "PARAM_IN_PATH",
    "PARAM_IN_FORM_DATA", "PARAM_IN_BODY",
    "SECURITY_BASIC", "SECURITY_OAUTH2", "SECURITY_API_KEY",
    "SECURITY_IN_QUERY", "SECURITY_IN_HEADER",
    "OAUTH2_FLOW_IMPLICIT", "OAUTH2_FLOW_PASSWORD",
    "OAUTH2_FLOW_APPLICATION", "OAUTH2_FLOW_ACCESS_CODE",
    "DEFAULT_CDN", "SPEC_NAME", "SWAGGER_VERSION",
    # Faults
    "Fault", "FaultDomain", "Severity",
    "DeclarationFault", "InvalidAppFault", "InvalidGroupNameFault",
    "InvalidParamFault", "NestedParamFault", "InvalidBodyFault",
    "MultipleBodyFault", "InvalidResponseSchemaFault",
    "InvalidResponseHeaderFault", "InvalidMethodFault", "InvalidSchemeFault",
    "SecurityFault", "SecurityDefinitionNotFoundFault",
]
