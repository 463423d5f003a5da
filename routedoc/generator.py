"""
Parameter builder - non-body parameters and response headers.

Struct arguments are flattened into one parameter per field. Embedded
struct fields contribute their own fields to the same flat list; any
other struct-typed field cannot be expressed outside the body.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .faults import NestedParamFault
from .kinds import FieldInfo, Kind, classify, element_type, indirect_type, kind_of, struct_fields
from .models import Header, Items, Operation, Parameter
from .tags import (
    PARAM_IN_HEADER,
    PARAM_IN_PATH,
    apply_header_tags,
    apply_param_tags,
    field_name,
)

COLLECTION_FORMAT = "multi"


def generate_items(tp: Any) -> Items:
    """Item descriptor chain for the element annotation of an array."""
    st, sf = classify(tp)
    item = Items(type=st)
    if st == "array":
        item.items = generate_items(element_type(tp))
        item.collection_format = COLLECTION_FORMAT
    else:
        item.format = sf
    return item


def generate_parameter(f: FieldInfo, placement: str) -> Optional[Parameter]:
    """Describe one struct field as a parameter; ``None`` when it is omitted."""
    name, _ = field_name(f, placement)
    if name == "-":
        return None
    st, sf = classify(f.type)
    param = Parameter(name=name, in_=placement, type=st)
    if st == "array":
        param.items = generate_items(element_type(f.type))
        param.collection_format = COLLECTION_FORMAT
    else:
        param.format = sf
    apply_param_tags(param, f, placement)
    return param


def generate_header(f: FieldInfo) -> Optional[Header]:
    name, _ = field_name(f, PARAM_IN_HEADER)
    if name == "-":
        return None
    st, sf = classify(f.type)
    header = Header(type=st)
    if st == "array":
        header.items = generate_items(element_type(f.type))
        header.collection_format = COLLECTION_FORMAT
    else:
        header.format = sf
    apply_header_tags(header, f)
    return header


def generate_headers(tp: Any) -> Dict[str, Header]:
    """Response header map from the fields of a struct annotation."""
    tp = indirect_type(tp)
    if kind_of(tp) is not Kind.STRUCT:
        return {}
    headers: Dict[str, Header] = {}
    for f in struct_fields(tp):
        header = generate_header(f)
        if header is not None:
            name, _ = field_name(f, PARAM_IN_HEADER)
            headers[name] = header
    return headers


def rename(operation: Operation, name: str) -> str:
    """
    Make ``name`` unique among the operation's parameters.

    Appends ``_`` until no parameter carries the name, so the result
    depends on registration order.
    """
    for param in operation.parameters:
        if param.name == name:
            return rename(operation, name + "_")
    return name


def build_struct_parameters(operation: Operation, tp: Any, placement: str) -> List[Parameter]:
    """Flatten the fields of a struct annotation into ``operation``'s parameters."""
    added: List[Parameter] = []
    for f in struct_fields(tp):
        if kind_of(f.type) is Kind.STRUCT:
            if not f.embedded:
                raise NestedParamFault(placement, f.name)
            added.extend(build_struct_parameters(operation, indirect_type(f.type), placement))
            continue
        param = generate_parameter(f, placement)
        if param is None:
            continue
        param.name = rename(operation, param.name)
        operation.parameters.append(param)
        added.append(param)
    return added


def build_parameter(
    operation: Operation,
    tp: Any,
    placement: str,
    name: str,
    description: str,
    required: bool,
) -> Parameter:
    """Describe a single freestanding scalar or array as a parameter."""
    st, sf = classify(tp)
    param = Parameter(
        name=rename(operation, name),
        in_=placement,
        description=description,
        required=required or placement == PARAM_IN_PATH,
        type=st,
    )
    if st == "array":
        param.items = generate_items(element_type(tp))
        param.collection_format = COLLECTION_FORMAT
    else:
        param.format = sf
    operation.parameters.append(param)
    return param


__all__ = [
    "COLLECTION_FORMAT",
    "generate_items",
    "generate_parameter",
    "generate_header",
    "generate_headers",
    "rename",
    "build_struct_parameters",
    "build_parameter",
]
