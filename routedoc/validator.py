"""
Declaration-time validity checks.

Parameters outside the body can only describe flat scalars and arrays;
body and response schemas can describe any object graph whose map keys
are scalars. Violations are programmer errors and are turned into
declaration faults by the callers.
"""

from __future__ import annotations

from typing import Any

from .kinds import Kind, element_type, indirect_type, kind_of, map_types, struct_fields

_SCALARS = (Kind.BOOL, Kind.INT, Kind.FLOAT, Kind.STRING)
_SCHEMES = ("http", "https", "ws", "wss")


def is_valid_param(tp: Any, nest: bool, inner: bool) -> bool:
    """
    Report whether ``tp`` can be described as a non-body parameter.

    ``nest`` is set by the ``*_nested`` registration calls, where ``tp``
    must be a struct whose fields become the parameters. ``inner`` is set
    once the walk is below the top level; embedded struct fields keep the
    outer level.
    """
    if tp is None:
        return False
    kind = kind_of(tp)
    if kind in _SCALARS or kind is Kind.TIME:
        return not nest or inner
    if kind is Kind.ARRAY:
        return is_valid_param(element_type(tp), nest, True)
    if kind is Kind.STRUCT and not inner:
        for f in struct_fields(tp):
            embedded = f.embedded and kind_of(f.type) is Kind.STRUCT
            if not is_valid_param(f.type, nest, not embedded):
                return False
        return True
    return False


def is_valid_schema(tp: Any, inner: bool = False, *seen: Any) -> bool:
    """
    Report whether ``tp`` can be described as a body or response schema.

    Examples of valid shapes: ``Pet``, ``Optional[list[Pet]]``,
    ``list[list[Pet]]``, ``dict[str, str]``, ``list[int]``, a struct with
    an ``Any`` field, a class with no annotations (documented as a
    string). Invalid: ``None``, ``dict[Pet, str]``, ``dict[Any, str]``.

    ``seen`` holds the struct types already accepted on the current path,
    so recursive types validate.
    """
    if tp is None:
        return False
    base = indirect_type(tp)
    for pre in seen:
        if base is pre:
            return True

    kind = kind_of(tp)
    if kind in _SCALARS or kind in (Kind.DYNAMIC, Kind.TIME, Kind.UNKNOWN):
        return True
    if kind is Kind.ARRAY:
        return is_valid_schema(element_type(tp), inner, *seen)
    if kind is Kind.MAP:
        key, value = map_types(tp)
        return is_basic_type(key) and is_valid_schema(value, True, *seen)
    if kind is Kind.STRUCT:
        seen = seen + (base,)
        return all(is_valid_schema(f.type, True, *seen) for f in struct_fields(tp))
    return False


def is_basic_type(tp: Any) -> bool:
    """Scalars and timestamps; the only shapes usable as JSON object keys."""
    if tp is None:
        return False
    kind = kind_of(tp)
    return kind in _SCALARS or kind is Kind.TIME


def is_valid_scheme(scheme: str) -> bool:
    return scheme in _SCHEMES


__all__ = [
    "is_valid_param",
    "is_valid_schema",
    "is_basic_type",
    "is_valid_scheme",
]
