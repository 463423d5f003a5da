"""
Field tags - per-field annotation mini-language.

Tags live in dataclass field metadata, usually built with :func:`tag`::

    @dataclass
    class Pet:
        id: Int64 = tag(json="id")
        status: str = tag(json="status", swagger="enum(available|pending|sold),desc(pet status)")

Tag keys:
    json     serialization name for path, header and body placements
    query    name for query placement
    form     name for formData placement
    xml      XML name, ``name,attr``, ``outer>inner`` for arrays, ``-`` to skip
    swagger  comma-separated directives: ``desc(..)``, ``min(N)``, ``max(N)``,
             ``minLen(N)``, ``maxLen(N)``, ``allowEmpty``, ``required``,
             ``readOnly``, ``enum(a|b|c)``, ``default(v)``
    embedded marks the field as anonymous: its fields flatten into the parent

A name of exactly ``-`` omits the field.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, Optional, Tuple, Union

from .kinds import FieldInfo, converter, parse_int
from .models import Header, JSONSchema, Parameter, XMLSchema

logger = logging.getLogger("routedoc.tags")

PARAM_IN_QUERY = "query"
PARAM_IN_HEADER = "header"
PARAM_IN_PATH = "path"
PARAM_IN_FORM_DATA = "formData"
PARAM_IN_BODY = "body"

DEF_PREFIX = "#/definitions/"

_XML_SKIP = ("chardata", "cdata", "comment")
_PUSHED_FACETS = ("minimum", "maximum", "min_length", "max_length", "enum", "default")


def tag(
    *,
    json: Optional[str] = None,
    query: Optional[str] = None,
    form: Optional[str] = None,
    xml: Optional[str] = None,
    swagger: Optional[str] = None,
    embedded: bool = False,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
) -> Any:
    """Build a dataclass field carrying documentation tags."""
    metadata: Dict[str, Any] = {}
    for key, value in (("json", json), ("query", query), ("form", form),
                       ("xml", xml), ("swagger", swagger)):
        if value is not None:
            metadata[key] = value
    if embedded:
        metadata["embedded"] = True
    return dataclasses.field(default=default, default_factory=default_factory, metadata=metadata)


# ─── Parsing ──────────────────────────────────────────────────────────────────

def get_tag(f: FieldInfo, tag_name: str, index: int) -> Tuple[bool, str]:
    """
    Report whether the ``index``-th comma segment of a tag exists, and its text.

    An absent tag reads as the empty string, so segment 0 always exists.
    """
    segments = str(f.metadata.get(tag_name, "")).split(",")
    if len(segments) < index + 1:
        return False, ""
    return True, segments[index].strip()


def parse_swagger_tags(f: FieldInfo) -> Dict[str, str]:
    """Split the ``swagger`` tag into a directive → raw value mapping."""
    result: Dict[str, str] = {}
    for entry in str(f.metadata.get("swagger", "")).split(","):
        entry = entry.strip()
        left = entry.find("(")
        right = entry.rfind(")")
        if left > 0 and right > left:
            result[entry[:left]] = entry[left + 1:right]
        else:
            result[entry] = ""
    return result


def field_name(f: FieldInfo, placement: str) -> Tuple[str, bool]:
    """
    Resolve the documented name of a field for a placement.

    Returns ``(name, explicit)``; ``name == "-"`` means the field is omitted.
    """
    name = ""
    if placement == PARAM_IN_QUERY:
        name = str(f.metadata.get("query", ""))
    elif placement == PARAM_IN_FORM_DATA:
        name = str(f.metadata.get("form", ""))
    elif placement in (PARAM_IN_BODY, PARAM_IN_HEADER, PARAM_IN_PATH):
        _, name = get_tag(f, "json", 0)
    if name:
        return name, True
    return f.name, False


# ─── Directives ───────────────────────────────────────────────────────────────

def _float_or_none(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


def _int_or_none(text: str) -> Optional[int]:
    try:
        return parse_int(text)
    except ValueError:
        return None


def _convert_enum(f: FieldInfo, text: str) -> list:
    convert = converter(f.type)
    values = []
    for token in text.split("|"):
        try:
            values.append(convert(token))
        except ValueError:
            logger.warning("Dropping enum value %r of field %r", token, f.name)
    return values


def _apply_facets(target: Union[Parameter, Header, JSONSchema], f: FieldInfo, tags: Dict[str, str]) -> None:
    if "desc" in tags:
        target.description = tags["desc"]
    if "min" in tags:
        value = _float_or_none(tags["min"])
        if value is not None:
            target.minimum = value
    if "max" in tags:
        value = _float_or_none(tags["max"])
        if value is not None:
            target.maximum = value
    if "minLen" in tags:
        value = _int_or_none(tags["minLen"])
        if value is not None:
            target.min_length = value
    if "maxLen" in tags:
        value = _int_or_none(tags["maxLen"])
        if value is not None:
            target.max_length = value
    if "enum" in tags:
        target.enum = _convert_enum(f, tags["enum"])
    if "default" in tags:
        try:
            target.default = converter(f.type)(tags["default"])
        except ValueError:
            logger.warning("Dropping default value %r of field %r", tags["default"], f.name)


def _push_down(target: Union[Parameter, Header, JSONSchema]) -> None:
    """Move element facets of an array to its innermost item descriptor."""
    if target.type != "array" or target.items is None:
        return
    items = target.items.latest()
    for facet in _PUSHED_FACETS:
        setattr(items, facet, getattr(target, facet))
    target.minimum = None
    target.maximum = None
    target.min_length = None
    target.max_length = None
    target.enum = []
    target.default = None


def apply_param_tags(param: Parameter, f: FieldInfo, placement: str) -> None:
    """Apply swagger directives to a non-body parameter."""
    tags = parse_swagger_tags(f)
    _apply_facets(param, f, tags)
    if "allowEmpty" in tags:
        param.allow_empty_value = True
    if "required" in tags or placement == PARAM_IN_PATH:
        param.required = True
    _push_down(param)


def apply_header_tags(header: Header, f: FieldInfo) -> None:
    """Apply swagger directives to a response header."""
    _apply_facets(header, f, parse_swagger_tags(f))
    _push_down(header)


def apply_schema_tags(parent: JSONSchema, f: FieldInfo, name: str) -> None:
    """Apply swagger directives to property ``name`` of ``parent``."""
    prop = parent.properties[name]
    tags = parse_swagger_tags(f)
    _apply_facets(prop, f, tags)
    if "required" in tags:
        parent.required.append(name)
    if "readOnly" in tags:
        prop.read_only = True
    _push_down(prop)


# ─── XML ──────────────────────────────────────────────────────────────────────

def apply_xml_tags(schema: JSONSchema, f: FieldInfo) -> str:
    """
    Apply the ``xml`` tag to a property schema.

    Only fields that carry an ``xml`` tag are touched. Returns the part of
    an ``outer>inner`` name that still has to be applied to array items.
    """
    if "xml" not in f.metadata:
        return ""
    has_option, option = get_tag(f, "xml", 1)
    if has_option and option in _XML_SKIP:
        return ""
    _, name = get_tag(f, "xml", 0)
    if name == "-" or schema.ref:
        return ""
    if not name:
        name = f.name

    rest = ""
    if ">" in name:
        name, rest = name.split(">", 1)

    schema.xml = schema.xml or XMLSchema()
    schema.xml.name = name
    if rest and schema.items is not None:
        schema.xml.wrapped = True
    if option == "attr":
        schema.xml.attribute = True
    return rest


def apply_child_xml_tags(schema: Optional[JSONSchema], rest: str, definitions: Dict[str, JSONSchema]) -> None:
    """
    Name the items of an array schema from the inner part of ``a>b>c``.

    A ``$ref`` item names the referenced definition instead.
    """
    if not rest or schema is None:
        return
    if schema.ref:
        target = definitions.get(schema.ref[len(DEF_PREFIX):])
        if target is not None:
            target.xml = target.xml or XMLSchema()
            target.xml.name = rest
    elif schema.items is None:
        schema.xml = schema.xml or XMLSchema()
        schema.xml.name = rest
    else:
        schema.xml = schema.xml or XMLSchema()
        schema.xml.wrapped = True
        name, _, inner = rest.partition(">")
        schema.xml.name = name
        apply_child_xml_tags(schema.items, inner, definitions)


__all__ = [
    "PARAM_IN_QUERY",
    "PARAM_IN_HEADER",
    "PARAM_IN_PATH",
    "PARAM_IN_FORM_DATA",
    "PARAM_IN_BODY",
    "DEF_PREFIX",
    "tag",
    "get_tag",
    "parse_swagger_tags",
    "field_name",
    "apply_param_tags",
    "apply_header_tags",
    "apply_schema_tags",
    "apply_xml_tags",
    "apply_child_xml_tags",
]
