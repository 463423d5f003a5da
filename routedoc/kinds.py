"""
Type inspection - classify Python types into Swagger type/format pairs.

Works on type annotations (``int``, ``list[Pet]``, ``Optional[User]``,
dataclasses, ...) and on runtime values. ``Optional[X]`` plays the role
of a pointer: it is dereferenced transparently and ``None`` is
materialised to the zero value of ``X``.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import inspect
import re
import types
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Annotated,
    Any,
    Callable,
    ClassVar,
    Dict,
    List,
    Mapping,
    NewType,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)



# ─── Sized numeric markers ────────────────────────────────────────────────────

Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
UInt = NewType("UInt", int)
UInt8 = NewType("UInt8", int)
UInt16 = NewType("UInt16", int)
UInt32 = NewType("UInt32", int)
UInt64 = NewType("UInt64", int)
Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)

_INT32_TYPES = (int, Int8, Int16, Int32, UInt, UInt8, UInt16, UInt32)
_INT64_TYPES = (Int64, UInt64)
_FLOAT32_TYPES = (Float32,)
_FLOAT64_TYPES = (float, Float64)
_MARKERS = _INT32_TYPES[1:] + _INT64_TYPES + _FLOAT32_TYPES + (Float64,)

_ARRAY_ORIGINS = (
    list, tuple, set, frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
)
_MAP_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


class Kind(str, Enum):
    """Closed set of semantic kinds the generators dispatch on."""
    INVALID = "invalid"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    TIME = "time"
    ARRAY = "array"
    MAP = "map"
    STRUCT = "struct"
    DYNAMIC = "dynamic"
    UNKNOWN = "unknown"


_SCALAR_KINDS = (Kind.BOOL, Kind.INT, Kind.FLOAT, Kind.STRING)


@dataclass
class FieldInfo:
    """
    One field of a struct type.

    Attributes:
        name: Attribute name on the class
        type: Resolved type annotation
        metadata: Tag mapping (json, query, form, xml, swagger, embedded)
    """
    name: str
    type: Any
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def embedded(self) -> bool:
        return bool(self.metadata.get("embedded", False))


# ─── Type helpers ─────────────────────────────────────────────────────────────

def _is_optional(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or (hasattr(types, "UnionType") and origin is types.UnionType)


def indirect_type(tp: Any) -> Any:
    """
    Strip wrappers that do not change the described shape.

    ``Optional[X]`` → ``X`` (any depth), ``Annotated[X, ...]`` → ``X``,
    user ``NewType`` aliases → their supertype. The sized numeric markers
    are kept since they carry the format.
    """
    while True:
        if get_origin(tp) is Annotated:
            tp = get_args(tp)[0]
            continue
        if _is_optional(tp):
            args = [a for a in get_args(tp) if a is not type(None)]
            if len(args) != 1:
                return Any
            tp = args[0]
            continue
        if hasattr(tp, "__supertype__") and tp not in _MARKERS:
            tp = tp.__supertype__
            continue
        return tp


def is_struct(tp: Any) -> bool:
    """Dataclasses and other annotated classes describe objects."""
    if not isinstance(tp, type):
        return False
    if dataclasses.is_dataclass(tp):
        return True
    if issubclass(tp, (Enum, BaseException)) or tp.__module__ == "builtins":
        return False
    return bool(getattr(tp, "__annotations__", None))


def kind_of(tp: Any) -> Kind:
    """Classify an annotation into a semantic kind. Never raises."""
    tp = indirect_type(tp)
    if tp is None or tp is type(None):
        return Kind.INVALID
    if tp is Any or tp is object:
        return Kind.DYNAMIC
    if tp is datetime.datetime:
        return Kind.TIME
    if tp in _INT32_TYPES or tp in _INT64_TYPES:
        return Kind.INT
    if tp in _FLOAT32_TYPES:
        return Kind.FLOAT

    origin = get_origin(tp) or tp
    if origin in _ARRAY_ORIGINS:
        return Kind.ARRAY
    if origin in _MAP_ORIGINS:
        return Kind.MAP

    if isinstance(tp, type):
        if issubclass(tp, bool):
            return Kind.BOOL
        if issubclass(tp, int):
            return Kind.INT
        if issubclass(tp, float):
            return Kind.FLOAT
        if issubclass(tp, (str, bytes)):
            return Kind.STRING
        if is_struct(tp):
            return Kind.STRUCT
    return Kind.UNKNOWN


def is_scalar(tp: Any) -> bool:
    return kind_of(tp) in _SCALAR_KINDS


def classify(tp: Any) -> Tuple[str, str]:
    """Return the Swagger (type, format) pair for an annotation."""
    kind = kind_of(tp)
    tp = indirect_type(tp)
    if kind is Kind.TIME:
        return "string", "date-time"
    if kind is Kind.BOOL:
        return "boolean", "boolean"
    if kind is Kind.INT:
        if tp in _INT64_TYPES:
            return "integer", "int64"
        return "integer", "int32"
    if kind is Kind.FLOAT:
        if tp in _FLOAT32_TYPES:
            return "number", "float"
        return "number", "double"
    if kind is Kind.STRING:
        return "string", "string"
    if kind is Kind.STRUCT:
        return "object", "object"
    if kind is Kind.MAP:
        return "object", "map"
    if kind is Kind.ARRAY:
        return "array", "array"
    return "string", "string"


def element_type(tp: Any) -> Any:
    """Element annotation of an array type; ``Any`` when unparameterised."""
    args = get_args(indirect_type(tp))
    return args[0] if args else Any


def map_types(tp: Any) -> Tuple[Any, Any]:
    """Key and value annotations of a map type; JSON object keys default to ``str``."""
    args = get_args(indirect_type(tp))
    if len(args) == 2:
        return args[0], args[1]
    return str, Any


def type_name(tp: Any) -> str:
    """Declared name of a struct type."""
    return getattr(indirect_type(tp), "__name__", "")


def _resolve_hint(owner: type, hint: Any) -> Any:
    holder = type(owner.__name__, (), {"__annotations__": {"hint": hint}, "__module__": owner.__module__})
    try:
        return get_type_hints(holder, localns={owner.__name__: owner})["hint"]
    except NameError:
        return Any


def _type_hints(tp: type) -> Dict[str, Any]:
    """
    Resolved field annotations of ``tp``.

    The class itself is visible by name so locally defined recursive types
    resolve. When some annotation still names an unknown type, fields are
    resolved one at a time and the unresolvable ones become ``Any``.
    """
    try:
        return get_type_hints(tp, localns={tp.__name__: tp})
    except NameError:
        pass
    hints: Dict[str, Any] = {}
    for klass in reversed(tp.__mro__):
        for name, hint in inspect.get_annotations(klass).items():
            hints[name] = _resolve_hint(klass, hint)
    return hints


def struct_fields(tp: Any) -> List[FieldInfo]:
    """Fields of a struct type in declaration order."""
    tp = indirect_type(tp)
    hints = _type_hints(tp)
    if dataclasses.is_dataclass(tp):
        return [
            FieldInfo(f.name, hints.get(f.name, f.type), f.metadata)
            for f in dataclasses.fields(tp)
            if not f.name.startswith("_")
        ]
    return [
        FieldInfo(name, hint)
        for name, hint in hints.items()
        if not name.startswith("_") and get_origin(hint) is not ClassVar
    ]


# ─── Values ───────────────────────────────────────────────────────────────────

def is_annotation(p: Any) -> bool:
    """Whether ``p`` is a type annotation rather than a runtime value."""
    return (
        isinstance(p, type)
        or p is Any
        or get_origin(p) is not None
        or hasattr(p, "__supertype__")
    )


def infer_type(value: Any) -> Any:
    """Best annotation for a runtime value; containers use their first item."""
    if isinstance(value, (list, tuple, set, frozenset)):
        if not value:
            return list
        return List[infer_type(next(iter(value)))]
    if isinstance(value, dict):
        if not value:
            return dict
        key = next(iter(value))
        return Dict[infer_type(key), infer_type(value[key])]
    return type(value)


def type_of(p: Any) -> Any:
    """Annotation described by a registration argument (type or value)."""
    if p is None:
        return None
    if is_annotation(p):
        return p
    return infer_type(p)


def zero_value(tp: Any) -> Any:
    """
    Zero value of an annotation.

    Struct-typed fields of a zero struct hold ``None`` and are materialised
    lazily, so recursive types have a finite zero value.
    """
    kind = kind_of(tp)
    if kind is Kind.BOOL:
        return False
    if kind is Kind.INT:
        return 0
    if kind is Kind.FLOAT:
        return 0.0
    if kind is Kind.STRING:
        return b"" if indirect_type(tp) is bytes else ""
    if kind is Kind.ARRAY:
        return []
    if kind is Kind.MAP:
        return {}
    if kind is Kind.STRUCT:
        cls = indirect_type(tp)
        obj = object.__new__(cls)
        for f in struct_fields(cls):
            value = None if kind_of(f.type) is Kind.STRUCT else zero_value(f.type)
            object.__setattr__(obj, f.name, value)
        return obj
    return None


def indirect_value(tp: Any, value: Any) -> Tuple[Any, Any]:
    """Dereference ``tp`` and materialise a ``None`` value to its zero value."""
    tp = indirect_type(tp)
    if value is None:
        value = zero_value(tp)
    return tp, value


def field_value(obj: Any, f: FieldInfo) -> Any:
    return getattr(obj, f.name, None)


def deep_equal(tp_a: Any, a: Any, tp_b: Any, b: Any) -> bool:
    """
    Structural equality of two values of the semantic model.

    Types must match after indirection. A ``None`` pointer equals the
    materialised zero value of its type.
    """
    return _deep_equal(tp_a, a, tp_b, b, set())


def _deep_equal(tp_a: Any, a: Any, tp_b: Any, b: Any, seen: set) -> bool:
    tp_a = indirect_type(tp_a)
    tp_b = indirect_type(tp_b)
    if tp_a != tp_b:
        return False
    if a is None and b is None:
        return True
    if a is b:
        return True

    pair = (id(a), id(b))
    if pair in seen:
        return True
    seen.add(pair)

    kind = kind_of(tp_a)
    if a is None:
        a = zero_value(tp_a)
    if b is None:
        b = zero_value(tp_b)

    if kind is Kind.STRUCT:
        if type(a) is not type(b):
            return False
        for f in struct_fields(tp_a):
            if not _deep_equal(f.type, field_value(a, f), f.type, field_value(b, f), seen):
                return False
        return True
    if kind is Kind.ARRAY:
        a, b = list(a), list(b)
        if len(a) != len(b):
            return False
        elem = element_type(tp_a)
        return all(_deep_equal(elem, x, elem, y, seen) for x, y in zip(a, b))
    if kind is Kind.MAP:
        if a.keys() != b.keys():
            return False
        _, elem = map_types(tp_a)
        return all(_deep_equal(elem, a[k], elem, b[k], seen) for k in a)
    return type(a) is type(b) and a == b


# ─── Text conversion ──────────────────────────────────────────────────────────

_INT_RE = re.compile(r"^[+-]?\d+$")
_TRUE = ("1", "t", "T", "TRUE", "true", "True")
_FALSE = ("0", "f", "F", "FALSE", "false", "False")


def parse_int(s: str) -> int:
    if not _INT_RE.match(s):
        raise ValueError(f"invalid integer: {s!r}")
    return int(s, 10)


def _parse_float(s: str) -> float:
    return float(s)


def _parse_bool(s: str) -> bool:
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {s!r}")


def _identity(s: str) -> str:
    return s


def converter(tp: Any) -> Callable[[str], Any]:
    """
    Text → value converter for enum and default tag values.

    Arrays convert with their element converter. Failures raise
    ``ValueError``; callers drop the offending token.
    """
    st, sf = classify(tp)
    if st == "integer":
        return parse_int
    if st == "number":
        return _parse_float
    if st == "boolean":
        return _parse_bool
    if st == "array":
        return converter(element_type(tp))
    return _identity


__all__ = [
    "Int8", "Int16", "Int32", "Int64",
    "UInt", "UInt8", "UInt16", "UInt32", "UInt64",
    "Float32", "Float64",
    "Kind",
    "FieldInfo",
    "indirect_type",
    "is_struct",
    "is_scalar",
    "kind_of",
    "classify",
    "element_type",
    "map_types",
    "type_name",
    "struct_fields",
    "is_annotation",
    "infer_type",
    "type_of",
    "zero_value",
    "indirect_value",
    "field_value",
    "deep_equal",
    "parse_int",
    "converter",
]
