"""
Type inspection: classification, zero values, deep equality, conversion.
"""

import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

import pytest

from routedoc import tag
from routedoc.kinds import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Kind,
    UInt,
    UInt8,
    UInt64,
    classify,
    converter,
    deep_equal,
    element_type,
    indirect_type,
    indirect_value,
    infer_type,
    is_annotation,
    kind_of,
    map_types,
    parse_int,
    struct_fields,
    type_name,
    type_of,
    zero_value,
)


@dataclass
class Point:
    x: int = 0
    y: int = 0


@dataclass
class Node:
    name: str = ""
    parent: Optional["Node"] = None
    children: List["Node"] = field(default_factory=list)


@dataclass
class Tagged:
    id: Int64 = tag(json="id", default=0)
    _secret: str = ""


class Opaque:
    pass


class Plain:
    name: str
    count: int


# ============================================================================
# Classification
# ============================================================================

class TestClassify:

    @pytest.mark.parametrize("tp, expected", [
        (bool, ("boolean", "boolean")),
        (int, ("integer", "int32")),
        (Int8, ("integer", "int32")),
        (Int16, ("integer", "int32")),
        (Int32, ("integer", "int32")),
        (UInt, ("integer", "int32")),
        (UInt8, ("integer", "int32")),
        (Int64, ("integer", "int64")),
        (UInt64, ("integer", "int64")),
        (Float32, ("number", "float")),
        (Float64, ("number", "double")),
        (float, ("number", "double")),
        (str, ("string", "string")),
        (bytes, ("string", "string")),
        (datetime.datetime, ("string", "date-time")),
        (Point, ("object", "object")),
        (Plain, ("object", "object")),
        (Dict[str, int], ("object", "map")),
        (dict, ("object", "map")),
        (List[int], ("array", "array")),
        (Tuple[int, ...], ("array", "array")),
        (Set[str], ("array", "array")),
        (FrozenSet[str], ("array", "array")),
        (Sequence[Point], ("array", "array")),
        (Any, ("string", "string")),
        (Opaque, ("string", "string")),
    ])
    def test_pairs(self, tp, expected):
        assert classify(tp) == expected

    def test_optional_is_dereferenced(self):
        assert classify(Optional[Int64]) == ("integer", "int64")
        assert classify(Optional[Optional[Point]]) == ("object", "object")
        assert classify(Optional[List[int]]) == ("array", "array")

    def test_none_never_fails(self):
        assert kind_of(None) is Kind.INVALID
        assert classify(None) == ("string", "string")

    def test_user_newtype_uses_supertype(self):
        from typing import NewType
        UserId = NewType("UserId", int)
        assert classify(UserId) == ("integer", "int32")

    def test_kinds(self):
        assert kind_of(Any) is Kind.DYNAMIC
        assert kind_of(object) is Kind.DYNAMIC
        assert kind_of(datetime.datetime) is Kind.TIME
        assert kind_of(Opaque) is Kind.UNKNOWN
        assert kind_of(Node) is Kind.STRUCT

    def test_element_and_map_types(self):
        assert element_type(List[Point]) is Point
        assert element_type(Optional[List[int]]) is int
        assert element_type(list) is Any
        assert map_types(Dict[str, Point]) == (str, Point)
        assert map_types(dict) == (str, Any)

    def test_indirect_type(self):
        assert indirect_type(Optional[Point]) is Point
        assert indirect_type(Int64) is Int64

    def test_type_name(self):
        assert type_name(Point) == "Point"
        assert type_name(Optional[Node]) == "Node"


# ============================================================================
# Struct fields
# ============================================================================

class TestStructFields:

    def test_dataclass_fields_in_order(self):
        fields = struct_fields(Node)
        assert [f.name for f in fields] == ["name", "parent", "children"]
        assert fields[1].type == Optional[Node]

    def test_private_fields_skipped(self):
        assert [f.name for f in struct_fields(Tagged)] == ["id"]

    def test_metadata_carried(self):
        (f,) = struct_fields(Tagged)
        assert f.metadata["json"] == "id"
        assert f.embedded is False

    def test_plain_annotated_class(self):
        assert [f.name for f in struct_fields(Plain)] == ["name", "count"]

    def test_locally_defined_recursive_dataclass(self):
        @dataclass
        class Link:
            value: int = 0
            next: Optional["Link"] = None

        fields = struct_fields(Link)
        assert fields[1].type == Optional[Link]
        assert kind_of(fields[1].type) is Kind.STRUCT

    def test_unresolvable_annotation_is_dynamic(self):
        @dataclass
        class Loose:
            name: str = ""
            owner: Optional["Unimported"] = None  # noqa: F821

        name, owner = struct_fields(Loose)
        assert name.type is str
        assert owner.type is Any
        assert kind_of(owner.type) is Kind.DYNAMIC


# ============================================================================
# Values
# ============================================================================

class TestValues:

    def test_is_annotation(self):
        assert is_annotation(int)
        assert is_annotation(List[int])
        assert is_annotation(Any)
        assert is_annotation(Int64)
        assert not is_annotation(0)
        assert not is_annotation(Point())
        assert not is_annotation([])

    def test_infer_type(self):
        assert infer_type(3) is int
        assert infer_type([Point()]) == List[Point]
        assert infer_type({"a": 1}) == Dict[str, int]
        assert infer_type([]) is list

    def test_type_of(self):
        assert type_of(None) is None
        assert type_of(Point) is Point
        assert type_of(Point(1, 2)) is Point

    def test_zero_values(self):
        assert zero_value(int) == 0
        assert zero_value(float) == 0.0
        assert zero_value(bool) is False
        assert zero_value(str) == ""
        assert zero_value(datetime.datetime) is None
        assert zero_value(List[int]) == []
        assert zero_value(Dict[str, int]) == {}
        assert zero_value(Point) == Point(0, 0)

    def test_zero_struct_leaves_struct_fields_unset(self):
        node = zero_value(Node)
        assert node.name == ""
        assert node.parent is None
        assert node.children == []

    def test_indirect_value_materialises_none(self):
        tp, value = indirect_value(Optional[Point], None)
        assert tp is Point
        assert value == Point(0, 0)


# ============================================================================
# Deep equality
# ============================================================================

class TestDeepEqual:

    def test_equal_structs(self):
        assert deep_equal(Point, Point(1, 2), Point, Point(1, 2))
        assert not deep_equal(Point, Point(1, 2), Point, Point(2, 1))

    def test_different_types(self):
        assert not deep_equal(Point, Point(), Node, Node())

    def test_none_pointer_equals_zero(self):
        assert deep_equal(Node, Node(), Node, zero_value(Node))
        assert deep_equal(Optional[Point], None, Point, Point())

    def test_containers(self):
        a = Node(children=[Node(name="a")])
        b = Node(children=[Node(name="a")])
        c = Node(children=[Node(name="b")])
        assert deep_equal(Node, a, Node, b)
        assert not deep_equal(Node, a, Node, c)

    def test_cycles_terminate(self):
        a = Node(name="x")
        a.children.append(a)
        b = Node(name="x")
        b.children.append(b)
        assert deep_equal(Node, a, Node, b)


# ============================================================================
# Text conversion
# ============================================================================

class TestConverter:

    def test_int(self):
        assert converter(int)("-1") == -1
        assert converter(Int64)("200000") == 200000
        with pytest.raises(ValueError):
            converter(int)("9.9")

    def test_parse_int_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_int("1_000")
        with pytest.raises(ValueError):
            parse_int("")

    def test_float(self):
        assert converter(Float32)("1.5") == 1.5
        assert converter(float)("2") == 2.0

    def test_bool(self):
        convert = converter(bool)
        assert convert("true") is True
        assert convert("F") is False
        with pytest.raises(ValueError):
            convert("yes")

    def test_string_and_time_identity(self):
        assert converter(str)("abc") == "abc"
        assert converter(datetime.datetime)("2020-01-01") == "2020-01-01"

    def test_array_uses_element(self):
        assert converter(List[int])("7") == 7
        assert converter(List[List[str]])("x") == "x"
