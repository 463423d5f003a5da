"""
Declaration-time validity of parameter and schema types.
"""

import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest

from routedoc import tag
from routedoc.kinds import Int64
from routedoc.validator import is_basic_type, is_valid_param, is_valid_schema, is_valid_scheme


@dataclass
class Flat:
    id: int = 0
    names: List[str] = field(default_factory=list)
    at: Optional[datetime.datetime] = None


@dataclass
class Base:
    page: int = 0


@dataclass
class WithEmbedded:
    base: Base = tag(embedded=True, default_factory=Base)
    q: str = ""


@dataclass
class WithNested:
    base: Base = field(default_factory=Base)


@dataclass
class WithMap:
    labels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Owner:
    name: str = ""
    pets: List["Animal"] = field(default_factory=list)


@dataclass
class Animal:
    masters: List[Owner] = field(default_factory=list)
    extra: Any = None


class Opaque:
    pass


@dataclass
class BadKey:
    index: Dict[Base, str] = field(default_factory=dict)


# ============================================================================
# Parameters
# ============================================================================

class TestValidParam:

    @pytest.mark.parametrize("tp", [int, Int64, str, bool, float, datetime.datetime,
                                    List[int], List[List[str]], Optional[int]])
    def test_scalars_and_arrays(self, tp):
        assert is_valid_param(tp, False, False)

    def test_scalar_rejected_when_nested_requested(self):
        assert not is_valid_param(int, True, False)

    def test_struct_fields_become_parameters(self):
        assert is_valid_param(Flat, False, False)
        assert is_valid_param(Flat, True, False)
        assert is_valid_param(Optional[Flat], True, False)

    def test_embedded_struct_flattens(self):
        assert is_valid_param(WithEmbedded, True, False)

    def test_nested_struct_rejected(self):
        assert not is_valid_param(WithNested, True, False)

    def test_maps_and_dynamic_rejected(self):
        assert not is_valid_param(Dict[str, int], False, False)
        assert not is_valid_param(WithMap, True, False)
        assert not is_valid_param(Any, False, False)

    def test_unannotated_class_rejected(self):
        assert not is_valid_param(Opaque, False, False)
        assert not is_valid_param(List[Opaque], False, False)

    def test_array_of_structs_rejected(self):
        assert not is_valid_param(List[Flat], True, False)

    def test_none_rejected(self):
        assert not is_valid_param(None, False, False)


# ============================================================================
# Schemas
# ============================================================================

class TestValidSchema:

    @pytest.mark.parametrize("tp", [Flat, Optional[List[Flat]], List[List[Flat]],
                                    Dict[str, str], List[int], int, Any])
    def test_valid(self, tp):
        assert is_valid_schema(tp)

    def test_recursive_types(self):
        assert is_valid_schema(Owner)
        assert is_valid_schema(List[Animal])

    def test_struct_map_key_rejected(self):
        assert not is_valid_schema(Dict[Base, str])
        assert not is_valid_schema(BadKey)

    def test_dynamic_map_key_rejected(self):
        assert not is_valid_schema(Dict[Any, str])
        assert is_valid_schema(dict)

    def test_unannotated_class_documented_as_string(self):
        assert is_valid_schema(Opaque)

    def test_none_rejected(self):
        assert not is_valid_schema(None)


class TestBasicTypesAndSchemes:

    def test_basic_types(self):
        assert is_basic_type(str)
        assert is_basic_type(Int64)
        assert is_basic_type(datetime.datetime)
        assert not is_basic_type(Base)
        assert not is_basic_type(List[str])
        assert not is_basic_type(Any)
        assert not is_basic_type(Opaque)

    @pytest.mark.parametrize("scheme, valid", [
        ("http", True), ("https", True), ("ws", True), ("wss", True),
        ("ftp", False), ("HTTP", False), ("", False),
    ])
    def test_schemes(self, scheme, valid):
        assert is_valid_scheme(scheme) is valid
