"""
Definition registry - body and response schemas.

Struct values become named entries under ``#/definitions/``. Entries
are keyed by the struct's class name and deduplicated by structural
equality of the values that produced them, so the same shape reached
from several routes is described once. An entry is registered before
its fields are walked; a field cycling back to a type under
construction therefore resolves to a ``$ref``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from .kinds import (
    Kind,
    classify,
    deep_equal,
    element_type,
    field_value,
    indirect_value,
    infer_type,
    kind_of,
    map_types,
    struct_fields,
    type_name,
    zero_value,
)
from .models import JSONSchema
from .tags import (
    DEF_PREFIX,
    PARAM_IN_BODY,
    apply_child_xml_tags,
    apply_schema_tags,
    apply_xml_tags,
    field_name,
)

logger = logging.getLogger("routedoc.definitions")


@dataclass
class RawDefinition:
    """A registered definition with the value it was derived from."""
    type: Any
    value: Any
    schema: JSONSchema


class DefinitionRegistry:
    """
    Deduplicated, recursion-safe table of named object schemas.

    One registry is shared by every route and group of a root.
    """

    def __init__(self):
        self._entries: Dict[str, RawDefinition] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __getitem__(self, key: str) -> RawDefinition:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def schemas(self) -> Dict[str, JSONSchema]:
        return {key: entry.schema for key, entry in self._entries.items()}

    def get_key(self, tp: Any, value: Any) -> Tuple[bool, str]:
        """
        Find the key for a struct value.

        Returns ``(True, key)`` when an equal value is already registered,
        otherwise ``(False, name)`` with a free name derived from the class.
        """
        for key, entry in self._entries.items():
            if deep_equal(entry.type, entry.value, tp, value):
                return True, key
        name = type_name(tp)
        while name in self._entries:
            name += "_"
        return False, name

    def add_definition(self, tp: Any, value: Any) -> str:
        """Register the schema of a struct value and return its key."""
        tp, value = indirect_value(tp, value)
        exists, key = self.get_key(tp, value)
        if exists:
            return key

        schema = JSONSchema(type="object")
        self._entries[key] = RawDefinition(tp, value, schema)
        logger.debug("Registered definition %r", key)
        self._walk_struct(tp, value, schema)
        return key

    def _walk_struct(self, tp: Any, value: Any, schema: JSONSchema) -> None:
        for f in struct_fields(tp):
            fv = field_value(value, f)
            name, explicit = field_name(f, PARAM_IN_BODY)
            if f.embedded and not explicit and kind_of(f.type) is Kind.STRUCT:
                self._walk_struct(*indirect_value(f.type, fv), schema)
                continue
            if name == "-":
                continue

            prop = self.gen_schema(f.type, fv)
            if prop is None:
                continue
            schema.properties[name] = prop
            rest = apply_xml_tags(prop, f)
            apply_child_xml_tags(prop.items, rest, self.schemas())
            apply_schema_tags(schema, f, name)

    def gen_schema(self, tp: Any, value: Any) -> Optional[JSONSchema]:
        """
        Schema subtree for a value of annotation ``tp``.

        Arrays and maps are described from their first element (a zero
        element when empty); structs become ``$ref`` links; leaves carry
        an ``example`` when their value differs from the zero value.
        """
        if tp is None or kind_of(tp) is Kind.INVALID:
            return None
        tp, value = indirect_value(tp, value)
        if kind_of(tp) is Kind.DYNAMIC and value is not None:
            tp = infer_type(value)

        st, sf = classify(tp)
        schema = JSONSchema()
        if st == "array":
            schema.type = st
            elem_tp = element_type(tp)
            items = list(value)
            if items:
                elem = items[0]
                if kind_of(elem_tp) is Kind.DYNAMIC and elem is not None:
                    elem_tp = infer_type(elem)
            else:
                elem = zero_value(elem_tp)
            schema.items = self.gen_schema(elem_tp, elem)
        elif st == "object" and sf == "map":
            schema.type = st
            _, val_tp = map_types(tp)
            if value:
                elem = next(iter(value.values()))
                if kind_of(val_tp) is Kind.DYNAMIC and elem is not None:
                    val_tp = infer_type(elem)
            else:
                elem = zero_value(val_tp)
            schema.additional_properties = self.gen_schema(val_tp, elem)
        elif st == "object":
            schema.ref = DEF_PREFIX + self.add_definition(tp, value)
        else:
            schema.type = st
            schema.format = sf
            if value is not None and value != zero_value(tp):
                schema.example = value
        return schema


__all__ = [
    "RawDefinition",
    "DefinitionRegistry",
]
