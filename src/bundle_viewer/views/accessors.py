"""Tolerant accessors over untyped JSON values.

Each accessor returns an empty value instead of raising when the input has
a different type, so per-record fields can be read without type checks.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def as_mapping(value: Any) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) else None


def as_array(value: Any) -> list[Any] | None:
    return value if isinstance(value, list) else None


def as_string(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def as_bool(value: Any, default: bool = False) -> bool:
    return value if isinstance(value, bool) else default


def string_field(record: Mapping[str, Any], name: str) -> str:
    return as_string(record.get(name))


def bool_field(record: Mapping[str, Any], name: str) -> bool:
    return as_bool(record.get(name))


def mapping_field(record: Mapping[str, Any], name: str) -> Mapping[str, Any] | None:
    return as_mapping(record.get(name))


def type_name(value: Any) -> str:
    """JSON-flavoured type name used in mismatch diagnostics."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__
