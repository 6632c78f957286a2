"""Shared type aliases for the untyped bundle document."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

# Parsed JSON of unknown shape: dict, list, str, int, float, bool or None.
JsonValue = Any

Document = Mapping[str, JsonValue]
ViewRecord = dict[str, JsonValue]
QueryParams = Mapping[str, str]

Predicate = Callable[[Mapping[str, JsonValue], QueryParams], bool]
Projection = Callable[[Mapping[str, JsonValue]], ViewRecord]
