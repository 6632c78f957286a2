"""Per-key view projection for the recognized bundle collections.

Each recognized key maps to a `ShapeSpec`: the array field to extract, the
predicates a record must pass and the projection that flattens it. Every
other key is returned untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from bundle_viewer.errors import ShapeMismatchError
from bundle_viewer.obs.log import get_logger
from bundle_viewer.types import Predicate, Projection, QueryParams, ViewRecord
from bundle_viewer.views.accessors import (
    as_array,
    as_mapping,
    bool_field,
    mapping_field,
    string_field,
    type_name,
)

logger = get_logger("views")

GROUP_KEY = "/v1/group"
PLATFORM_KEY = "/v1/scan/platform"
DOMAIN_KEY = "/v1/domain"
HOST_KEY = "/v1/host"

RESERVED_NAME_PREFIX = "_"


@dataclass(frozen=True, slots=True)
class ShapeSpec:
    """How one recognized key is turned into a list of view records."""

    key: str
    label: str
    collection: str
    predicates: tuple[Predicate, ...] = ()
    projection: Projection | None = None
    # Groups require every element to be an object; other shapes skip strays.
    strict_elements: bool = False


def project(key: str, value: Any, params: QueryParams | None = None) -> Any:
    """Return the view for `key`, or `value` itself for unrecognized keys.

    Raises `ShapeMismatchError` when a recognized key holds a value whose
    structure does not match its shape.
    """

    spec = SHAPES.get(key)
    if spec is None:
        return value
    return project_shape(spec, value, params or {})


def project_shape(spec: ShapeSpec, value: Any, params: QueryParams) -> list[ViewRecord]:
    container = as_mapping(value)
    if container is None:
        detail = f"expected an object, got {type_name(value)}"
        _log_mismatch(spec, detail, value)
        raise ShapeMismatchError(spec.label, detail)

    if spec.collection not in container:
        detail = f"object has no '{spec.collection}' key"
        _log_mismatch(spec, detail, container)
        raise ShapeMismatchError(spec.label, detail)

    items = as_array(container[spec.collection])
    if items is None:
        detail = f"expected '{spec.collection}' to be an array, got {type_name(container[spec.collection])}"
        _log_mismatch(spec, detail, container)
        raise ShapeMismatchError(spec.label, detail)

    results: list[ViewRecord] = []
    for index, item in enumerate(items):
        record = as_mapping(item)
        if record is None:
            if spec.strict_elements:
                detail = f"element {index} of '{spec.collection}' is {type_name(item)}"
                _log_mismatch(spec, detail, container)
                raise ShapeMismatchError(spec.label, detail)
            continue
        if not all(predicate(record, params) for predicate in spec.predicates):
            continue
        results.append(spec.projection(record) if spec.projection else record)
    return results


def _log_mismatch(spec: ShapeSpec, detail: str, value: Any) -> None:
    container = as_mapping(value)
    logger.error(
        "cannot build %s view: %s",
        spec.label,
        detail,
        extra={
            "key": spec.key,
            "observed_type": type_name(value),
            "keys_found": sorted(container.keys()) if container is not None else [],
        },
    )


# Predicates


def exclude_reserved_names(record: Mapping[str, Any], params: QueryParams) -> bool:
    return not string_field(record, "name").startswith(RESERVED_NAME_PREFIX)


def contains_filter(param: str, record_field: str) -> Predicate:
    """Case-insensitive substring match of `record_field` against `param`."""

    def _predicate(record: Mapping[str, Any], params: QueryParams) -> bool:
        wanted = params.get(param) or ""
        if not wanted:
            return True
        return wanted.lower() in string_field(record, record_field).lower()

    return _predicate


def equals_filter(param: str, record_field: str) -> Predicate:
    """Case-insensitive exact match of `record_field` against `param`."""

    def _predicate(record: Mapping[str, Any], params: QueryParams) -> bool:
        wanted = params.get(param) or ""
        if not wanted:
            return True
        return string_field(record, record_field).lower() == wanted.lower()

    return _predicate


def flag_filter(param: str, record_field: str) -> Predicate:
    """Match a boolean field against `"true"` / `"false"`; other values keep all."""

    def _predicate(record: Mapping[str, Any], params: QueryParams) -> bool:
        wanted = params.get(param)
        if wanted == "true":
            return bool_field(record, record_field)
        if wanted == "false":
            return not bool_field(record, record_field)
        return True

    return _predicate


# Projections


def _pick(record: Mapping[str, Any], names: tuple[str, ...]) -> ViewRecord:
    return {name: record.get(name) for name in names}


def _lift_scan_summary(
    record: Mapping[str, Any], view: ViewRecord, fields: tuple[tuple[str, str], ...]
) -> ViewRecord:
    summary = mapping_field(record, "scan_summary")
    if summary is not None:
        for source, target in fields:
            view[target] = summary.get(source)
    return view


def platform_version(record: Mapping[str, Any]) -> str:
    name = record.get("platform")
    if isinstance(name, str):
        if "openshift" in name.lower():
            return string_field(record, "openshift_version")
        return string_field(record, "kube_version")
    return string_field(record, "version")


_PLATFORM_SCAN_FIELDS = (("high", "high"), ("medium", "medium"), ("scanned_at", "scanned_at"))
_HOST_SCAN_FIELDS = (
    ("status", "scan_status"),
    ("high", "high"),
    ("medium", "medium"),
    ("scanned_at", "scanned_at"),
)


def project_platform(record: Mapping[str, Any]) -> ViewRecord:
    view = _pick(record, ("platform", "status"))
    view["version"] = platform_version(record)
    return _lift_scan_summary(record, view, _PLATFORM_SCAN_FIELDS)


def project_domain(record: Mapping[str, Any]) -> ViewRecord:
    return _pick(
        record,
        ("name", "workloads", "running_workloads", "running_pods", "services"),
    )


def project_host(record: Mapping[str, Any]) -> ViewRecord:
    view = _pick(record, ("name", "state", "os", "platform", "containers"))
    return _lift_scan_summary(record, view, _HOST_SCAN_FIELDS)


SHAPES: dict[str, ShapeSpec] = {
    spec.key: spec
    for spec in (
        ShapeSpec(
            key=GROUP_KEY,
            label="group",
            collection="groups",
            predicates=(
                exclude_reserved_names,
                flag_filter("zero_drift", "zero_drift_enabled"),
                contains_filter("domain", "domain"),
                equals_filter("policy_mode", "policy_mode"),
            ),
            strict_elements=True,
        ),
        ShapeSpec(
            key=PLATFORM_KEY,
            label="platform",
            collection="platforms",
            projection=project_platform,
        ),
        ShapeSpec(
            key=DOMAIN_KEY,
            label="domain",
            collection="domains",
            predicates=(exclude_reserved_names, contains_filter("domain", "name")),
            projection=project_domain,
        ),
        # Hosts carry no reserved-name exclusion, unlike groups and domains.
        ShapeSpec(
            key=HOST_KEY,
            label="host",
            collection="hosts",
            predicates=(contains_filter("domain", "name"),),
            projection=project_host,
        ),
    )
}
