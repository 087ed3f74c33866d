"""YAML loader for catalogs supplied at startup."""

from __future__ import annotations

from datetime import datetime, timedelta
import logging
import math
from typing import Any

import yaml

from incidentsolver.catalog.catalog import Catalog
from incidentsolver.catalog.models import (
    OPEN_EXTERNAL,
    SHOW_FACT,
    SHOW_MAP,
    ActionDescriptor,
    Incident,
    IncidentStatus,
    Intent,
    Line,
    Recommendation,
    Scenario,
    Station,
)

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog file is missing or malformed."""


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise CatalogError(f"Missing required key '{key}' in {context}")
    return mapping[key]


def _require_list(mapping: dict[str, Any], key: str, context: str) -> list[Any]:
    value = _require_key(mapping, key, context)
    if not isinstance(value, list):
        raise CatalogError(f"'{key}' in {context} must be a list")
    return value


def _require_mapping(value: Any, context: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise CatalogError(f"{context} must be a mapping")
    return value


def _parse_enum(enum_type: type, value: Any, context: str) -> Any:
    try:
        return enum_type(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise CatalogError(f"Invalid value {value!r} in {context}; expected one of: {allowed}") from exc


def _parse_float(value: Any, context: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"Expected a number in {context}, got {value!r}") from exc
    if not math.isfinite(number):
        raise CatalogError(f"Expected a finite number in {context}, got {value!r}")
    return number


def _started_at(base_time: datetime, minutes_ago: float, context: str) -> datetime:
    try:
        return base_time - timedelta(minutes=minutes_ago)
    except (OverflowError, ValueError) as exc:
        raise CatalogError(f"started_minutes_ago in {context} is out of range: {minutes_ago!r}") from exc


def _parse_line(entry: Any, index: int) -> Line:
    context = f"lines[{index}]"
    data = _require_mapping(entry, context)
    return Line(id=str(_require_key(data, "id", context)), name=_require_key(data, "name", context))


def _parse_station(entry: Any, index: int) -> Station:
    context = f"stations[{index}]"
    data = _require_mapping(entry, context)
    return Station(
        id=str(_require_key(data, "id", context)),
        name=_require_key(data, "name", context),
        latitude=_parse_float(_require_key(data, "latitude", context), f"{context}.latitude"),
        longitude=_parse_float(_require_key(data, "longitude", context), f"{context}.longitude"),
    )


def _parse_incident(entry: Any, context: str, base_time: datetime) -> Incident:
    data = _require_mapping(entry, context)
    minutes_ago = _parse_float(
        _require_key(data, "started_minutes_ago", context), f"{context}.started_minutes_ago"
    )
    started_at = _started_at(base_time, minutes_ago, context)
    related = data.get("related_station_ids") or []
    if not isinstance(related, list):
        raise CatalogError(f"'related_station_ids' in {context} must be a list")
    line_id = data.get("line_id")
    return Incident(
        id=str(_require_key(data, "id", context)),
        status=_parse_enum(IncidentStatus, _require_key(data, "status", context), f"{context}.status"),
        line_id=str(line_id) if line_id is not None else None,
        affected_text=_require_key(data, "affected_text", context),
        related_station_ids=tuple(str(station_id) for station_id in related),
        summary=_require_key(data, "summary", context),
        started_at=started_at,
        source_url=data.get("source_url"),
    )


def _parse_action(entry: Any, context: str) -> ActionDescriptor:
    if entry == SHOW_MAP:
        return ActionDescriptor.show_map()
    if entry == SHOW_FACT:
        return ActionDescriptor.show_fact()
    if isinstance(entry, dict) and OPEN_EXTERNAL in entry:
        return ActionDescriptor.open_external(str(entry[OPEN_EXTERNAL]))
    raise CatalogError(
        f"Invalid action {entry!r} in {context}; expected '{SHOW_MAP}', '{SHOW_FACT}' "
        f"or a mapping with '{OPEN_EXTERNAL}'"
    )


def _parse_recommendation(entry: Any, index: int) -> Recommendation:
    context = f"recommendations[{index}]"
    data = _require_mapping(entry, context)
    actions = data.get("actions") or []
    if not isinstance(actions, list):
        raise CatalogError(f"'actions' in {context} must be a list")
    return Recommendation(
        id=str(_require_key(data, "id", context)),
        intent=_parse_enum(Intent, _require_key(data, "intent", context), f"{context}.intent"),
        title=_require_key(data, "title", context),
        detail=_require_key(data, "detail", context),
        actions=tuple(_parse_action(action, f"{context}.actions[{pos}]") for pos, action in enumerate(actions)),
    )


def _parse_incidents(section: Any, base_time: datetime) -> dict[Scenario, tuple[Incident, ...]]:
    section = _require_mapping(section, "'incidents'")
    incidents: dict[Scenario, tuple[Incident, ...]] = {}
    for key, entries in section.items():
        scenario = _parse_enum(Scenario, key, "incidents")
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise CatalogError(f"incidents.{key} must be a list")
        incidents[scenario] = tuple(
            _parse_incident(entry, f"incidents.{key}[{index}]", base_time) for index, entry in enumerate(entries)
        )
    return incidents


def load_catalog(path: str, base_time: datetime) -> Catalog:
    """Load a catalog from a YAML file; incident start times are relative to base_time."""
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise CatalogError(f"Catalog file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise CatalogError(f"Catalog file is not valid YAML: {path}") from exc

    if not isinstance(data, dict):
        raise CatalogError("Catalog file must contain a mapping at the top level")

    lines = [_parse_line(entry, index) for index, entry in enumerate(_require_list(data, "lines", "catalog"))]
    stations = [
        _parse_station(entry, index) for index, entry in enumerate(_require_list(data, "stations", "catalog"))
    ]
    incidents = _parse_incidents(_require_key(data, "incidents", "catalog"), base_time)
    recommendations = [
        _parse_recommendation(entry, index)
        for index, entry in enumerate(_require_list(data, "recommendations", "catalog"))
    ]

    catalog = Catalog(lines=lines, stations=stations, incidents=incidents, recommendations=recommendations)
    logger.info("Loaded catalog from %s: %r", path, catalog)
    return catalog


__all__ = ["CatalogError", "load_catalog"]
