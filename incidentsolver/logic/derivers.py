"""Pure derivations from the catalog and the current selection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from incidentsolver.catalog.catalog import Catalog
from incidentsolver.catalog.models import Incident, Intent, Recommendation, Scenario, Station

UNKNOWN_LINE_NAME = "Unknown line"

DEFAULT_MAP_CENTER = (35.68, 139.76)
DEFAULT_MAP_SPAN = 0.2
FOCUSED_MAP_SPAN = 0.1


@dataclass(frozen=True)
class MapRegion:
    """Visible map area: center coordinates and span in degrees."""

    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float


def incidents_for_scenario(catalog: Catalog, scenario: Scenario) -> tuple[Incident, ...]:
    """Return the incident dataset visible under a scenario."""
    return catalog.incidents_for(scenario)


def selected_incident(catalog: Catalog, scenario: Scenario, incident_id: str | None) -> Incident | None:
    """Resolve the effective incident for a scenario.

    The selected id wins when it exists in the scenario's dataset; otherwise
    the first incident of the dataset is used, or None when it is empty.
    """
    incidents = catalog.incidents_for(scenario)
    if incident_id is not None:
        for incident in incidents:
            if incident.id == incident_id:
                return incident
    return incidents[0] if incidents else None


def recommendations_for_intent(catalog: Catalog, intent: Intent) -> tuple[Recommendation, ...]:
    """Filter recommendations by intent, keeping catalog order."""
    return tuple(rec for rec in catalog.recommendations_all() if rec.intent == intent)


def elapsed_minutes(started_at: datetime, now: datetime) -> int:
    """Whole minutes since started_at; clamped to zero when now is earlier."""
    seconds = (now - started_at).total_seconds()
    return max(int(seconds // 60), 0)


def elapsed_label(started_at: datetime, now: datetime) -> str:
    total_minutes = elapsed_minutes(started_at, now)
    hours, minutes = divmod(total_minutes, 60)
    if hours >= 1:
        return f"{hours} hours {minutes} minutes"
    return f"{minutes} minutes"


def line_name_for(catalog: Catalog, incident: Incident) -> str:
    line = catalog.line_by_id(incident.line_id)
    if line is None:
        return UNKNOWN_LINE_NAME
    return line.name


def search_stations(catalog: Catalog, query: str) -> tuple[Station, ...]:
    """Case-insensitive substring search on station names; blank returns all."""
    needle = query.strip().casefold()
    if not needle:
        return catalog.stations_all()
    return tuple(station for station in catalog.stations_all() if needle in station.name.casefold())


def related_stations(catalog: Catalog, incident: Incident | None) -> tuple[Station, ...]:
    """Stations referenced by an incident, in catalog order."""
    if incident is None:
        return ()
    related_ids = set(incident.related_station_ids)
    return tuple(station for station in catalog.stations_all() if station.id in related_ids)


def map_region(stations: Sequence[Station]) -> MapRegion:
    if stations:
        first = stations[0]
        return MapRegion(first.latitude, first.longitude, FOCUSED_MAP_SPAN, FOCUSED_MAP_SPAN)
    latitude, longitude = DEFAULT_MAP_CENTER
    return MapRegion(latitude, longitude, DEFAULT_MAP_SPAN, DEFAULT_MAP_SPAN)


__all__ = [
    "DEFAULT_MAP_CENTER",
    "UNKNOWN_LINE_NAME",
    "MapRegion",
    "elapsed_label",
    "elapsed_minutes",
    "incidents_for_scenario",
    "line_name_for",
    "map_region",
    "recommendations_for_intent",
    "related_stations",
    "search_stations",
    "selected_incident",
]
