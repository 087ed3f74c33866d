"""View-model snapshots for each screen."""

from __future__ import annotations

from dataclasses import dataclass

from incidentsolver.catalog.models import ActionDescriptor, IncidentStatus, Intent, Scenario, Station
from incidentsolver.logic.derivers import MapRegion


@dataclass(frozen=True)
class IncidentCard:
    """Single incident row on the home board."""

    incident_id: str
    status: IncidentStatus
    line_name: str
    affected_text: str
    elapsed: str


@dataclass(frozen=True)
class HomeFrame:
    """Home board: current station/line and the active scenario's incidents."""

    scenario: Scenario
    station_name: str
    line_name: str | None
    cards: list[IncidentCard]  # empty means nothing to report


@dataclass(frozen=True)
class FactFrame:
    """Details of one incident; card is None when no incident is available."""

    card: IncidentCard | None
    summary: str | None = None
    source_url: str | None = None


@dataclass(frozen=True)
class RecommendationCard:
    title: str
    detail: str
    actions: tuple[ActionDescriptor, ...]


@dataclass(frozen=True)
class ActionFrame:
    intent: Intent
    recommendations: list[RecommendationCard]


@dataclass(frozen=True)
class MapFrame:
    pins: list[Station]
    region: MapRegion


__all__ = ["ActionFrame", "FactFrame", "HomeFrame", "IncidentCard", "MapFrame", "RecommendationCard"]
