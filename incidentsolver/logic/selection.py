"""Selection store keeping station, line and incident selections consistent."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
import logging
import threading

from incidentsolver.catalog.catalog import Catalog
from incidentsolver.catalog.models import Incident, Intent, Line, Scenario, Station
from incidentsolver.logic.derivers import selected_incident

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionState:
    """Snapshot of the current selections."""

    current_time: datetime
    selected_station_id: str | None = None
    selected_line_id: str | None = None
    selected_incident_id: str | None = None
    selected_intent: Intent = Intent.HURRY
    active_scenario: Scenario = Scenario.NORMAL


class SelectionStore:
    """Single source of truth for what the user is looking at.

    One store is built at startup and handed to whatever presents it.
    Mutators are serialized with a lock so a clock tick never interleaves
    with a user action. Reads return snapshots; callers re-query after
    every mutation or tick instead of caching results.

    Switching scenario keeps the previous selections. Resolving the current
    incident falls back to the first incident of the active scenario when
    the stored id does not belong to it.
    """

    def __init__(
        self,
        catalog: Catalog,
        now: datetime,
        intent: Intent = Intent.HURRY,
        scenario: Scenario = Scenario.NORMAL,
    ) -> None:
        self._catalog = catalog
        self._lock = threading.Lock()
        self._state = SelectionState(current_time=now, selected_intent=intent, active_scenario=scenario)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def snapshot(self) -> SelectionState:
        with self._lock:
            return self._state

    @property
    def selected_station_id(self) -> str | None:
        return self.snapshot().selected_station_id

    @property
    def selected_line_id(self) -> str | None:
        return self.snapshot().selected_line_id

    @property
    def selected_incident_id(self) -> str | None:
        return self.snapshot().selected_incident_id

    @property
    def selected_intent(self) -> Intent:
        return self.snapshot().selected_intent

    @property
    def active_scenario(self) -> Scenario:
        return self.snapshot().active_scenario

    @property
    def current_time(self) -> datetime:
        return self.snapshot().current_time

    def _update(self, **changes) -> None:
        with self._lock:
            self._state = replace(self._state, **changes)

    def select_incident(self, incident: Incident) -> None:
        """Select an incident and move line and station selection onto it."""
        station_id = incident.related_station_ids[0] if incident.related_station_ids else None
        self._update(
            selected_incident_id=incident.id,
            selected_line_id=incident.line_id,
            selected_station_id=station_id,
        )
        logger.debug("Selected incident %s (line=%s, station=%s)", incident.id, incident.line_id, station_id)

    def select_station(self, station_id: str | None) -> None:
        """Select a station without touching line or incident selection."""
        self._update(selected_station_id=station_id)
        logger.debug("Selected station %s", station_id)

    def set_intent(self, intent: Intent) -> None:
        self._update(selected_intent=intent)
        logger.debug("Intent set to %s", intent.value)

    def set_scenario(self, scenario: Scenario) -> None:
        self._update(active_scenario=scenario)
        logger.debug("Scenario set to %s", scenario.value)

    def tick(self, timestamp: datetime) -> None:
        self._update(current_time=timestamp)

    def incidents(self) -> tuple[Incident, ...]:
        """Incident dataset of the active scenario."""
        return self._catalog.incidents_for(self.active_scenario)

    def resolved_incident(self) -> Incident | None:
        state = self.snapshot()
        return selected_incident(self._catalog, state.active_scenario, state.selected_incident_id)

    def resolved_station(self) -> Station | None:
        return self._catalog.station_by_id(self.selected_station_id)

    def resolved_line(self) -> Line | None:
        return self._catalog.line_by_id(self.selected_line_id)


__all__ = ["SelectionState", "SelectionStore"]
