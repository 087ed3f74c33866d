"""Read-only reference data consumed by the selection store."""

from __future__ import annotations

from typing import Iterable, Mapping

from incidentsolver.catalog.models import Incident, Line, Recommendation, Scenario, Station


class Catalog:
    """Immutable collections of lines, stations, incidents and recommendations.

    Incidents are grouped by scenario. Every accessor returns a tuple in the
    order the catalog was built with; lookups by id go through dict indexes.
    """

    def __init__(
        self,
        lines: Iterable[Line],
        stations: Iterable[Station],
        incidents: Mapping[Scenario, Iterable[Incident]],
        recommendations: Iterable[Recommendation],
    ) -> None:
        self._lines = tuple(lines)
        self._stations = tuple(stations)
        self._incidents = {Scenario(key): tuple(value) for key, value in incidents.items()}
        self._recommendations = tuple(recommendations)
        self._lines_by_id = {line.id: line for line in self._lines}
        self._stations_by_id = {station.id: station for station in self._stations}

    def lines_all(self) -> tuple[Line, ...]:
        return self._lines

    def stations_all(self) -> tuple[Station, ...]:
        return self._stations

    def incidents_for(self, scenario: Scenario) -> tuple[Incident, ...]:
        """Return the incident dataset of a scenario (empty when it has none)."""
        return self._incidents.get(scenario, ())

    def recommendations_all(self) -> tuple[Recommendation, ...]:
        return self._recommendations

    def line_by_id(self, line_id: str | None) -> Line | None:
        if line_id is None:
            return None
        return self._lines_by_id.get(line_id)

    def station_by_id(self, station_id: str | None) -> Station | None:
        if station_id is None:
            return None
        return self._stations_by_id.get(station_id)

    def __repr__(self) -> str:
        counts = ", ".join(f"{scenario.value}={len(items)}" for scenario, items in self._incidents.items())
        return (
            f"Catalog(lines={len(self._lines)}, stations={len(self._stations)}, "
            f"incidents=[{counts}], recommendations={len(self._recommendations)})"
        )


__all__ = ["Catalog"]
