from __future__ import annotations

from datetime import datetime, timedelta, timezone

from incidentsolver.catalog import Catalog, Incident, IncidentStatus, Intent, Scenario, build_demo_catalog
from incidentsolver.logic.derivers import (
    DEFAULT_MAP_CENTER,
    UNKNOWN_LINE_NAME,
    elapsed_label,
    elapsed_minutes,
    incidents_for_scenario,
    line_name_for,
    map_region,
    recommendations_for_intent,
    related_stations,
    search_stations,
    selected_incident,
)
from incidentsolver.logic.selection import SelectionStore

BASE = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
CATALOG = build_demo_catalog(BASE)


def _incident(line_id: str | None, stations: tuple[str, ...] = ()) -> Incident:
    return Incident(
        id="x",
        status=IncidentStatus.NORMAL,
        line_id=line_id,
        affected_text="",
        related_station_ids=stations,
        summary="",
        started_at=BASE,
    )


def test_incidents_for_scenario_matches_catalog() -> None:
    for scenario in Scenario:
        assert incidents_for_scenario(CATALOG, scenario) == CATALOG.incidents_for(scenario)


def test_selected_incident_prefers_id_in_scenario() -> None:
    target = CATALOG.incidents_for(Scenario.NORMAL)[2]

    assert selected_incident(CATALOG, Scenario.NORMAL, target.id) == target


def test_selected_incident_falls_back_to_first() -> None:
    first = CATALOG.incidents_for(Scenario.DELAY_HEAVY)[0]

    assert selected_incident(CATALOG, Scenario.DELAY_HEAVY, None) == first
    assert selected_incident(CATALOG, Scenario.DELAY_HEAVY, "normal-2") == first


def test_selected_incident_empty_dataset() -> None:
    catalog = Catalog(lines=[], stations=[], incidents={}, recommendations=[])

    assert selected_incident(catalog, Scenario.NORMAL, "anything") is None


def test_recommendations_filtered_by_intent_in_order() -> None:
    for intent in Intent:
        result = recommendations_for_intent(CATALOG, intent)
        expected = tuple(rec for rec in CATALOG.recommendations_all() if rec.intent == intent)

        assert result == expected
        assert all(rec.intent == intent for rec in result)
        assert recommendations_for_intent(CATALOG, intent) == result


def test_detour_intent_yields_two_recommendations() -> None:
    store = SelectionStore(CATALOG, now=BASE)
    store.set_intent(Intent.DETOUR)

    result = recommendations_for_intent(CATALOG, store.selected_intent)

    assert [rec.id for rec in result] == ["rec-bayside-route", "rec-bus-transfer"]


def test_recommendations_empty_catalog() -> None:
    catalog = Catalog(lines=[], stations=[], incidents={}, recommendations=[])

    assert recommendations_for_intent(catalog, Intent.HURRY) == ()


def test_elapsed_label_after_tick() -> None:
    store = SelectionStore(CATALOG, now=BASE)
    tick = BASE + timedelta(hours=1)
    store.tick(tick)

    assert elapsed_label(tick - timedelta(seconds=125), store.current_time) == "2 minutes"


def test_elapsed_label_formats() -> None:
    assert elapsed_label(BASE, BASE) == "0 minutes"
    assert elapsed_label(BASE, BASE + timedelta(seconds=59)) == "0 minutes"
    assert elapsed_label(BASE, BASE + timedelta(minutes=59)) == "59 minutes"
    assert elapsed_label(BASE, BASE + timedelta(minutes=60)) == "1 hours 0 minutes"
    assert elapsed_label(BASE, BASE + timedelta(hours=2, minutes=5)) == "2 hours 5 minutes"


def test_elapsed_label_clamps_future_start() -> None:
    assert elapsed_minutes(BASE + timedelta(minutes=3), BASE) == 0
    assert elapsed_label(BASE + timedelta(minutes=3), BASE) == "0 minutes"


def test_elapsed_minutes_monotonic() -> None:
    previous = -1
    for seconds in range(0, 3 * 3600, 17):
        minutes = elapsed_minutes(BASE, BASE + timedelta(seconds=seconds))
        assert minutes >= previous
        assert minutes == seconds // 60
        previous = minutes


def test_line_name_for() -> None:
    incident = CATALOG.incidents_for(Scenario.NORMAL)[0]

    assert line_name_for(CATALOG, incident) == "North Rapid Line"
    assert line_name_for(CATALOG, _incident(None)) == UNKNOWN_LINE_NAME
    assert line_name_for(CATALOG, _incident("line-ghost")) == UNKNOWN_LINE_NAME


def test_search_stations_blank_returns_all() -> None:
    assert search_stations(CATALOG, "") == CATALOG.stations_all()
    assert search_stations(CATALOG, "   ") == CATALOG.stations_all()


def test_search_stations_case_insensitive_substring() -> None:
    names = [station.name for station in search_stations(CATALOG, "HAMA")]

    assert names == ["Kitahama", "Minamihama"]
    assert search_stations(CATALOG, "zzz") == ()


def test_related_stations_in_catalog_order() -> None:
    incident = _incident("line-airport", ("st-higashibata", "st-airport", "st-unknown"))

    names = [station.name for station in related_stations(CATALOG, incident)]

    assert names == ["Airport Gate", "Higashibata"]
    assert related_stations(CATALOG, None) == ()


def test_map_region_centers_on_first_station() -> None:
    stations = related_stations(CATALOG, CATALOG.incidents_for(Scenario.NORMAL)[1])

    region = map_region(stations)

    assert (region.latitude, region.longitude) == (35.69, 139.70)
    assert region.latitude_delta == region.longitude_delta == 0.1


def test_map_region_default_when_empty() -> None:
    region = map_region(())

    assert (region.latitude, region.longitude) == DEFAULT_MAP_CENTER
    assert region.latitude_delta == 0.2
