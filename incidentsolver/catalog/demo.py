"""Built-in demo catalog: six lines, ten stations, three scenarios."""

from __future__ import annotations

from datetime import datetime, timedelta

from incidentsolver.catalog.catalog import Catalog
from incidentsolver.catalog.models import (
    ActionDescriptor,
    Incident,
    IncidentStatus,
    Intent,
    Line,
    Recommendation,
    Scenario,
    Station,
)

LINES = (
    Line("line-north-rapid", "North Rapid Line"),
    Line("line-south-main", "South Main Line"),
    Line("line-central-metro", "Central Metro"),
    Line("line-bayside", "Bayside Liner"),
    Line("line-airport", "Airport Access"),
    Line("line-valley", "Valley Local"),
)

STATIONS = (
    Station("st-kitahama", "Kitahama", 35.68, 139.77),
    Station("st-minamihama", "Minamihama", 35.64, 139.74),
    Station("st-chuo", "Chuo", 35.69, 139.70),
    Station("st-sakuragawa", "Sakuragawa", 35.67, 139.73),
    Station("st-yanagibashi", "Yanagibashi", 35.65, 139.76),
    Station("st-minatomae", "Minatomae", 35.63, 139.78),
    Station("st-airport", "Airport Gate", 35.62, 139.82),
    Station("st-higashibata", "Higashibata", 35.69, 139.83),
    Station("st-nishigaoka", "Nishigaoka", 35.70, 139.68),
    Station("st-tanima", "Tanima", 35.71, 139.65),
)

RECOMMENDATIONS = (
    Recommendation(
        "rec-taxi",
        Intent.HURRY,
        "Switch to a taxi",
        "Taxi rank in front of Kitahama station. Saves 10-15 minutes.",
        (
            ActionDescriptor.open_external("https://example.com/taxi"),
            ActionDescriptor.show_map(),
            ActionDescriptor.show_fact(),
        ),
    ),
    Recommendation(
        "rec-metro-transfer",
        Intent.HURRY,
        "Transfer to the Central Metro",
        "The Central Metro is running, with some delays.",
        (ActionDescriptor.show_map(), ActionDescriptor.show_fact()),
    ),
    Recommendation(
        "rec-bayside-route",
        Intent.DETOUR,
        "Go via the Bayside Liner",
        "About 20 minutes longer but still running. Good chance of a seat.",
        (ActionDescriptor.show_map(), ActionDescriptor.open_external("https://example.com/route")),
    ),
    Recommendation(
        "rec-bus-transfer",
        Intent.DETOUR,
        "Check the substitute bus service",
        "Buses from Minamihama to Minatomae every 10 minutes.",
        (ActionDescriptor.open_external("https://example.com/bus"), ActionDescriptor.show_fact()),
    ),
    Recommendation(
        "rec-station-cafe",
        Intent.KILL_TIME,
        "Wait at the station cafe",
        "Cafe inside the Sakuragawa gates. Free Wi-Fi.",
        (ActionDescriptor.open_external("https://example.com/cafe"),),
    ),
    Recommendation(
        "rec-airport-resume",
        Intent.KILL_TIME,
        "Wait for Airport Access to resume",
        "No estimate for resumption yet. Check back every 30 minutes.",
        (ActionDescriptor.show_fact(),),
    ),
)


def _line(index: int) -> str:
    return LINES[index].id


def _stations(*indexes: int) -> tuple[str, ...]:
    return tuple(STATIONS[index].id for index in indexes)


def _normal_incidents(base: datetime) -> tuple[Incident, ...]:
    return (
        Incident(
            id="normal-1",
            status=IncidentStatus.STOPPED,
            line_id=_line(0),
            affected_text="Suspended between Kitahama and Sakuragawa",
            related_station_ids=_stations(0, 3),
            summary="Part of the North Rapid Line is stopped for a rolling stock inspection.",
            started_at=base - timedelta(minutes=5),
            source_url="https://example.com/stop",
        ),
        Incident(
            id="normal-2",
            status=IncidentStatus.DELAYED,
            line_id=_line(2),
            affected_text="10-15 minute delays between Chuo and Minatomae",
            related_station_ids=_stations(2, 5),
            summary="Delays following a safety check inside the station.",
            started_at=base - timedelta(minutes=40),
            source_url="https://example.com/delay",
        ),
        Incident(
            id="normal-3",
            status=IncidentStatus.CAUTION,
            line_id=_line(4),
            affected_text="Reduced speed due to strong wind",
            related_station_ids=_stations(6, 7),
            summary="Airport Access trains are running at reduced speed in strong wind.",
            started_at=base - timedelta(hours=2),
        ),
    )


def _delay_heavy_incidents(base: datetime) -> tuple[Incident, ...]:
    return (
        Incident(
            id="delay-1",
            status=IncidentStatus.DELAYED,
            line_id=_line(1),
            affected_text="15-25 minute delays between Minamihama and Minatomae",
            related_station_ids=_stations(1, 5),
            summary="Delays are growing after a signal inspection.",
            started_at=base - timedelta(minutes=70),
            source_url="https://example.com/delay-heavy",
        ),
        Incident(
            id="delay-2",
            status=IncidentStatus.DELAYED,
            line_id=_line(3),
            affected_text="Around 10 minutes late on the whole Bayside Liner",
            related_station_ids=_stations(5, 7),
            summary="Crowding on the preceding train is causing delays.",
            started_at=base - timedelta(minutes=25),
        ),
        Incident(
            id="delay-3",
            status=IncidentStatus.CAUTION,
            line_id=_line(5),
            affected_text="Reduced service on the Valley Local",
            related_station_ids=_stations(9),
            summary="Some trains are cancelled due to a rolling stock shortage.",
            started_at=base - timedelta(minutes=110),
            source_url="https://example.com/caution",
        ),
    )


def _stopped_heavy_incidents(base: datetime) -> tuple[Incident, ...]:
    return (
        Incident(
            id="stopped-1",
            status=IncidentStatus.STOPPED,
            line_id=_line(0),
            affected_text="Suspended between Kitahama and Chuo",
            related_station_ids=_stations(0, 2),
            summary="Both directions are stopped after a passenger accident.",
            started_at=base - timedelta(minutes=15),
            source_url="https://example.com/stop-heavy",
        ),
        Incident(
            id="stopped-2",
            status=IncidentStatus.STOPPED,
            line_id=_line(4),
            affected_text="Airport Access suspended on the whole line",
            related_station_ids=_stations(6, 7),
            summary="Service may be suspended all day under a strong wind warning.",
            started_at=base - timedelta(hours=3),
        ),
        Incident(
            id="stopped-3",
            status=IncidentStatus.DELAYED,
            line_id=_line(2),
            affected_text="15 minute delays on the Central Metro",
            related_station_ids=_stations(2),
            summary="Turnback adjustments due to crowding.",
            started_at=base - timedelta(minutes=55),
            source_url="https://example.com/metro",
        ),
    )


def build_demo_catalog(base_time: datetime) -> Catalog:
    """Build the demo catalog with incident start times relative to base_time."""
    return Catalog(
        lines=LINES,
        stations=STATIONS,
        incidents={
            Scenario.NORMAL: _normal_incidents(base_time),
            Scenario.DELAY_HEAVY: _delay_heavy_incidents(base_time),
            Scenario.STOPPED_HEAVY: _stopped_heavy_incidents(base_time),
        },
        recommendations=RECOMMENDATIONS,
    )


__all__ = ["LINES", "RECOMMENDATIONS", "STATIONS", "build_demo_catalog"]
