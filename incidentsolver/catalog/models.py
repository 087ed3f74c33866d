"""Immutable catalog entities: lines, stations, incidents and recommendations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class IncidentStatus(str, Enum):
    """Operating status reported for an incident."""

    STOPPED = "stopped"
    DELAYED = "delayed"
    CAUTION = "caution"
    NORMAL = "normal"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def color(self) -> tuple[int, int, int]:
        return _STATUS_COLORS[self]


_STATUS_LABELS = {
    IncidentStatus.STOPPED: "Stopped",
    IncidentStatus.DELAYED: "Delayed",
    IncidentStatus.CAUTION: "Caution",
    IncidentStatus.NORMAL: "Normal",
}

_STATUS_COLORS = {
    IncidentStatus.STOPPED: (200, 0, 0),
    IncidentStatus.DELAYED: (230, 140, 0),
    IncidentStatus.CAUTION: (220, 180, 0),
    IncidentStatus.NORMAL: (0, 200, 0),
}


class Intent(str, Enum):
    """What the rider wants to do about an incident."""

    HURRY = "hurry"
    DETOUR = "detour"
    KILL_TIME = "killTime"

    @property
    def label(self) -> str:
        return _INTENT_LABELS[self]


_INTENT_LABELS = {
    Intent.HURRY: "In a hurry",
    Intent.DETOUR: "Take a detour",
    Intent.KILL_TIME: "Kill time",
}


class Scenario(str, Enum):
    """Canned incident dataset shown by the demo."""

    NORMAL = "normal"
    DELAY_HEAVY = "delayHeavy"
    STOPPED_HEAVY = "stoppedHeavy"

    @property
    def label(self) -> str:
        return _SCENARIO_LABELS[self]


_SCENARIO_LABELS = {
    Scenario.NORMAL: "Normal",
    Scenario.DELAY_HEAVY: "Delay heavy",
    Scenario.STOPPED_HEAVY: "Stopped heavy",
}


SHOW_MAP = "show_map"
SHOW_FACT = "show_fact"
OPEN_EXTERNAL = "open_external"


@dataclass(frozen=True)
class ActionDescriptor:
    """Single action button attached to a recommendation."""

    kind: str
    url: str | None = None

    @classmethod
    def show_map(cls) -> ActionDescriptor:
        return cls(SHOW_MAP)

    @classmethod
    def show_fact(cls) -> ActionDescriptor:
        return cls(SHOW_FACT)

    @classmethod
    def open_external(cls, url: str) -> ActionDescriptor:
        return cls(OPEN_EXTERNAL, url)

    @property
    def id(self) -> str:
        if self.kind == OPEN_EXTERNAL:
            return f"external_{self.url}"
        return self.kind


@dataclass(frozen=True)
class Line:
    """Transit line."""

    id: str
    name: str


@dataclass(frozen=True)
class Station:
    """Station with its map coordinates."""

    id: str
    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Incident:
    """Service disruption on a line, owned by one scenario's dataset."""

    id: str
    status: IncidentStatus
    line_id: str | None
    affected_text: str
    related_station_ids: tuple[str, ...]
    summary: str
    started_at: datetime
    source_url: str | None = None


@dataclass(frozen=True)
class Recommendation:
    """Canned suggestion for one intent; actions are in display order."""

    id: str
    intent: Intent
    title: str
    detail: str
    actions: tuple[ActionDescriptor, ...]


__all__ = [
    "OPEN_EXTERNAL",
    "SHOW_FACT",
    "SHOW_MAP",
    "ActionDescriptor",
    "Incident",
    "IncidentStatus",
    "Intent",
    "Line",
    "Recommendation",
    "Scenario",
    "Station",
]
