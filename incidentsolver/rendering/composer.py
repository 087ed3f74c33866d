"""Frame composers for the incident screens and the board preview image.

Each composer reads the store through a single snapshot.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from incidentsolver.catalog.catalog import Catalog
from incidentsolver.catalog.models import Incident
from incidentsolver.logic.derivers import (
    elapsed_label,
    line_name_for,
    map_region,
    recommendations_for_intent,
    related_stations,
    selected_incident,
)
from incidentsolver.logic.selection import SelectionStore
from incidentsolver.rendering.frame_data import (
    ActionFrame,
    FactFrame,
    HomeFrame,
    IncidentCard,
    MapFrame,
    RecommendationCard,
)

NO_STATION_TEXT = "Not set"
NO_INCIDENTS_TEXT = "No incidents to show right now"

DISPLAY_WIDTH = 192
DISPLAY_HEIGHT = 64
ROW_HEIGHT = 16

DOT_DIAMETER = 6
DOT_RADIUS = DOT_DIAMETER // 2
DOT_LEFT_MARGIN = 5
DOT_CENTER_OFFSET = DOT_LEFT_MARGIN + DOT_RADIUS

TEXT_LEFT_X = 14

COLOR_BACKGROUND = (0, 0, 0)
COLOR_TEXT = (255, 255, 255)
COLOR_HEADER = (136, 136, 136)
COLOR_DIM_TEXT = (48, 48, 48)
COLOR_PLACEHOLDER_DOT = (72, 72, 72)
SEPARATOR_COLOR = (42, 42, 42)

FONT_TEXT = ImageFont.load_default()


def _incident_card(catalog: Catalog, incident: Incident, now: datetime) -> IncidentCard:
    return IncidentCard(
        incident_id=incident.id,
        status=incident.status,
        line_name=line_name_for(catalog, incident),
        affected_text=incident.affected_text,
        elapsed=elapsed_label(incident.started_at, now),
    )


def compose_home(store: SelectionStore) -> HomeFrame:
    """Build the home board from the store's current state."""
    catalog = store.catalog
    state = store.snapshot()
    station = catalog.station_by_id(state.selected_station_id)
    line = catalog.line_by_id(state.selected_line_id)
    return HomeFrame(
        scenario=state.active_scenario,
        station_name=station.name if station else NO_STATION_TEXT,
        line_name=line.name if line else None,
        cards=[
            _incident_card(catalog, incident, state.current_time)
            for incident in catalog.incidents_for(state.active_scenario)
        ],
    )


def compose_fact(store: SelectionStore, incident: Incident | None = None) -> FactFrame:
    """Build the fact sheet for an explicit incident or the resolved one."""
    catalog = store.catalog
    state = store.snapshot()
    target = incident
    if target is None:
        target = selected_incident(catalog, state.active_scenario, state.selected_incident_id)
    if target is None:
        return FactFrame(card=None)
    return FactFrame(
        card=_incident_card(catalog, target, state.current_time),
        summary=target.summary,
        source_url=target.source_url,
    )


def compose_action(store: SelectionStore) -> ActionFrame:
    intent = store.snapshot().selected_intent
    return ActionFrame(
        intent=intent,
        recommendations=[
            RecommendationCard(title=rec.title, detail=rec.detail, actions=rec.actions)
            for rec in recommendations_for_intent(store.catalog, intent)
        ],
    )


def compose_map(store: SelectionStore) -> MapFrame:
    state = store.snapshot()
    incident = selected_incident(store.catalog, state.active_scenario, state.selected_incident_id)
    pins = list(related_stations(store.catalog, incident))
    return MapFrame(pins=pins, region=map_region(pins))


def _draw_dot(draw: ImageDraw.ImageDraw, row_top: int, color: tuple[int, int, int]) -> None:
    dot_top = row_top + (ROW_HEIGHT - DOT_DIAMETER) // 2
    dot_left = DOT_LEFT_MARGIN
    draw.ellipse(
        [dot_left, dot_top, dot_left + DOT_DIAMETER - 1, dot_top + DOT_DIAMETER - 1],
        fill=color,
    )


def _draw_text(draw: ImageDraw.ImageDraw, row_top: int, text: str, color: tuple[int, int, int]) -> None:
    bbox = draw.textbbox((0, 0), text, font=FONT_TEXT)
    text_height = bbox[3] - bbox[1]
    text_y = row_top + (ROW_HEIGHT - text_height) // 2 - bbox[1]
    draw.text((TEXT_LEFT_X, text_y), text, font=FONT_TEXT, fill=color)


def compose_board_image(home: HomeFrame, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> Image.Image:
    """Draw the home board: a header row, then one status-dotted row per incident."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Board size must be positive, got {width}x{height}.")
    if height < 2 * ROW_HEIGHT:
        raise ValueError(f"Board height must be at least {2 * ROW_HEIGHT}, got {height}.")

    image = Image.new("RGB", (width, height), COLOR_BACKGROUND)
    draw = ImageDraw.Draw(image)

    header = home.station_name if home.line_name is None else f"{home.station_name} / {home.line_name}"
    _draw_text(draw, 0, header, COLOR_HEADER)
    draw.line((0, ROW_HEIGHT - 1, width - 1, ROW_HEIGHT - 1), fill=SEPARATOR_COLOR)

    rows = (height - ROW_HEIGHT) // ROW_HEIGHT
    if not home.cards:
        _draw_dot(draw, ROW_HEIGHT, COLOR_PLACEHOLDER_DOT)
        _draw_text(draw, ROW_HEIGHT, NO_INCIDENTS_TEXT, COLOR_DIM_TEXT)
        return image

    for idx, card in enumerate(home.cards[:rows]):
        row_top = ROW_HEIGHT * (idx + 1)
        _draw_dot(draw, row_top, card.status.color)
        _draw_text(draw, row_top, f"{card.line_name}  {card.elapsed}", COLOR_TEXT)

    return image


def save_board_image(
    home: HomeFrame,
    path: str = "preview_output/board.png",
    width: int = DISPLAY_WIDTH,
    height: int = DISPLAY_HEIGHT,
) -> Path:
    """Draw the home board and write it as PNG, creating the parent directory."""
    image = compose_board_image(home, width=width, height=height)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path, format="PNG")
    return output_path


__all__ = [
    "NO_INCIDENTS_TEXT",
    "NO_STATION_TEXT",
    "compose_action",
    "compose_board_image",
    "compose_fact",
    "compose_home",
    "compose_map",
    "save_board_image",
]
