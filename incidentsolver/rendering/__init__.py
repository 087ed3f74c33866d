"""View models and board preview rendering."""

from incidentsolver.rendering.composer import (
    compose_action,
    compose_board_image,
    compose_fact,
    compose_home,
    compose_map,
    save_board_image,
)
from incidentsolver.rendering.frame_data import (
    ActionFrame,
    FactFrame,
    HomeFrame,
    IncidentCard,
    MapFrame,
    RecommendationCard,
)

__all__ = [
    "ActionFrame",
    "FactFrame",
    "HomeFrame",
    "IncidentCard",
    "MapFrame",
    "RecommendationCard",
    "compose_action",
    "compose_board_image",
    "compose_fact",
    "compose_home",
    "compose_map",
    "save_board_image",
]
