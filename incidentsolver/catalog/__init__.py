"""Static reference data: lines, stations, incidents and recommendations."""

from incidentsolver.catalog.catalog import Catalog
from incidentsolver.catalog.demo import build_demo_catalog
from incidentsolver.catalog.loader import CatalogError, load_catalog
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

__all__ = [
    "ActionDescriptor",
    "Catalog",
    "CatalogError",
    "Incident",
    "IncidentStatus",
    "Intent",
    "Line",
    "Recommendation",
    "Scenario",
    "Station",
    "build_demo_catalog",
    "load_catalog",
]
