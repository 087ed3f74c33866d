"""Configuration loader for the Incident Solver demo."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml

from incidentsolver.catalog.models import Intent, Scenario

SCENARIO_ENV_VAR = "INCIDENT_SOLVER_SCENARIO"


@dataclass(frozen=True)
class ClockConfig:
    """Clock tick configuration."""

    tick_interval_seconds: int


@dataclass(frozen=True)
class SelectionConfig:
    """Initial selection state."""

    initial_scenario: Scenario
    initial_intent: Intent


@dataclass(frozen=True)
class CatalogConfig:
    """Where the catalog comes from; no path means the built-in demo data."""

    path: str | None


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    clock: ClockConfig
    selection: SelectionConfig
    catalog: CatalogConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = _require_key(data, key, key)
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def _parse_scenario(value: Any) -> Scenario:
    try:
        return Scenario(value)
    except ValueError as exc:
        raise ValueError(f"Unknown scenario '{value}' in selection config") from exc


def _parse_intent(value: Any) -> Intent:
    try:
        return Intent(value)
    except ValueError as exc:
        raise ValueError(f"Unknown intent '{value}' in selection config") from exc


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    scenario_override = os.environ.get(SCENARIO_ENV_VAR, "")
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    clock_section = _require_section(data, "clock")
    selection_section = _require_section(data, "selection")
    catalog_section = _require_section(data, "catalog")
    logging_section = _require_section(data, "logging")

    interval = _require_key(clock_section, "tick_interval_seconds", "clock")
    if not isinstance(interval, int) or interval <= 0:
        raise ValueError("'tick_interval_seconds' in clock config must be a positive integer")

    clock = ClockConfig(tick_interval_seconds=interval)

    selection = SelectionConfig(
        initial_scenario=_parse_scenario(
            scenario_override or _require_key(selection_section, "initial_scenario", "selection")
        ),
        initial_intent=_parse_intent(_require_key(selection_section, "initial_intent", "selection")),
    )

    catalog = CatalogConfig(path=_require_key(catalog_section, "path", "catalog"))

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(clock=clock, selection=selection, catalog=catalog, log=logging)
