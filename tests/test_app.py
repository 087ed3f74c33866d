from __future__ import annotations

from datetime import datetime, timedelta, timezone
import logging
from pathlib import Path

from incidentsolver.app import HANDLER_NAMES, LOG_FILE_NAME, build_app, configure_logging
from incidentsolver.catalog.models import Intent, Scenario
from incidentsolver.config import AppConfig, CatalogConfig, ClockConfig, LoggingConfig, SelectionConfig
from incidentsolver.data.clock import Clock

BASE = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
EXAMPLE_CATALOG = Path(__file__).resolve().parents[1] / "config" / "catalog.example.yaml"


def _config(tmp_path, catalog_path: str | None = None) -> AppConfig:
    return AppConfig(
        clock=ClockConfig(tick_interval_seconds=60),
        selection=SelectionConfig(initial_scenario=Scenario.DELAY_HEAVY, initial_intent=Intent.DETOUR),
        catalog=CatalogConfig(path=catalog_path),
        log=LoggingConfig(level="DEBUG", log_dir=str(tmp_path / "logs")),
    )


def _stepping_clock() -> Clock:
    readings = {"count": 0}

    def source() -> datetime:
        value = BASE + timedelta(minutes=readings["count"])
        readings["count"] += 1
        return value

    return Clock(time_source=source)


def test_build_app_with_demo_catalog(tmp_path) -> None:
    app = build_app(_config(tmp_path), clock=_stepping_clock())

    assert len(app.catalog.incidents_for(Scenario.NORMAL)) == 3
    assert app.store.active_scenario == Scenario.DELAY_HEAVY
    assert app.store.selected_intent == Intent.DETOUR
    assert app.store.current_time == BASE
    assert app.store.resolved_incident().id == "delay-1"


def test_build_app_with_catalog_file(tmp_path) -> None:
    app = build_app(_config(tmp_path, str(EXAMPLE_CATALOG)), clock=_stepping_clock())

    assert app.store.resolved_incident().id == "hill-delay"
    assert app.store.resolved_incident().started_at == BASE - timedelta(minutes=75)


def test_clock_ticks_reach_store(tmp_path) -> None:
    app = build_app(_config(tmp_path), clock=_stepping_clock())

    timestamp = app.clock.tick_once()

    assert timestamp == BASE + timedelta(minutes=1)
    assert app.store.current_time == timestamp


def test_build_app_default_clock_interval(tmp_path) -> None:
    config = _config(tmp_path)

    app = build_app(config)

    assert app.clock.interval_seconds == config.clock.tick_interval_seconds


def test_configure_logging_creates_log_file(tmp_path) -> None:
    root = logging.getLogger()
    previous_level = root.level
    previous_handlers = list(root.handlers)
    config = _config(tmp_path).log

    try:
        configure_logging(config)
        logging.getLogger("incidentsolver.test").debug("hello")
        assert root.level == logging.DEBUG
    finally:
        for handler in list(root.handlers):
            if handler not in previous_handlers:
                handler.close()
                root.removeHandler(handler)
        root.setLevel(previous_level)

    log_file = tmp_path / "logs" / LOG_FILE_NAME
    assert log_file.exists()
    assert "hello" in log_file.read_text(encoding="utf-8")


def test_configure_logging_twice_logs_once(tmp_path) -> None:
    root = logging.getLogger()
    previous_level = root.level
    previous_handlers = list(root.handlers)
    config = _config(tmp_path).log

    try:
        configure_logging(config)
        configure_logging(config)
        installed = [handler for handler in root.handlers if handler.get_name() in HANDLER_NAMES]
        logging.getLogger("incidentsolver.test").info("once")
        assert len(installed) == 2
    finally:
        for handler in list(root.handlers):
            if handler not in previous_handlers:
                handler.close()
                root.removeHandler(handler)
        root.setLevel(previous_level)

    log_text = (tmp_path / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert log_text.count("once") == 1
