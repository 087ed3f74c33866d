"""Assemble catalog, selection store and clock from configuration."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from incidentsolver.catalog import Catalog, build_demo_catalog, load_catalog
from incidentsolver.config import AppConfig, LoggingConfig
from incidentsolver.data.clock import Clock
from incidentsolver.logic.selection import SelectionStore

LOG_FILE_NAME = "incidentsolver.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_NAMES = ("incidentsolver.stream", "incidentsolver.file")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class App:
    """Wired application components."""

    catalog: Catalog
    store: SelectionStore
    clock: Clock


def configure_logging(config: LoggingConfig) -> None:
    """Send log records to stderr and to a file under the configured directory.

    Calling it again replaces the handlers installed by the previous call.
    """
    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
    file_handler.setFormatter(formatter)

    stream_handler.set_name(HANDLER_NAMES[0])
    file_handler.set_name(HANDLER_NAMES[1])

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() in HANDLER_NAMES:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(config.level.upper())
    root.addHandler(stream_handler)
    root.addHandler(file_handler)


def build_app(config: AppConfig, clock: Clock | None = None) -> App:
    """Build the catalog, create the store with its defaults and wire the clock."""
    clock = clock or Clock(interval_seconds=config.clock.tick_interval_seconds)
    now = clock.now()
    if config.catalog.path:
        catalog = load_catalog(config.catalog.path, base_time=now)
    else:
        catalog = build_demo_catalog(now)

    store = SelectionStore(
        catalog,
        now=now,
        intent=config.selection.initial_intent,
        scenario=config.selection.initial_scenario,
    )
    clock.subscribe(store.tick)
    logger.info(
        "App ready: scenario=%s intent=%s %r",
        store.active_scenario.value,
        store.selected_intent.value,
        catalog,
    )
    return App(catalog=catalog, store=store, clock=clock)


__all__ = ["App", "build_app", "configure_logging"]
