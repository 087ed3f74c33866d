"""Drive the selection store from the terminal and print each screen."""

from __future__ import annotations

import argparse
from dataclasses import replace
import logging
import time

from incidentsolver.app import build_app, configure_logging
from incidentsolver.catalog.models import OPEN_EXTERNAL, Intent, Scenario
from incidentsolver.config import CatalogConfig, load_config
from incidentsolver.logic.derivers import search_stations
from incidentsolver.logic.selection import SelectionStore
from incidentsolver.rendering import (
    ActionFrame,
    FactFrame,
    HomeFrame,
    MapFrame,
    compose_action,
    compose_fact,
    compose_home,
    compose_map,
    save_board_image,
)
from incidentsolver.rendering.composer import NO_INCIDENTS_TEXT

logger = logging.getLogger("incidentsolver.demo")


def _print_home(frame: HomeFrame) -> None:
    print(f"== Home ({frame.scenario.label})")
    print(f"Station: {frame.station_name}")
    if frame.line_name:
        print(f"Line: {frame.line_name}")
    if not frame.cards:
        print(NO_INCIDENTS_TEXT)
    for idx, card in enumerate(frame.cards, start=1):
        print(f"  {idx}. [{card.status.label}] {card.line_name}: {card.affected_text} ({card.elapsed})")


def _print_fact(frame: FactFrame) -> None:
    print("== Fact")
    if frame.card is None:
        print("No incident found")
        return
    print(f"[{frame.card.status.label}] {frame.card.line_name}")
    print(frame.card.affected_text)
    print(f"Started {frame.card.elapsed} ago")
    print(frame.summary)
    if frame.source_url:
        print(f"Source: {frame.source_url}")


def _print_action(frame: ActionFrame) -> None:
    print(f"== Action ({frame.intent.label})")
    if not frame.recommendations:
        print("No suggestions right now")
    for rec in frame.recommendations:
        actions = ", ".join(
            f"open {action.url}" if action.kind == OPEN_EXTERNAL else action.kind for action in rec.actions
        )
        print(f"  - {rec.title}: {rec.detail} [{actions}]")


def _print_map(frame: MapFrame) -> None:
    region = frame.region
    print(f"== Map center=({region.latitude:.2f}, {region.longitude:.2f}) span={region.latitude_delta}")
    for station in frame.pins:
        print(f"  * {station.name} ({station.latitude:.2f}, {station.longitude:.2f})")


def _print_all(store: SelectionStore) -> None:
    _print_home(compose_home(store))
    _print_fact(compose_fact(store))
    _print_action(compose_action(store))
    _print_map(compose_map(store))


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/config.yaml")
    parser.add_argument("--catalog", help="YAML catalog to use instead of the configured one")
    parser.add_argument("--scenario", choices=[scenario.value for scenario in Scenario])
    parser.add_argument("--intent", choices=[intent.value for intent in Intent])
    parser.add_argument("--select", type=int, help="1-based index of the incident to select")
    parser.add_argument("--station", help="Search stations and select the first match")
    parser.add_argument("--output", help="Write a PNG preview of the home board")
    parser.add_argument("--watch", action="store_true", help="Reprint the home board on every clock tick")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.catalog:
        config = replace(config, catalog=CatalogConfig(path=args.catalog))
    configure_logging(config.log)
    app = build_app(config)
    store = app.store

    if args.scenario:
        store.set_scenario(Scenario(args.scenario))
    if args.intent:
        store.set_intent(Intent(args.intent))
    if args.select is not None:
        incidents = store.incidents()
        if not 1 <= args.select <= len(incidents):
            parser.error(f"--select must be between 1 and {len(incidents)}")
        store.select_incident(incidents[args.select - 1])
    if args.station is not None:
        matches = search_stations(app.catalog, args.station)
        if matches:
            store.select_station(matches[0].id)
        else:
            logger.warning("No station matches %r", args.station)

    _print_all(store)

    if args.output:
        path = save_board_image(compose_home(store), args.output)
        print(f"Saved board preview to {path}")

    if args.watch:
        app.clock.subscribe(lambda _: _print_home(compose_home(store)))
        app.clock.start()
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            pass
        finally:
            app.clock.stop()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
