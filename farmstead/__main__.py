"""Entry point for ``python -m farmstead``.

Runs a headless session: loads the YAML config and the save file (applying
offline catch-up), optionally plants, builds, and harvests, ticks the
simulation at the configured interval, collects production, saves, and
prints a summary.
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import time
from enum import Enum
from typing import TypeVar

from farmstead.catalog.types import BuildingType, CropType, parse_enum
from farmstead.farming.crop import CropState
from farmstead.persistence.store import SaveStore
from farmstead.simulation.config import SimulationConfig
from farmstead.simulation.engine import FarmEngine

E = TypeVar("E", bound=Enum)

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="farmstead",
        description="Farmstead - grid farming and building simulation",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "-s",
        "--save",
        type=pathlib.Path,
        default=pathlib.Path("farmstead_save.yaml"),
        help="Save file to load and update (default: farmstead_save.yaml)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=0,
        help="Number of ticks to run (default: 0)",
    )
    parser.add_argument(
        "--no-sleep",
        action="store_true",
        help="Run ticks back to back instead of waiting tick_interval",
    )
    parser.add_argument(
        "--plant",
        nargs=3,
        action="append",
        default=[],
        metavar=("X", "Y", "CROP"),
        help="Plant CROP at (X, Y); may be repeated",
    )
    parser.add_argument(
        "--build",
        nargs=3,
        action="append",
        default=[],
        metavar=("X", "Y", "BUILDING"),
        help="Place BUILDING with its origin at (X, Y); may be repeated",
    )
    parser.add_argument(
        "--harvest",
        action="store_true",
        help="Harvest every ready tile after ticking",
    )
    parser.add_argument(
        "--collect",
        action="store_true",
        help="Collect accumulated production into the inventory",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Ignore the existing save and start a new farm",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    return parser


def _print_summary(engine: FarmEngine) -> None:
    state = engine.state
    print(f"Grid {state.grid.width}x{state.grid.height}, tick {engine.tick_count}")
    print("Inventory:")
    for resource, amount in sorted(
        state.inventory.balances.items(),
        key=lambda item: item[0].value,
    ):
        print(f"  {resource.value:<8} {amount}")
    print("Production:")
    for production in state.ledger.entries():
        print(
            f"  {production.resource_type.value:<8} "
            f"{production.current_amount:7.2f}/{production.max_capacity} "
            f"@ {production.rate_per_minute:.2f}/min",
        )
    planted = [t for t in state.crops.tiles.values() if t.state is not CropState.EMPTY]
    print(f"Crops planted: {len(planted)}")
    for tile in planted:
        print(
            f"  ({tile.x}, {tile.y}) {tile.crop_type.value} "
            f"{tile.state.value} {tile.growth_progress:.0%}",
        )
    print(f"Buildings: {len(state.yard.placed)}")
    for building in state.yard.buildings():
        print(f"  ({building.x}, {building.y}) {building.building_type.value}")


def _parse_intents(
    parser: argparse.ArgumentParser,
    option: str,
    values: list[list[str]],
    enum_cls: type[E],
) -> list[tuple[int, int, E]]:
    """Convert repeated X Y NAME triples, exiting with a usage error on bad input."""
    intents = []
    for x, y, name in values:
        try:
            intents.append((int(x), int(y), parse_enum(enum_cls, name)))
        except (KeyError, ValueError):
            choices = ", ".join(member.value for member in enum_cls)
            parser.error(
                f"{option} expects integer X Y and one of: {choices} "
                f"(got {x} {y} {name})",
            )
    return intents


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, load the farm, run the session, save."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    plants = _parse_intents(parser, "--plant", args.plant, CropType)
    builds = _parse_intents(parser, "--build", args.build, BuildingType)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    engine = FarmEngine(config=config)
    store = SaveStore(args.save)

    if args.reset:
        store.delete()
    engine.load(store.read())

    for x, y, crop in plants:
        result = engine.plant(x, y, crop)
        if not result.ok:
            print(f"Cannot plant {crop.value} at ({x}, {y}): {result.error.name}")

    for x, y, building in builds:
        engine.start_placement(building)
        result = engine.confirm_placement(x, y)
        if not result.ok:
            engine.cancel_placement()
            print(f"Cannot build {building.value} at ({x}, {y}): {result.error.name}")

    for _ in range(args.ticks):
        if not args.no_sleep:
            time.sleep(config.tick_interval)
        engine.tick(config.tick_interval)

    if args.harvest:
        for tile in list(engine.state.crops.tiles.values()):
            if tile.state is CropState.READY:
                engine.harvest(tile.x, tile.y)

    if args.collect:
        engine.collect_resources()

    store.write(engine.save())
    _print_summary(engine)


if __name__ == "__main__":
    main()
