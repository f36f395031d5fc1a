"""Tests for farmstead.simulation — config loading and the engine API."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from farmstead.catalog.types import BuildingType, CropType, ResourceType
from farmstead.farming.crop import CropState
from farmstead.simulation.config import SimulationConfig
from farmstead.simulation.engine import FarmEngine
from farmstead.simulation.results import ErrorKind, Result
from farmstead.world.occupant import Footprint

if TYPE_CHECKING:
    from conftest import FakeClock


class TestResult:
    """Tests for the Result value."""

    def test_success(self) -> None:
        result = Result.success(3)
        assert result.ok
        assert result.value == 3

    def test_failure(self) -> None:
        result = Result.failure(ErrorKind.NOT_READY)
        assert not result.ok
        assert result.error is ErrorKind.NOT_READY


class TestSimulationConfig:
    """Tests for YAML config loading."""

    def test_defaults(self) -> None:
        cfg = SimulationConfig()
        assert cfg.grid_width == 10
        assert cfg.grid_height == 10
        assert cfg.tick_interval == 10.0
        assert cfg.farm_field == Footprint(0, 0, 10, 10)

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text(
            "grid_width: 6\ngrid_height: 4\nfield_x: 1\nfield_width: 2\n"
            "starting_inventory:\n  coin: 7\n",
        )
        cfg = SimulationConfig.from_yaml(yaml_file)
        assert cfg.grid_width == 6
        assert cfg.farm_field == Footprint(1, 0, 2, 4)
        assert cfg.build_inventory().get_amount(ResourceType.COIN) == 7
        assert cfg.build_catalog().crop(CropType.WHEAT) is not None

    def test_empty_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert SimulationConfig.from_yaml(yaml_file) == SimulationConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            SimulationConfig.from_yaml(tmp_path / "nope.yaml")

    def test_default_yaml_loads(self) -> None:
        path = Path(__file__).resolve().parent.parent / "config" / "default.yaml"
        cfg = SimulationConfig.from_yaml(path)
        assert cfg.farm_field == Footprint(0, 0, 5, 5)
        barn = cfg.build_catalog().building(BuildingType.BARN)
        assert barn.cost == 100

    def test_ledger_from_config(self) -> None:
        ledger = SimulationConfig().build_ledger()
        assert ledger.get_production_rate(ResourceType.WHEAT) == 1.0
        assert ledger.get_max_capacity(ResourceType.CORN) == 50


class TestFarmEngine:
    """Tests for the engine surface used by the UI layer."""

    def test_engine_initialises(self, engine: FarmEngine) -> None:
        assert engine.tick_count == 0
        assert engine.get_amount(ResourceType.COIN) == 100
        assert engine.get_amount(ResourceType.WHEAT) == 10
        assert engine.get_tile_state(0, 0).state is CropState.EMPTY

    def test_wheat_scenario(self, clock: FakeClock) -> None:
        """5x5 grid: plant wheat, wait 121 s, harvest 15."""
        engine = FarmEngine(
            config=SimulationConfig(grid_width=5, grid_height=5),
            clock=clock,
        )
        assert engine.plant(0, 0, CropType.WHEAT).ok
        assert engine.get_amount(ResourceType.COIN) == 95
        tile = engine.get_tile_state(0, 0)
        assert tile.state is CropState.SEEDED
        assert tile.growth_progress == 0.0

        clock.advance(121)
        engine.tick(121)
        tile = engine.get_tile_state(0, 0)
        assert tile.state is CropState.READY
        assert tile.growth_progress == 1.0

        assert engine.harvest(0, 0).value == 15
        assert engine.get_amount(ResourceType.WHEAT) == 10 + 15
        assert engine.get_tile_state(0, 0).state is CropState.EMPTY

    def test_barn_scenario_insufficient(self, engine: FarmEngine) -> None:
        """10x10 grid: a 100-coin barn with only 95 coin fails cleanly."""
        engine.inventory.use_resource(ResourceType.COIN, 5)
        engine.start_placement(BuildingType.BARN)
        result = engine.confirm_placement(1, 1)
        assert result.error is ErrorKind.INSUFFICIENT_RESOURCES
        assert engine.get_amount(ResourceType.COIN) == 95
        assert engine.get_building_at(1, 1) is None
        assert engine.state.grid.occupant_at(1, 1) is None

    def test_growth_only_via_tick(self, engine: FarmEngine, clock: FakeClock) -> None:
        engine.plant(2, 2, CropType.WHEAT)
        clock.advance(500)
        assert engine.get_tile_state(2, 2).state is CropState.SEEDED
        assert engine.harvest(2, 2).error is ErrorKind.NOT_READY
        engine.tick(10)
        assert engine.harvest(2, 2).ok

    def test_growth_monotonic_across_ticks(self, engine: FarmEngine, clock: FakeClock) -> None:
        engine.plant(0, 0, CropType.CORN)
        seen = []
        for _ in range(40):
            clock.advance(10)
            engine.tick(10)
            seen.append(engine.get_tile_state(0, 0).growth_progress)
        assert seen == sorted(seen)
        assert engine.get_tile_state(0, 0).state is CropState.READY

    def test_tick_reports_ripened(self, engine: FarmEngine, clock: FakeClock) -> None:
        engine.plant(0, 0, CropType.WHEAT)
        clock.advance(120)
        ripened = engine.tick(10)
        assert [(t.x, t.y) for t in ripened] == [(0, 0)]
        assert engine.tick(10) == []

    def test_tile_query_is_a_copy(self, engine: FarmEngine) -> None:
        engine.get_tile_state(0, 0).state = CropState.READY
        assert engine.get_tile_state(0, 0).state is CropState.EMPTY

    def test_production_and_collect(self, engine: FarmEngine) -> None:
        engine.run(ticks=9)  # 90 seconds at the 10 s default
        assert engine.tick_count == 9
        assert engine.ledger.get_current_amount(ResourceType.WHEAT) == pytest.approx(1.5)
        collected = engine.collect_resources().value
        assert collected == {ResourceType.WHEAT: 1}
        assert engine.get_amount(ResourceType.WHEAT) == 11
        assert engine.ledger.get_current_amount(ResourceType.WHEAT) == pytest.approx(0.5)

    def test_place_and_move_building(self, clock: FakeClock) -> None:
        config = SimulationConfig(starting_inventory={"coin": 300})
        engine = FarmEngine(config=config, clock=clock)
        engine.start_placement(BuildingType.BARN)
        assert engine.placement_preview(8, 8)
        assert engine.confirm_placement(8, 8).ok
        assert engine.get_building_at(9, 9).building_type is BuildingType.BARN
        assert engine.move_building(8, 8, 0, 0).ok
        assert engine.get_building_at(1, 1) is not None
        assert engine.get_building_at(9, 9) is None
        assert engine.ledger.get_production_rate(ResourceType.WHEAT) == pytest.approx(1.1)

    def test_crops_and_buildings_share_grid(self, clock: FakeClock) -> None:
        engine = FarmEngine(
            config=SimulationConfig(starting_inventory={"coin": 300}),
            clock=clock,
        )
        engine.plant(1, 1, CropType.WHEAT)
        engine.start_placement(BuildingType.BARN)
        assert not engine.placement_preview(0, 0)
        assert engine.confirm_placement(0, 0).error is ErrorKind.CELL_OCCUPIED
        engine.cancel_placement()
        engine.start_placement(BuildingType.SILO)
        assert engine.confirm_placement(4, 4).ok
        assert engine.plant(4, 5, CropType.WHEAT).error is ErrorKind.CELL_OCCUPIED

    def test_move_unknown_building(self, engine: FarmEngine) -> None:
        assert engine.move_building(3, 3, 4, 4).error is ErrorKind.UNKNOWN_OCCUPANT

    def test_independent_instances(self, default_config: SimulationConfig, clock: FakeClock) -> None:
        a = FarmEngine(config=default_config, clock=clock)
        b = FarmEngine(config=default_config, clock=clock)
        a.plant(0, 0, CropType.WHEAT)
        assert b.get_tile_state(0, 0).state is CropState.EMPTY
        assert b.get_amount(ResourceType.COIN) == 100
