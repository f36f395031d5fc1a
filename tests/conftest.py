"""Shared fixtures for the Farmstead test suite."""

from __future__ import annotations

import pytest

from farmstead.catalog.catalog import Catalog
from farmstead.economy.inventory import Inventory
from farmstead.economy.production import ProductionLedger
from farmstead.simulation.config import SimulationConfig
from farmstead.simulation.engine import FarmEngine
from farmstead.world.grid import PlacementGrid


class FakeClock:
    """A wall clock that only moves when told to."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """A deterministic wall clock starting at t=1,000,000 s."""
    return FakeClock()


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.default()


@pytest.fixture
def small_grid() -> PlacementGrid:
    """A small 5x5 grid for fast tests."""
    return PlacementGrid(width=5, height=5)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def ledger(default_config: SimulationConfig) -> ProductionLedger:
    """Wheat 1.0/min cap 100, corn 0.5/min cap 50, both empty."""
    return default_config.build_ledger()


@pytest.fixture
def inventory() -> Inventory:
    return Inventory.from_dict({"coin": 100})


@pytest.fixture
def engine(default_config: SimulationConfig, clock: FakeClock) -> FarmEngine:
    """A 10x10 engine on the fake clock with 100 coin and 10 wheat."""
    return FarmEngine(config=default_config, clock=clock)
