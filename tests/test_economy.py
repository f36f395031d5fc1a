"""Tests for farmstead.economy — inventory and the production ledger."""

import pytest

from farmstead.catalog.types import ResourceType
from farmstead.economy.inventory import Inventory
from farmstead.economy.production import ProductionLedger, ResourceProduction


class TestInventory:
    """Tests for add/use/has/get."""

    def test_unknown_resource_is_zero(self) -> None:
        assert Inventory().get_amount(ResourceType.CORN) == 0

    def test_add_accumulates(self, inventory: Inventory) -> None:
        inventory.add_resource(ResourceType.WHEAT, 3)
        inventory.add_resource(ResourceType.WHEAT, 4)
        assert inventory.get_amount(ResourceType.WHEAT) == 7

    def test_add_negative_raises(self, inventory: Inventory) -> None:
        with pytest.raises(ValueError):
            inventory.add_resource(ResourceType.COIN, -1)

    def test_use_deducts(self, inventory: Inventory) -> None:
        assert inventory.use_resource(ResourceType.COIN, 30)
        assert inventory.get_amount(ResourceType.COIN) == 70

    def test_use_exact_balance(self, inventory: Inventory) -> None:
        assert inventory.use_resource(ResourceType.COIN, 100)
        assert inventory.get_amount(ResourceType.COIN) == 0

    def test_use_insufficient_changes_nothing(self, inventory: Inventory) -> None:
        assert not inventory.use_resource(ResourceType.COIN, 101)
        assert inventory.get_amount(ResourceType.COIN) == 100
        assert not inventory.use_resource(ResourceType.CORN, 1)
        assert ResourceType.CORN not in inventory.balances

    def test_has_resource(self, inventory: Inventory) -> None:
        assert inventory.has_resource(ResourceType.COIN, 100)
        assert not inventory.has_resource(ResourceType.COIN, 101)

    def test_dict_round_trip(self) -> None:
        inventory = Inventory.from_dict({"coin": 5, "Wheat": 2})
        assert inventory.as_dict() == {"coin": 5, "wheat": 2}


class TestResourceProduction:
    """Tests for a single bucket."""

    def test_advance_accumulates(self) -> None:
        prod = ResourceProduction(ResourceType.WHEAT, rate_per_minute=2.0, max_capacity=10)
        prod.advance(1.5)
        assert prod.current_amount == pytest.approx(3.0)

    def test_clamped_to_capacity(self) -> None:
        prod = ResourceProduction(ResourceType.WHEAT, rate_per_minute=2.0, max_capacity=10)
        prod.advance(1_000_000)
        assert prod.current_amount == 10.0

    def test_never_negative(self) -> None:
        prod = ResourceProduction(ResourceType.WHEAT, rate_per_minute=-5.0, max_capacity=10)
        prod.advance(10)
        assert prod.current_amount == 0.0


class TestProductionLedger:
    """Tests for ledger ticking, collection, catch-up, and boosts."""

    def test_advance_all(self, ledger: ProductionLedger) -> None:
        ledger.advance(4)
        assert ledger.get_current_amount(ResourceType.WHEAT) == pytest.approx(4.0)
        assert ledger.get_current_amount(ResourceType.CORN) == pytest.approx(2.0)

    def test_non_positive_elapsed_is_noop(self, ledger: ProductionLedger) -> None:
        ledger.advance(0)
        ledger.advance(-3)
        assert ledger.get_current_amount(ResourceType.WHEAT) == 0.0

    def test_collect_keeps_fraction(
        self,
        ledger: ProductionLedger,
        inventory: Inventory,
    ) -> None:
        ledger.advance(2.5)  # wheat 2.5, corn 1.25
        collected = ledger.collect(inventory)
        assert collected == {ResourceType.WHEAT: 2, ResourceType.CORN: 1}
        assert inventory.get_amount(ResourceType.WHEAT) == 2
        assert ledger.get_current_amount(ResourceType.WHEAT) == pytest.approx(0.5)
        assert ledger.get_current_amount(ResourceType.CORN) == pytest.approx(0.25)

    def test_fractions_add_up_across_collections(
        self,
        ledger: ProductionLedger,
        inventory: Inventory,
    ) -> None:
        for _ in range(4):
            ledger.advance(0.5)  # corn +0.25 each time
            ledger.collect(inventory)
        assert inventory.get_amount(ResourceType.CORN) == 1
        assert ledger.get_current_amount(ResourceType.CORN) == pytest.approx(0.0)

    def test_collect_nothing_whole(
        self,
        ledger: ProductionLedger,
        inventory: Inventory,
    ) -> None:
        ledger.advance(0.5)
        assert ledger.collect(inventory) == {}
        assert ledger.get_current_amount(ResourceType.WHEAT) == pytest.approx(0.5)

    def test_never_exceeds_capacity(self, ledger: ProductionLedger) -> None:
        for minutes in (10, 1_000, 1e9):
            ledger.advance(minutes)
            for prod in ledger.entries():
                assert prod.current_amount <= prod.max_capacity

    def test_offline_equivalence(self) -> None:
        """One large step equals many small steps summing to it."""
        many = ProductionLedger()
        many.track(ResourceProduction(ResourceType.WHEAT, 0.7, max_capacity=1000))
        single = ProductionLedger()
        single.track(ResourceProduction(ResourceType.WHEAT, 0.7, max_capacity=1000))

        for _ in range(90):
            many.advance(10 / 60)  # 10-second ticks
        single.catch_up(0.0, 90 * 10.0)

        assert many.get_current_amount(ResourceType.WHEAT) == pytest.approx(
            single.get_current_amount(ResourceType.WHEAT),
        )
        assert single.get_current_amount(ResourceType.WHEAT) == pytest.approx(10.5)

    def test_catch_up_returns_minutes(self, ledger: ProductionLedger) -> None:
        assert ledger.catch_up(100.0, 400.0) == pytest.approx(5.0)
        assert ledger.get_current_amount(ResourceType.WHEAT) == pytest.approx(5.0)

    def test_catch_up_clock_backwards(self, ledger: ProductionLedger) -> None:
        assert ledger.catch_up(400.0, 100.0) == 0.0
        assert ledger.get_current_amount(ResourceType.WHEAT) == 0.0

    def test_boosts_are_additive(self, ledger: ProductionLedger) -> None:
        ledger.apply_boosts({ResourceType.WHEAT: 10})
        ledger.apply_boosts({ResourceType.WHEAT: 5, ResourceType.CORN: 5})
        assert ledger.get_production_rate(ResourceType.WHEAT) == pytest.approx(1.15)
        assert ledger.get_production_rate(ResourceType.CORN) == pytest.approx(0.55)

    def test_boost_untracked_resource_ignored(self, ledger: ProductionLedger) -> None:
        ledger.apply_boosts({ResourceType.COIN: 50})
        assert ledger.get_production_rate(ResourceType.COIN) == 0.0
        assert ResourceType.COIN not in ledger.productions

    def test_set_rate_and_capacity(self, ledger: ProductionLedger) -> None:
        assert ledger.set_production_rate(ResourceType.CORN, 3.0)
        ledger.advance(10)
        assert ledger.set_max_capacity(ResourceType.CORN, 20)
        assert ledger.get_max_capacity(ResourceType.CORN) == 20
        assert ledger.get_current_amount(ResourceType.CORN) == 20.0

    def test_set_unknown_resource(self, ledger: ProductionLedger) -> None:
        assert not ledger.set_production_rate(ResourceType.COIN, 1.0)
        assert not ledger.set_max_capacity(ResourceType.COIN, 1)
        assert ledger.get_max_capacity(ResourceType.COIN) == 0
