"""
Test: Core Framework
Verifies Stock, configuration, registry, and statistics basics work correctly.
"""

import sys
import os
import gc
import threading
# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest

from bioprocessing.core.store import Stock, ResourceType
from bioprocessing.core.facility import FacilityKind, InvalidHandleError
from bioprocessing.core.simulation import Simulation, ProductionStatistics
from bioprocessing.config import (
    RateConfig,
    AlgaeVatConfig,
    ComposterConfig,
    MushroomFarmConfig,
    BioReactorConfig,
    ConfigurationError,
    RATES,
)


def test_stock_basic():
    """Test basic stock operations."""
    print("Testing Stock...")

    stock = Stock(
        name="Test_Biofuel",
        resource_type=ResourceType.BIOFUEL,
        capacity=100.0,
        current_level=50.0,
    )

    # Test properties
    assert stock.free_capacity == 50.0, f"Expected 50, got {stock.free_capacity}"
    assert stock.fill_fraction == 0.5, f"Expected 0.5, got {stock.fill_fraction}"

    # Test add
    added = stock.add(20.0)
    assert added == 20.0, f"Expected 20, got {added}"
    assert stock.current_level == 70.0, f"Expected 70, got {stock.current_level}"

    # Test remove
    removed = stock.remove(10.0)
    assert removed == 10.0, f"Expected 10, got {removed}"
    assert stock.current_level == 60.0, f"Expected 60, got {stock.current_level}"

    # Test overflow
    added = stock.add(100.0)
    assert added == 40.0, f"Expected 40, got {added}"
    assert stock.is_full
    assert stock.total_overflow == 60.0, f"Expected overflow 60, got {stock.total_overflow}"

    # Test shortfall
    removed = stock.remove(250.0)
    assert removed == 100.0, f"Expected 100, got {removed}"
    assert stock.is_empty

    print("  ✓ Stock tests passed")


def test_stock_initial_level_clamped():
    """Test initial levels outside [0, capacity] are clamped."""
    over = Stock("Over", ResourceType.ALGAE, 10.0, 25.0)
    under = Stock("Under", ResourceType.ALGAE, 10.0, -5.0)

    assert over.current_level == 10.0
    assert under.current_level == 0.0


def test_stock_rejects_negative_amounts():
    """Test negative amounts are a programming error."""
    stock = Stock("Waste", ResourceType.ORGANIC_WASTE, 10.0, 5.0)

    with pytest.raises(ValueError):
        stock.add(-1.0)
    with pytest.raises(ValueError):
        stock.remove(-1.0)

    assert stock.current_level == 5.0


def test_stock_callbacks():
    """Test full/empty notifications."""
    print("Testing Stock callbacks...")

    events = []
    stock = Stock(
        "Fertilizer", ResourceType.FERTILIZER, 10.0,
        on_full=lambda s: events.append(("full", s.name)),
        on_empty=lambda s: events.append(("empty", s.name)),
    )

    stock.add(4.0)
    assert events == []

    stock.add(10.0)
    assert events == [("full", "Fertilizer")]

    # Already full: nothing accepted, no new notification
    stock.add(1.0)
    assert len(events) == 1

    stock.remove_all()
    assert events[-1] == ("empty", "Fertilizer")

    print("  ✓ Stock callback tests passed")


def test_rate_config_bounds():
    """Test rate multipliers are validated at construction."""
    print("Testing RateConfig...")

    config = RateConfig(algae_growth_rate=5.0, biofuel_yield=0.5, compost_efficiency=2.0)
    assert config.algae_growth_rate == 5.0

    with pytest.raises(ConfigurationError):
        RateConfig(algae_growth_rate=5.1)
    with pytest.raises(ConfigurationError):
        RateConfig(mushroom_growth_rate=0.05)
    with pytest.raises(ConfigurationError):
        RateConfig(biofuel_yield=3.5)
    with pytest.raises(ConfigurationError):
        RateConfig(compost_efficiency=0.4)

    print("  ✓ RateConfig tests passed")


def test_rate_config_from_dict():
    """Test building rates from a settings mapping."""
    config = RateConfig.from_dict({"algae_growth_rate": 2.0})
    assert config.algae_growth_rate == 2.0
    assert config.mushroom_growth_rate == 1.0

    with pytest.raises(ConfigurationError):
        RateConfig.from_dict({"biofuel_yield": 10.0})

    clamped = RateConfig.from_dict({"biofuel_yield": 10.0, "compost_efficiency": 0.1}, clamp=True)
    assert clamped.biofuel_yield == 3.0
    assert clamped.compost_efficiency == 0.5

    with pytest.raises(ConfigurationError):
        RateConfig.from_dict({"warp_speed": 1.0})


def test_facility_config_validation():
    """Test time constants and capacities must be positive."""
    with pytest.raises(ConfigurationError):
        ComposterConfig(processing_time=0.0)
    with pytest.raises(ConfigurationError):
        MushroomFarmConfig(growth_time=-1.0)
    with pytest.raises(ConfigurationError):
        BioReactorConfig(organic_to_biofuel=1.5)


def test_facility_config_rejects_nan():
    """Test NaN time constants and rates are not accepted."""
    with pytest.raises(ConfigurationError):
        MushroomFarmConfig(growth_time=float("nan"))
    with pytest.raises(ConfigurationError):
        ComposterConfig(processing_time=float("nan"))
    with pytest.raises(ConfigurationError):
        AlgaeVatConfig(production_rate=float("nan"))


def test_registry_ids_and_removal():
    """Test ids are per kind, monotonic, and never reused."""
    print("Testing FacilityRegistry...")

    sim = Simulation()
    vat_a = sim.create_algae_vat()
    vat_b = sim.create_algae_vat()
    reactor = sim.create_bio_reactor()

    assert (vat_a.facility_id, vat_b.facility_id) == (0, 1)
    assert reactor.facility_id == 0
    assert vat_a.name == "AlgaeVat_0"
    assert sim.registry.facilities(FacilityKind.ALGAE_VAT) == [vat_a, vat_b]
    assert len(sim.registry) == 3

    assert sim.destroy(vat_a) is True
    assert vat_a not in sim.registry
    assert sim.registry.facilities(FacilityKind.ALGAE_VAT) == [vat_b]

    # Destroying twice is a no-op
    assert sim.destroy(vat_a) is False
    assert sim.registry.remove(vat_a) is False

    vat_c = sim.create_algae_vat()
    assert vat_c.facility_id == 2
    assert sim.registry.get(FacilityKind.ALGAE_VAT, 0) is None
    assert sim.registry.get(FacilityKind.ALGAE_VAT, 2) is vat_c

    print("  ✓ FacilityRegistry tests passed")


def test_registry_does_not_own_facilities():
    """Test a facility dropped by its owner leaves the registry."""
    sim = Simulation()
    kept = sim.create_composter()
    dropped = sim.create_composter()
    assert sim.registry.count(FacilityKind.COMPOSTER) == 2

    del dropped
    gc.collect()

    assert sim.registry.facilities(FacilityKind.COMPOSTER) == [kept]


def test_destroyed_facility_rejects_mutation():
    """Test operations on a destroyed facility raise InvalidHandleError."""
    sim = Simulation()
    reactor = sim.create_bio_reactor()
    reactor.add_organic_matter(10.0)
    reactor.destroy()

    with pytest.raises(InvalidHandleError):
        reactor.add_organic_matter(5.0)
    with pytest.raises(InvalidHandleError):
        reactor.take_biofuel(1.0)
    with pytest.raises(InvalidHandleError):
        reactor.advance(1.0)

    # Reads still work
    assert reactor.organic_matter.current_level == 10.0
    assert reactor.get_status()["is_destroyed"] is True


def test_statistics_monotonic():
    """Test counters ignore non-positive increments."""
    stats = ProductionStatistics()
    stats.record_biofuel(2.5)
    stats.record_biofuel(-1.0)
    stats.record_compost(0.0)
    stats.record_harvest(3)
    stats.record_harvest(-2)

    assert stats.get_status() == {
        "total_biofuel_produced": 2.5,
        "total_compost_produced": 0.0,
        "total_plants_harvested": 3,
    }


def test_statistics_thread_safe():
    """Test concurrent increments are not lost."""
    stats = ProductionStatistics()

    def worker():
        for _ in range(1000):
            stats.record_harvest(1)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert stats.total_plants_harvested == 8000


def test_simulations_are_isolated():
    """Test separate simulations share no ids or counters."""
    first = Simulation()
    second = Simulation(RATES)

    vat_1 = first.create_algae_vat()
    vat_1.advance(10.0)
    vat_1.harvest_all()

    vat_2 = second.create_algae_vat()
    assert vat_2.facility_id == 0
    assert second.statistics.total_plants_harvested == 0
    assert first.statistics.total_plants_harvested == 1


def run_all_tests():
    """Run all core tests."""
    print("\n" + "="*50)
    print("BIOPROCESSING — Core Framework Tests")
    print("="*50 + "\n")

    try:
        test_stock_basic()
        test_stock_initial_level_clamped()
        test_stock_rejects_negative_amounts()
        test_stock_callbacks()
        test_rate_config_bounds()
        test_rate_config_from_dict()
        test_facility_config_validation()
        test_facility_config_rejects_nan()
        test_registry_ids_and_removal()
        test_registry_does_not_own_facilities()
        test_destroyed_facility_rejects_mutation()
        test_statistics_monotonic()
        test_statistics_thread_safe()
        test_simulations_are_isolated()

        print("\n" + "="*50)
        print("ALL CORE TESTS PASSED ✓")
        print("="*50 + "\n")
        return True

    except AssertionError as e:
        print(f"\n✗ TEST FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
