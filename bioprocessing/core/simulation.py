"""
BioProcessing — Simulation Engine
Simulation context, production statistics, and the per-tick driver.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Callable, Tuple
import logging
import json
import threading
from datetime import datetime

from .facility import Facility, FacilityKind
from .registry import FacilityRegistry
from ..config import (
    RateConfig,
    RATES,
    AlgaeVatConfig,
    MushroomFarmConfig,
    BioReactorConfig,
    ComposterConfig,
    ALGAE_VAT,
    MUSHROOM_FARM,
    BIO_REACTOR,
    COMPOSTER,
)
from ..facilities.algae_vat import AlgaeVat
from ..facilities.mushroom_farm import MushroomFarm
from ..facilities.bio_reactor import BioReactor
from ..facilities.composter import Composter

logger = logging.getLogger(__name__)


@dataclass
class ProductionStatistics:
    """
    Aggregate production counters.

    Counters only grow. Increments take a lock because facilities may be
    advanced from several threads by the host.
    """
    total_biofuel_produced: float = 0.0
    total_compost_produced: float = 0.0
    total_plants_harvested: int = 0

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_biofuel(self, amount: float):
        if amount <= 0:
            return
        with self._lock:
            self.total_biofuel_produced += amount

    def record_compost(self, amount: float):
        if amount <= 0:
            return
        with self._lock:
            self.total_compost_produced += amount

    def record_harvest(self, count: int):
        if count <= 0:
            return
        with self._lock:
            self.total_plants_harvested += count

    def get_status(self) -> Dict:
        with self._lock:
            return {
                "total_biofuel_produced": self.total_biofuel_produced,
                "total_compost_produced": self.total_compost_produced,
                "total_plants_harvested": self.total_plants_harvested,
            }


@dataclass
class SimulationContext:
    """Shared state handed to every facility: rates, registry and counters."""
    rates: RateConfig = RATES
    registry: FacilityRegistry = field(default_factory=FacilityRegistry)
    statistics: ProductionStatistics = field(default_factory=ProductionStatistics)


@dataclass
class SimulationState:
    """Current state of the simulation."""
    current_tick: int = 0
    elapsed_time: float = 0.0  # Seconds of simulated time


class Simulation:
    """
    Host-side simulation driver.

    Manages:
    - Facility creation and destruction
    - Advancing every live facility once per tick
    - Metrics collection

    The driver holds no strong references to facilities; callers keep the
    facilities they create.
    """

    def __init__(self, rates: RateConfig = RATES):
        self.context = SimulationContext(rates=rates)
        self.state = SimulationState()

        # Metrics collection
        self.tick_metrics: List[Dict] = []
        self.remediation_history: List[Dict] = []

        # Callbacks
        self.on_tick_complete: Optional[Callable] = None
        self.on_facility_created: Optional[Callable] = None

        logger.info("Simulation initialized")

    @property
    def rates(self) -> RateConfig:
        return self.context.rates

    @property
    def registry(self) -> FacilityRegistry:
        return self.context.registry

    @property
    def statistics(self) -> ProductionStatistics:
        return self.context.statistics

    @property
    def current_tick(self) -> int:
        return self.state.current_tick

    # -------------------------------------------------------------------------
    # Facility lifecycle
    # -------------------------------------------------------------------------

    def _create(self, facility_cls, config) -> Facility:
        facility_id = self.registry.next_id(facility_cls.kind)
        facility = facility_cls(facility_id, self.context, config)
        self.registry.register(facility)

        logger.info(f"Created {facility.name}")

        if self.on_facility_created:
            self.on_facility_created(facility)
        return facility

    def create_algae_vat(self, config: AlgaeVatConfig = ALGAE_VAT) -> AlgaeVat:
        return self._create(AlgaeVat, config)

    def create_mushroom_farm(self, config: MushroomFarmConfig = MUSHROOM_FARM) -> MushroomFarm:
        return self._create(MushroomFarm, config)

    def create_bio_reactor(self, config: BioReactorConfig = BIO_REACTOR) -> BioReactor:
        return self._create(BioReactor, config)

    def create_composter(self, config: ComposterConfig = COMPOSTER) -> Composter:
        return self._create(Composter, config)

    def destroy(self, facility: Facility) -> bool:
        """Destroy a facility. Destroying it twice is a no-op."""
        return facility.destroy()

    def facilities(self, kind: FacilityKind) -> List[Facility]:
        """Live facilities of a kind."""
        return self.registry.facilities(kind)

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def tick(self, dt: float) -> Dict:
        """
        Advance every live facility by dt seconds.

        Returns:
            Dictionary of metrics from this tick.
        """
        facility_metrics = [facility.advance(dt) for facility in self.registry.all_facilities()]

        tick_data = {
            "tick": self.current_tick,
            "dt": dt,
            "elapsed_time": self.state.elapsed_time,
            "facilities": facility_metrics,
            "statistics": self.statistics.get_status(),
        }
        self.tick_metrics.append(tick_data)

        self.state.current_tick += 1
        if dt > 0:
            self.state.elapsed_time += dt

        if self.on_tick_complete:
            self.on_tick_complete(tick_data)

        return tick_data

    def run(self, ticks: int, dt: float):
        """Run the simulation for a number of fixed-size ticks."""
        for _ in range(ticks):
            self.tick(dt)

    # -------------------------------------------------------------------------
    # Bio-remediation
    # -------------------------------------------------------------------------

    def bio_remediate_zone(self, center: Tuple[float, float, float], radius: float) -> bool:
        """
        Request biological cleanup of a hazardous zone.

        Returns:
            False if bio-remediation is disabled in the rate config.
        """
        if not self.rates.enable_bio_remediation:
            logger.warning("Bio-remediation requested but disabled")
            return False

        self.remediation_history.append({
            "tick": self.current_tick,
            "center": tuple(center),
            "radius": radius,
        })
        logger.info(f"Bio-remediation initiated at {tuple(center)} (radius: {radius}m)")
        return True

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def get_status(self) -> Dict:
        """Get current simulation status."""
        return {
            "tick": self.current_tick,
            "elapsed_time": self.state.elapsed_time,
            "facility_counts": self.registry.counts(),
            "producing": sum(1 for f in self.registry if f.is_producing),
            "statistics": self.statistics.get_status(),
        }

    def get_final_report(self) -> Dict:
        """Generate a production report."""
        return {
            "summary": {
                "total_ticks": self.current_tick,
                "elapsed_time": self.state.elapsed_time,
                "generated": datetime.now().isoformat(timespec="seconds"),
            },
            "rates": self.rates.get_status(),
            "statistics": self.statistics.get_status(),
            "facilities": {f.name: f.get_status() for f in self.registry},
            "remediation_history": self.remediation_history,
        }

    def export_log(self, filepath: str):
        """Export the metrics log to a JSON file."""
        report = self.get_final_report()
        report["tick_metrics"] = self.tick_metrics

        with open(filepath, 'w') as f:
            json.dump(report, f, indent=2, default=str)

        logger.info(f"Simulation log exported to {filepath}")
