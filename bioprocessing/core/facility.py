"""
BioProcessing — Facility Base Class
Common contract for all production facilities.
"""

from abc import ABC, abstractmethod
from typing import Dict, TYPE_CHECKING
from enum import Enum, auto
import logging

from .store import Stock

if TYPE_CHECKING:
    from .simulation import SimulationContext

logger = logging.getLogger(__name__)


class InvalidHandleError(RuntimeError):
    """A mutating call reached a facility that was already destroyed."""
    pass


class FacilityKind(Enum):
    """Kinds of facility; each kind has its own registry and id sequence."""
    ALGAE_VAT = "AlgaeVat"
    MUSHROOM_FARM = "MushroomFarm"
    BIO_REACTOR = "BioReactor"
    COMPOSTER = "Composter"

    @property
    def label(self) -> str:
        return self.value


class FacilityState(Enum):
    """Operating state, always derived from the gating predicate."""
    IDLE = auto()       # Gating predicate false
    PRODUCING = auto()  # Gating predicate true


class Facility(ABC):
    """
    Base class for all facilities.

    A facility:
    - Holds one or more stocks
    - Advances its stocks by an elapsed time when its gating predicate holds
    - Exposes add/take methods used by an external orchestrator

    Facilities never reference each other; transfers between them are
    done by whoever drives the simulation.
    """

    kind: FacilityKind

    def __init__(self, facility_id: int, context: "SimulationContext"):
        self.facility_id = facility_id
        self.context = context
        self.is_destroyed = False

        # Statistics
        self.ticks_producing = 0
        self.ticks_idle = 0
        self.time_producing = 0.0
        self.time_idle = 0.0

    @property
    def name(self) -> str:
        return f"{self.kind.label}_{self.facility_id}"

    @property
    def rates(self):
        return self.context.rates

    @property
    def statistics(self):
        return self.context.statistics

    @property
    @abstractmethod
    def is_producing(self) -> bool:
        """Gating predicate, computed from current stock levels."""

    @property
    def state(self) -> FacilityState:
        return FacilityState.PRODUCING if self.is_producing else FacilityState.IDLE

    def _ensure_live(self):
        if self.is_destroyed:
            raise InvalidHandleError(f"{self.name} has been destroyed")

    def advance(self, dt: float) -> Dict:
        """
        Advance the facility by dt seconds.

        Non-positive dt is a no-op.

        Returns:
            Dictionary of metrics from this step.
        """
        self._ensure_live()

        metrics = {"name": self.name, "kind": self.kind.name}

        if dt > 0:
            if self.is_producing:
                self.ticks_producing += 1
                self.time_producing += dt
                metrics.update(self.process(dt))
            else:
                self.ticks_idle += 1
                self.time_idle += dt

        metrics["state"] = self.state.name
        return metrics

    @abstractmethod
    def process(self, dt: float) -> Dict:
        """
        Facility-specific production for one step.

        Only called while the gating predicate holds and dt > 0.

        Returns:
            Dictionary of facility-specific metrics.
        """

    @abstractmethod
    def stocks(self) -> Dict[str, Stock]:
        """Stocks held by this facility, keyed by role."""

    def destroy(self) -> bool:
        """
        Deregister the facility. Calling it again is a no-op.

        Returns:
            True if this call destroyed the facility.
        """
        if self.is_destroyed:
            return False
        self.context.registry.remove(self)
        self.is_destroyed = True
        logger.info(f"{self.name}: Destroyed")
        return True

    def get_status(self) -> Dict:
        """Get current facility status."""
        return {
            "name": self.name,
            "facility_id": self.facility_id,
            "kind": self.kind.name,
            "state": self.state.name,
            "is_destroyed": self.is_destroyed,
            "ticks_producing": self.ticks_producing,
            "ticks_idle": self.ticks_idle,
            "time_producing": self.time_producing,
            "time_idle": self.time_idle,
            "stocks": {role: stock.get_status() for role, stock in self.stocks().items()},
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name}, {self.state.name})"
