"""
BioProcessing — Core Module
Contains stocks, the facility base class, the registry, and the simulation driver.
"""

from .store import Stock, ResourceType
from .facility import Facility, FacilityKind, FacilityState, InvalidHandleError
from .registry import FacilityRegistry
from .simulation import Simulation, SimulationContext, SimulationState, ProductionStatistics

__all__ = [
    # Stock
    "Stock",
    "ResourceType",

    # Facility
    "Facility",
    "FacilityKind",
    "FacilityState",
    "InvalidHandleError",
    "FacilityRegistry",

    # Simulation
    "Simulation",
    "SimulationContext",
    "SimulationState",
    "ProductionStatistics",
]
