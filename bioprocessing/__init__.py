"""
BioProcessing — Facility Production Simulation

Algae vats, mushroom farms, bio reactors and composters that accumulate
inputs and convert them into outputs at configurable rates.
"""

__version__ = "1.0.0"

from .config import (
    RATES,
    ALGAE_VAT,
    MUSHROOM_FARM,
    BIO_REACTOR,
    COMPOSTER,
    RATE_BOUNDS,
    RateConfig,
    AlgaeVatConfig,
    MushroomFarmConfig,
    BioReactorConfig,
    ComposterConfig,
    ConfigurationError,
)

from .core import (
    Stock,
    ResourceType,
    Facility,
    FacilityKind,
    FacilityState,
    InvalidHandleError,
    FacilityRegistry,
    Simulation,
    SimulationContext,
    SimulationState,
    ProductionStatistics,
)

from .facilities import (
    AlgaeVat,
    MushroomFarm,
    BioReactor,
    Composter,
    transfer_fertilizer,
    deliver_compost,
    transfer_algae,
    transfer_mushrooms,
)

__all__ = [
    # Version info
    "__version__",

    # Config
    "RATES",
    "ALGAE_VAT",
    "MUSHROOM_FARM",
    "BIO_REACTOR",
    "COMPOSTER",
    "RATE_BOUNDS",
    "RateConfig",
    "AlgaeVatConfig",
    "MushroomFarmConfig",
    "BioReactorConfig",
    "ComposterConfig",
    "ConfigurationError",

    # Core classes
    "Stock",
    "ResourceType",
    "Facility",
    "FacilityKind",
    "FacilityState",
    "InvalidHandleError",
    "FacilityRegistry",
    "Simulation",
    "SimulationContext",
    "SimulationState",
    "ProductionStatistics",

    # Facilities
    "AlgaeVat",
    "MushroomFarm",
    "BioReactor",
    "Composter",
    "transfer_fertilizer",
    "deliver_compost",
    "transfer_algae",
    "transfer_mushrooms",
]
