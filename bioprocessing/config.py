"""
BioProcessing — Configuration
Rate multipliers and default facility specifications.
"""

from dataclasses import dataclass, fields
from typing import Dict, Tuple
import logging

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """A configuration value is outside its documented range."""
    pass


# Accepted range for each tunable multiplier (inclusive)
RATE_BOUNDS: Dict[str, Tuple[float, float]] = {
    "algae_growth_rate": (0.1, 5.0),
    "mushroom_growth_rate": (0.1, 5.0),
    "biofuel_yield": (0.5, 3.0),
    "compost_efficiency": (0.5, 2.0),
}


@dataclass(frozen=True)
class RateConfig:
    """
    Process-wide tunable multipliers.

    Facilities only read these. Values outside RATE_BOUNDS are rejected
    here so they never reach the simulation core.
    """

    algae_growth_rate: float = 1.0     # Algae growth speed
    mushroom_growth_rate: float = 1.0  # Mushroom growth speed
    biofuel_yield: float = 1.0         # Biofuel output
    compost_efficiency: float = 1.0    # Compost conversion rate

    # Features
    enable_bio_remediation: bool = True

    def __post_init__(self):
        for name, (low, high) in RATE_BOUNDS.items():
            value = getattr(self, name)
            if not low <= value <= high:
                raise ConfigurationError(
                    f"{name}={value} outside accepted range [{low}, {high}]"
                )

    @classmethod
    def from_dict(cls, data: Dict, clamp: bool = False) -> "RateConfig":
        """
        Build a config from a plain mapping (e.g. a host's settings file).

        Args:
            data: Field names to values. Missing fields keep their defaults.
            clamp: If True, out-of-range multipliers are clamped into range
                instead of rejected.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown rate settings: {sorted(unknown)}")

        values = dict(data)
        if clamp:
            for name, (low, high) in RATE_BOUNDS.items():
                if name not in values:
                    continue
                original = float(values[name])
                values[name] = min(high, max(low, original))
                if values[name] != original:
                    logger.warning(f"{name}: {original} clamped to {values[name]}")

        return cls(**values)

    def get_status(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _require_positive(owner: str, **values: float):
    for name, value in values.items():
        if not value > 0:
            raise ConfigurationError(f"{owner}: {name} must be positive, got {value}")


@dataclass(frozen=True)
class AlgaeVatConfig:
    """Algae vat specification."""
    max_algae: float = 100.0
    production_rate: float = 1.0  # Algae per second at rate 1.0

    def __post_init__(self):
        _require_positive("AlgaeVatConfig", max_algae=self.max_algae)
        if not self.production_rate >= 0:
            raise ConfigurationError(f"AlgaeVatConfig: negative production_rate {self.production_rate}")


@dataclass(frozen=True)
class MushroomFarmConfig:
    """Mushroom farm specification."""
    max_mushrooms: int = 20
    growth_time: float = 30.0  # Seconds to grow one mushroom
    max_fertilizer: float = 50.0
    fertilizer_per_mushroom: float = 2.0

    def __post_init__(self):
        _require_positive(
            "MushroomFarmConfig",
            max_mushrooms=self.max_mushrooms,
            growth_time=self.growth_time,
            max_fertilizer=self.max_fertilizer,
            fertilizer_per_mushroom=self.fertilizer_per_mushroom,
        )


@dataclass(frozen=True)
class BioReactorConfig:
    """Bio reactor specification."""
    max_organic_matter: float = 200.0
    max_biofuel: float = 100.0
    max_biogas: float = 100.0

    organic_to_biofuel: float = 0.3  # 30% conversion to biofuel
    organic_to_biogas: float = 0.5   # 50% conversion to biogas
    processing_rate: float = 5.0     # Organic matter per second

    def __post_init__(self):
        _require_positive(
            "BioReactorConfig",
            max_organic_matter=self.max_organic_matter,
            max_biofuel=self.max_biofuel,
            max_biogas=self.max_biogas,
            processing_rate=self.processing_rate,
        )
        for name in ("organic_to_biofuel", "organic_to_biogas"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"BioReactorConfig: {name} must be in [0, 1], got {value}")


@dataclass(frozen=True)
class ComposterConfig:
    """Composter specification."""
    max_waste: float = 100.0
    max_fertilizer: float = 50.0

    waste_to_fertilizer: float = 0.5  # 50% conversion
    batch_size: float = 10.0          # Waste consumed per completed batch
    processing_time: float = 60.0     # Seconds per batch at efficiency 1.0

    def __post_init__(self):
        _require_positive(
            "ComposterConfig",
            max_waste=self.max_waste,
            max_fertilizer=self.max_fertilizer,
            batch_size=self.batch_size,
            processing_time=self.processing_time,
        )
        if not 0.0 <= self.waste_to_fertilizer <= 1.0:
            raise ConfigurationError(
                f"ComposterConfig: waste_to_fertilizer must be in [0, 1], got {self.waste_to_fertilizer}"
            )


# Organic matter yielded by one mushroom fed to a reactor
ORGANIC_MATTER_PER_MUSHROOM = 5.0


# Default configurations
RATES = RateConfig()
ALGAE_VAT = AlgaeVatConfig()
MUSHROOM_FARM = MushroomFarmConfig()
BIO_REACTOR = BioReactorConfig()
COMPOSTER = ComposterConfig()
