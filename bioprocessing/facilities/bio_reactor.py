"""
BioProcessing — Bio Reactor
Converts organic matter into biofuel and biogas.

Input: Raw Algae, Mushrooms, Organic Matter
Output: Biofuel (fuel consumers), Biogas (power)
"""

from typing import Dict
import logging

from ..core.store import Stock, ResourceType
from ..core.facility import Facility, FacilityKind
from ..config import BioReactorConfig, BIO_REACTOR, ORGANIC_MATTER_PER_MUSHROOM

logger = logging.getLogger(__name__)


class BioReactor(Facility):
    """
    Bio reactor.

    Processes organic matter continuously at processing_rate while any
    output tank has room. Each output is clamped to its own capacity, so
    a full biogas tank does not stop biofuel production.
    """

    kind = FacilityKind.BIO_REACTOR

    def __init__(self, facility_id: int, context, config: BioReactorConfig = BIO_REACTOR):
        super().__init__(facility_id, context)

        # Input storage
        self.organic_matter = Stock(
            f"{self.name}_Organic", ResourceType.ORGANIC_MATTER, config.max_organic_matter
        )

        # Output storage
        self.biofuel = Stock(f"{self.name}_Biofuel", ResourceType.BIOFUEL, config.max_biofuel)
        self.biogas = Stock(f"{self.name}_Biogas", ResourceType.BIOGAS, config.max_biogas)

        # Conversion rates
        self.organic_to_biofuel = config.organic_to_biofuel
        self.organic_to_biogas = config.organic_to_biogas
        self.processing_rate = config.processing_rate

        self.total_processed = 0.0

    @property
    def is_processing(self) -> bool:
        return (self.organic_matter.current_level > 0
                and (not self.biofuel.is_full or not self.biogas.is_full))

    @property
    def is_producing(self) -> bool:
        return self.is_processing

    def process(self, dt: float) -> Dict:
        processed = self.organic_matter.remove(
            min(self.organic_matter.current_level, self.processing_rate * dt)
        )
        self.total_processed += processed

        biofuel_produced = processed * self.organic_to_biofuel * self.rates.biofuel_yield
        biogas_produced = processed * self.organic_to_biogas

        self.biofuel.add(biofuel_produced)
        self.biogas.add(biogas_produced)

        # Counted before clamping
        self.statistics.record_biofuel(biofuel_produced)

        return {
            "organic_processed": processed,
            "biofuel_produced": biofuel_produced,
            "biogas_produced": biogas_produced,
        }

    def add_organic_matter(self, amount: float) -> float:
        """Add organic matter, returning the amount accepted."""
        self._ensure_live()
        return self.organic_matter.add(max(0.0, amount))

    def add_algae(self, algae_amount: float) -> float:
        return self.add_organic_matter(algae_amount)

    def add_mushrooms(self, mushroom_count: int) -> float:
        """Each mushroom counts as ORGANIC_MATTER_PER_MUSHROOM organic matter."""
        return self.add_organic_matter(mushroom_count * ORGANIC_MATTER_PER_MUSHROOM)

    def take_biofuel(self, amount: float) -> float:
        self._ensure_live()
        return self.biofuel.remove(max(0.0, amount))

    def take_biogas(self, amount: float) -> float:
        self._ensure_live()
        return self.biogas.remove(max(0.0, amount))

    def stocks(self) -> Dict[str, Stock]:
        return {
            "organic_matter": self.organic_matter,
            "biofuel": self.biofuel,
            "biogas": self.biogas,
        }

    def get_status(self) -> Dict:
        status = super().get_status()
        status.update({
            "processing_rate": self.processing_rate,
            "total_processed": self.total_processed,
        })
        return status
