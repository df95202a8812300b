"""
BioProcessing — Algae Vat
Grows raw algae from water and light.

Output: Raw Algae → Bio Reactor → Biofuel
"""

from typing import Dict
import logging

from ..core.store import Stock, ResourceType
from ..core.facility import Facility, FacilityKind
from ..config import AlgaeVatConfig, ALGAE_VAT

logger = logging.getLogger(__name__)


class AlgaeVat(Facility):
    """
    Algae vat.

    Accumulates algae continuously while it has water and light and the
    tank is not full.
    """

    kind = FacilityKind.ALGAE_VAT

    def __init__(self, facility_id: int, context, config: AlgaeVatConfig = ALGAE_VAT):
        super().__init__(facility_id, context)

        self.algae = Stock(f"{self.name}_Algae", ResourceType.ALGAE, config.max_algae)
        self.production_rate = config.production_rate

        # Requirements, set by the host
        self.has_water = True
        self.has_light = True

    @property
    def is_producing(self) -> bool:
        return self.has_water and self.has_light and not self.algae.is_full

    def process(self, dt: float) -> Dict:
        rate = self.production_rate * self.rates.algae_growth_rate
        grown = self.algae.add(rate * dt)
        return {"algae_grown": grown}

    def harvest(self, amount: float) -> float:
        """
        Remove up to amount of algae.

        Any non-empty harvest counts as one harvested plant, whatever
        the quantity taken.
        """
        self._ensure_live()
        harvested = self.algae.remove(max(0.0, amount))
        if harvested > 0:
            self.statistics.record_harvest(1)
        return harvested

    def harvest_all(self) -> float:
        return self.harvest(self.algae.current_level)

    def stocks(self) -> Dict[str, Stock]:
        return {"algae": self.algae}

    def get_status(self) -> Dict:
        status = super().get_status()
        status.update({
            "has_water": self.has_water,
            "has_light": self.has_light,
            "production_rate": self.production_rate,
        })
        return status
