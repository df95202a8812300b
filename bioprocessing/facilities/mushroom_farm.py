"""
BioProcessing — Mushroom Farm
Grows mushrooms in the dark, feeding on fertilizer.
"""

from typing import Dict
import logging

from ..core.store import Stock, ResourceType
from ..core.facility import Facility, FacilityKind
from ..config import MushroomFarmConfig, MUSHROOM_FARM

logger = logging.getLogger(__name__)


class MushroomFarm(Facility):
    """
    Mushroom farm.

    Growth progress accumulates continuously while there is enough
    fertilizer for one mushroom and room to hold it. Each completed
    mushroom consumes fertilizer_per_mushroom. At most one mushroom
    completes per step, however large dt is.
    """

    kind = FacilityKind.MUSHROOM_FARM

    def __init__(self, facility_id: int, context, config: MushroomFarmConfig = MUSHROOM_FARM):
        super().__init__(facility_id, context)

        self.mushrooms_ready = 0
        self.max_mushrooms = config.max_mushrooms
        self.growth_progress = 0.0
        self.growth_time = config.growth_time

        self.fertilizer = Stock(f"{self.name}_Fertilizer", ResourceType.FERTILIZER, config.max_fertilizer)
        self.fertilizer_per_mushroom = config.fertilizer_per_mushroom

        self.total_mushrooms_grown = 0

    @property
    def can_grow(self) -> bool:
        return (self.fertilizer.current_level >= self.fertilizer_per_mushroom
                and self.mushrooms_ready < self.max_mushrooms)

    @property
    def is_producing(self) -> bool:
        return self.can_grow

    def process(self, dt: float) -> Dict:
        self.growth_progress += self.rates.mushroom_growth_rate * dt / self.growth_time

        grown = 0
        if self.growth_progress >= 1.0:
            self.growth_progress = 0.0
            self.mushrooms_ready += 1
            self.fertilizer.remove(self.fertilizer_per_mushroom)
            self.total_mushrooms_grown += 1
            grown = 1
            logger.debug(f"{self.name}: Mushroom ready ({self.mushrooms_ready}/{self.max_mushrooms})")

        return {
            "mushrooms_grown": grown,
            "growth_progress": self.growth_progress,
        }

    def add_fertilizer(self, amount: float) -> float:
        """Add fertilizer, returning the amount accepted."""
        self._ensure_live()
        return self.fertilizer.add(max(0.0, amount))

    def add_compost(self, compost_amount: float) -> float:
        """
        Add compost, converted to fertilizer at the configured efficiency.

        The compost counter grows by the compost delivered, not by the
        fertilizer it yields.
        """
        self._ensure_live()
        compost_amount = max(0.0, compost_amount)
        accepted = self.add_fertilizer(compost_amount * self.rates.compost_efficiency)
        self.statistics.record_compost(compost_amount)
        return accepted

    def harvest(self) -> int:
        """Take every ready mushroom."""
        self._ensure_live()
        harvested = self.mushrooms_ready
        self.mushrooms_ready = 0
        if harvested > 0:
            self.statistics.record_harvest(harvested)
        return harvested

    def stocks(self) -> Dict[str, Stock]:
        return {"fertilizer": self.fertilizer}

    def get_status(self) -> Dict:
        status = super().get_status()
        status.update({
            "mushrooms_ready": self.mushrooms_ready,
            "max_mushrooms": self.max_mushrooms,
            "growth_progress": self.growth_progress,
            "total_mushrooms_grown": self.total_mushrooms_grown,
        })
        return status
