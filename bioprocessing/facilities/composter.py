"""
BioProcessing — Composter
Turns organic waste into fertilizer for farms, one batch at a time.
"""

from typing import Dict
import logging

from ..core.store import Stock, ResourceType
from ..core.facility import Facility, FacilityKind
from ..config import ComposterConfig, COMPOSTER

logger = logging.getLogger(__name__)


class Composter(Facility):
    """
    Composter.

    Runs while at least one batch of waste is loaded and the fertilizer
    bin has room. Progress fills over processing_time (scaled by compost
    efficiency); each time it completes, one batch of waste is converted.
    """

    kind = FacilityKind.COMPOSTER

    def __init__(self, facility_id: int, context, config: ComposterConfig = COMPOSTER):
        super().__init__(facility_id, context)

        # Input
        self.waste = Stock(f"{self.name}_Waste", ResourceType.ORGANIC_WASTE, config.max_waste)

        # Output
        self.fertilizer = Stock(f"{self.name}_Fertilizer", ResourceType.FERTILIZER, config.max_fertilizer)

        # Processing
        self.waste_to_fertilizer = config.waste_to_fertilizer
        self.batch_size = config.batch_size
        self.processing_time = config.processing_time
        self.progress = 0.0

        self.batches_completed = 0

    @property
    def is_processing(self) -> bool:
        return self.waste.current_level >= self.batch_size and not self.fertilizer.is_full

    @property
    def is_producing(self) -> bool:
        return self.is_processing

    def process(self, dt: float) -> Dict:
        self.progress += self.rates.compost_efficiency * dt / self.processing_time

        metrics = {"batch_completed": False}
        if self.progress >= 1.0:
            self.progress = 0.0

            converted = self.waste.remove(min(self.batch_size, self.waste.current_level))
            fertilizer_produced = converted * self.waste_to_fertilizer
            self.fertilizer.add(fertilizer_produced)
            self.statistics.record_compost(fertilizer_produced)
            self.batches_completed += 1

            logger.debug(f"{self.name}: Batch complete, {fertilizer_produced:.2f} fertilizer")
            metrics.update({
                "batch_completed": True,
                "waste_converted": converted,
                "fertilizer_produced": fertilizer_produced,
            })

        metrics["progress"] = self.progress
        return metrics

    def add_waste(self, amount: float) -> float:
        """Add organic waste, returning the amount accepted."""
        self._ensure_live()
        return self.waste.add(max(0.0, amount))

    def take_fertilizer(self, amount: float) -> float:
        self._ensure_live()
        return self.fertilizer.remove(max(0.0, amount))

    def take_all_fertilizer(self) -> float:
        return self.take_fertilizer(self.fertilizer.current_level)

    @property
    def fertilizer_ready(self) -> float:
        return self.fertilizer.current_level

    def stocks(self) -> Dict[str, Stock]:
        return {"waste": self.waste, "fertilizer": self.fertilizer}

    def get_status(self) -> Dict:
        status = super().get_status()
        status.update({
            "progress": self.progress,
            "batch_size": self.batch_size,
            "batches_completed": self.batches_completed,
        })
        return status
