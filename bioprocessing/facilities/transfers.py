"""
BioProcessing — Transfers
Orchestrator-side moves of resources between facilities.

Each transfer is limited to what the receiver can accept, so nothing is
lost between the two facilities.
"""

from typing import Optional
import logging

from .algae_vat import AlgaeVat
from .mushroom_farm import MushroomFarm
from .bio_reactor import BioReactor
from .composter import Composter

logger = logging.getLogger(__name__)


def _ensure_live(*facilities):
    """Check every party before anything is withdrawn."""
    for facility in facilities:
        facility._ensure_live()


def transfer_fertilizer(composter: Composter, farm: MushroomFarm,
                        amount: Optional[float] = None) -> float:
    """
    Move fertilizer from a composter to a mushroom farm.

    Args:
        amount: Fertilizer requested, or None for as much as possible.

    Returns:
        Amount actually moved.
    """
    _ensure_live(composter, farm)
    requested = composter.fertilizer.current_level if amount is None else amount
    requested = min(requested, farm.fertilizer.free_capacity)
    taken = composter.take_fertilizer(requested)
    farm.add_fertilizer(taken)
    logger.debug(f"{composter.name} -> {farm.name}: {taken:.2f} fertilizer")
    return taken


def deliver_compost(composter: Composter, farm: MushroomFarm,
                    amount: Optional[float] = None) -> float:
    """
    Deliver composter output to a farm as compost.

    Unlike transfer_fertilizer, the farm converts it at the configured
    compost efficiency and the delivery counts towards compost produced.
    """
    _ensure_live(composter, farm)
    requested = composter.fertilizer.current_level if amount is None else amount
    efficiency = farm.rates.compost_efficiency
    requested = min(requested, farm.fertilizer.free_capacity / efficiency)
    taken = composter.take_fertilizer(requested)
    farm.add_compost(taken)
    logger.debug(f"{composter.name} -> {farm.name}: {taken:.2f} compost")
    return taken


def transfer_algae(vat: AlgaeVat, reactor: BioReactor,
                   amount: Optional[float] = None) -> float:
    """Harvest algae from a vat into a reactor's organic matter."""
    _ensure_live(vat, reactor)
    requested = vat.algae.current_level if amount is None else amount
    requested = min(requested, reactor.organic_matter.free_capacity)
    harvested = vat.harvest(requested)
    reactor.add_algae(harvested)
    logger.debug(f"{vat.name} -> {reactor.name}: {harvested:.2f} algae")
    return harvested


def transfer_mushrooms(farm: MushroomFarm, reactor: BioReactor) -> int:
    """Harvest every ready mushroom into a reactor."""
    _ensure_live(farm, reactor)
    harvested = farm.harvest()
    reactor.add_mushrooms(harvested)
    logger.debug(f"{farm.name} -> {reactor.name}: {harvested} mushrooms")
    return harvested
