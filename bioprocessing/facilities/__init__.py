"""
BioProcessing — Facilities Package
Algae vats, mushroom farms, bio reactors and composters.
"""

from .algae_vat import AlgaeVat
from .mushroom_farm import MushroomFarm
from .bio_reactor import BioReactor
from .composter import Composter
from .transfers import (
    transfer_fertilizer,
    deliver_compost,
    transfer_algae,
    transfer_mushrooms,
)

__all__ = [
    'AlgaeVat', 'MushroomFarm', 'BioReactor', 'Composter',
    'transfer_fertilizer', 'deliver_compost', 'transfer_algae', 'transfer_mushrooms',
]
