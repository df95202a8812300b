"""
BioProcessing — Stock Class
Capacity-bounded accumulator for a single resource.
"""

from dataclasses import dataclass
from typing import Optional, Callable
from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class ResourceType(Enum):
    """Resources held by facility stocks."""
    ALGAE = auto()
    FERTILIZER = auto()
    ORGANIC_MATTER = auto()
    ORGANIC_WASTE = auto()
    BIOFUEL = auto()
    BIOGAS = auto()


@dataclass
class Stock:
    """
    A resource stock with a hard capacity.

    Every mutation clamps so that 0 <= current_level <= capacity.
    Callbacks let the host react when the stock fills up or runs dry.
    """

    name: str
    resource_type: ResourceType
    capacity: float
    current_level: float = 0.0

    # Historical tracking
    total_inflow: float = 0.0
    total_outflow: float = 0.0
    total_overflow: float = 0.0

    # Callbacks
    on_empty: Optional[Callable] = None
    on_full: Optional[Callable] = None

    def __post_init__(self):
        """Validate initial state."""
        if self.capacity < 0:
            raise ValueError(f"{self.name}: negative capacity {self.capacity}")
        if self.current_level > self.capacity:
            logger.warning(f"{self.name}: Initial level {self.current_level} exceeds capacity {self.capacity}")
            self.current_level = self.capacity
        if self.current_level < 0:
            logger.warning(f"{self.name}: Negative initial level {self.current_level}")
            self.current_level = 0.0

    @property
    def free_capacity(self) -> float:
        """Space available for storage."""
        return self.capacity - self.current_level

    @property
    def fill_fraction(self) -> float:
        """Current level as fraction of capacity."""
        if self.capacity == 0:
            return 0.0
        return self.current_level / self.capacity

    @property
    def is_empty(self) -> bool:
        return self.current_level <= 0.0

    @property
    def is_full(self) -> bool:
        return self.current_level >= self.capacity

    def add(self, amount: float) -> float:
        """
        Add resource to the stock.

        Returns:
            Amount actually added (may be less if capacity exceeded).
        """
        if amount < 0:
            raise ValueError(f"Cannot add negative amount: {amount}")

        actual_add = min(amount, self.free_capacity)
        overflow = amount - actual_add

        self.current_level = min(self.capacity, self.current_level + actual_add)
        self.total_inflow += actual_add

        if overflow > 0:
            self.total_overflow += overflow
            logger.debug(f"{self.name}: Overflow {overflow:.2f} (capacity reached)")

        if actual_add > 0 and self.is_full and self.on_full:
            self.on_full(self)

        return actual_add

    def remove(self, amount: float) -> float:
        """
        Remove resource from the stock.

        Returns:
            Amount actually removed (may be less if insufficient).
        """
        if amount < 0:
            raise ValueError(f"Cannot remove negative amount: {amount}")

        actual_remove = min(amount, self.current_level)

        self.current_level = max(0.0, self.current_level - actual_remove)
        self.total_outflow += actual_remove

        if actual_remove > 0 and self.is_empty and self.on_empty:
            self.on_empty(self)

        return actual_remove

    def remove_all(self) -> float:
        """Empty the stock, returning what it held."""
        return self.remove(self.current_level)

    def get_status(self) -> dict:
        """Get current status as dictionary."""
        return {
            "name": self.name,
            "resource_type": self.resource_type.name,
            "current_level": self.current_level,
            "capacity": self.capacity,
            "fill_fraction": self.fill_fraction,
            "is_empty": self.is_empty,
            "is_full": self.is_full,
            "total_inflow": self.total_inflow,
            "total_outflow": self.total_outflow,
            "total_overflow": self.total_overflow,
        }

    def __repr__(self) -> str:
        return f"Stock({self.name}: {self.current_level:.1f}/{self.capacity:.1f} {self.resource_type.name})"
