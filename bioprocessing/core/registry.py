"""
BioProcessing — Facility Registry
Non-owning per-kind collections of live facilities.
"""

from typing import Dict, Iterator, List, Optional
import itertools
import logging
import weakref

from .facility import Facility, FacilityKind

logger = logging.getLogger(__name__)


class FacilityRegistry:
    """
    Tracks live facilities of each kind.

    Entries are weak references: the registry never keeps a facility
    alive, and a facility dropped by its owner disappears from iteration.
    Ids come from a per-kind counter and are never reused.
    """

    def __init__(self):
        self._facilities: Dict[FacilityKind, "weakref.WeakValueDictionary[int, Facility]"] = {
            kind: weakref.WeakValueDictionary() for kind in FacilityKind
        }
        self._id_counters = {kind: itertools.count() for kind in FacilityKind}

    def next_id(self, kind: FacilityKind) -> int:
        """Reserve the next id for a facility of the given kind."""
        return next(self._id_counters[kind])

    def register(self, facility: Facility):
        """Register a facility under its kind and id."""
        entries = self._facilities[facility.kind]
        if facility.facility_id in entries:
            raise ValueError(f"{facility.name} is already registered")
        entries[facility.facility_id] = facility
        logger.debug(f"Registered {facility.name}")

    def remove(self, facility: Facility) -> bool:
        """
        Remove a facility. Removing one that is not registered is a no-op.

        Returns:
            True if the facility was registered.
        """
        entries = self._facilities[facility.kind]
        if entries.get(facility.facility_id) is not facility:
            return False
        del entries[facility.facility_id]
        logger.debug(f"Deregistered {facility.name}")
        return True

    def get(self, kind: FacilityKind, facility_id: int) -> Optional[Facility]:
        """Get a live facility by kind and id."""
        return self._facilities[kind].get(facility_id)

    def facilities(self, kind: FacilityKind) -> List[Facility]:
        """Live facilities of a kind, in creation order."""
        return [f for _, f in sorted(self._facilities[kind].items(), key=lambda item: item[0])]

    def all_facilities(self) -> List[Facility]:
        """All live facilities, grouped by kind."""
        result = []
        for kind in FacilityKind:
            result.extend(self.facilities(kind))
        return result

    def count(self, kind: FacilityKind) -> int:
        return len(self._facilities[kind])

    def counts(self) -> Dict[str, int]:
        return {kind.name: self.count(kind) for kind in FacilityKind}

    def __contains__(self, facility: Facility) -> bool:
        return self._facilities[facility.kind].get(facility.facility_id) is facility

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._facilities.values())

    def __iter__(self) -> Iterator[Facility]:
        return iter(self.all_facilities())
