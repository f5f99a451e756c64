"""Per-slot rack capacity ledger.

The ledger is the only shared mutable state of a planning run. Every
reservation is visible to every later shortfall computation, across all
products, because all products compete for the same racks.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Set, Tuple

from bakeplan.models.planned_batch import PlannedBatch
from bakeplan.models.production_unit import ProductionUnit
from .errors import CapacityError


@dataclass(frozen=True)
class OccupancyEntry:
    """
    One rack committed in a slot.

    Attributes:
        unit_id: Production unit
        rack: Rack index within the unit
        product_id: Product occupying the rack
        quantity: Units in the batch
        batch: The planned batch, or None for logged production
    """
    unit_id: str
    rack: int
    product_id: str
    quantity: int
    batch: Optional[PlannedBatch] = None

    @property
    def is_planned(self) -> bool:
        return self.batch is not None


@dataclass
class SlotCapacityRecord:
    """
    Rack usage for a single slot.

    Invariants:
        len(occupancy) <= total_capacity
        each (unit_id, rack) pair appears at most once

    Attributes:
        slot: Slot-aligned start
        total_capacity: Sum of all unit capacities
        occupancy: Committed racks in commit order
    """
    slot: datetime
    total_capacity: int
    occupancy: List[OccupancyEntry] = field(default_factory=list)

    def taken(self) -> Set[Tuple[str, int]]:
        """(unit_id, rack) pairs already committed."""
        return {(entry.unit_id, entry.rack) for entry in self.occupancy}

    @property
    def used(self) -> int:
        return len(self.occupancy)

    @property
    def free(self) -> int:
        return self.total_capacity - len(self.occupancy)

    def is_full(self) -> bool:
        return len(self.occupancy) >= self.total_capacity


class CapacityLedger:
    """
    Tracks which oven racks are committed in each slot.

    Rack assignment is deterministic first-fit: units in their configured
    order, racks from 1 upward. Floor staff rely on the same inputs always
    producing the same rack assignments.

    Example:
        >>> ledger = CapacityLedger([ProductionUnit(id="oven1", capacity=2)])
        >>> ledger.reserve(slot, "WG_CHCR_LQ", 6).rack   # 1
        >>> ledger.reserve(slot, "WG_CHCR_LQ", 6).rack   # 2
        >>> ledger.reserve(slot, "WG_CHCR_LQ", 6)        # None (slot full)
    """

    def __init__(self, units: Sequence[ProductionUnit]):
        """
        Initialize an empty ledger.

        Args:
            units: Production units in first-fit order
        """
        self.units = list(units)
        self.total_capacity = sum(unit.capacity for unit in self.units)
        self._units_by_id = {unit.id: unit for unit in self.units}
        self._records: Dict[datetime, SlotCapacityRecord] = {}

    def record(self, slot: datetime) -> SlotCapacityRecord:
        """Capacity record for a slot, created on first access."""
        if slot not in self._records:
            self._records[slot] = SlotCapacityRecord(slot=slot, total_capacity=self.total_capacity)
        return self._records[slot]

    def slots(self) -> List[datetime]:
        """Slots that have a capacity record, ascending."""
        return sorted(self._records)

    def is_full(self, slot: datetime) -> bool:
        return self.record(slot).is_full()

    def free_count(self, slot: datetime) -> int:
        return self.record(slot).free

    def next_free_rack(self, slot: datetime) -> Optional[Tuple[str, int]]:
        """
        First free (unit_id, rack) pair in a slot.

        Returns:
            The pair, or None when every rack in the slot is committed
        """
        taken = self.record(slot).taken()
        for unit in self.units:
            for rack in unit.rack_numbers():
                if (unit.id, rack) not in taken:
                    return unit.id, rack
        return None

    def reserve(self, slot: datetime, product_id: str, quantity: int) -> Optional[PlannedBatch]:
        """
        Reserve the first free rack in a slot for a new batch.

        Args:
            slot: Slot-aligned bake start
            product_id: Product to bake
            quantity: Batch size

        Returns:
            The planned batch, or None when the slot is full
        """
        record = self.record(slot)
        if record.is_full():
            return None

        free_rack = self.next_free_rack(slot)
        if free_rack is None:
            return None

        unit_id, rack = free_rack
        batch = PlannedBatch(
            start=slot,
            unit_id=unit_id,
            rack=rack,
            product_id=product_id,
            quantity=quantity,
        )
        record.occupancy.append(OccupancyEntry(
            unit_id=unit_id,
            rack=rack,
            product_id=product_id,
            quantity=quantity,
            batch=batch,
        ))
        return batch

    def occupy(self, slot: datetime, unit_id: str, rack: int, product_id: str, quantity: int) -> None:
        """
        Record a rack that is already committed (e.g. logged production).

        Raises:
            CapacityError: If the unit or rack is unknown or already taken
        """
        unit = self._units_by_id.get(unit_id)
        if unit is None or not unit.has_rack(rack):
            raise CapacityError(
                f"Unknown rack {unit_id} r{rack}",
                context={"slot": slot, "product_id": product_id},
            )

        record = self.record(slot)
        if (unit_id, rack) in record.taken():
            raise CapacityError(
                f"Rack {unit_id} r{rack} already committed",
                context={"slot": slot, "product_id": product_id},
            )

        record.occupancy.append(OccupancyEntry(
            unit_id=unit_id,
            rack=rack,
            product_id=product_id,
            quantity=quantity,
        ))

    def planned_batches(self) -> List[PlannedBatch]:
        """All reserved batches ordered by (start, unit_id, rack)."""
        batches = [
            entry.batch
            for record in self._records.values()
            for entry in record.occupancy
            if entry.batch is not None
        ]
        batches.sort(key=lambda b: b.sort_key())
        return batches

    def utilization(self) -> Dict[datetime, Tuple[int, int]]:
        """slot -> (used racks, total racks) for every recorded slot."""
        return {
            slot: (self._records[slot].used, self._records[slot].total_capacity)
            for slot in self.slots()
        }
