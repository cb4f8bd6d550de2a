"""Replica slots held by a network.

A network keeps an append-only list of slots. Each slot holds a
reference to a driver-owned CRDT together with a status tag, so a
replica is always exactly one of online or offline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from crdtsim.crdt.protocol import CRDT


class SlotStatus(Enum):
    """Connectivity of a replica slot."""

    ACTIVE = auto()
    OFFLINE = auto()
    VACANT = auto()  # reserved, no replica yet (star server placeholder)


@dataclass
class ReplicaSlot:
    """One position in a network.

    Attributes:
        index: Position in the network, stable for the network's lifetime.
        replica: The CRDT referenced by this slot. Not owned by the slot.
        status: Whether the replica is reachable.
    """

    index: int
    replica: CRDT | None = None
    status: SlotStatus = SlotStatus.VACANT

    @property
    def is_active(self) -> bool:
        return self.status is SlotStatus.ACTIVE

    @property
    def is_offline(self) -> bool:
        return self.status is SlotStatus.OFFLINE

    @property
    def is_vacant(self) -> bool:
        return self.status is SlotStatus.VACANT
