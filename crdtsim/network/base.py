"""Shared slot bookkeeping for replica networks.

``ReplicaNetwork`` owns the online/offline state machine used by every
topology:

    ACTIVE --disconnect--> OFFLINE --reconnect--> ACTIVE

Transitions only happen through explicit ``disconnect``/``reconnect``
calls. Anything else (disconnecting an offline replica, reconnecting an
online one) is a silent no-op. Topologies add their own ways of moving
state between replicas on top of this.

The network only references the CRDTs it carries. The driver allocates
them and keeps mutating them directly (``increment``) while the network
moves state around with ``merge``.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass

from crdtsim.crdt.protocol import CRDT
from crdtsim.network.slot import ReplicaSlot, SlotStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkStats:
    """Statistics snapshot from a replica network.

    Attributes:
        replicas: Replicas registered with the network.
        online: Replicas currently reachable.
        offline: Replicas currently disconnected.
        broadcasts: Broadcasts that reached the network.
        syncs: Completed client/server synchronizations.
        merges: Individual ``merge`` calls issued by the network.
        skipped: Broadcasts or syncs dropped because a participant was unreachable.
        disconnects: Replicas taken offline.
        reconnects: Replicas brought back online.
    """

    replicas: int = 0
    online: int = 0
    offline: int = 0
    broadcasts: int = 0
    syncs: int = 0
    merges: int = 0
    skipped: int = 0
    disconnects: int = 0
    reconnects: int = 0


class ReplicaNetwork:
    """Base class for simulated replica networks.

    Args:
        name: Name used in log narration. Defaults to the class name.
    """

    header = "Network state:"

    def __init__(self, name: str | None = None) -> None:
        self._name = name or type(self).__name__
        self._slots: list[ReplicaSlot] = []

        # Stats
        self._broadcasts = 0
        self._syncs = 0
        self._merges = 0
        self._skipped = 0
        self._disconnects = 0
        self._reconnects = 0

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, slots={len(self._slots)})"

    @property
    def stats(self) -> NetworkStats:
        """Return a frozen snapshot of network statistics."""
        return NetworkStats(
            replicas=len(self.replicas),
            online=len(self.online),
            offline=len(self.offline),
            broadcasts=self._broadcasts,
            syncs=self._syncs,
            merges=self._merges,
            skipped=self._skipped,
            disconnects=self._disconnects,
            reconnects=self._reconnects,
        )

    @property
    def replicas(self) -> list[CRDT]:
        """Every registered replica in slot order, online or not."""
        return [s.replica for s in self._slots if s.replica is not None]

    @property
    def online(self) -> list[CRDT]:
        """Replicas currently reachable, in slot order."""
        return [s.replica for s in self._slots if s.is_active]

    @property
    def offline(self) -> list[CRDT]:
        """Replicas currently disconnected, in slot order."""
        return [s.replica for s in self._slots if s.is_offline]

    def is_online(self, index: int) -> bool:
        """Whether the replica in slot ``index`` is reachable.

        Raises:
            IndexError: If ``index`` was never handed out by this network.
        """
        return self._slot(index).is_active

    def values(self) -> dict[str, Hashable]:
        """Current value of every registered replica, keyed by name."""
        return {r.name: r.query() for r in self.replicas}

    def disconnect(self, index: int) -> None:
        """Take a replica offline.

        No-op if the slot is not currently online.

        Args:
            index: Slot index returned when the replica was added.

        Raises:
            IndexError: If ``index`` was never handed out by this network.
        """
        slot = self._slot(index)
        if not slot.is_active:
            return
        self._log_disconnect(slot)
        slot.status = SlotStatus.OFFLINE
        self._disconnects += 1

    def reconnect(self, index: int) -> None:
        """Bring an offline replica back online.

        No-op if the slot is not currently offline.

        Args:
            index: Slot index returned when the replica was added.

        Raises:
            IndexError: If ``index`` was never handed out by this network.
        """
        slot = self._slot(index)
        if not slot.is_offline:
            return
        self._log_reconnect(slot)
        slot.status = SlotStatus.ACTIVE
        self._reconnects += 1

    def count_partitions(self) -> int:
        """Number of distinct values across all replicas, online and offline.

        1 means every replica agrees. That does not prove every replica
        has seen every update if increments are still happening.
        """
        return len({r.query() for r in self.replicas})

    def is_converged(self) -> bool:
        return self.count_partitions() == 1

    def dump(self) -> str:
        """Render the network state as text.

        Online replicas are listed first, then offline ones when there
        are any. Ends with a banner when every replica agrees.
        """
        offline = self.offline
        lines = [self.header]
        if offline:
            lines.append("- online:")
        lines.extend(_describe_replica(r) for r in self.online)
        if offline:
            lines.append("- offline")
            lines.extend(_describe_replica(r) for r in offline)
        if self.count_partitions() == 1:
            lines.append("ALL CONVERGED!")
        return "\n".join(lines) + "\n"

    # -- internals ---------------------------------------------------------

    def _slot(self, index: int) -> ReplicaSlot:
        if not 0 <= index < len(self._slots):
            raise IndexError(
                f"[{self._name}] No replica slot {index} (network has {len(self._slots)} slots)"
            )
        return self._slots[index]

    def _append(self, replica: CRDT) -> int:
        slot = ReplicaSlot(index=len(self._slots), replica=replica, status=SlotStatus.ACTIVE)
        self._slots.append(slot)
        logger.debug("[%s] Added '%s' at slot %d", self._name, replica.name, slot.index)
        return slot.index

    def _merge(self, receiver: CRDT, source: CRDT) -> None:
        receiver.merge(source)
        self._merges += 1
        logger.debug(
            "[%s] Merged '%s' into '%s' -> %s",
            self._name,
            source.name,
            receiver.name,
            receiver.query(),
        )

    def _log_disconnect(self, slot: ReplicaSlot) -> None:
        logger.info("[%s] Disconnect '%s' from the network.", self._name, slot.replica.name)

    def _log_reconnect(self, slot: ReplicaSlot) -> None:
        logger.info("[%s] Reconnecting '%s' to the network.", self._name, slot.replica.name)


def _describe_replica(replica: CRDT) -> str:
    return f"  {replica.name}: {replica.query()}"
