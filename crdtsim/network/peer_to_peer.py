"""Peer-to-peer mesh where any replica can push its state to every other.

Example::

    from crdtsim import GCounter, PeerToPeerNetwork

    network = PeerToPeerNetwork()
    a, b = GCounter("A"), GCounter("B")
    ia, ib = network.add(a), network.add(b)

    a.increment(1)
    b.increment(2)
    network.broadcast_all()
    assert network.count_partitions() == 1
"""

from __future__ import annotations

import logging

from crdtsim.crdt.protocol import CRDT
from crdtsim.network.base import ReplicaNetwork

logger = logging.getLogger(__name__)


class PeerToPeerNetwork(ReplicaNetwork):
    """Full mesh of replicas exchanging state by broadcast.

    Broadcasts are one-directional: the source is only read, every online
    receiver merges the source's state.
    """

    header = "P2P network state:"

    def add(self, replica: CRDT) -> int:
        """Register a replica. It starts online.

        Returns:
            The new slot index (zero-based, never reused).
        """
        return self._append(replica)

    def broadcast(self, index: int) -> None:
        """Merge the replica in slot ``index`` into every other online replica.

        No-op if the source is offline.

        Raises:
            IndexError: If ``index`` was never handed out by this network.
        """
        slot = self._slot(index)
        if not slot.is_active:
            self._skipped += 1
            return
        source = slot.replica
        logger.info(
            "[%s] Broadcasting from '%s' to all connected replicas...",
            self._name,
            source.name,
        )
        self._broadcasts += 1
        for other in self._slots:
            if other.index != index and other.is_active:
                self._merge(other.replica, source)

    def broadcast_all(self) -> None:
        """Broadcast from every slot in ascending order.

        Receivers updated early in the pass forward what they learned when
        their own turn comes, so one pass converges all replicas that were
        online for the whole pass.
        """
        for index in range(len(self._slots)):
            self.broadcast(index)
