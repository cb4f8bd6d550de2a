"""Hub-and-spoke network where every client synchronizes through a server.

Slot 0 is the server. Clients never talk to each other: a client's
update reaches another client only after the first has synced with the
server and the second syncs afterwards.

Example::

    from crdtsim import GCounter, StarNetwork

    network = StarNetwork()
    server = network.set_server_replica(GCounter("SERVER"))
    a = network.add(GCounter("A"))
    network.sync_all_replicas_to_server()
"""

from __future__ import annotations

import copy
import logging

from crdtsim.crdt.protocol import CRDT
from crdtsim.network.base import ReplicaNetwork
from crdtsim.network.slot import ReplicaSlot, SlotStatus

logger = logging.getLogger(__name__)

SERVER = 0


class StarNetwork(ReplicaNetwork):
    """Star topology with the server replica at slot 0.

    The server slot is reserved by the first ``add`` if no server has been
    set yet. Until ``set_server_replica`` fills it, the server counts as
    unreachable.
    """

    header = "Star-network state:"

    @property
    def server(self) -> CRDT | None:
        """The server replica, or None if none has been set."""
        if not self._slots:
            return None
        return self._slots[SERVER].replica

    def set_server_replica(self, replica: CRDT) -> int:
        """Install ``replica`` as the server.

        Replaces any previous server in place. The new server is online
        even if the one it replaces had been disconnected.

        Returns:
            The server slot index, always 0.
        """
        if not self._slots:
            return self._append(replica)
        slot = self._slots[SERVER]
        slot.replica = replica
        slot.status = SlotStatus.ACTIVE
        logger.debug("[%s] '%s' is now the server", self._name, replica.name)
        return SERVER

    def add(self, replica: CRDT) -> int:
        """Register a client replica. It starts online.

        Returns:
            The new slot index, never 0.
        """
        if not self._slots:
            self._slots.append(ReplicaSlot(index=SERVER))
        return self._append(replica)

    def sync_with_server(self, index: int) -> None:
        """Exchange state between a client and the server.

        Models a request/response: the client sends its state, the server
        replies right away with what it had before the request and merges
        the client's state afterwards. Both sides merge snapshots taken
        before the exchange and end up with the same value.

        No-op for the server itself and for offline clients. If the server
        is unreachable nothing changes.

        Raises:
            IndexError: If ``index`` was never handed out by this network.
            RuntimeError: If client and server disagree after the exchange.
        """
        if index == SERVER:
            return
        client_slot = self._slot(index)
        if not client_slot.is_active:
            self._skipped += 1
            return
        client = client_slot.replica
        server_slot = self._slots[SERVER]
        if not server_slot.is_active:
            logger.info(
                "[%s] Server is not reachable from replica '%s'.",
                self._name,
                client.name,
            )
            self._skipped += 1
            return
        server = server_slot.replica

        logger.info("[%s] Replica '%s' is syncing with %s.", self._name, client.name, server.name)
        request = copy.deepcopy(client)
        response = copy.deepcopy(server)
        self._merge(client, response)
        self._merge(server, request)
        self._syncs += 1

        if client.query() != server.query():
            raise RuntimeError(
                f"[{self._name}] '{client.name}' and '{server.name}' diverged after sync: "
                f"{client.query()!r} != {server.query()!r}"
            )

    def sync_all_replicas_to_server(self) -> None:
        """Sync every client with the server, in ascending slot order."""
        for index in range(1, len(self._slots)):
            self.sync_with_server(index)

    def _log_disconnect(self, slot: ReplicaSlot) -> None:
        if slot.index == SERVER:
            logger.info("[%s] Server is down.", self._name)
        else:
            super()._log_disconnect(slot)

    def _log_reconnect(self, slot: ReplicaSlot) -> None:
        if slot.index == SERVER:
            logger.info("[%s] Server is back up.", self._name)
        else:
            super()._log_reconnect(slot)
