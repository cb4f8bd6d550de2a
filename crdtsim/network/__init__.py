"""Network simulators that move CRDT state between replicas.

Two topologies share the same online/offline bookkeeping:

- **PeerToPeerNetwork**: any replica broadcasts to all online peers.
- **StarNetwork**: clients sync only with the server in slot 0.
"""

from crdtsim.network.base import NetworkStats, ReplicaNetwork
from crdtsim.network.peer_to_peer import PeerToPeerNetwork
from crdtsim.network.slot import ReplicaSlot, SlotStatus
from crdtsim.network.star import StarNetwork

__all__ = [
    "NetworkStats",
    "PeerToPeerNetwork",
    "ReplicaNetwork",
    "ReplicaSlot",
    "SlotStatus",
    "StarNetwork",
]
