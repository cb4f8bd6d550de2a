"""crdtsim - a teaching simulator for state-based counter CRDTs.

Replicas of a G-Counter or PN-Counter are registered with a simulated
network (peer-to-peer mesh or star), diverge while disconnected, and
converge again through merges once they can talk.
"""

import logging

from crdtsim.crdt import CRDT, GCounter, PNCounter
from crdtsim.instrumentation import ConvergenceRecorder
from crdtsim.logging_config import (
    configure_from_env,
    enable_console_logging,
    enable_file_logging,
)
from crdtsim.network import (
    NetworkStats,
    PeerToPeerNetwork,
    ReplicaNetwork,
    ReplicaSlot,
    SlotStatus,
    StarNetwork,
)
from crdtsim.visual import plot_convergence

# Silent unless the application configures logging.
logging.getLogger("crdtsim").addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # CRDT types
    "CRDT",
    "GCounter",
    "PNCounter",
    # Networks
    "NetworkStats",
    "PeerToPeerNetwork",
    "ReplicaNetwork",
    "ReplicaSlot",
    "SlotStatus",
    "StarNetwork",
    # Instrumentation
    "ConvergenceRecorder",
    "plot_convergence",
    # Logging
    "configure_from_env",
    "enable_console_logging",
    "enable_file_logging",
]
