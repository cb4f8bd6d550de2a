"""Counter CRDTs for replica network simulation.

CRDTs are data structures that converge automatically after network
partitions heal, without requiring consensus. They guarantee eventual
consistency by ensuring merge operations are commutative, associative,
and idempotent.

Provided CRDTs:

- **GCounter**: Grow-only counter (increment only)
- **PNCounter**: Positive-negative counter (increment and decrement)
"""

from crdtsim.crdt.protocol import CRDT
from crdtsim.crdt.g_counter import GCounter
from crdtsim.crdt.pn_counter import PNCounter

__all__ = [
    "CRDT",
    "GCounter",
    "PNCounter",
]
