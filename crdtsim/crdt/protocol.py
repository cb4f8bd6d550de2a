"""Capability protocol for counters that can be replicated by a network.

A network does not care which CRDT it carries. Anything exposing
``merge``, ``query`` and ``name`` can be plugged into
:class:`~crdtsim.network.PeerToPeerNetwork` or
:class:`~crdtsim.network.StarNetwork`. ``merge`` must be:

- **Commutative**: ``merge(a, b) == merge(b, a)``
- **Associative**: ``merge(a, merge(b, c)) == merge(merge(a, b), c)``
- **Idempotent**: ``merge(a, a) == a``

Those properties are what make replicas converge regardless of the order
in which a network delivers state.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol, Self, runtime_checkable


@runtime_checkable
class CRDT(Protocol):
    """Protocol for all state-based CRDTs carried by a network.

    - ``name``: Identity of the replica, used for narration only.
    - ``query()``: Read the current resolved value.
    - ``merge(other)``: Merge another replica's state (in-place).
    """

    @property
    def name(self) -> str:
        """The replica's identity."""
        ...

    def query(self) -> Hashable:
        """The current resolved value of this CRDT."""
        ...

    def merge(self, other: Self) -> None:
        """Merge another replica's state into this one (in-place).

        Must be commutative, associative, and idempotent.

        Args:
            other: Another instance of the same CRDT type.
        """
        ...
