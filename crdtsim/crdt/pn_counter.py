"""Positive-Negative counter (PN-Counter) CRDT.

A PN-Counter supports both increment and decrement by combining two
G-Counters: one for increments (P) and one for the magnitude of
decrements (N). The value is ``P.query() - N.query()``.

Example::

    c = PNCounter("A")
    c.increment(10)
    c.increment(-3)
    assert c.query() == 7
"""

from __future__ import annotations

from crdtsim.crdt.g_counter import GCounter


class PNCounter:
    """Positive-Negative counter CRDT.

    Args:
        name: Identity of this replica, shared by both inner counters.
    """

    __slots__ = ("_name", "_p", "_n")

    def __init__(self, name: str):
        self._name = name
        self._p = GCounter(name)
        self._n = GCounter(name)

    @property
    def name(self) -> str:
        """This replica's identity."""
        return self._name

    @property
    def positive(self) -> GCounter:
        """The G-Counter holding increments."""
        return self._p

    @property
    def negative(self) -> GCounter:
        """The G-Counter holding decrement magnitudes."""
        return self._n

    @property
    def increments(self) -> int:
        """Total increments across all replicas."""
        return self._p.query()

    @property
    def decrements(self) -> int:
        """Total decrements across all replicas."""
        return self._n.query()

    def query(self) -> int:
        """Net count (increments - decrements). May be negative."""
        return self._p.query() - self._n.query()

    def increment(self, delta: int = 1) -> None:
        """Add a signed amount to the counter.

        Non-negative deltas go to P, negative ones go to N as ``-delta``.

        Args:
            delta: Any integer.
        """
        if delta >= 0:
            self._p.increment(delta)
        else:
            self._n.increment(-delta)

    def decrement(self, delta: int = 1) -> None:
        """Subtract ``delta`` from the counter.

        Args:
            delta: Amount to subtract (must not be negative).

        Raises:
            ValueError: If delta is negative.
        """
        if delta < 0:
            raise ValueError(f"Decrement must not be negative, got {delta}")
        self._n.increment(delta)

    def merge(self, other: PNCounter) -> None:
        """Merge another PN-Counter into this one.

        Merges the P and N G-Counters independently.

        Args:
            other: Another PNCounter to merge from.
        """
        self._p.merge(other._p)
        self._n.merge(other._n)

    def __repr__(self) -> str:
        return f"PNCounter(name={self._name!r}, value={self.query()})"

    def __eq__(self, other: object) -> bool:
        """Equal replica state in both halves; the name is ignored."""
        if not isinstance(other, PNCounter):
            return NotImplemented
        return self._p == other._p and self._n == other._n
