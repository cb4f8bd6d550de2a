"""Grow-only counter (G-Counter) CRDT.

A G-Counter is a replicated counter that can only be incremented.
Each replica keeps one accumulator per replica it has heard of; the
total is the sum of all accumulators. Merge takes the element-wise
maximum, so every accumulator only ever grows.

PNCounter builds on two G-Counters.

Example::

    a = GCounter("A")
    b = GCounter("B")

    a.increment(5)
    b.increment(3)

    a.merge(b)
    assert a.query() == 8  # 5 + 3
"""

from __future__ import annotations


class GCounter:
    """Grow-only counter CRDT.

    Args:
        name: Identity of this replica. Increments are recorded under it.
    """

    __slots__ = ("_name", "_counts")

    def __init__(self, name: str):
        self._name = name
        self._counts: dict[str, int] = {}

    @property
    def name(self) -> str:
        """This replica's identity."""
        return self._name

    @property
    def counts(self) -> dict[str, int]:
        """A copy of the per-replica accumulators."""
        return dict(self._counts)

    def query(self) -> int:
        """Total count across all known replicas."""
        return sum(self._counts.values())

    def increment(self, delta: int = 1) -> None:
        """Add ``delta`` to this replica's accumulator.

        Args:
            delta: Amount to add. Zero is allowed.

        Raises:
            ValueError: If delta is negative.
        """
        if delta < 0:
            raise ValueError(f"GCounter can only grow, got increment of {delta}")
        self._counts[self._name] = self._counts.get(self._name, 0) + delta

    def node_value(self, name: str) -> int:
        """Get one replica's accumulator.

        Args:
            name: The replica to look up.

        Returns:
            The accumulator, or 0 if the replica is unknown.
        """
        return self._counts.get(name, 0)

    def merge(self, other: GCounter) -> None:
        """Merge another G-Counter into this one (element-wise max).

        Args:
            other: Another GCounter to merge from. It is not modified.
        """
        for name, count in other._counts.items():
            self._counts[name] = max(self._counts.get(name, 0), count)

    def __repr__(self) -> str:
        return f"GCounter(name={self._name!r}, value={self.query()})"

    def __eq__(self, other: object) -> bool:
        """Equal replica state: same per-replica counts.

        The name is ignored, so two distinct replicas that have seen the same
        increments compare equal. Use ``is`` to ask whether they are the same
        replica.
        """
        if not isinstance(other, GCounter):
            return NotImplemented
        return self._counts == other._counts
