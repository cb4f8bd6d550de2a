"""Step-by-step history of replica values in a network.

The driver calls ``record`` after each step of a scenario. Every call
captures the value and connectivity of each registered replica plus the
network's partition count, which makes it easy to see when replicas
diverge and when they converge again.

Example::

    recorder = ConvergenceRecorder(network)
    recorder.record("initial")
    network.broadcast_all()
    recorder.record("broadcast_all")
    df = recorder.to_dataframe()
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from crdtsim.network.base import ReplicaNetwork


class ConvergenceRecorder:
    """Collects one row per replica per recorded step.

    Args:
        network: The network to observe. It is only read.
    """

    STEP = "step"
    LABEL = "label"
    REPLICA = "replica"
    VALUE = "value"
    ONLINE = "online"
    PARTITIONS = "partitions"

    COLUMNS = [STEP, LABEL, REPLICA, VALUE, ONLINE, PARTITIONS]

    def __init__(self, network: ReplicaNetwork) -> None:
        self._network = network
        self._rows: list[dict[str, Any]] = []
        self._steps: list[tuple[int, str, int]] = []

    @property
    def network(self) -> ReplicaNetwork:
        return self._network

    @property
    def steps(self) -> int:
        """Number of recorded steps."""
        return len(self._steps)

    def record(self, label: str = "") -> int:
        """Capture the current state of every registered replica.

        Args:
            label: Short description of the step that just happened.

        Returns:
            The step number of this record (zero-based).
        """
        step = len(self._steps)
        partitions = self._network.count_partitions()
        online = {id(r) for r in self._network.online}
        for replica in self._network.replicas:
            self._rows.append({
                self.STEP: step,
                self.LABEL: label,
                self.REPLICA: replica.name,
                self.VALUE: replica.query(),
                self.ONLINE: id(replica) in online,
                self.PARTITIONS: partitions,
            })
        self._steps.append((step, label, partitions))
        return step

    def partitions(self) -> list[tuple[int, str, int]]:
        """Partition count per step as ``(step, label, partitions)``."""
        return list(self._steps)

    def to_dataframe(self) -> pd.DataFrame:
        """All recorded rows as a DataFrame with ``COLUMNS``."""
        if not self._rows:
            return pd.DataFrame(columns=self.COLUMNS)
        return pd.DataFrame(self._rows, columns=self.COLUMNS)

    def clear(self) -> None:
        """Drop every recorded step."""
        self._rows.clear()
        self._steps.clear()
