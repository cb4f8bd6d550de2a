"""Integration tests for the convergence chart.

Run:
    pytest tests/integration/test_convergence_visualization.py -v

Output:
    test_output/test_convergence_visualization/<test_name>/
"""

from __future__ import annotations

import pytest

from crdtsim.crdt.g_counter import GCounter
from crdtsim.crdt.pn_counter import PNCounter
from crdtsim.instrumentation.recorder import ConvergenceRecorder
from crdtsim.network.peer_to_peer import PeerToPeerNetwork
from crdtsim.network.star import StarNetwork
from crdtsim.visual.convergence import plot_convergence


class TestConvergenceChart:

    def test_mesh_partition_chart(self, test_output_dir):
        network = PeerToPeerNetwork()
        counters = [PNCounter(name) for name in ("A", "B", "C")]
        a, b, _ = (network.add(c) for c in counters)
        recorder = ConvergenceRecorder(network)

        for counter, delta in zip(counters, (-1, 2, 3)):
            counter.increment(delta)
        recorder.record("writes")
        network.broadcast_all()
        recorder.record("broadcast_all")
        network.disconnect(b)
        counters[0].increment(10)
        network.broadcast_all()
        recorder.record("partitioned")
        network.reconnect(b)
        network.broadcast_all()
        recorder.record("healed")

        path = plot_convergence(recorder, test_output_dir / "mesh.png")

        assert path.exists()
        assert path.stat().st_size > 0
        assert [p for _, _, p in recorder.partitions()] == [3, 1, 2, 1]

    def test_star_rounds_chart(self, test_output_dir):
        network = StarNetwork()
        network.set_server_replica(GCounter("SERVER"))
        counters = [GCounter(name) for name in ("A", "B", "C")]
        for counter, delta in zip(counters, (1, 2, 3)):
            network.add(counter)
            counter.increment(delta)
        recorder = ConvergenceRecorder(network)
        recorder.record("writes")
        network.sync_all_replicas_to_server()
        recorder.record("round 1")
        network.sync_all_replicas_to_server()
        recorder.record("round 2")

        path = plot_convergence(
            recorder, test_output_dir / "nested" / "star.png", title="Star rounds"
        )

        assert path.exists()
        assert [p for _, _, p in recorder.partitions()] == [4, 3, 1]

    def test_empty_recorder_raises(self, tmp_path):
        recorder = ConvergenceRecorder(PeerToPeerNetwork())
        with pytest.raises(ValueError, match="Nothing recorded"):
            plot_convergence(recorder, tmp_path / "empty.png")
