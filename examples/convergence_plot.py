"""Chart how PN-Counter replicas diverge and converge across a partition.

Records every step of a peer-to-peer scenario and saves a chart of the
replica values and partition count.

Run:
    python examples/convergence_plot.py [output_dir]

Output:
    output/pncounter_convergence.png
"""

import sys
from pathlib import Path

from crdtsim import ConvergenceRecorder, PNCounter, PeerToPeerNetwork, plot_convergence


def run(output_dir: Path) -> ConvergenceRecorder:
    network = PeerToPeerNetwork(name="mesh")
    counters = [PNCounter(name) for name in ("A", "B", "C", "D")]
    a, _, c, d = (network.add(counter) for counter in counters)
    recorder = ConvergenceRecorder(network)
    recorder.record("start")

    for counter, delta in zip(counters, (5, -2, 3, 1)):
        counter.increment(delta)
    recorder.record("local writes")

    network.broadcast_all()
    recorder.record("broadcast_all")

    network.disconnect(c)
    network.disconnect(d)
    recorder.record("partition C, D")

    counters[0].increment(4)
    counters[2].increment(-6)
    counters[3].increment(2)
    recorder.record("writes during partition")

    network.broadcast_all()
    recorder.record("broadcast_all (partitioned)")

    network.reconnect(c)
    network.reconnect(d)
    recorder.record("heal")

    network.broadcast(a)
    recorder.record("broadcast A")

    network.broadcast_all()
    recorder.record("broadcast_all")

    path = plot_convergence(
        recorder,
        output_dir / "pncounter_convergence.png",
        title="PN-Counter convergence after a partition",
    )
    print(f"Saved: {path}")
    print(recorder.to_dataframe().pivot(index="step", columns="replica", values="value"))
    return recorder


def main():
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("output")
    recorder = run(output_dir)
    assert recorder.partitions()[-1][2] == 1


if __name__ == "__main__":
    main()
