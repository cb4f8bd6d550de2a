"""Convergence chart for a recorded scenario."""

from __future__ import annotations

import logging
from pathlib import Path

from crdtsim.instrumentation.recorder import ConvergenceRecorder

logger = logging.getLogger(__name__)


def plot_convergence(
    recorder: ConvergenceRecorder,
    path: str | Path,
    title: str = "Replica convergence",
) -> Path:
    """Plot replica values and partition count per recorded step.

    The top panel has one line per replica; offline samples are drawn
    hollow. The bottom panel shows the number of distinct values.

    Args:
        recorder: Recorder holding at least one step.
        path: Output PNG path. Parent directories are created.
        title: Figure title.

    Returns:
        The path the figure was written to.

    Raises:
        ValueError: If nothing has been recorded.
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    df = recorder.to_dataframe()
    if df.empty:
        raise ValueError("Nothing recorded, cannot plot convergence")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 7), sharex=True)

    for name, group in df.groupby(ConvergenceRecorder.REPLICA, sort=False):
        line, = ax1.plot(
            group[ConvergenceRecorder.STEP],
            group[ConvergenceRecorder.VALUE],
            marker="o",
            label=str(name),
        )
        offline = group[~group[ConvergenceRecorder.ONLINE].astype(bool)]
        if not offline.empty:
            ax1.scatter(
                offline[ConvergenceRecorder.STEP],
                offline[ConvergenceRecorder.VALUE],
                s=80,
                facecolors="white",
                edgecolors=line.get_color(),
                zorder=3,
            )

    ax1.set_ylabel("Value")
    ax1.set_title(title)
    ax1.legend(fontsize=8)
    ax1.grid(True, alpha=0.2)

    steps = recorder.partitions()
    ax2.step(
        [s for s, _, _ in steps],
        [p for _, _, p in steps],
        where="mid",
        color="coral",
    )
    ax2.axhline(y=1, color="seagreen", linestyle="--", alpha=0.6, label="converged")
    ax2.set_ylabel("Partitions")
    ax2.set_xlabel("Step")
    ax2.set_xticks([s for s, _, _ in steps])
    ax2.set_xticklabels([label or str(s) for s, label, _ in steps], rotation=45, ha="right", fontsize=7)
    ax2.legend(fontsize=8)
    ax2.grid(True, alpha=0.2)

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    logger.info("Saved convergence chart to %s", path)
    return path
