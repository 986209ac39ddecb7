"""Error-curve plotting for training runs, safe on headless machines."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping


class PlotAdapter:
    """Record the cumulative error of every round and draw it on ``close``.

    When a ``threshold`` is known it is drawn as a dashed reference line. The
    y axis switches to a log scale once every recorded error is positive,
    since the error usually shrinks by orders of magnitude.
    """

    def __init__(
        self,
        run_dir: str | Path,
        enable_plots: bool = False,
        threshold: float | None = None,
        filename: str = "error.png",
    ):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self.threshold = threshold
        self.filename = filename
        self.rounds: List[int] = []
        self.errors: List[float] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        # round 0 is the empty history before any training
        if not self.enable_plots or step == 0:
            return
        self.rounds.append(int(step))
        self.errors.append(float(metrics.get("cumulative_error", 0.0)))

    def close(self) -> Path | None:
        """Write the figure and return its path, or ``None`` if nothing was drawn."""

        if not self.enable_plots or not self.errors:
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots()
        ax.plot(self.rounds, self.errors, marker="." if len(self.errors) < 50 else None)
        if self.threshold is not None:
            ax.axhline(self.threshold, linestyle="--", color="grey", label="threshold")
            ax.legend()
        if min(self.errors) > 0.0:
            ax.set_yscale("log")
        ax.set_xlabel("Round")
        ax.set_ylabel("Cumulative |error|")
        path = self.run_dir / self.filename
        fig.savefig(path)
        plt.close(fig)
        return path

    __call__ = on_step
