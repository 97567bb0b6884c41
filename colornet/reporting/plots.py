"""Headless-safe training curves."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Tuple


class PlotAdapter:
    """Collect epoch loss/accuracy and optionally save them as a figure."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self._history: List[Tuple[int, float, float]] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    @property
    def plot_path(self) -> Path:
        return self.run_dir / "training.png"

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        if not self.enable_plots:
            return
        loss = float(metrics.get("loss", 0.0))
        accuracy = float(metrics.get("accuracy", 0.0))
        self._history.append((epoch, loss, accuracy))

    def close(self) -> Path | None:
        if not self.enable_plots or not self._history:
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        epochs, losses, accuracies = zip(*self._history)
        fig, (loss_ax, acc_ax) = plt.subplots(1, 2, figsize=(10, 4))
        loss_ax.plot(epochs, losses)
        loss_ax.set_xlabel("Epoch")
        loss_ax.set_ylabel("MSE")
        loss_ax.set_title("Training loss")
        acc_ax.plot(epochs, [a * 100 for a in accuracies])
        acc_ax.set_xlabel("Epoch")
        acc_ax.set_ylabel("Accuracy (%)")
        acc_ax.set_ylim(0, 100)
        acc_ax.set_title("Training accuracy")
        fig.tight_layout()
        fig.savefig(self.plot_path)
        plt.close(fig)
        return self.plot_path

    __call__ = on_epoch
