"""Per-epoch metric sinks."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Dict, Mapping, Sequence


def _epoch_row(epoch: int, split: str, metrics: Mapping[str, float]) -> Dict[str, object]:
    row: Dict[str, object] = {"epoch": int(epoch), "split": split}
    row.update({k: float(v) for k, v in metrics.items() if isinstance(v, (int, float))})
    return row


class JsonlSink:
    """One JSON record per epoch, tagged with the run's seed and color labels."""

    def __init__(
        self,
        path: str | Path,
        *,
        split: str = "train",
        seed: int | None = None,
        labels: Sequence[str] | None = None,
    ) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.split = split
        self.seed = seed
        self.labels = list(labels) if labels is not None else None

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        record = _epoch_row(epoch, self.split, metrics)
        record["seed"] = self.seed
        if self.labels is not None:
            record["labels"] = self.labels
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    __call__ = on_epoch


class CsvSink:
    """Epoch metrics as CSV; the header is written with the first row."""

    def __init__(self, path: str | Path, *, split: str = "train") -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.split = split

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        row = _epoch_row(epoch, self.split, metrics)
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=sorted(row))
            if handle.tell() == 0:
                writer.writeheader()
            writer.writerow(row)

    __call__ = on_epoch


__all__ = ["JsonlSink", "CsvSink"]
