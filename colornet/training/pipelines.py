"""Preset-driven training runs for the color classifier."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping, Sequence, Tuple

import numpy as np

from ..colors import Color
from ..core.types import RunResult
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter
from .system import (
    DEFAULT_HIDDEN,
    DEFAULT_LEARNING_RATE,
    ColorRecognitionSystem,
    resolve_rgb,
)

_REQUIRED_SECTIONS = {"palette", "model", "train"}

_PRESETS: Dict[str, Mapping[str, object]] = {
    "colors-demo": {
        "palette": "default",
        "model": {"hidden": 16, "lr": 0.5},
        "train": {
            "epochs": 100,
            "samples_per_color": 400,
            "test_samples_per_color": 50,
            "seed": None,
            "log_every": 20,
            "run_dir": "runs/colors-demo",
            "enable_plots": False,
        },
    },
    "rgb-quick": {
        "palette": ["Red", "Green", "Blue"],
        "model": {"hidden": 16, "lr": 0.5},
        "train": {
            "epochs": 50,
            "samples_per_color": 100,
            "test_samples_per_color": 50,
            "seed": 7,
            "log_every": 10,
            "run_dir": "runs/rgb-quick",
            "enable_plots": False,
        },
    },
}

_PRESET_DIR = Path(__file__).resolve().parents[2] / "configs" / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None


def _read_preset_file(path: Path) -> Mapping[str, object]:
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        import yaml

        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported preset file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Preset {path.name} must decode to a mapping")
    return data


def _check_preset_palette(name: str, palette_cfg: object) -> None:
    """Fail at load time if a preset names an unknown color or a bad RGB triple."""

    try:
        palette = resolve_palette(palette_cfg)
        for value in palette.values():
            resolve_rgb(value)
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Preset {name} has an invalid palette: {exc}") from exc
    if not palette:
        raise ValueError(f"Preset {name} has an empty palette")


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        found: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                data = _read_preset_file(file)
                missing = _REQUIRED_SECTIONS - set(data)
                if missing:
                    missing_str = ", ".join(sorted(missing))
                    raise KeyError(f"Preset {file.name} is missing required sections: {missing_str}")
                _check_preset_palette(file.name, data["palette"])
                found[file.stem] = json.loads(json.dumps(data))
        _FILE_PRESETS_CACHE = found
    return {name: deepcopy(cfg) for name, cfg in _FILE_PRESETS_CACHE.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Mapping[str, object]:
    file_overrides = _file_presets()
    if name in file_overrides:
        return file_overrides[name]
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def resolve_palette(palette_cfg: object) -> Dict[str, object]:
    """Turn a config ``palette`` entry into a ``{label: color}`` mapping.

    ``"default"`` (or ``None``) selects every defined :class:`Color`; a list
    selects colors by name; a mapping pairs labels with ``[r, g, b]`` triples
    or color names.
    """

    if palette_cfg is None or palette_cfg == "default":
        return dict(Color.palette())
    if isinstance(palette_cfg, str):
        raise ValueError(f"Unknown palette: {palette_cfg!r}")
    if isinstance(palette_cfg, Mapping):
        palette: Dict[str, object] = {}
        for label, value in palette_cfg.items():
            palette[str(label)] = Color.from_label(value) if isinstance(value, str) else value
        return palette
    if isinstance(palette_cfg, Sequence):
        colors = [Color.from_label(str(name)) for name in palette_cfg]
        return {color.label: color for color in colors}
    raise TypeError(f"Palette must be 'default', a list or a mapping, got {palette_cfg!r}")


def build_system(
    config: Mapping[str, object], callbacks: Sequence[object] | None = None
) -> ColorRecognitionSystem:
    model_cfg = dict(config.get("model", {}))  # type: ignore[arg-type]
    train_cfg = dict(config.get("train", {}))  # type: ignore[arg-type]
    seed = train_cfg.get("seed")
    rng = np.random.default_rng(None if seed is None else int(seed))
    return ColorRecognitionSystem(
        resolve_palette(config.get("palette")),
        learning_rate=float(model_cfg.get("lr", DEFAULT_LEARNING_RATE)),
        hidden_size=int(model_cfg.get("hidden", DEFAULT_HIDDEN)),
        rng=rng,
        callbacks=callbacks,
        log_every=int(train_cfg.get("log_every", 20)),
    )


def train_system(config: Mapping[str, object]) -> Tuple[ColorRecognitionSystem, RunResult]:
    """Train and evaluate a system from ``config``; write run artifacts."""

    train_cfg = dict(config["train"])  # type: ignore[arg-type]
    seed = train_cfg.get("seed")
    epochs = int(train_cfg.get("epochs", 100))
    samples_per_color = int(train_cfg.get("samples_per_color", 400))
    test_samples = int(train_cfg.get("test_samples_per_color", 50))

    run_dir = Path(str(train_cfg.get("run_dir", "runs/colornet")))
    run_dir.mkdir(parents=True, exist_ok=True)

    system = build_system(config)
    jsonl = JsonlSink(
        run_dir / "metrics.jsonl", split="train", seed=seed, labels=system.labels  # type: ignore[arg-type]
    )
    csv_sink = CsvSink(run_dir / "metrics.csv", split="train")
    plots = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))
    system.callbacks.extend([jsonl, csv_sink, plots])

    _print_startup_summary(
        labels=system.labels,
        dims=system.network.layer_sizes,
        learning_rate=system.network.learning_rate,
        epochs=epochs,
        samples_per_color=samples_per_color,
        param_count=system.network.parameter_count(),
    )

    history = system.train(epochs, samples_per_color)
    test_accuracy = system.test_accuracy(test_samples)
    plots.close()

    final = history[-1] if history else None
    summary = {
        "labels": list(system.labels),
        "layer_sizes": list(system.network.layer_sizes),
        "parameters": system.network.parameter_count(),
        "epochs": len(history),
        "final_loss": final.loss if final else None,
        "final_accuracy": final.accuracy if final else None,
        "test_accuracy": test_accuracy,
    }
    summary_path = run_dir / "summary.json"
    summary_path.write_text(json.dumps(summary, sort_keys=True, indent=2))
    (run_dir / "config.json").write_text(json.dumps(config, indent=2))

    result = RunResult(
        epochs=len(history),
        final_loss=final.loss if final else float("nan"),
        final_accuracy=final.accuracy if final else 0.0,
        test_accuracy=test_accuracy,
        metrics_path=str(jsonl.path),
        summary_path=str(summary_path),
    )
    return system, result


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    _, result = train_system(config)
    return result


def _print_startup_summary(
    *,
    labels: Sequence[str],
    dims: Sequence[int],
    learning_rate: float,
    epochs: int,
    samples_per_color: int,
    param_count: int,
) -> None:
    print("=== colornet run ===")
    print(f"Colors        : {', '.join(labels)}")
    print(f"Dimensions    : {list(dims)}")
    print(f"Learning rate : {learning_rate}")
    print(f"Epochs        : {epochs}")
    print(f"Samples/color : {samples_per_color}")
    print(f"Parameters    : {param_count}")
    print("====================")


__all__ = [
    "build_system",
    "load_preset",
    "presets",
    "resolve_palette",
    "run_pipeline",
    "train_system",
]
