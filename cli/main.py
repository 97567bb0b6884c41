"""Train the color classifier and show what it predicts for sample pixels."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Iterable, List, Sequence

from colornet.pixels import Pixel
from colornet.training import pipelines
from colornet.training.system import ColorRecognitionSystem

_DEMO_EXTRAS = [(200, 50, 50), (50, 200, 50), (50, 50, 200), (180, 180, 180)]


def configure_logging() -> None:
    level_name = os.getenv("COLORNET_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _parse_pixel(text: str) -> Pixel:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"Expected R,G,B but got {text!r}")
    try:
        return Pixel(*(int(p) for p in parts))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="colors-demo",
        help="Preset configuration to execute",
    )
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config override")
    parser.add_argument("--epochs", type=int, help="Override the number of epochs")
    parser.add_argument(
        "--samples-per-color", type=int, help="Override training samples per color"
    )
    parser.add_argument(
        "--test-samples", type=int, help="Override test samples per color"
    )
    parser.add_argument("--seed", type=int, help="Seed for initialization and sampling")
    parser.add_argument("--run-dir", help="Directory for metrics and summaries")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Save training curves as training.png"
    )
    parser.add_argument(
        "--pixel",
        action="append",
        type=_parse_pixel,
        default=[],
        metavar="R,G,B",
        help="Pixel to classify after training (repeatable)",
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def _load_override(path: Path) -> dict:
    text = path.read_text()
    if path.suffix in {".yml", ".yaml"}:
        import yaml

        return yaml.safe_load(text) or {}
    return json.loads(text)


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(dict(base[key]), value)
        else:
            base[key] = value
    return base


def demo_pixels(system: ColorRecognitionSystem) -> List[Pixel]:
    pixels = [Pixel(*rgb) for rgb in system.colors]
    pixels.extend(Pixel(*rgb) for rgb in _DEMO_EXTRAS)
    pixels.append(Pixel.random(system.rng))
    return pixels


def format_predictions(system: ColorRecognitionSystem, pixels: Sequence[Pixel]) -> List[str]:
    lines: List[str] = []
    for pixel in pixels:
        lines.append(f"Testing pixel: {pixel}")
        lines.append(f"Best prediction: {system.best_prediction_label(pixel)}")
        scores = sorted(system.predict(pixel).items(), key=lambda kv: kv[1], reverse=True)
        for label, score in scores:
            lines.append(f"  {label}: {score * 100:.1f}%")
        lines.append("")
    return lines


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    configure_logging()

    config = json.loads(json.dumps(pipelines.load_preset(args.preset)))
    if args.config:
        override = _load_override(args.config)
        if {"palette", "model", "train"} <= set(override.keys()):
            config = json.loads(json.dumps(override))
        else:
            config = _merge(config, override)

    train_cfg = config.setdefault("train", {})
    if args.epochs is not None:
        train_cfg["epochs"] = args.epochs
    if args.samples_per_color is not None:
        train_cfg["samples_per_color"] = args.samples_per_color
    if args.test_samples is not None:
        train_cfg["test_samples_per_color"] = args.test_samples
    if args.seed is not None:
        train_cfg["seed"] = args.seed
    if args.run_dir:
        train_cfg["run_dir"] = args.run_dir
    if args.enable_plots:
        train_cfg["enable_plots"] = True

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    system, result = pipelines.train_system(config)

    print(f"\nTest Accuracy: {result.test_accuracy * 100:.1f}%\n")
    print("Testing the trained system:")
    print("=" * 50)
    pixels = args.pixel or demo_pixels(system)
    for line in format_predictions(system, pixels):
        print(line)

    print("=" * 50)
    print("Final Training Results:")
    print(f"Final Loss: {result.final_loss:.4f}")
    print(f"Final Training Accuracy: {result.final_accuracy * 100:.1f}%")
    print(f"Test Accuracy: {result.test_accuracy * 100:.1f}%")
    print(json.dumps({"metrics": result.metrics_path, "summary": result.summary_path}, sort_keys=True))


if __name__ == "__main__":
    main()
