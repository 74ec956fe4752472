from __future__ import annotations

import argparse
import csv
import json
import logging
import math
from pathlib import Path
from typing import Optional

from ..render.sinks import CsvTraceSink
from ..sim.core.config import SimulationConfig
from ..sim.core.manager import SteeringManager
from ..sim.types.metrics import FrameMetrics

logger = logging.getLogger(__name__)

_BASIC_HEADER = [
    "tick",
    "population",
    "avg_speed",
    "tick_ms",
]

_DETAILED_HEADER = [
    "tick",
    "population",
    "avg_speed",
    "max_speed",
    "avg_steer",
    "tick_ms",
]


def _format_basic_row(metrics: FrameMetrics, tick_ms: float) -> list[object]:
    return [metrics.tick, metrics.population, f"{metrics.average_speed:.4f}", f"{tick_ms:.3f}"]


def _format_detailed_row(metrics: FrameMetrics, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        metrics.population,
        f"{metrics.average_speed:.4f}",
        f"{metrics.max_speed:.4f}",
        f"{metrics.average_steer:.4f}",
        f"{tick_ms:.3f}",
    ]


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0, "p99": 0.0}
    sorted_values = sorted(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(sum(values) / len(values)),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
        "p99": _percentile(sorted_values, 0.99),
    }


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    config_path: Optional[Path] = None,
    summary_path: Optional[Path] = None,
    target: Optional[tuple[float, float]] = None,
    trace_path: Optional[Path] = None,
    log_format: str = "detailed",
) -> SteeringManager:
    log_mode = log_format.lower().strip()
    if log_mode not in {"basic", "detailed"}:
        raise ValueError(f"Unknown log format: {log_format}")

    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if seed is not None:
        config.seed = seed
    manager = SteeringManager.from_config(config)
    if target is not None:
        manager.update_target(target)
    logger.info(
        "running %d steps with %d agents on %.0fx%.0f (seed=%d)",
        steps,
        len(manager.agents),
        config.width,
        config.height,
        config.seed,
    )

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_DETAILED_HEADER if log_mode == "detailed" else _BASIC_HEADER)
    trace = CsvTraceSink.open(trace_path) if trace_path else None

    tick_ms_series: list[float] = []
    speed_series: list[float] = []
    frame = manager.snapshot()
    try:
        for _ in range(steps):
            frame = manager.update(config.width, config.height)
            metrics = manager.metrics
            tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
            tick_ms_series.append(tick_ms)
            speed_series.append(metrics.average_speed)
            if writer:
                if log_mode == "detailed":
                    writer.writerow(_format_detailed_row(metrics, tick_ms))
                else:
                    writer.writerow(_format_basic_row(metrics, tick_ms))
            if trace:
                trace.write_frame(frame)
    finally:
        if csv_file:
            csv_file.close()
        if trace:
            trace.close()

    if summary_path:
        summary = {
            "steps": steps,
            "seed": config.seed,
            "population": len(manager.agents),
            "log_format": log_mode,
            "deterministic_log": deterministic_log,
            "tick_ms": _summary_stats(tick_ms_series),
            "avg_speed": _summary_stats(speed_series),
            "final_frame": frame.to_payload(),
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))
    logger.info("finished %d steps", steps)
    return manager


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless flocking simulation")
    parser.add_argument("--steps", type=int, default=600)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML simulation config")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-frame metrics")
    parser.add_argument(
        "--log-format",
        choices=["basic", "detailed"],
        default="detailed",
        help="CSV format to write when --log is provided (basic keeps only speed and timing).",
    )
    parser.add_argument("--summary", type=Path, default=None, help="JSON file to write run summary stats")
    parser.add_argument("--trace", type=Path, default=None, help="CSV file to write every agent transform")
    parser.add_argument(
        "--target",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        default=None,
        help="Broadcast a fixed seek target before the first frame.",
    )
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run_headless(
        args.steps,
        args.seed,
        args.log,
        deterministic_log=args.deterministic_log,
        config_path=args.config,
        summary_path=args.summary,
        target=tuple(args.target) if args.target else None,
        trace_path=args.trace,
        log_format=args.log_format,
    )


if __name__ == "__main__":
    main()
