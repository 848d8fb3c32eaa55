from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Optional

from ..sim.core.config import PROFILES, SimulationConfig, profile_config
from ..sim.core.scheduler import Scheduler
from ..sim.core.world import World
from ..sim.types.metrics import TickMetrics

logger = logging.getLogger(__name__)

_BASIC_HEADER = ["cycle", "population"]

_DETAILED_HEADER = [
    "cycle",
    "population",
    "luminescent",
    "dark",
    "cluster_population",
    "food",
    "hormones",
    "births",
    "deaths",
    "absorptions",
    "emissions",
    "faults",
    "tick_ms",
]


def _format_basic_row(metrics: TickMetrics) -> list[object]:
    return [metrics.cycle, metrics.population]


def _format_detailed_row(metrics: TickMetrics, tick_ms: float) -> list[object]:
    return [
        metrics.cycle,
        metrics.population,
        metrics.luminescent,
        metrics.dark,
        metrics.cluster_population,
        metrics.food,
        metrics.hormones,
        metrics.births,
        metrics.deaths,
        metrics.absorptions,
        metrics.emissions,
        metrics.faults,
        f"{tick_ms:.3f}",
    ]


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0}
    return {
        "min": float(min(values)),
        "max": float(max(values)),
        "avg": float(sum(values) / len(values)),
    }


def build_config(
    seed: Optional[int] = None, profile: str = "reproducing", config_path: Optional[Path] = None
) -> SimulationConfig:
    config = SimulationConfig.from_yaml(config_path) if config_path else profile_config(profile)
    if seed is not None:
        config.seed = seed
    return config


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    profile: str = "reproducing",
    config_path: Optional[Path] = None,
    log_format: str = "basic",
    summary_path: Optional[Path] = None,
    deterministic_log: bool = False,
) -> list[TickMetrics]:
    log_mode = log_format.lower().strip()
    if log_mode not in {"basic", "detailed"}:
        raise ValueError(f"Unknown log format: {log_format}")

    config = build_config(seed, profile, config_path)
    scheduler = Scheduler(World(config))
    logger.info("running %d cycles (profile=%s, seed=%d)", steps, config.profile, config.seed)

    writer = None
    csv_file = None
    if log_path:
        path = Path(log_path)
        fresh = not path.exists() or path.stat().st_size == 0
        csv_file = path.open("a", newline="")
        writer = csv.writer(csv_file)
        if fresh:
            writer.writerow(_DETAILED_HEADER if log_mode == "detailed" else _BASIC_HEADER)

    history: list[TickMetrics] = []
    try:
        for _ in range(steps):
            metrics = scheduler.tick()
            history.append(metrics)
            if writer:
                if log_mode == "detailed":
                    tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
                    writer.writerow(_format_detailed_row(metrics, tick_ms))
                else:
                    writer.writerow(_format_basic_row(metrics))
    finally:
        if csv_file:
            csv_file.close()

    final_population = history[-1].population if history else len(scheduler.world.cells())
    if summary_path:
        population = [float(m.population) for m in history]
        luminescent = [float(m.luminescent) for m in history]
        peak = max(history, key=lambda m: m.population, default=None)
        summary = {
            "steps": steps,
            "seed": config.seed,
            "profile": config.profile,
            "log_format": log_mode,
            "population": _summary_stats(population),
            "luminescent": _summary_stats(luminescent),
            "peaks": {
                "population": {
                    "value": 0 if peak is None else peak.population,
                    "cycle": -1 if peak is None else peak.cycle,
                },
            },
            "final": {
                "cycle": scheduler.world.cycle,
                "population": final_population,
            },
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))

    logger.info("finished at cycle %d with %d cells", scheduler.world.cycle, final_population)
    return history


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless quorum-sensing simulation")
    parser.add_argument("--steps", type=int, default=3000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--profile", choices=sorted(PROFILES), default="reproducing")
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration (overrides --profile)")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to append one line per cycle to")
    parser.add_argument(
        "--log-format",
        choices=["basic", "detailed"],
        default="basic",
        help="CSV format to write when --log is provided (basic is cycle,population).",
    )
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Optional JSON file to write summary stats for the run.",
    )
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--log-level", default="INFO", help="Python logging level")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_headless(
        args.steps,
        args.seed,
        args.log,
        profile=args.profile,
        config_path=args.config,
        log_format=args.log_format,
        summary_path=args.summary,
        deterministic_log=args.deterministic_log,
    )


if __name__ == "__main__":
    main()
