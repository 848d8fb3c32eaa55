from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    cycle: int
    population: int
    luminescent: int
    dark: int
    cluster_population: int
    food: int
    hormones: int
    births: int = 0
    deaths: int = 0
    absorptions: int = 0
    emissions: int = 0
    faults: int = 0
    tick_duration_ms: float = 0.0
