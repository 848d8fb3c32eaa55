from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .metrics import TickMetrics


@dataclass(slots=True)
class Snapshot:
    cycle: int
    metrics: TickMetrics
    agents: List[Dict[str, Any]]
    world: "SnapshotWorld"
    metadata: "SnapshotMetadata"


@dataclass(slots=True)
class SnapshotWorld:
    size: float
    cluster: Optional[Tuple[float, float, float]] = None


@dataclass(slots=True)
class SnapshotMetadata:
    seed: int
    profile: str
    health_policy: str
    lightning_threshold: float
    config_version: str
