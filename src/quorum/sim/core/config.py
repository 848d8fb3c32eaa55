from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict

import yaml

from .errors import ConfigurationError

HEALTH_POLICIES = ("reproduce", "cap")

_INT_FIELDS = {
    "": ("world_dimension", "ncell", "seed"),
    "cell": ("increase_of_health", "reproducing_threshold", "max_health", "initial_health"),
    "food": ("food_rnd", "food_cluster"),
    "hormone": ("lifetime",),
    "culling": ("period",),
}
_REAL_FIELDS = {
    "": ("alpha", "cell_size"),
    "cell": (
        "ray_of_perception",
        "lightning_threshold",
        "spreading_speed",
        "dimension",
        "wandering_amplitude",
        "wander_turn",
        "spontaneous_sample_probability",
        "offspring_jitter",
    ),
    "food": ("cluster_dim", "radius", "wandering_amplitude", "wander_turn"),
    "hormone": ("friction", "baseline_speed"),
    "culling": ("probability",),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


@dataclass
class CellConfig:
    ray_of_perception: float = 5.0
    increase_of_health: int = 10
    lightning_threshold: float = 0.05
    reproducing_threshold: int = 150
    max_health: int = 200
    initial_health: int = 100
    spreading_speed: float = 3.0
    dimension: float = 1.5
    wandering_amplitude: float = 1.0
    wander_turn: float = 50.0
    spontaneous_sample_probability: float = 0.015
    offspring_jitter: float = 1.0


@dataclass
class FoodConfig:
    food_rnd: int = 4
    clustering: bool = False
    cluster_dim: float = 5.0
    food_cluster: int = 4
    radius: float = 0.5
    wandering_amplitude: float = 0.2
    wander_turn: float = 50.0


@dataclass
class HormoneConfig:
    lifetime: int = 40
    friction: float = 0.05
    baseline_speed: float = 0.95


@dataclass
class CullingConfig:
    enabled: bool = True
    period: int = 2000
    probability: float = 0.95


@dataclass
class SimulationConfig:
    world_dimension: int = 100
    ncell: int = 60
    alpha: float = 4.0
    health_policy: str = "reproduce"
    cell_size: float = 5.0
    seed: int = 42
    profile: str = "reproducing"
    config_version: str = "v1"
    cell: CellConfig = field(default_factory=CellConfig)
    food: FoodConfig = field(default_factory=FoodConfig)
    hormone: HormoneConfig = field(default_factory=HormoneConfig)
    culling: CullingConfig = field(default_factory=CullingConfig)

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_config(data)

    def validate(self) -> None:
        def check(ok: bool, message: str) -> None:
            if not ok:
                raise ConfigurationError(message)

        for rule, kind, groups in ((_is_int, "an integer", _INT_FIELDS), (_is_real, "a finite number", _REAL_FIELDS)):
            for section, names in groups.items():
                owner = getattr(self, section) if section else self
                for name in names:
                    label = f"{section}.{name}" if section else name
                    value = getattr(owner, name)
                    check(rule(value), f"{label} must be {kind}, got {value!r}")
        for label, flag in (("food.clustering", self.food.clustering), ("culling.enabled", self.culling.enabled)):
            check(isinstance(flag, bool), f"{label} must be true or false, got {flag!r}")

        cell = self.cell
        food = self.food
        hormone = self.hormone
        check(self.world_dimension > 2, f"world_dimension must be > 2, got {self.world_dimension}")
        check(self.ncell >= 0, f"ncell must be >= 0, got {self.ncell}")
        check(self.alpha >= 0, f"alpha must be >= 0, got {self.alpha}")
        check(self.cell_size > 0, f"cell_size must be > 0, got {self.cell_size}")
        check(
            self.health_policy in HEALTH_POLICIES,
            f"health_policy must be one of {HEALTH_POLICIES}, got {self.health_policy!r}",
        )

        check(cell.ray_of_perception >= 0, "cell.ray_of_perception must be >= 0")
        check(cell.increase_of_health >= 0, "cell.increase_of_health must be >= 0")
        check(cell.lightning_threshold >= 0, "cell.lightning_threshold must be >= 0")
        check(cell.initial_health > 0, "cell.initial_health must be > 0")
        check(cell.max_health >= cell.initial_health, "cell.max_health must be >= cell.initial_health")
        check(
            cell.reproducing_threshold >= cell.initial_health,
            "cell.reproducing_threshold must be >= cell.initial_health",
        )
        check(cell.spreading_speed >= 0, "cell.spreading_speed must be >= 0")
        check(cell.dimension > 0, "cell.dimension must be > 0")
        check(cell.wandering_amplitude >= 0, "cell.wandering_amplitude must be >= 0")
        check(
            0.0 <= cell.spontaneous_sample_probability <= 1.0,
            "cell.spontaneous_sample_probability must be within [0, 1]",
        )
        check(cell.offspring_jitter >= 0, "cell.offspring_jitter must be >= 0")

        check(food.food_rnd >= 0, "food.food_rnd must be >= 0")
        check(food.food_cluster >= 0, "food.food_cluster must be >= 0")
        check(food.cluster_dim >= 0, "food.cluster_dim must be >= 0")
        check(food.radius >= 0, "food.radius must be >= 0")
        check(food.wandering_amplitude >= 0, "food.wandering_amplitude must be >= 0")

        check(hormone.lifetime > 0, "hormone.lifetime must be > 0")
        check(hormone.friction > 0, "hormone.friction must be > 0")
        check(0 < hormone.baseline_speed <= 1, "hormone.baseline_speed must be within (0, 1]")

        check(self.culling.period > 0, "culling.period must be > 0")
        check(0.0 <= self.culling.probability <= 1.0, "culling.probability must be within [0, 1]")


def _reproducing_profile() -> SimulationConfig:
    return SimulationConfig(
        profile="reproducing",
        health_policy="reproduce",
        food=FoodConfig(clustering=False),
        culling=CullingConfig(enabled=True),
    )


def _clustered_profile() -> SimulationConfig:
    return SimulationConfig(
        profile="clustered",
        health_policy="cap",
        food=FoodConfig(clustering=True, food_rnd=2, food_cluster=6),
        culling=CullingConfig(enabled=False),
    )


PROFILES: Dict[str, Callable[[], SimulationConfig]] = {
    "reproducing": _reproducing_profile,
    "clustered": _clustered_profile,
}


def profile_config(name: str, **overrides: Any) -> SimulationConfig:
    try:
        factory = PROFILES[name]
    except (KeyError, TypeError):
        raise ConfigurationError(f"Unknown profile {name!r}; expected one of {sorted(PROFILES)}") from None
    return replace(factory(), **overrides)


def load_config(raw: dict) -> SimulationConfig:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"configuration must be a mapping, got {type(raw).__name__}")
    base = profile_config(raw.get("profile", "reproducing"))

    def _section(name: str, current: Any) -> Any:
        values = raw.get(name, {}) or {}
        try:
            return replace(current, **values)
        except TypeError as exc:
            raise ConfigurationError(f"Invalid {name} options: {exc}") from exc

    sections = {
        "cell": _section("cell", base.cell),
        "food": _section("food", base.food),
        "hormone": _section("hormone", base.hormone),
        "culling": _section("culling", base.culling),
    }
    sim_values = {k: v for k, v in raw.items() if k not in sections}
    try:
        return replace(base, **sections, **sim_values)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid simulation options: {exc}") from exc
