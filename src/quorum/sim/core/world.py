from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from pygame.math import Vector2

from .agent import SPECIES_ORDER, Agent, Cell, Food, Hormone, Species
from .config import SimulationConfig
from .errors import StaleAgentError, WorldInvariantError
from .regions import Box, Disk, Region
from .rng import DeterministicRng
from .spatial_grid import SpatialGrid
from ..systems import metrics as metrics_system
from ..types.metrics import TickMetrics
from ..types.snapshot import Snapshot, SnapshotMetadata, SnapshotWorld

logger = logging.getLogger(__name__)

# Food and Hormone are removed once a coordinate reaches this distance from the edge.
BOUNDARY_MARGIN = 1.0

_AGENT_TYPES = {Species.CELL: Cell, Species.FOOD: Food, Species.HORMONE: Hormone}
_EVENT_NAMES = ("births", "deaths", "absorptions", "emissions", "faults")


class World:
    """
    Owns the square domain, the live-agent registry, the spatial index and the
    shared random source. Agents never hold references to each other; every
    neighbor lookup goes through :meth:`agents_within` or :meth:`agents_inside`.
    """

    def __init__(self, config: SimulationConfig):
        config.validate()
        self._config = config
        self._rng = DeterministicRng(config.seed)
        self._grid = SpatialGrid(config.cell_size)
        self._registries: Dict[Species, Dict[int, Agent]] = {species: {} for species in SPECIES_ORDER}
        size = float(config.world_dimension)
        self._domain = Box(0.0, 0.0, size, size)
        self._inner_domain = self._domain.inset(BOUNDARY_MARGIN)
        self._next_id = 0
        self._cycle = 0
        self._cluster_region: Optional[Disk] = None
        self._events: Dict[str, int] = dict.fromkeys(_EVENT_NAMES, 0)
        self._metrics: TickMetrics | None = None
        self._bootstrap_population()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def rng(self) -> DeterministicRng:
        return self._rng

    @property
    def cycle(self) -> int:
        return self._cycle

    @property
    def domain(self) -> Box:
        return self._domain

    @property
    def inner_domain(self) -> Box:
        return self._inner_domain

    @property
    def cluster_region(self) -> Optional[Disk]:
        return self._cluster_region

    @cluster_region.setter
    def cluster_region(self, region: Optional[Disk]) -> None:
        self._cluster_region = region

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    @property
    def agents(self) -> List[Agent]:
        """Live agents in processing order: species first, then registry order."""
        ordered: List[Agent] = []
        for species in SPECIES_ORDER:
            ordered.extend(self._registries[species].values())
        return ordered

    def of_species(self, species: Species) -> List[Agent]:
        return list(self._registries[species].values())

    def cells(self) -> List[Cell]:
        return list(self._registries[Species.CELL].values())  # type: ignore[arg-type]

    def is_live(self, agent: Agent) -> bool:
        return self._registries[agent.species].get(agent.id) is agent

    def count(self, predicate: Callable[[Any], bool], species: Species | None = None) -> int:
        pool = self.agents if species is None else self._registries[species].values()
        return sum(1 for agent in pool if predicate(agent))

    def advance_cycle(self) -> int:
        self._cycle += 1
        self._events = dict.fromkeys(_EVENT_NAMES, 0)
        return self._cycle

    def record(self, event: str, amount: int = 1) -> None:
        self._events[event] += amount

    def events(self) -> Dict[str, int]:
        return dict(self._events)

    def spawn(self, species: Species, **attrs: Any) -> Agent:
        agent = _AGENT_TYPES[species](id=self._next_id, **attrs)
        self._next_id += 1
        registry = self._registries[species]
        if agent.id in registry:
            raise WorldInvariantError(f"agent id {agent.id} already registered")
        registry[agent.id] = agent
        self._grid.insert(agent)
        return agent

    def spawn_cell(self, position: Vector2, generation: int = 0) -> Cell:
        cell_config = self._config.cell
        cell = self.spawn(
            Species.CELL,
            position=self._domain.clamp(position),
            health=cell_config.initial_health,
            generation=generation,
            born_cycle=self._cycle,
        )
        if generation > 0:
            self.record("births")
        return cell  # type: ignore[return-value]

    def spawn_food(self, position: Vector2) -> Food:
        return self.spawn(Species.FOOD, position=position)  # type: ignore[return-value]

    def spawn_hormone(self, position: Vector2, heading: float, speed: float) -> Hormone:
        return self.spawn(  # type: ignore[return-value]
            Species.HORMONE,
            position=position,
            heading=heading,
            speed=speed,
            age=self._config.hormone.lifetime,
        )

    def remove(self, agent: Agent) -> None:
        registry = self._registries[agent.species]
        if registry.get(agent.id) is not agent:
            raise StaleAgentError(f"{agent.species.value} {agent.id} is not registered")
        del registry[agent.id]
        self._grid.remove(agent)
        agent.alive = False
        if agent.species is Species.CELL:
            self.record("deaths")

    def move(self, agent: Agent, position: Vector2) -> None:
        self._grid.move(agent, position)

    def agents_within(self, species: Species, point: Vector2, radius: float) -> List[Agent]:
        return self._grid.get_neighbors(species, point, radius)

    def agents_inside(self, region: Region, species: Species | None = None) -> List[Agent]:
        pools = SPECIES_ORDER if species is None else (species,)
        bounds = region.bounds()
        found: List[Agent] = []
        for pool in pools:
            matches = [agent for agent in self._grid.collect_in_bounds(pool, bounds) if region.contains(agent.position)]
            matches.sort(key=lambda agent: agent.id)
            found.extend(matches)
        return found

    def random_point_in(self, region: Region) -> Vector2:
        return region.random_point(self._rng)

    def out_of_bounds(self, position: Vector2) -> bool:
        low = self._inner_domain.min_x
        high = self._inner_domain.max_x
        return position.x <= low or position.x >= high or position.y <= low or position.y >= high

    def check_invariants(self) -> None:
        seen: Dict[int, Species] = {}
        for species, registry in self._registries.items():
            for agent_id, agent in registry.items():
                if agent_id in seen:
                    raise WorldInvariantError(
                        f"agent {agent_id} registered as both {seen[agent_id].value} and {species.value}"
                    )
                seen[agent_id] = species
                if agent.id != agent_id or not agent.alive:
                    raise WorldInvariantError(f"registry entry {agent_id} does not match a live agent")
                if agent_id not in self._grid or self._grid.indexed_species(agent_id) is not species:
                    raise WorldInvariantError(f"agent {agent_id} is missing from the {species.value} index")
        if len(seen) != len(self._grid):
            raise WorldInvariantError(f"index holds {len(self._grid)} agents but registry holds {len(seen)}")

    def finish_cycle(self, duration_ms: float) -> TickMetrics:
        self._metrics = metrics_system.create_metrics(self, self._events, duration_ms)
        return self._metrics

    def snapshot(self) -> Snapshot:
        metrics = self._metrics if self._metrics is not None else metrics_system.create_metrics(self, self._events, 0.0)
        cluster = self._cluster_region
        return Snapshot(
            cycle=self._cycle,
            metrics=metrics,
            agents=[self._agent_snapshot(agent) for agent in self.agents],
            world=SnapshotWorld(
                size=self._domain.max_x,
                cluster=None if cluster is None else (cluster.center_x, cluster.center_y, cluster.radius),
            ),
            metadata=SnapshotMetadata(
                seed=self._config.seed,
                profile=self._config.profile,
                health_policy=self._config.health_policy,
                lightning_threshold=self._config.cell.lightning_threshold,
                config_version=self._config.config_version,
            ),
        )

    def reset(self) -> None:
        for registry in self._registries.values():
            registry.clear()
        self._grid.clear()
        self._rng.reset()
        self._next_id = 0
        self._cycle = 0
        self._cluster_region = None
        self._events = dict.fromkeys(_EVENT_NAMES, 0)
        self._metrics = None
        self._bootstrap_population()

    def _bootstrap_population(self) -> None:
        for _ in range(self._config.ncell):
            cell = self.spawn_cell(self.random_point_in(self._domain))
            cell.heading = self._rng.next_heading()
        logger.info(
            "bootstrapped %d cells in a %.0fx%.0f domain (profile=%s, seed=%d)",
            self._config.ncell,
            self._domain.max_x,
            self._domain.max_y,
            self._config.profile,
            self._config.seed,
        )

    def _agent_snapshot(self, agent: Agent) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": agent.id,
            "species": agent.species.value,
            "x": agent.position.x,
            "y": agent.position.y,
            "heading": agent.heading,
            "alive": agent.alive,
        }
        if isinstance(agent, Cell):
            payload["health"] = agent.health
            payload["display_state"] = agent.display_state.value
            payload["absorbing_frequency"] = agent.absorbing_frequency
            payload["memory_size"] = len(agent.estimator)
            payload["generation"] = agent.generation
        elif isinstance(agent, Food):
            payload["radius"] = self._config.food.radius
        elif isinstance(agent, Hormone):
            payload["speed"] = agent.speed
            payload["age"] = agent.age
        return payload
