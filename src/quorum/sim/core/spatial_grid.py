from __future__ import annotations

import math
from typing import TYPE_CHECKING, Dict, Iterator, List, Tuple

from pygame.math import Vector2

from .agent import Species
from .errors import WorldInvariantError

if TYPE_CHECKING:
    from .agent import Agent

_Key = Tuple[int, int]


class SpatialGrid:
    """
    Uniform bucket grid, one layer per species.

    Buckets are keyed by id so removal is O(1); query results come back in
    ascending id order, which is registry (creation) order.
    """

    def __init__(self, cell_size: float) -> None:
        self._cell_size = cell_size
        self._layers: Dict[Species, Dict[_Key, Dict[int, "Agent"]]] = {species: {} for species in Species}
        self._locations: Dict[int, Tuple[Species, _Key]] = {}

    def __len__(self) -> int:
        return len(self._locations)

    def __contains__(self, agent_id: int) -> bool:
        return agent_id in self._locations

    def clear(self) -> None:
        for layer in self._layers.values():
            layer.clear()
        self._locations.clear()

    def insert(self, agent: "Agent") -> None:
        if agent.id in self._locations:
            raise WorldInvariantError(f"agent {agent.id} is already indexed")
        key = self._cell_key(agent.position)
        layer = self._layers[agent.species]
        bucket = layer.get(key)
        if bucket is None:
            bucket = {}
            layer[key] = bucket
        bucket[agent.id] = agent
        self._locations[agent.id] = (agent.species, key)

    def remove(self, agent: "Agent") -> None:
        species, key = self._locations.pop(agent.id)
        layer = self._layers[species]
        bucket = layer[key]
        del bucket[agent.id]
        if not bucket:
            del layer[key]

    def move(self, agent: "Agent", position: Vector2) -> None:
        species, old_key = self._locations[agent.id]
        agent.position = position
        new_key = self._cell_key(position)
        if new_key == old_key:
            return
        layer = self._layers[species]
        bucket = layer[old_key]
        del bucket[agent.id]
        if not bucket:
            del layer[old_key]
        target = layer.get(new_key)
        if target is None:
            target = {}
            layer[new_key] = target
        target[agent.id] = agent
        self._locations[agent.id] = (species, new_key)

    def build_neighbor_cell_offsets(self, radius: float) -> List[Tuple[int, int]]:
        cell_range = int(math.ceil(radius / self._cell_size))
        return [(dx, dy) for dx in range(-cell_range, cell_range + 1) for dy in range(-cell_range, cell_range + 1)]

    def get_neighbors(self, species: Species, position: Vector2, radius: float) -> List["Agent"]:
        if radius <= 0:
            return []
        found: List["Agent"] = []
        base_key = self._cell_key(position)
        radius_sq = radius * radius
        pos_x = position.x
        pos_y = position.y
        layer = self._layers[species]

        for dx, dy in self.build_neighbor_cell_offsets(radius):
            bucket = layer.get((base_key[0] + dx, base_key[1] + dy))
            if not bucket:
                continue
            for agent in bucket.values():
                pos = agent.position
                offset_x = pos.x - pos_x
                offset_y = pos.y - pos_y
                if offset_x * offset_x + offset_y * offset_y <= radius_sq:
                    found.append(agent)
        found.sort(key=lambda agent: agent.id)
        return found

    def collect_in_bounds(
        self, species: Species, bounds: Tuple[float, float, float, float]
    ) -> Iterator["Agent"]:
        """Yield agents whose bucket overlaps the bounding box; callers filter exactly."""
        min_x, min_y, max_x, max_y = bounds
        low = self._cell_key(Vector2(min_x, min_y))
        high = self._cell_key(Vector2(max_x, max_y))
        layer = self._layers[species]
        if (high[0] - low[0] + 1) * (high[1] - low[1] + 1) >= len(layer):
            for bucket in layer.values():
                yield from bucket.values()
            return
        for kx in range(low[0], high[0] + 1):
            for ky in range(low[1], high[1] + 1):
                bucket = layer.get((kx, ky))
                if bucket:
                    yield from bucket.values()

    def indexed_species(self, agent_id: int) -> Species:
        return self._locations[agent_id][0]

    def _cell_key(self, position: Vector2) -> _Key:
        return (int(position.x // self._cell_size), int(position.y // self._cell_size))
