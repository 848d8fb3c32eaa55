from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pygame.math import Vector2

if TYPE_CHECKING:
    from ..core.agent import Agent
    from ..core.world import World


def heading_vector(heading: float) -> Vector2:
    radians = math.radians(heading)
    return Vector2(math.cos(radians), math.sin(radians))


def forward(position: Vector2, heading: float, distance: float) -> Vector2:
    return position + heading_vector(heading) * distance


def heading_towards(origin: Vector2, target: Vector2) -> float:
    offset = target - origin
    if offset.length_squared() < 1e-12:
        return 0.0
    return math.degrees(math.atan2(offset.y, offset.x)) % 360.0


def wander(world: World, agent: Agent, amplitude: float, turn: float) -> Vector2:
    """Turn by a uniform angle in [-turn, turn] degrees and step ``amplitude`` forward."""
    agent.heading = (agent.heading + world.rng.next_range(-turn, turn)) % 360.0
    return forward(agent.position, agent.heading, amplitude)


def is_culling_cycle(world: World) -> bool:
    culling = world.config.culling
    return culling.enabled and world.cycle != 0 and world.cycle % culling.period == 0


def cull(world: World, agent: Agent) -> None:
    if world.rng.bernoulli(world.config.culling.probability):
        world.remove(agent)


def culling_guard(world: World, agent: Agent) -> bool:
    return is_culling_cycle(world)


def leave_if_outside(world: World, agent: Agent) -> None:
    world.remove(agent)


def outside_guard(world: World, agent: Agent) -> bool:
    return world.out_of_bounds(agent.position)
