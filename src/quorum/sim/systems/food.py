from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from ..core.regions import Disk
from . import motion
from .reflex import Reflex, always

if TYPE_CHECKING:
    from ..core.agent import Food
    from ..core.world import World


def generate_food(world: World) -> int:
    """Scatter this cycle's food; with clustering, add a batch around a fresh random point."""
    food = world.config.food
    created = 0
    for _ in range(food.food_rnd):
        world.spawn_food(world.random_point_in(world.inner_domain))
        created += 1
    if food.clustering:
        center = world.random_point_in(world.inner_domain)
        cluster = Disk(center.x, center.y, food.cluster_dim)
        world.cluster_region = cluster
        for _ in range(food.food_cluster):
            # Points near the edge of the disk may fall outside the domain.
            world.spawn_food(world.inner_domain.clamp(world.random_point_in(cluster)))
            created += 1
    return created


def drift(world: World, agent: Food) -> None:
    food = world.config.food
    world.move(agent, motion.wander(world, agent, food.wandering_amplitude, food.wander_turn))


FOOD_REFLEXES: Tuple[Reflex, ...] = (
    Reflex("drift", always, drift),
    Reflex("boundary", motion.outside_guard, motion.leave_if_outside),
    Reflex("culling", motion.culling_guard, motion.cull),
)
