from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from . import motion
from .reflex import Reflex, always

if TYPE_CHECKING:
    from ..core.agent import Hormone
    from ..core.world import World


def diffuse(world: World, agent: Hormone) -> None:
    """Friction diffusion: glide and slow down while fast, then jitter at the baseline speed."""
    hormone = world.config.hormone
    if agent.speed > 1:
        world.move(agent, motion.forward(agent.position, agent.heading, agent.speed))
        agent.speed -= hormone.friction
        return
    agent.speed = hormone.baseline_speed
    agent.heading = world.rng.next_heading()
    world.move(agent, motion.forward(agent.position, agent.heading, agent.speed))


def age(world: World, agent: Hormone) -> None:
    agent.age -= 1
    if agent.age <= 0:
        world.remove(agent)


HORMONE_REFLEXES: Tuple[Reflex, ...] = (
    Reflex("diffusion", always, diffuse),
    Reflex("boundary", motion.outside_guard, motion.leave_if_outside),
    Reflex("aging", always, age),
    Reflex("culling", motion.culling_guard, motion.cull),
)
