from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from pygame.math import Vector2

from ..core.agent import DisplayState, Species
from . import motion
from .reflex import Reflex, always

if TYPE_CHECKING:
    from ..core.agent import Cell
    from ..core.world import World


def move(world: World, agent: Cell) -> None:
    cell = world.config.cell
    visible = world.agents_within(Species.FOOD, agent.position, cell.ray_of_perception)
    if not visible:
        target = motion.wander(world, agent, cell.wandering_amplitude, cell.wander_turn)
        world.move(agent, world.domain.clamp(target))
        return
    # min() keeps the first of equally near candidates, i.e. registry order.
    nearest = min(visible, key=lambda food: agent.position.distance_squared_to(food.position))
    offset = nearest.position - agent.position
    distance = offset.length()
    if distance <= 0:
        return
    agent.heading = motion.heading_towards(agent.position, nearest.position)
    step = min(cell.wandering_amplitude, distance)
    world.move(agent, world.domain.clamp(agent.position + offset * (step / distance)))


def food_in_reach(world: World, agent: Cell) -> bool:
    return bool(world.agents_within(Species.FOOD, agent.position, world.config.cell.dimension))


def forage(world: World, agent: Cell) -> None:
    cell = world.config.cell
    candidates = world.agents_within(Species.FOOD, agent.position, cell.dimension)
    world.remove(world.rng.pick(candidates))
    agent.health += cell.increase_of_health
    if world.config.health_policy == "cap":
        agent.health = min(agent.health, cell.max_health)
    elif agent.health > cell.reproducing_threshold:
        reproduce(world, agent)


def reproduce(world: World, agent: Cell) -> None:
    jitter = world.config.cell.offspring_jitter
    offset = Vector2(world.rng.next_range(-jitter, jitter), world.rng.next_range(-jitter, jitter))
    child = world.spawn_cell(agent.position + offset, generation=agent.generation + 1)
    child.heading = agent.heading
    agent.health = world.config.cell.initial_health


def hormone_in_reach(world: World, agent: Cell) -> bool:
    return bool(world.agents_within(Species.HORMONE, agent.position, world.config.cell.dimension))


def absorb(world: World, agent: Cell) -> None:
    candidates = world.agents_within(Species.HORMONE, agent.position, world.config.cell.dimension)
    world.remove(world.rng.pick(candidates))
    agent.estimator.record(world.cycle)
    world.record("absorptions")


def spontaneous_sample(world: World, agent: Cell) -> None:
    if world.rng.bernoulli(world.config.cell.spontaneous_sample_probability):
        agent.estimator.sample(world.cycle)


def memory_full(world: World, agent: Cell) -> bool:
    return agent.estimator.is_full()


def estimate_frequency(world: World, agent: Cell) -> None:
    agent.estimator.update()


def emission_probability(world: World, agent: Cell) -> float:
    return max(0.0, min(1.0, agent.absorbing_frequency * world.config.alpha))


def emit(world: World, agent: Cell) -> None:
    if not world.rng.bernoulli(emission_probability(world, agent)):
        return
    cell = world.config.cell
    heading = world.rng.next_heading()
    world.spawn_hormone(motion.forward(agent.position, heading, cell.dimension), heading, cell.spreading_speed)
    world.record("emissions")


def display_state_for(frequency: float, threshold: float) -> DisplayState:
    return DisplayState.LUMINESCENT if frequency > threshold else DisplayState.DARK


def update_display(world: World, agent: Cell) -> None:
    agent.display_state = display_state_for(agent.absorbing_frequency, world.config.cell.lightning_threshold)


def age(world: World, agent: Cell) -> None:
    agent.health -= 1
    if agent.health <= 0:
        world.remove(agent)


CELL_REFLEXES: Tuple[Reflex, ...] = (
    Reflex("movement", always, move),
    Reflex("foraging", food_in_reach, forage),
    Reflex("absorption", hormone_in_reach, absorb),
    Reflex("spontaneous-sample", always, spontaneous_sample),
    Reflex("frequency", memory_full, estimate_frequency),
    Reflex("emission", always, emit),
    Reflex("display", always, update_display),
    Reflex("aging", always, age),
    Reflex("culling", motion.culling_guard, motion.cull),
)
