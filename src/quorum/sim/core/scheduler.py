from __future__ import annotations

import logging
from time import perf_counter
from typing import Dict, List, Sequence

from .agent import Species
from .errors import AgentFault
from .world import World
from ..systems import cells, food, hormones
from ..systems.reflex import Reflex, run_reflexes
from ..types.metrics import TickMetrics

logger = logging.getLogger(__name__)

REFLEXES: Dict[Species, Sequence[Reflex]] = {
    Species.CELL: cells.CELL_REFLEXES,
    Species.FOOD: food.FOOD_REFLEXES,
    Species.HORMONE: hormones.HORMONE_REFLEXES,
}


class Scheduler:
    """
    Advances the world one cycle at a time.

    Updates are applied with immediate visibility: agents are visited in the
    order they were alive at the start of the cycle (Cells, Food, Hormones;
    creation order within a species) and every mutation, creation or removal
    is seen by agents visited later in the same cycle. Agents created during
    a cycle first act on the next one.
    """

    def __init__(self, world: World) -> None:
        self.world = world

    def tick(self) -> TickMetrics:
        start = perf_counter()
        world = self.world
        cycle = world.advance_cycle()
        roster = world.agents
        food.generate_food(world)

        for agent in roster:
            if not agent.alive:
                continue
            try:
                run_reflexes(world, agent, REFLEXES[agent.species])
            except AgentFault as exc:
                world.record("faults")
                logger.warning(
                    "cycle %d: %s %d skipped remaining behaviors: %s", cycle, agent.species.value, agent.id, exc
                )

        world.check_invariants()
        metrics = world.finish_cycle((perf_counter() - start) * 1000.0)
        logger.debug(
            "cycle %d: population=%d luminescent=%d food=%d hormones=%d",
            cycle,
            metrics.population,
            metrics.luminescent,
            metrics.food,
            metrics.hormones,
        )
        return metrics

    def run(self, cycles: int) -> List[TickMetrics]:
        return [self.tick() for _ in range(cycles)]
