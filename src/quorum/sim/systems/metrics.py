from __future__ import annotations

from typing import TYPE_CHECKING, Dict

from ..core.agent import Species
from ..types.metrics import TickMetrics

if TYPE_CHECKING:
    from ..core.world import World


def create_metrics(world: World, events: Dict[str, int], duration_ms: float) -> TickMetrics:
    population = 0
    luminescent = 0
    for cell in world.cells():
        if cell.health <= 0:
            continue
        population += 1
        if cell.luminescent:
            luminescent += 1

    cluster = world.cluster_region
    cluster_population = 0
    if cluster is not None:
        cluster_population = sum(1 for cell in world.agents_inside(cluster, Species.CELL) if cell.health > 0)

    return TickMetrics(
        cycle=world.cycle,
        population=population,
        luminescent=luminescent,
        dark=population - luminescent,
        cluster_population=cluster_population,
        food=len(world.of_species(Species.FOOD)),
        hormones=len(world.of_species(Species.HORMONE)),
        births=events.get("births", 0),
        deaths=events.get("deaths", 0),
        absorptions=events.get("absorptions", 0),
        emissions=events.get("emissions", 0),
        faults=events.get("faults", 0),
        tick_duration_ms=duration_ms,
    )
