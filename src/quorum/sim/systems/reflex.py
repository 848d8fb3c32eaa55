from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Sequence

if TYPE_CHECKING:
    from ..core.world import World

Guard = Callable[["World", Any], bool]
Action = Callable[["World", Any], None]


@dataclass(frozen=True)
class Reflex:
    """A guarded behavior: ``action`` runs when ``guard`` holds for the agent this cycle."""

    name: str
    guard: Guard
    action: Action


def always(world: World, agent: Any) -> bool:
    return True


def run_reflexes(world: World, agent: Any, reflexes: Sequence[Reflex]) -> None:
    for reflex in reflexes:
        if not agent.alive:
            return
        if reflex.guard(world, agent):
            reflex.action(world, agent)
