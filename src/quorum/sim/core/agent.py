from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Tuple

from pygame.math import Vector2

from .frequency import FrequencyEstimator


class Species(str, Enum):
    CELL = "Cell"
    FOOD = "Food"
    HORMONE = "Hormone"


# Processing order within a cycle.
SPECIES_ORDER: Tuple[Species, ...] = (Species.CELL, Species.FOOD, Species.HORMONE)


class DisplayState(str, Enum):
    DARK = "Dark"
    LUMINESCENT = "Luminescent"


@dataclass(slots=True)
class Agent:
    species: ClassVar[Species]

    id: int
    position: Vector2
    heading: float = 0.0
    alive: bool = True


@dataclass(slots=True)
class Cell(Agent):
    species: ClassVar[Species] = Species.CELL

    health: int = 0
    display_state: DisplayState = DisplayState.DARK
    generation: int = 0
    born_cycle: int = 0
    estimator: FrequencyEstimator = field(default_factory=FrequencyEstimator)

    @property
    def memory(self) -> Tuple[int, ...]:
        return self.estimator.memory

    @property
    def absorbing_frequency(self) -> float:
        return self.estimator.frequency

    @property
    def luminescent(self) -> bool:
        return self.display_state is DisplayState.LUMINESCENT


@dataclass(slots=True)
class Food(Agent):
    species: ClassVar[Species] = Species.FOOD


@dataclass(slots=True)
class Hormone(Agent):
    species: ClassVar[Species] = Species.HORMONE

    speed: float = 0.0
    age: int = 0
