from __future__ import annotations

import math
import random
from typing import Sequence, TypeVar

from pygame.math import Vector2

from .errors import EmptyCandidatesError

T = TypeVar("T")


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_range(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)

    def next_heading(self) -> float:
        """Uniform heading in degrees, [0, 360)."""
        return self._random.random() * 360.0

    def bernoulli(self, probability: float) -> bool:
        # Always consumes exactly one draw so the per-agent draw order is stable.
        chance = max(0.0, min(1.0, probability))
        return self._random.random() < chance

    def pick_index(self, count: int) -> int:
        if count <= 0:
            raise EmptyCandidatesError("cannot pick from an empty candidate list")
        return self._random.randrange(count)

    def pick(self, items: Sequence[T]) -> T:
        return items[self.pick_index(len(items))]

    def point_in_disk(self, center: Vector2, radius: float) -> Vector2:
        angle = self._random.uniform(0.0, 2.0 * math.pi)
        distance = radius * math.sqrt(self._random.random())
        return Vector2(center.x + distance * math.cos(angle), center.y + distance * math.sin(angle))
