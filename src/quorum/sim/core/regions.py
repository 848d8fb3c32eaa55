from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple, Union

from pygame.math import Vector2

if TYPE_CHECKING:
    from .rng import DeterministicRng


@dataclass(frozen=True)
class Box:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def contains(self, point: Vector2) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def random_point(self, rng: DeterministicRng) -> Vector2:
        x = rng.next_range(self.min_x, self.max_x)
        y = rng.next_range(self.min_y, self.max_y)
        return Vector2(x, y)

    def clamp(self, point: Vector2) -> Vector2:
        return Vector2(
            max(self.min_x, min(self.max_x, point.x)),
            max(self.min_y, min(self.max_y, point.y)),
        )

    def inset(self, margin: float) -> "Box":
        return Box(self.min_x + margin, self.min_y + margin, self.max_x - margin, self.max_y - margin)

    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass(frozen=True)
class Disk:
    center_x: float
    center_y: float
    radius: float

    @property
    def center(self) -> Vector2:
        return Vector2(self.center_x, self.center_y)

    def contains(self, point: Vector2) -> bool:
        dx = point.x - self.center_x
        dy = point.y - self.center_y
        return dx * dx + dy * dy <= self.radius * self.radius

    def random_point(self, rng: DeterministicRng) -> Vector2:
        return rng.point_in_disk(self.center, self.radius)

    def bounds(self) -> Tuple[float, float, float, float]:
        return (
            self.center_x - self.radius,
            self.center_y - self.radius,
            self.center_x + self.radius,
            self.center_y + self.radius,
        )


Region = Union[Box, Disk]
