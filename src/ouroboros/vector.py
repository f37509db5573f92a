"""Grid vectors and the movement directions built from them."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector:
    """Immutable 2D integer point using (x, y) screen ordering.

    ``x`` grows to the right and ``y`` grows downwards, so ``UP`` is ``(0, -1)``.
    """

    x: int
    y: int

    def add(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def sub(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def is_inverse(self, other: Vector) -> bool:
        """Check whether *other* points the exact opposite way."""
        return self.x == -other.x and self.y == -other.y

    def hypot(self) -> float:
        return math.hypot(self.x, self.y)

    def __add__(self, other: Vector) -> Vector:
        return self.add(other)

    def __sub__(self, other: Vector) -> Vector:
        return self.sub(other)

    def to_tuple(self) -> tuple[int, int]:
        return self.x, self.y


class Direction(enum.Enum):
    """The four movement directions plus the ``NONE`` toggle command."""

    LEFT = Vector(-1, 0)
    UP = Vector(0, -1)
    RIGHT = Vector(1, 0)
    DOWN = Vector(0, 1)
    # Not a heading: carries the pause/resume toggle through the input path.
    NONE = Vector(0, 0)

    @property
    def vector(self) -> Vector:
        return self.value

    @property
    def is_movement(self) -> bool:
        return self is not Direction.NONE

    def is_inverse(self, other: Direction) -> bool:
        """Check whether turning from *other* to this direction is a 180° reversal."""
        if not (self.is_movement and other.is_movement):
            return False
        return self.value.is_inverse(other.value)

    @classmethod
    def movements(cls) -> tuple[Direction, ...]:
        """Return the four directions a snake can travel in."""
        return (cls.LEFT, cls.UP, cls.RIGHT, cls.DOWN)
