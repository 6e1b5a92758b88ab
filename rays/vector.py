import math
from dataclasses import dataclass
from typing import List

import numpy as np


def _div(a: float, b: float) -> float:
    # x/0 -> +-inf, 0/0 -> nan, instead of ZeroDivisionError
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.true_divide(a, b))


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D vector. Every operation returns a new instance."""
    x: float
    y: float

    @staticmethod
    def zero() -> "Vector2":
        return Vector2(0.0, 0.0)

    @staticmethod
    def from_angle(theta: float) -> "Vector2":
        return Vector2(math.cos(theta), math.sin(theta))

    def add(self, that: "Vector2") -> "Vector2":
        return Vector2(self.x + that.x, self.y + that.y)

    def sub(self, that: "Vector2") -> "Vector2":
        return Vector2(self.x - that.x, self.y - that.y)

    # mul/div are component-wise, used to map between canvas and grid space
    def mul(self, that: "Vector2") -> "Vector2":
        return Vector2(self.x * that.x, self.y * that.y)

    def div(self, that: "Vector2") -> "Vector2":
        return Vector2(_div(self.x, that.x), _div(self.y, that.y))

    def scale(self, value: float) -> "Vector2":
        return Vector2(self.x * value, self.y * value)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def norm(self) -> "Vector2":
        n = self.length()
        if n == 0:
            return Vector2.zero()
        return Vector2(self.x / n, self.y / n)

    def distance_to(self, that: "Vector2") -> float:
        return that.sub(self).length()

    def array(self) -> List[float]:
        return [self.x, self.y]
