"""Two-dimensional coordinate class for bucket layout."""

import math
from dataclasses import dataclass
from typing import ClassVar

import numpy as np


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D point in model coordinates.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    ZERO: ClassVar["Vector2"]

    def distance(self, other: "Vector2") -> float:
        """Calculate the Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def plus(self, other: "Vector2") -> "Vector2":
        """Create a new vector offset by another."""
        return Vector2(self.x + other.x, self.y + other.y)

    def minus(self, other: "Vector2") -> "Vector2":
        """Create a new vector with another subtracted."""
        return Vector2(self.x - other.x, self.y - other.y)

    def times(self, scalar: float) -> "Vector2":
        """Create a new vector scaled by a scalar."""
        return Vector2(self.x * scalar, self.y * scalar)

    def as_array(self) -> np.ndarray:
        """Return the point as a float64 numpy array."""
        return np.array([self.x, self.y], dtype=np.float64)

    def __repr__(self) -> str:
        """String representation."""
        return f"Vector2(x={self.x:.2f}, y={self.y:.2f})"


Vector2.ZERO = Vector2(0.0, 0.0)
