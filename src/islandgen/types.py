"""Core geometric types for island generation."""

import math

from pydantic import BaseModel


class Point(BaseModel, frozen=True):
    """Immutable lattice coordinate.

    Coordinate system: +X is East, +Y is South.
    """

    x: int
    y: int

    @classmethod
    def rounded(cls, x: float, y: float) -> "Point":
        """Snap real coordinates onto the integer lattice."""
        return cls(x=int(round(x)), y=int(round(y)))

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def polar_offset(self, angle: float, distance: float) -> "Point":
        """Return the lattice point at angle (degrees) and distance from here."""
        theta = math.radians(angle)
        return Point.rounded(
            self.x + distance * math.cos(theta),
            self.y + distance * math.sin(theta),
        )

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"
