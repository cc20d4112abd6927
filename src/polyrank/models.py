from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

# Shared tolerance for coordinate comparison and trigonometric checks.
EPSILON = 1e-10

Cell = Tuple[int, ...]


@dataclass(frozen=True)
class Point:
    """An immutable tuple of real coordinates.

    Every operation returns a new ``Point``; nothing is ever modified in
    place, so a point can be shared freely between element lists.
    """

    coordinates: Tuple[float, ...] = ()

    @classmethod
    def of(cls, values: Iterable[float]) -> "Point":
        return cls(tuple(float(v) for v in values))

    def dimensions(self) -> int:
        return len(self.coordinates)

    def __len__(self) -> int:
        return len(self.coordinates)

    def __getitem__(self, index: int) -> float:
        return self.coordinates[index]

    def __iter__(self):
        return iter(self.coordinates)

    def product(self, other: "Point") -> "Point":
        """Concatenate coordinates (embedding of a Cartesian pair)."""
        return Point(self.coordinates + other.coordinates)

    def pad_left(self, n: int) -> "Point":
        """Prepend *n* zero coordinates."""
        if n < 0:
            raise ValueError("padding must be >= 0")
        return Point((0.0,) * n + self.coordinates)

    def pad_right(self, n: int) -> "Point":
        """Append *n* zero coordinates."""
        if n < 0:
            raise ValueError("padding must be >= 0")
        return Point(self.coordinates + (0.0,) * n)

    def add_coordinate(self, x: float) -> "Point":
        return Point(self.coordinates + (float(x),))

    def equals(self, other: "Point", eps: float = EPSILON) -> bool:
        """Per-coordinate comparison within *eps*."""
        _require_same_dimensions(self, other)
        return all(abs(a - b) <= eps for a, b in zip(self.coordinates, other.coordinates))


def distance_sq(a: Point, b: Point) -> float:
    _require_same_dimensions(a, b)
    return sum((x - y) ** 2 for x, y in zip(a.coordinates, b.coordinates))


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points of equal dimension."""
    return math.sqrt(distance_sq(a, b))


def _require_same_dimensions(a: Point, b: Point) -> None:
    if a.dimensions() != b.dimensions():
        raise ValueError(
            f"points live in different spaces ({a.dimensions()} vs {b.dimensions()} coordinates)"
        )


# elements[0] holds points, every higher rank holds facet-index tuples.
ElementRank = Union[List[Point], List[Cell]]
ElementList = List[ElementRank]
