"""Integer grid geometry: locations, Moore neighborhoods, and distances.

The grid is bounded rather than toroidal. Neighbor enumeration only clips
negative coordinates; callers clip the upper edge against the grid length.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Moore offsets in enumeration order; seeded runs depend on this order.
MOORE_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, 1),
    (1, 0),
    (1, 1),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, -1),
    (-1, 1),
)


@dataclass(frozen=True)
class Location:
    """A cell position on the grid."""

    x: int
    y: int

    def neighbors(self) -> list[Location]:
        return neighbors(self)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


def neighbors(loc: Location) -> list[Location]:
    """Return the 8-connected neighbors of `loc` with non-negative coordinates."""
    result: list[Location] = []
    for dx, dy in MOORE_OFFSETS:
        nx_, ny_ = loc.x + dx, loc.y + dy
        if nx_ >= 0 and ny_ >= 0:
            result.append(Location(nx_, ny_))
    return result


def within_bounds(loc: Location, length: int) -> bool:
    """Upper-edge check against a grid of side `length`."""
    return loc.x < length and loc.y < length


def distance(a: Location, b: Location) -> float:
    """Euclidean distance between two locations."""
    return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2)
