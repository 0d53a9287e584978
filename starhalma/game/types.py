"""Hex geometry and corner definitions for the six-pointed star board."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Central hexagon radius and the furthest coordinate reached by a corner tip.
HEX_RADIUS = 4
STAR_LIMIT = 8


@dataclass(frozen=True)
class HexCoord:
    """Cube coordinate on the hex grid.

    ``s`` is always ``-q - r``; equality and hashing only look at ``(q, r)``.
    """

    q: int
    r: int
    s: int = field(default=None, compare=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.s is None:
            object.__setattr__(self, "s", -self.q - self.r)
        elif self.q + self.r + self.s != 0:
            raise ValueError(
                f"Invalid cube coordinate ({self.q}, {self.r}, {self.s}): "
                "q + r + s must be 0"
            )

    def __add__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q - other.q, self.r - other.r)

    def scale(self, k: int) -> HexCoord:
        return HexCoord(self.q * k, self.r * k)

    def distance(self, other: HexCoord) -> int:
        return max(
            abs(self.q - other.q),
            abs(self.r - other.r),
            abs(self.s - other.s),
        )

    def neighbors(self) -> list[HexCoord]:
        return [self + d for d in HEX_DIRECTIONS]

    @property
    def key(self) -> str:
        return f"{self.q},{self.r}"

    @classmethod
    def from_key(cls, key: str) -> HexCoord:
        q, r = key.split(",")
        return cls(int(q), int(r))

    def __repr__(self) -> str:
        return f"HexCoord({self.q}, {self.r}, {self.s})"


# The six unit directions, in adjacency-table order.
HEX_DIRECTIONS: list[HexCoord] = [
    HexCoord(1, -1, 0),
    HexCoord(1, 0, -1),
    HexCoord(0, 1, -1),
    HexCoord(-1, 1, 0),
    HexCoord(-1, 0, 1),
    HexCoord(0, -1, 1),
]


class Corner(int, Enum):
    """Player identifier; each player starts in one corner of the star."""

    NONE = 0
    NORTH = 1
    NORTH_EAST = 2
    SOUTH_EAST = 3
    SOUTH = 4
    SOUTH_WEST = 5
    NORTH_WEST = 6


PLAYER_CORNERS: list[Corner] = [c for c in Corner if c is not Corner.NONE]


def opposite_corner(corner: Corner) -> Corner:
    """N↔S, NE↔SW, SE↔NW.  ``NONE`` maps to itself."""
    if corner is Corner.NONE:
        return Corner.NONE
    return Corner((corner.value - 1 + 3) % 6 + 1)


def corner_of(coord: HexCoord) -> Corner | None:
    """Return the corner triangle containing *coord*, or None for the central hexagon.

    Coordinates outside the star also return None.
    """
    q, r, s = coord.q, coord.r, coord.s
    if max(abs(q), abs(r), abs(s)) > STAR_LIMIT:
        return None
    if r < -HEX_RADIUS and q <= HEX_RADIUS and s <= HEX_RADIUS:
        return Corner.NORTH
    if q > HEX_RADIUS and r >= -HEX_RADIUS and s >= -HEX_RADIUS:
        return Corner.NORTH_EAST
    if s < -HEX_RADIUS and q <= HEX_RADIUS and r <= HEX_RADIUS:
        return Corner.SOUTH_EAST
    if r > HEX_RADIUS and q >= -HEX_RADIUS and s >= -HEX_RADIUS:
        return Corner.SOUTH
    if q < -HEX_RADIUS and r <= HEX_RADIUS and s <= HEX_RADIUS:
        return Corner.SOUTH_WEST
    if s > HEX_RADIUS and q >= -HEX_RADIUS and r >= -HEX_RADIUS:
        return Corner.NORTH_WEST
    return None


# Tip cell of each corner triangle.  A player's goal center is the tip of
# their opposite corner.
CORNER_TIPS: dict[Corner, HexCoord] = {
    Corner.NORTH: HexCoord(4, -8, 4),
    Corner.NORTH_EAST: HexCoord(8, -4, -4),
    Corner.SOUTH_EAST: HexCoord(4, 4, -8),
    Corner.SOUTH: HexCoord(-4, 8, -4),
    Corner.SOUTH_WEST: HexCoord(-8, 4, 4),
    Corner.NORTH_WEST: HexCoord(-4, -4, 8),
}


def goal_center(player: Corner) -> HexCoord:
    """Reference cell used for distance-to-goal heuristics."""
    return CORNER_TIPS[opposite_corner(player)]
