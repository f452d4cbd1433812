"""
Grid coordinates and directions shared by the game world and the solvers.
- Coord is a cell position, Offset a displacement; both are immutable value types
- Direction values follow the classic action numbering: 0=UP, 1=DOWN, 2=LEFT, 3=RIGHT
- y grows downwards, so UP is (0, -1)
"""

from __future__ import annotations
from enum import Enum
from typing import Callable, Iterator, NamedTuple


class Direction(Enum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @staticmethod
    def each() -> Iterator["Direction"]:
        """Iterate over the four directions in UP, DOWN, LEFT, RIGHT order."""
        return iter((Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT))

    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    def rotate_left(self) -> "Direction":
        """Quarter turn counter-clockwise: UP -> LEFT -> DOWN -> RIGHT -> UP."""
        return _ROTATE_LEFT[self]

    def rotate_right(self) -> "Direction":
        """Quarter turn clockwise, the inverse of rotate_left."""
        return _ROTATE_RIGHT[self]

    @property
    def offset(self) -> "Offset":
        return DIRS[self]


class Offset(NamedTuple):
    x: int
    y: int

    @staticmethod
    def zero() -> "Offset":
        return Offset(0, 0)

    @staticmethod
    def from_direction(direction: Direction) -> "Offset":
        return DIRS[direction]

    def __add__(self, other):
        if isinstance(other, Offset):
            return Offset(self.x + other.x, self.y + other.y)
        if isinstance(other, Coord):
            return Coord(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __neg__(self) -> "Offset":
        return Offset(-self.x, -self.y)


class Coord(NamedTuple):
    x: int
    y: int

    def __add__(self, other):
        # Only offsets move a coordinate, plain tuple concatenation is not wanted here
        if isinstance(other, Offset):
            return Coord(self.x + other.x, self.y + other.y)
        return NotImplemented

    def go_towards(self, direction: Direction) -> "Coord":
        dx, dy = DIRS[direction]
        return Coord(self.x + dx, self.y + dy)

    def get_offset(self, other: "Coord") -> Offset:
        """Offset that leads from `other` to this coordinate."""
        return Offset(self.x - other.x, self.y - other.y)

    def map_values(self, f: Callable[[int], int]) -> "Coord":
        return Coord(f(self.x), f(self.y))


DIRS = {
    Direction.UP: Offset(0, -1),
    Direction.DOWN: Offset(0, 1),
    Direction.LEFT: Offset(-1, 0),
    Direction.RIGHT: Offset(1, 0),
}

_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_ROTATE_LEFT = {
    Direction.UP: Direction.LEFT,
    Direction.LEFT: Direction.DOWN,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.UP,
}

_ROTATE_RIGHT = {after: before for before, after in _ROTATE_LEFT.items()}
