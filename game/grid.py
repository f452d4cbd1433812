"""
Dense square grid backed by a numpy array.
Used for the game board as well as every auxiliary grid the solvers keep around.
"""

from __future__ import annotations
from typing import Any, Iterator, Optional

import numpy as np

from game.coordinates import Coord


class Grid:
    """
    Fixed-size `size x size` container indexed by Coord.

    Reads outside the grid return None and never raise. Writes outside the grid
    never mutate anything: `set` raises IndexError, `try_set` reports False.
    The backing array is indexed as [y, x], matching index = y * size + x in
    its flattened form.
    """

    def __init__(self, size: int, default: Any, dtype=None):
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.default = default
        self.cells = np.full((size, size), default, dtype=dtype)

    def is_in_bounds(self, coord: Coord) -> bool:
        return 0 <= coord[0] < self.size and 0 <= coord[1] < self.size

    def get(self, coord: Coord) -> Optional[Any]:
        x, y = coord
        if 0 <= x < self.size and 0 <= y < self.size:
            return self.cells[y, x].item()
        return None

    def set(self, coord: Coord, value: Any) -> None:
        if not self.try_set(coord, value):
            raise IndexError(f"Coordinate {tuple(coord)} is outside a {self.size}x{self.size} grid")

    def try_set(self, coord: Coord, value: Any) -> bool:
        x, y = coord
        if 0 <= x < self.size and 0 <= y < self.size:
            self.cells[y, x] = value
            return True
        return False

    def fill(self, value: Any) -> None:
        self.cells.fill(value)

    def clear(self) -> None:
        """Reset every cell to the default value without reallocating."""
        self.cells.fill(self.default)

    def count(self) -> int:
        return self.size * self.size

    def iter_coords(self) -> Iterator[Coord]:
        for y in range(self.size):
            for x in range(self.size):
                yield Coord(x, y)

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the current contents."""
        copy = self.cells.copy()
        copy.flags.writeable = False
        return copy
