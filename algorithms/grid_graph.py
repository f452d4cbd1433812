"""
Grid graph stored at doubled resolution.

A graph of `size x size` nodes keeps its nodes and the edges between them in a
single Grid of side `2 * size - 1`:
- node `c` lives at physical coordinate `2c`
- the edge leaving `c` in direction `d` lives at `2c + offset(d)`

Because of this layout, edge(c, d) and edge(c + offset(d), opposite(d)) are the
same physical slot, so writing one writes the other.
"""

from __future__ import annotations
from typing import Any, Iterator, Optional

import numpy as np

from game.coordinates import Coord, Direction
from game.grid import Grid


class GridGraph:
    def __init__(self, size: int, default: Any, dtype=None):
        if size < 1:
            raise ValueError(f"Grid graph size must be positive, got {size}")
        self._size = size
        self.cells = Grid(size * 2 - 1, default, dtype=dtype)

    @staticmethod
    def _cell_coord(coord: Coord) -> Coord:
        return Coord(coord[0] * 2, coord[1] * 2)

    @staticmethod
    def _edge_coord(coord: Coord, direction: Direction) -> Coord:
        dx, dy = direction.offset
        return Coord(coord[0] * 2 + dx, coord[1] * 2 + dy)

    def get_cell(self, coord: Coord) -> Optional[Any]:
        return self.cells.get(self._cell_coord(coord))

    def get_edge(self, coord: Coord, direction: Direction) -> Optional[Any]:
        """Value of the edge, or None when the edge would leave the graph."""
        return self.cells.get(self._edge_coord(coord, direction))

    def set_cell(self, coord: Coord, value: Any) -> None:
        self.cells.set(self._cell_coord(coord), value)

    def set_edge(self, coord: Coord, direction: Direction, value: Any) -> None:
        self.cells.set(self._edge_coord(coord, direction), value)

    def try_set_edge(self, coord: Coord, direction: Direction, value: Any) -> bool:
        """Like set_edge, but edges outside the graph are silently ignored."""
        return self.cells.try_set(self._edge_coord(coord, direction), value)

    def is_in_bounds(self, coord: Coord) -> bool:
        return 0 <= coord[0] < self._size and 0 <= coord[1] < self._size

    def iter_all_coords(self) -> Iterator[Coord]:
        for y in range(self._size):
            for x in range(self._size):
                yield Coord(x, y)

    def fill(self, value: Any) -> None:
        self.cells.fill(value)

    def size(self) -> int:
        return self._size

    def count(self) -> int:
        return self._size * self._size

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the physical layout, nodes and edges together."""
        return self.cells.snapshot()
