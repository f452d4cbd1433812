"""
Cost field used to steer the spanning tree towards the food.

A breadth-first fill starts at the food and spreads backwards along the moves
the Hamiltonian walk could have arrived by, skipping any move the partially
built tree already rules out. The snake then walks greedily down the field
from its head, laying tree edges as it goes.
"""

from __future__ import annotations
from collections import deque
from enum import Enum
from typing import Optional

import numpy as np

from game.coordinates import Coord
from game.environment import SnakeWorld
from game.grid import Grid

from algorithms.spanning_tree import EdgeState, SpanningTree
from algorithms.tree_coordinates import calculate_following_out_edge
from algorithms.utils import get_valid_dirs_from_coord

UNINITIALIZED = 0
START = 1
# Queued but not yet finalized; overwritten with the real cost once dequeued
MARKED = int(np.iinfo(np.uint32).max)


class GridStepKind(Enum):
    CLOCKWISE = 0
    OUT = 1


class SnakePathfindResult(Enum):
    SUCCESS = 0
    REACHED_DEAD_END = 1


class PathfindingGrid:
    def __init__(self, world_size: int):
        self.grid = Grid(world_size, UNINITIALIZED, dtype=np.uint32)

    def get(self, coord: Coord) -> Optional[int]:
        return self.grid.get(coord)

    def set(self, coord: Coord, value: int) -> None:
        self.grid.set(coord, value)

    def size(self) -> int:
        return self.grid.size

    def clear(self) -> None:
        self.grid.clear()

    def snapshot(self) -> np.ndarray:
        return self.grid.snapshot()

    def fill_pathfinding_grid(self, world: SnakeWorld, tree: SpanningTree) -> None:
        """
        Fill the grid with distances from the food, which gets START (1).

        From each cell only the two cells a walk could have come from are
        considered: against the clockwise direction (reached by an OUT step) and
        against the out direction (reached by a CLOCKWISE step). Cells outside
        the world, on the snake, already visited, or whose step the tree forbids
        are skipped.
        """
        queue = deque([(world.food_coord(), START)])

        while queue:
            coord, dist = queue.popleft()
            self.set(coord, dist)

            clockwise, out = get_valid_dirs_from_coord(coord)
            candidates = (
                (clockwise.opposite(), GridStepKind.OUT),
                (out.opposite(), GridStepKind.CLOCKWISE),
            )

            for direction, kind in candidates:
                next_coord = coord.go_towards(direction)

                cell = world.get_cell(next_coord)
                if cell is None or cell.is_snake:
                    continue

                if self.get(next_coord) != UNINITIALIZED:
                    continue

                if kind is GridStepKind.CLOCKWISE:
                    if not tree.can_walk_clockwise_from(next_coord):
                        continue
                elif not tree.can_walk_out_from(next_coord):
                    continue

                self.set(next_coord, MARKED)
                queue.append((next_coord, dist + 1))


def pathfind_on_spanning_tree(start: Coord, grid: PathfindingGrid, tree: SpanningTree) -> SnakePathfindResult:
    """
    Walk from `start` down the cost field until the food (START) is reached,
    marking the tree edge behind each step: WALL for an out step, and
    COVERED_BY_FUTURE_SNAKE for a clockwise step.

    On a tie the walk prefers going out, as long as the tree allows it. A walk
    longer than the whole grid is treated as a dead end.
    """
    current = start
    max_steps = grid.size() * grid.size()
    steps = 0

    while grid.get(current) != START:
        if steps > max_steps:
            return SnakePathfindResult.REACHED_DEAD_END
        steps += 1

        clockwise, out = get_valid_dirs_from_coord(current)

        clockwise_value = _visited_value(grid, current.go_towards(clockwise))
        out_value = _visited_value(grid, current.go_towards(out))

        if clockwise_value is None and out_value is None:
            return SnakePathfindResult.REACHED_DEAD_END

        if clockwise_value is None:
            step = GridStepKind.OUT
        elif out_value is None:
            step = GridStepKind.CLOCKWISE
        elif clockwise_value < out_value:
            step = GridStepKind.CLOCKWISE
        elif tree.can_walk_out_from(current):
            step = GridStepKind.OUT
        else:
            step = GridStepKind.CLOCKWISE

        meta_coord, tree_dir = calculate_following_out_edge(current)
        if step is GridStepKind.OUT:
            tree.try_set_edge(meta_coord, tree_dir, EdgeState.WALL)
            current = current.go_towards(out)
        else:
            tree.try_set_edge(meta_coord, tree_dir, EdgeState.COVERED_BY_FUTURE_SNAKE)
            current = current.go_towards(clockwise)

    return SnakePathfindResult.SUCCESS


def _visited_value(grid: PathfindingGrid, coord: Coord) -> Optional[int]:
    """Cost at `coord`, or None when it's outside the grid or was never reached."""
    value = grid.get(coord)
    if value is None or value == UNINITIALIZED:
        return None
    return value
