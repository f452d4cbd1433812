"""
Zig-zag solver: the simplest Hamiltonian cycle there is.
Rows are swept back and forth between x=1 and the right edge, and column 0 is
kept free as the lane back up to the top. Only works on even sized worlds.
"""

from __future__ import annotations

from game.coordinates import Direction
from game.environment import CellKind, SnakeWorld
from game.path import Path

from algorithms.base import SnakeSolver


class ZigZagSolver(SnakeSolver):
    def get_next_path(self, world: SnakeWorld) -> Path:
        if world.size() % 2:
            raise ValueError(f"Zig-zag needs an even world size, got {world.size()}")

        world_max = world.size() - 1
        current = world.snake_head_coord()
        path = Path()

        while world.get_cell(current).kind is not CellKind.FOOD:
            x, y = current
            if x == 0:
                next_dir = Direction.RIGHT if y == 0 else Direction.UP
            else:
                going_right = y % 2 == 0
                if going_right and x == world_max:
                    next_dir = Direction.DOWN
                elif not going_right and x == 1 and y != world_max:
                    # Reached the end of a leftward row, except on the bottom row
                    next_dir = Direction.DOWN
                elif going_right:
                    next_dir = Direction.RIGHT
                else:
                    next_dir = Direction.LEFT

            path.push(next_dir)
            current = current.go_towards(next_dir)

        return path
