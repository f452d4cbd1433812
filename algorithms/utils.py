"""
Helpers shared by the spanning-tree based solvers.

Every real cell belongs to a 2x2 block and the Hamiltonian walk circles each
block clockwise. A cell's position inside its block (its x/y parity) fixes two
possible moves:
- clockwise: the next cell around the same block
- out: leave the block for the neighbouring one

    parity (x%2, y%2)   clockwise   out
    (0, 0) top-left      RIGHT       UP
    (1, 0) top-right     DOWN        RIGHT
    (1, 1) bottom-right  LEFT        DOWN
    (0, 1) bottom-left   UP          LEFT
"""

from __future__ import annotations
from typing import Tuple

from game.coordinates import Coord, Direction
from game.environment import CellKind, SnakeWorld
from game.path import Path

from algorithms.grid_graph import GridGraph

_VALID_DIRS = {
    (0, 0): (Direction.RIGHT, Direction.UP),
    (1, 0): (Direction.DOWN, Direction.RIGHT),
    (1, 1): (Direction.LEFT, Direction.DOWN),
    (0, 1): (Direction.UP, Direction.LEFT),
}


def get_valid_dirs_from_coord(coord: Coord) -> Tuple[Direction, Direction]:
    """Return the (clockwise, out) directions for a real cell."""
    parity = (coord[0] % 2, coord[1] % 2)
    try:
        return _VALID_DIRS[parity]
    except KeyError:
        raise AssertionError(f"Coordinate {coord} has impossible parity {parity}") from None


def build_path_from_collision_grid(grid: GridGraph, world: SnakeWorld) -> Path:
    """
    Walk from the snake's head to the food over a full resolution wall grid.

    Args:
        grid: GridGraph of booleans at world resolution, True where a wall
              separates two neighbouring cells
        world: The world to read the head and food from

    Returns:
        The moves from head to food, going clockwise unless a wall is in the way
    """
    current = world.snake_head_coord()
    max_steps = world.size() * world.size()

    path = Path()
    while True:
        cell = world.get_cell(current)
        if cell is None or len(path) > max_steps:
            raise RuntimeError(f"Wall grid walk from {world.snake_head_coord()} never reached the food")
        if cell.kind is CellKind.FOOD:
            break

        clockwise, out = get_valid_dirs_from_coord(current)
        wall = grid.get_edge(current, clockwise)
        next_dir = clockwise if wall is not None and not wall else out

        current = current.go_towards(next_dir)
        path.push(next_dir)

    return path
