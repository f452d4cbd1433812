"""
Spanning tree over the half-resolution grid.

Each tree node stands for a 2x2 block of real cells. WALL edges are the tree's
edges: walking clockwise around every block and stepping out wherever a WALL
edge leaves the block traces a single Hamiltonian cycle over the real grid, as
long as the WALL edges form one spanning tree.

The two COVERED_BY_* states do not count as tree edges. They mark places where
the tree must stay open because the snake is there now, or will be there once
it has followed the planned route to the food.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Iterator, Optional
import logging
import random

import numpy as np

from game.coordinates import Coord, Direction
from game.environment import CellKind, SnakeWorld
from game.path import Path

from algorithms.grid_graph import GridGraph
from algorithms.tree_coordinates import calculate_following_out_edge, calculate_inner_tree_coord
from algorithms.utils import get_valid_dirs_from_coord

logger = logging.getLogger(__name__)


class EdgeState(IntEnum):
    FREE = 0
    WALL = 1
    COVERED_BY_CURRENT_SNAKE = 2
    COVERED_BY_FUTURE_SNAKE = 3

    @property
    def is_taken(self) -> bool:
        return self is EdgeState.WALL

    @property
    def is_free(self) -> bool:
        return self is not EdgeState.WALL


class SnakeGrowResult(IntEnum):
    SUCCESS = 0
    SUCCESS_WITH_PATH_OVERRIDE = 1


class SpanningTreeWalkError(RuntimeError):
    """The walk around the tree could not reach the food."""


class SpanningTree:
    def __init__(self, world_size: int, rng: Optional[random.Random] = None):
        """
        Args:
            world_size: Side length of the real grid, must be even
            rng: Random source for maze growth. If None, a fresh unseeded one is used.
        """
        if world_size < 2 or world_size % 2:
            raise ValueError(f"Spanning tree needs an even world size of at least 2, got {world_size}")
        self.world_size = world_size
        self.rng = rng if rng is not None else random.Random()
        self.graph = GridGraph(world_size // 2, EdgeState.FREE, dtype=np.int8)

    # --- Forwarded graph operations -------------------------------------------------

    def get_edge(self, coord: Coord, direction: Direction) -> Optional[EdgeState]:
        value = self.graph.get_edge(coord, direction)
        return None if value is None else EdgeState(value)

    def set_edge(self, coord: Coord, direction: Direction, state: EdgeState) -> None:
        self.graph.set_edge(coord, direction, state)

    def try_set_edge(self, coord: Coord, direction: Direction, state: EdgeState) -> bool:
        return self.graph.try_set_edge(coord, direction, state)

    def is_in_bounds(self, coord: Coord) -> bool:
        return self.graph.is_in_bounds(coord)

    def iter_all_coords(self) -> Iterator[Coord]:
        return self.graph.iter_all_coords()

    def size(self) -> int:
        return self.graph.size()

    def clear(self) -> None:
        self.graph.fill(EdgeState.FREE)

    # --- Tree construction --------------------------------------------------------

    def trace_current_snake_and_mark_edges(self, world: SnakeWorld) -> None:
        """
        Follow the snake's body from the head, cell by cell, and mark the edges it
        stencils out (it stepped out of a block, so the tree edge must be there)
        and the edges it covers (it moved clockwise, so no tree edge may be there).
        """
        current = world.snake_head_coord()

        for direction in world.calculate_snake_path_from_head():
            prev = current.go_towards(direction)
            # The body was laid down tail first, so the move into `current` was the reverse
            moved = direction.opposite()

            clockwise, out = get_valid_dirs_from_coord(prev)

            if moved == out:
                self._mark_edge(prev, clockwise, EdgeState.WALL)
            elif moved == clockwise:
                self._mark_edge(prev, clockwise, EdgeState.COVERED_BY_CURRENT_SNAKE)

            current = prev

    def _mark_edge(self, coord: Coord, direction: Direction, state: EdgeState) -> None:
        meta_coord, tree_dir = calculate_inner_tree_coord(coord, direction)
        self.try_set_edge(meta_coord, tree_dir, state)

    def grow_spanning_tree(self) -> SnakeGrowResult:
        """
        Grow the tree until it covers every node it can reach.

        The first pass only grows across FREE edges. Once that runs dry a second
        pass may also grow across COVERED_BY_FUTURE_SNAKE edges, which means the
        final cycle no longer matches the route planned to the food.

        Returns:
            SUCCESS_WITH_PATH_OVERRIDE if any growth went over a future snake edge
        """
        allow_covered = False
        seeded_covered_edge = False

        while True:
            seed = self._find_seed(allow_covered)
            if seed is None:
                if allow_covered:
                    break
                allow_covered = True
                continue

            self._seed_tree_from(*seed)
            if allow_covered:
                seeded_covered_edge = True

        if seeded_covered_edge:
            return SnakeGrowResult.SUCCESS_WITH_PATH_OVERRIDE
        return SnakeGrowResult.SUCCESS

    def _find_seed(self, allow_covered: bool):
        """Find a taken node with a usable edge leading to an untaken neighbour."""
        for coord in self.iter_all_coords():
            if not self.is_tree_node_taken(coord):
                continue

            for direction in Direction.each():
                edge = self.get_edge(coord, direction)
                usable = edge == EdgeState.FREE or (
                    allow_covered and edge == EdgeState.COVERED_BY_FUTURE_SNAKE
                )
                if usable and not self.is_tree_node_taken(coord.go_towards(direction)):
                    return coord, direction

        return None

    def _seed_tree_from(self, coord: Coord, direction: Direction) -> None:
        """
        Carve a WALL edge from `coord` towards `direction`, then keep growing a
        randomized depth-first maze from there until the region is filled.
        """
        self.set_edge(coord, direction, EdgeState.WALL)

        current = coord.go_towards(direction)
        stack = [current]

        while True:
            possible_dirs = [
                d for d in Direction.each()
                if self.is_in_bounds(current.go_towards(d))
                and not self.is_tree_node_taken(current.go_towards(d))
            ]

            # Dead end, backtrack
            if not possible_dirs:
                if not stack:
                    break
                current = stack.pop()
                continue

            chosen = self.rng.choice(possible_dirs)
            self.set_edge(current, chosen, EdgeState.WALL)
            current = current.go_towards(chosen)
            stack.append(current)

    # --- Queries ------------------------------------------------------------------

    def can_walk_out_from(self, coord: Coord) -> bool:
        """
        Check whether stepping out of `coord`'s block keeps the tree a tree. It
        can't if the node on the other side is already part of the tree while the
        connecting edge isn't, since connecting them would close a loop.
        """
        meta_coord, direction = calculate_following_out_edge(coord)

        edge = self.get_edge(meta_coord, direction)
        connecting_edge_taken = edge is not None and edge.is_taken

        if not self.is_tree_node_taken(meta_coord.go_towards(direction)):
            return True
        return connecting_edge_taken

    def can_walk_clockwise_from(self, coord: Coord) -> bool:
        """Check that no tree edge blocks the clockwise move from `coord`."""
        clockwise, _ = get_valid_dirs_from_coord(coord)
        meta_coord, direction = calculate_inner_tree_coord(coord, clockwise)

        edge = self.get_edge(meta_coord, direction)
        return edge is None or edge.is_free

    def is_tree_node_taken(self, coord: Coord) -> bool:
        """A node is part of the tree as soon as any of its edges is a WALL."""
        for direction in Direction.each():
            if self.graph.get_edge(coord, direction) == EdgeState.WALL:
                return True
        return False

    # --- Output -------------------------------------------------------------------

    def build_snake_path(self, world: SnakeWorld) -> Path:
        """
        Starting at the snake's head, follow the cycle rules (out over a WALL edge,
        clockwise otherwise) until the food is reached.

        Raises:
            SpanningTreeWalkError: if the walk leaves the world or runs longer
            than the whole grid, which only happens when the tree is broken
        """
        current = world.snake_head_coord()
        max_steps = world.size() * world.size()

        path = Path()
        while True:
            cell = world.get_cell(current)
            if cell is None or len(path) > max_steps:
                raise SpanningTreeWalkError(
                    f"Walk from {world.snake_head_coord()} did not reach the food at {world.food_coord()}"
                )
            if cell.kind is CellKind.FOOD:
                break

            clockwise, out = get_valid_dirs_from_coord(current)
            meta_coord, direction = calculate_following_out_edge(current)
            next_dir = out if self.graph.get_edge(meta_coord, direction) == EdgeState.WALL else clockwise

            current = current.go_towards(next_dir)
            path.push(next_dir)

        return path

    def build_collision_grid_from_walls(self) -> GridGraph:
        """
        Convert the tree into a full resolution wall grid (True where a wall sits
        between two real cells). Only used for rendering and debugging.
        """
        snake_grid = GridGraph(self.size() * 2, False, dtype=bool)

        for coord in self.iter_all_coords():
            for direction in Direction.each():
                if self.graph.get_edge(coord, direction) == EdgeState.WALL:
                    self._set_collision_edge(snake_grid, coord, direction)

        return snake_grid

    @staticmethod
    def _set_collision_edge(snake_grid: GridGraph, coord: Coord, direction: Direction) -> None:
        # The tree edge runs between two block centres, which blocks two real walls
        start_offset = {
            Direction.RIGHT: (0, 0),
            Direction.UP: (0, -1),
            Direction.DOWN: (-1, 0),
            Direction.LEFT: (-1, -1),
        }[direction]

        pos = Coord(coord.x * 2 + 1 + start_offset[0], coord.y * 2 + 1 + start_offset[1])
        left = direction.rotate_left()

        snake_grid.set_edge(pos, left, True)
        snake_grid.set_edge(pos.go_towards(direction), left, True)
