"""
Static Hamiltonian Cycle using Prim's Algorithm
- Builds a random spanning tree over the half-resolution grid once
- Walking around the tree gives a cycle that visits every cell exactly once
- The snake follows this cycle forever and never dies, but takes the long way round
"""

from __future__ import annotations
from itertools import count
from typing import List, Optional, Tuple
import heapq
import random

from game.coordinates import Coord, Direction
from game.environment import SnakeWorld
from game.path import Path

from algorithms.base import SnakeSolver, SolverOverlays
from algorithms.grid_graph import GridGraph
from algorithms.spanning_tree import EdgeState, SpanningTree
from algorithms.utils import build_path_from_collision_grid


def prims_algorithm(tree_size: int, rng: random.Random) -> List[Tuple[Coord, Direction]]:
    """
    Prim's algorithm over a `tree_size x tree_size` grid of nodes with random edge weights.

    Args:
        tree_size: Side length of the node grid
        rng: Random source for the edge weights

    Returns:
        list of (node, direction) edges in the minimum spanning tree
    """
    start = Coord(0, 0)
    visited = {start}
    mst_edges = []

    # The counter breaks weight ties so nodes and directions never get compared
    tie_breaker = count()
    frontier = []

    def push_edges(node: Coord):
        for direction in Direction.each():
            nxt = node.go_towards(direction)
            if 0 <= nxt.x < tree_size and 0 <= nxt.y < tree_size and nxt not in visited:
                heapq.heappush(frontier, (rng.random(), next(tie_breaker), node, direction))

    push_edges(start)
    while frontier and len(visited) < tree_size * tree_size:
        _, _, node, direction = heapq.heappop(frontier)
        nxt = node.go_towards(direction)
        if nxt in visited:
            continue

        visited.add(nxt)
        mst_edges.append((node, direction))
        push_edges(nxt)

    return mst_edges


def generate_random_spanning_tree(world_size: int, rng: Optional[random.Random] = None) -> SpanningTree:
    """
    Build a SpanningTree whose WALL edges are a random Prim's tree.

    Args:
        world_size: Side length of the real grid, must be even
        rng: Random source. If None, a fresh unseeded one is used.
    """
    rng = rng if rng is not None else random.Random()
    tree = SpanningTree(world_size, rng=rng)

    for node, direction in prims_algorithm(tree.size(), rng):
        tree.set_edge(node, direction, EdgeState.WALL)

    return tree


class RandomSpanningTreeSolver(SnakeSolver):
    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng: Random source for the cycle. If None, generates a new random pattern each game.
        """
        self.rng = rng if rng is not None else random.Random()
        self.wall_grid: Optional[GridGraph] = None
        self._world_size = None

    def get_next_path(self, world: SnakeWorld) -> Path:
        # The cycle is fixed for the whole game, only rebuild it for a new world size
        if self.wall_grid is None or self._world_size != world.size():
            tree = generate_random_spanning_tree(world.size(), self.rng)
            self.wall_grid = tree.build_collision_grid_from_walls()
            self._world_size = world.size()

        return build_path_from_collision_grid(self.wall_grid, world)

    def debug_overlays(self) -> SolverOverlays:
        return SolverOverlays(wall_grid=self.wall_grid)
