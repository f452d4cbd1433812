"""
Dynamic Hamiltonian cycle solver.

Every call rebuilds a spanning tree around the live snake, bends it towards the
food with the cost field, fills the rest of the grid with a random maze and
walks the resulting cycle from the head to the food. The tree and cost grid are
allocated once per world size and cleared on every call.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging
import random

from game.coordinates import Direction
from game.environment import SnakeWorld
from game.path import Path

from algorithms.base import SnakeSolver, SolverOverlays
from algorithms.pathfinding import PathfindingGrid, SnakePathfindResult, pathfind_on_spanning_tree
from algorithms.spanning_tree import SnakeGrowResult, SpanningTree, SpanningTreeWalkError

logger = logging.getLogger(__name__)


class JitterMode(Enum):
    NO_JITTER = 0
    JITTER_WHEN_INDIRECT = 1
    JITTER_ALWAYS = 2


@dataclass(frozen=True)
class JitterKind:
    """
    How much of a computed path to hand out before planning again.

    - no_jitter(): always hand out the whole path
    - jitter_when_indirect(n): always cut the path to n steps
    - jitter_always(n): cut to n steps only when the tree had to grow over the
      space reserved for the snake's future body
    """
    mode: JitterMode
    steps: int = 0

    def __post_init__(self):
        if self.mode is not JitterMode.NO_JITTER and self.steps < 1:
            raise ValueError(f"Jitter needs at least one step, got {self.steps}")

    @classmethod
    def no_jitter(cls) -> "JitterKind":
        return cls(JitterMode.NO_JITTER)

    @classmethod
    def jitter_when_indirect(cls, steps: int) -> "JitterKind":
        return cls(JitterMode.JITTER_WHEN_INDIRECT, steps)

    @classmethod
    def jitter_always(cls, steps: int) -> "JitterKind":
        return cls(JitterMode.JITTER_ALWAYS, steps)

    def steps_to_take(self, grow_result: SnakeGrowResult) -> Optional[int]:
        """Number of steps to keep for a given growth result, None to keep them all."""
        if self.mode is JitterMode.JITTER_WHEN_INDIRECT:
            return self.steps
        if self.mode is JitterMode.JITTER_ALWAYS and grow_result == SnakeGrowResult.SUCCESS_WITH_PATH_OVERRIDE:
            return self.steps
        return None


class SnakeSpanningTreeSolver(SnakeSolver):
    def __init__(self, jitter: Optional[JitterKind] = None, rng: Optional[random.Random] = None):
        """
        Args:
            jitter: Path truncation policy, defaults to no jitter
            rng: Random source for maze growth. If None, a fresh unseeded one is used.
        """
        self.jitter = jitter if jitter is not None else JitterKind.no_jitter()
        self.rng = rng if rng is not None else random.Random()
        self.spanning_tree: Optional[SpanningTree] = None
        self.pathfinding_grid: Optional[PathfindingGrid] = None
        self.last_grow_result: Optional[SnakeGrowResult] = None

    def _cached_structures(self, world_size: int):
        # Only reallocate when the world size changes, otherwise reuse and clear
        if self.spanning_tree is None or self.spanning_tree.world_size != world_size:
            self.spanning_tree = SpanningTree(world_size, rng=self.rng)
            self.pathfinding_grid = PathfindingGrid(world_size)

        self.spanning_tree.clear()
        self.pathfinding_grid.clear()
        return self.spanning_tree, self.pathfinding_grid

    def get_next_path(self, world: SnakeWorld) -> Path:
        tree, grid = self._cached_structures(world.size())
        self.last_grow_result = None

        # Step 1: Stencil the current snake into the tree
        tree.trace_current_snake_and_mark_edges(world)

        # Step 2: Distances from the food, respecting the edges the snake forces
        grid.fill_pathfinding_grid(world, tree)

        # Step 3: Walk from the head to the food, extending the tree on the way
        result = pathfind_on_spanning_tree(world.snake_head_coord(), grid, tree)
        if result == SnakePathfindResult.REACHED_DEAD_END:
            logger.warning("Reached a dead end while pathfinding from %s to %s, returning a killing path",
                           world.snake_head_coord(), world.food_coord())
            return self._killing_path(world)

        # Step 4: Fill the rest of the grid with maze
        grow_result = tree.grow_spanning_tree()
        self.last_grow_result = grow_result

        # Step 5: Walk the finished cycle from the head to the food
        try:
            path = tree.build_snake_path(world)
        except SpanningTreeWalkError as e:
            logger.warning("%s, returning a killing path", e)
            return self._killing_path(world)

        take = self.jitter.steps_to_take(grow_result)
        logger.debug("Planned %d steps (%s), handing out %s",
                     len(path), grow_result.name, "all" if take is None else take)
        if take is not None:
            path = path.truncated(take)

        return path

    @staticmethod
    def _killing_path(world: SnakeWorld) -> Path:
        """
        A path that ends the game: one step back into the body, or for a lone
        head, straight out over the nearest edge of the world.
        """
        first = next(world.calculate_snake_path_from_head().iter_directions(), None)
        if first is not None:
            return Path([first])

        head = world.snake_head_coord()
        last = world.size() - 1
        distances = {
            Direction.UP: head.y,
            Direction.DOWN: last - head.y,
            Direction.LEFT: head.x,
            Direction.RIGHT: last - head.x,
        }
        direction = min(distances, key=distances.get)
        return Path([direction] * (distances[direction] + 1))

    def debug_overlays(self) -> SolverOverlays:
        if self.spanning_tree is None:
            return SolverOverlays()
        return SolverOverlays(
            wall_grid=self.spanning_tree.build_collision_grid_from_walls(),
            cost_field=self.pathfinding_grid.snapshot(),
        )
