"""Common interface for every Snake solver."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional

import numpy as np

from game.environment import SnakeWorld
from game.path import Path

from algorithms.grid_graph import GridGraph


class SolverOverlays(NamedTuple):
    """Read-only debug snapshots a viewer can draw on top of the world."""
    wall_grid: Optional[GridGraph] = None
    cost_field: Optional[np.ndarray] = None


class SnakeSolver(ABC):
    @abstractmethod
    def get_next_path(self, world: SnakeWorld) -> Path:
        """Plan the next moves for the snake. The returned path is never empty."""

    def debug_overlays(self) -> SolverOverlays:
        return SolverOverlays()
