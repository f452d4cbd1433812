"""
Auto player: drives a SnakeWorld with moves planned by a solver.
"""

from __future__ import annotations
from enum import Enum
import time

from game.environment import SnakeWorld, StepResult
from game.path import Path


class AutoPlayerState(Enum):
    PLAYING = 0
    FINISHED = 1
    KILLED = 2


class EmptyPathError(RuntimeError):
    """A solver handed back a path with no moves in it."""


class AutoSnakePlayer:
    def __init__(self, world: SnakeWorld, solver):
        """
        Args:
            world: The world to play in. The player owns it from now on.
            solver: Anything with a get_next_path(world) -> Path method
        """
        self.world = world
        self.solver = solver
        self.state = AutoPlayerState.PLAYING
        self.steps = 0
        self.pathfinds = 0
        self.planning_time = 0.0
        self.current_path = self._plan()

    def _plan(self) -> Path:
        start = time.perf_counter()
        path = self.solver.get_next_path(self.world)
        self.planning_time += time.perf_counter() - start
        self.pathfinds += 1

        if path.is_empty():
            raise EmptyPathError(f"{type(self.solver).__name__} returned an empty path")
        return path

    def step(self) -> StepResult:
        """Apply the next planned move, asking the solver for a new path when the old one runs out."""
        if self.state == AutoPlayerState.FINISHED:
            return StepResult.FINISHED
        if self.state == AutoPlayerState.KILLED:
            return StepResult.KILLED

        next_step = self.current_path.pop()
        if next_step is None:
            self.current_path = self._plan()
            next_step = self.current_path.pop()

        result = self.world.step_snake(next_step)
        self.steps += 1

        if result == StepResult.FINISHED:
            self.state = AutoPlayerState.FINISHED
        elif result == StepResult.KILLED:
            self.state = AutoPlayerState.KILLED

        return result

    def average_planning_time(self) -> float:
        return self.planning_time / self.pathfinds if self.pathfinds else 0.0
