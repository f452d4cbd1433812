"""
Snake World
- Square grid of cells, each one empty, food, or part of the snake
- Snake cells store an age: the head holds the highest age and the tail 0
- The body is never stored as a list, it is reconstructed from the ages on demand
- Planners only read the world; the auto player is the one that steps it
"""

from __future__ import annotations
from enum import Enum
from typing import NamedTuple, Optional
import random

import numpy as np

from game.coordinates import Coord, Direction
from game.grid import Grid
from game.path import Path

# Raw values stored in the age grid for the non-snake cells
EMPTY = -1
FOOD = -2


class CellKind(Enum):
    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Cell(NamedTuple):
    kind: CellKind
    age: Optional[int] = None

    @property
    def is_snake(self) -> bool:
        return self.kind is CellKind.SNAKE


EMPTY_CELL = Cell(CellKind.EMPTY)
FOOD_CELL = Cell(CellKind.FOOD)


class StepResult(Enum):
    STEPPED = 0
    KILLED = 1
    FINISHED = 2


class SnakeWorld:
    def __init__(self, size: int = 10, snake_length: int = 5, growth: int = 3,
                 rng: Optional[random.Random] = None):
        """
        Initialize the snake world.

        Args:
            size: Side length of the square grid
            snake_length: Length the snake stretches out to from its single starting cell
            growth: How much longer the snake gets per food eaten
            rng: Random source used to place food. If None, a fresh unseeded one is used.
        """
        if size < 2:
            raise ValueError(f"World size must be at least 2, got {size}")
        if snake_length < 1:
            raise ValueError(f"Snake length must be at least 1, got {snake_length}")

        self._size = size
        self.initial_length = snake_length
        self.growth = growth
        self.rng = rng if rng is not None else random.Random()

        self.cells = Grid(size, EMPTY, dtype=np.int32)
        self.reset()

    def reset(self):
        """Reset the world to a lone head in the centre and a fresh piece of food."""
        self.cells.clear()
        self._snake_length = self.initial_length
        self._score = 0
        self._head = Coord(self._size // 2, self._size // 2)
        self.cells.set(self._head, 0)
        self._food = None
        self._spawn_food()

    def size(self) -> int:
        return self._size

    def snake_head_coord(self) -> Coord:
        return self._head

    def food_coord(self) -> Optional[Coord]:
        """Current food position, None only once the board has been filled."""
        return self._food

    def snake_length(self) -> int:
        return self._snake_length

    def score(self) -> int:
        return self._score

    def get_cell(self, coord: Coord) -> Optional[Cell]:
        """Return the cell at `coord`, or None when it lies outside the world."""
        value = self.cells.get(coord)
        if value is None:
            return None
        if value == EMPTY:
            return EMPTY_CELL
        if value == FOOD:
            return FOOD_CELL
        return Cell(CellKind.SNAKE, value)

    def place_food(self, coord: Coord):
        """Move the food to an empty cell, for setting up scenarios by hand."""
        if self.get_cell(coord) not in (EMPTY_CELL, FOOD_CELL):
            raise ValueError(f"Food can only go on an empty cell, {coord} is {self.get_cell(coord)}")
        if self._food is not None:
            self.cells.set(self._food, EMPTY)
        self._food = Coord(*coord)
        self.cells.set(self._food, FOOD)

    def calculate_snake_path_from_head(self) -> Path:
        """
        Rebuild the body as a path of directions from the head towards the tail.
        Each step goes to the neighbouring snake cell with the next lower age. Ages
        are not contiguous right after eating, so "next lower" is the highest age
        below the current one rather than exactly one less.
        """
        path = Path()
        current = self._head
        age = self.cells.get(current)

        while age > 0:
            best_dir, best_age = None, -1
            for direction in Direction.each():
                value = self.cells.get(current.go_towards(direction))
                if value is not None and best_age < value < age:
                    best_dir, best_age = direction, value

            if best_dir is None:
                break

            path.push(best_dir)
            current = current.go_towards(best_dir)
            age = best_age

        return path

    def step_snake(self, direction: Direction) -> StepResult:
        """
        Move the head one cell in `direction`.

        Returns:
            KILLED when the move leaves the grid or hits the body (the world is left untouched),
            FINISHED when the food eaten was the last one that fit,
            STEPPED otherwise.
        """
        new_head = self._head.go_towards(direction)
        value = self.cells.get(new_head)

        if value is None or value >= 0:
            return StepResult.KILLED

        ate_food = value == FOOD
        if ate_food:
            self._snake_length += self.growth
            self._score += 1

        self._head = new_head
        self.cells.set(new_head, self._snake_length)
        self._cull_tail()

        if ate_food and not self._spawn_food():
            return StepResult.FINISHED
        return StepResult.STEPPED

    def _cull_tail(self):
        # Age every snake cell by one; the tail drops to EMPTY (-1) on its own
        body = self.cells.cells >= 0
        self.cells.cells[body] -= 1

    def _spawn_food(self) -> bool:
        empties = np.argwhere(self.cells.cells == EMPTY)
        if len(empties) == 0:
            self._food = None
            return False

        y, x = empties[self.rng.randrange(len(empties))]
        self._food = Coord(int(x), int(y))
        self.cells.set(self._food, FOOD)
        return True
