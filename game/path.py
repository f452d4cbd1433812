"""
Queue of moves planned by a solver and consumed by the auto player, one per tick.
"""

from __future__ import annotations
from collections import deque
from itertools import islice
from typing import Iterable, Iterator, Optional

from game.coordinates import Direction, Offset


class Path:
    def __init__(self, directions: Iterable[Direction] = ()):
        self._directions = deque(directions)

    def push(self, direction: Direction) -> None:
        self._directions.append(direction)

    def pop(self) -> Optional[Direction]:
        """Remove and return the next move, or None once the path is exhausted."""
        if not self._directions:
            return None
        return self._directions.popleft()

    def is_empty(self) -> bool:
        return not self._directions

    def __len__(self) -> int:
        return len(self._directions)

    def __iter__(self) -> Iterator[Direction]:
        return iter(self._directions)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._directions == other._directions

    def __repr__(self) -> str:
        return f"Path({[d.name for d in self._directions]})"

    def iter_directions(self) -> Iterator[Direction]:
        return iter(self._directions)

    def iter_offsets(self) -> Iterator[Offset]:
        """
        Cumulative offsets from the origin, starting with the zero offset.
        Every call starts over from the stored directions, so the sequence can be
        walked any number of times and is always len(self) + 1 long.
        """
        current = Offset.zero()
        yield current
        for direction in self._directions:
            current = current + direction.offset
            yield current

    def truncated(self, steps: int) -> "Path":
        """New path holding at most the first `steps` moves."""
        return Path(islice(self._directions, steps))
