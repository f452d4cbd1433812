"""
Mapping between real cells and the spanning tree's edges.

The tree lives on the half-resolution grid, one node per 2x2 block. Its edges
run through the middle of the blocks, so a tree edge is also the wall that a
clockwise move inside a block would cross.
"""

from __future__ import annotations
from typing import Tuple

from game.coordinates import Coord, Direction

from algorithms.utils import get_valid_dirs_from_coord


def calculate_inner_tree_coord(coord: Coord, direction: Direction) -> Tuple[Coord, Direction]:
    """
    Tree edge that a move from `coord` in `direction` would cut through.

    Returns:
        (tree node, direction) addressing the edge in the tree's GridGraph
    """
    meta_x = (coord[0] + 1) // 2 - 1
    meta_y = (coord[1] + 1) // 2 - 1

    if direction in (Direction.RIGHT, Direction.DOWN):
        meta_x += 1
        meta_y += 1

    if direction in (Direction.LEFT, Direction.RIGHT):
        tree_dir = direction.rotate_left()
    else:
        tree_dir = direction.rotate_right()

    return Coord(meta_x, meta_y), tree_dir


def calculate_following_out_edge(coord: Coord) -> Tuple[Coord, Direction]:
    """
    Tree edge followed when moving out of `coord`'s block. It is also the edge
    that blocks a clockwise move from `coord`.
    """
    _, out = get_valid_dirs_from_coord(coord)
    return Coord(coord[0] // 2, coord[1] // 2), out
