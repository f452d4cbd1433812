"""
Tests for the spanning tree machinery: grid graphs, parity rules and tree building.
"""
import pytest
import random
import sys
import os
from collections import deque

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from algorithms.grid_graph import GridGraph
from algorithms.spanning_tree import EdgeState, SnakeGrowResult, SpanningTree
from algorithms.tree_coordinates import calculate_following_out_edge, calculate_inner_tree_coord
from algorithms.utils import build_path_from_collision_grid, get_valid_dirs_from_coord
from game.coordinates import Coord, Direction
from game.environment import SnakeWorld


def edge_slot(meta_coord, direction):
    """Physical slot of a tree edge in the doubled-resolution layout."""
    dx, dy = direction.offset
    return (meta_coord.x * 2 + dx, meta_coord.y * 2 + dy)


def wall_edges(tree):
    """Every WALL edge, counted once."""
    return [
        (coord, direction)
        for coord in tree.iter_all_coords()
        for direction in (Direction.RIGHT, Direction.DOWN)
        if tree.get_edge(coord, direction) == EdgeState.WALL
    ]


def connected_by_walls(tree):
    """Nodes reachable from (0, 0) over WALL edges."""
    seen = {Coord(0, 0)}
    queue = deque(seen)
    while queue:
        coord = queue.popleft()
        for direction in Direction.each():
            nxt = coord.go_towards(direction)
            if tree.get_edge(coord, direction) == EdgeState.WALL and nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


def traced_world():
    """8x8 world whose snake bends around the block at tree node (2, 2)."""
    world = SnakeWorld(8, rng=random.Random(0))
    world.place_food(Coord(0, 7))
    for direction in (Direction.RIGHT, Direction.DOWN, Direction.LEFT, Direction.LEFT):
        world.step_snake(direction)
    return world


class TestGridGraph:
    """Tests for the doubled-resolution graph layout."""

    def test_physical_size(self):
        """Test that n logical nodes take 2n - 1 physical cells."""
        graph = GridGraph(4, 0)
        assert graph.cells.size == 7
        assert graph.size() == 4
        assert graph.count() == 16

    def test_shared_edge_slot(self):
        """Test that an edge is the same value seen from both of its nodes."""
        graph = GridGraph(3, 0)
        graph.set_edge(Coord(0, 0), Direction.RIGHT, 7)
        assert graph.get_edge(Coord(1, 0), Direction.LEFT) == 7
        graph.set_edge(Coord(1, 1), Direction.UP, 5)
        assert graph.get_edge(Coord(1, 0), Direction.DOWN) == 5

    def test_edges_leaving_the_graph(self):
        """Test that edges off the border are unreadable and ignored on write."""
        graph = GridGraph(3, 0)
        assert graph.get_edge(Coord(0, 0), Direction.UP) is None
        assert graph.get_edge(Coord(2, 2), Direction.RIGHT) is None
        assert not graph.try_set_edge(Coord(0, 0), Direction.LEFT, 1)
        with pytest.raises(IndexError):
            graph.set_edge(Coord(0, 0), Direction.LEFT, 1)

    def test_cells_and_edges_do_not_overlap(self):
        """Test that node values live apart from edge values."""
        graph = GridGraph(2, 0)
        graph.set_cell(Coord(1, 1), 9)
        assert graph.get_cell(Coord(1, 1)) == 9
        for direction in Direction.each():
            assert graph.get_edge(Coord(1, 1), direction) in (0, None)


class TestParityRules:
    """Tests for the clockwise and out directions of each cell."""

    def test_parity_table(self):
        """Test the (clockwise, out) pair for every position inside a block."""
        assert get_valid_dirs_from_coord(Coord(0, 0)) == (Direction.RIGHT, Direction.UP)
        assert get_valid_dirs_from_coord(Coord(1, 0)) == (Direction.DOWN, Direction.RIGHT)
        assert get_valid_dirs_from_coord(Coord(1, 1)) == (Direction.LEFT, Direction.DOWN)
        assert get_valid_dirs_from_coord(Coord(0, 1)) == (Direction.UP, Direction.LEFT)

    def test_parity_repeats(self):
        """Test that only the parity of a coordinate matters."""
        assert get_valid_dirs_from_coord(Coord(6, 4)) == get_valid_dirs_from_coord(Coord(0, 0))
        assert get_valid_dirs_from_coord(Coord(5, 3)) == get_valid_dirs_from_coord(Coord(1, 1))

    def test_clockwise_moves_circle_the_block(self):
        """Test that four clockwise moves return to the starting cell."""
        start = Coord(2, 4)
        current = start
        visited = set()
        for _ in range(4):
            clockwise, _ = get_valid_dirs_from_coord(current)
            current = current.go_towards(clockwise)
            visited.add(current.map_values(lambda v: v // 2))
        assert current == start
        assert visited == {Coord(1, 2)}

    def test_out_moves_leave_the_block(self):
        """Test that an out move always lands in another block."""
        for coord in (Coord(x, y) for x in range(4) for y in range(4)):
            _, out = get_valid_dirs_from_coord(coord)
            assert coord.go_towards(out).map_values(lambda v: v // 2) != coord.map_values(lambda v: v // 2)

    def test_following_out_edge_matches_clockwise_inner_edge(self):
        """Test that the out edge is the one a clockwise move would cut through."""
        for x in range(8):
            for y in range(8):
                coord = Coord(x, y)
                clockwise, _ = get_valid_dirs_from_coord(coord)
                inner = calculate_inner_tree_coord(coord, clockwise)
                following = calculate_following_out_edge(coord)
                assert edge_slot(*inner) == edge_slot(*following)

    def test_inner_edge_is_symmetric(self):
        """Test that a clockwise move and its reverse cut through the same tree edge."""
        for x in range(8):
            for y in range(8):
                coord = Coord(x, y)
                clockwise, _ = get_valid_dirs_from_coord(coord)
                neighbour = coord.go_towards(clockwise)
                assert edge_slot(*calculate_inner_tree_coord(coord, clockwise)) == \
                    edge_slot(*calculate_inner_tree_coord(neighbour, clockwise.opposite()))

    def test_following_out_edge_starts_in_own_block(self):
        """Test that the out edge leaves the block the coordinate lives in."""
        meta, direction = calculate_following_out_edge(Coord(5, 2))
        assert meta == Coord(2, 1)
        assert direction == Direction.RIGHT


class TestEdgeState:
    """Tests for EdgeState predicates."""

    def test_only_wall_is_taken(self):
        """Test that covered edges don't count as tree edges."""
        assert EdgeState.WALL.is_taken
        for state in (EdgeState.FREE, EdgeState.COVERED_BY_CURRENT_SNAKE, EdgeState.COVERED_BY_FUTURE_SNAKE):
            assert not state.is_taken
            assert state.is_free


class TestSpanningTree:
    """Tests for building and querying the tree."""

    def test_odd_world_rejected(self):
        """Test that an odd world size can't be split into blocks."""
        with pytest.raises(ValueError):
            SpanningTree(9)

    def test_trace_marks_snake_edges(self):
        """Test that the body stencils walls where it stepped out and covers where it went clockwise."""
        world = traced_world()
        tree = SpanningTree(8, rng=random.Random(0))
        tree.trace_current_snake_and_mark_edges(world)

        assert tree.get_edge(Coord(2, 2), Direction.LEFT) == EdgeState.WALL
        assert tree.get_edge(Coord(2, 2), Direction.DOWN) == EdgeState.COVERED_BY_CURRENT_SNAKE
        assert tree.get_edge(Coord(2, 2), Direction.RIGHT) == EdgeState.COVERED_BY_CURRENT_SNAKE
        assert tree.is_tree_node_taken(Coord(1, 2))
        assert tree.is_tree_node_taken(Coord(2, 2))
        assert not tree.is_tree_node_taken(Coord(0, 0))
        assert len(wall_edges(tree)) == 1

    def test_lone_head_marks_nothing(self):
        """Test that a snake with no body leaves the tree empty."""
        world = SnakeWorld(8, rng=random.Random(0))
        tree = SpanningTree(8, rng=random.Random(0))
        tree.trace_current_snake_and_mark_edges(world)
        assert wall_edges(tree) == []

    def test_grow_covers_every_node(self):
        """Test that growing turns the traced edges into a full spanning tree."""
        world = traced_world()
        tree = SpanningTree(8, rng=random.Random(3))
        tree.trace_current_snake_and_mark_edges(world)

        assert tree.grow_spanning_tree() == SnakeGrowResult.SUCCESS
        assert len(wall_edges(tree)) == tree.size() * tree.size() - 1
        assert len(connected_by_walls(tree)) == tree.size() * tree.size()
        # Edges the body covers are never turned into walls
        assert tree.get_edge(Coord(2, 2), Direction.DOWN) == EdgeState.COVERED_BY_CURRENT_SNAKE

    def test_grow_is_deterministic_for_a_seed(self):
        """Test that the same seed grows the same maze."""
        trees = []
        for _ in range(2):
            tree = SpanningTree(8, rng=random.Random(11))
            tree.trace_current_snake_and_mark_edges(traced_world())
            tree.grow_spanning_tree()
            trees.append(tree.graph.snapshot())
        assert (trees[0] == trees[1]).all()

    def test_grow_over_future_snake_reports_override(self):
        """Test that growing across a future snake edge is reported."""
        tree = SpanningTree(8, rng=random.Random(0))
        tree.set_edge(Coord(0, 0), Direction.RIGHT, EdgeState.WALL)
        tree.set_edge(Coord(0, 0), Direction.DOWN, EdgeState.COVERED_BY_FUTURE_SNAKE)
        tree.set_edge(Coord(1, 0), Direction.DOWN, EdgeState.COVERED_BY_FUTURE_SNAKE)
        tree.set_edge(Coord(1, 0), Direction.RIGHT, EdgeState.COVERED_BY_FUTURE_SNAKE)

        assert tree.grow_spanning_tree() == SnakeGrowResult.SUCCESS_WITH_PATH_OVERRIDE
        assert all(tree.is_tree_node_taken(coord) for coord in tree.iter_all_coords())
        assert len(connected_by_walls(tree)) == 16

    def test_walk_matches_collision_grid_walk(self):
        """Test that walking the tree and walking its wall grid agree, and avoid the body."""
        world = traced_world()
        tree = SpanningTree(8, rng=random.Random(5))
        tree.trace_current_snake_and_mark_edges(world)
        tree.grow_spanning_tree()

        path = tree.build_snake_path(world)
        assert path == build_path_from_collision_grid(tree.build_collision_grid_from_walls(), world)
        assert 0 < len(path) <= 64

        head = world.snake_head_coord()
        cells = [head + offset for offset in path.iter_offsets()]
        assert cells[-1] == world.food_coord()
        assert not any(world.get_cell(cell).is_snake for cell in cells[1:])

    def test_full_tree_walk_is_hamiltonian(self):
        """Test that walking a full spanning tree visits every cell before repeating."""
        world = SnakeWorld(8, rng=random.Random(0))
        tree = SpanningTree(8, rng=random.Random(9))
        tree.set_edge(Coord(0, 0), Direction.RIGHT, EdgeState.WALL)
        tree.grow_spanning_tree()

        current = Coord(0, 0)
        visited = []
        for _ in range(64):
            visited.append(current)
            clockwise, out = get_valid_dirs_from_coord(current)
            meta, direction = calculate_following_out_edge(current)
            current = current.go_towards(out if tree.get_edge(meta, direction) == EdgeState.WALL else clockwise)

        assert current == Coord(0, 0)
        assert len(set(visited)) == 64
        assert all(world.get_cell(c) is not None for c in visited)

    def test_clear_resets_every_edge(self):
        """Test that clear drops every edge back to FREE."""
        tree = SpanningTree(8, rng=random.Random(0))
        tree.set_edge(Coord(0, 0), Direction.RIGHT, EdgeState.WALL)
        tree.grow_spanning_tree()
        tree.clear()
        assert wall_edges(tree) == []
        assert not any(tree.is_tree_node_taken(c) for c in tree.iter_all_coords())


class TestTreeLegality:
    """Tests for the walk legality predicates."""

    @pytest.fixture
    def tree(self):
        """Three walls around the (0, 0) - (1, 1) square, leaving the last side open."""
        tree = SpanningTree(8, rng=random.Random(0))
        tree.set_edge(Coord(0, 0), Direction.RIGHT, EdgeState.WALL)
        tree.set_edge(Coord(1, 0), Direction.DOWN, EdgeState.WALL)
        tree.set_edge(Coord(1, 1), Direction.LEFT, EdgeState.WALL)
        return tree

    def test_out_into_taken_node_would_close_a_loop(self, tree):
        """Test that stepping out over an open edge between two tree nodes is refused."""
        assert calculate_following_out_edge(Coord(1, 1)) == (Coord(0, 0), Direction.DOWN)
        assert not tree.can_walk_out_from(Coord(1, 1))

    def test_out_over_existing_wall(self, tree):
        """Test that stepping out over an existing tree edge is fine."""
        assert tree.can_walk_out_from(Coord(1, 0))

    def test_out_into_free_node(self, tree):
        """Test that stepping out into an untaken node is fine."""
        assert tree.can_walk_out_from(Coord(5, 5))

    def test_out_past_the_border(self, tree):
        """Test that the out edge past the grid border never blocks."""
        assert tree.can_walk_out_from(Coord(0, 0))

    def test_clockwise_blocked_by_wall(self, tree):
        """Test that a tree edge blocks the clockwise move that would cross it."""
        assert not tree.can_walk_clockwise_from(Coord(1, 0))

    def test_clockwise_over_open_edges(self, tree):
        """Test that FREE, covered and out of bounds edges leave clockwise moves open."""
        assert tree.can_walk_clockwise_from(Coord(1, 1))
        assert tree.can_walk_clockwise_from(Coord(0, 0))
        tree.set_edge(Coord(2, 2), Direction.DOWN, EdgeState.COVERED_BY_FUTURE_SNAKE)
        assert tree.can_walk_clockwise_from(Coord(5, 5))
