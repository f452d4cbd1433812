"""Algorithms module - Contains the Snake solvers and the spanning tree machinery behind them"""
from .base import SnakeSolver, SolverOverlays
from .grid_graph import GridGraph
from .spanning_tree import EdgeState, SnakeGrowResult, SpanningTree, SpanningTreeWalkError
from .pathfinding import PathfindingGrid, SnakePathfindResult, pathfind_on_spanning_tree
from .snake_spanning_tree import JitterKind, JitterMode, SnakeSpanningTreeSolver
from .hamilton_cycle import RandomSpanningTreeSolver, generate_random_spanning_tree
from .zigzag import ZigZagSolver

__all__ = [
    'SnakeSolver', 'SolverOverlays', 'GridGraph',
    'EdgeState', 'SnakeGrowResult', 'SpanningTree', 'SpanningTreeWalkError',
    'PathfindingGrid', 'SnakePathfindResult', 'pathfind_on_spanning_tree',
    'JitterKind', 'JitterMode', 'SnakeSpanningTreeSolver',
    'RandomSpanningTreeSolver', 'generate_random_spanning_tree', 'ZigZagSolver',
]
