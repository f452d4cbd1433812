"""Game module - Contains the Snake world, its coordinates, grids and the auto player"""
from .coordinates import Coord, Direction, Offset
from .grid import Grid
from .path import Path
from .environment import SnakeWorld, Cell, CellKind, StepResult
from .auto_player import AutoSnakePlayer, AutoPlayerState, EmptyPathError

__all__ = [
    'Coord', 'Direction', 'Offset', 'Grid', 'Path',
    'SnakeWorld', 'Cell', 'CellKind', 'StepResult',
    'AutoSnakePlayer', 'AutoPlayerState', 'EmptyPathError',
]
