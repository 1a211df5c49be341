# -*- coding: utf-8 -*-
"""
Rules engine of the 2048 tile merging puzzle.

The `core` package holds the board model (tiles, grid, row processing) and the `engine` package
drives a game session: queued actions in, ordered domain events out.
"""

from .config import GameConfig
from .core import Direction, Grid, Position, Tile, process_row
from .engine import Game2048, GameSession, GameStatus

__all__ = [
    "GameConfig",
    "Direction",
    "Grid",
    "Position",
    "Tile",
    "process_row",
    "Game2048",
    "GameSession",
    "GameStatus",
]
