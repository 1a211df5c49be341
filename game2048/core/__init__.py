# -*- coding: utf-8 -*-
"""
Board model of the 2048 game.

It includes the tile value objects, the grid matrix with its move queries, and the single line slide and merge
algorithm.
"""

from .grid import Grid
from .rowprocess import RowEvent, RowMerge, RowMove, process_row
from .tile import Direction, Position, Tile, build_tile

__all__ = [
    "Direction",
    "Position",
    "Tile",
    "build_tile",
    "Grid",
    "RowEvent",
    "RowMove",
    "RowMerge",
    "process_row",
]
