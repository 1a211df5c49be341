"""
Value objects of the board: move directions, cell positions and tiles.
"""

from dataclasses import dataclass
from enum import IntEnum


class Direction(IntEnum):
    """
    Move direction.

    The value is the number of counter-clockwise quarter turns (``numpy.rot90``) that turn a move in this
    direction into a move to the left.
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


@dataclass(frozen=True, order=True)
class Position:
    """Coordinate of one grid cell."""

    row_index: int
    cell_index: int


@dataclass(frozen=True)
class Tile:
    """
    Snapshot of a tile occupying a cell.

    Tiles carry no identity: moves and merges are tracked by position.
    """

    row_index: int
    cell_index: int
    value: int

    @property
    def position(self) -> Position:
        """Position occupied by the tile."""
        return Position(self.row_index, self.cell_index)


def build_tile(row_index: int, cell_index: int, value: int) -> Tile:
    """Build a tile from its coordinates and value."""
    return Tile(row_index=row_index, cell_index=cell_index, value=value)


def is_tile_value(value: int) -> bool:
    """Check that a cell value is either vacant (0) or a power of two."""
    return value == 0 or (value >= 2 and value & (value - 1) == 0)
