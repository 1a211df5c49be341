"""
Domain events emitted by the game engine.

Events form a closed tagged union: every variant carries a `kind` tag and its own payload only. They are immutable
and hold no reference back to the engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from game2048.core.tile import Direction, Position, Tile


class EventKind(str, Enum):
    """Tag of a game event."""

    TILE_MOVE = 'TILE_MOVE'
    TILE_MERGE = 'TILE_MERGE'
    TILE_CREATED = 'TILE_CREATED'
    TILE_DELETED = 'TILE_DELETED'
    TILES_NOT_MOVED = 'TILES_NOT_MOVED'
    GAME_STARTED = 'GAME_STARTED'
    GAME_OVER = 'GAME_OVER'


@dataclass(frozen=True)
class TileMove:
    """A tile slid from ``old_position`` to ``new_position``."""

    kind: ClassVar[EventKind] = EventKind.TILE_MOVE
    old_position: Position
    new_position: Position
    value: int


@dataclass(frozen=True)
class TileMerge:
    """The tile at ``old_position`` combined into ``merge_position``, which now holds ``value``."""

    kind: ClassVar[EventKind] = EventKind.TILE_MERGE
    old_position: Position
    merge_position: Position
    value: int


@dataclass(frozen=True)
class TileCreated:
    """A new tile appeared on the grid."""

    kind: ClassVar[EventKind] = EventKind.TILE_CREATED
    tile: Tile


@dataclass(frozen=True)
class TileDeleted:
    """The tile at ``position`` was removed without moving."""

    kind: ClassVar[EventKind] = EventKind.TILE_DELETED
    position: Position


@dataclass(frozen=True)
class TilesNotMoved:
    """A move toward ``direction`` left the grid unchanged."""

    kind: ClassVar[EventKind] = EventKind.TILES_NOT_MOVED
    direction: Direction


@dataclass(frozen=True)
class GameStarted:
    """A game began, fresh or restored from a saved state."""

    kind: ClassVar[EventKind] = EventKind.GAME_STARTED


@dataclass(frozen=True)
class GameOver:
    """No direction can change the grid any more."""

    kind: ClassVar[EventKind] = EventKind.GAME_OVER


GameEvent = TileMove | TileMerge | TileCreated | TileDeleted | TilesNotMoved | GameStarted | GameOver
