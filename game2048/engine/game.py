"""2048 game engine: turns queued actions into grid mutations and domain events."""

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from enum import Enum

from numpy.random import PCG64DXSM, Generator, default_rng

from game2048.config import GameConfig
from game2048.core.grid import Grid
from game2048.core.rowprocess import RowMerge, process_row
from game2048.core.tile import Direction, Tile, build_tile
from game2048.engine.actions import Action, ActionType
from game2048.engine.events import (
    GameEvent,
    GameOver,
    GameStarted,
    TileCreated,
    TileDeleted,
    TileMerge,
    TileMove,
    TilesNotMoved,
)
from game2048.engine.queue import ActionQueue
from game2048.errors import GridInvariantError, InvalidStateError

# ##>: Module logger.
_logger = logging.getLogger(__name__)

# ##>: Keys of the serialized game state.
_SCORES_KEY = 'scores'
_GRID_KEY = 'gridSerialized'

MagicHandler = Callable[['Game2048', Action], Iterable[GameEvent]]


class GameStatus(str, Enum):
    """Lifecycle of a game session."""

    UNINITIALIZED = 'uninitialized'
    RUNNING = 'running'
    GAME_OVER = 'game_over'


def score_value(merged_value: int, threshold: int = 32) -> int:
    """
    Score earned by a merge.

    Parameters
    ----------
    merged_value : int
        Value of the tile produced by the merge.
    threshold : int, optional
        Largest merged value scored linearly (default is 32).

    Returns
    -------
    int
        ``merged_value`` up to the threshold, its square above it.
    """
    if merged_value <= threshold:
        return merged_value
    return merged_value**2


class Game2048:
    """
    2048 game session.

    The engine owns one grid, the score and the queue of pending actions. Each call to `process_action` consumes
    exactly one action and returns the ordered list of events describing every observable change.

    Parameters
    ----------
    size : int, optional
        Side of the grid; overrides ``config.size`` when given.
    rng : Generator, optional
        Random source used to pick the cell of a spawned tile. A fresh generator is created when omitted.
    config : GameConfig, optional
        Game configuration (default is `GameConfig()`).
    magic_handler : MagicHandler, optional
        Collaborator receiving `Magic` and `CheatCode` actions. Returns the events it produced.
    """

    def __init__(
        self,
        size: int | None = None,
        rng: Generator | None = None,
        config: GameConfig | None = None,
        magic_handler: MagicHandler | None = None,
    ):
        config = config or GameConfig()
        if size is not None and size != config.size:
            config = replace(config, size=size)

        self.config = config
        self._rng = rng if rng is not None else default_rng(PCG64DXSM())
        self._magic_handler = magic_handler
        self._grid = Grid(config.size)
        self._scores = 0
        self._status = GameStatus.UNINITIALIZED
        self._queue = ActionQueue()

    @property
    def grid(self) -> Grid:
        """Copy of the current grid."""
        return self._grid.copy()

    @property
    def scores(self) -> int:
        return self._scores

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_finished(self) -> bool:
        """True once no direction can change the grid."""
        return self._status is GameStatus.GAME_OVER

    @property
    def pending_actions(self) -> tuple[Action, ...]:
        """Queued actions, oldest first."""
        return self._queue.snapshot()

    def serialize(self) -> str:
        """
        Encode the score and the grid.

        Returns
        -------
        str
            JSON object with the ``scores`` and ``gridSerialized`` keys.
        """
        return json.dumps({_SCORES_KEY: self._scores, _GRID_KEY: self._grid.serialize()})

    def init_from_state(self, game_state: str) -> bool:
        """
        Restore the score and the grid from `serialize` output.

        Parameters
        ----------
        game_state : str
            The serialized game state.

        Returns
        -------
        bool
            True if the state was restored. On failure the engine is left untouched.
        """
        try:
            state = json.loads(game_state)
            if not isinstance(state, dict):
                raise InvalidStateError(f'game state must be an object, got {type(state).__name__}')

            scores = state[_SCORES_KEY]
            if isinstance(scores, bool) or not isinstance(scores, int) or scores < 0:
                raise InvalidStateError(f'scores must be a non-negative integer, got {scores!r}')

            grid = Grid.deserialize(state[_GRID_KEY])
        except (ValueError, TypeError, KeyError, RecursionError) as error:
            _logger.warning('Cannot restore game state: %s', error)
            return False

        self._scores = scores
        self._grid = grid
        return True

    def queue_action(self, action: Action) -> None:
        """Append an action to the queue. Never blocks."""
        self._queue.put(action)

    async def process_action(self) -> list[GameEvent]:
        """
        Wait for the next queued action and process it.

        Returns
        -------
        list[GameEvent]
            The events of the turn.
        """
        await self._queue.wait(self.config.poll_interval)
        return self.process_single_action(self._queue.pop())

    def process_pending(self) -> list[GameEvent]:
        """Process every queued action, one at a time, and return all their events."""
        events: list[GameEvent] = []
        while self._queue:
            events.extend(self.process_single_action(self._queue.pop()))
        return events

    def process_single_action(self, action: Action) -> list[GameEvent]:
        """
        Apply one action to the game.

        Parameters
        ----------
        action : Action
            The action to apply.

        Returns
        -------
        list[GameEvent]
            Events describing every change, in the order they happened.
        """
        _logger.debug('Processing %s', action)

        action_type = getattr(action, 'type', None)

        if action_type is ActionType.START:
            return self._process_start(action.serialized_state)

        if action_type is ActionType.MOVE:
            if self._status is not GameStatus.RUNNING:
                _logger.warning('Ignoring %s: game is %s', action, self._status.value)
                return []
            return self._process_move(Direction(action.direction))

        if action_type in (ActionType.MAGIC, ActionType.CHEAT_CODE):
            if self._magic_handler is None:
                _logger.info('No handler for %s', action)
                return []
            return list(self._magic_handler(self, action))

        raise TypeError(f'unknown action {action!r}')

    def _process_start(self, serialized_state: str | None) -> list[GameEvent]:
        events: list[GameEvent] = []

        if serialized_state and self.init_from_state(serialized_state):
            events.append(GameStarted())
            events.extend(TileCreated(tile) for tile in self._grid.occupied_tiles())
            _logger.info('Game restored with score %d', self._scores)
        else:
            self._scores = 0
            events.append(GameStarted())

            # ##: Clear the previous board.
            for tile in list(self._grid.occupied_tiles()):
                self._grid.remove_tile_by_pos(tile.position)
                events.append(TileDeleted(tile.position))

            new_tile = self._insert_new_tile_to_vacant_space()
            if new_tile is not None:
                events.append(TileCreated(new_tile))
            _logger.info('New game started on a %dx%d grid', self._grid.size, self._grid.size)

        self._status = GameStatus.RUNNING
        return events

    def _calculate_move_events(self, direction: Direction) -> list[GameEvent]:
        """Slide every line toward ``direction``, applying each event to the grid as it is produced."""
        events: list[GameEvent] = []

        for row in self._grid.get_row_data_by_direction(direction):
            for row_event in process_row(self._grid.row_values(row)):
                old_pos = row[row_event.old_index]
                new_pos = row[row_event.new_index]

                if isinstance(row_event, RowMerge):
                    event = TileMerge(old_pos, new_pos, row_event.merged_value)
                else:
                    event = TileMove(old_pos, new_pos, row_event.value)
                self._grid.update_tile_by_pos(new_pos, event.value)
                self._grid.remove_tile_by_pos(old_pos)
                events.append(event)

        return events

    def _process_move(self, direction: Direction) -> list[GameEvent]:
        events = self._calculate_move_events(direction)

        if events:
            for event in events:
                if isinstance(event, TileMerge):
                    gained = score_value(event.value, self.config.score_threshold)
                    self._scores += gained
                    _logger.debug('Merge into %s scored %d', event.merge_position, gained)

            # ##: A move that changed the grid always frees a cell.
            new_tile = self._insert_new_tile_to_vacant_space()
            if new_tile is None:
                raise GridInvariantError(f'no vacant cell after a {direction.name} move that changed the grid')
            events.append(TileCreated(new_tile))
            return events

        events.append(TilesNotMoved(direction))

        # ##: A full grid may leave no direction at all.
        if not self._grid.available_cells() and not self._grid.has_possible_moves():
            self._status = GameStatus.GAME_OVER
            events.append(GameOver())
            _logger.info('Game over with score %d', self._scores)

        return events

    def _insert_new_tile_to_vacant_space(self) -> Tile | None:
        available = self._grid.available_cells()
        if not available:
            return None

        pos = available[int(self._rng.integers(len(available)))]
        tile = build_tile(pos.row_index, pos.cell_index, self.config.spawn_value)
        self._grid.insert_tile_by_pos(tile, tile.value)
        _logger.debug('Spawned %s', tile)
        return tile
