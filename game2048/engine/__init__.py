# -*- coding: utf-8 -*-
"""
Game session: actions, events, the action queue and the engine consuming it.
"""

from .actions import Action, ActionType, CheatCode, Magic, Move, Start
from .dispatch import EventDispatcher, GameSession
from .events import (
    EventKind,
    GameEvent,
    GameOver,
    GameStarted,
    TileCreated,
    TileDeleted,
    TileMerge,
    TileMove,
    TilesNotMoved,
)
from .game import Game2048, GameStatus, score_value
from .queue import ActionQueue

__all__ = [
    "Action",
    "ActionType",
    "Start",
    "Move",
    "Magic",
    "CheatCode",
    "EventKind",
    "GameEvent",
    "TileMove",
    "TileMerge",
    "TileCreated",
    "TileDeleted",
    "TilesNotMoved",
    "GameStarted",
    "GameOver",
    "ActionQueue",
    "Game2048",
    "GameStatus",
    "score_value",
    "EventDispatcher",
    "GameSession",
]
