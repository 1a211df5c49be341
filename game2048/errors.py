"""Exceptions raised by the game engine."""


class GameError(Exception):
    """Base class of the game errors."""


class InvalidStateError(GameError, ValueError):
    """A serialized grid or game state could not be decoded."""


class GridInvariantError(GameError, RuntimeError):
    """The grid reached a state the rules forbid. Indicates an engine bug."""
