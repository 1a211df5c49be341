"""
Player intents consumed by the game engine, one per turn.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from game2048.core.tile import Direction


class ActionType(str, Enum):
    """Tag of an action."""

    START = 'START'
    MOVE = 'MOVE'
    MAGIC = 'MAGIC'
    CHEAT_CODE = 'CHEAT_CODE'


@dataclass(frozen=True)
class Start:
    """Start a game, restoring ``serialized_state`` when it is given and valid."""

    type: ClassVar[ActionType] = ActionType.START
    serialized_state: str | None = None


@dataclass(frozen=True)
class Move:
    """Slide every tile toward ``direction``."""

    type: ClassVar[ActionType] = ActionType.MOVE
    direction: Direction


@dataclass(frozen=True)
class Magic:
    """Cast a spell. Its effect belongs to the magic handler of the engine."""

    type: ClassVar[ActionType] = ActionType.MAGIC
    spell: str


@dataclass(frozen=True)
class CheatCode:
    """Enter a cheat code. Its effect belongs to the magic handler of the engine."""

    type: ClassVar[ActionType] = ActionType.CHEAT_CODE
    code: str


Action = Start | Move | Magic | CheatCode
