"""
Delivery of game events to their subscribers, and a session driving the engine turn after turn.
"""

import asyncio
import collections
import logging
from collections.abc import Callable, Iterable
from typing import Any

from game2048.engine.actions import Action
from game2048.engine.events import EventKind, GameEvent
from game2048.engine.game import Game2048

# ##>: Module logger.
_logger = logging.getLogger(__name__)

EventListener = Callable[[GameEvent], Any]


class EventDispatcher:
    """
    Route events to listeners by kind.

    A dispatcher is created and passed explicitly; sessions never share one implicitly.
    """

    listeners: dict[EventKind, list[EventListener]]

    def __init__(self):
        self.listeners = collections.defaultdict(list)
        self.catch_all: list[EventListener] = []

    def subscribe(self, kind: EventKind, fn: EventListener, prepend: bool = False) -> None:
        """Register ``fn`` for events tagged ``kind``."""
        listeners = self.listeners[kind]

        if prepend:
            listeners.insert(0, fn)
        else:
            listeners.append(fn)

    def subscribe_all(self, fn: EventListener) -> None:
        """Register ``fn`` for every event."""
        self.catch_all.append(fn)

    def publish(self, events: Iterable[GameEvent]) -> None:
        """
        Deliver events in emission order.

        For each event, listeners of its kind are called first, then the catch-all listeners.
        """
        for event in events:
            for fn in self.listeners.get(event.kind, ()):
                fn(event)
            for fn in self.catch_all:
                fn(event)


class GameSession:
    """
    Drive a game: consume queued actions one per turn and publish each turn's events.

    Parameters
    ----------
    game : Game2048
        The engine of this session.
    dispatcher : EventDispatcher, optional
        Receiver of the events (default is a new dispatcher).
    """

    def __init__(self, game: Game2048, dispatcher: EventDispatcher | None = None):
        self.game = game
        self.dispatcher = dispatcher or EventDispatcher()
        self.turns = 0

    def submit(self, action: Action) -> None:
        """Queue an action for a later turn."""
        self.game.queue_action(action)

    async def step(self) -> list[GameEvent]:
        """Wait for one action, process it and publish its events."""
        events = await self.game.process_action()
        self.turns += 1
        self.dispatcher.publish(events)
        return events

    async def run(self, max_actions: int | None = None) -> int:
        """
        Process actions until ``max_actions`` turns were played or the task is cancelled.

        Returns
        -------
        int
            Number of turns played by this call.
        """
        played = 0
        try:
            while max_actions is None or played < max_actions:
                await self.step()
                played += 1
        except asyncio.CancelledError:
            _logger.debug('Session stopped after %d turns', played)
            raise
        return played
