"""
FIFO of pending player actions.

One producer appends, one consumer pops. The consumer waits cooperatively: it wakes up when an action arrives or on
the next poll tick, whichever comes first.
"""

import asyncio
from collections import deque

from game2048.engine.actions import Action


class ActionQueue:
    """Unbounded single consumer queue of actions."""

    def __init__(self):
        self._actions: deque[Action] = deque()

        # ##>: Arrival signal, bound to the event loop of the last waiter.
        self._arrived: asyncio.Event | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def __len__(self) -> int:
        return len(self._actions)

    def __bool__(self) -> bool:
        return bool(self._actions)

    def put(self, action: Action) -> None:
        """Append an action. Never blocks."""
        self._actions.append(action)
        if self._arrived is not None:
            self._arrived.set()

    def pop(self) -> Action:
        """
        Remove the oldest action.

        Raises
        ------
        IndexError
            If the queue is empty.
        """
        action = self._actions.popleft()
        if not self._actions and self._arrived is not None:
            self._arrived.clear()
        return action

    def snapshot(self) -> tuple[Action, ...]:
        """Pending actions, oldest first."""
        return tuple(self._actions)

    def _arrival_signal(self) -> asyncio.Event:
        """Arrival event usable from the running loop, rebuilt when the loop changes."""
        loop = asyncio.get_running_loop()
        if self._arrived is None or self._loop is not loop:
            self._arrived = asyncio.Event()
            self._loop = loop
        return self._arrived

    async def wait(self, poll_interval: float) -> None:
        """
        Suspend until the queue holds at least one action.

        Parameters
        ----------
        poll_interval : float
            Longest time, in seconds, between two checks of the queue.
        """
        arrived = self._arrival_signal()
        while not self._actions:
            try:
                await asyncio.wait_for(arrived.wait(), timeout=poll_interval)
            except asyncio.TimeoutError:
                continue
