"""
Configuration of a 2048 game session.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """
    Game configuration.

    Attributes
    ----------
    size : int
        Side of the square grid.
    spawn_value : int
        Value of the tile spawned after every move that changes the grid.
    score_threshold : int
        Merged values up to this threshold score their own value, larger ones score their square.
    poll_interval : float
        Seconds the processing loop sleeps between two checks of an empty action queue.
    """

    # ##>: Board parameters.
    size: int = 4
    spawn_value: int = 2

    # ##>: Scoring: exponential bonus past the threshold.
    score_threshold: int = 32

    # ##>: Processing loop.
    poll_interval: float = 0.15

    def __post_init__(self):
        """Validate the configuration."""
        if self.size < 1:
            raise ValueError(f'size must be >= 1, got {self.size}')
        if self.spawn_value < 2 or self.spawn_value & (self.spawn_value - 1):
            raise ValueError(f'spawn_value must be a power of two >= 2, got {self.spawn_value}')
        if self.poll_interval <= 0:
            raise ValueError(f'poll_interval must be > 0, got {self.poll_interval}')
