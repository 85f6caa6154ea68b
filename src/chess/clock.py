"""
Countdown clocks of both players and the background ticker that drives them.

The ticker never touches the game state itself: it only calls back into the Game, which serialises the tick with
every other operation.
"""

import logging
import threading
from typing import Callable

from src.chess.pieces import Color

_log = logging.getLogger(__name__)


class ChessClock:
    """Seconds left per color. Never goes below zero."""

    def __init__(self, starting_time: int) -> None:
        self.starting_time = starting_time
        self.remaining: dict[Color, int] = {}
        self.reset()

    def reset(self) -> None:
        self.remaining = {color: self.starting_time for color in Color}

    def tick(self, color: Color) -> bool:
        """Take one second off the color's clock. Returns True once that clock shows zero (the flag fell)."""
        self.remaining[color] = max(self.remaining[color] - 1, 0)
        return self.is_flagged(color)

    def is_flagged(self, color: Color) -> bool:
        return self.remaining[color] == 0


class Ticker(threading.Thread):
    """Calls `on_tick(self)` every `interval` seconds until stopped, or until the callback returns False."""

    def __init__(self, interval: float, on_tick: Callable[["Ticker"], bool]) -> None:
        super().__init__(name="chess-clock-ticker", daemon=True)
        self.interval = interval
        self._on_tick = on_tick
        self._stopped = threading.Event()

    def run(self) -> None:
        while not self._stopped.wait(self.interval):
            if not self._on_tick(self):
                break
        _log.debug("Ticker %s finished", self.name)

    def stop(self) -> None:
        """Does not join: the tick in flight may be waiting for the lock held by the caller."""
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()
