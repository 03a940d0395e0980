"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time
from collections.abc import Callable

from backend.models.deck import Deck

PREVIEW_DURATION = 3.0  # seconds every card is shown before play starts


class GameState:
    """Holds the deck, move counter, and stopwatch.

    The stopwatch starts when the preview ends.  *clock* returns seconds
    and is only ever compared with itself.
    """

    def __init__(
        self,
        deck: Deck,
        clock: Callable[[], float] = time.monotonic,
        preview: float = PREVIEW_DURATION,
    ) -> None:
        self.deck = deck
        self.moves: int = 0
        self._clock = clock
        self._created_at: float = clock()
        self._preview: float = max(preview, 0.0)
        self._start_time: float = self._created_at + self._preview
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    def now(self) -> float:
        return self._clock()

    # -- preview --------------------------------------------------------------

    @property
    def is_previewing(self) -> bool:
        return self._clock() - self._created_at < self._preview

    @property
    def preview_remaining(self) -> float:
        return max(0.0, self._preview - (self._clock() - self._created_at))

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + max(0.0, self._clock() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += max(0.0, self._clock() - self._start_time)
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = max(self._clock(), self._created_at + self._preview)
            self._running = True

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def is_complete(self) -> bool:
        return self.deck.all_matched()
