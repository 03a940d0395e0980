"""Core gameplay logic — flips cards, detects matches, hides mismatches."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import StrEnum

from backend.engine.gamegenerator import DEFAULT_COLUMNS, DEFAULT_PAIRS, DeckGenerator
from backend.engine.gamestate import PREVIEW_DURATION, GameState
from backend.models.deck import Deck
from backend.models.layout import GridLayout

logger = logging.getLogger(__name__)

FLIP_DELAY = 1.0  # seconds a mismatched pair stays visible


class FlipResult(StrEnum):
    IGNORED = "ignored"
    FIRST = "first"
    MATCH = "match"
    MISMATCH = "mismatch"


class GamePlay:
    """Orchestrates a single game session.

    Cards are revealed two at a time.  ``first`` and ``second`` hold the
    indices of the revealed-but-unconfirmed pair.  A matching pair is
    confirmed immediately; a mismatched pair blocks further flips until
    :meth:`update` hides it again, ``flip_delay`` seconds later.
    """

    def __init__(
        self,
        pairs: int = DEFAULT_PAIRS,
        columns: int = DEFAULT_COLUMNS,
        *,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
        flip_delay: float = FLIP_DELAY,
        preview: float = PREVIEW_DURATION,
    ) -> None:
        deck = DeckGenerator.generate(pairs, columns, seed=seed)
        self._setup(deck, clock, flip_delay, preview)

    @classmethod
    def from_deck(
        cls,
        deck: Deck,
        *,
        clock: Callable[[], float] = time.monotonic,
        flip_delay: float = FLIP_DELAY,
        preview: float = PREVIEW_DURATION,
    ) -> "GamePlay":
        """Create a game session from an existing deck (e.g. a fixed deal)."""
        obj = object.__new__(cls)
        obj._setup(deck, clock, flip_delay, preview)
        return obj

    def _setup(
        self,
        deck: Deck,
        clock: Callable[[], float],
        flip_delay: float,
        preview: float,
    ) -> None:
        self.state = GameState(deck, clock=clock, preview=preview)
        self.flip_delay = flip_delay
        self.first: int | None = None
        self.second: int | None = None
        self._revealed_at: float = 0.0
        self._won = False

    @property
    def deck(self) -> Deck:
        return self.state.deck

    @property
    def pairs(self) -> int:
        return self.deck.pair_count

    # -- flipping -------------------------------------------------------------

    def flip(self, index: int) -> FlipResult:
        """Turn over the card at *index*.

        Returns ``IGNORED`` (and changes nothing) while previewing, after
        the game is won, while a mismatched pair waits to be hidden, or
        when the card is already face-up.
        """
        self.deck.position_of(index)  # raises IndexError off the grid
        card = self.deck.cards[index]
        if (
            self.is_won
            or self.is_waiting
            or self.state.is_previewing
            or card.is_face_up
        ):
            return FlipResult.IGNORED

        card.is_flipped = True
        self.state.increment_moves()

        if self.first is None:
            self.first = index
            logger.debug("Flipped %d (%s) as first card", index, card.face)
            return FlipResult.FIRST

        self.second = index
        other = self.deck.cards[self.first]
        if other.pair_id == card.pair_id:
            other.is_matched = True
            card.is_matched = True
            logger.debug("Matched %d and %d (%s)", self.first, index, card.face)
            self.first = self.second = None
            self._check_won()
            return FlipResult.MATCH

        self._revealed_at = self.state.now()
        logger.debug("Mismatch %d (%s) / %d (%s)", self.first, other.face, index, card.face)
        return FlipResult.MISMATCH

    def flip_at(self, x: int, y: int, layout: GridLayout) -> FlipResult:
        """Flip whichever card lies under the pixel ``(x, y)``."""
        index = layout.index_at(x, y, count=len(self.deck))
        if index is None:
            return FlipResult.IGNORED
        return self.flip(index)

    def update(self) -> bool:
        """Hide a mismatched pair once its delay has passed.

        Call once per frame.  Returns True when cards were hidden.
        """
        if not self.is_waiting:
            return False
        if self.state.now() - self._revealed_at < self.flip_delay:
            return False

        assert self.first is not None and self.second is not None
        for i in (self.first, self.second):
            card = self.deck.cards[i]
            if not card.is_matched:
                card.is_flipped = False
        logger.debug("Hid %d and %d", self.first, self.second)
        self.first = self.second = None
        return True

    # -- queries --------------------------------------------------------------

    @property
    def is_waiting(self) -> bool:
        """True while a mismatched pair is shown and further flips are blocked."""
        return self.second is not None

    @property
    def pending(self) -> list[int]:
        return [i for i in (self.first, self.second) if i is not None]

    def is_face_up(self, index: int) -> bool:
        """Whether a frontend should draw the card's face (preview included)."""
        return self.state.is_previewing or self.deck.cards[index].is_face_up

    @property
    def is_won(self) -> bool:
        return self._won

    @property
    def moves(self) -> int:
        return self.state.moves

    @property
    def elapsed_time(self) -> float:
        return self.state.elapsed_time

    # -- helpers --------------------------------------------------------------

    def _check_won(self) -> None:
        if not self._won and self.state.is_complete:
            self._won = True
            self.state.pause()
            logger.debug(
                "Won in %d moves, %.2fs", self.state.moves, self.state.elapsed_time
            )
