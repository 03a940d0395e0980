"""Deals shuffled memory-game decks."""

from __future__ import annotations

import logging
import random

from backend.models.deck import Deck

logger = logging.getLogger(__name__)

# One face per pair, in deal order.
FACES: tuple[str, ...] = (
    "Moon",
    "Cassini",
    "Ceres",
    "Jupiter",
    "Mars",
    "Neptune",
    "Saturn",
    "Sun",
)

MIN_PAIRS = 2
MAX_PAIRS = len(FACES)
DEFAULT_PAIRS = 4
DEFAULT_COLUMNS = 4


class DeckGenerator:
    """Builds the ordered deck and shuffles it."""

    @staticmethod
    def ordered(
        pairs: int,
        columns: int = DEFAULT_COLUMNS,
        faces: tuple[str, ...] = FACES,
    ) -> Deck:
        """Return the unshuffled deck ``[0, 0, 1, 1, ...]``."""
        if not MIN_PAIRS <= pairs <= len(faces):
            raise ValueError(
                f"Pair count must be between {MIN_PAIRS} and {len(faces)}, got {pairs}."
            )
        pair_ids = [pid for pid in range(pairs) for _ in range(2)]
        return Deck.from_pair_ids(
            pair_ids, columns=columns, faces=dict(enumerate(faces[:pairs]))
        )

    @staticmethod
    def shuffle(deck: Deck, rng: random.Random | None = None) -> None:
        """Shuffle *deck* in-place."""
        (rng or random).shuffle(deck.cards)

    @staticmethod
    def generate(
        pairs: int = DEFAULT_PAIRS,
        columns: int = DEFAULT_COLUMNS,
        seed: int | None = None,
    ) -> Deck:
        """Return a shuffled deck.  The same *seed* always deals the same grid."""
        deck = DeckGenerator.ordered(pairs, columns)
        DeckGenerator.shuffle(deck, random.Random(seed))
        logger.debug(
            "Dealt %d pairs (seed=%s): %s",
            pairs,
            seed,
            [c.pair_id for c in deck.cards],
        )
        return deck
