"""Card and deck models for the memory game."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)


@dataclass
class Card:
    """A single card.  ``pair_id`` is the only thing compared on a match."""

    pair_id: int
    face: str = ""
    is_flipped: bool = False
    is_matched: bool = False

    @property
    def is_face_up(self) -> bool:
        return self.is_flipped or self.is_matched

    @property
    def is_unconfirmed(self) -> bool:
        """Flipped but not (yet) part of a matched pair."""
        return self.is_flipped and not self.is_matched


@dataclass
class Deck:
    """Row-major grid of cards, ``columns`` wide.

    The last row may be short when the card count is not a multiple of
    ``columns``.
    """

    columns: int
    cards: list[Card] = field(default_factory=list)

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_pair_ids(
        cls,
        pair_ids: list[int],
        columns: int = 4,
        faces: dict[int, str] | None = None,
    ) -> Deck:
        """Create a deck from a row-major list of pair identities.

        Example::

            Deck.from_pair_ids([0, 1, 1, 0], columns=2)
        """
        if columns < 1:
            raise ValueError(f"A deck needs at least one column, got {columns}.")
        counts = Counter(pair_ids)
        odd = sorted(pid for pid, n in counts.items() if n != 2)
        if odd:
            raise ValueError(
                f"Every pair id must occur exactly twice; bad ids: {odd}."
            )
        faces = faces or {}
        cards = [Card(pair_id=pid, face=faces.get(pid, str(pid))) for pid in pair_ids]
        return cls(columns=columns, cards=cards)

    # -- geometry -------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def rows(self) -> int:
        return -(-len(self.cards) // self.columns)

    def index_of(self, row: int, col: int) -> int:
        if not 0 <= col < self.columns:
            raise IndexError(f"Column {col} outside 0..{self.columns - 1}.")
        index = row * self.columns + col
        if row < 0 or index >= len(self.cards):
            raise IndexError(f"No card at row {row}, column {col}.")
        return index

    def position_of(self, index: int) -> tuple[int, int]:
        if not 0 <= index < len(self.cards):
            raise IndexError(f"Card index {index} outside 0..{len(self.cards) - 1}.")
        return divmod(index, self.columns)

    # -- queries --------------------------------------------------------------

    @property
    def pair_count(self) -> int:
        return len(self.cards) // 2

    @property
    def matched_pairs(self) -> int:
        return sum(1 for c in self.cards if c.is_matched) // 2

    def all_matched(self) -> bool:
        return all(c.is_matched for c in self.cards)

    def unconfirmed(self) -> list[int]:
        return [i for i, c in enumerate(self.cards) if c.is_unconfirmed]

    def copy(self) -> Deck:
        return Deck(columns=self.columns, cards=[replace(c) for c in self.cards])
