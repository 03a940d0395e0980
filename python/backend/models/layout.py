"""Pixel geometry of the card grid.

Maps a card index to its on-screen rectangle and a pointer position back
to a card index.  Nothing here depends on a rendering backend, so the GUI
frontends and the tests share the same arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass

CARD_SIZE = 110
GAP = 20


@dataclass(frozen=True)
class GridLayout:
    columns: int
    rows: int
    card_size: int = CARD_SIZE
    gap: int = GAP
    origin_x: int = 0
    origin_y: int = 0

    @classmethod
    def centered(
        cls,
        width: int,
        height: int,
        columns: int,
        rows: int,
        card_size: int = CARD_SIZE,
        gap: int = GAP,
    ) -> GridLayout:
        """Centre the grid horizontally and place it in the upper fifth.

        The vertical origin is clamped to 0 so a tall grid never starts
        above the window.
        """
        total_w = columns * card_size + (columns - 1) * gap
        total_h = rows * card_size + (rows - 1) * gap
        return cls(
            columns=columns,
            rows=rows,
            card_size=card_size,
            gap=gap,
            origin_x=(width - total_w) // 2,
            origin_y=max((height - total_h) // 5, 0),
        )

    # -- dimensions -----------------------------------------------------------

    @property
    def total_width(self) -> int:
        return self.columns * self.card_size + (self.columns - 1) * self.gap

    @property
    def total_height(self) -> int:
        return self.rows * self.card_size + (self.rows - 1) * self.gap

    # -- mapping --------------------------------------------------------------

    def card_rect(self, index: int) -> tuple[int, int, int, int]:
        """Return ``(x, y, w, h)`` for the slot at *index*."""
        row, col = divmod(index, self.columns)
        step = self.card_size + self.gap
        return (
            self.origin_x + col * step,
            self.origin_y + row * step,
            self.card_size,
            self.card_size,
        )

    def index_at(self, x: int, y: int, count: int | None = None) -> int | None:
        """Return the index of the first slot containing ``(x, y)``.

        Edges are inclusive.  Points in a gap or outside the grid give
        ``None``.  *count* limits the scan to the real number of cards
        when the last row is short.
        """
        slots = self.columns * self.rows if count is None else count
        for index in range(slots):
            cx, cy, w, h = self.card_rect(index)
            if cx <= x <= cx + w and cy <= y <= cy + h:
                return index
        return None
