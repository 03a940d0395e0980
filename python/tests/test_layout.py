"""Pixel geometry of the card grid and click-to-index mapping."""

from __future__ import annotations

import pytest

from backend.models.layout import GridLayout


@pytest.fixture
def layout() -> GridLayout:
    # 4×2 grid in a 1000×600 window: origin (250, 72)
    return GridLayout.centered(1000, 600, columns=4, rows=2)


def test_centered_matches_window_placement(layout: GridLayout) -> None:
    assert layout.total_width == 500
    assert layout.total_height == 240
    assert (layout.origin_x, layout.origin_y) == (250, 72)


def test_tall_grid_is_clamped_to_the_top() -> None:
    layout = GridLayout.centered(400, 200, columns=2, rows=4)
    assert layout.origin_y == 0


def test_card_rect(layout: GridLayout) -> None:
    assert layout.card_rect(0) == (250, 72, 110, 110)
    assert layout.card_rect(5) == (380, 202, 110, 110)


@pytest.mark.parametrize(
    ("point", "expected"),
    [
        ((250, 72), 0),     # top-left corner
        ((360, 182), 0),    # bottom-right corner (inclusive)
        ((380, 72), 1),
        ((640, 312), 7),
        ((361, 100), None),  # horizontal gap
        ((300, 183), None),  # vertical gap
        ((249, 100), None),  # left of the grid
        ((900, 500), None),  # below and right
    ],
)
def test_index_at(layout: GridLayout, point: tuple[int, int], expected: int | None) -> None:
    assert layout.index_at(*point) == expected


def test_index_at_respects_short_last_row() -> None:
    layout = GridLayout(columns=4, rows=2)
    x, y, _, _ = layout.card_rect(7)
    assert layout.index_at(x + 1, y + 1) == 7
    assert layout.index_at(x + 1, y + 1, count=6) is None


def test_touching_cards_resolve_to_first_hit() -> None:
    layout = GridLayout(columns=2, rows=1, card_size=10, gap=0)
    assert layout.index_at(10, 5) == 0
    assert layout.index_at(11, 5) == 1


@pytest.mark.parametrize("index", range(8))
def test_rect_centre_maps_back_to_its_index(layout: GridLayout, index: int) -> None:
    x, y, w, h = layout.card_rect(index)
    assert layout.index_at(x + w // 2, y + h // 2) == index
