"""Keyboard cursor movement used by the terminal frontends."""

from __future__ import annotations

import pytest

from frontend.cli.cursor import move_cursor


@pytest.mark.parametrize(
    ("start", "action", "expected"),
    [
        (0, "right", 1),
        (0, "down", 4),
        (4, "up", 0),
        (2, "left", 1),
        (0, "up", 0),       # top edge
        (3, "right", 3),    # right edge
        (4, "left", 4),     # no wrap to the previous row
        (1, "down", 1),     # row below is short: slot 5 does not exist
        (0, "flip", 0),
    ],
)
def test_move_cursor(start: int, action: str, expected: int) -> None:
    assert move_cursor(start, action, columns=4, count=5) == expected
