"""Card cursor movement for the keyboard-driven frontends."""

from __future__ import annotations

_STEPS: dict[str, tuple[int, int]] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


def move_cursor(index: int, action: str, columns: int, count: int) -> int:
    """Return the cursor index after *action*; stays put at the grid edge."""
    if action not in _STEPS:
        return index
    dr, dc = _STEPS[action]
    row, col = divmod(index, columns)
    nr, nc = row + dr, col + dc
    target = nr * columns + nc
    if nr < 0 or not 0 <= nc < columns or target >= count:
        return index
    return target
