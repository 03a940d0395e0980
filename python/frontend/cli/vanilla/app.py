"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
Includes a built-in menu for pair-count selection, play, and scores.
"""

from __future__ import annotations

import sys
from pathlib import Path

from backend.engine.gamegenerator import MAX_PAIRS, MIN_PAIRS
from backend.engine.gameplay import FlipResult, GamePlay
from backend.models.highscore import ScoreBook
from frontend.cli.cursor import move_cursor
from frontend.cli.input_handler import get_key, get_key_timeout, read_line

# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_REV = "\033[7m"     # reverse video (cursor)
_R = "\033[0m"       # reset
_BG_SEL = "\033[42;30m"  # green bg, black fg (selected pair count)

_CELL_W = 9


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}" if m else f"{s}s"


def _stats_line(game: GamePlay) -> str:
    """Return the formatted Moves + Time string (no newline)."""
    if game.state.is_previewing:
        return f"  {_Y}Memorise!{_R}  {game.state.preview_remaining:.0f}s"
    return (
        f"  Moves: {_Y}{game.moves}{_R}  |  "
        f"Pairs: {_Y}{game.deck.matched_pairs}/{game.pairs}{_R}  |  "
        f"Time: {_Y}{_format_time(game.elapsed_time)}{_R}"
    )


# -- grid rendering -----------------------------------------------------------


def _render_grid(game: GamePlay, cursor: int | None) -> str:
    """Return an ANSI-coloured text representation of the card grid."""
    deck = game.deck
    sep = "+" + (("-" * _CELL_W + "+") * deck.columns)

    lines: list[str] = [sep]
    for r in range(deck.rows):
        cells: list[str] = []
        for c in range(deck.columns):
            i = r * deck.columns + c
            if i >= len(deck):
                cells.append(" " * _CELL_W)
                continue
            card = deck.cards[i]
            label = card.face[: _CELL_W - 2] if game.is_face_up(i) else "?"
            text = f"{label:^{_CELL_W}}"
            if card.is_matched:
                style = _G
            elif card.is_flipped:
                style = _RED if game.is_waiting else _Y
            elif game.is_face_up(i):
                style = _C
            else:
                style = _DIM
            if i == cursor:
                style += _REV
            cells.append(f"{style}{text}{_R}")
        lines.append("|" + "|".join(cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


# -- menu screen --------------------------------------------------------------


def _show_menu(sel_pairs: int) -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}      M E M O R Y   M A T C H         {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()

    pairs_str = ""
    for p in range(MIN_PAIRS, MAX_PAIRS + 1):
        if p == sel_pairs:
            pairs_str += f" {_BG_SEL} {p} {_R}"
        else:
            pairs_str += f"  {_DIM}{p}{_R} "
    print(f"    Pairs:{pairs_str}")
    print(f"    {_DIM}← → to change{_R}")
    print()

    print(f"    {_C}1{_R}  Play")
    print(f"    {_DIM}2{_R}  Scores")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


# -- game screens -------------------------------------------------------------


def _show_game(game: GamePlay, cursor: int, status: str = "") -> None:
    """Draw the full game screen.

    The stats line is printed last, with no trailing newline, so
    ``_update_time`` can overwrite it in-place using ``\\r\\033[K``.
    """
    _clear()
    print(f"  {_C}=== Memory Match ({game.pairs} pairs) ==={_R}")
    print()
    print(_render_grid(game, cursor))
    print()
    print(
        f"  {_C}WASD{_R}/{_C}Arrows{_R}: move  |  "
        f"{_C}Space{_R}/{_C}Enter{_R}: flip  |  "
        f"{_C}R{_R}: restart  |  "
        f"{_C}Q{_R}: back"
    )
    if status:
        print(f"  {status}")
    sys.stdout.write(f"\n{_stats_line(game)}")
    sys.stdout.flush()


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats (last) line in-place."""
    sys.stdout.write(f"\r\033[K{_stats_line(game)}")
    sys.stdout.flush()


def _show_win(game: GamePlay) -> None:
    _clear()
    print(f"  {_G}=== Memory Match ({game.pairs} pairs) ==={_R}")
    print()
    print(_render_grid(game, None))
    print()
    print(f"  {_G}★ CONGRATULATIONS! All pairs found! ★{_R}")
    print()
    print(
        f"  Moves: {_Y}{game.moves}{_R}  |  "
        f"Time: {_Y}{_format_time(game.elapsed_time)}{_R}"
    )


def _show_scores(scores: ScoreBook) -> None:
    _clear()
    print()
    print(f"  {_BOLD}=== SCORES ==={_R}")

    best = scores.best.best
    print(f"\n  {_C}--- Best ---{_R}")
    if best is None:
        print(f"  {_DIM}No best score yet.{_R}")
    else:
        print(
            f"  {_Y}{best.name}{_R}  {best.moves} moves  {best.time:.1f}s"
        )

    print(f"\n  {_C}--- Leaderboard ---{_R}")
    entries = scores.leaderboard.get_scores(10)
    if not entries:
        print(f"  {_DIM}No games finished yet.{_R}")
    for i, e in enumerate(entries, 1):
        print(
            f"  {i:>2}. {e.name:<16} {_Y}{e.moves:>4}{_R} moves  "
            f"{_Y}{e.time:>7.1f}s{_R}"
        )
    print(f"\n  {_DIM}Press any key to go back.{_R}")
    get_key()


# -- game loops ---------------------------------------------------------------


def _wait_for_key(game: GamePlay) -> str | None:
    """Wait for input while keeping the clock and flip-back running.

    Returns ``None`` when the grid changed on its own and needs a redraw.
    """
    previewing = game.state.is_previewing
    while True:
        key = get_key_timeout(0.2)
        changed = game.update()
        if key is not None:
            return key
        if changed or previewing != game.state.is_previewing:
            return None
        _update_time(game)


def _play_game(pairs: int, scores: ScoreBook, seed: int | None) -> None:
    while True:
        game = GamePlay(pairs, seed=seed)
        cursor = 0
        status = ""

        while not game.is_won:
            _show_game(game, cursor, status)
            status = ""
            key = _wait_for_key(game)
            if key is None:
                continue

            if key in ("flip", "enter"):
                result = game.flip(cursor)
                if result is FlipResult.MATCH:
                    status = f"{_G}Match!{_R}"
                elif result is FlipResult.MISMATCH:
                    status = f"{_RED}No match.{_R}"
            elif key == "restart":
                game = GamePlay(pairs, seed=seed)
                cursor = 0
            elif key == "quit":
                return
            else:
                cursor = move_cursor(cursor, key, game.deck.columns, len(game.deck))

        # -- win ---------------------------------------------------------------
        _show_win(game)
        name = read_line("\n  Your name: ")
        rank, is_best = scores.record(name, game.moves, game.elapsed_time)
        print(f"\n  Saved as #{rank} on the leaderboard.")
        if is_best:
            print(f"  {_G}★ New best score! ★{_R}")
        print(f"\n  Press {_C}R{_R} to play again, {_C}Q{_R} to go back.")

        while True:
            key = get_key()
            if key == "restart":
                break
            if key == "quit":
                return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(pairs: int, data_dir: Path, seed: int | None) -> None:
    scores = ScoreBook(data_dir)
    sel_pairs = pairs

    while True:
        _show_menu(sel_pairs)
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        elif key == "left":
            sel_pairs = max(MIN_PAIRS, sel_pairs - 1)
        elif key == "right":
            sel_pairs = min(MAX_PAIRS, sel_pairs + 1)
        elif key in ("1", "enter"):
            _play_game(sel_pairs, scores, seed)
        elif key in ("2", "scores"):
            _show_scores(scores)


# -- public entry point -------------------------------------------------------


def run(pairs: int = 4, data_dir: Path = Path("data"), seed: int | None = None) -> None:
    """Launch the vanilla CLI with interactive menu."""
    _menu_loop(pairs, data_dir, seed)
