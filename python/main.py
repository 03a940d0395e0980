#!/usr/bin/env python3
"""Memory Match — a card-pairs game.

Usage::

    python main.py                  # interactive menu
    python main.py -f pygame        # Pygame GUI (has its own menu)
    python main.py -f rich -p 6     # Rich terminal, 6 pairs
    python main.py --seed 7         # same deal every game
    python main.py --scores         # view scores
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent  # memory-match/
DATA_DIR = PROJECT_ROOT / "data"
ASSETS_DIR = PROJECT_ROOT / "assets"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamegenerator import DEFAULT_PAIRS, MAX_PAIRS, MIN_PAIRS  # noqa: E402

logger = logging.getLogger("memory_match")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"
    pygame = "pygame"
    pyqt = "pyqt"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
    Frontend.pyqt: "frontend.gui.pyqt.app",
}

_GUI_FRONTENDS = (Frontend.pygame, Frontend.pyqt)


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def _launch(frontend: Frontend, pairs: int, data_dir: Path, seed: Optional[int]) -> None:
    logger.debug("Launching %s frontend (pairs=%d, seed=%s)", frontend, pairs, seed)
    mod = importlib.import_module(_RUNNERS[frontend])
    if frontend in _GUI_FRONTENDS:
        mod.run(pairs=pairs, data_dir=data_dir, seed=seed, images_dir=ASSETS_DIR / "images")
    else:
        mod.run(pairs=pairs, data_dir=data_dir, seed=seed)


def _print_scores(data_dir: Path) -> None:
    from backend.models.highscore import ScoreBook

    scores = ScoreBook(data_dir)

    print("\n  === SCORES ===")
    best = scores.best.best
    if best is None:
        print("  No best score yet.")
    else:
        print(f"  Best: {best.name}  {best.moves} moves  {best.time:.1f}s")

    entries = scores.leaderboard.get_scores(10)
    if not entries:
        print("  No games finished yet.\n")
        return
    print("\n  --- Leaderboard ---")
    for i, e in enumerate(entries, 1):
        print(f"  {i:>2}. {e.name:<16} {e.moves:>4} moves  {e.time:>7.1f}s")
    print()


def _ask_pairs(default: int) -> int:
    raw = input(f"  Pairs ({MIN_PAIRS}-{MAX_PAIRS}, default {default}): ").strip()
    if not raw:
        return default
    try:
        pairs = int(raw)
        if not MIN_PAIRS <= pairs <= MAX_PAIRS:
            raise ValueError
    except ValueError:
        print(f"  Invalid number — using {default}.")
        pairs = default
    return pairs


def _menu_loop(pairs: int, data_dir: Path, seed: Optional[int]) -> None:
    choices = {
        "1": Frontend.vanilla,
        "2": Frontend.rich,
        "3": Frontend.pygame,
        "4": Frontend.pyqt,
    }
    while True:
        print()
        print("  ====================================")
        print("        M E M O R Y   M A T C H       ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  3.  Play  (Pygame GUI)")
        print("  4.  Play  (PyQt GUI)")
        print("  5.  View Scores")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in ("1", "2"):
            _launch(choices[choice], _ask_pairs(pairs), data_dir, seed)
        elif choice in ("3", "4"):
            _launch(choices[choice], pairs, data_dir, seed)
        elif choice == "5":
            _print_scores(data_dir)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    pairs: int = typer.Option(
        DEFAULT_PAIRS, "-p", "--pairs",
        min=MIN_PAIRS, max=MAX_PAIRS,
        help=f"Number of card pairs ({MIN_PAIRS}-{MAX_PAIRS}).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Shuffle seed; the same seed deals the same grid.",
    ),
    data_dir: Path = typer.Option(
        DATA_DIR, "--data-dir",
        file_okay=False,
        help="Directory holding leaderboard.txt and best.txt.",
    ),
    scores: bool = typer.Option(
        False, "--scores",
        help="Show scores and exit.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log game events at debug level.",
    ),
) -> None:
    """Memory Match."""
    _configure_logging(verbose)

    if scores:
        _print_scores(data_dir)
        return

    if frontend is None:
        _menu_loop(pairs, data_dir, seed)
        return

    _launch(frontend, pairs, data_dir, seed)


if __name__ == "__main__":
    app()
