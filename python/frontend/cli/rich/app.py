"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the same
input handler and backend as the vanilla CLI.
"""

from __future__ import annotations

import sys
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from backend.engine.gamegenerator import MAX_PAIRS, MIN_PAIRS
from backend.engine.gameplay import FlipResult, GamePlay
from backend.models.highscore import ScoreBook
from frontend.cli.cursor import move_cursor
from frontend.cli.input_handler import get_key, get_key_timeout

console = Console()


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _stats(game: GamePlay) -> Text:
    stats = Text()
    if game.state.is_previewing:
        stats.append("  Memorise!  ", style="bold yellow")
        stats.append(f"{game.state.preview_remaining:.0f}s", style="dim")
        return stats
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.moves), style="bold yellow")
    stats.append("    Pairs: ", style="dim")
    stats.append(f"{game.deck.matched_pairs}/{game.pairs}", style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.elapsed_time), style="bold yellow")
    return stats


# -- grid rendering -----------------------------------------------------------


def _render_grid(game: GamePlay, cursor: int | None) -> Table:
    """Return a Rich Table representing the card grid."""
    deck = game.deck
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(deck.columns):
        table.add_column(width=8, justify="center")

    for r in range(deck.rows):
        cells: list[Text] = []
        for c in range(deck.columns):
            i = r * deck.columns + c
            if i >= len(deck):
                cells.append(Text(""))
                continue
            card = deck.cards[i]
            if card.is_matched:
                cell = Text(card.face, style="bold green")
            elif card.is_flipped:
                cell = Text(card.face, style="bold red" if game.is_waiting else "bold yellow")
            elif game.is_face_up(i):
                cell = Text(card.face, style="cyan")
            else:
                cell = Text("?", style="dim")
            if i == cursor:
                cell.stylize("reverse")
            cells.append(cell)
        table.add_row(*cells)

    return table


# -- menu screen --------------------------------------------------------------


def _draw_menu(sel_pairs: int) -> None:
    console.clear()

    counts = Text()
    for p in range(MIN_PAIRS, MAX_PAIRS + 1):
        if p > MIN_PAIRS:
            counts.append("  ")
        if p == sel_pairs:
            counts.append(f" {p} ", style="bold green on #313244")
        else:
            counts.append(f" {p} ", style="dim")

    nav = Text("  ← →  number of pairs", style="dim")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("2", style="dim bold")
    opts.append("  Scores    ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(counts),
        Align.center(nav),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]M E M O R Y   M A T C H[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


# -- game screens -------------------------------------------------------------


def _draw_game(game: GamePlay, cursor: int, status: str = "") -> None:
    console.clear()

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("Space", style="bold cyan")
    controls.append("  flip   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    panel = Panel(
        Align.center(_render_grid(game, cursor)),
        title=f"[bold cyan]Memory Match  {game.pairs} pairs[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    # Save the cursor right before the stats line so _update_stats()
    # can come back and overwrite only this line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats(game)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _update_stats(game: GamePlay) -> None:
    """Repaint the stats line in place, without a full redraw."""
    sys.stdout.write("\033[u\033[K")
    sys.stdout.flush()
    console.print(Align.center(_stats(game)), end="")
    sys.stdout.flush()


def _draw_win(game: GamePlay) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append("  All pairs found!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.elapsed_time), style="bold yellow")

    panel = Panel(
        Group(
            Align.center(_render_grid(game, None)),
            Align.center(congrats),
            Align.center(stats),
        ),
        title=f"[bold green]Memory Match  {game.pairs} pairs[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_scores(scores: ScoreBook) -> None:
    """Full-screen scores view (used from the menu)."""
    console.clear()

    best = scores.best.best
    if best is None:
        best_text = Text("No best score yet.", style="dim")
    else:
        best_text = Text()
        best_text.append("Best  ", style="bold cyan")
        best_text.append(best.name, style="bold yellow")
        best_text.append(f"  {best.moves} moves  {best.time:.1f}s", style="yellow")

    entries = scores.leaderboard.get_scores(10)
    if entries:
        board: Table | Text = Table(
            title="Leaderboard",
            title_style="bold cyan",
            box=rich.box.ROUNDED,
            border_style="dim",
        )
        board.add_column("#", justify="right", style="dim", width=3)
        board.add_column("Name", style="bold")
        board.add_column("Moves", justify="right", style="yellow")
        board.add_column("Time", justify="right", style="yellow")
        for i, e in enumerate(entries, 1):
            board.add_row(str(i), e.name, str(e.moves), f"{e.time:.1f}s")
    else:
        board = Text("No games finished yet.", style="dim")

    panel = Panel(
        Group(Align.center(best_text), Text(""), Align.center(board)),
        title="[bold]S C O R E S[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game loop ----------------------------------------------------------------


def _wait_for_key(game: GamePlay) -> str | None:
    """Poll for a key; ``None`` means the grid changed and needs a redraw."""
    previewing = game.state.is_previewing
    while True:
        key = get_key_timeout(0.2)
        changed = game.update()
        if key is not None:
            return key
        if changed or previewing != game.state.is_previewing:
            return None
        _update_stats(game)


def _play_game(pairs: int, scores: ScoreBook, seed: int | None) -> None:
    while True:
        game = GamePlay(pairs, seed=seed)
        cursor = 0
        status = ""

        while not game.is_won:
            _draw_game(game, cursor, status)
            status = ""
            key = _wait_for_key(game)
            if key is None:
                continue

            if key in ("flip", "enter"):
                result = game.flip(cursor)
                if result is FlipResult.MATCH:
                    status = "[bold green]Match![/bold green]"
                elif result is FlipResult.MISMATCH:
                    status = "[red]No match.[/red]"
            elif key == "restart":
                game = GamePlay(pairs, seed=seed)
                cursor = 0
            elif key == "quit":
                return
            else:
                cursor = move_cursor(cursor, key, game.deck.columns, len(game.deck))

        # -- win ---------------------------------------------------------------
        _draw_win(game)
        name = Prompt.ask("  Your name", default="Player", console=console)
        rank, is_best = scores.record(name, game.moves, game.elapsed_time)

        console.print(
            Align.center(Text(f"Saved as #{rank} on the leaderboard.", style="cyan"))
        )
        if is_best:
            console.print(
                Align.center(Text("★ New best score! ★", style="bold green"))
            )
        console.print(
            Align.center(
                Text("\n  Press R to play again, Q to go back.\n", style="dim")
            )
        )

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
        _draw_menu(sel_pairs)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(
                Align.center(Text("\nGoodbye!\n", style="bold cyan"))
            )
            return
        elif key == "left":
            sel_pairs = max(MIN_PAIRS, sel_pairs - 1)
        elif key == "right":
            sel_pairs = min(MAX_PAIRS, sel_pairs + 1)
        elif key in ("1", "enter"):
            _play_game(sel_pairs, scores, seed)
        elif key in ("2", "scores"):
            _draw_scores(scores)


# -- public entry point -------------------------------------------------------


def run(pairs: int = 4, data_dir: Path = Path("data"), seed: int | None = None) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(pairs, data_dir, seed)
