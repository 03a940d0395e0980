"""Leaderboard and best-score persistence."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from backend.models.highscore import (
    BEST_FILE,
    LEADERBOARD_FILE,
    MAX_NAME_LENGTH,
    BestScoreManager,
    LeaderboardManager,
    ScoreBook,
    ScoreEntry,
    ScoreFileError,
    sanitize_name,
)


# -- record format ------------------------------------------------------------


def test_entry_line_format() -> None:
    assert ScoreEntry("ada", 12, 3.5).to_line() == "ada 12 3.50"


def test_entry_parses_any_whitespace() -> None:
    assert ScoreEntry.from_line("  ada\t12   3.5 ") == ScoreEntry("ada", 12, 3.5)


@pytest.mark.parametrize(
    "line",
    [
        "ada 12",
        "ada 12 3.5 extra",
        "ada twelve 3.5",
        "ada 12 fast",
        "ghost 5 nan",
        "ghost 5 inf",
        "ghost 5 -inf",
        "ghost -1 3.5",
        "ghost 5 -0.5",
    ],
)
def test_malformed_line_raises(line: str) -> None:
    with pytest.raises(ScoreFileError):
        ScoreEntry.from_line(line)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Ada", "Ada"),
        ("  Ada  Lovelace ", "Ada_Lovelace"),
        ("tab\there", "tab_here"),
        ("", "Player"),
        ("   ", "Player"),
        ("x" * 40, "x" * MAX_NAME_LENGTH),
    ],
)
def test_sanitize_name(raw: str, expected: str) -> None:
    assert sanitize_name(raw) == expected


def test_ordering_prefers_fewer_moves_then_less_time() -> None:
    assert ScoreEntry("a", 10, 50.0).beats(ScoreEntry("b", 12, 5.0))
    assert ScoreEntry("a", 10, 5.0).beats(ScoreEntry("b", 10, 6.0))
    assert not ScoreEntry("a", 10, 6.0).beats(ScoreEntry("b", 10, 6.0))
    assert ScoreEntry("a", 99, 99.0).beats(None)


# -- leaderboard --------------------------------------------------------------


def test_missing_leaderboard_is_empty(tmp_path: Path) -> None:
    board = LeaderboardManager(tmp_path / "nope.txt")
    assert board.get_scores() == []
    assert not (tmp_path / "nope.txt").exists()


def test_add_score_sorts_and_ranks(tmp_path: Path) -> None:
    board = LeaderboardManager(tmp_path / LEADERBOARD_FILE)
    assert board.add_score(ScoreEntry("carol", 14, 20.0)) == 1
    assert board.add_score(ScoreEntry("ada", 10, 30.0)) == 1
    assert board.add_score(ScoreEntry("bob", 14, 18.25)) == 2

    assert [e.name for e in board.get_scores()] == ["ada", "bob", "carol"]
    assert [e.name for e in board.get_scores(2)] == ["ada", "bob"]
    assert (tmp_path / LEADERBOARD_FILE).read_text().splitlines() == [
        "ada 10 30.00",
        "bob 14 18.25",
        "carol 14 20.00",
    ]


def test_leaderboard_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "scores" / LEADERBOARD_FILE
    board = LeaderboardManager(path)
    board.add_score(ScoreEntry("Ada Lovelace", 16, 41.5))
    board.add_score(ScoreEntry("bob", 12, 7.75))

    reloaded = LeaderboardManager(path)
    assert reloaded.get_scores() == [
        ScoreEntry("bob", 12, 7.75),
        ScoreEntry("Ada_Lovelace", 16, 41.5),
    ]


def test_damaged_lines_are_skipped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / LEADERBOARD_FILE
    path.write_text("bob 12 7.75\ngarbage\n\nada 10 not-a-time\ncarol 9 60\n")

    with caplog.at_level(logging.WARNING, logger="backend.models.highscore"):
        board = LeaderboardManager(path)

    assert [e.name for e in board.get_scores()] == ["carol", "bob"]
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 2


def test_undecodable_bytes_do_not_stop_loading(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / LEADERBOARD_FILE).write_bytes(b"bob 12 7.75\n\xff\xfe x\n")

    with caplog.at_level(logging.WARNING, logger="backend.models.highscore"):
        scores = ScoreBook(tmp_path)

    assert scores.leaderboard.get_scores() == [ScoreEntry("bob", 12, 7.75)]
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 1


def test_rank_of_unknown_entry(tmp_path: Path) -> None:
    board = LeaderboardManager(tmp_path / LEADERBOARD_FILE)
    with pytest.raises(ValueError):
        board.rank_of(ScoreEntry("ghost", 1, 1.0))


def test_add_score_leaves_callers_entry_alone(tmp_path: Path) -> None:
    path = tmp_path / LEADERBOARD_FILE
    board = LeaderboardManager(path)
    entry = ScoreEntry("Ada Lovelace", 10, 5.0)

    assert board.add_score(entry) == 1
    assert entry.name == "Ada Lovelace"

    reloaded = LeaderboardManager(path)
    assert reloaded.rank_of(ScoreEntry("Ada_Lovelace", 10, 5.0)) == 1


# -- best score ---------------------------------------------------------------


def test_missing_best_is_none(tmp_path: Path) -> None:
    assert BestScoreManager(tmp_path / BEST_FILE).best is None


def test_best_is_overwritten_only_when_beaten(tmp_path: Path) -> None:
    path = tmp_path / BEST_FILE
    best = BestScoreManager(path)

    assert best.submit(ScoreEntry("ada", 12, 30.0))
    assert path.read_text() == "ada 12 30.00\n"

    assert not best.submit(ScoreEntry("bob", 14, 10.0))
    assert not best.submit(ScoreEntry("bob", 12, 30.0))
    assert path.read_text() == "ada 12 30.00\n"

    assert best.submit(ScoreEntry("carol", 12, 29.5))
    assert path.read_text() == "carol 12 29.50\n"
    assert BestScoreManager(path).best == ScoreEntry("carol", 12, 29.5)


def test_non_finite_best_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / BEST_FILE
    path.write_text("ghost 5 nan\n")
    best = BestScoreManager(path)
    assert best.best is None

    entry = ScoreEntry("ada lovelace", 5, 3.0)
    assert best.submit(entry)
    assert entry.name == "ada lovelace"
    assert path.read_text() == "ada_lovelace 5 3.00\n"


def test_best_file_with_several_lines_keeps_the_best(tmp_path: Path) -> None:
    path = tmp_path / BEST_FILE
    path.write_text("bob 14 10.00\nada 12 30.00\n")
    assert BestScoreManager(path).best == ScoreEntry("ada", 12, 30.0)


# -- score book ---------------------------------------------------------------


def test_score_book_records_both_files(tmp_path: Path) -> None:
    data_dir = tmp_path / "data"
    scores = ScoreBook(data_dir)

    assert scores.record("ada", 12, 30.004) == (1, True)
    assert scores.record("bob", 14, 10.0) == (2, False)
    assert scores.record("carol", 8, 50.0) == (1, True)

    assert (data_dir / BEST_FILE).read_text() == "carol 8 50.00\n"
    reloaded = ScoreBook(data_dir)
    assert [e.name for e in reloaded.leaderboard.get_scores()] == ["carol", "ada", "bob"]
    assert reloaded.leaderboard.get_scores()[1].time == 30.0
