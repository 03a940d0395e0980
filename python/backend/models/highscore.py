"""Score persistence: a sorted leaderboard and a single best score.

Both files are plain text, one record per line::

    alice 14 37.25
    bob 16 29.80

Fields are whitespace-separated, so player names never contain whitespace
(see :func:`sanitize_name`).
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 16
DEFAULT_NAME = "Player"
LEADERBOARD_FILE = "leaderboard.txt"
BEST_FILE = "best.txt"


class ScoreFileError(ValueError):
    """A line of a score file could not be parsed."""


@dataclass
class ScoreEntry:
    name: str
    moves: int
    time: float

    @property
    def sort_key(self) -> tuple[int, float]:
        return (self.moves, self.time)

    def beats(self, other: ScoreEntry | None) -> bool:
        return other is None or self.sort_key < other.sort_key

    # -- text codec -----------------------------------------------------------

    def to_line(self) -> str:
        return f"{sanitize_name(self.name)} {self.moves} {self.time:.2f}"

    @classmethod
    def from_line(cls, line: str) -> ScoreEntry:
        parts = line.split()
        if len(parts) != 3:
            raise ScoreFileError(f"Expected 'name moves time', got {line!r}.")
        name, moves, secs = parts
        try:
            entry = cls(name=name, moves=int(moves), time=float(secs))
        except ValueError as exc:
            raise ScoreFileError(f"Bad number in {line!r}.") from exc
        if entry.moves < 0 or entry.time < 0 or not math.isfinite(entry.time):
            raise ScoreFileError(f"Out-of-range score in {line!r}.")
        return entry


def sanitize_name(raw: str) -> str:
    """Make *raw* safe for the whitespace-separated score format."""
    name = re.sub(r"\s+", "_", raw.strip())[:MAX_NAME_LENGTH]
    return name or DEFAULT_NAME


def _read_entries(filepath: Path) -> list[ScoreEntry]:
    if not filepath.exists():
        return []
    # undecodable bytes become U+FFFD instead of aborting the load
    text = filepath.read_text(encoding="utf-8", errors="replace")
    entries: list[ScoreEntry] = []
    for lineno, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            entries.append(ScoreEntry.from_line(line))
        except ScoreFileError as exc:
            logger.warning("Skipping %s:%d: %s", filepath, lineno, exc)
    return entries


def _write_entries(filepath: Path, entries: list[ScoreEntry]) -> None:
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(
        "".join(e.to_line() + "\n" for e in entries), encoding="utf-8"
    )


class LeaderboardManager:
    """Keeps every finished game, best first."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self._scores: list[ScoreEntry] = []
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        self._scores = sorted(_read_entries(self.filepath), key=lambda e: e.sort_key)
        logger.debug("Loaded %d leaderboard entries from %s", len(self._scores), self.filepath)

    def save(self) -> None:
        _write_entries(self.filepath, self._scores)

    # -- queries --------------------------------------------------------------

    def add_score(self, entry: ScoreEntry) -> int:
        """Insert a sanitised copy of *entry*, save, and return its 1-based rank."""
        stored = replace(entry, name=sanitize_name(entry.name))
        self._scores.append(stored)
        self._scores.sort(key=lambda e: e.sort_key)
        self.save()
        return self.rank_of(stored)

    def rank_of(self, entry: ScoreEntry) -> int:
        """Rank of the first stored entry equal in value to *entry*."""
        for i, e in enumerate(self._scores, 1):
            if e == entry:
                return i
        raise ValueError(f"{entry!r} is not on the leaderboard.")

    def get_scores(self, limit: int | None = None) -> list[ScoreEntry]:
        return self._scores[:limit] if limit is not None else list(self._scores)


class BestScoreManager:
    """Holds a single record, overwritten only when beaten."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self.best: ScoreEntry | None = None
        self._load()

    def _load(self) -> None:
        entries = _read_entries(self.filepath)
        self.best = min(entries, key=lambda e: e.sort_key) if entries else None

    def save(self) -> None:
        _write_entries(self.filepath, [self.best] if self.best else [])

    def submit(self, entry: ScoreEntry) -> bool:
        """Store *entry* if it beats the current record.  Returns True if so."""
        if not entry.beats(self.best):
            return False
        stored = replace(entry, name=sanitize_name(entry.name))
        logger.debug("New best score %s (was %s)", stored, self.best)
        self.best = stored
        self.save()
        return True


class ScoreBook:
    """The leaderboard and best-score files of one data directory."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self.leaderboard = LeaderboardManager(data_dir / LEADERBOARD_FILE)
        self.best = BestScoreManager(data_dir / BEST_FILE)

    def record(self, name: str, moves: int, time: float) -> tuple[int, bool]:
        """Save a finished game.  Returns ``(leaderboard rank, new best?)``."""
        entry = ScoreEntry(name=name, moves=moves, time=round(time, 2))
        return self.leaderboard.add_score(entry), self.best.submit(entry)
