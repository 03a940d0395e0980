from backend.models.deck import Card, Deck
from backend.models.highscore import (
    BestScoreManager,
    LeaderboardManager,
    ScoreBook,
    ScoreEntry,
    ScoreFileError,
)
from backend.models.layout import GridLayout

__all__ = [
    "BestScoreManager",
    "Card",
    "Deck",
    "GridLayout",
    "LeaderboardManager",
    "ScoreBook",
    "ScoreEntry",
    "ScoreFileError",
]
