from backend.engine.gamegenerator.generator import (
    DEFAULT_COLUMNS,
    DEFAULT_PAIRS,
    FACES,
    MAX_PAIRS,
    MIN_PAIRS,
    DeckGenerator,
)

__all__ = [
    "DEFAULT_COLUMNS",
    "DEFAULT_PAIRS",
    "FACES",
    "MAX_PAIRS",
    "MIN_PAIRS",
    "DeckGenerator",
]
