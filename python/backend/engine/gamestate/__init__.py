from backend.engine.gamestate.state import PREVIEW_DURATION, GameState

__all__ = ["PREVIEW_DURATION", "GameState"]
