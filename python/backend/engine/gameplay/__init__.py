from backend.engine.gameplay.game import FLIP_DELAY, FlipResult, GamePlay

__all__ = ["FLIP_DELAY", "FlipResult", "GamePlay"]
