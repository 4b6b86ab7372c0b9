from .game_base import Game
from .frame_data import FrameData, Point
from .config import EngineConfig, GameConfig, TerminationPolicy

__all__ = ["Game", "FrameData", "Point", "EngineConfig", "GameConfig", "TerminationPolicy"]
