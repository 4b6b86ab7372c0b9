from .config import GameConfig, TerminationMode, TerminationPolicy
from .errors import ConfigError, GameStateError, LayoutError, ShapeClickError
from .geometry import EDGE_TOLERANCE, Outline, ShapeType, bounding_box, contains, outline_for
from .layout import Round, ShapeInstance, generate_round
from .state import (
    ClickOutcome, Feedback, GameOver, GameState, Phase, RoundSnapshot, ShapeClickEngine,
)

__all__ = [
    "GameConfig", "TerminationMode", "TerminationPolicy",
    "ConfigError", "GameStateError", "LayoutError", "ShapeClickError",
    "EDGE_TOLERANCE", "Outline", "ShapeType", "bounding_box", "contains", "outline_for",
    "Round", "ShapeInstance", "generate_round",
    "ClickOutcome", "Feedback", "GameOver", "GameState", "Phase", "RoundSnapshot",
    "ShapeClickEngine",
]
