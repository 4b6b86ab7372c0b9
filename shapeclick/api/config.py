from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from shapeclick.core.config import GameConfig, TerminationMode, TerminationPolicy


@dataclass
class EngineConfig:
    screen_size: Tuple[int, int]
    mirror: bool = False
    fps: int = 60
    show_fps: bool = False


__all__ = ["EngineConfig", "GameConfig", "TerminationMode", "TerminationPolicy"]
