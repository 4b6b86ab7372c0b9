from __future__ import annotations
from dataclasses import dataclass
import pygame
from typing import Callable, Tuple
from shapeclick.api.config import EngineConfig


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: EngineConfig
    screen_size: Tuple[int, int]
    # lets a game end the session (e.g. "quit" on the results screen)
    request_quit: Callable[[], None]
