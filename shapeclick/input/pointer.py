from __future__ import annotations
import pygame
from typing import Iterable, List, Tuple

from shapeclick.api.config import EngineConfig
from shapeclick.api.frame_data import Point

_BTN_NAME = {1: "left", 2: "middle", 3: "right"}


class PointerInput:
    """
    Click collector:
    - Every accepted MOUSEBUTTONDOWN becomes one Point, in arrival order.
    - Points are drained once per frame by emit_clicks().
    - Respects mirror by converting window coords -> logical coords.
    """

    def __init__(self, cfg: EngineConfig, buttons: Iterable[str] = ("left",)):
        self.mirror = cfg.mirror
        self.buttons = {str(b).lower() for b in buttons}
        self._pending: List[Point] = []

    def _to_logical(self, x: int, y: int, w: int, h: int) -> Tuple[float, float]:
        if self.mirror:
            x = (w - 1) - x
        return float(x), float(y)

    def handle_pygame_event(self, event: pygame.event.Event, screen_size: Tuple[int, int]) -> bool:
        """Returns True when the event was consumed as a click."""
        if event.type != pygame.MOUSEBUTTONDOWN:
            if event.type == pygame.WINDOWFOCUSLOST:
                self._pending.clear()
            return False

        if _BTN_NAME.get(event.button) not in self.buttons:
            return False

        w, h = screen_size
        lx, ly = self._to_logical(*event.pos, w, h)
        self._pending.append(Point(lx, ly, event.button))
        return True

    def emit_clicks(self) -> List[Point]:
        """Return and forget the clicks gathered since the previous call."""
        out, self._pending = self._pending, []
        return out
