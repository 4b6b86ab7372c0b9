from __future__ import annotations

import pygame

from shapeclick.app.context import Context

from .frame_data import FrameData


class Game:
    """
    Base interface games should implement.
    """

    def on_load(self, ctx: Context, manifest: dict) -> None:
        """Called once after the game module loads."""
        ...

    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        """Called every frame with the clicks gathered since the last one."""
        ...

    def on_draw(self, surface: pygame.Surface) -> None:
        """Draw your game to the provided surface."""
        ...

    def on_event(self, event: pygame.event.Event) -> None:
        """Optional: keyboard and other non-pointer pygame events."""
        ...

    def on_unload(self) -> None:
        """Optional: cleanup when the game exits."""
        ...
