from __future__ import annotations
import logging
from enum import Enum
from typing import Optional

import pygame

from shapeclick.api import Game, FrameData, GameConfig
from shapeclick.app.context import Context
from shapeclick.core import ConfigError, Feedback, GameOver, LayoutError, ShapeClickEngine
from shapeclick.render.shapes import draw_feedback, draw_shape, draw_text

logger = logging.getLogger(__name__)

# Layout
HUD_HEIGHT = 100                   # px reserved above the play field
BUTTON_W, BUTTON_H = 180, 56
BUTTON_GAP = 40

# Error screen headlines
LAYOUT_ERROR_TITLE = "Could not lay out the shapes"
CONFIG_ERROR_TITLE = "Invalid game options"

# Colors
INSTRUCTION_COLOR = (0, 0, 255)
SCORE_COLOR = (30, 30, 30)
ERROR_COLOR = (200, 0, 0)
DIVIDER_COLOR = (210, 210, 210)
OVERLAY_COLOR = (245, 245, 245)
BUTTON_COLOR = (40, 40, 40)


class Phase(Enum):
    Playing = 1
    Results = 2
    Error = 3


class ShapeClick(Game):
    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest
        w, h = ctx.screen_size

        self.config = GameConfig.from_options(manifest.get("options"), placement_size=(w, h - HUD_HEIGHT))
        self.engine = ShapeClickEngine(self.config, on_game_over=self._on_game_over)
        self.result: Optional[GameOver] = None
        self.feedback: Optional[Feedback] = None
        self.error: Optional[str] = None
        self.error_title = LAYOUT_ERROR_TITLE

        cy = h // 2 + 60
        self.yes_rect = pygame.Rect(w // 2 - BUTTON_W - BUTTON_GAP // 2, cy, BUTTON_W, BUTTON_H)
        self.no_rect = pygame.Rect(w // 2 + BUTTON_GAP // 2, cy, BUTTON_W, BUTTON_H)

        self._start()

    # ------------- helpers -------------
    def _start(self):
        self.result = None
        self.feedback = None
        try:
            self.engine.start_game(self.config)
        except ConfigError as e:
            logger.error("bad game options: %s", e)
            self._fail(CONFIG_ERROR_TITLE, e)
            return
        except LayoutError as e:
            # refuse to start rather than hang; the player can still quit
            logger.error("cannot start round: %s", e)
            self._fail(LAYOUT_ERROR_TITLE, e)
            return
        self.error = None
        self.phase = Phase.Playing

    def _fail(self, title: str, error: Exception):
        self.error_title = title
        self.error = str(error)
        self.phase = Phase.Error

    def _on_game_over(self, result: GameOver):
        self.result = result
        self.phase = Phase.Results

    def _click_field(self, x: float, y: float):
        if y < HUD_HEIGHT:
            return
        try:
            outcome = self.engine.handle_click(x, y - HUD_HEIGHT)
        except LayoutError as e:
            logger.error("cannot generate next round: %s", e)
            self._fail(LAYOUT_ERROR_TITLE, e)
            return
        if outcome.hit:
            self.feedback = outcome.feedback

    def feedback_visible(self) -> bool:
        """The ring is only drawn while the missed shape is still on screen."""
        if self.feedback is None:
            return False
        return self.feedback.shape in self.engine.current_round.shapes

    # ------------- loop hooks -------------
    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        for p in frame.clicks:
            if self.phase == Phase.Playing:
                self._click_field(p.x, p.y)
            elif self.phase == Phase.Results:
                if self.yes_rect.collidepoint(p.x, p.y):
                    self._start()
                elif self.no_rect.collidepoint(p.x, p.y):
                    self.ctx.request_quit()
                break
            else:
                break

    def on_draw(self, surface: pygame.Surface) -> None:
        w, _ = self.ctx.screen_size
        if self.phase == Phase.Error:
            draw_text(surface, self.error_title, (20, 20), ERROR_COLOR, size=32)
            draw_text(surface, self.error or "", (20, 60), ERROR_COLOR, size=22)
            draw_text(surface, "Press Esc to quit", (20, 92), SCORE_COLOR, size=22)
            return

        snap = self.engine.snapshot()
        draw_text(surface, snap.instruction, (w // 2 - 110, 20), INSTRUCTION_COLOR, size=36)
        draw_text(surface, snap.progress, (w // 2 - 60, 62), SCORE_COLOR, size=26)
        if self.feedback is not None:
            draw_text(surface, f"Wrong: that was a {self.feedback.shape.shape_type.label}",
                      (20, 62), self.feedback.color, size=22)
        pygame.draw.line(surface, DIVIDER_COLOR, (0, HUD_HEIGHT - 1), (w, HUD_HEIGHT - 1), 1)

        offset = (0, HUD_HEIGHT)
        for shape in self.engine.current_round.shapes:
            draw_shape(surface, shape, offset)
        if self.feedback_visible():
            draw_feedback(surface, self.feedback.shape, self.feedback.color, offset)

        if self.phase == Phase.Results:
            self._draw_results(surface)

    def _draw_results(self, surface: pygame.Surface) -> None:
        w, h = self.ctx.screen_size
        box = pygame.Rect(w // 2 - 300, h // 2 - 120, 600, 280)
        pygame.draw.rect(surface, OVERLAY_COLOR, box)
        pygame.draw.rect(surface, BUTTON_COLOR, box, width=2)

        r = self.result
        draw_text(surface, "Game Complete!", (box.x + 30, box.y + 24), SCORE_COLOR, size=40)
        draw_text(surface, f"You completed the game in {r.elapsed_seconds:.2f} seconds!",
                  (box.x + 30, box.y + 76), SCORE_COLOR, size=26)
        draw_text(surface, f"Final score: {r.final_score} in {r.rounds_played} rounds",
                  (box.x + 30, box.y + 108), SCORE_COLOR, size=26)
        draw_text(surface, "Would you like to play again?", (box.x + 30, box.y + 140), SCORE_COLOR, size=26)

        for rect, label in ((self.yes_rect, "Yes (Y)"), (self.no_rect, "No (N)")):
            pygame.draw.rect(surface, BUTTON_COLOR, rect, width=3)
            draw_text(surface, label, (rect.x + 50, rect.y + 18), BUTTON_COLOR, size=26)

    def on_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_ESCAPE:
            self.ctx.request_quit()
        elif self.phase == Phase.Results:
            if event.key in (pygame.K_y, pygame.K_RETURN, pygame.K_SPACE):
                self._start()
            elif event.key == pygame.K_n:
                self.ctx.request_quit()

    def on_unload(self) -> None:
        if self.result is not None:
            logger.info("last result: %s", self.result)


def get_game():
    return ShapeClick()
