from __future__ import annotations
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional
import pygame

from shapeclick.api.config import EngineConfig
from shapeclick.api.frame_data import FrameData
from shapeclick.app.context import Context
from shapeclick.app.loader import GAMES_DIR, load_game_manifest, load_game_module
from shapeclick.input.pointer import PointerInput
from shapeclick.render.shapes import draw_text

logger = logging.getLogger(__name__)

BG_COLOR = (255, 255, 255)


def run_game(
    game_id: str,
    screen_size: tuple[int, int],
    mirror: bool = False,
    fps: int = 60,
    show_fps: bool = False,
    options: Optional[Dict[str, Any]] = None,
    games_dir: Path = GAMES_DIR,
) -> int:
    """
    Open the window and drive one game plugin until it (or the user) quits.
    `options` are merged over the manifest's own options block.
    Returns the process exit status.
    """
    cfg = EngineConfig(screen_size=screen_size, mirror=mirror, fps=fps, show_fps=show_fps)

    # load game
    game_root = games_dir / game_id
    manifest = load_game_manifest(game_root)
    if options:
        manifest["options"] = {**manifest.get("options", {}), **options}
    module = load_game_module(game_root)
    game = module.get_game()

    pygame.init()
    pygame.display.set_caption(manifest.get("title", f"Shape Click - {game_id}"))
    screen = pygame.display.set_mode(screen_size)
    clock = pygame.time.Clock()

    pointer = PointerInput(cfg, buttons=manifest.get("buttons", ["left"]))

    # Render target: draw to off-screen if mirroring, otherwise draw directly to screen
    render_surface = screen if not mirror else pygame.Surface(screen_size).convert()

    running = True

    def request_quit():
        nonlocal running
        running = False

    ctx = Context(
        screen=render_surface,
        clock=clock,
        cfg=cfg,
        screen_size=screen_size,
        request_quit=request_quit,
    )

    logger.info("starting %s at %dx%d", game_id, *screen_size)
    try:
        game.on_load(ctx, manifest)
    except Exception:
        pygame.quit()
        raise

    try:
        while running:
            dt = clock.tick(cfg.fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    continue
                if pointer.handle_pygame_event(event, screen_size):
                    continue
                game.on_event(event)

            frame_data = FrameData(timestamp=time.time(), clicks=pointer.emit_clicks())

            # ---- draw to render_surface ----
            render_surface.fill(BG_COLOR)
            game.on_update(dt, frame_data)
            game.on_draw(render_surface)
            if cfg.show_fps:
                draw_text(render_surface, f"{clock.get_fps():.0f} fps",
                          (screen_size[0] - 80, screen_size[1] - 24), (120, 120, 120), size=20)

            # ---- present to window ----
            if mirror:
                flipped = pygame.transform.flip(render_surface, True, False)
                screen.blit(flipped, (0, 0))

            pygame.display.flip()

    finally:
        game.on_unload()
        pygame.quit()

    logger.info("%s closed", game_id)
    return 0
