import pygame
from typing import Tuple

from shapeclick.core.geometry import Outline
from shapeclick.core.layout import ShapeInstance

OUTLINE_COLOR = (0, 0, 0)


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24):
    font = pygame.font.SysFont(None, size)
    surface.blit(font.render(text, True, color), pos)


def draw_outline(surface: pygame.Surface, outline: Outline, color, offset=(0, 0), width=0) -> None:
    """Fill (width=0) or stroke an outline, shifted by offset."""
    ox, oy = offset
    if outline.vertices is None:
        cx, cy = outline.center
        pygame.draw.circle(surface, color, (round(cx + ox), round(cy + oy)), round(outline.radius), width)
        return
    pts = [(x + ox, y + oy) for x, y in outline.points()]
    pygame.draw.polygon(surface, color, pts, width)


def draw_shape(surface: pygame.Surface, shape: ShapeInstance, offset=(0, 0)) -> None:
    draw_outline(surface, shape.outline, shape.color, offset)
    draw_outline(surface, shape.outline, OUTLINE_COLOR, offset, width=1)


def draw_feedback(surface: pygame.Surface, shape: ShapeInstance, color, offset=(0, 0)) -> None:
    draw_outline(surface, shape.outline, color, offset, width=3)
