"""
Shape outlines and point containment.

Every shape type shares the same data (a center and a size) and only differs
in how its outline is built, so the types are a plain enum plus a table of
outline builders instead of a class hierarchy. Containment is always tested
against the true outline, never against the bounding square.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

import cv2
import numpy as np

# Points this close to an edge (in px) count as on the boundary.
EDGE_TOLERANCE = 1e-6

DEFAULT_STAR_POINTS = 5

Vec2 = Tuple[float, float]


class ShapeType(Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    DIAMOND = "diamond"
    STAR = "star"

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False)
class Outline:
    """
    Exact boundary of one placed shape.

    Polygonal types carry their vertices as an Nx2 float32 array in
    drawing order; the circle carries no vertices and is tested analytically.
    """

    shape_type: ShapeType
    center: Vec2
    size: float
    vertices: Optional[np.ndarray] = None

    def __post_init__(self):
        if self.vertices is not None:
            if self.vertices.ndim != 2 or self.vertices.shape[1] != 2:
                raise ValueError(f"vertices must be Nx2, got shape {self.vertices.shape}")
            if len(self.vertices) < 3:
                raise ValueError(f"outline needs at least 3 vertices, got {len(self.vertices)}")

    @property
    def radius(self) -> float:
        return self.size / 2.0

    def points(self) -> list[Tuple[float, float]]:
        """Vertices as plain tuples (what pygame.draw.polygon wants)."""
        if self.vertices is None:
            return []
        return [(float(x), float(y)) for x, y in self.vertices]


def _polygon(shape_type: ShapeType, center: Vec2, size: float, pts) -> Outline:
    return Outline(shape_type, center, size, np.array(pts, dtype=np.float32))


def star_vertices(center: Vec2, outer: float, inner: float, points: int = DEFAULT_STAR_POINTS) -> np.ndarray:
    """
    Vertices of an N-pointed star, tip first, pointing up.

    Vertex i sits at angle i*pi/N - pi/2, on the outer radius for even i and
    the inner radius for odd i.
    """
    if points < 2:
        raise ValueError(f"a star needs at least 2 points, got {points}")
    cx, cy = center
    out = np.empty((points * 2, 2), dtype=np.float64)
    for i in range(points * 2):
        angle = math.pi * i / points - math.pi / 2
        r = outer if i % 2 == 0 else inner
        out[i] = (cx + r * math.cos(angle), cy + r * math.sin(angle))
    return out


def _circle(center: Vec2, size: float, **_) -> Outline:
    return Outline(ShapeType.CIRCLE, center, size)


def _square(center: Vec2, size: float, **_) -> Outline:
    cx, cy = center
    h = size / 2.0
    return _polygon(ShapeType.SQUARE, center, size, [
        (cx - h, cy - h), (cx + h, cy - h), (cx + h, cy + h), (cx - h, cy + h),
    ])


def _triangle(center: Vec2, size: float, **_) -> Outline:
    cx, cy = center
    h = size / 2.0
    return _polygon(ShapeType.TRIANGLE, center, size, [
        (cx, cy - h), (cx - h, cy + h), (cx + h, cy + h),
    ])


def _diamond(center: Vec2, size: float, **_) -> Outline:
    cx, cy = center
    h = size / 2.0
    return _polygon(ShapeType.DIAMOND, center, size, [
        (cx, cy - h), (cx - h, cy), (cx, cy + h), (cx + h, cy),
    ])


def _star(center: Vec2, size: float, star_points: int = DEFAULT_STAR_POINTS, **_) -> Outline:
    verts = star_vertices(center, size / 2.0, size / 4.0, star_points)
    return _polygon(ShapeType.STAR, center, size, verts)


OUTLINE_BUILDERS: Dict[ShapeType, Callable[..., Outline]] = {
    ShapeType.CIRCLE: _circle,
    ShapeType.SQUARE: _square,
    ShapeType.TRIANGLE: _triangle,
    ShapeType.DIAMOND: _diamond,
    ShapeType.STAR: _star,
}


def outline_for(shape_type: ShapeType, center: Vec2, size: float,
                star_points: int = DEFAULT_STAR_POINTS) -> Outline:
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    center = (float(center[0]), float(center[1]))
    return OUTLINE_BUILDERS[shape_type](center, float(size), star_points=star_points)


def bounding_box(outline: Outline) -> Tuple[float, float, float, float]:
    """(left, top, right, bottom) of the square the shape is drawn in."""
    cx, cy = outline.center
    h = outline.radius
    return cx - h, cy - h, cx + h, cy + h


def contains(outline: Outline, point: Vec2) -> bool:
    """True if point is inside or on the outline (within EDGE_TOLERANCE)."""
    px, py = float(point[0]), float(point[1])

    # cheap reject; every outline fits in its bounding square
    left, top, right, bottom = bounding_box(outline)
    if not (left - EDGE_TOLERANCE <= px <= right + EDGE_TOLERANCE
            and top - EDGE_TOLERANCE <= py <= bottom + EDGE_TOLERANCE):
        return False

    if outline.vertices is None:
        dx = px - outline.center[0]
        dy = py - outline.center[1]
        return math.hypot(dx, dy) <= outline.radius + EDGE_TOLERANCE

    # signed distance: positive inside, zero on an edge, negative outside
    dist = cv2.pointPolygonTest(outline.vertices, (px, py), True)
    return dist >= -EDGE_TOLERANCE
