from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Tuple

from .errors import LayoutError
from .geometry import DEFAULT_STAR_POINTS, Outline, ShapeType, outline_for

logger = logging.getLogger(__name__)

SHAPE_SIZE = 50                    # px, diameter / side of every shape
EDGE_PADDING = 35                  # extra inset on top of half the size (60 px total at size 50)
SEPARATION = 100                   # min Chebyshev distance between centers
MAX_ATTEMPTS = 1000                # samples per shape before a layout is abandoned
MAX_RESTARTS = 10                  # whole layouts tried before giving up

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class ShapeInstance:
    x: int
    y: int
    shape_type: ShapeType
    size: int
    color: Color
    outline: Outline = field(compare=False, repr=False)

    @property
    def center(self) -> Tuple[int, int]:
        return self.x, self.y


@dataclass(frozen=True)
class Round:
    target: ShapeType
    shapes: Tuple[ShapeInstance, ...]

    def target_shape(self) -> ShapeInstance:
        for s in self.shapes:
            if s.shape_type == self.target:
                return s
        raise LookupError(f"round has no {self.target.label}")


def placement_margin(size: int, edge_padding: int = EDGE_PADDING) -> int:
    return size // 2 + edge_padding


def chebyshev(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def random_color(rng: random.Random) -> Color:
    return rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255)


def assign_types(target: ShapeType, shape_count: int, rng: random.Random) -> List[ShapeType]:
    """One target plus shape_count - 1 distractors, in shuffled order."""
    kinds = list(ShapeType)
    types = [target]
    for _ in range(shape_count - 1):
        t = rng.choice(kinds)
        while t == target:
            t = rng.choice(kinds)
        types.append(t)
    rng.shuffle(types)
    return types


def _place_centers(count: int, width: int, height: int, margin: int, separation: float,
                   rng: random.Random, max_attempts: int) -> List[Tuple[int, int]]:
    placed: List[Tuple[int, int]] = []
    for _ in range(count):
        for _attempt in range(max_attempts):
            p = (rng.randint(margin, width - margin), rng.randint(margin, height - margin))
            if all(chebyshev(p, q) >= separation for q in placed):
                placed.append(p)
                break
        else:
            logger.debug("gave up after %d attempts with %d/%d shapes placed",
                         max_attempts, len(placed), count)
            break
    return placed


def generate_round(
    target: ShapeType,
    placement_width: int,
    placement_height: int,
    shape_count: int,
    rng: random.Random,
    size: int = SHAPE_SIZE,
    separation: float = SEPARATION,
    edge_padding: int = EDGE_PADDING,
    star_points: int = DEFAULT_STAR_POINTS,
    max_attempts: int = MAX_ATTEMPTS,
    max_restarts: int = MAX_RESTARTS,
) -> Round:
    """
    Build one round: shape_count shapes, exactly one of type `target`.

    Centers are rejection-sampled inside [margin, W - margin] x [margin, H - margin]
    until each is at least `separation` away (Chebyshev) from every center
    already placed. Sampling is bounded; when the whole budget is spent
    LayoutError is raised instead of looping forever.
    """
    if shape_count < 1:
        raise LayoutError(f"shape_count must be at least 1, got {shape_count}", shape_count, 0)

    margin = placement_margin(size, edge_padding)
    if placement_width - margin < margin or placement_height - margin < margin:
        raise LayoutError(
            f"placement area {placement_width}x{placement_height} is smaller than the "
            f"{2 * margin}px needed for one shape", shape_count, 0)

    types = assign_types(target, shape_count, rng)

    centers: List[Tuple[int, int]] = []
    best = 0
    for restart in range(max_restarts):
        centers = _place_centers(shape_count, placement_width, placement_height,
                                 margin, separation, rng, max_attempts)
        if len(centers) == shape_count:
            break
        best = max(best, len(centers))
        logger.debug("layout restart %d/%d", restart + 1, max_restarts)
    else:
        raise LayoutError(
            f"could not place {shape_count} shapes {separation}px apart in "
            f"{placement_width}x{placement_height} after {max_restarts} tries",
            shape_count, best)

    shapes = []
    for (x, y), t in zip(centers, types):
        shapes.append(ShapeInstance(
            x=x, y=y, shape_type=t, size=size, color=random_color(rng),
            outline=outline_for(t, (x, y), size, star_points=star_points),
        ))

    logger.debug("new round: target=%s shapes=%d", target.label, len(shapes))
    return Round(target=target, shapes=tuple(shapes))
