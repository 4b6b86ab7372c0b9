from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass
class Point:
    x: float
    y: float
    button: int = 1


@dataclass
class FrameData:
    timestamp: float
    # pointer clicks since the previous frame, in logical (unmirrored) screen coords
    clicks: List[Point] = field(default_factory=list)
