from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigError
from .geometry import DEFAULT_STAR_POINTS
from .layout import (
    EDGE_PADDING, MAX_ATTEMPTS, MAX_RESTARTS, SEPARATION, SHAPE_SIZE, placement_margin,
)

DEFAULT_TARGET_SCORE = 5
DEFAULT_SHAPE_COUNT = 8
DEFAULT_PLACEMENT_SIZE = (900, 500)


class TerminationMode(Enum):
    FirstToScore = "first_to_score"
    FixedRounds = "fixed_rounds"


@dataclass(frozen=True)
class TerminationPolicy:
    """
    When a session ends.

    FirstToScore: game over once score reaches `threshold`; misses are free.
    FixedRounds: game over after `threshold` clicks on shapes, hit or miss.
    """

    mode: TerminationMode
    threshold: int

    @classmethod
    def first_to(cls, target_score: int) -> "TerminationPolicy":
        return cls(TerminationMode.FirstToScore, target_score)

    @classmethod
    def fixed_rounds(cls, total_rounds: int) -> "TerminationPolicy":
        return cls(TerminationMode.FixedRounds, total_rounds)

    def is_satisfied(self, score: int, rounds_played: int) -> bool:
        if self.mode == TerminationMode.FirstToScore:
            return score >= self.threshold
        return rounds_played >= self.threshold

    def progress_text(self, score: int, rounds_played: int) -> str:
        if self.mode == TerminationMode.FirstToScore:
            return f"Score: {score}/{self.threshold}"
        return f"Round: {rounds_played}/{self.threshold} | Score: {score}"


@dataclass(frozen=True)
class GameConfig:
    policy: TerminationPolicy = field(
        default_factory=lambda: TerminationPolicy.first_to(DEFAULT_TARGET_SCORE))
    shape_count: int = DEFAULT_SHAPE_COUNT
    placement_width: int = DEFAULT_PLACEMENT_SIZE[0]
    placement_height: int = DEFAULT_PLACEMENT_SIZE[1]
    shape_size: int = SHAPE_SIZE
    separation: float = SEPARATION
    edge_padding: int = EDGE_PADDING
    star_points: int = DEFAULT_STAR_POINTS
    max_attempts: int = MAX_ATTEMPTS
    max_restarts: int = MAX_RESTARTS
    seed: Optional[int] = None

    def validate(self) -> "GameConfig":
        if self.policy.threshold < 1:
            raise ConfigError(f"termination threshold must be at least 1, got {self.policy.threshold}")
        if self.shape_count < 1:
            raise ConfigError(f"shape_count must be at least 1, got {self.shape_count}")
        if self.placement_width <= 0 or self.placement_height <= 0:
            raise ConfigError(
                f"placement area must be positive, got {self.placement_width}x{self.placement_height}")
        if self.shape_size <= 0:
            raise ConfigError(f"shape_size must be positive, got {self.shape_size}")
        if self.separation < 0 or self.edge_padding < 0:
            raise ConfigError("separation and edge_padding cannot be negative")
        if self.star_points < 2:
            raise ConfigError(f"star_points must be at least 2, got {self.star_points}")
        if self.max_attempts < 1 or self.max_restarts < 1:
            raise ConfigError("max_attempts and max_restarts must be at least 1")
        return self

    @property
    def margin(self) -> int:
        return placement_margin(self.shape_size, self.edge_padding)

    def with_placement(self, width: int, height: int) -> "GameConfig":
        return replace(self, placement_width=int(width), placement_height=int(height))

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]],
                     placement_size: Optional[Tuple[int, int]] = None) -> "GameConfig":
        """
        Build a config from the `options:` block of a game manifest, e.g.:

            options:
              policy: first_to_score   # or fixed_rounds
              target_score: 5          # first_to_score only
              total_rounds: 10         # fixed_rounds only
              shape_count: 8
              shape_size: 50           # separation defaults to twice this
              seed: 1234               # optional

        placement_size, when given, wins over any width/height in the options.
        """
        opts = dict(options or {})
        name = str(opts.pop("policy", TerminationMode.FirstToScore.value)).lower()
        try:
            mode = TerminationMode(name)
        except ValueError:
            raise ConfigError(f"unknown termination policy {name!r}") from None

        try:
            if mode == TerminationMode.FirstToScore:
                policy = TerminationPolicy.first_to(int(opts.pop("target_score", DEFAULT_TARGET_SCORE)))
                opts.pop("total_rounds", None)
            else:
                policy = TerminationPolicy.fixed_rounds(int(opts.pop("total_rounds", DEFAULT_TARGET_SCORE)))
                opts.pop("target_score", None)

            kwargs: Dict[str, Any] = {}
            for key in ("shape_count", "placement_width", "placement_height", "shape_size",
                        "edge_padding", "star_points", "max_attempts", "max_restarts"):
                if key in opts:
                    kwargs[key] = int(opts.pop(key))
            if "separation" in opts:
                kwargs["separation"] = float(opts.pop("separation"))
            elif "shape_size" in kwargs:
                kwargs["separation"] = 2.0 * kwargs["shape_size"]
            if opts.get("seed") is not None:
                kwargs["seed"] = int(opts.pop("seed"))
            opts.pop("seed", None)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"bad option value: {e}") from e

        if opts:
            raise ConfigError(f"unknown options: {sorted(opts)}")

        if placement_size is not None:
            kwargs["placement_width"], kwargs["placement_height"] = map(int, placement_size)
        return cls(policy=policy, **kwargs)
