"""
Round / game state machine.

One ShapeClickEngine owns one session: the random source, the current
GameState and the termination policy. GameState is an immutable value that
is replaced on every transition, so a snapshot handed to a renderer never
changes underneath it.

    AwaitingClick --click--> Resolving --+--> AwaitingClick (new round)
                                         +--> GameOver
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple

from .config import GameConfig
from .errors import GameStateError
from .geometry import ShapeType, contains
from .layout import Color, Round, ShapeInstance, generate_round

logger = logging.getLogger(__name__)

FEEDBACK_COLOR: Color = (255, 0, 0)


class Phase(Enum):
    Idle = 0
    AwaitingClick = 1
    Resolving = 2
    GameOver = 3


@dataclass(frozen=True)
class Feedback:
    """Transient 'wrong shape' marker; the shape itself is left untouched."""
    shape: ShapeInstance
    color: Color = FEEDBACK_COLOR


@dataclass(frozen=True)
class GameOver:
    final_score: int
    rounds_played: int
    elapsed_seconds: float


@dataclass(frozen=True)
class GameState:
    score: int = 0
    rounds_played: int = 0
    started_at: float = 0.0
    round: Optional[Round] = None
    phase: Phase = Phase.Idle
    result: Optional[GameOver] = None


@dataclass(frozen=True)
class ClickOutcome:
    point: Tuple[float, float]
    shape: Optional[ShapeInstance]
    correct: bool
    score: int
    rounds_played: int
    feedback: Optional[Feedback] = None
    game_over: Optional[GameOver] = None

    @property
    def hit(self) -> bool:
        return self.shape is not None


@dataclass(frozen=True)
class ShapeView:
    kind: str
    center: Tuple[int, int]
    size: int
    color: Color


@dataclass(frozen=True)
class RoundSnapshot:
    target: str
    instruction: str
    progress: str
    shapes: Tuple[ShapeView, ...]


RoundListener = Callable[[Round], None]
GameOverListener = Callable[[GameOver], None]


class ShapeClickEngine:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        on_round_changed: Optional[RoundListener] = None,
        on_game_over: Optional[GameOverListener] = None,
    ):
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.clock = clock
        self.on_round_changed = on_round_changed
        self.on_game_over = on_game_over
        self._state = GameState()

    # ------------- queries -------------
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def current_round(self) -> Optional[Round]:
        return self._state.round

    def shape_at(self, x: float, y: float) -> Optional[ShapeInstance]:
        """First shape in stored order whose outline contains (x, y)."""
        rnd = self._state.round
        if rnd is None:
            return None
        for shape in rnd.shapes:
            if contains(shape.outline, (x, y)):
                return shape
        return None

    def progress_text(self) -> str:
        return self.config.policy.progress_text(self._state.score, self._state.rounds_played)

    def snapshot(self) -> RoundSnapshot:
        rnd = self._state.round
        if rnd is None:
            raise GameStateError("no round has been generated yet; call start_game()")
        return RoundSnapshot(
            target=rnd.target.label,
            instruction=f"Click the {rnd.target.label}!",
            progress=self.progress_text(),
            shapes=tuple(ShapeView(s.shape_type.label, s.center, s.size, s.color) for s in rnd.shapes),
        )

    # ------------- transitions -------------
    def start_game(self, config: Optional[GameConfig] = None) -> GameState:
        """Reset counters and timing anchor, generate the first round."""
        if config is not None:
            config.validate()
            if config.seed is not None:
                self.rng.seed(config.seed)
            self.config = config
        else:
            self.config.validate()

        first = self._new_round()
        self._state = GameState(
            score=0, rounds_played=0, started_at=self.clock(),
            round=first, phase=Phase.AwaitingClick,
        )
        logger.info("game started: %s", self.progress_text())
        self._emit_round(first)
        return self._state

    def handle_click(self, x: float, y: float) -> ClickOutcome:
        prev = self._state
        if prev.phase != Phase.AwaitingClick:
            raise GameStateError(f"clicks are not accepted in phase {prev.phase.name}")

        shape = self.shape_at(x, y)
        if shape is None:
            logger.debug("click (%s, %s) hit nothing", x, y)
            return ClickOutcome((x, y), None, False, prev.score, prev.rounds_played)

        self._state = replace(prev, phase=Phase.Resolving)
        try:
            outcome = self._resolve(prev, shape, (x, y))
        except Exception:
            # leave the session exactly as it was before the click
            self._state = prev
            raise

        if outcome.game_over is not None:
            logger.info("game over: score=%d rounds=%d elapsed=%.2fs", outcome.game_over.final_score,
                        outcome.game_over.rounds_played, outcome.game_over.elapsed_seconds)
            if self.on_game_over:
                self.on_game_over(outcome.game_over)
        else:
            self._emit_round(self._state.round)
        return outcome

    def _resolve(self, prev: GameState, shape: ShapeInstance, point: Tuple[float, float]) -> ClickOutcome:
        rnd = prev.round
        correct = shape.shape_type == rnd.target
        score = prev.score + (1 if correct else 0)
        rounds = prev.rounds_played + 1
        feedback = None if correct else Feedback(shape)
        logger.debug("click %s on %s (target %s): %s", point, shape.shape_type.label,
                      rnd.target.label, "correct" if correct else "wrong")

        if self.config.policy.is_satisfied(score, rounds):
            result = GameOver(score, rounds, max(0.0, self.clock() - prev.started_at))
            self._state = replace(prev, score=score, rounds_played=rounds,
                                  phase=Phase.GameOver, result=result)
            return ClickOutcome(point, shape, correct, score, rounds, feedback, result)

        nxt = self._new_round()
        self._state = replace(prev, score=score, rounds_played=rounds,
                              round=nxt, phase=Phase.AwaitingClick)
        return ClickOutcome(point, shape, correct, score, rounds, feedback)

    def _new_round(self) -> Round:
        cfg = self.config
        target = self.rng.choice(list(ShapeType))
        return generate_round(
            target, cfg.placement_width, cfg.placement_height, cfg.shape_count, self.rng,
            size=cfg.shape_size, separation=cfg.separation, edge_padding=cfg.edge_padding,
            star_points=cfg.star_points, max_attempts=cfg.max_attempts,
            max_restarts=cfg.max_restarts,
        )

    def _emit_round(self, rnd: Round) -> None:
        if self.on_round_changed:
            self.on_round_changed(rnd)
