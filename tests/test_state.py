import random

import pytest

from shapeclick.core.config import GameConfig, TerminationPolicy
from shapeclick.core.errors import ConfigError, GameStateError, LayoutError
from shapeclick.core.geometry import ShapeType
from shapeclick.core.state import FEEDBACK_COLOR, Phase, ShapeClickEngine

EMPTY_SPOT = (1, 1)  # inside the margin, no shape can reach it


def make_engine(clock, policy=None, **kwargs):
    events = {"rounds": [], "over": []}
    cfg = GameConfig(policy=policy or TerminationPolicy.first_to(5), seed=7, **kwargs)
    engine = ShapeClickEngine(
        cfg, clock=clock,
        on_round_changed=events["rounds"].append,
        on_game_over=events["over"].append,
    )
    return engine, events


def click_target(engine):
    return engine.handle_click(*engine.current_round.target_shape().center)


def click_wrong(engine):
    rnd = engine.current_round
    shape = next(s for s in rnd.shapes if s.shape_type != rnd.target)
    return engine.handle_click(*shape.center)


def test_start_game_resets_and_emits_round(clock):
    engine, events = make_engine(clock)
    state = engine.start_game()
    assert state.phase == Phase.AwaitingClick
    assert (state.score, state.rounds_played) == (0, 0)
    assert state.started_at == clock.now
    assert events["rounds"] == [state.round]
    assert len(state.round.shapes) == 8


def test_first_to_five_with_empty_clicks_interspersed(clock):
    engine, events = make_engine(clock)
    engine.start_game()
    for i in range(5):
        for _ in range(3):
            miss = engine.handle_click(*EMPTY_SPOT)
            assert not miss.hit
            assert miss.score == i
        clock.advance(0.25)
        outcome = click_target(engine)
        assert outcome.correct
        assert outcome.score == i + 1

    assert engine.phase == Phase.GameOver
    assert len(events["over"]) == 1
    result = events["over"][0]
    assert result.final_score == 5
    assert result.rounds_played == 5
    assert result.elapsed_seconds == pytest.approx(1.25)
    # first round plus one per non-final click
    assert len(events["rounds"]) == 5


def test_first_to_n_wrong_shapes_are_free(clock):
    engine, events = make_engine(clock, policy=TerminationPolicy.first_to(2))
    engine.start_game()
    for _ in range(4):
        outcome = click_wrong(engine)
        assert outcome.hit and not outcome.correct
        assert outcome.game_over is None
    assert engine.state.score == 0
    assert engine.state.rounds_played == 4

    click_target(engine)
    final = click_target(engine)
    assert final.game_over is not None
    assert final.game_over.final_score == 2
    assert final.game_over.rounds_played == 6


def test_fixed_rounds_every_click_on_a_shape_counts(clock):
    engine, events = make_engine(clock, policy=TerminationPolicy.fixed_rounds(5))
    engine.start_game()
    click_target(engine)
    click_wrong(engine)
    engine.handle_click(*EMPTY_SPOT)
    click_wrong(engine)
    click_target(engine)
    clock.advance(3.0)
    last = click_wrong(engine)

    assert last.game_over is not None
    assert events["over"] == [last.game_over]
    assert last.game_over.final_score == 2
    assert last.game_over.rounds_played == 5
    assert last.game_over.elapsed_seconds == pytest.approx(3.0)


def test_empty_click_changes_nothing(clock):
    engine, events = make_engine(clock)
    before = engine.start_game()
    outcome = engine.handle_click(*EMPTY_SPOT)
    assert not outcome.hit
    assert outcome.feedback is None
    assert engine.state is before
    assert len(events["rounds"]) == 1


def test_wrong_click_produces_feedback_without_mutating_shape(clock):
    engine, _ = make_engine(clock)
    engine.start_game()
    old_round = engine.current_round
    rnd = engine.current_round
    wrong = next(s for s in rnd.shapes if s.shape_type != rnd.target)
    outcome = engine.handle_click(*wrong.center)

    assert outcome.feedback is not None
    assert outcome.feedback.shape is wrong
    assert outcome.feedback.color == FEEDBACK_COLOR
    assert wrong in old_round.shapes
    assert engine.current_round is not old_round


def test_correct_click_has_no_feedback(clock):
    engine, _ = make_engine(clock)
    engine.start_game()
    assert click_target(engine).feedback is None


def test_clicks_outside_awaiting_click_are_rejected(clock):
    engine, _ = make_engine(clock, policy=TerminationPolicy.first_to(1))
    with pytest.raises(GameStateError):
        engine.handle_click(10, 10)
    engine.start_game()
    click_target(engine)
    assert engine.phase == Phase.GameOver
    with pytest.raises(GameStateError):
        engine.handle_click(10, 10)


def test_replay_after_game_over(clock):
    engine, _ = make_engine(clock, policy=TerminationPolicy.first_to(1))
    engine.start_game()
    click_target(engine)
    clock.advance(10)
    state = engine.start_game()
    assert state.phase == Phase.AwaitingClick
    assert state.score == 0
    assert state.result is None
    assert state.started_at == clock.now


def test_targets_vary_between_rounds(clock):
    engine, _ = make_engine(clock, policy=TerminationPolicy.first_to(60))
    engine.start_game()
    seen = {engine.current_round.target}
    for _ in range(40):
        click_target(engine)
        seen.add(engine.current_round.target)
    assert seen == set(ShapeType)


@pytest.mark.parametrize("kwargs", [
    {"shape_count": 0},
    {"placement_width": 0},
    {"placement_height": -5},
    {"shape_size": 0},
    {"policy": TerminationPolicy.fixed_rounds(0)},
])
def test_malformed_config_fails_fast(clock, kwargs):
    engine = ShapeClickEngine(clock=clock)
    with pytest.raises(ConfigError):
        engine.start_game(GameConfig(**kwargs))
    assert engine.phase == Phase.Idle


def test_starved_layout_surfaces_layout_error(clock):
    engine = ShapeClickEngine(clock=clock)
    cfg = GameConfig(shape_count=50, placement_width=200, placement_height=200)
    with pytest.raises(LayoutError):
        engine.start_game(cfg)
    assert engine.phase == Phase.Idle
    assert engine.current_round is None


def test_seed_makes_sessions_repeatable(clock):
    a = ShapeClickEngine(GameConfig(seed=42), clock=clock).start_game()
    b = ShapeClickEngine(GameConfig(seed=42), clock=clock).start_game()
    assert a.round == b.round


def test_injected_rng_is_used(clock):
    rng = random.Random(3)
    expected = random.Random(3).choice(list(ShapeType))
    engine = ShapeClickEngine(GameConfig(), rng=rng, clock=clock)
    assert engine.start_game().round.target == expected


def test_snapshot_for_rendering(clock):
    engine, _ = make_engine(clock, policy=TerminationPolicy.fixed_rounds(5))
    with pytest.raises(GameStateError):
        engine.snapshot()
    engine.start_game()
    snap = engine.snapshot()
    rnd = engine.current_round
    assert snap.target == rnd.target.name
    assert snap.instruction == f"Click the {rnd.target.name}!"
    assert snap.progress == "Round: 0/5 | Score: 0"
    assert [v.center for v in snap.shapes] == [s.center for s in rnd.shapes]
    assert [v.kind for v in snap.shapes] == [s.shape_type.name for s in rnd.shapes]


def test_shape_at_uses_the_outline_not_the_box(clock):
    engine, _ = make_engine(clock)
    engine.start_game()
    for s in engine.current_round.shapes:
        if s.shape_type in (ShapeType.CIRCLE, ShapeType.DIAMOND, ShapeType.STAR):
            corner = (s.x - 24, s.y - 24)
            assert engine.shape_at(*corner) is None
        else:
            assert engine.shape_at(*s.center) is s


def test_layout_failure_mid_game_restores_previous_state(clock, monkeypatch):
    engine, events = make_engine(clock)
    engine.start_game()
    before = engine.state

    def starved(*args, **kwargs):
        raise LayoutError("no room", 8, 3)

    monkeypatch.setattr("shapeclick.core.state.generate_round", starved)
    with pytest.raises(LayoutError):
        click_target(engine)
    assert engine.state is before
    assert engine.phase == Phase.AwaitingClick
    assert len(events["rounds"]) == 1
    assert events["over"] == []
