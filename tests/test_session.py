"""Tests for the per-tick game loop."""

from __future__ import annotations

from random import Random

import pytest

from board import CrossObstacle, is_obstacle, is_wall, on_board
from models import GameConfig, ScoreRecord
from pathfinding import bfs_next_direction
from session import GameSession, SessionState, run_fixed_interval


def _manual_session(seed: int = 0) -> GameSession:
    """A session in manual mode on an empty board with the target far away."""
    session = GameSession("Ada", GameConfig(), Random(seed))
    session.toggle_mode()
    session.hazards = []
    session.target = (40, 3)
    return session


class TestSetup:
    def test_initial_state(self) -> None:
        session = GameSession("Ada", GameConfig(), Random(0))
        snap = session.snapshot()
        assert snap.state is SessionState.PLAYING
        assert snap.head == (10, 10)
        assert snap.heading == "left"
        assert snap.ai_mode
        assert snap.lives == 3 and snap.level == 1 and snap.score == 0
        assert len(snap.body) == 3
        assert len(snap.hazards) == 5

    def test_entities_are_disjoint(self) -> None:
        for seed in range(20):
            session = GameSession("Ada", GameConfig(), Random(seed))
            obs = session.obstacle
            cells = [session.robot.head, session.target, *session.hazards]
            assert len(cells) == len(set(cells))
            assert not any(is_obstacle(obs, x, y) or is_wall(x, y) for x, y in cells)

    def test_name_cleanup(self) -> None:
        assert GameSession("   ", rng=Random(0)).progress.name == "Player"
        assert GameSession(None, rng=Random(0)).progress.name == "Player"
        assert GameSession("x" * 40, rng=Random(0)).progress.name == "x" * 20


class TestTick:
    def test_ai_steps_along_shortest_path(self) -> None:
        session = GameSession("Ada", GameConfig(), Random(1))
        expected = bfs_next_direction(
            session.robot.head, session.target, session.hazards, session.obstacle
        )
        start = session.robot.head
        snap = session.tick()
        assert snap.heading == expected
        assert snap.head != start
        assert snap.tick == 1

    def test_manual_direction_is_latched(self) -> None:
        session = _manual_session()
        session.set_direction("up")
        assert session.tick().head == (10, 9)
        # No new input: keep going the same way.
        assert session.tick().head == (10, 8)

    def test_manual_without_input_keeps_heading(self) -> None:
        session = _manual_session()
        assert session.tick().head == (9, 10)

    def test_invalid_direction(self) -> None:
        session = _manual_session()
        with pytest.raises(ValueError):
            session.set_direction("sideways")  # type: ignore[arg-type]

    def test_rescue_scores_and_relocates_target(self) -> None:
        session = _manual_session()
        session.target = (9, 10)
        snap = session.tick()
        assert snap.score == 10
        assert snap.rescued == 1
        assert snap.target not in ((9, 10), snap.head)
        assert snap.target not in snap.hazards

    def test_fifth_rescue_levels_up(self) -> None:
        session = _manual_session()
        session.hazards = [(3, 3), (4, 4), (5, 5), (6, 6), (7, 7)]
        session.progress.rescued = 4
        session.target = (9, 10)
        snap = session.tick()
        assert snap.level == 2
        assert snap.rescued == 0
        assert len(snap.hazards) == 7
        assert session.interval == pytest.approx(0.2)

    def test_life_loss_pauses_until_decision(self) -> None:
        session = _manual_session()
        session.hazards = [(9, 10)]
        snap = session.tick()
        assert snap.state is SessionState.WAIT_CONTINUE
        assert snap.lives == 2
        assert snap.head == (10, 10)
        assert snap.invincible_ticks == 10
        assert len(snap.body) == 2

        # Ticks are suspended while paused.
        assert session.tick().tick == snap.tick

        session.decide_continue(True)
        assert session.state is SessionState.PLAYING
        after = session.tick()
        assert after.tick == snap.tick + 1
        assert after.invincible_ticks == 9

    def test_quit_from_pause_ends_game(self) -> None:
        session = _manual_session()
        session.hazards = [(9, 10)]
        session.tick()
        session.decide_continue(False)
        assert session.is_over
        assert session.final_record() == ScoreRecord("Ada", 0, 1)

    def test_decide_continue_ignored_while_playing(self) -> None:
        session = _manual_session()
        session.decide_continue(False)
        assert session.state is SessionState.PLAYING

    def test_last_life_ends_game_without_respawn(self) -> None:
        session = _manual_session()
        session.progress.lives = 1
        session.robot.head = (1, 10)
        snap = session.tick()
        assert snap.state is SessionState.GAME_OVER
        assert snap.lives == 0
        assert snap.head == (0, 10)
        assert session.final_record() == ScoreRecord("Ada", 0, 1)

    def test_respawn_with_target_on_anchor(self) -> None:
        session = _manual_session()
        session.hazards = [(9, 10)]
        session.target = (10, 10)
        snap = session.tick()
        assert snap.state is SessionState.WAIT_CONTINUE
        assert snap.head == (10, 9)
        assert snap.head != snap.target
        assert snap.target == (10, 10)

    def test_invincible_robot_stays_on_board(self) -> None:
        session = _manual_session()
        session.robot.head = (1, 10)
        session.robot.grant_invincibility(10)
        heads = [session.tick().head for _ in range(6)]
        assert heads == [(0, 10)] * 6
        assert session.state is SessionState.PLAYING
        assert session.progress.lives == 3

    def test_quit_request_stops_before_next_tick(self) -> None:
        session = _manual_session()
        session.request_quit()
        snap = session.tick()
        assert snap.state is SessionState.GAME_OVER
        assert snap.tick == 0

    def test_final_record_only_when_over(self) -> None:
        assert _manual_session().final_record() is None

    def test_toggle_mode(self) -> None:
        session = GameSession("Ada", GameConfig(), Random(0))
        assert session.toggle_mode() is False
        assert session.snapshot().ai_mode is False


class TestUpdate:
    def test_accumulates_frame_time(self) -> None:
        session = _manual_session()
        session.set_direction("up")
        assert session.update(0.3).tick == 0
        assert session.update(0.15).tick == 1
        assert session.update(0.85).tick == 3
        assert session.robot.head == (10, 7)

    def test_no_ticks_while_paused(self) -> None:
        session = _manual_session()
        session.hazards = [(9, 10)]
        session.update(0.4)
        assert session.state is SessionState.WAIT_CONTINUE
        assert session.update(5.0).tick == 1


class TestBomb:
    def test_bomb_clears_nearby_hazards(self) -> None:
        session = _manual_session()
        session.progress.level = 12
        session.hazards = [(12, 12), (8, 9), (40, 16)]
        assert session.trigger_bomb()
        snap = session.snapshot()
        assert snap.level == 7
        assert set(snap.marked_hazards) == {(12, 12), (8, 9)}

        session.advance_fuse(0.7)
        assert session.hazards == [(40, 16)]
        assert session.snapshot().marked_hazards == ()

    def test_bomb_refused_at_low_level(self) -> None:
        session = _manual_session()
        assert not session.trigger_bomb()


class TestLongRun:
    def test_autopilot_keeps_invariants(self) -> None:
        session = GameSession("Bot", GameConfig(), Random(42))
        obs: CrossObstacle = session.obstacle
        was_invincible = False
        for _ in range(1500):
            if session.state is SessionState.WAIT_CONTINUE:
                session.decide_continue(True)
            if session.is_over:
                break
            snap = session.tick()
            assert len(snap.hazards) == len(set(snap.hazards)) <= 50
            assert snap.target not in snap.hazards
            assert not is_obstacle(obs, *snap.target)
            assert not any(is_obstacle(obs, x, y) or is_wall(x, y) for x, y in snap.hazards)
            assert snap.invincible_ticks >= 0
            assert snap.invincible == (snap.invincible_ticks > 0)
            assert on_board(*snap.head)
            if snap.state is not SessionState.GAME_OVER:
                assert len(snap.body) == min(snap.lives, 20)
                if not was_invincible:
                    assert snap.head != snap.target
                    assert snap.head not in snap.hazards
                    assert not is_wall(*snap.head)
                    assert not is_obstacle(obs, *snap.head)
            was_invincible = snap.invincible
        assert session.progress.score > 0


class TestRunFixedInterval:
    def test_sleeps_remaining_interval(self) -> None:
        session = _manual_session()
        session.set_direction("up")
        sleeps: list[float] = []
        seen: list[int] = []
        last = run_fixed_interval(
            session,
            max_ticks=5,
            on_snapshot=lambda s: seen.append(s.tick),
            sleep=sleeps.append,
            clock=lambda: 0.0,
        )
        assert seen == [1, 2, 3, 4, 5]
        assert sleeps == [pytest.approx(0.4)] * 5
        assert last.head == (10, 5)

    def test_elapsed_time_is_subtracted(self) -> None:
        session = _manual_session()
        times = iter([0.0, 0.1, 1.0, 1.5])
        sleeps: list[float] = []
        run_fixed_interval(session, max_ticks=2, sleep=sleeps.append, clock=lambda: next(times))
        # First tick took 0.1s, second took longer than the interval.
        assert sleeps == [pytest.approx(0.3)]

    def test_decline_to_continue_stops(self) -> None:
        session = _manual_session()
        session.hazards = [(9, 10)]
        last = run_fixed_interval(
            session, decide_continue=lambda s: False, sleep=lambda _: None, clock=lambda: 0.0
        )
        assert last.state is SessionState.GAME_OVER
        assert last.tick == 1
        assert last.lives == 2
