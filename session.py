"""Authoritative per-tick game loop, independent of any window or input device.

A ``GameSession`` owns every piece of mutable game state (robot, hazards,
target, progress record, bomb fuse) and hands it to the helper modules for
the duration of one tick.  Hosts feed it commands (direction, mode toggle,
bomb, continue/quit, quit) and either call ``update(dt)`` once per frame or
drive it with ``run_fixed_interval``.

Tick order:

1. choose a direction (path search in AI mode, last latched input otherwise)
2. move the robot
3. resolve collisions; game over ends the session
4. on a lost life, pause in WAIT_CONTINUE until the host decides
5. score a rescue and place a new target
6. return a snapshot for rendering
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Callable, List, Optional, Tuple

from board import BOARD_COLS, BOARD_ROWS, CrossObstacle
from bomb import BombState, advance_bomb, start_bomb
from collision import resolve
from game_types import DIR_DELTA, Cell, Direction
from models import GameConfig, ScoreRecord
from pathfinding import next_direction
from placement import find_safe_spawn, place_hazards, place_target
from progression import Progress, on_rescue, tick_interval_for
from robot import Robot

logger = logging.getLogger(__name__)


class SessionState(Enum):
    PLAYING = "playing"
    WAIT_CONTINUE = "wait_continue"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of one settled tick, for renderers and logs."""

    board_cols: int
    board_rows: int
    obstacle: CrossObstacle
    hazards: Tuple[Cell, ...]
    marked_hazards: Tuple[Cell, ...]
    target: Cell
    head: Cell
    heading: Direction
    body: Tuple[Cell, ...]
    invincible: bool
    invincible_ticks: int
    name: str
    score: int
    level: int
    lives: int
    rescued: int
    ai_mode: bool
    state: SessionState
    tick: int


class GameSession:
    def __init__(
        self,
        name: Optional[str] = None,
        cfg: Optional[GameConfig] = None,
        rng: Optional[Random] = None,
    ) -> None:
        self.cfg = cfg if cfg is not None else GameConfig()
        self.rng = rng if rng is not None else Random()
        self.obstacle = CrossObstacle.centered(self.cfg.obstacle_width, self.cfg.obstacle_height)
        self.progress = Progress(name=self.cfg.clean_name(name), lives=self.cfg.initial_lives)

        spawn = find_safe_spawn([], self.obstacle, self.cfg.spawn_anchor)
        self.robot = Robot(
            spawn,
            heading=self.cfg.start_heading,  # type: ignore[arg-type]
            ai_mode=self.cfg.start_in_ai_mode,
            max_segments=self.cfg.max_body_segments,
        )
        self.robot.resize_body_from_lives(self.progress.lives)

        self.hazards: List[Cell] = []
        self.target: Cell = place_target(
            spawn, self.hazards, self.obstacle, self.rng, self.cfg.placement_attempts
        )
        self.hazards = place_hazards(
            self.hazards,
            self.cfg.base_mines,
            spawn,
            self.target,
            self.obstacle,
            self.rng,
            max_mines=self.cfg.max_mines,
            max_attempts=self.cfg.placement_attempts,
        )

        self.state = SessionState.PLAYING
        self.bomb = BombState()
        self.tick_count = 0
        self._pending_direction: Optional[Direction] = None
        self._quit_requested = False
        self._accumulator = 0.0
        logger.info(
            "new game for %s: spawn=%s target=%s hazards=%s",
            self.progress.name,
            spawn,
            self.target,
            len(self.hazards),
        )

    # ----------------------------
    # Commands from the input layer
    # ----------------------------

    def set_direction(self, direction: Direction) -> None:
        """Latch a manual direction; it is applied at the next tick in manual mode."""
        if direction not in DIR_DELTA:
            raise ValueError(f"unknown direction: {direction!r}")
        self._pending_direction = direction

    def toggle_mode(self) -> bool:
        if self.state is not SessionState.PLAYING:
            return self.robot.ai_mode
        return self.robot.toggle_mode()

    def trigger_bomb(self) -> bool:
        if self.state is not SessionState.PLAYING:
            return False
        return start_bomb(self.progress, self.robot.head, self.hazards, self.bomb, self.cfg.bomb)

    def decide_continue(self, keep_playing: bool) -> None:
        """Answer the "lost a life, continue?" pause. Ignored in any other state."""
        if self.state is not SessionState.WAIT_CONTINUE:
            return
        if keep_playing:
            self.state = SessionState.PLAYING
        else:
            self._finish("player quit after losing a life")

    def request_quit(self) -> None:
        """Stop before the next tick starts."""
        self._quit_requested = True

    # ----------------------------
    # Simulation
    # ----------------------------

    @property
    def interval(self) -> float:
        return tick_interval_for(
            self.progress.level, self.cfg.base_delay_ms, self.cfg.min_delay_ms
        )

    @property
    def is_over(self) -> bool:
        return self.state is SessionState.GAME_OVER

    def tick(self) -> GameSnapshot:
        """Run one full simulation step (no-op unless PLAYING)."""
        if self._quit_requested and not self.is_over:
            self._finish("quit requested")
        if self.state is not SessionState.PLAYING:
            return self.snapshot()

        self.tick_count += 1
        self._resolve_direction()
        self.robot.advance()

        result = resolve(
            self.robot, self.hazards, self.obstacle, self.progress, self.cfg, self.target
        )
        if result.game_over:
            self._finish("out of lives")
            return self.snapshot()
        if result.life_lost:
            self.state = SessionState.WAIT_CONTINUE
            return self.snapshot()

        if self.robot.head == self.target:
            self._rescue()

        return self.snapshot()

    def advance_fuse(self, dt: float) -> None:
        """Let *dt* seconds of bomb fuse time pass."""
        if self.bomb.active:
            self.hazards = advance_bomb(self.bomb, dt, self.hazards, self.cfg.bomb)

    def update(self, dt: float) -> GameSnapshot:
        """Frame-driven entry point: accumulate *dt* and fire every tick that is due."""
        if self._quit_requested and not self.is_over:
            self._finish("quit requested")
        if self.state is not SessionState.PLAYING:
            return self.snapshot()

        self.advance_fuse(dt)
        self._accumulator += dt
        interval = self.interval
        while self._accumulator >= interval and self.state is SessionState.PLAYING:
            self._accumulator -= interval
            self.tick()
            interval = self.interval
        return self.snapshot()

    def _resolve_direction(self) -> None:
        if self.robot.ai_mode:
            direction = next_direction(
                self.robot.head, self.target, self.hazards, self.obstacle, self.rng
            )
            self._pending_direction = None
        else:
            direction = self._pending_direction
            self._pending_direction = None
        if direction is not None:
            self.robot.set_heading(direction)
        logger.debug("tick %s: heading %s from %s", self.tick_count, self.robot.heading, self.robot.head)

    def _rescue(self) -> None:
        outcome = on_rescue(
            self.progress,
            self.robot,
            self.hazards,
            self.target,
            self.obstacle,
            self.cfg,
            self.rng,
        )
        self.hazards = outcome.hazards
        self.target = place_target(
            self.robot.head, self.hazards, self.obstacle, self.rng, self.cfg.placement_attempts
        )

    def _finish(self, reason: str) -> None:
        self.state = SessionState.GAME_OVER
        logger.info(
            "game over (%s): %s scored %s at level %s",
            reason,
            self.progress.name,
            self.progress.score,
            self.progress.level,
        )

    # ----------------------------
    # Outputs
    # ----------------------------

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board_cols=BOARD_COLS,
            board_rows=BOARD_ROWS,
            obstacle=self.obstacle,
            hazards=tuple(self.hazards),
            marked_hazards=tuple(sorted(self.bomb.marked)),
            target=self.target,
            head=self.robot.head,
            heading=self.robot.heading,
            body=tuple(self.robot.body),
            invincible=self.robot.invincible,
            invincible_ticks=self.robot.invincible_ticks,
            name=self.progress.name,
            score=self.progress.score,
            level=self.progress.level,
            lives=self.progress.lives,
            rescued=self.progress.rescued,
            ai_mode=self.robot.ai_mode,
            state=self.state,
            tick=self.tick_count,
        )

    def final_record(self) -> Optional[ScoreRecord]:
        """The leaderboard record, once the game is over."""
        if not self.is_over:
            return None
        return self.progress.to_record()


def run_fixed_interval(
    session: GameSession,
    max_ticks: Optional[int] = None,
    on_snapshot: Optional[Callable[[GameSnapshot], None]] = None,
    decide_continue: Optional[Callable[[GameSnapshot], bool]] = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> GameSnapshot:
    """Drive *session* with real sleeps between ticks until it ends.

    Each tick sleeps for the level's interval minus the time the tick took.
    Life-loss pauses are answered by *decide_continue* (default: keep playing).

    Returns:
        The last snapshot.
    """
    ticks = 0
    snapshot = session.snapshot()
    while True:
        if session.state is SessionState.WAIT_CONTINUE:
            keep = decide_continue(snapshot) if decide_continue is not None else True
            session.decide_continue(keep)
        if session.is_over or (max_ticks is not None and ticks >= max_ticks):
            break

        started = clock()
        interval = session.interval
        snapshot = session.tick()
        ticks += 1
        session.advance_fuse(interval)
        if on_snapshot is not None:
            on_snapshot(snapshot)
        if session.is_over:
            break

        remaining = interval - (clock() - started)
        if remaining > 0:
            sleep(remaining)
    return session.snapshot()
