"""Score, lives and difficulty curve."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from random import Random
from typing import List, Sequence

from board import CrossObstacle
from game_types import Cell
from models import GameConfig, ScoreRecord
from placement import place_hazards
from robot import Robot

logger = logging.getLogger(__name__)

BASE_DELAY_MS = 400
MIN_DELAY_MS = 50


@dataclass
class Progress:
    """Per-game player record."""

    name: str
    score: int = 0
    lives: int = 3
    level: int = 1
    rescued: int = 0

    def to_record(self) -> ScoreRecord:
        return ScoreRecord(name=self.name, score=self.score, level=self.level)


@dataclass
class RescueOutcome:
    level_up: bool = False
    life_bonus: bool = False
    hazards: List[Cell] = field(default_factory=list)


def tick_interval_ms(level: int, base_ms: int = BASE_DELAY_MS, min_ms: int = MIN_DELAY_MS) -> int:
    """Movement interval in milliseconds: halved per level above 1, floored at min_ms."""
    delay = base_ms
    for _ in range(1, level):
        if delay <= min_ms:
            break
        delay //= 2
    return max(delay, min_ms)


def tick_interval_for(
    level: int, base_ms: int = BASE_DELAY_MS, min_ms: int = MIN_DELAY_MS
) -> float:
    """Movement interval in seconds; see tick_interval_ms."""
    return tick_interval_ms(level, base_ms, min_ms) / 1000.0


def on_rescue(
    progress: Progress,
    robot: Robot,
    hazards: Sequence[Cell],
    target: Cell,
    obstacle: CrossObstacle,
    cfg: GameConfig,
    rng: Random,
) -> RescueOutcome:
    """Score a rescue and apply any level-up it causes.

    The caller is responsible for placing a fresh target afterwards.
    """
    progress.score += cfg.rescue_reward
    progress.rescued += 1
    outcome = RescueOutcome(hazards=list(hazards))
    logger.info(
        "%s rescued a person (score=%s, rescued=%s/%s)",
        progress.name,
        progress.score,
        progress.rescued,
        cfg.people_per_level,
    )

    if progress.rescued < cfg.people_per_level:
        return outcome

    progress.level += 1
    progress.rescued = 0
    outcome.level_up = True
    outcome.hazards = place_hazards(
        outcome.hazards,
        len(outcome.hazards) + cfg.mines_per_level,
        robot.head,
        target,
        obstacle,
        rng,
        max_mines=cfg.max_mines,
        max_attempts=cfg.placement_attempts,
    )
    logger.info("level up -> %s, hazards=%s", progress.level, len(outcome.hazards))

    if progress.level % cfg.life_bonus_every == 0:
        progress.lives = min(progress.lives + 1, cfg.max_body_segments)
        robot.resize_body_from_lives(progress.lives)
        outcome.life_bonus = True
        logger.info("bonus life at level %s, lives=%s", progress.level, progress.lives)

    return outcome
