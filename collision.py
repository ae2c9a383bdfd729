"""Lethal-contact detection and the life / invincibility state machine.

Per tick, after the robot has moved:

* safe and on a wall, hazard or obstacle cell: lose a life.  At zero lives the
  game is over and nothing else changes.  Otherwise the robot respawns at the
  safe-spawn cell (never the target) with a freshly sized body and becomes
  invincible for ``invincible_ticks`` ticks.
* invincible: the counter drops by one whatever the robot touches, and the
  robot is safe again once it reaches zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from board import CrossObstacle, is_obstacle, is_wall
from game_types import Cell
from models import GameConfig
from occupancy import is_hazard_at
from placement import find_safe_spawn
from progression import Progress
from robot import Robot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollisionResult:
    life_lost: bool = False
    game_over: bool = False


def is_lethal(cell: Cell, hazards: Sequence[Cell], obstacle: CrossObstacle) -> bool:
    x, y = cell
    return is_wall(x, y) or is_hazard_at(hazards, x, y) or is_obstacle(obstacle, x, y)


def resolve(
    robot: Robot,
    hazards: Sequence[Cell],
    obstacle: CrossObstacle,
    progress: Progress,
    cfg: GameConfig,
    target: Optional[Cell] = None,
) -> CollisionResult:
    if robot.invincible:
        robot.tick_invincibility()
        return CollisionResult()

    if not is_lethal(robot.head, hazards, obstacle):
        return CollisionResult()

    progress.lives -= 1
    logger.info("%s lost a life at %s, lives=%s", progress.name, robot.head, progress.lives)
    if progress.lives <= 0:
        progress.lives = 0
        return CollisionResult(life_lost=True, game_over=True)

    robot.grant_invincibility(cfg.invincible_ticks)
    exclude = () if target is None else (target,)
    spawn = find_safe_spawn(hazards, obstacle, cfg.spawn_anchor, exclude)
    robot.respawn(spawn, progress.lives)
    return CollisionResult(life_lost=True)
