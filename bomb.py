"""Area-clear bomb: trade levels for clearing nearby mines.

Detonating marks every hazard within a square radius of the robot head and
costs the player some levels up front.  The marked hazards disappear once the
fuse time has elapsed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Set

from game_types import Cell
from models import BombConfig
from progression import Progress

logger = logging.getLogger(__name__)


@dataclass
class BombState:
    active: bool = False
    elapsed: float = 0.0
    marked: Set[Cell] = field(default_factory=set)

    def reset(self) -> None:
        self.active = False
        self.elapsed = 0.0
        self.marked = set()


def can_bomb(progress: Progress, state: BombState, cfg: BombConfig) -> bool:
    return progress.level > cfg.min_level and not state.active


def start_bomb(
    progress: Progress,
    head: Cell,
    hazards: Sequence[Cell],
    state: BombState,
    cfg: BombConfig,
) -> bool:
    """Arm a bomb at *head*. Returns False (and changes nothing) if not allowed."""
    if not can_bomb(progress, state, cfg):
        return False

    progress.level = max(1, progress.level - cfg.level_cost)
    cx, cy = head
    state.marked = {
        (x, y) for x, y in hazards if abs(x - cx) <= cfg.radius and abs(y - cy) <= cfg.radius
    }
    state.active = True
    state.elapsed = 0.0
    logger.info(
        "bomb armed at %s: %s hazards marked, level -> %s", head, len(state.marked), progress.level
    )
    return True


def advance_bomb(
    state: BombState, dt: float, hazards: Sequence[Cell], cfg: BombConfig
) -> List[Cell]:
    """Run the fuse for *dt* seconds; returns the (possibly reduced) hazard list."""
    if not state.active:
        return list(hazards)

    state.elapsed += dt
    if state.elapsed < cfg.duration:
        return list(hazards)

    remaining = [cell for cell in hazards if cell not in state.marked]
    logger.info("bomb cleared %s hazards", len(hazards) - len(remaining))
    state.reset()
    return remaining
