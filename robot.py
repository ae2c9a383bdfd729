from __future__ import annotations

import logging
from typing import List

from board import in_safe_margin, on_board
from game_types import DIR_DELTA, Cell, Direction, step
from utils import clamp_int

logger = logging.getLogger(__name__)

MAX_BODY_SEGMENTS = 20


class Robot:
    """Rescue robot: head cell, heading, trailing body and invincibility timer.

    The body is a ring of delayed head positions: ``body[i]`` is where the
    head was ``i + 1`` ticks ago. Only the head takes part in collisions.
    """

    def __init__(
        self,
        head: Cell,
        heading: Direction = "left",
        ai_mode: bool = True,
        max_segments: int = MAX_BODY_SEGMENTS,
    ) -> None:
        self.head: Cell = head
        self.heading: Direction = heading
        self.ai_mode = ai_mode
        self.max_segments = max_segments
        self.body: List[Cell] = []
        self.invincible_ticks: int = 0

    @property
    def body_length(self) -> int:
        return len(self.body)

    @property
    def invincible(self) -> bool:
        return self.invincible_ticks > 0

    # ---------
    # Movement
    # ---------

    def set_heading(self, direction: Direction) -> None:
        if direction not in DIR_DELTA:
            raise ValueError(f"unknown direction: {direction!r}")
        self.heading = direction

    def toggle_mode(self) -> bool:
        """Switch between autonomous and directed control; returns the new ai_mode."""
        self.ai_mode = not self.ai_mode
        logger.info("robot mode -> %s", "AI" if self.ai_mode else "manual")
        return self.ai_mode

    def advance(self) -> None:
        """Move one cell along the heading, dragging the body behind.

        A move that would leave the board is dropped and the robot stays put.
        """
        nxt = step(self.head, self.heading)
        if not on_board(*nxt):
            logger.debug("robot held at %s: %s leaves the board", self.head, self.heading)
            return
        if self.body:
            # Shift tail-to-head, then the front segment takes the old head.
            self.body = [self.head] + self.body[:-1]
        self.head = nxt

    def resize_body_from_lives(self, lives: int) -> None:
        """Rebuild the body with one segment per life, laid out behind the head.

        Segments that would land outside the safe interior collapse onto the
        head cell.
        """
        length = clamp_int(lives, 0, self.max_segments)
        dx, dy = DIR_DELTA.get(self.heading, (-1, 0))
        hx, hy = self.head

        body: List[Cell] = []
        for i in range(length):
            bx = hx - dx * (i + 1)
            by = hy - dy * (i + 1)
            if not in_safe_margin(bx, by):
                bx, by = hx, hy
            body.append((bx, by))
        self.body = body

    def respawn(self, cell: Cell, lives: int) -> None:
        """Teleport the head to *cell* and re-seed the body for *lives*."""
        self.head = cell
        self.resize_body_from_lives(lives)

    # --------------
    # Invincibility
    # --------------

    def grant_invincibility(self, ticks: int) -> None:
        self.invincible_ticks = max(0, int(ticks))

    def tick_invincibility(self) -> None:
        """Count one invincible tick down (no-op when already safe)."""
        if self.invincible_ticks > 0:
            self.invincible_ticks -= 1
            if self.invincible_ticks == 0:
                logger.debug("invincibility expired at %s", self.head)
