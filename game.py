from __future__ import annotations

import logging
from pathlib import Path
from random import Random
from typing import List, Optional

import pygame

from board import BOARD_COLS, BOARD_ROWS
from config_io import load_json_config
from config_parsing import parse_display_config, parse_game_config
from models import ScoreRecord
from rendering import GameRenderer
from scoreboard import ScoreboardFile
from session import GameSession, SessionState

logger = logging.getLogger(__name__)

DIRECTION_KEYS = {
    pygame.K_UP: "up",
    pygame.K_w: "up",
    pygame.K_DOWN: "down",
    pygame.K_s: "down",
    pygame.K_LEFT: "left",
    pygame.K_a: "left",
    pygame.K_RIGHT: "right",
    pygame.K_d: "right",
}


class Game:
    """pygame host: maps keys to session commands and draws snapshots."""

    def __init__(self, cfg_path: Path, name: Optional[str] = None, seed: Optional[int] = None) -> None:
        raw_cfg = load_json_config(cfg_path)
        self.cfg = parse_game_config(raw_cfg)
        self.display = parse_display_config(raw_cfg)
        self.session = GameSession(name, self.cfg, Random(seed))
        self.scoreboard = ScoreboardFile(Path(self.cfg.scoreboard_file), self.cfg.leaderboard_size)

        # "play" -> "game_over" -> "leaderboard" -> exit
        self.screen_name = "play"
        self.final_record: Optional[ScoreRecord] = None
        self.new_record = False
        self.leaderboard: List[ScoreRecord] = []

        self._init_pygame()
        self.renderer = GameRenderer(
            self.window_w,
            self.window_h,
            self.display.tile_size,
            self.display.panel_width,
            self.display.colors,
        )

    # ----------------------------
    # Initialization
    # ----------------------------

    def _init_pygame(self) -> None:
        """Initialize pygame and create window + clock sized to the board."""
        pygame.init()
        ts = self.display.tile_size
        self.window_w = self.display.panel_width + BOARD_COLS * ts + 40
        self.window_h = BOARD_ROWS * ts + 80
        self.screen = pygame.display.set_mode((self.window_w, self.window_h))
        pygame.display.set_caption(self.display.title)
        self.clock = pygame.time.Clock()

    # ----------------------------
    # Game end
    # ----------------------------

    def _finalize_if_over(self) -> None:
        """Write the leaderboard once, the first frame the session is over."""
        if self.final_record is not None or not self.session.is_over:
            return
        record = self.session.final_record()
        if record is None:
            return
        self.final_record = record
        _, self.new_record = self.scoreboard.record(record)
        self.leaderboard = self.scoreboard.top_scores()
        self.screen_name = "game_over"

    # ----------------------------
    # Events / loop
    # ----------------------------

    def _tick_dt(self) -> float:
        """Return delta time in seconds with the configured FPS cap."""
        return self.clock.tick(self.display.fps) / 1000.0

    def _handle_play_key(self, key: int) -> None:
        state = self.session.state
        if key == pygame.K_ESCAPE:
            self.session.request_quit()
        elif state is SessionState.WAIT_CONTINUE:
            if key == pygame.K_y:
                self.session.decide_continue(True)
            elif key == pygame.K_q:
                self.session.decide_continue(False)
        elif key in DIRECTION_KEYS:
            self.session.set_direction(DIRECTION_KEYS[key])  # type: ignore[arg-type]
        elif key == pygame.K_m:
            self.session.toggle_mode()
        elif key == pygame.K_SPACE:
            self.session.trigger_bomb()

    def _handle_keydown(self, key: int) -> bool:
        """Handle KEYDOWN events.

        Returns:
            False if the game should exit, True otherwise.
        """
        if self.screen_name == "play":
            self._handle_play_key(key)
        elif self.screen_name == "game_over":
            if key in (pygame.K_RETURN, pygame.K_SPACE, pygame.K_y, pygame.K_q):
                self.screen_name = "leaderboard"
            elif key == pygame.K_ESCAPE:
                return False
        elif self.screen_name == "leaderboard":
            if key in (pygame.K_RETURN, pygame.K_ESCAPE):
                return False
        return True

    def _handle_events(self) -> bool:
        """Process pygame events.

        Returns:
            False if the game should exit, True otherwise.
        """
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self.session.request_quit()
                return False
            if e.type == pygame.KEYDOWN:
                if not self._handle_keydown(e.key):
                    return False
        return True

    def _render(self) -> None:
        if self.screen_name == "game_over" and self.final_record is not None:
            self.renderer.render_game_over(self.screen, self.display.bg, self.final_record, self.new_record)
        elif self.screen_name == "leaderboard":
            self.renderer.render_leaderboard(self.screen, self.display.bg, self.leaderboard)
        else:
            self.renderer.render_frame(self.screen, self.display.bg, self.session.snapshot())

    def run(self) -> Optional[ScoreRecord]:
        """Run the main game loop; returns the final record if the game ended."""
        running = True
        while running:
            dt = self._tick_dt()
            running = self._handle_events()
            if self.screen_name == "play":
                self.session.update(dt)
                self._finalize_if_over()
            self._render()

        pygame.quit()
        return self.final_record
