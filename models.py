from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from game_types import DIR_DELTA, Cell
from utils import as_cell, as_float, as_int


@dataclass(frozen=True)
class ScoreRecord:
    """What the leaderboard keeps for one finished game."""

    name: str
    score: int
    level: int


@dataclass(frozen=True)
class BombConfig:
    min_level: int = 10
    level_cost: int = 5
    radius: int = 5
    duration: float = 0.6

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "BombConfig":
        if not isinstance(raw, dict):
            raw = {}
        return BombConfig(
            min_level=as_int(raw.get("min_level"), 10, 1, 1000),
            level_cost=as_int(raw.get("level_cost"), 5, 0, 1000),
            radius=as_int(raw.get("radius"), 5, 0, 50),
            duration=as_float(raw.get("duration"), 0.6, 0.0, 60.0),
        )


@dataclass(frozen=True)
class GameConfig:
    """Gameplay tunables. Board size is fixed and deliberately not here."""

    initial_lives: int = 3
    people_per_level: int = 5
    base_mines: int = 5
    mines_per_level: int = 2
    max_mines: int = 50
    base_delay_ms: int = 400
    min_delay_ms: int = 50
    invincible_ticks: int = 10
    rescue_reward: int = 10
    max_body_segments: int = 20
    life_bonus_every: int = 5
    spawn_anchor: Cell = (10, 10)
    obstacle_width: int = 11
    obstacle_height: int = 11
    max_name: int = 20
    default_name: str = "Player"
    start_in_ai_mode: bool = True
    start_heading: str = "left"
    placement_attempts: int = 10_000
    bomb: BombConfig = field(default_factory=BombConfig)
    scoreboard_file: str = "leaderboard.txt"
    leaderboard_size: int = 50

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "GameConfig":
        if not isinstance(raw, dict):
            raw = {}

        max_segments = as_int(raw.get("max_body_segments"), 20, 0, 20)
        max_mines = as_int(raw.get("max_mines"), 50, 0, 50)
        base_delay = as_int(raw.get("base_delay_ms"), 400, 1, 10_000)
        heading = str(raw.get("start_heading", "left")).strip().lower()
        if heading not in DIR_DELTA:
            heading = "left"
        name = raw.get("default_name")
        default_name = name.strip() if isinstance(name, str) and name.strip() else "Player"

        return GameConfig(
            initial_lives=as_int(raw.get("initial_lives"), 3, 1, max(1, max_segments)),
            people_per_level=as_int(raw.get("people_per_level"), 5, 1, 1000),
            base_mines=as_int(raw.get("base_mines"), 5, 0, max_mines),
            mines_per_level=as_int(raw.get("mines_per_level"), 2, 0, max_mines),
            max_mines=max_mines,
            base_delay_ms=base_delay,
            min_delay_ms=as_int(raw.get("min_delay_ms"), 50, 1, base_delay),
            invincible_ticks=as_int(raw.get("invincible_ticks"), 10, 0, 10_000),
            rescue_reward=as_int(raw.get("rescue_reward"), 10, 0, 1_000_000),
            max_body_segments=max_segments,
            life_bonus_every=as_int(raw.get("life_bonus_every"), 5, 1, 1000),
            spawn_anchor=as_cell(raw.get("spawn_anchor"), (10, 10)),
            obstacle_width=as_int(raw.get("obstacle_width"), 11, 1, 47),
            obstacle_height=as_int(raw.get("obstacle_height"), 11, 1, 17),
            max_name=as_int(raw.get("max_name"), 20, 1, 64),
            default_name=default_name,
            start_in_ai_mode=bool(raw.get("start_in_ai_mode", True)),
            start_heading=heading,
            placement_attempts=as_int(raw.get("placement_attempts"), 10_000, 1, 10_000_000),
            bomb=BombConfig.from_dict(raw.get("bomb", {})),
            scoreboard_file=str(raw.get("scoreboard_file", "leaderboard.txt")),
            leaderboard_size=as_int(raw.get("leaderboard_size"), 50, 1, 10_000),
        )

    def clean_name(self, raw: str | None) -> str:
        """Trim a player name to max_name chars; blank names become default_name."""
        name = (raw or "").strip()[: self.max_name]
        return name or self.default_name


@dataclass(frozen=True)
class DisplayConfig:
    """Window and palette settings for the pygame host."""

    title: str
    tile_size: int
    panel_width: int
    fps: int
    bg: Tuple[int, int, int]
    colors: Dict[str, Tuple[int, int, int]]
