from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import pygame

from game_types import Cell, Color
from models import ScoreRecord
from session import GameSnapshot, SessionState

PANEL_LINES = (
    "Guide a snake-like robot to rescue",
    "people on a minefield. Avoid mines,",
    "walls and the cross obstacle.",
    "Every 5 people -> level up.",
    "Every 5 levels -> +1 life.",
)

CONTROL_LINES = (
    "Arrows/WASD: move (Manual)",
    "M: toggle AI / Manual",
    "SPACE (lvl>10): bomb mines",
    "ESC: quit",
)


def board_origin(window_h: int, panel_w: int, tile_size: int, rows: int) -> Tuple[int, int]:
    """Top-left pixel of the board, right of the info panel and vertically centered."""
    return panel_w + 20, (window_h - rows * tile_size) // 2


def cell_rect(cell: Cell, origin: Tuple[int, int], tile_size: int) -> pygame.Rect:
    x, y = cell
    return pygame.Rect(origin[0] + x * tile_size, origin[1] + y * tile_size, tile_size, tile_size)


def _fill_cells(
    surf: pygame.Surface,
    cells: Sequence[Cell],
    origin: Tuple[int, int],
    tile_size: int,
    color: Color,
    inset: int = 1,
) -> None:
    for cell in cells:
        pygame.draw.rect(surf, color, cell_rect(cell, origin, tile_size).inflate(-inset * 2, -inset * 2))


def draw_board(
    surf: pygame.Surface,
    snap: GameSnapshot,
    origin: Tuple[int, int],
    tile_size: int,
    colors: Dict[str, Color],
) -> None:
    """Draw walls, obstacle, mines, the person and the robot."""
    cols, rows = snap.board_cols, snap.board_rows
    board = pygame.Rect(origin[0], origin[1], cols * tile_size, rows * tile_size)
    pygame.draw.rect(surf, colors["floor"], board)

    for x in range(cols + 1):
        sx = origin[0] + x * tile_size
        pygame.draw.line(surf, colors["grid"], (sx, board.top), (sx, board.bottom), 1)
    for y in range(rows + 1):
        sy = origin[1] + y * tile_size
        pygame.draw.line(surf, colors["grid"], (board.left, sy), (board.right, sy), 1)

    walls = [(x, y) for y in range(rows) for x in range(cols) if x in (0, cols - 1) or y in (0, rows - 1)]
    _fill_cells(surf, walls, origin, tile_size, colors["wall"], inset=0)
    _fill_cells(surf, snap.obstacle.cells(), origin, tile_size, colors["obstacle"], inset=0)

    marked = set(snap.marked_hazards)
    _fill_cells(surf, [c for c in snap.hazards if c not in marked], origin, tile_size, colors["mine"], inset=3)
    _fill_cells(surf, [c for c in snap.hazards if c in marked], origin, tile_size, colors["mine_marked"], inset=3)

    person = cell_rect(snap.target, origin, tile_size)
    pygame.draw.circle(surf, colors["person"], person.center, max(2, tile_size // 3))

    _fill_cells(surf, snap.body, origin, tile_size, colors["robot_body"], inset=3)
    head_color = colors["robot_invincible"] if snap.invincible else colors["robot_head"]
    _fill_cells(surf, [snap.head], origin, tile_size, head_color, inset=1)


def draw_panel(
    surf: pygame.Surface,
    snap: GameSnapshot,
    font: pygame.font.Font,
    small_font: pygame.font.Font,
    panel_w: int,
    window_h: int,
    colors: Dict[str, Color],
) -> None:
    """Draw the player stats, help text and the continue prompt."""
    pygame.draw.rect(surf, colors["panel"], pygame.Rect(20, 40, panel_w - 40, window_h - 80))
    tx, ty = 40, 60

    stats = (
        f"Player: {snap.name}",
        f"Score : {snap.score}",
        f"Level : {snap.level}",
        f"Lives : {snap.lives}",
        f"Mode  : {'AI' if snap.ai_mode else 'Manual'}",
    )
    for line in stats:
        surf.blit(font.render(line, True, colors["text"]), (tx, ty))
        ty += 30
    ty += 10

    for header, lines in (("Description:", PANEL_LINES), ("Controls:", CONTROL_LINES)):
        surf.blit(font.render(header, True, colors["accent"]), (tx, ty))
        ty += 24
        for line in lines:
            surf.blit(small_font.render(line, True, colors["hint"]), (tx, ty))
            ty += 20
        ty += 10

    if snap.state is SessionState.WAIT_CONTINUE:
        surf.blit(font.render("You lost a life!", True, colors["warning"]), (tx, ty))
        ty += 26
        surf.blit(small_font.render("Press Y to continue", True, colors["mine_marked"]), (tx, ty))
        ty += 20
        surf.blit(small_font.render("Press Q to quit", True, colors["mine_marked"]), (tx, ty))


def _blit_centered(surf: pygame.Surface, font: pygame.font.Font, text: str, y: int, color: Color) -> None:
    label = font.render(text, True, color)
    surf.blit(label, label.get_rect(midtop=(surf.get_width() // 2, y)))


def draw_game_over(
    surf: pygame.Surface,
    record: ScoreRecord,
    new_record: bool,
    title_font: pygame.font.Font,
    font: pygame.font.Font,
    colors: Dict[str, Color],
) -> None:
    _blit_centered(surf, title_font, "GAME OVER", 120, colors["text"])
    _blit_centered(surf, font, f"Final score: {record.score}", 190, colors["text"])
    _blit_centered(surf, font, f"Player: {record.name} (Level {record.level})", 225, colors["text"])
    if new_record:
        _blit_centered(surf, font, "Congratulations! NEW HIGH SCORE!", 270, colors["mine_marked"])
    else:
        _blit_centered(surf, font, "Nice run! Try to beat the record next time.", 270, colors["hint"])
    _blit_centered(surf, font, "Press ENTER / SPACE to view leaderboard...", 330, colors["hint"])


def draw_leaderboard(
    surf: pygame.Surface,
    entries: List[ScoreRecord],
    title_font: pygame.font.Font,
    font: pygame.font.Font,
    colors: Dict[str, Color],
) -> None:
    _blit_centered(surf, title_font, "LEADERBOARD", 60, colors["text"])
    columns = (("Rank", 200), ("Name", 280), ("Level", 520), ("Score", 640))
    for label, x in columns:
        surf.blit(font.render(label, True, colors["accent"]), (x, 130))
    pygame.draw.line(surf, colors["hint"], (180, 160), (surf.get_width() - 180, 160), 1)

    for i, entry in enumerate(entries[:10]):
        y = 180 + i * 28
        row = (f"{i + 1:2d}", entry.name, f"{entry.level:5d}", f"{entry.score:5d}")
        for (text, (_, x)) in zip(row, columns):
            surf.blit(font.render(text, True, colors["text"]), (x, y))

    _blit_centered(surf, font, "Press ENTER or ESC to quit.", surf.get_height() - 60, colors["hint"])


class GameRenderer:
    """Renderer that owns the fonts and palette for every screen."""

    def __init__(self, window_w: int, window_h: int, tile_size: int, panel_w: int, colors: Dict[str, Color]) -> None:
        self.window_w = window_w
        self.window_h = window_h
        self.tile_size = tile_size
        self.panel_w = panel_w
        self.colors = colors
        self.title_font = pygame.font.SysFont("monospace", 40, bold=True)
        self.font = pygame.font.SysFont("monospace", 20)
        self.small_font = pygame.font.SysFont("monospace", 16)

    def render_frame(self, screen: pygame.Surface, bg: Color, snap: GameSnapshot) -> None:
        """Render and present the playing / paused screen."""
        screen.fill(bg)
        origin = board_origin(self.window_h, self.panel_w, self.tile_size, snap.board_rows)
        draw_panel(screen, snap, self.font, self.small_font, self.panel_w, self.window_h, self.colors)
        draw_board(screen, snap, origin, self.tile_size, self.colors)
        pygame.display.flip()

    def render_game_over(self, screen: pygame.Surface, bg: Color, record: ScoreRecord, new_record: bool) -> None:
        screen.fill(bg)
        draw_game_over(screen, record, new_record, self.title_font, self.font, self.colors)
        pygame.display.flip()

    def render_leaderboard(self, screen: pygame.Surface, bg: Color, entries: List[ScoreRecord]) -> None:
        screen.fill(bg)
        draw_leaderboard(screen, entries, self.title_font, self.font, self.colors)
        pygame.display.flip()
