"""
Rendering Engine
=================
Double-buffered terminal renderer and the per-phase screens.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from blessed import Terminal

from .scene import Scene
from .terrain import Kind


# ANSI 256 color constants
GREEN = 34
BLUE = 19
RED = 196
YELLOW = 226
GRAY_MED = 245
WHITE = 255
BLACK = 0

BLOCK = '█'
ENEMY_CHAR = '✈'
PROJECTILE_CHAR = '•'
PLAYER_CHAR = '▲'

# Glyph, foreground, background per terrain kind
TERRAIN_STYLE = {
    Kind.LAND: (BLOCK, GREEN, -1),
    Kind.RIVER: (BLOCK, BLUE, -1),
    Kind.ENEMY: (ENEMY_CHAR, WHITE, BLUE),
}

TITLE = 'River Raid Game'
HELP = 'Help: (ctrl+c) Exit   (p) Pause'
START_PROMPT = 'Press any key to start...'
PAUSED = 'Game Paused'
GAME_OVER = 'Game Over!'
EXIT_PROMPT = 'Press ctrl+c to exit..'


@dataclass(frozen=True)
class ScreenCell:
    """Glyph and colours of one screen position. -1 background = default."""
    char: str = ' '
    fg_color: int = 7
    bg_color: int = -1


BLANK = ScreenCell()


class DoubleBuffer:
    """
    Frame buffer that only emits the cells that changed.

    Each frame is drawn into ``back`` and compared with ``front``, the
    frame already on screen. After a resize both start blank, so the
    caller clears the real screen to match.
    """

    def __init__(self, width: int, height: int):
        self.resize(width, height)

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height
        self.front = self._blank()
        self.back = self._blank()

    def _blank(self) -> List[List[ScreenCell]]:
        return [[BLANK] * self.width for _ in range(self.height)]

    def clear_back(self):
        for row in self.back:
            row[:] = [BLANK] * self.width

    def put(self, x: int, y: int, char: str, fg_color: int = 7, bg_color: int = -1):
        """Set a back-buffer cell. Off-screen writes are dropped."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.back[y][x] = ScreenCell(char, fg_color, bg_color)

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7, bg_color: int = -1):
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color, bg_color)

    def present(self, term: Terminal) -> str:
        """Escape sequences turning ``front`` into ``back``; then swap them."""
        output_parts = []
        for y, (back_row, front_row) in enumerate(zip(self.back, self.front)):
            for x, (cell, shown) in enumerate(zip(back_row, front_row)):
                if cell == shown:
                    continue
                output_parts.append(term.move_xy(x, y) + term.normal)
                if cell.bg_color >= 0:
                    output_parts.append(term.on_color(cell.bg_color))
                output_parts.append(term.color(cell.fg_color) + cell.char)

        self.front, self.back = self.back, self.front
        return ''.join(output_parts)


class GameRenderer:
    """High-level renderer: frame bookkeeping and the game's drawing calls."""

    def __init__(self, width: int, height: int):
        self.buffer = DoubleBuffer(width, height)

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    def resize(self, width: int, height: int):
        self.buffer.resize(width, height)

    def begin_frame(self):
        self.buffer.clear_back()

    def end_frame(self, term: Terminal) -> str:
        return self.buffer.present(term)

    # -------------------------------------------------------------------------
    # Playfield
    # -------------------------------------------------------------------------

    def draw_scene(self, scene: Scene, window: Sequence[int]):
        """Draw the terrain rows of a window, one per screen row."""
        for y, index in enumerate(window[:self.height]):
            for x, kind in enumerate(scene.row(index)):
                char, fg, bg = TERRAIN_STYLE[kind]
                self.buffer.put(x, y, char, fg, bg)

    def draw_projectiles(self, positions: Iterable[Tuple[int, int]]):
        for x, y in positions:
            self.buffer.put(x, y, PROJECTILE_CHAR, RED, BLUE)

    def draw_player(self, x: int, y: int):
        self.buffer.put(x, y, PLAYER_CHAR, BLACK, BLUE)

    # -------------------------------------------------------------------------
    # Screens
    # -------------------------------------------------------------------------

    def draw_title(self):
        self.buffer.put_string(0, 0, TITLE, YELLOW)
        self.buffer.put_string(0, 2, HELP, WHITE)
        self.buffer.put_string(0, 6, START_PROMPT, WHITE)

    def draw_paused_banner(self):
        x = self.width // 2 - len(PAUSED) // 2
        y = self.height // 2
        self.buffer.put_string(x, y, PAUSED, BLACK, WHITE)

    def draw_game_over(self, distance: int, enemies_destroyed: int):
        self.buffer.put_string(0, 0, GAME_OVER, RED)
        self.buffer.put_string(0, 2, f'Distance: {distance}', GRAY_MED)
        self.buffer.put_string(0, 3, f'Enemies destroyed: {enemies_destroyed}', GRAY_MED)
        self.buffer.put_string(0, 5, EXIT_PROMPT, WHITE)
