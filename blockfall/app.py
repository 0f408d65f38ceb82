"""Window, screens and main loop of the game."""

from __future__ import annotations

import argparse
import random
from dataclasses import dataclass
from functools import lru_cache

import pygame

from .board import COLUMNS, ROWS, Board, Key
from .pieces import figure_offsets

WINDOW_WIDTH = 512
WINDOW_HEIGHT = 512
TILE_SIZE = 26
FRAMES_PER_SECOND = 60

FIELD_LEFT = 44
FIELD_TOP = 14

BUTTON_WIDTH = 200
BUTTON_HEIGHT = 52
BUTTON_RADIUS = 4
BUTTON_FONT_SIZE = 16
BUTTON_COLOR = (0x73, 0x73, 0x73)
BUTTON_HOVER_COLOR = (0x40, 0x40, 0x40)
BUTTON_PRESSED_COLOR = (0x27, 0x27, 0x27)
BUTTON_TEXT_COLOR = (255, 255, 255)

BACKGROUND_COLOR = (0x1E, 0x1F, 0x22)
FIELD_COLOR = (0x10, 0x10, 0x12)
FIELD_BORDER_COLOR = (0x82, 0x85, 0x88)
LABEL_COLOR = (0x82, 0x85, 0x88)
LABEL_FONT_SIZE = 32
GAME_OVER_COLOR = (255, 0, 0)
GAME_OVER_FONT_SIZE = 60
OVERLAY_COLOR = (0, 0, 0, 150)

SCORE_RECT = (345, 75, 125, 62)
LEVEL_RECT = (345, 210, 125, 62)
NEXT_PIECE_CENTER = (405, 420)

TILE_COLORS: tuple[tuple[int, int, int], ...] = (
    (0x00, 0xBC, 0xD4),  # I
    (0xE5, 0x39, 0x35),  # Z
    (0x43, 0xA0, 0x47),  # S
    (0x8E, 0x24, 0xAA),  # T
    (0xFB, 0x8C, 0x00),  # L
    (0x1E, 0x88, 0xE5),  # J
    (0xFD, 0xD8, 0x35),  # O
)

_KEYS = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_SPACE: Key.SPACE,
}


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _draw_text(
    surface: pygame.Surface,
    text: str,
    size: int,
    color: tuple[int, int, int],
    rect: pygame.Rect,
) -> None:
    rendered = _font(size).render(text, True, color)
    surface.blit(rendered, rendered.get_rect(center=rect.center))


def _draw_tile(surface: pygame.Surface, rect: pygame.Rect, color_index: int) -> None:
    color = TILE_COLORS[color_index]
    shade = tuple(channel // 2 for channel in color)
    pygame.draw.rect(surface, color, rect)
    pygame.draw.rect(surface, shade, rect, width=2)


@dataclass
class Button:
    """A clickable rectangle with a caption."""

    label: str
    rect: pygame.Rect
    hovered: bool = False
    pressed: bool = False

    def contains(self, pos: tuple[int, int]) -> bool:
        return bool(self.rect.collidepoint(pos))

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Track the mouse; return True when a left click completes on the button."""
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.contains(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.pressed = self.contains(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            clicked = self.pressed and self.contains(event.pos)
            self.pressed = False
            return clicked
        return False

    @property
    def color(self) -> tuple[int, int, int]:
        if self.pressed:
            return BUTTON_PRESSED_COLOR
        if self.hovered:
            return BUTTON_HOVER_COLOR
        return BUTTON_COLOR

    def draw(self, surface: pygame.Surface) -> None:
        pygame.draw.rect(surface, self.color, self.rect, border_radius=BUTTON_RADIUS)
        _draw_text(surface, self.label, BUTTON_FONT_SIZE, BUTTON_TEXT_COLOR, self.rect)


def _centered_button(label: str, width: int, top: int) -> Button:
    return Button(label, pygame.Rect(width // 2 - BUTTON_WIDTH // 2, top, BUTTON_WIDTH, BUTTON_HEIGHT))


class StartMenu:
    """The title screen with its start button."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.start_button = _centered_button("Start Game", width, height // 2 - 60)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Return True when the start button was clicked."""
        return self.start_button.handle_event(event)

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(BACKGROUND_COLOR)
        self.start_button.draw(surface)


class GameScreen:
    """The playing screen: field, falling piece, score, level and next piece."""

    def __init__(
        self,
        width: int,
        height: int,
        tile_size: int,
        rng: random.Random | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.tile_size = tile_size
        self.board = Board(rng)
        self.reset_button = _centered_button("Reset", width, height // 2 + 10)
        self.menu_button = _centered_button("To Start Menu", width, height // 2 + 170)
        self._elapsed = 0
        self.board.start()

    def cell_rect(self, col: int, row: int) -> pygame.Rect:
        """Screen rectangle of a field cell."""
        return pygame.Rect(
            FIELD_LEFT + col * self.tile_size,
            FIELD_TOP + row * self.tile_size,
            self.tile_size,
            self.tile_size,
        )

    def _restart(self) -> None:
        self.board.reset()
        self._elapsed = 0

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Apply an input event; return True when the player asks for the start menu."""
        if self.board.game_over:
            if self.reset_button.handle_event(event):
                self._restart()
                return False
            if self.menu_button.handle_event(event):
                self._restart()
                return True
            return False
        if event.type == pygame.KEYDOWN:
            key = _KEYS.get(event.key)
            if key is not None:
                self.board.handle_key(key)
                if key is Key.SPACE:
                    # A fresh piece starts its own fall timer.
                    self._elapsed = 0
        return False

    def update(self, elapsed_ms: int) -> None:
        """Advance the fall timer by the given number of milliseconds."""
        if self.board.game_over:
            return
        interval = self.board.fall_interval()
        if interval <= 0:
            if self.board.tick():
                self._elapsed = 0
            return
        self._elapsed += elapsed_ms
        while self._elapsed >= interval and not self.board.game_over:
            self._elapsed -= interval
            if self.board.tick():
                self._elapsed = 0
                break

    def _draw_next_piece(self, surface: pygame.Surface) -> None:
        if self.board.next_color is None:
            return
        offsets = figure_offsets(self.board.next_color)
        min_x = min(x for x, _ in offsets)
        min_y = min(y for _, y in offsets)
        span_x = max(x for x, _ in offsets) - min_x + 1
        span_y = max(y for _, y in offsets) - min_y + 1
        left = NEXT_PIECE_CENTER[0] - span_x * self.tile_size / 2
        top = NEXT_PIECE_CENTER[1] - span_y * self.tile_size / 2
        for x, y in offsets:
            rect = pygame.Rect(
                round(left + (x - min_x) * self.tile_size),
                round(top + (y - min_y) * self.tile_size),
                self.tile_size,
                self.tile_size,
            )
            _draw_tile(surface, rect, self.board.next_color)

    def _draw_game_over(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill(OVERLAY_COLOR)
        surface.blit(overlay, (0, 0))
        label_rect = pygame.Rect(0, 0, self.width, self.height - 60)
        _draw_text(surface, "GAME OVER", GAME_OVER_FONT_SIZE, GAME_OVER_COLOR, label_rect)
        self.reset_button.draw(surface)
        self.menu_button.draw(surface)

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(BACKGROUND_COLOR)
        field = pygame.Rect(FIELD_LEFT, FIELD_TOP, COLUMNS * self.tile_size, ROWS * self.tile_size)
        pygame.draw.rect(surface, FIELD_COLOR, field)
        pygame.draw.rect(surface, FIELD_BORDER_COLOR, field.inflate(4, 4), width=2)
        for (col, row), color_index in self.board.blocks.items():
            _draw_tile(surface, self.cell_rect(col, row), color_index)
        piece = self.board.current
        if piece is not None:
            for col, row in piece.cells():
                _draw_tile(surface, self.cell_rect(col, row), piece.color_index)
        _draw_text(surface, str(self.board.score), LABEL_FONT_SIZE, LABEL_COLOR, pygame.Rect(SCORE_RECT))
        _draw_text(surface, str(self.board.level), LABEL_FONT_SIZE, LABEL_COLOR, pygame.Rect(LEVEL_RECT))
        self._draw_next_piece(surface)
        if self.board.game_over:
            self._draw_game_over(surface)


class TetrisApp:
    """Switches between the start menu and the game and runs the main loop."""

    def __init__(
        self,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        tile_size: int = TILE_SIZE,
    ) -> None:
        self.width = width
        self.height = height
        self.tile_size = tile_size
        self.rng: random.Random | None = None
        self.menu = StartMenu(width, height)
        self.game: GameScreen | None = None
        self.current: StartMenu | GameScreen = self.menu
        self.running = True

    def handle_event(self, event: pygame.event.Event) -> None:
        """Route an event to the visible screen and switch screens as asked."""
        if event.type == pygame.QUIT:
            self.running = False
            return
        if self.current is self.menu:
            if self.menu.handle_event(event):
                self.game = GameScreen(self.width, self.height, self.tile_size, self.rng)
                self.current = self.game
        elif self.game is not None and self.game.handle_event(event):
            self.current = self.menu

    def update(self, elapsed_ms: int) -> None:
        if self.game is not None and self.current is self.game:
            self.game.update(elapsed_ms)

    def draw(self, surface: pygame.Surface) -> None:
        self.current.draw(surface)

    def run(self) -> None:
        """Open the window and run until it is closed."""
        pygame.init()
        try:
            surface = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption("Tetris")
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.update(clock.tick(FRAMES_PER_SECOND))
                self.draw(surface)
                pygame.display.flip()
        finally:
            pygame.quit()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="blockfall", description="Play a falling-blocks puzzle game.")
    parser.parse_args(argv)
    TetrisApp(WINDOW_WIDTH, WINDOW_HEIGHT, TILE_SIZE).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())