"""Game rules: the playing field, falling piece, line clearing and scoring."""

from __future__ import annotations

import random
from enum import Enum

from .pieces import FIGURES, Tetrimino

COLUMNS = 10
ROWS = 18
MAX_LEVEL = 10
BASE_FALL_MS = 1000
FALL_STEP_MS = 100
LINES_PER_LEVEL = 10
LINE_POINTS = {1: 40, 2: 100, 3: 300, 4: 1200}


class Key(Enum):
    """Player commands."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    SPACE = "space"


def line_score(lines: int, level: int) -> int:
    """Points for clearing a number of lines at once at the given level."""
    return LINE_POINTS.get(lines, 0) * (level + 1)


class ColorBag:
    """Deals figure indices from shuffled bags of all seven figures."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._bag: list[int] = []

    def draw(self) -> int:
        if not self._bag:
            self._bag = list(range(len(FIGURES)))
            self._rng.shuffle(self._bag)
        return self._bag.pop()


class Board:
    """The playing field with its locked blocks, current piece and score."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._bag = ColorBag(rng)
        self.blocks: dict[tuple[int, int], int] = {}
        self.current: Tetrimino | None = None
        self.next_color: int | None = None
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.running = True

    @property
    def game_over(self) -> bool:
        return not self.running

    def start(self) -> None:
        """Pick the first upcoming figure and spawn a piece."""
        self.next_color = self._bag.draw()
        self._spawn()

    def reset(self) -> None:
        """Clear the field and the score and start again."""
        self.blocks.clear()
        self.current = None
        self.level = 0
        self.score = 0
        self.running = True
        self.start()

    def fall_interval(self) -> int:
        """Milliseconds between automatic downward steps."""
        return BASE_FALL_MS - self.level * FALL_STEP_MS

    def collides(self, piece: Tetrimino) -> bool:
        """Whether the piece leaves the field sideways or at the bottom, or hits a block."""
        for col, row in piece.cells():
            if col < 0 or col >= COLUMNS or row >= ROWS:
                return True
            if (col, row) in self.blocks:
                return True
        return False

    def handle_key(self, key: Key | str) -> bool:
        """Apply a player command; return whether the piece moved."""
        key = Key(key)
        if not self.running or self.current is None:
            return False
        piece = self.current
        if key is Key.SPACE:
            while not self.collides(piece.shifted(0, 1)):
                piece = piece.shifted(0, 1)
            self.current = piece
            self._land()
            return True
        moves = {
            Key.LEFT: lambda p: p.shifted(-1, 0),
            Key.RIGHT: lambda p: p.shifted(1, 0),
            Key.UP: lambda p: p.rotated(1),
            Key.DOWN: lambda p: p.shifted(0, 1),
        }
        candidate = moves[key](piece)
        if self.collides(candidate):
            return False
        self.current = candidate
        return True

    def tick(self) -> bool:
        """Move the piece one row down; return whether it landed."""
        if not self.running or self.current is None:
            return False
        candidate = self.current.shifted(0, 1)
        if self.collides(candidate):
            self._land()
            return True
        self.current = candidate
        return False

    def is_line_full(self, row: int) -> bool:
        return sum(1 for _, r in self.blocks if r == row) == COLUMNS

    def clear_full_lines(self) -> int:
        """Remove full rows, drop the rows above, update level and score."""
        count = 0
        for row in range(ROWS):
            if self.is_line_full(row):
                self._remove_line(row)
                count += 1
        self.lines_cleared += count
        self.level = min(self.lines_cleared // LINES_PER_LEVEL, MAX_LEVEL)
        self.score += line_score(count, self.level)
        return count

    def _remove_line(self, row: int) -> None:
        self.blocks = {
            (c, r + 1 if r < row else r): color
            for (c, r), color in self.blocks.items()
            if r != row
        }

    def _land(self) -> None:
        assert self.current is not None
        for block in self.current.to_blocks():
            self.blocks[(block.col, block.row)] = block.color_index
        self.current = None
        self.clear_full_lines()
        self._spawn()

    def _spawn(self) -> None:
        if not self.running:
            return
        piece = Tetrimino.spawn(self.next_color)
        if self.collides(piece):
            self.running = False
            self.current = None
            return
        self.current = piece
        self.next_color = self._bag.draw()