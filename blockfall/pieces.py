"""Tetrimino shapes and the blocks they leave behind on the field."""

from __future__ import annotations

from dataclasses import dataclass, replace

# Each figure lists four cells of a 2x4 grid, numbered row by row.
FIGURES: tuple[tuple[int, int, int, int], ...] = (
    (1, 3, 5, 7),  # I
    (0, 2, 3, 5),  # Z
    (1, 3, 2, 4),  # S
    (1, 3, 2, 5),  # T
    (0, 1, 3, 5),  # L
    (1, 3, 5, 4),  # J
    (0, 1, 2, 3),  # O
)

FIGURE_NAMES: tuple[str, ...] = ("I", "Z", "S", "T", "L", "J", "O")

SPAWN_COLUMN = 4
SPAWN_ROW = 1

# The block whose top-left corner is the centre of rotation.
PIVOT_INDEX = 1


def figure_offsets(color_index: int) -> tuple[tuple[int, int], ...]:
    """Return the (column, row) offsets of the four blocks of a figure."""
    if not 0 <= color_index < len(FIGURES):
        raise ValueError(f"no figure with index {color_index}")
    return tuple((value % 2, value // 2) for value in FIGURES[color_index])


@dataclass(frozen=True)
class Block:
    """A single locked square on the playing field."""

    col: int
    row: int
    color_index: int


@dataclass(frozen=True)
class Tetrimino:
    """A falling piece: figure, grid position and number of clockwise quarter turns."""

    color_index: int
    col: int = SPAWN_COLUMN
    row: int = SPAWN_ROW
    rotation: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.color_index < len(FIGURES):
            raise ValueError(f"no figure with index {self.color_index}")
        object.__setattr__(self, "rotation", self.rotation % 4)

    @classmethod
    def spawn(cls, color_index: int) -> Tetrimino:
        """Create a piece at the spawn position."""
        return cls(color_index, SPAWN_COLUMN, SPAWN_ROW, 0)

    def cells(self) -> tuple[tuple[int, int], ...]:
        """Return the field cells covered by the piece."""
        offsets = figure_offsets(self.color_index)
        pivot_x, pivot_y = offsets[PIVOT_INDEX]
        result = []
        for x, y in offsets:
            dx, dy = x - pivot_x, y - pivot_y
            # A clockwise turn about the pivot's top-left corner.
            for _ in range(self.rotation):
                dx, dy = -dy - 1, dx
            result.append((self.col + pivot_x + dx, self.row + pivot_y + dy))
        return tuple(result)

    def shifted(self, dx: int, dy: int) -> Tetrimino:
        """Return the piece moved by dx columns and dy rows."""
        return replace(self, col=self.col + dx, row=self.row + dy)

    def rotated(self, quarter_turns: int) -> Tetrimino:
        """Return the piece turned clockwise by the given number of quarter turns."""
        return replace(self, rotation=self.rotation + quarter_turns)

    def to_blocks(self) -> list[Block]:
        """Break the piece into individual blocks."""
        return [Block(col, row, self.color_index) for col, row in self.cells()]