import random

import pytest

from blockfall.board import (
    COLUMNS,
    LINE_POINTS,
    MAX_LEVEL,
    ROWS,
    Board,
    ColorBag,
    Key,
    line_score,
)
from blockfall.pieces import SPAWN_COLUMN, SPAWN_ROW, Tetrimino


def _fill_row(board, row, color=0):
    for col in range(COLUMNS):
        board.blocks[(col, row)] = color


@pytest.fixture
def board():
    b = Board(random.Random(1))
    b.start()
    return b


def test_line_score_source_values():
    assert line_score(1, 0) == 40
    assert line_score(4, 0) == 1200
    assert line_score(2, 3) == LINE_POINTS[2] * 4
    assert line_score(0, 5) == 0


def test_color_bag_deals_permutations():
    bag = ColorBag(random.Random(7))
    first = sorted(bag.draw() for _ in range(7))
    second = sorted(bag.draw() for _ in range(7))
    assert first == list(range(7))
    assert second == list(range(7))


def test_color_bag_is_deterministic_with_seed():
    a = ColorBag(random.Random(3))
    b = ColorBag(random.Random(3))
    assert [a.draw() for _ in range(14)] == [b.draw() for _ in range(14)]


def test_start_spawns_piece(board):
    assert board.current is not None
    assert (board.current.col, board.current.row) == (SPAWN_COLUMN, SPAWN_ROW)
    assert board.next_color in range(7)
    assert board.running


def test_initial_fall_interval():
    b = Board(random.Random(0))
    assert b.level == 1
    assert b.fall_interval() == 900


def test_tick_moves_down(board):
    before = board.current.cells()
    landed = board.tick()
    assert landed is False
    assert board.current.cells() == tuple((c, r + 1) for c, r in before)


def test_left_stops_at_wall(board):
    for _ in range(20):
        board.handle_key(Key.LEFT)
    assert min(c for c, _ in board.current.cells()) == 0
    assert board.handle_key(Key.LEFT) is False


def test_right_stops_at_wall(board):
    for _ in range(20):
        board.handle_key(Key.RIGHT)
    assert max(c for c, _ in board.current.cells()) == COLUMNS - 1


def test_down_key_does_not_land(board):
    for _ in range(ROWS + 5):
        board.handle_key(Key.DOWN)
    assert board.blocks == {}
    assert max(r for _, r in board.current.cells()) == ROWS - 1


def test_up_rotates(board):
    piece = board.current
    assert board.handle_key("up") is True
    assert board.current.rotation == (piece.rotation + 1) % 4


def test_hard_drop_locks_piece(board):
    color = board.current.color_index
    upcoming = board.next_color
    assert board.handle_key(Key.SPACE) is True
    assert len(board.blocks) == 4
    assert max(r for _, r in board.blocks) == ROWS - 1
    assert set(board.blocks.values()) == {color}
    assert board.current.color_index == upcoming


def test_ticks_eventually_land(board):
    landed = False
    for _ in range(ROWS + 2):
        if board.tick():
            landed = True
            break
    assert landed
    assert len(board.blocks) == 4


def test_unknown_key_rejected(board):
    with pytest.raises(ValueError):
        board.handle_key("jump")


def test_collides_with_blocks_and_walls():
    b = Board(random.Random(0))
    piece = Tetrimino.spawn(6)
    assert not b.collides(piece)
    b.blocks[piece.cells()[0]] = 3
    assert b.collides(piece)
    assert b.collides(Tetrimino(6, col=-1, row=5))
    assert b.collides(Tetrimino(6, col=COLUMNS - 1, row=5))
    assert b.collides(Tetrimino(6, col=0, row=ROWS - 1))


def test_is_line_full():
    b = Board(random.Random(0))
    _fill_row(b, ROWS - 1)
    assert b.is_line_full(ROWS - 1)
    del b.blocks[(0, ROWS - 1)]
    assert not b.is_line_full(ROWS - 1)


def test_clear_single_line_drops_rows_above():
    b = Board(random.Random(0))
    _fill_row(b, ROWS - 1)
    b.blocks[(3, ROWS - 2)] = 2
    b.blocks[(5, 4)] = 1
    assert b.clear_full_lines() == 1
    assert b.blocks == {(3, ROWS - 1): 2, (5, 5): 1}
    assert b.lines_cleared == 1
    assert b.level == 0
    assert b.score == 40


def test_clear_four_lines():
    b = Board(random.Random(0))
    for row in range(ROWS - 4, ROWS):
        _fill_row(b, row)
    assert b.clear_full_lines() == 4
    assert b.blocks == {}
    assert b.score == 1200


def test_clear_non_adjacent_lines():
    b = Board(random.Random(0))
    _fill_row(b, ROWS - 1)
    _fill_row(b, ROWS - 3)
    b.blocks[(0, ROWS - 2)] = 4
    assert b.clear_full_lines() == 2
    assert b.blocks == {(0, ROWS - 1): 4}
    assert b.score == line_score(2, 0)


def test_level_capped():
    b = Board(random.Random(0))
    b.lines_cleared = 200
    _fill_row(b, ROWS - 1)
    b.clear_full_lines()
    assert b.level == MAX_LEVEL
    assert b.score == line_score(1, MAX_LEVEL)


def test_no_lines_keeps_score():
    b = Board(random.Random(0))
    b.blocks[(0, ROWS - 1)] = 0
    assert b.clear_full_lines() == 0
    assert b.score == 0
    assert b.level == 0


def test_game_over_when_spawn_blocked():
    b = Board(random.Random(0))
    for col in (SPAWN_COLUMN, SPAWN_COLUMN + 1):
        for row in range(SPAWN_ROW, SPAWN_ROW + 4):
            b.blocks[(col, row)] = 0
    b.start()
    assert b.game_over
    assert b.current is None
    assert b.handle_key(Key.LEFT) is False
    assert b.tick() is False


def test_reset_after_game_over():
    b = Board(random.Random(0))
    for col in (SPAWN_COLUMN, SPAWN_COLUMN + 1):
        for row in range(SPAWN_ROW, SPAWN_ROW + 4):
            b.blocks[(col, row)] = 0
    b.score = 500
    b.start()
    b.reset()
    assert b.running
    assert b.blocks == {}
    assert b.score == 0
    assert b.level == 0
    assert b.current is not None