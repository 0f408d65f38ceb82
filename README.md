# blockfall

A falling-block puzzle game built with pygame. Seven pieces fall into a
well ten columns wide and eighteen rows deep; fill a row completely to clear
it. Cleared lines raise the level, and each level makes pieces fall faster.

## Installing

```
pip install blockfall
```

## Playing

Start the game from a terminal:

```
blockfall
```

A 512 x 512 window opens on a start menu. Click **Start Game** to begin.

| Key        | Action                                 |
|------------|----------------------------------------|
| Left/Right | Move the piece one column              |
| Up         | Rotate the piece a quarter turn        |
| Down       | Move the piece down one row            |
| Space      | Drop the piece to the bottom and lock it |

A move or turn that would push the piece out of the well or into a locked
block is ignored. The panel on the right shows your score, your level and the
next piece. Pieces are dealt from a shuffled bag of all seven shapes, so every
shape turns up once in each run of seven.

### Scoring

Lines cleared at once by a single piece score these points, multiplied by
`level + 1`:

| Lines | Points |
|-------|--------|
| 1     | 40     |
| 2     | 100    |
| 3     | 300    |
| 4     | 1200   |

A new game starts at level 1. Each time a piece locks, the level is set to
the total number of lines cleared divided by ten, capped at 10. A piece falls
one row every `1000 - 100 * level` milliseconds.

When a new piece has no room to spawn the game is over. Choose **Reset** to
play again or **To Start Menu** to go back to the menu.

## Using the game logic

The rules live apart from the window and can be driven directly:

```python
import random

from blockfall.board import Board, Key

board = Board(random.Random(1))
board.start()
board.handle_key(Key.LEFT)   # True if the piece moved
board.handle_key("space")    # key names are accepted too
landed = board.tick()        # one automatic step down
print(board.score, board.level, board.game_over)
```

`blockfall.pieces` holds the piece shapes (`Tetrimino`, `Block`,
`figure_offsets`). `blockfall.board` holds the player commands (`Key`), the
shuffled piece bag (`ColorBag`), scoring (`line_score`) and the game state
(`Board`, with `start`, `reset`, `handle_key`, `tick`, `collides`,
`is_line_full`, `clear_full_lines` and `fall_interval`). `blockfall.app` holds
the pygame screens (`StartMenu`, `GameScreen`, `Button`), the window loop
(`TetrisApp`) and `main`, which the `blockfall` command runs.

## What it does not do

Pieces and the playing field are drawn as plain coloured shapes; the game
loads no images, plays no sound, has no pause key and keeps no high scores
between sessions.

## Running the tests

```
pip install "blockfall[test]"
pytest
```