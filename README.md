# platformer

A small side-scrolling platformer built on pygame. Run left and right
through tile-based levels, pick up coins, stomp on enemies, avoid spikes
and reach the exit.

## Installing

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Playing

```
platformer [--data DIR] [--width PIXELS] [--height PIXELS]
```

- `--data`: directory holding `levels.rll`, `fonts/`, `images/` and
  `sounds/` (default: `data`)
- `--width`, `--height`: window size in pixels (default: 1024 x 480)

If the level file or an image or font is missing, the command prints an
error and exits with status 1. Sounds are skipped when no audio device can
be opened.

Controls:

- **Enter**: start the game, retry after dying, restart after game over,
  leave the victory screen
- **Left / A** and **Right / D**: walk
- **Up / W / Space**: jump (only while standing on the ground)
- **Escape**: pause and resume during play; leave the victory screen;
  quit from the menu

You start with five lives. Touching a spike, falling below the level or
running into an enemy while not falling costs a life and the coins gathered
in that level. Landing on an enemy while falling removes it, scores a point
and bounces you upwards. Reaching the exit loads the next level; after the
last level (at most four are played) the victory screen is shown. With no
lives left, retrying leads to the game-over screen, from which Enter starts
again at the first level with full lives.

## Level files

Levels are stored one per line in a run-length encoded text file. Lines that
are empty or start with `;` are skipped. Within a line, `|` ends a row and `;`
ends the level; a number before a tile repeats it:

```
10#|#8-#|#@3-*2-E#|10#;
```

Tiles:

| Tile | Meaning |
|------|---------|
| `#`  | wall |
| `=`  | dark wall (drawn, but not solid) |
| `-`  | air |
| `^`  | spike |
| `@`  | player start |
| `&`  | enemy start |
| `*`  | coin |
| `E`  | exit |

`platformer.level.parse_rle(text)` parses one line into a `Level`, and
`platformer.level.load_levels(path)` reads a whole file; both raise
`LevelError` on unreadable or empty input.

## Using the pieces

The game rules in `platformer.game` need no window and can be driven one
frame at a time:

```python
from platformer.level import parse_rle
from platformer.game import Game, Controls

levels = [parse_rle("10#|#8-#|#@3-*2-E#|10#;")]
game = Game(levels, on_sound=print)
game.update(Controls(enter=True))   # leave the menu
game.update(Controls(right=True))   # walk one step
print(game.state, game.player.x, game.total_score())
```

`on_sound` receives a `platformer.game.Sound` value whenever a sound effect
should play. `platformer.graphics.Renderer` draws a `Game` onto a pygame
surface using assets from `platformer.assets.load_assets(root)`.

## What it does not include

The package ships no game data: no levels, images, fonts or sounds. A data
directory laid out as described above has to be supplied with `--data`.
There is no saving of scores or progress between runs.