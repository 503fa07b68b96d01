"""Game-wide constants: tiles, physics, timing, colours and screen texts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

Color = tuple[int, int, int, int]

EPSILON = 0.0001

# Level tiles
WALL = "#"
WALL_DARK = "="
AIR = "-"
SPIKE = "^"
PLAYER = "@"
ENEMY = "&"
COIN = "*"
EXIT = "E"

# Physics
PLAYER_MOVEMENT_SPEED = 0.1
JUMP_STRENGTH = 0.25
CEILING_BOUNCE_OFF = 0.05
ENEMY_MOVEMENT_SPEED = 0.07
BOUNCE_OFF_ENEMY = 0.1
GRAVITY_FORCE = 0.01

# Game rules
LEVEL_COUNT = 4
FRAMES_PER_SECOND = 60
MAX_LEVEL_TIME = 50 * FRAMES_PER_SECOND
MAX_PLAYER_LIVES = 5

# Colours (RGBA)
WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)
RED: Color = (230, 41, 55, 255)
YELLOW: Color = (253, 249, 0, 255)


class State(Enum):
    """The screen the game is currently showing."""

    MENU = auto()
    GAME = auto()
    PAUSED = auto()
    DEATH = auto()
    GAME_OVER = auto()
    VICTORY = auto()


@dataclass(frozen=True)
class Text:
    """A line of text placed relative to the screen size."""

    text: str
    position: tuple[float, float] = (0.50, 0.50)
    size: float = 32.0
    color: Color = WHITE
    spacing: float = 4.0

    def anchor(
        self,
        screen_width: float,
        screen_height: float,
        text_width: float,
        text_height: float,
    ) -> tuple[float, float]:
        """Top-left corner that centres text of the given size on its position."""
        x = screen_width * self.position[0] - 0.5 * text_width
        y = screen_height * self.position[1] - 0.5 * text_height
        return (x, y)


GAME_TITLE = Text("Platformer", (0.50, 0.50), 100.0, RED)
GAME_SUBTITLE = Text("Press Enter to Start", (0.50, 0.65))
GAME_PAUSED = Text("Press Escape to Resume")
DEATH_TITLE = Text("You Died!", (0.50, 0.50), 80.0, RED)
DEATH_SUBTITLE = Text("Press Enter to Try Again", (0.50, 0.65))
GAME_OVER_TITLE = Text("Game Over", (0.50, 0.50), 120.0, RED)
GAME_OVER_SUBTITLE = Text("Press Enter to Restart", (0.50, 0.675))
VICTORY_TITLE = Text("You Won!", (0.50, 0.50), 100.0, RED)
VICTORY_SUBTITLE = Text("Press Enter to go back to menu", (0.50, 0.65))