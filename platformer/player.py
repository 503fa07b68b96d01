"""The player character: position, facing, and vertical physics."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .config import (
    AIR,
    CEILING_BOUNCE_OFF,
    GRAVITY_FORCE,
    JUMP_STRENGTH,
    PLAYER,
    WALL,
)
from .level import Level


@dataclass
class Player:
    """The player's position in cell units, vertical speed and state flags."""

    x: float = 0.0
    y: float = 0.0
    y_velocity: float = 0.0
    on_ground: bool = False
    looking_forward: bool = True
    moving: bool = False

    def update_gravity(self, level: Level) -> None:
        """Apply one frame of gravity, bouncing off ceilings and landing on walls."""
        if level.is_colliding(self.x, self.y - 0.1, WALL) and self.y_velocity < 0:
            self.y_velocity = CEILING_BOUNCE_OFF

        self.y += self.y_velocity
        self.y_velocity += GRAVITY_FORCE

        self.on_ground = level.is_colliding(self.x, self.y + 1.0, WALL)
        if self.on_ground and self.y_velocity >= 0.0:
            self.y_velocity = 0.0
            self.y = float(math.floor(self.y))

    def move_horizontally(self, level: Level, delta: float) -> None:
        """Step sideways by `delta`, snapping to the cell edge when a wall is hit."""
        next_x = self.x + delta
        if level.is_colliding(next_x, self.y, WALL):
            self.x = float(math.floor(self.x))
        else:
            self.x = next_x

        self.looking_forward = delta > 0
        if delta != 0:
            self.moving = True

    def spawn(self, level: Level) -> None:
        """Move to the level's player marker, clearing it, and stop falling."""
        self.y_velocity = 0.0
        for row, column in level.positions_of(PLAYER):
            self.x = float(column)
            self.y = float(row)
            level.set_cell(row, column, AIR)
            return

    def jump(self) -> bool:
        """Start a jump if standing on the ground; report whether it started."""
        if not self.on_ground:
            return False
        self.y_velocity = -JUMP_STRENGTH
        return True