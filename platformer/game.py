"""Game rules: levels, lives, scores, timer and the state machine."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from .config import (
    AIR,
    BOUNCE_OFF_ENEMY,
    COIN,
    EXIT,
    LEVEL_COUNT,
    MAX_LEVEL_TIME,
    MAX_PLAYER_LIVES,
    PLAYER_MOVEMENT_SPEED,
    SPIKE,
    State,
)
from .enemies import Enemies
from .level import Level
from .player import Player


class Sound(Enum):
    """Sound effects the game asks to be played."""

    COIN = auto()
    EXIT = auto()
    KILL_ENEMY = auto()
    PLAYER_DEATH = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class Controls:
    """Input for one frame: keys pressed this frame and directions held."""

    enter: bool = False
    escape: bool = False
    left: bool = False
    right: bool = False
    jump: bool = False


class Game:
    """The whole game state, advanced one frame at a time by `update`."""

    def __init__(
        self,
        levels: Sequence[Level],
        on_sound: Callable[[Sound], None] | None = None,
    ) -> None:
        if not levels:
            raise ValueError("at least one level is required")
        self.levels = list(levels)
        self._on_sound = on_sound
        self.state = State.MENU
        self.level_index = 0
        self.timer = MAX_LEVEL_TIME
        self.time_to_coin_counter = 0
        self.player_lives = MAX_PLAYER_LIVES
        self.level_scores = [0] * LEVEL_COUNT
        self.game_frame = 0
        self.player = Player()
        self.enemies = Enemies()
        self.level = self.levels[0].copy()
        self.load_level(0)

    @property
    def escape_quits(self) -> bool:
        """Whether the escape key should close the game."""
        return self.state is State.MENU

    def _play(self, sound: Sound) -> None:
        if self._on_sound is not None:
            self._on_sound(sound)

    def load_level(self, offset: int = 0) -> None:
        """Move `offset` levels on and start it; past the last level the game is won."""
        self.level_index += offset
        if self.level_index >= min(LEVEL_COUNT, len(self.levels)):
            self.state = State.VICTORY
            self.level_index = 0
            return

        self.level = self.levels[self.level_index].copy()
        self.player.spawn(self.level)
        self.enemies.spawn(self.level)
        self.timer = MAX_LEVEL_TIME

    def reset_level_index(self) -> None:
        self.level_index = 0

    def reset_stats(self) -> None:
        """Restore full lives and clear every level's score."""
        self.player_lives = MAX_PLAYER_LIVES
        self.level_scores = [0] * LEVEL_COUNT

    def increment_score(self) -> None:
        self._play(Sound.COIN)
        self.level_scores[self.level_index] += 1

    def total_score(self) -> int:
        return sum(self.level_scores)

    def kill_player(self) -> None:
        """Lose a life and the coins gathered in the current level."""
        self._play(Sound.PLAYER_DEATH)
        self.state = State.DEATH
        self.player_lives -= 1
        self.level_scores[self.level_index] = 0

    def update_player(self) -> None:
        """Apply gravity, then coins, the exit, hazards and enemies at the player's spot."""
        self.player.update_gravity(self.level)
        x, y = self.player.x, self.player.y

        coin = self.level.find_collider(x, y, COIN)
        if coin is not None:
            self.level.set_cell(*coin, AIR)
            self.increment_score()

        if self.level.is_colliding(x, y, EXIT):
            if self.timer > 0:
                self.timer -= 25
                self.time_to_coin_counter += 5
                if self.time_to_coin_counter // 60 > 1:
                    self.increment_score()
                    self.time_to_coin_counter = 0
            else:
                self.load_level(1)
                self._play(Sound.EXIT)
        elif self.timer >= 0:
            self.timer -= 1

        if self.level.is_colliding(x, y, SPIKE) or y > self.level.rows:
            self.kill_player()

        if self.enemies.is_colliding(x, y):
            if self.player.y_velocity > 0:
                self.enemies.remove_colliding(x, y)
                self._play(Sound.KILL_ENEMY)
                self.increment_score()
                self.player.y_velocity = -BOUNCE_OFF_ENEMY
            else:
                self.kill_player()

    def update(self, controls: Controls) -> None:
        """Advance the game by one frame."""
        self.game_frame += 1

        if self.state is State.MENU:
            if controls.enter:
                self.state = State.GAME
                self.load_level(0)

        elif self.state is State.GAME:
            if controls.right:
                self.player.move_horizontally(self.level, PLAYER_MOVEMENT_SPEED)
            if controls.left:
                self.player.move_horizontally(self.level, -PLAYER_MOVEMENT_SPEED)

            self.update_player()

            if controls.jump:
                self.player.jump()

            self.enemies.update(self.level)

            if self.level.find_collider(self.player.x, self.player.y, EXIT) is not None:
                self._play(Sound.EXIT)
                self.load_level(1)
                return

            if controls.escape:
                self.state = State.PAUSED

        elif self.state is State.PAUSED:
            if controls.escape:
                self.state = State.GAME

        elif self.state is State.DEATH:
            self.player.update_gravity(self.level)
            if controls.enter:
                if self.player_lives > 0:
                    self.load_level(0)
                    self.state = State.GAME
                else:
                    self.state = State.GAME_OVER
                    self._play(Sound.GAME_OVER)

        elif self.state is State.GAME_OVER:
            if controls.enter:
                self.reset_level_index()
                self.reset_stats()
                self.state = State.GAME
                self.load_level(0)

        elif self.state is State.VICTORY:
            if controls.enter or controls.escape:
                self.reset_level_index()
                self.reset_stats()
                self.state = State.MENU