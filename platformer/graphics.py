"""Screen metrics, the victory animation and drawing of every game screen."""

from __future__ import annotations

import math
import random
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import pygame

from .assets import Assets
from .config import (
    BLACK,
    COIN,
    DEATH_SUBTITLE,
    DEATH_TITLE,
    EXIT,
    FRAMES_PER_SECOND,
    GAME_OVER_SUBTITLE,
    GAME_OVER_TITLE,
    GAME_PAUSED,
    GAME_SUBTITLE,
    GAME_TITLE,
    SPIKE,
    VICTORY_SUBTITLE,
    VICTORY_TITLE,
    WALL,
    WALL_DARK,
    WHITE,
    YELLOW,
    Color,
    State,
    Text,
)
from .game import Game

SCREEN_SCALE_DIVISOR = 700.0

VICTORY_BALL_COUNT = 50
VICTORY_BALL_MAX_SPEED = 4.0
VICTORY_BALL_MIN_RADIUS = 5.0
VICTORY_BALL_MAX_RADIUS = 20.0
VICTORY_BALL_TRAIL_TRANSPARENCY = 100
VICTORY_BALL_COLOR = YELLOW

DEATH_SHADE = 100
MAX_HEARTS_DISPLAYED = 5

_TILE_IMAGES = {WALL: "wall", WALL_DARK: "wall_dark", SPIKE: "spike", EXIT: "exit"}


@dataclass(frozen=True)
class Metrics:
    """Sizes derived from the screen and the current level's height."""

    screen_width: float
    screen_height: float
    cell_size: float
    scale: float
    background_width: float
    background_height: float
    background_y_offset: float

    @property
    def horizontal_shift(self) -> float:
        """Screen x of the column the player stands in."""
        return (self.screen_width - self.cell_size) / 2


def derive_metrics(screen_width: float, screen_height: float, rows: int) -> Metrics:
    """Cell size fits all rows on screen; the background keeps a 16:10 shape."""
    if rows <= 0:
        raise ValueError("a level needs at least one row")
    cell_size = screen_height / rows
    scale = min(screen_width, screen_height) / SCREEN_SCALE_DIVISOR
    max_dim = max(screen_width, screen_height)
    if screen_width > screen_height:
        bg_width, bg_height = max_dim, max_dim / 16 * 10
    else:
        bg_width, bg_height = max_dim / 10 * 16, max_dim
    return Metrics(
        screen_width=screen_width,
        screen_height=screen_height,
        cell_size=cell_size,
        scale=scale,
        background_width=bg_width,
        background_height=bg_height,
        background_y_offset=(screen_height - bg_height) * 0.5,
    )


def rand_from_to(low: float, high: float, rng: Any = None) -> float:
    """A uniform value between `low` and `high`."""
    source = rng if rng is not None else random
    return low + source.random() * (high - low)


@dataclass
class VictoryBall:
    """A bouncing ball of the victory screen."""

    x: float
    y: float
    dx: float
    dy: float
    radius: float


def create_victory_balls(
    metrics: Metrics, rng: Any = None, count: int = VICTORY_BALL_COUNT
) -> list[VictoryBall]:
    """Balls at random places with random speeds and sizes scaled to the screen."""
    return [
        VictoryBall(
            x=rand_from_to(0.0, metrics.screen_width, rng),
            y=rand_from_to(0.0, metrics.screen_height, rng),
            dx=rand_from_to(-VICTORY_BALL_MAX_SPEED, VICTORY_BALL_MAX_SPEED, rng) * metrics.scale,
            dy=rand_from_to(-VICTORY_BALL_MAX_SPEED, VICTORY_BALL_MAX_SPEED, rng) * metrics.scale,
            radius=rand_from_to(VICTORY_BALL_MIN_RADIUS, VICTORY_BALL_MAX_RADIUS, rng)
            * metrics.scale,
        )
        for _ in range(count)
    ]


def animate_victory_balls(balls: Iterable[VictoryBall], metrics: Metrics) -> None:
    """Move each ball one step, reversing it at the screen edges."""
    for ball in balls:
        ball.x += ball.dx
        if ball.x - ball.radius < 0 or ball.x + ball.radius >= metrics.screen_width:
            ball.dx = -ball.dx
        ball.y += ball.dy
        if ball.y - ball.radius < 0 or ball.y + ball.radius >= metrics.screen_height:
            ball.dy = -ball.dy


def parallax_offset(player_x: float, game_frame: int, background_width: float) -> float:
    """How far the background has scrolled, wrapped to its width."""
    return math.fmod(player_x * 0.2 + game_frame * 0.01, background_width)


def _render_text(font: pygame.font.Font, text: str, color: Color, spacing: float) -> pygame.Surface:
    glyphs = [font.render(char, True, color) for char in text]
    width = sum(glyph.get_width() for glyph in glyphs) + spacing * max(0, len(glyphs) - 1)
    surface = pygame.Surface((max(1, math.ceil(width)), font.get_height()), pygame.SRCALPHA)
    x = 0.0
    for glyph in glyphs:
        surface.blit(glyph, (round(x), 0))
        x += glyph.get_width() + spacing
    return surface


class Renderer:
    """Draws the game's current screen onto a surface."""

    def __init__(self, surface: pygame.Surface, assets: Assets) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self.surface = surface
        self.assets = assets
        width, height = surface.get_size()
        self.metrics = derive_metrics(width, height, 1)
        self.victory_balls: list[VictoryBall] = []
        self._last_state: State | None = None
        self._scaled: dict[tuple[pygame.Surface, tuple[int, int]], pygame.Surface] = {}

    def update_metrics(self, game: Game) -> None:
        width, height = self.surface.get_size()
        self.metrics = derive_metrics(width, height, game.level.rows)

    def start_victory(self, rng: Any = None) -> None:
        """Scatter fresh victory balls and clear the screen for their trails."""
        self.victory_balls = create_victory_balls(self.metrics, rng)
        self.surface.fill(BLACK)

    def draw(self, game: Game) -> None:
        """Draw the screen that matches the game's state."""
        self.update_metrics(game)
        if game.state is State.VICTORY and self._last_state is not State.VICTORY:
            self.start_victory()
        self._last_state = game.state

        if game.state is State.MENU:
            self.surface.fill(BLACK)
            self.draw_text(GAME_TITLE)
            self.draw_text(GAME_SUBTITLE)
        elif game.state is State.GAME:
            self.surface.fill(BLACK)
            self._draw_parallax(game)
            self.draw_level(game)
            self.draw_overlay(game)
        elif game.state is State.DEATH:
            self._draw_victory_balls()
            self.draw_level(game)
            self.draw_overlay(game)
            self._shade(DEATH_SHADE)
            self.draw_text(DEATH_TITLE)
            self.draw_text(DEATH_SUBTITLE)
        elif game.state is State.GAME_OVER:
            self.surface.fill(BLACK)
            self.draw_text(GAME_OVER_TITLE)
            self.draw_text(GAME_OVER_SUBTITLE)
        elif game.state is State.PAUSED:
            self.surface.fill(BLACK)
            self.draw_text(GAME_PAUSED)
        elif game.state is State.VICTORY:
            self._shade(VICTORY_BALL_TRAIL_TRANSPARENCY)
            animate_victory_balls(self.victory_balls, self.metrics)
            self._draw_victory_balls()
            self.draw_text(VICTORY_TITLE)
            self.draw_text(VICTORY_SUBTITLE)

    def draw_text(self, text: Text) -> pygame.Rect:
        """Draw a screen text centred on its position; return the area covered."""
        font = self.assets.font(text.size * self.metrics.scale)
        rendered = _render_text(font, text.text, text.color, text.spacing)
        width, height = self.surface.get_size()
        x, y = text.anchor(width, height, rendered.get_width(), rendered.get_height())
        return self.surface.blit(rendered, (round(x), round(y)))

    def draw_level(self, game: Game) -> None:
        """Draw the tiles around the player, then the player and the enemies."""
        cell = self.metrics.cell_size
        shift = self.metrics.horizontal_shift
        player_x = game.player.x

        for row, line in enumerate(game.level.to_rows()):
            for column, tile in enumerate(line):
                pos = ((column - player_x) * cell + shift, row * cell)
                if tile == COIN:
                    self._draw_sprite("coin", pos, cell, cell, game.game_frame)
                elif tile in _TILE_IMAGES:
                    self._draw_image(_TILE_IMAGES[tile], pos, cell, cell)

        self._draw_player(game)
        for enemy in game.enemies:
            pos = ((enemy.x - player_x) * cell + shift, enemy.y * cell)
            self._draw_sprite("enemy_walk", pos, cell, cell, game.game_frame)

    def draw_overlay(self, game: Game) -> None:
        """Draw lives, the remaining time and the score."""
        scale = self.metrics.scale
        icon = 48.0 * scale
        offset_y = 8.0 * scale
        padding = 4.0 * scale
        small_font = self.assets.font(icon * 0.5)
        screen_width = self.surface.get_width()

        hearts = min(game.player_lives, MAX_HEARTS_DISPLAYED)
        for index in range(hearts):
            self._draw_image("heart", (padding + index * (icon + padding), offset_y), icon, icon)

        if game.player_lives > MAX_HEARTS_DISPLAYED:
            label = _render_text(small_font, f"x{game.player_lives}", WHITE, 1.0)
            pos = (padding + hearts * (icon + padding), offset_y + icon * 0.25)
            self.surface.blit(label, (round(pos[0]), round(pos[1])))

        timer = _render_text(small_font, str(int(game.timer / FRAMES_PER_SECOND)), WHITE, 1.0)
        self.surface.blit(timer, (round(screen_width - timer.get_width() - padding), round(offset_y)))

        score = _render_text(small_font, str(game.total_score()), WHITE, 1.0)
        score_x = screen_width - score.get_width() - icon - padding * 2
        score_y = offset_y + icon * 0.7
        self.surface.blit(score, (round(score_x), round(score_y)))
        self._draw_sprite("coin", (score_x - icon - padding, score_y), icon, icon, game.game_frame)

    def _draw_player(self, game: Game) -> None:
        player = game.player
        cell = self.metrics.cell_size
        pos = (self.metrics.horizontal_shift, player.y * cell)
        facing = "forward" if player.looking_forward else "backwards"

        if game.state is State.GAME:
            if not player.on_ground:
                self._draw_image(f"player_jump_{facing}", pos, cell, cell)
            elif player.moving:
                self._draw_sprite(f"player_walk_{facing}", pos, cell, cell, game.game_frame)
                player.moving = False
            else:
                self._draw_image(f"player_stand_{facing}", pos, cell, cell)
        else:
            self._draw_image("player_dead", pos, cell, cell)

    def _draw_parallax(self, game: Game) -> None:
        m = self.metrics
        offset = parallax_offset(game.player.x, game.game_frame, m.background_width)
        for x in (-offset, m.background_width - offset):
            self._draw_image(
                "background", (x, m.background_y_offset), m.background_width, m.background_height
            )

    def _draw_victory_balls(self) -> None:
        for ball in self.victory_balls:
            pygame.draw.circle(self.surface, VICTORY_BALL_COLOR, (ball.x, ball.y), ball.radius)

    def _shade(self, alpha: int) -> None:
        veil = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        veil.fill((0, 0, 0, alpha))
        self.surface.blit(veil, (0, 0))

    def _draw_image(self, name: str, pos: tuple[float, float], width: float, height: float) -> None:
        image = self.assets.images.get(name)
        if image is not None:
            self._blit_scaled(image, pos, width, height)

    def _draw_sprite(
        self, name: str, pos: tuple[float, float], width: float, height: float, game_frame: int
    ) -> None:
        sprite = self.assets.sprites.get(name)
        if sprite is None:
            return
        self._blit_scaled(sprite.current_frame(), pos, width, height)
        sprite.advance(game_frame)

    def _blit_scaled(
        self, image: pygame.Surface, pos: tuple[float, float], width: float, height: float
    ) -> None:
        size = (max(1, round(width)), max(1, round(height)))
        key = (image, size)
        scaled = self._scaled.get(key)
        if scaled is None:
            scaled = pygame.transform.scale(image, size)
            self._scaled[key] = scaled
        self.surface.blit(scaled, (round(pos[0]), round(pos[1])))