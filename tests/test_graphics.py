import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import random

import pygame
import pytest

from platformer.assets import Assets
from platformer.config import State, Text
from platformer.game import Game
from platformer.graphics import (
    VictoryBall,
    Renderer,
    animate_victory_balls,
    create_victory_balls,
    derive_metrics,
    parallax_offset,
    rand_from_to,
)
from platformer.level import Level

WALL_COLOUR = (200, 0, 0)
JUMP_COLOUR = (0, 200, 0)
HEART_COLOUR = (0, 0, 200)


def _surface(colour):
    surface = pygame.Surface((8, 8))
    surface.fill(colour)
    return surface


def _assets():
    return Assets(
        images={
            "wall": _surface(WALL_COLOUR),
            "player_jump_forward": _surface(JUMP_COLOUR),
            "heart": _surface(HEART_COLOUR),
        },
        sprites={},
    )


def _game():
    return Game([Level(["#####", "#-@-#", "#####"])])


def _colour(surface, x, y):
    return tuple(surface.get_at((int(x), int(y))))[:3]


@pytest.mark.parametrize("size", [(1024, 480), (480, 1024), (600, 600)])
def test_metrics_invariants(size):
    width, height = size
    m = derive_metrics(width, height, 12)
    assert m.cell_size * 12 == pytest.approx(height)
    assert m.background_width / m.background_height == pytest.approx(1.6)
    assert m.background_y_offset * 2 + m.background_height == pytest.approx(height)
    assert m.background_width >= width
    assert m.background_height >= height
    assert m.scale == pytest.approx(min(width, height) / 700.0)


def test_metrics_need_rows():
    with pytest.raises(ValueError):
        derive_metrics(100, 100, 0)


class _Fixed:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def test_rand_from_to_bounds():
    assert rand_from_to(-3.0, 7.0, _Fixed(0.0)) == -3.0
    assert rand_from_to(-3.0, 7.0, _Fixed(1.0)) == 7.0
    rng = random.Random(5)
    assert all(-3.0 <= rand_from_to(-3.0, 7.0, rng) <= 7.0 for _ in range(100))


def test_victory_balls_within_limits():
    m = derive_metrics(1024, 480, 12)
    balls = create_victory_balls(m, random.Random(1), 50)
    assert len(balls) == 50
    for ball in balls:
        assert 0 <= ball.x <= 1024 and 0 <= ball.y <= 480
        assert abs(ball.dx) <= 4.0 * m.scale and abs(ball.dy) <= 4.0 * m.scale
        assert 5.0 * m.scale <= ball.radius <= 20.0 * m.scale


def test_ball_bounces_off_left_edge():
    m = derive_metrics(200, 200, 10)
    ball = VictoryBall(x=5.0, y=100.0, dx=-1.0, dy=0.5, radius=10.0)
    animate_victory_balls([ball], m)
    assert ball.x == 4.0
    assert ball.dx == 1.0
    assert ball.dy == 0.5


def test_parallax_offset_wraps():
    assert parallax_offset(0.0, 100, 1000.0) == pytest.approx(1.0)
    rng = random.Random(3)
    for _ in range(50):
        offset = parallax_offset(rng.uniform(0, 5000), rng.randrange(100000), 640.0)
        assert 0.0 <= offset < 640.0


def test_parallax_zero_width():
    with pytest.raises(ValueError):
        parallax_offset(1.0, 1, 0.0)


def test_update_metrics_follows_level():
    game = _game()
    renderer = Renderer(pygame.Surface((200, 60)), _assets())
    renderer.update_metrics(game)
    assert renderer.metrics == derive_metrics(200, 60, 3)


def test_draw_level_places_tiles_around_player():
    game = _game()
    game.state = State.GAME
    surface = pygame.Surface((200, 60))
    renderer = Renderer(surface, _assets())
    renderer.update_metrics(game)
    renderer.draw_level(game)

    cell = renderer.metrics.cell_size
    shift = renderer.metrics.horizontal_shift
    half = cell / 2
    assert _colour(surface, shift + half, 2 * cell + half) == WALL_COLOUR
    assert _colour(surface, shift + half, cell + half) == JUMP_COLOUR
    assert _colour(surface, (0 - game.player.x) * cell + shift + half, half) == WALL_COLOUR


def test_drawing_walking_player_clears_moving_flag():
    game = _game()
    game.state = State.GAME
    game.player.on_ground = True
    game.player.moving = True
    renderer = Renderer(pygame.Surface((200, 60)), _assets())
    renderer.update_metrics(game)
    renderer.draw_level(game)
    assert game.player.moving is False


def test_overlay_draws_at_most_five_hearts():
    game = _game()
    game.player_lives = 7
    surface = pygame.Surface((700, 700))
    renderer = Renderer(surface, _assets())
    renderer.update_metrics(game)
    renderer.draw_overlay(game)
    assert _colour(surface, 10, 20) == HEART_COLOUR
    assert _colour(surface, 220, 20) == HEART_COLOUR
    assert _colour(surface, 300, 20) != HEART_COLOUR


def test_draw_text_is_centred():
    renderer = Renderer(pygame.Surface((400, 300)), _assets())
    rect = renderer.draw_text(Text("Hello", (0.5, 0.5), 60.0))
    assert rect.width > 0
    assert abs(rect.centerx - 200) <= 1
    assert abs(rect.centery - 150) <= 1


def test_entering_victory_scatters_balls():
    game = _game()
    game.state = State.VICTORY
    renderer = Renderer(pygame.Surface((400, 300)), _assets())
    renderer.draw(game)
    assert len(renderer.victory_balls) == 50
    assert all(-30 <= ball.x <= 430 for ball in renderer.victory_balls)


def test_menu_draws_title():
    game = _game()
    surface = pygame.Surface((400, 300))
    renderer = Renderer(surface, _assets())
    renderer.draw(game)
    lit = sum(
        1
        for x in range(0, 400, 2)
        for y in range(0, 300, 2)
        if tuple(surface.get_at((x, y)))[:3] != (0, 0, 0)
    )
    assert lit > 0