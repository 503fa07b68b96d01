"""The game window: input, the frame loop and start-up."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Collection, Sequence
from pathlib import Path

import pygame

from .assets import load_assets
from .config import FRAMES_PER_SECOND
from .game import Controls, Game
from .graphics import Renderer
from .level import LevelError, load_levels

WINDOW_TITLE = "Platformer"

_RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
_LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
_JUMP_KEYS = (pygame.K_UP, pygame.K_w, pygame.K_SPACE)
_HELD_KEYS = _RIGHT_KEYS + _LEFT_KEYS


def controls_from_keys(pressed: Collection[int], held: Collection[int]) -> Controls:
    """Controls for a frame from the keys pressed in it and the keys held down."""
    return Controls(
        enter=pygame.K_RETURN in pressed,
        escape=pygame.K_ESCAPE in pressed,
        left=any(key in held for key in _LEFT_KEYS),
        right=any(key in held for key in _RIGHT_KEYS),
        jump=any(key in pressed for key in _JUMP_KEYS),
    )


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="platformer", description="A side-scrolling platformer.")
    parser.add_argument("--data", default="data", help="directory holding levels, images and sounds")
    parser.add_argument("--width", type=int, default=1024, help="window width in pixels")
    parser.add_argument("--height", type=int, default=480, help="window height in pixels")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game until the window is closed."""
    args = _parse_args(argv)
    data = Path(args.data)

    try:
        levels = load_levels(data / "levels.rll")
        assets = load_assets(data)
    except (LevelError, FileNotFoundError) as error:
        print(f"platformer: {error}", file=sys.stderr)
        pygame.quit()
        return 1

    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption(WINDOW_TITLE)
        pygame.mouse.set_visible(False)

        game = Game(levels, on_sound=assets.play)
        renderer = Renderer(screen, assets)
        clock = pygame.time.Clock()

        running = True
        while running:
            pressed: set[int] = set()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    pressed.add(event.key)
            if not running or (pygame.K_ESCAPE in pressed and game.escape_quits):
                break

            state = pygame.key.get_pressed()
            held = {key for key in _HELD_KEYS if state[key]}
            game.update(controls_from_keys(pressed, held))
            renderer.draw(game)
            pygame.display.flip()
            clock.tick(FRAMES_PER_SECOND)
    finally:
        pygame.quit()
    return 0