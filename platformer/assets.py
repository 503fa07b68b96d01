"""Loading of images, sprites, fonts and sounds, and frame-based sprite animation."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pygame

from .game import Sound

MAX_SPRITE_FRAMES = 100

_IMAGES = {
    "wall": "images/wall.png",
    "wall_dark": "images/wall_dark.png",
    "spike": "images/spikes.png",
    "exit": "images/exit.png",
    "heart": "images/heart.png",
    "player_stand_forward": "images/player_stand_forward.png",
    "player_stand_backwards": "images/player_stand_backwards.png",
    "player_jump_forward": "images/player_jump_forward.png",
    "player_jump_backwards": "images/player_jump_backwards.png",
    "player_dead": "images/player_dead.png",
    "background": "images/background/background.png",
    "middleground": "images/background/middleground.png",
    "foreground": "images/background/foreground.png",
}

# name: (file name prefix, frame count, frames to skip)
_SPRITES = {
    "coin": ("images/coin/coin", 3, 18),
    "player_walk_forward": ("images/player_walk_forward/player", 3, 15),
    "player_walk_backwards": ("images/player_walk_backwards/player", 3, 15),
    "enemy_walk": ("images/enemy_walk/enemy", 2, 15),
}

_SOUNDS = {
    Sound.COIN: "sounds/coin.wav",
    Sound.EXIT: "sounds/exit.wav",
    Sound.KILL_ENEMY: "sounds/kill_enemy.wav",
    Sound.PLAYER_DEATH: "sounds/player_death.wav",
    Sound.GAME_OVER: "sounds/game_over.wav",
}

_FONT = "fonts/ARCADE_N.ttf"


def frame_file_names(prefix: str, suffix: str, frame_count: int) -> list[str]:
    """File names of a sprite's frames; numbers get two digits from ten frames up."""
    if not 0 <= frame_count < MAX_SPRITE_FRAMES:
        raise ValueError(f"frame count must be below {MAX_SPRITE_FRAMES}, got {frame_count}")
    width = 1 if frame_count < 10 else 2
    return [f"{prefix}{index:0{width}d}{suffix}" for index in range(frame_count)]


class Sprite:
    """A looping or one-shot animation that steps once every few game frames."""

    def __init__(self, frames: Sequence[Any], loop: bool = True, frames_to_skip: int = 3) -> None:
        if not frames:
            raise ValueError("a sprite needs at least one frame")
        self.frames = tuple(frames)
        self.loop = loop
        self.frames_to_skip = frames_to_skip
        self.frame_index = 0
        self.frames_skipped = 0
        self.prev_game_frame = 0

    def current_frame(self) -> Any:
        return self.frames[self.frame_index]

    def advance(self, game_frame: int) -> None:
        """Move the animation on, at most once for any given game frame."""
        if self.prev_game_frame == game_frame:
            return
        if self.frames_skipped < self.frames_to_skip:
            self.frames_skipped += 1
        else:
            self.frames_skipped = 0
            self.frame_index += 1
            if self.frame_index >= len(self.frames):
                self.frame_index = 0 if self.loop else len(self.frames) - 1
        self.prev_game_frame = game_frame


def _require(path: str | os.PathLike[str]) -> str:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"missing asset file: {os.fspath(path)}")
    return os.fspath(path)


def _load_image(path: str | os.PathLike[str]) -> pygame.Surface:
    return pygame.image.load(_require(path))


def load_sprite(
    prefix: str,
    suffix: str,
    frame_count: int = 1,
    loop: bool = True,
    frames_to_skip: int = 3,
) -> Sprite:
    """Load a sprite whose frames are numbered files between `prefix` and `suffix`."""
    names = frame_file_names(prefix, suffix, frame_count)
    return Sprite([_load_image(name) for name in names], loop, frames_to_skip)


@dataclass
class Assets:
    """Everything the game draws and plays, looked up by name."""

    images: dict[str, pygame.Surface]
    sprites: dict[str, Sprite]
    sounds: dict[Sound, Any] = field(default_factory=dict)
    font_path: str | None = None
    _fonts: dict[int, pygame.font.Font] = field(default_factory=dict, init=False, repr=False)

    def play(self, sound: Sound) -> None:
        """Play a sound effect if it was loaded."""
        effect = self.sounds.get(sound)
        if effect is not None:
            effect.play()

    def font(self, size: float) -> pygame.font.Font:
        """The menu font at roughly the given pixel size."""
        key = max(1, round(size))
        if key not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[key] = pygame.font.Font(self.font_path, key)
        return self._fonts[key]


def _load_sounds(root: Path) -> dict[Sound, Any]:
    try:
        if not pygame.mixer.get_init():
            pygame.mixer.init()
    except pygame.error:
        return {}
    return {sound: pygame.mixer.Sound(_require(root / name)) for sound, name in _SOUNDS.items()}


def load_assets(root: str | os.PathLike[str]) -> Assets:
    """Load every image, sprite, font and sound from a data directory."""
    base = Path(root)
    images = {name: _load_image(base / path) for name, path in _IMAGES.items()}
    sprites = {
        name: load_sprite(str(base / prefix), ".png", count, True, skip)
        for name, (prefix, count, skip) in _SPRITES.items()
    }
    font_path = _require(base / _FONT)
    sounds = _load_sounds(base)
    return Assets(images=images, sprites=sprites, sounds=sounds, font_path=font_path)