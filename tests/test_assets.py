import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from platformer.assets import Assets, Sprite, frame_file_names, load_assets, load_sprite
from platformer.game import Sound


def test_frame_names_single_digit():
    assert frame_file_names("data/images/coin/coin", ".png", 3) == [
        "data/images/coin/coin0.png",
        "data/images/coin/coin1.png",
        "data/images/coin/coin2.png",
    ]


def test_frame_names_two_digits():
    names = frame_file_names("p", ".png", 12)
    assert len(names) == 12
    assert names[0] == "p00.png"
    assert names[9] == "p09.png"
    assert names[11] == "p11.png"


def test_frame_count_limit():
    with pytest.raises(ValueError):
        frame_file_names("p", ".png", 100)


def test_sprite_advances_once_per_game_frame():
    sprite = Sprite(["a", "b", "c"], loop=True, frames_to_skip=0)
    sprite.advance(1)
    assert sprite.current_frame() == "b"
    sprite.advance(1)
    assert sprite.current_frame() == "b"
    sprite.advance(2)
    assert sprite.current_frame() == "c"
    sprite.advance(3)
    assert sprite.current_frame() == "a"


def test_sprite_does_not_move_on_frame_zero():
    sprite = Sprite(["a", "b"], loop=True, frames_to_skip=0)
    sprite.advance(0)
    assert sprite.current_frame() == "a"


def test_sprite_skips_frames():
    sprite = Sprite(["a", "b"], loop=True, frames_to_skip=2)
    sprite.advance(1)
    sprite.advance(2)
    assert sprite.current_frame() == "a"
    sprite.advance(3)
    assert sprite.current_frame() == "b"


def test_sprite_without_loop_stays_on_last_frame():
    sprite = Sprite(["a", "b"], loop=False, frames_to_skip=0)
    for frame in range(1, 6):
        sprite.advance(frame)
    assert sprite.current_frame() == "b"


def test_sprite_needs_frames():
    with pytest.raises(ValueError):
        Sprite([])


def test_load_sprite_reads_numbered_files(tmp_path):
    colours = [(255, 0, 0), (0, 255, 0)]
    for index, colour in enumerate(colours):
        surface = pygame.Surface((4, 4))
        surface.fill(colour)
        pygame.image.save(surface, str(tmp_path / f"enemy{index}.bmp"))

    sprite = load_sprite(str(tmp_path / "enemy"), ".bmp", 2, True, 15)

    assert [tuple(frame.get_at((0, 0)))[:3] for frame in sprite.frames] == colours
    assert sprite.frames_to_skip == 15


def test_load_sprite_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sprite(str(tmp_path / "nothing"), ".bmp", 2)


def test_load_assets_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_assets(tmp_path / "data")


class _Recorder:
    def __init__(self):
        self.count = 0

    def play(self):
        self.count += 1


def test_play_only_loaded_sounds():
    recorder = _Recorder()
    assets = Assets(images={}, sprites={}, sounds={Sound.COIN: recorder})
    assets.play(Sound.COIN)
    assets.play(Sound.EXIT)
    assert recorder.count == 1


def test_fonts_are_cached_by_rounded_size():
    assets = Assets(images={}, sprites={})
    small = assets.font(20)
    assert assets.font(20.2) is small
    large = assets.font(30)
    assert large is not small
    assert small.get_height() < large.get_height()