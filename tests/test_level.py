from itertools import groupby

import pytest

from platformer.config import COIN, EXIT, WALL
from platformer.level import Level, LevelError, load_levels, parse_rle, rects_overlap

ROWS = [
    "#####",
    "#-*E#",
    "#@--#",
    "#####",
]


def _encode(rows):
    parts = []
    for row in rows:
        runs = []
        for char, run in groupby(row):
            count = len(list(run))
            runs.append(f"{count}{char}" if count > 1 else char)
        parts.append("".join(runs))
    return "|".join(parts) + ";"


def test_rle_round_trip():
    assert parse_rle(_encode(ROWS)).to_rows() == ROWS


def test_rle_without_counts_keeps_rows():
    data = "#-#|#@#"
    assert parse_rle(data).to_rows() == data.split("|")


def test_rle_count_repeats_tile():
    level = parse_rle("3#")
    assert level.to_rows() == ["#" * 3]
    assert (level.rows, level.columns) == (1, 3)


def test_rle_stops_at_semicolon():
    assert parse_rle("##|--;junk").to_rows() == ["##", "--"]


def test_rle_ragged_rows_rejected():
    with pytest.raises(LevelError):
        parse_rle("###|#")


def test_rle_empty_rejected():
    with pytest.raises(LevelError):
        parse_rle(";")


def test_copy_is_independent():
    level = Level(ROWS)
    duplicate = level.copy()
    duplicate.set_cell(1, 2, "-")
    assert level.cell(1, 2) == COIN
    assert duplicate.cell(1, 2) == "-"


def test_cell_outside_raises():
    level = Level(ROWS)
    with pytest.raises(IndexError):
        level.cell(-1, 0)
    with pytest.raises(IndexError):
        level.set_cell(0, 5, "#")


def test_is_inside_bounds():
    level = Level(ROWS)
    assert level.is_inside(0, 0)
    assert level.is_inside(3, 4)
    assert not level.is_inside(4, 0)
    assert not level.is_inside(0, -1)


def test_rects_overlap_is_strict():
    assert rects_overlap(0.0, 0.0, 0.5, 0.5)
    assert not rects_overlap(0.0, 0.0, 1.0, 0.0)
    assert rects_overlap(1.0, 1.0, 1.0, 1.0)


def test_colliding_with_wall_on_left():
    level = Level(ROWS)
    assert level.is_colliding(1.5, 2.0, WALL)
    assert not level.is_colliding(2.0, 2.0, WALL)


def test_find_collider_returns_cell():
    level = Level(ROWS)
    assert level.find_collider(2.0, 1.0, COIN) == (1, 2)
    assert level.find_collider(3.0, 1.0, EXIT) == (1, 3)
    assert level.find_collider(1.0, 2.0, COIN) is None


def test_positions_of_in_reading_order():
    level = Level(["#*", "*#"])
    assert list(level.positions_of(COIN)) == [(0, 1), (1, 0)]
    assert list(level.positions_of("E")) == []


def test_load_levels_skips_comments_and_blank_lines(tmp_path):
    path = tmp_path / "levels.rll"
    path.write_text("; comment\n\n" + _encode(ROWS) + "\n" + _encode(["##", "--"]) + "\n")
    levels = load_levels(path)
    assert [level.to_rows() for level in levels] == [ROWS, ["##", "--"]]


def test_load_levels_missing_file(tmp_path):
    with pytest.raises(LevelError):
        load_levels(tmp_path / "absent.rll")


def test_load_levels_without_levels(tmp_path):
    path = tmp_path / "levels.rll"
    path.write_text("; only a comment\n\n")
    with pytest.raises(LevelError):
        load_levels(path)