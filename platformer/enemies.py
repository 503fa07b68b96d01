"""Patrolling enemies that walk until they reach a wall."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .config import AIR, ENEMY, ENEMY_MOVEMENT_SPEED, WALL
from .level import Level, rects_overlap


@dataclass
class Enemy:
    """An enemy's position in cell units and its walking direction."""

    x: float
    y: float
    looking_right: bool = True


class Enemies:
    """All enemies of the current level."""

    def __init__(self) -> None:
        self._enemies: list[Enemy] = []

    def spawn(self, level: Level) -> None:
        """Replace the enemies with those marked in the level, clearing their tiles."""
        self._enemies.clear()
        for row, column in list(level.positions_of(ENEMY)):
            self._enemies.append(Enemy(float(column), float(row), True))
            level.set_cell(row, column, AIR)

    def update(self, level: Level) -> None:
        """Step every enemy, turning it round when the next step hits a wall."""
        for enemy in self._enemies:
            step = ENEMY_MOVEMENT_SPEED if enemy.looking_right else -ENEMY_MOVEMENT_SPEED
            next_x = enemy.x + step
            if level.is_colliding(next_x, enemy.y, WALL):
                enemy.looking_right = not enemy.looking_right
            else:
                enemy.x = next_x

    def is_colliding(self, x: float, y: float) -> bool:
        return any(rects_overlap(x, y, enemy.x, enemy.y) for enemy in self._enemies)

    def remove_colliding(self, x: float, y: float) -> None:
        self._enemies = [
            enemy for enemy in self._enemies if not rects_overlap(x, y, enemy.x, enemy.y)
        ]

    def __iter__(self) -> Iterator[Enemy]:
        return iter(self._enemies)

    def __len__(self) -> int:
        return len(self._enemies)