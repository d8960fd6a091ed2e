"""The player ship and the camera that follows it."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

MOVE_SPEED = 400.0
LERP_FACTOR = 2.0
CAMERA_SCALE = 5.0


class Direction(Enum):
    """Arrow-key directions with their unit vectors."""

    LEFT = (-1.0, 0.0)
    RIGHT = (1.0, 0.0)
    DOWN = (0.0, -1.0)
    UP = (0.0, 1.0)


def movement_vector(pressed: Iterable[Direction]) -> tuple[float, float]:
    """Sum the vectors of the pressed directions."""
    held = set(pressed)
    return (
        sum(direction.value[0] for direction in held),
        sum(direction.value[1] for direction in held),
    )


@dataclass
class Player:
    """Position and heading of the player ship."""

    x: float = 0.0
    y: float = 0.0
    z: float = 1.0
    rotation: float = 0.0
    speed: float = MOVE_SPEED

    def move(self, pressed: Iterable[Direction], dt: float) -> None:
        """Move along the held directions for ``dt`` seconds and face that way."""
        dx, dy = movement_vector(pressed)
        if dx == 0.0 and dy == 0.0:
            return
        length = math.hypot(dx, dy)
        step = dt * self.speed
        self.x += dx / length * step
        self.y += dy / length * step
        self.rotation = -math.atan2(dx, dy)


@dataclass
class Camera:
    """A 2D camera that eases toward the player."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    scale: float = CAMERA_SCALE

    def follow(self, player: Player, dt: float) -> None:
        """Move part of the way toward the player, keeping the camera's depth."""
        t = dt * LERP_FACTOR
        self.x += (player.x - self.x) * t
        self.y += (player.y - self.y) * t