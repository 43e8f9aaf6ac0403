from __future__ import annotations

from haul.components.coin import Coin
from haul.constants import SPIN_FRAME_DURATION
from haul.geometry import Point, Rect


class MoveAnimation:
    """Moves a Rect to ``destination`` at constant velocity over ``duration`` seconds."""

    def __init__(self, rect: Rect, destination: Point, duration: float):
        self.rect = rect
        self.destination = Point(destination.x, destination.y)
        self.duration = duration
        if duration > 0:
            self.velocity = rect.top_left().vector_to(self.destination, duration)
        else:
            self.velocity = Point(0.0, 0.0)

    def tick(self, dt: float) -> bool:
        self.rect.x += self.velocity.x * dt
        self.rect.y += self.velocity.y * dt
        self.duration -= dt
        if self.duration <= 0:
            # Snap so accumulated float error never leaves a coin off-grid.
            self.rect.move_to(self.destination)
            return False
        return True


class FrameAnimation:
    """Cycles a coin's spin frame for ``duration`` seconds.

    One frame step per ``frame_duration`` of accumulated time; a long tick
    catches up several steps. Liveness depends only on ``duration``.
    """

    def __init__(self, coin: Coin, duration: float, frame_duration: float = SPIN_FRAME_DURATION):
        if frame_duration <= 0:
            raise ValueError("frame_duration must be positive")
        self.coin = coin
        self.duration = duration
        self.frame_duration = frame_duration
        self._accumulated = 0.0

    def tick(self, dt: float) -> bool:
        frame_count = max(1, self.coin.coin_type.frame_count)
        self._accumulated += dt
        while self._accumulated > self.frame_duration:
            self._accumulated -= self.frame_duration
            self.coin.frame = (self.coin.frame + 1) % frame_count
        self.duration -= dt
        if self.duration <= 0:
            self.coin.frame = 0
            return False
        return True
