from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Point:
    x: float
    y: float

    def vector_to(self, destination: Point, duration: float = 1.0) -> Point:
        """Velocity that carries this point onto ``destination`` in ``duration`` time units."""
        return Point(
            (destination.x - self.x) / duration,
            (destination.y - self.y) / duration,
        )


@dataclass(slots=True)
class Rect:
    """Axis-aligned rectangle in board space (y grows downward).

    Rect doubles as the component giving an entity a physical footprint; move
    animations mutate it in place.
    """

    x: float
    y: float
    width: float
    height: float

    def contains_point(self, point: Point) -> bool:
        return (self.x <= point.x < self.x + self.width
                and self.y <= point.y < self.y + self.height)

    def top_left(self) -> Point:
        return Point(self.x, self.y)

    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def move_to(self, point: Point) -> None:
        self.x = point.x
        self.y = point.y
