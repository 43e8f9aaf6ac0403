from dataclasses import dataclass

from haul.geometry import Point

@dataclass(slots=True)
class CursorIndicator:
    """Selection outline around a vertical pair of cells.

    ``pos`` is the outline's top-left corner in board space. Carries no Rect,
    so layers never return it from hit-testing.
    """
    pos: Point
    allow_click: bool = False
