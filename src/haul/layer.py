from __future__ import annotations

from typing import Iterable, Iterator, List, Protocol

from esper import World

from haul.components.coin import Coin
from haul.components.cursor import CursorIndicator
from haul.geometry import Point, Rect


class Surface(Protocol):
    """Draw target handed to Layer.draw (see haul.rendering.board_renderer)."""

    def draw_coin(self, rect: Rect, coin: Coin) -> None: ...

    def draw_cursor(self, cursor: CursorIndicator) -> None: ...


class Layer:
    """Ordered collection of placed entities, queried by point containment.

    The board is not an index: "which coin occupies this cell" is answered by
    hit-testing the live Rects, so a coin belongs to whatever cell its animated
    position covers at query time.
    """

    def __init__(self, world: World, name: str = "layer"):
        self.world = world
        self.name = name
        self._entities: List[int] = []

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._entities))

    def add(self, entity: int) -> None:
        if entity in self._entities:
            return
        self._entities.append(entity)

    def remove(self, entity: int) -> bool:
        """Remove ``entity`` and delete it from the world.

        Removing an entity that is already gone is a no-op: clear passes work
        from snapshots taken before the board was mutated.
        """
        try:
            self._entities.remove(entity)
        except ValueError:
            return False
        if self.world.entity_exists(entity):
            self.world.delete_entity(entity, immediate=True)
        return True

    def remove_all(self, entities: Iterable[int]) -> int:
        return sum(1 for entity in list(entities) if self.remove(entity))

    def hit(self, point: Point) -> int | None:
        for entity in self._entities:
            if not self.world.entity_exists(entity):
                continue
            rect = self.world.try_component(entity, Rect)
            if rect is not None and rect.contains_point(point):
                return entity
        return None

    def draw(self, surface: Surface) -> None:
        for entity in self._entities:
            if not self.world.entity_exists(entity):
                continue
            coin = self.world.try_component(entity, Coin)
            if coin is not None:
                surface.draw_coin(self.world.component_for_entity(entity, Rect), coin)
                continue
            cursor = self.world.try_component(entity, CursorIndicator)
            if cursor is not None:
                surface.draw_cursor(cursor)
