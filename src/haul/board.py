from __future__ import annotations

from typing import Iterable, List, Optional

from esper import World

from haul.components.coin import Coin
from haul.components.coin_types import CoinPalette, CoinType
from haul.config import BoardConfig
from haul.geometry import Point, Rect
from haul.layer import Layer
from haul.systems.board_ops import get_board_config, get_coin_palette


class Board:
    """Cell-addressed view over the game layer.

    Cell contents are looked up by hit-testing the cell centre, so queries
    made while coins are still moving see the transient layout.
    """

    def __init__(self, world: World, layer: Optional[Layer] = None):
        self.world = world
        self.layer = layer or Layer(world, name="game")
        self.config: BoardConfig = get_board_config(world)

    @property
    def palette(self) -> CoinPalette:
        return get_coin_palette(self.world)

    def coin_at(self, col: int, row: int) -> int | None:
        return self.layer.hit(self.config.cell_center(col, row))

    def coin(self, entity: int) -> Coin:
        return self.world.component_for_entity(entity, Coin)

    def rect(self, entity: int) -> Rect:
        return self.world.component_for_entity(entity, Rect)

    def coin_type_at(self, col: int, row: int) -> CoinType | None:
        entity = self.coin_at(col, row)
        if entity is None:
            return None
        return self.coin(entity).coin_type

    def cell_of(self, entity: int):
        """Cell covering the entity's centre, or None when it sits off the board."""
        return self.config.cell_at(self.rect(entity).center())

    def spawn_coin(self, coin_type: CoinType, position: Point) -> int:
        size = self.config.cell_size
        entity = self.world.create_entity(Rect(position.x, position.y, size, size), Coin(coin_type))
        self.layer.add(entity)
        return entity

    def place_coin(self, coin_type: CoinType, col: int, row: int) -> int:
        return self.spawn_coin(coin_type, self.config.cell_origin(col, row))

    def remove_coins(self, entities: Iterable[int]) -> int:
        return self.layer.remove_all(entities)

    def type_names(self) -> List[List[Optional[str]]]:
        """Snapshot of type names, one list per row; None marks an empty cell."""
        grid: List[List[Optional[str]]] = []
        for row in range(self.config.rows):
            names: List[Optional[str]] = []
            for col in range(self.config.cols):
                coin_type = self.coin_type_at(col, row)
                names.append(coin_type.name if coin_type else None)
            grid.append(names)
        return grid
