from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Sequence, Set, Tuple

from esper import World

from haul.components.board_registry import BoardRegistry
from haul.components.coin_types import CoinPalette, CoinType
from haul.config import BoardConfig

if TYPE_CHECKING:
    from haul.board import Board

Cell = Tuple[int, int]  # (col, row)


@dataclass(slots=True)
class GravityMove:
    entity: int
    source: Cell
    target: Cell
    cells: int


@dataclass(slots=True)
class GravityPlan:
    """Result of a gravity pass over a board with holes."""
    moves: List[GravityMove]
    # Holes left at the top of each column, which refills must cover.
    holes: Dict[int, int]

    @property
    def refill_count(self) -> int:
        return sum(self.holes.values())

    def refill_cells(self) -> List[Tuple[Cell, int]]:
        """Target cells for fresh coins, paired with the distance each falls."""
        cells: List[Tuple[Cell, int]] = []
        for col in sorted(self.holes):
            count = self.holes[col]
            for row in range(count):
                cells.append(((col, row), count))
        return cells


def get_board_registry(world: World) -> int:
    for entity, _ in world.get_component(BoardRegistry):
        return entity
    raise RuntimeError("Board registry not found; build the world with create_world()")


def get_coin_palette(world: World) -> CoinPalette:
    return world.component_for_entity(get_board_registry(world), CoinPalette)


def get_board_config(world: World) -> BoardConfig:
    return world.component_for_entity(get_board_registry(world), BoardConfig)


def find_clears(board: Board) -> Set[int]:
    """Return every coin that sits in a same-type run of at least ``min_run_length``.

    Scans cells row-major (y outer, x inner) and from each one follows the run
    rightward and downward. A run stops at the board edge, at an empty cell or
    at a different type. Coins in both a horizontal and a vertical run appear once.
    """
    config = board.config
    cleared: Set[int] = set()
    for y in range(config.rows):
        for x in range(config.cols):
            origin = board.coin_at(x, y)
            if origin is None:
                continue
            type_name = board.coin(origin).coin_type.name
            for dx, dy in ((1, 0), (0, 1)):
                run = [origin]
                cx, cy = x + dx, y + dy
                while cx < config.cols and cy < config.rows:
                    entity = board.coin_at(cx, cy)
                    if entity is None or board.coin(entity).coin_type.name != type_name:
                        break
                    run.append(entity)
                    cx += dx
                    cy += dy
                if len(run) >= config.min_run_length:
                    cleared.update(run)
    return cleared


def compute_gravity(board: Board) -> GravityPlan:
    """Plan how surviving coins fall into the holes below them.

    Each column is scanned bottom to top. Every coin moves down by the number
    of holes seen beneath it; the column's total hole count ends up at the top.
    """
    config = board.config
    moves: List[GravityMove] = []
    holes: Dict[int, int] = {}
    for col in range(config.cols):
        seen = 0
        for row in range(config.rows - 1, -1, -1):
            entity = board.coin_at(col, row)
            if entity is None:
                seen += 1
                continue
            if seen:
                moves.append(GravityMove(entity=entity, source=(col, row), target=(col, row + seen), cells=seen))
        if seen:
            holes[col] = seen
    return GravityPlan(moves=moves, holes=holes)


def generate_layout(
    palette: CoinPalette,
    rows: int,
    cols: int,
    rng: random.Random,
    *,
    avoid_matches: bool = True,
) -> List[List[CoinType]]:
    """Pick a coin type for every cell, row by row.

    With ``avoid_matches`` a type is excluded when the two cells to its left or
    the two above already share it, so the layout starts without runs of three.
    """
    choices = palette.active_types()
    if not choices:
        raise ValueError("Palette has no active coin types")
    layout: List[List[CoinType]] = []
    for row in range(rows):
        row_values: List[CoinType] = []
        for col in range(cols):
            available: Sequence[CoinType] = choices
            if avoid_matches:
                excluded: Set[str] = set()
                if col >= 2 and row_values[col - 1].name == row_values[col - 2].name:
                    excluded.add(row_values[col - 1].name)
                if row >= 2 and layout[row - 1][col].name == layout[row - 2][col].name:
                    excluded.add(layout[row - 1][col].name)
                available = [ct for ct in choices if ct.name not in excluded] or choices
            row_values.append(rng.choice(available))
        layout.append(row_values)
    return layout
