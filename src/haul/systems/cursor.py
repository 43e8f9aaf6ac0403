from __future__ import annotations

import logging
import math
from typing import Tuple

from esper import World

from haul.board import Board
from haul.components.cursor import CursorIndicator
from haul.constants import CURSOR_OFFSET
from haul.events.bus import EVENT_BOARD_READY, EVENT_CASCADE_COMPLETE, EVENT_CURSOR_MOVED, EventBus
from haul.geometry import Point
from haul.layer import Layer
from haul.systems.match_resolution import MatchResolutionSystem
from haul.utils.invariants import expect

logger = logging.getLogger(__name__)


class CursorSystem:
    """Selects a vertical pair of cells and turns clicks into swaps.

    Clicks stay disabled until the board is ready, are disabled again for the
    whole cascade a swap starts, and come back on its completion.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        engine: MatchResolutionSystem,
        board: Board,
        overlay: Layer,
        *,
        offset: float = CURSOR_OFFSET,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.engine = engine
        self.board = board
        self.offset = offset
        config = board.config
        self.entity = world.create_entity(
            CursorIndicator(pos=Point(config.origin_x - offset, config.origin_y - offset))
        )
        overlay.add(self.entity)
        self.event_bus.subscribe(EVENT_BOARD_READY, self.on_resolution_finished)
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, self.on_resolution_finished)

    @property
    def cursor(self) -> CursorIndicator:
        return self.world.component_for_entity(self.entity, CursorIndicator)

    def selected_cell(self) -> Tuple[int, int]:
        """Upper cell of the selected pair as (col, row)."""
        config = self.board.config
        pos = self.cursor.pos
        col = round((pos.x + self.offset - config.origin_x) / config.cell_size)
        row = round((pos.y + self.offset - config.origin_y) / config.cell_size)
        return col, row

    def on_pointer_move(self, point: Point) -> bool:
        """Snap the indicator to the cell under ``point``; True if it moved."""
        config = self.board.config
        col = math.floor((point.x - config.origin_x) / config.cell_size)
        row = math.floor((point.y - config.origin_y) / config.cell_size)
        col = min(max(col, 0), config.cols - 1)
        # The lower cell of the pair must stay on the board.
        row = min(max(row, 0), config.rows - 2)
        new_x = col * config.cell_size + config.origin_x - self.offset
        new_y = row * config.cell_size + config.origin_y - self.offset
        cursor = self.cursor
        if new_x == cursor.pos.x and new_y == cursor.pos.y:
            return False
        cursor.pos.x = new_x
        cursor.pos.y = new_y
        self.event_bus.emit(EVENT_CURSOR_MOVED, col=col, row=row)
        return True

    def on_click(self, layer: Layer) -> bool:
        """Swap the selected pair. Ignored while clicks are disallowed."""
        cursor = self.cursor
        if not cursor.allow_click:
            return False
        config = self.board.config
        col, row = self.selected_cell()
        top = layer.hit(config.cell_center(col, row))
        bottom = layer.hit(config.cell_center(col, row + 1))
        if not expect(top is not None and bottom is not None,
                      "No coin under cursor pair at (%d, %d)", col, row):
            return False
        cursor.allow_click = False
        if not self.engine.swap(top, bottom):
            cursor.allow_click = self.engine.input_allowed
            return False
        return True

    def on_resolution_finished(self, sender, **kwargs):
        self.cursor.allow_click = True
