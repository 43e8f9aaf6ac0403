from __future__ import annotations

import math
from typing import TYPE_CHECKING

from haul.constants import CURSOR_OFFSET

if TYPE_CHECKING:
    from haul.components.coin import Coin
    from haul.components.coin_types import CoinPalette
    from haul.components.cursor import CursorIndicator
    from haul.config import BoardConfig
    from haul.geometry import Rect

CURSOR_COLOR = (255, 255, 255)
COIN_OUTLINE_COLOR = (30, 30, 30)


class BoardRenderer:
    """Surface for Layer.draw, converting y-down board space to arcade's y-up window.

    Coins are discs squashed horizontally by their spin frame, so a spinning
    coin reads as flipping in place.
    """

    def __init__(self, config: BoardConfig, palette: CoinPalette, window_height: float, *,
                 padding: float = 3.0, cursor_offset: float = CURSOR_OFFSET):
        self.config = config
        self.palette = palette
        self.window_height = window_height
        self.padding = padding
        self.cursor_offset = cursor_offset

    def _flip(self, y: float) -> float:
        return self.window_height - y

    def coin_color(self, coin: Coin):
        return self.palette.color_for(coin.coin_type.name)

    def draw_coin(self, rect: Rect, coin: Coin) -> None:
        # Local import keeps tests headless without creating a window.
        import arcade
        frame_count = max(1, coin.coin_type.frame_count)
        squash = abs(math.cos(math.pi * coin.frame / frame_count))
        height = rect.height - 2 * self.padding
        width = max(2.0, (rect.width - 2 * self.padding) * squash)
        center = rect.center()
        cy = self._flip(center.y)
        arcade.draw_ellipse_filled(center.x, cy, width, height, self.coin_color(coin))
        arcade.draw_ellipse_outline(center.x, cy, width, height, COIN_OUTLINE_COLOR, 1)

    def draw_cursor(self, cursor: CursorIndicator) -> None:
        import arcade
        size = self.config.cell_size
        left = cursor.pos.x
        top = self._flip(cursor.pos.y)
        # pos sits cursor_offset outside the pair on every side.
        width = size + 2 * self.cursor_offset
        height = 2 * size + 2 * self.cursor_offset
        arcade.draw_lrbt_rectangle_outline(left, left + width, top - height, top, CURSOR_COLOR, 2)
