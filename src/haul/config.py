from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from haul.constants import (
    ACTIVE_COIN_TYPES,
    COIN_SIZE,
    FALL_DURATION_PER_CELL,
    GAME_AREA_X,
    GAME_AREA_Y,
    GRID_COLS,
    GRID_ROWS,
    INITIAL_DROP_DURATION,
    MAX_CASCADE_ROUNDS,
    MIN_RUN_LENGTH,
    SPIN_FRAME_DURATION,
    SPIN_FRAMES,
    SWAP_DURATION,
)
from haul.geometry import Point, Rect

Cell = Tuple[int, int]  # (col, row)


@dataclass(frozen=True, slots=True)
class BoardConfig:
    """Per-board geometry, timing and rule settings.

    Stored as a component on the registry entity so every system reading the
    board agrees on the same values. Defaults come from ``haul.constants``.
    """

    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    cell_size: float = COIN_SIZE
    origin_x: float = GAME_AREA_X
    origin_y: float = GAME_AREA_Y
    swap_duration: float = SWAP_DURATION
    spin_frame_duration: float = SPIN_FRAME_DURATION
    spin_frames: int = SPIN_FRAMES
    fall_duration_per_cell: float = FALL_DURATION_PER_CELL
    initial_drop_duration: float = INITIAL_DROP_DURATION
    min_run_length: int = MIN_RUN_LENGTH
    active_coin_types: int = ACTIVE_COIN_TYPES
    avoid_initial_matches: bool = True
    max_cascade_rounds: int = MAX_CASCADE_ROUNDS

    def __post_init__(self) -> None:
        if self.rows < 2 or self.cols < 1:
            raise ValueError(f"Board needs at least 2 rows and 1 column, got {self.rows}x{self.cols}")
        if self.cell_size <= 0:
            raise ValueError("cell_size must be positive")
        if self.spin_frame_duration <= 0:
            raise ValueError("spin_frame_duration must be positive")
        if self.min_run_length < 2:
            raise ValueError("min_run_length must be at least 2")

    @property
    def width(self) -> float:
        return self.cols * self.cell_size

    @property
    def height(self) -> float:
        return self.rows * self.cell_size

    @property
    def area(self) -> Rect:
        return Rect(self.origin_x, self.origin_y, self.width, self.height)

    @property
    def spin_duration(self) -> float:
        return self.spin_frames * self.spin_frame_duration

    def cell_origin(self, col: int, row: int) -> Point:
        # Rows outside [0, rows) are valid: refills start above the board.
        return Point(self.origin_x + col * self.cell_size, self.origin_y + row * self.cell_size)

    def cell_center(self, col: int, row: int) -> Point:
        half = self.cell_size / 2
        return Point(self.origin_x + col * self.cell_size + half, self.origin_y + row * self.cell_size + half)

    def cell_at(self, point: Point) -> Optional[Cell]:
        col = math.floor((point.x - self.origin_x) / self.cell_size)
        row = math.floor((point.y - self.origin_y) / self.cell_size)
        if 0 <= col < self.cols and 0 <= row < self.rows:
            return col, row
        return None
