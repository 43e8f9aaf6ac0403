"""Match resolution engine: swap -> detect -> spin -> clear/gravity -> re-detect.

Each phase ends on a barrier whose completion posts the next phase's event on
the bus; the handlers check the phase they expect before moving on, so a
cascade can only finish once.
"""
from __future__ import annotations

import logging
import random
from typing import Iterable, List, Set

from esper import World

from haul.animation_factory import AnimationFactory
from haul.board import Board
from haul.components.resolution_state import ResolutionPhase, ResolutionState
from haul.events.bus import (
    EVENT_BOARD_FILLED,
    EVENT_BOARD_READY,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_GRAVITY_COMPLETE,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_REFILL_COMPLETED,
    EVENT_SPIN_COMPLETE,
    EVENT_SWAP_COMPLETE,
    EVENT_SWAP_REJECTED,
    EVENT_SWAP_STARTED,
    EventBus,
)
from haul.geometry import Point
from haul.scheduler import TickManager, multi_completion
from haul.systems.board_ops import compute_gravity, find_clears, generate_layout
from haul.systems.resolution_state_utils import get_or_create_resolution_state
from haul.utils.invariants import expect

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        scheduler: TickManager,
        board: Board,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.scheduler = scheduler
        self.board = board
        self.config = board.config
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.factory = AnimationFactory(world, scheduler, self.config)
        self.event_bus.subscribe(EVENT_BOARD_FILLED, self.on_board_filled)
        self.event_bus.subscribe(EVENT_SWAP_COMPLETE, self.on_swap_complete)
        self.event_bus.subscribe(EVENT_SPIN_COMPLETE, self.on_spin_complete)
        self.event_bus.subscribe(EVENT_GRAVITY_COMPLETE, self.on_gravity_complete)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ResolutionState:
        return get_or_create_resolution_state(self.world)

    @property
    def phase(self) -> ResolutionPhase:
        return self.state.phase

    @property
    def input_allowed(self) -> bool:
        return self.state.phase is ResolutionPhase.IDLE

    @property
    def cascade_depth(self) -> int:
        return self.state.cascade_depth

    def _enter(self, phase: ResolutionPhase) -> None:
        state = self.state
        logger.debug("Resolution phase %s -> %s", state.phase.name, phase.name)
        state.phase = phase

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def fill_board(self) -> int:
        """Drop a full board of coins into place; input opens once they land."""
        state = self.state
        if state.phase is not ResolutionPhase.FILLING or len(self.board.layer):
            raise RuntimeError("fill_board() only runs once, on an empty board")
        state.origin = "fill"
        state.cascade_depth = 0
        config = self.config
        layout = generate_layout(
            self.board.palette,
            config.rows,
            config.cols,
            self._rng,
            avoid_matches=config.avoid_initial_matches,
        )
        count = config.rows * config.cols
        done = multi_completion(count, lambda: self.event_bus.emit(EVENT_BOARD_FILLED, count=count))
        for row in range(config.rows):
            for col in range(config.cols):
                target = config.cell_origin(col, row)
                # Drops in from above like refills do, not up from below the area.
                start = Point(target.x, target.y - config.height)
                entity = self.board.spawn_coin(layout[row][col], start)
                self.factory.move(entity, target, config.initial_drop_duration, done)
        logger.debug("Filling board with %d coins", count)
        return count

    def swap(self, a: int | None, b: int | None) -> bool:
        """Start swapping two adjacent coins. Refused unless the board is idle."""
        state = self.state
        if state.phase is not ResolutionPhase.IDLE:
            logger.debug("Swap refused while %s", state.phase.name)
            self.event_bus.emit(EVENT_SWAP_REJECTED, a=a, b=b, reason="busy")
            return False
        reason = self._swap_rejection(a, b)
        if reason is not None:
            logger.debug("Swap of %s and %s refused: %s", a, b, reason)
            self.event_bus.emit(EVENT_SWAP_REJECTED, a=a, b=b, reason=reason)
            return False
        self._enter(ResolutionPhase.SWAPPING)
        state.origin = "swap"
        state.cascade_depth = 0
        rect_a = self.board.rect(a)
        rect_b = self.board.rect(b)
        dest_a, dest_b = rect_b.top_left(), rect_a.top_left()
        self.event_bus.emit(EVENT_SWAP_STARTED, a=a, b=b)
        done = multi_completion(2, lambda: self.event_bus.emit(EVENT_SWAP_COMPLETE, a=a, b=b))
        self.factory.move(a, dest_a, self.config.swap_duration, done)
        self.factory.move(b, dest_b, self.config.swap_duration, done)
        return True

    def _swap_rejection(self, a: int | None, b: int | None) -> str | None:
        if a is None or b is None:
            return "missing"
        if a == b:
            return "same_coin"
        if a not in self.board.layer or b not in self.board.layer:
            return "not_on_board"
        cell_a = self.board.cell_of(a)
        cell_b = self.board.cell_of(b)
        if cell_a is None or cell_b is None:
            return "not_on_board"
        if abs(cell_a[0] - cell_b[0]) + abs(cell_a[1] - cell_b[1]) != 1:
            return "not_adjacent"
        return None

    def detect_clears(self) -> Set[int]:
        return find_clears(self.board)

    def spin_coins(self, entities: Iterable[int]) -> int:
        """Spin every coin about to be cleared; returns the barrier size."""
        self._enter(ResolutionPhase.SPINNING)
        ordered = sorted(set(entities))
        done = multi_completion(len(ordered), lambda: self.event_bus.emit(EVENT_SPIN_COMPLETE, entities=ordered))
        for entity in ordered:
            self.factory.spin(entity, done)
        return len(ordered)

    def clear_and_apply_gravity(self, entities: Iterable[int]) -> int:
        """Remove cleared coins, drop the survivors and scroll in refills.

        Returns the barrier size: coins moved plus coins spawned.
        """
        self._enter(ResolutionPhase.SETTLING)
        present = [entity for entity in sorted(set(entities)) if entity in self.board.layer]
        types = [self.board.coin(entity).coin_type.name for entity in present]
        self.board.remove_coins(present)
        self.event_bus.emit(EVENT_MATCH_CLEARED, entities=present, types=types)

        plan = compute_gravity(self.board)
        expect(
            plan.refill_count == len(present),
            "Gravity found %d holes after clearing %d coins",
            plan.refill_count,
            len(present),
        )
        moved_columns = {move.source[0] for move in plan.moves}
        self.event_bus.emit(
            EVENT_GRAVITY_APPLIED,
            moved=[move.entity for move in plan.moves],
            columns=len(moved_columns),
        )

        config = self.config
        palette = self.board.palette
        spawned: List[tuple[int, Point, int]] = []
        cells = []
        for (col, row), distance in plan.refill_cells():
            start = config.cell_origin(col, row - distance)
            entity = self.board.spawn_coin(palette.random_type(self._rng), start)
            spawned.append((entity, config.cell_origin(col, row), distance))
            cells.append((col, row))
        self.event_bus.emit(
            EVENT_REFILL_COMPLETED,
            new_entities=[entity for entity, _, _ in spawned],
            cells=cells,
        )

        count = len(plan.moves) + len(spawned)
        logger.debug("Gravity barrier: %d moved, %d spawned", len(plan.moves), len(spawned))
        done = multi_completion(count, lambda: self.event_bus.emit(EVENT_GRAVITY_COMPLETE, count=count))
        for move in plan.moves:
            col, row = move.target
            self.factory.fall(move.entity, config.cell_origin(col, row), move.cells, done)
        for entity, target, distance in spawned:
            self.factory.fall(entity, target, distance, done)
        return count

    # ------------------------------------------------------------------
    # Phase completions
    # ------------------------------------------------------------------

    def on_board_filled(self, sender, **kwargs):
        if not expect(self.state.phase is ResolutionPhase.FILLING, "Board filled while %s", self.state.phase.name):
            return
        self._resolve()

    def on_swap_complete(self, sender, **kwargs):
        if not expect(self.state.phase is ResolutionPhase.SWAPPING, "Swap completed while %s", self.state.phase.name):
            return
        self._resolve()

    def on_spin_complete(self, sender, **kwargs):
        if not expect(self.state.phase is ResolutionPhase.SPINNING, "Spin completed while %s", self.state.phase.name):
            return
        self.clear_and_apply_gravity(kwargs.get("entities", []))

    def on_gravity_complete(self, sender, **kwargs):
        if not expect(self.state.phase is ResolutionPhase.SETTLING, "Gravity completed while %s", self.state.phase.name):
            return
        self._resolve()

    def _resolve(self) -> None:
        cleared = self.detect_clears()
        if not cleared:
            self._finish()
            return
        state = self.state
        state.cascade_depth += 1
        if state.cascade_depth > self.config.max_cascade_rounds:
            logger.warning("Cascade reached %d rounds", state.cascade_depth)
        ordered = sorted(cleared)
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=state.cascade_depth, entities=ordered)
        self.event_bus.emit(EVENT_MATCH_FOUND, entities=ordered, size=len(ordered))
        self.spin_coins(ordered)

    def _finish(self) -> None:
        state = self.state
        depth = state.cascade_depth
        origin = state.origin
        self._enter(ResolutionPhase.IDLE)
        state.origin = None
        if origin == "fill":
            logger.debug("Board ready after %d settling rounds", depth)
            self.event_bus.emit(EVENT_BOARD_READY, depth=depth)
        else:
            logger.debug("Cascade complete at depth %d", depth)
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth)
