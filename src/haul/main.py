"""Entry point for the Coin Haul match-three prototype.

Sets up the ECS world, event bus, scheduler, systems, and Arcade window.
"""
import logging
import os

import arcade
from arcade import Window, run, set_background_color, color

from haul.board import Board
from haul.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from haul.events.bus import EVENT_MOUSE_MOVE, EVENT_MOUSE_PRESS, EVENT_REDRAW, EventBus
from haul.layer import Layer
from haul.rendering.board_renderer import BoardRenderer
from haul.scheduler import TickManager
from haul.systems.cursor import CursorSystem
from haul.systems.input import InputSystem
from haul.systems.match_resolution import MatchResolutionSystem
from haul.world import create_world

logger = logging.getLogger(__name__)


class HaulWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Coin Haul")
        self.event_bus = EventBus()
        self.world = create_world()
        # Scheduler rides pyglet's default clock, which arcade's loop ticks.
        self.scheduler = TickManager(redraw=lambda: self.event_bus.emit(EVENT_REDRAW))

        # Board and overlay layers
        self.board = Board(self.world)
        self.overlay = Layer(self.world, name="overlay")

        # Resolution and input systems
        self.match_resolution_system = MatchResolutionSystem(
            self.world, self.event_bus, self.scheduler, self.board
        )
        self.cursor_system = CursorSystem(
            self.world, self.event_bus, self.match_resolution_system, self.board, self.overlay
        )
        self.input_system = InputSystem(
            self.event_bus, self.cursor_system, self.board.layer, self.board.config, self
        )

        self.renderer = BoardRenderer(self.board.config, self.board.palette, self.height)
        self._status = arcade.Text("", 10, 10, color.WHITE, 12)
        self.event_bus.subscribe(EVENT_REDRAW, self._on_redraw)
        set_background_color(color.DARK_SLATE_GRAY)

        self.match_resolution_system.fill_board()

    def _on_redraw(self, sender, **kwargs):
        engine = self.match_resolution_system
        self._status.text = f"{engine.phase.name.title()}  cascade {engine.cascade_depth}"

    def on_draw(self):
        self.clear()
        area = self.board.config.area
        left = area.x
        bottom = self.height - (area.y + area.height)
        arcade.draw_lbwh_rectangle_filled(left, bottom, area.width, area.height, color.BLACK)
        # Coins scrolling in from above stay hidden until they enter the game area.
        self.ctx.scissor = (int(left), int(bottom), int(area.width), int(area.height))
        self.board.layer.draw(self.renderer)
        self.ctx.scissor = None
        self.overlay.draw(self.renderer)
        self._status.draw()

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.event_bus.emit(EVENT_MOUSE_MOVE, x=x, y=y, dx=dx, dy=dy)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button, modifiers=modifiers)


def main():
    level = os.environ.get("HAUL_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    logger.info("Starting Coin Haul")
    HaulWindow()
    run()

if __name__ == "__main__":
    main()
