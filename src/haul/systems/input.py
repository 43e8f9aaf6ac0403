from haul.config import BoardConfig
from haul.events.bus import EventBus, EVENT_MOUSE_MOVE, EVENT_MOUSE_PRESS, EVENT_REDRAW
from haul.geometry import Point
from haul.layer import Layer
from haul.systems.cursor import CursorSystem

# arcade.MOUSE_BUTTON_LEFT; kept literal so this module stays importable headless.
MOUSE_BUTTON_LEFT = 1

class InputSystem:
    """Maps window mouse events onto the cursor.

    The window reports y-up coordinates; the board works y-down from the top
    edge, so ``y`` is flipped against the window height. Points outside the
    game area are dropped.
    """
    def __init__(self, event_bus: EventBus, cursor_system: CursorSystem, layer: Layer,
                 config: BoardConfig, window):
        self.event_bus = event_bus
        self.cursor_system = cursor_system
        self.layer = layer
        self.config = config
        self.window = window
        self.event_bus.subscribe(EVENT_MOUSE_MOVE, self.on_mouse_move)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def to_board_point(self, x: float, y: float) -> Point:
        return Point(float(x), float(self.window.height - y))

    def _board_point(self, kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return None
        point = self.to_board_point(x, y)
        if not self.config.area.contains_point(point):
            return None
        return point

    def on_mouse_move(self, sender, **kwargs):
        point = self._board_point(kwargs)
        if point is None:
            return
        if self.cursor_system.on_pointer_move(point):
            self.event_bus.emit(EVENT_REDRAW)

    def on_mouse_press(self, sender, **kwargs):
        if kwargs.get('button', MOUSE_BUTTON_LEFT) != MOUSE_BUTTON_LEFT:
            return
        point = self._board_point(kwargs)
        if point is None:
            return
        # Clicks act on the pair under the indicator; keep it in sync first.
        self.cursor_system.on_pointer_move(point)
        self.cursor_system.on_click(self.layer)
        self.event_bus.emit(EVENT_REDRAW)
