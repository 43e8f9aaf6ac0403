from board_helpers import BASE_ROWS, build_game, place_board
from haul.config import BoardConfig
from haul.events.bus import EVENT_MOUSE_MOVE, EVENT_MOUSE_PRESS, EVENT_REDRAW, EVENT_SWAP_STARTED
from haul.systems.input import InputSystem


class DummyWindow:
    def __init__(self, width=450, height=620):
        self.width = width
        self.height = height


def _setup():
    game = build_game()
    cursor_system, _ = game.add_cursor()
    place_board(game, BASE_ROWS)
    window = DummyWindow()
    input_system = InputSystem(game.bus, cursor_system, game.board.layer, game.board.config, window)
    return game, cursor_system, input_system, window


def _window_point(window, col, row, config=BoardConfig()):
    center = config.cell_center(col, row)
    return center.x, window.height - center.y


def test_mouse_move_flips_y_and_selects_cell():
    game, cursor_system, _, window = _setup()
    redraws = game.record(EVENT_REDRAW)
    x, y = _window_point(window, 1, 2)
    game.bus.emit(EVENT_MOUSE_MOVE, x=x, y=y, dx=0, dy=0)
    assert cursor_system.selected_cell() == (1, 2)
    assert len(redraws) == 1
    # Moving within the same cell does not redraw.
    game.bus.emit(EVENT_MOUSE_MOVE, x=x + 3, y=y - 3, dx=3, dy=-3)
    assert len(redraws) == 1


def test_points_outside_game_area_ignored():
    game, cursor_system, _, window = _setup()
    redraws = game.record(EVENT_REDRAW)
    game.bus.emit(EVENT_MOUSE_MOVE, x=5, y=window.height - 300, dx=0, dy=0)
    game.bus.emit(EVENT_MOUSE_MOVE, x=200, y=window.height - 100, dx=0, dy=0)
    assert redraws == []
    assert cursor_system.selected_cell() == (0, 0)


def test_left_press_swaps_pair_under_pointer():
    game, cursor_system, _, window = _setup()
    cursor_system.cursor.allow_click = True
    started = game.record(EVENT_SWAP_STARTED)
    top, bottom = game.board.coin_at(4, 3), game.board.coin_at(4, 4)
    x, y = _window_point(window, 4, 3)
    game.bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1, modifiers=0)
    assert started == [{"a": top, "b": bottom}]


def test_other_buttons_ignored():
    game, cursor_system, _, window = _setup()
    cursor_system.cursor.allow_click = True
    started = game.record(EVENT_SWAP_STARTED)
    x, y = _window_point(window, 4, 3)
    game.bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=4, modifiers=0)
    assert started == []
