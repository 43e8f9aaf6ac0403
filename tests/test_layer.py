from esper import World

from haul.components.coin import Coin
from haul.components.coin_types import CoinType
from haul.components.cursor import CursorIndicator
from haul.geometry import Point, Rect
from haul.layer import Layer

GOLD = CoinType('gold', (212, 175, 55))


class _RecordingSurface:
    def __init__(self):
        self.calls = []

    def draw_coin(self, rect, coin):
        self.calls.append(('coin', rect.x, rect.y, coin.coin_type.name))

    def draw_cursor(self, cursor):
        self.calls.append(('cursor', cursor.pos.x, cursor.pos.y))


def _coin(world, layer, x, y):
    entity = world.create_entity(Rect(x, y, 45, 45), Coin(GOLD))
    layer.add(entity)
    return entity


def test_hit_returns_entity_under_point():
    world = World()
    layer = Layer(world)
    a = _coin(world, layer, 0, 0)
    b = _coin(world, layer, 45, 0)
    assert layer.hit(Point(10, 10)) == a
    assert layer.hit(Point(45, 44)) == b
    assert layer.hit(Point(100, 10)) is None


def test_first_inserted_wins_on_overlap():
    world = World()
    layer = Layer(world)
    first = _coin(world, layer, 0, 0)
    _coin(world, layer, 20, 0)
    assert layer.hit(Point(30, 10)) == first


def test_cursor_never_hits():
    world = World()
    layer = Layer(world)
    cursor = world.create_entity(CursorIndicator(pos=Point(0, 0)))
    layer.add(cursor)
    assert layer.hit(Point(1, 1)) is None


def test_remove_deletes_entity_and_repeat_is_noop():
    world = World()
    layer = Layer(world)
    a = _coin(world, layer, 0, 0)
    assert layer.remove(a)
    assert not world.entity_exists(a)
    assert a not in layer
    assert layer.remove(a) is False
    assert layer.hit(Point(10, 10)) is None


def test_remove_all_counts_only_present_entities():
    world = World()
    layer = Layer(world)
    a = _coin(world, layer, 0, 0)
    b = _coin(world, layer, 45, 0)
    assert layer.remove_all([a, b, a]) == 2
    assert len(layer) == 0


def test_draw_dispatches_by_capability_in_order():
    world = World()
    layer = Layer(world)
    _coin(world, layer, 0, 0)
    layer.add(world.create_entity(CursorIndicator(pos=Point(-4, -4))))
    _coin(world, layer, 45, 0)
    surface = _RecordingSurface()
    layer.draw(surface)
    assert surface.calls == [
        ('coin', 0, 0, 'gold'),
        ('cursor', -4, -4),
        ('coin', 45, 0, 'gold'),
    ]


def test_iteration_is_insertion_ordered_snapshot():
    world = World()
    layer = Layer(world)
    a = _coin(world, layer, 0, 0)
    b = _coin(world, layer, 45, 0)
    seen = []
    for entity in layer:
        seen.append(entity)
        layer.remove(entity)
    assert seen == [a, b]
    assert len(layer) == 0
