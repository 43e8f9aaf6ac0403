import random

from esper import World

from haul.components.board_registry import BoardRegistry
from haul.components.coin_types import CoinPalette, default_palette
from haul.components.resolution_state import ResolutionState
from haul.config import BoardConfig


def create_world(
    *,
    config: BoardConfig | None = None,
    palette: CoinPalette | None = None,
    rng: random.Random | None = None,
) -> World:
    """Build the esper World for one board.

    The registry entity carries the BoardConfig and the CoinPalette; the
    palette's active subset is cut down to ``config.active_coin_types``.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    config = config or BoardConfig()
    palette = palette or default_palette()
    palette.limit_active(config.active_coin_types)

    world.create_entity(BoardRegistry(), config, palette)
    world.create_entity(ResolutionState())
    return world
