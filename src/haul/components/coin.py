from dataclasses import dataclass

from haul.components.coin_types import CoinType

@dataclass(slots=True)
class Coin:
    """Per-token coin state.

    Position lives in the entity's Rect component; ``frame`` is the spin frame
    shown by the renderer, 0 when the coin is at rest.
    """
    coin_type: CoinType
    frame: int = 0
