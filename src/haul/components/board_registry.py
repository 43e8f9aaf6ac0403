from dataclasses import dataclass

@dataclass(slots=True)
class BoardRegistry:
    """Empty tag component marking the single entity that stores board settings.

    The same entity also carries the BoardConfig and CoinPalette components.
    """
    pass
