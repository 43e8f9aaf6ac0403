from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple


@dataclass(frozen=True, slots=True)
class CoinType:
    name: str
    color: Tuple[int, int, int]
    frame_count: int = 8


DEFAULT_COIN_TYPES: Tuple[CoinType, ...] = (
    CoinType('silver', (192, 192, 192)),
    CoinType('gold', (212, 175, 55)),
    CoinType('bronze', (205, 127, 50)),
    CoinType('copper', (150, 75, 40)),
    CoinType('ruby', (224, 17, 95)),
    CoinType('emerald', (80, 200, 120)),
)


@dataclass(slots=True)
class CoinPalette:
    """Canonical coin type definitions stored on the registry entity.

    ``active`` lists the type names random spawns draw from; the remaining
    defined types exist for boards and tests that place coins explicitly.
    """
    types: Dict[str, CoinType]
    active: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.active:
            self.active = self._filter(self.active) or list(self.types.keys())
        else:
            self.active = list(self.types.keys())

    @classmethod
    def from_types(cls, coin_types: Sequence[CoinType], active: Iterable[str] = ()) -> CoinPalette:
        return cls(types={ct.name: ct for ct in coin_types}, active=list(active))

    def _filter(self, names: Iterable[str]) -> List[str]:
        # Preserve order while dropping unknown and repeated names.
        seen: set[str] = set()
        filtered: List[str] = []
        for name in names:
            if name in self.types and name not in seen:
                filtered.append(name)
                seen.add(name)
        return filtered

    def get(self, name: str) -> CoinType:
        try:
            return self.types[name]
        except KeyError:
            raise ValueError(f"Unknown coin type {name!r}") from None

    def color_for(self, name: str) -> Tuple[int, int, int]:
        return self.get(name).color

    def active_types(self) -> List[CoinType]:
        return [self.types[name] for name in self.active]

    def set_active(self, names: Iterable[str]) -> None:
        filtered = self._filter(names)
        if not filtered:
            raise ValueError("Active palette cannot be empty")
        self.active = filtered

    def limit_active(self, count: int) -> None:
        """Activate the first ``count`` defined types."""
        if count < 1:
            raise ValueError(f"Active palette size must be at least 1, got {count}")
        self.set_active(list(self.types.keys())[:count])

    def random_type(self, rng: random.Random) -> CoinType:
        if not self.active:
            raise ValueError("No active coin types to spawn from")
        return self.types[rng.choice(self.active)]


def default_palette() -> CoinPalette:
    return CoinPalette.from_types(DEFAULT_COIN_TYPES)
