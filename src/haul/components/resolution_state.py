"""Resolution state resource describing where the board is in a cascade."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class ResolutionPhase(Enum):
    """Phases of the match resolution engine. Only IDLE accepts swaps."""
    FILLING = auto()
    IDLE = auto()
    SWAPPING = auto()
    SPINNING = auto()
    SETTLING = auto()


@dataclass(slots=True)
class ResolutionState:
    """Singleton component shared by the engine and the input systems."""

    phase: ResolutionPhase = ResolutionPhase.FILLING
    cascade_depth: int = 0
    # What started the current resolution: "fill" or "swap".
    origin: Optional[str] = None
