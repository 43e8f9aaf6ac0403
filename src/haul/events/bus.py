from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects.

    One bus per board: the resolution engine listens for its own phase
    completions on it, so two boards sharing a bus would drive each other.
    """
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_REDRAW = "redraw"                            # payload: None


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button, modifiers (window coords, y-up)
EVENT_MOUSE_MOVE = "mouse_move"                    # payload: x, y, dx, dy (window coords, y-up)
EVENT_CURSOR_MOVED = "cursor_moved"                # payload: col, row


# ============================================================================
# SWAP
# ============================================================================
EVENT_SWAP_STARTED = "swap_started"                # payload: a=int, b=int
EVENT_SWAP_REJECTED = "swap_rejected"              # payload: a=int|None, b=int|None, reason=str
EVENT_SWAP_COMPLETE = "swap_complete"              # payload: a=int, b=int


# ============================================================================
# MATCH RESOLUTION
# ============================================================================
EVENT_BOARD_FILLED = "board_filled"                # payload: count=int
EVENT_BOARD_READY = "board_ready"                  # payload: depth=int
EVENT_MATCH_FOUND = "match_found"                  # payload: entities=[int,...], size=int
EVENT_SPIN_COMPLETE = "spin_complete"              # payload: entities=[int,...]
EVENT_MATCH_CLEARED = "match_cleared"              # payload: entities=[int,...], types=[str,...]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moved=[int,...], columns=int (columns with a falling coin)
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_entities=[int,...], cells=[(c,r),...]
EVENT_GRAVITY_COMPLETE = "gravity_complete"        # payload: count=int
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, entities=[int,...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int
