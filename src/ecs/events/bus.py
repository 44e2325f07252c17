from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                              # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_KEY_PRESS = "key_press"                    # payload: key=str
EVENT_POINTER_DOWN = "pointer_down"              # payload: x, y
EVENT_POINTER_UP = "pointer_up"                  # payload: x, y
EVENT_MOVE_REQUEST = "move_request"              # payload: direction=Direction|None


# ============================================================================
# MOVEMENT & MERGING
# ============================================================================
EVENT_MOVE_RESOLVED = "move_resolved"            # payload: direction=Direction, changed=bool
EVENT_MOVE_IGNORED = "move_ignored"              # payload: direction=Direction|None, reason=str
EVENT_TILE_MOVED = "tile_moved"                  # payload: entity=int, src=(x,y), dst=(x,y)
EVENT_TILES_MERGED = "tiles_merged"              # payload: entity=int, src=(x,y), dst=(x,y), value=int
EVENT_SCORE_GAINED = "score_gained"              # payload: amount=int


# ============================================================================
# SETTLE WINDOW & SPAWN
# ============================================================================
EVENT_SETTLE_STARTED = "settle_started"          # payload: delay=float
EVENT_SETTLE_COMPLETE = "settle_complete"        # payload: spawned=int|None, game_over=bool
EVENT_TILE_SPAWNED = "tile_spawned"              # payload: entity=int, x, y, value=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_NEW_GAME_REQUEST = "new_game_request"      # payload: None
EVENT_BOARD_CLEARED = "board_cleared"            # payload: None
EVENT_NEW_GAME_STARTED = "new_game_started"      # payload: tiles=list[(x,y)]
EVENT_GAME_MODE_CHANGED = "game_mode_changed"    # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_GAME_OVER = "game_over"                    # payload: highest_tile=int
EVENT_SCORE_CHANGED = "score_changed"            # payload: value=int, best=int, delta=int
