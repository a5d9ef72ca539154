from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps lambdas and bound methods of unreferenced systems alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT
# ============================================================================
EVENT_MOVE_SUBMITTED = "move_submitted"          # payload: trail=[(r,c),...]
EVENT_MOVE_REJECTED = "move_rejected"            # payload: reason=str, index=int|None
EVENT_QUIT_REQUESTED = "quit_requested"          # payload: -


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_BOARD_INITIALIZED = "board_initialized"    # payload: source=str ("new"|"save")
EVENT_TILES_POPPED = "tiles_popped"              # payload: positions=[(r,c),...], types=[(r,c,type_name),...]
EVENT_TILES_GROWN = "tiles_grown"                # payload: positions=[(r,c),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"      # payload: chain=int, base_score=int
EVENT_GRAVITY_APPLIED = "gravity_applied"        # payload: moves=[GravityMove,...]
EVENT_REFILL_COMPLETED = "refill_completed"      # payload: new_tiles=[(r,c),...]


# ============================================================================
# SCORE & TURNS
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"            # payload: score=int, delta=int
EVENT_TURN_ADVANCED = "turn_advanced"            # payload: turns_remaining=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"    # payload: previous=GameMode, current=GameMode
EVENT_GAME_OVER = "game_over"                    # payload: score=int


# ============================================================================
# RENDERING & PERSISTENCE
# ============================================================================
EVENT_RENDER_REQUEST = "render_request"          # payload: kind=str ("board")
EVENT_RENDER_COMPLETED = "render_completed"      # payload: kind=str, path=str
EVENT_RENDER_FAILED = "render_failed"            # payload: kind=str, error=str
EVENT_GAME_SAVED = "game_saved"                  # payload: path=str
EVENT_GAME_LOADED = "game_loaded"                # payload: path=str
