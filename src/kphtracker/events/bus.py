from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods alive for systems nobody holds a reference to.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn) -> None:
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, event_name: str, /, **payload):
        sig = self._signals.get(event_name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: None


# ============================================================================
# GAME CLIENT INPUT (pushed by the adapter layer)
# ============================================================================
EVENT_NPC_DEATH = "npc_death"                      # payload: name=str, timestamp=datetime|None, engaged=bool
EVENT_INVENTORY_CHANGED = "inventory_changed"      # payload: total=int | items=[(id, qty)], prices={id: price}
EVENT_INVENTORY_VALUE_SAMPLED = "inventory_value_sampled"  # payload: total=int
EVENT_SLAYER_TASK_CHANGED = "slayer_task_changed"  # payload: name=str|None, creature_id=int|None, size=int
EVENT_SLAYER_TASK_CLEARED = "slayer_task_cleared"  # payload: None


# ============================================================================
# UI REQUESTS
# ============================================================================
EVENT_TRACK_NPC_REQUEST = "track_npc_request"          # payload: name=str|None
EVENT_RESET_CURRENT_REQUEST = "reset_current_request"  # payload: None
EVENT_RESET_ALL_REQUEST = "reset_all_request"          # payload: None


# ============================================================================
# TRACKING NOTIFICATIONS
# ============================================================================
EVENT_KILL_RECORDED = "kill_recorded"              # payload: name=str, timestamp=datetime, total_kills=int
EVENT_GOLD_GAINED = "gold_gained"                  # payload: name=str, amount=int, total_gold=int
EVENT_TRACKED_NPC_CHANGED = "tracked_npc_changed"  # payload: previous=str|None, name=str|None, reason=str
EVENT_TRACKING_RESET = "tracking_reset"            # payload: scope=str ("current"|"all"), name=str|None
EVENT_LEDGERS_PRUNED = "ledgers_pruned"            # payload: cutoff=datetime, removed=list[str]


# ============================================================================
# SLAYER TASK NOTIFICATIONS
# ============================================================================
EVENT_SLAYER_TASK_ASSIGNED = "slayer_task_assigned"  # payload: name=str, amount=int
EVENT_SLAYER_TASK_UPDATED = "slayer_task_updated"    # payload: name=str, remaining=int
EVENT_SLAYER_TASK_PROGRESS = "slayer_task_progress"  # payload: name=str, remaining=int, completed=int
EVENT_SLAYER_TASK_ENDED = "slayer_task_ended"        # payload: name=str
