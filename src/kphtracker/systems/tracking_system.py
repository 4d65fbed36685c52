from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from esper import World

from kphtracker.components.kill_ledger import KillLedger, LedgerSnapshot
from kphtracker.components.slayer_task import SlayerTaskSnapshot
from kphtracker.components.tracked_npc import TrackedNpc
from kphtracker.events.bus import (
    EVENT_GOLD_GAINED,
    EVENT_INVENTORY_VALUE_SAMPLED,
    EVENT_KILL_RECORDED,
    EVENT_LEDGERS_PRUNED,
    EVENT_NPC_DEATH,
    EVENT_RESET_ALL_REQUEST,
    EVENT_RESET_CURRENT_REQUEST,
    EVENT_SLAYER_TASK_ASSIGNED,
    EVENT_TICK,
    EVENT_TRACK_NPC_REQUEST,
    EVENT_TRACKED_NPC_CHANGED,
    EVENT_TRACKING_RESET,
    EventBus,
)
from kphtracker.systems.inventory_value_system import InventoryValueSystem
from kphtracker.systems.slayer_task_system import SlayerTaskSystem
from kphtracker.utils.clock import as_utc, utc_now
from kphtracker.utils.formatting import format_estimated_time
from kphtracker.utils.tracker_state import (
    get_tracker_config,
    get_tracker_lock,
    get_tracking_state,
)

logger = logging.getLogger(__name__)


class TrackingSystem:
    """Owns the per-NPC kill ledgers and the currently tracked selection.

    Every NPC name seen in a kill gets its own entity carrying ``TrackedNpc``
    and ``KillLedger``. Names are case-sensitive keys. Handlers run on the
    event-dispatch thread; read accessors may be called from a render thread
    and always return immutable snapshots taken under the tracker lock.

    Subscribes to:
        * ``npc_death`` - record a kill and advance the slayer task
        * ``inventory_value_sampled`` - attribute positive deltas as gold
        * ``slayer_task_assigned`` - auto-track the new task when enabled
        * ``tick`` - run the retention sweep every N ticks
        * ``track_npc_request`` / ``reset_current_request`` / ``reset_all_request``
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        slayer_tasks: SlayerTaskSystem,
        inventory: InventoryValueSystem,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.slayer_tasks = slayer_tasks
        self.inventory = inventory
        self._clock = clock or utc_now
        self._lock = get_tracker_lock(world)
        self._state = get_tracking_state(world)
        self._config = get_tracker_config(world)
        self._entities: Dict[str, int] = {
            tracked.name: entity for entity, tracked in world.get_component(TrackedNpc)
        }

        self.event_bus.subscribe(EVENT_NPC_DEATH, self._on_npc_death)
        self.event_bus.subscribe(EVENT_INVENTORY_VALUE_SAMPLED, self._on_inventory_value_sampled)
        self.event_bus.subscribe(EVENT_SLAYER_TASK_ASSIGNED, self._on_slayer_task_assigned)
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)
        self.event_bus.subscribe(EVENT_TRACK_NPC_REQUEST, self._on_track_npc_request)
        self.event_bus.subscribe(EVENT_RESET_CURRENT_REQUEST, self._on_reset_current_request)
        self.event_bus.subscribe(EVENT_RESET_ALL_REQUEST, self._on_reset_all_request)

    # Ledger storage -----------------------------------------------------

    def _ledger_for(self, name: str) -> Optional[KillLedger]:
        entity = self._entities.get(name)
        if entity is None:
            return None
        return self.world.component_for_entity(entity, KillLedger)

    def _ensure_ledger(self, name: str) -> KillLedger:
        ledger = self._ledger_for(name)
        if ledger is None:
            ledger = KillLedger()
            self._entities[name] = self.world.create_entity(TrackedNpc(name=name), ledger)
        return ledger

    def _remove_ledger(self, name: str) -> None:
        entity = self._entities.pop(name, None)
        if entity is not None:
            self.world.delete_entity(entity, immediate=True)

    # Operations ---------------------------------------------------------

    def on_kill(self, name: str | None, now: datetime | None = None, *, engaged: bool = True) -> None:
        """Record a kill of ``name``.

        ``engaged`` is False when the local player was not fighting the NPC;
        such deaths still count towards the slayer task but are not tracked.
        """
        if not name:
            logger.debug("Ignoring kill without an NPC name")
            return
        timestamp = as_utc(now or self._clock())
        total_kills = None
        selection_change = None
        with self._lock:
            task_kill = self.slayer_tasks.matches(name)
            if engaged:
                ledger = self._ensure_ledger(name)
                ledger.add_kill(timestamp)
                total_kills = ledger.total_kills
                if self._config.auto_track_last_killed:
                    selection_change = self._select(name)
        if task_kill:
            self.slayer_tasks.on_matching_kill()
        if total_kills is not None:
            self.event_bus.emit(
                EVENT_KILL_RECORDED,
                name=name,
                timestamp=timestamp,
                total_kills=total_kills,
            )
        if selection_change is not None:
            self._emit_selection_change(selection_change, reason="last_killed")

    def on_inventory_sample(self, current_value: int) -> int:
        """Sample the inventory worth; positive deltas become gold for the tracked NPC."""
        with self._lock:
            delta = self.inventory.sample(current_value)
            if delta <= 0 or not self._state.active:
                return delta
            name = self._state.tracked_npc
            ledger = self._ledger_for(name)
            if ledger is None:
                return delta
            ledger.add_gold(delta)
            total_gold = ledger.total_gold
        self.event_bus.emit(EVENT_GOLD_GAINED, name=name, amount=delta, total_gold=total_gold)
        return delta

    def on_periodic_sweep(
        self,
        now: datetime | None = None,
        retention_hours: int | None = None,
    ) -> List[str]:
        """Drop kill buckets older than the retention window and empty ledgers."""
        if retention_hours is None:
            retention_hours = self._config.retention_hours
        cutoff = as_utc(now or self._clock()) - timedelta(hours=retention_hours)
        removed: List[str] = []
        with self._lock:
            for name in list(self._entities):
                ledger = self._ledger_for(name)
                ledger.remove_older_than(cutoff)
                if ledger.total_kills == 0:
                    self._remove_ledger(name)
                    removed.append(name)
        logger.debug("Retention sweep before %s removed %d ledger(s)", cutoff, len(removed))
        if removed:
            self.event_bus.emit(EVENT_LEDGERS_PRUNED, cutoff=cutoff, removed=removed)
        return removed

    def set_tracked_npc(self, name: str | None) -> None:
        with self._lock:
            change = self._select(name or None)
        if change is not None:
            self._emit_selection_change(change, reason="manual")

    def reset_current(self) -> None:
        with self._lock:
            if not self._state.active:
                return
            name = self._state.tracked_npc
            ledger = self._ledger_for(name)
            if ledger is None:
                return
            ledger.reset()
        logger.info("Reset tracking data for %s", name)
        self.event_bus.emit(EVENT_TRACKING_RESET, scope="current", name=name)

    def reset_all(self) -> None:
        with self._lock:
            for name in list(self._entities):
                self._remove_ledger(name)
            change = self._select(None)
        logger.info("Reset all tracking data")
        self.event_bus.emit(EVENT_TRACKING_RESET, scope="all", name=None)
        if change is not None:
            self._emit_selection_change(change, reason="reset")

    def estimated_hours_remaining(
        self,
        use_recent_rate: bool | None = None,
        recent_window_minutes: int | None = None,
        now: datetime | None = None,
    ) -> Optional[float]:
        if use_recent_rate is None:
            use_recent_rate = self._config.use_recent_kph_for_estimate
        if recent_window_minutes is None:
            recent_window_minutes = self._config.recent_window_minutes
        with self._lock:
            task = self.slayer_tasks.current_task
            if task is None or not self._state.active:
                return None
            ledger = self._ledger_for(self._state.tracked_npc)
            if ledger is None:
                return None
            if use_recent_rate:
                rate = ledger.recent_kills_per_hour(recent_window_minutes, as_utc(now or self._clock()))
            else:
                rate = ledger.kills_per_hour()
            if rate <= 0:
                return None
            return task.remaining / rate

    def estimated_time_remaining(
        self,
        use_recent_rate: bool | None = None,
        recent_window_minutes: int | None = None,
        now: datetime | None = None,
    ) -> Optional[str]:
        hours = self.estimated_hours_remaining(use_recent_rate, recent_window_minutes, now)
        if hours is None:
            return None
        return format_estimated_time(hours)

    # Read model ---------------------------------------------------------

    @property
    def tracked_npc(self) -> Optional[str]:
        return self._state.tracked_npc

    @property
    def is_tracking(self) -> bool:
        return self._state.active

    def ledger(self, name: str, now: datetime | None = None) -> Optional[LedgerSnapshot]:
        with self._lock:
            ledger = self._ledger_for(name)
            if ledger is None:
                return None
            return ledger.snapshot(name, as_utc(now or self._clock()), self._config.recent_window_minutes)

    def tracked_ledger(self, now: datetime | None = None) -> Optional[LedgerSnapshot]:
        with self._lock:
            if not self._state.active:
                return None
            return self.ledger(self._state.tracked_npc, now)

    def ledgers(self, now: datetime | None = None) -> Dict[str, LedgerSnapshot]:
        when = as_utc(now or self._clock())
        window = self._config.recent_window_minutes
        with self._lock:
            return {
                name: self._ledger_for(name).snapshot(name, when, window)
                for name in self._entities
            }

    def slayer_task(self) -> Optional[SlayerTaskSnapshot]:
        return self.slayer_tasks.snapshot()

    def tracked_is_slayer_task(self) -> bool:
        with self._lock:
            task = self.slayer_tasks.current_task
            tracked = self._state.tracked_npc
            return task is not None and tracked is not None and task.task_name.lower() == tracked.lower()

    # Helpers ------------------------------------------------------------

    def _select(self, name: Optional[str]) -> Optional[tuple]:
        previous = self._state.tracked_npc
        was_tracking = self._state.is_tracking
        self._state.select(name)
        if previous == name and was_tracking == self._state.is_tracking:
            return None
        return previous, name

    def _emit_selection_change(self, change: tuple, *, reason: str) -> None:
        previous, name = change
        self.event_bus.emit(EVENT_TRACKED_NPC_CHANGED, previous=previous, name=name, reason=reason)

    # Event handlers -----------------------------------------------------

    def _on_npc_death(self, sender, **payload: Any) -> None:
        name = payload.get("name")
        if not isinstance(name, str) or not name:
            logger.debug("Ignoring NPC death without a resolved name: %r", payload)
            return
        timestamp = payload.get("timestamp")
        if not isinstance(timestamp, datetime):
            timestamp = None
        self.on_kill(name, timestamp, engaged=bool(payload.get("engaged", True)))

    def _on_inventory_value_sampled(self, sender, **payload: Any) -> None:
        total = payload.get("total")
        if total is None:
            return
        self.on_inventory_sample(int(total))

    def _on_slayer_task_assigned(self, sender, **payload: Any) -> None:
        name = payload.get("name")
        if not name or not self._config.auto_track_slayer_task:
            return
        with self._lock:
            change = self._select(name)
        if change is not None:
            self._emit_selection_change(change, reason="slayer_task")

    def _on_tick(self, sender, **payload: Any) -> None:
        with self._lock:
            self._state.tick_count += 1
            due = self._state.tick_count % self._config.sweep_interval_ticks == 0
        if due:
            self.on_periodic_sweep()

    def _on_track_npc_request(self, sender, **payload: Any) -> None:
        self.set_tracked_npc(payload.get("name"))

    def _on_reset_current_request(self, sender, **payload: Any) -> None:
        self.reset_current()

    def _on_reset_all_request(self, sender, **payload: Any) -> None:
        self.reset_all()
