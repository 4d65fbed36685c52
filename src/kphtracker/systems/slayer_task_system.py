from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from esper import World

from kphtracker.components.slayer_task import SlayerTaskData, SlayerTaskSnapshot
from kphtracker.constants import SLAYER_TASK_ALIASES, SLAYER_TASK_NAMES
from kphtracker.events.bus import (
    EVENT_SLAYER_TASK_ASSIGNED,
    EVENT_SLAYER_TASK_CHANGED,
    EVENT_SLAYER_TASK_CLEARED,
    EVENT_SLAYER_TASK_ENDED,
    EVENT_SLAYER_TASK_PROGRESS,
    EVENT_SLAYER_TASK_UPDATED,
    EventBus,
)
from kphtracker.utils.tracker_state import get_slayer_task_state, get_tracker_lock

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class SlayerTaskSystem:
    """Follows the assigned slayer task and counts matching kills against it.

    The game client reports the task as a creature id plus the remaining size.
    Ids resolve through ``task_names`` (defaults to ``SLAYER_TASK_NAMES``);
    NPC names are matched against the task name and the ``aliases`` table.
    Both tables can be extended by the integrator.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        task_names: Mapping[int, str] | None = None,
        aliases: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._lock = get_tracker_lock(world)
        self._state = get_slayer_task_state(world)
        self._task_names: Dict[int, str] = dict(SLAYER_TASK_NAMES)
        if task_names:
            self._task_names.update(task_names)
        self._aliases: Dict[str, Tuple[str, ...]] = {}
        self.register_aliases(SLAYER_TASK_ALIASES)
        if aliases:
            self.register_aliases(aliases)
        self.event_bus.subscribe(EVENT_SLAYER_TASK_CHANGED, self._on_task_changed)
        self.event_bus.subscribe(EVENT_SLAYER_TASK_CLEARED, self._on_task_cleared)

    def register_aliases(self, aliases: Mapping[str, Iterable[str]]) -> None:
        for task_name, names in aliases.items():
            key = task_name.lower()
            merged = list(self._aliases.get(key, ()))
            for name in names:
                lowered = name.lower()
                if lowered and lowered not in merged:
                    merged.append(lowered)
            self._aliases[key] = tuple(merged)

    def aliases_for(self, task_name: str) -> Tuple[str, ...]:
        return self._aliases.get(task_name.lower(), ())

    def resolve_task_name(self, creature_id: int) -> Optional[str]:
        return self._task_names.get(creature_id)

    @property
    def current_task(self) -> Optional[SlayerTaskData]:
        return self._state.task

    def snapshot(self) -> Optional[SlayerTaskSnapshot]:
        with self._lock:
            task = self._state.task
            return task.snapshot() if task is not None else None

    # Operations ---------------------------------------------------------

    def on_task_state(self, creature_id: int, size: int) -> None:
        """Apply a raw (creature id, size) reading from the game client."""
        name = self.resolve_task_name(creature_id) if creature_id > 0 else None
        if name is None or size <= 0:
            if creature_id > 0 and size > 0:
                logger.debug("Unknown slayer creature id %s; treating as no task", creature_id)
            self.on_task_cleared()
            return
        self.on_task_observed(name, size)

    def on_task_observed(self, name: str, size: int) -> None:
        if not name or size <= 0:
            self.on_task_cleared()
            return
        with self._lock:
            task = self._state.task
            if task is None or task.task_name != name:
                self._state.task = SlayerTaskData(task_name=name, original_amount=size, remaining=size)
                assigned = True
            else:
                task.remaining = size
                assigned = False
        if assigned:
            logger.info("Slayer task assigned: %s x%d", name, size)
            self.event_bus.emit(EVENT_SLAYER_TASK_ASSIGNED, name=name, amount=size)
        else:
            self.event_bus.emit(EVENT_SLAYER_TASK_UPDATED, name=name, remaining=size)

    def on_task_cleared(self) -> None:
        with self._lock:
            task = self._state.task
            self._state.task = None
        if task is not None:
            logger.info("Slayer task ended: %s", task.task_name)
            self.event_bus.emit(EVENT_SLAYER_TASK_ENDED, name=task.task_name)

    def on_matching_kill(self) -> bool:
        with self._lock:
            task = self._state.task
            if task is None or not task.decrement_remaining():
                return False
            name, remaining, completed = task.task_name, task.remaining, task.completed()
        self.event_bus.emit(
            EVENT_SLAYER_TASK_PROGRESS,
            name=name,
            remaining=remaining,
            completed=completed,
        )
        return True

    def matches(self, npc_name: str | None) -> bool:
        task = self._state.task
        if task is None:
            return False
        return task.matches(npc_name, self.aliases_for(task.task_name))

    # Event handlers -----------------------------------------------------

    def _on_task_changed(self, sender, **payload) -> None:
        size = _as_int(payload.get("size"))
        if size is None:
            logger.debug("Ignoring slayer task update without a usable size: %r", payload)
            return
        name = payload.get("name")
        if name:
            self.on_task_observed(str(name), size)
            return
        creature_id = _as_int(payload.get("creature_id"))
        if creature_id is None:
            self.on_task_cleared()
            return
        self.on_task_state(creature_id, size)

    def _on_task_cleared(self, sender, **payload) -> None:
        self.on_task_cleared()
