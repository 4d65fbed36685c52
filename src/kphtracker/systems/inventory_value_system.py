from __future__ import annotations

import logging
from typing import Any, Mapping

from esper import World

from kphtracker.components.inventory_value import inventory_value
from kphtracker.events.bus import (
    EVENT_INVENTORY_CHANGED,
    EVENT_INVENTORY_VALUE_SAMPLED,
    EventBus,
)
from kphtracker.utils.tracker_state import get_inventory_sampler, get_tracker_lock

logger = logging.getLogger(__name__)


class InventoryValueSystem:
    """Turns raw inventory snapshots into total worth and samples deltas.

    ``inventory_changed`` may carry a precomputed ``total`` or the raw
    ``items`` list of ``(item_id, quantity)`` with a ``prices`` mapping.
    Either way the total is re-emitted as ``inventory_value_sampled``.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self._lock = get_tracker_lock(world)
        self._sampler = get_inventory_sampler(world)
        self.event_bus.subscribe(EVENT_INVENTORY_CHANGED, self._on_inventory_changed)

    @property
    def previous_value(self) -> int:
        return self._sampler.previous_value

    def prime(self, value: int | None = None) -> None:
        with self._lock:
            self._sampler.prime(value)

    def sample(self, current_value: int) -> int:
        with self._lock:
            return self._sampler.sample(current_value)

    @staticmethod
    def value_of(items, prices: Mapping[int, int]) -> int:
        return inventory_value(items, prices.get)

    def _on_inventory_changed(self, sender, **payload: Any) -> None:
        total = payload.get("total")
        if total is None:
            items = payload.get("items")
            if items is None:
                logger.debug("Ignoring inventory change without total or items")
                return
            prices = payload.get("prices") or {}
            try:
                total = self.value_of(items, prices)
            except (TypeError, ValueError):
                logger.debug("Ignoring malformed inventory payload: %r", payload)
                return
        try:
            total_int = int(total)
        except (TypeError, ValueError):
            logger.debug("Ignoring non-numeric inventory total: %r", total)
            return
        self.event_bus.emit(EVENT_INVENTORY_VALUE_SAMPLED, total=total_int)
