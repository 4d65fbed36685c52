from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Tuple


def inventory_value(
    items: Iterable[Tuple[int, int]],
    price_of: Callable[[int], Optional[int]],
) -> int:
    """Sum ``price * quantity`` over inventory slots, skipping empty slots (id <= 0)."""
    total = 0
    for item_id, quantity in items:
        if item_id <= 0:
            continue
        price = price_of(item_id) or 0
        if price <= 0 or quantity <= 0:
            continue
        total += price * quantity
    return total


@dataclass(slots=True)
class InventoryValueSampler:
    """Tracks the last sampled inventory worth and reports deltas between samples.

    Built with an explicit ``previous_value`` it reports deltas from that
    baseline straight away. Otherwise the first sample (and the first one
    after ``prime()`` without a value) only establishes the baseline and
    reports no change, so the starting inventory is not counted as loot.
    """

    previous_value: Optional[int] = None
    primed: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        if self.previous_value is None:
            self.previous_value = 0
        else:
            self.primed = True

    def prime(self, value: int | None = None) -> None:
        if value is None:
            self.primed = False
            return
        self.previous_value = value
        self.primed = True

    def sample(self, current_value: int) -> int:
        if not self.primed:
            self.previous_value = current_value
            self.primed = True
            return 0
        delta = current_value - self.previous_value
        self.previous_value = current_value
        return delta
