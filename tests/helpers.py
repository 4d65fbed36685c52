from __future__ import annotations

from datetime import datetime, timedelta, timezone

from kphtracker.components.tracker_config import TrackerConfig
from kphtracker.world import Tracker, create_tracker

START = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def minutes_after(minutes: float, base: datetime = START) -> datetime:
    return base + timedelta(minutes=minutes)


class FakeClock:
    def __init__(self, value: datetime = START) -> None:
        self.value = value

    def advance(self, minutes: float) -> None:
        self.value += timedelta(minutes=minutes)

    def __call__(self) -> datetime:
        return self.value


def make_tracker(clock: FakeClock | None = None, **config_overrides) -> Tracker:
    """Tracker with a primed inventory baseline of zero and a fake clock."""
    clock = clock or FakeClock()
    return create_tracker(
        config=TrackerConfig(**config_overrides),
        clock=clock,
        initial_inventory_value=0,
    )
