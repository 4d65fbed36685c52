"""Kill-rate, profit-rate and slayer-task tracking for a game client overlay."""

from kphtracker.components.tracker_config import OverlayPosition, TrackerConfig
from kphtracker.events.bus import EventBus
from kphtracker.world import Tracker, create_tracker, create_world

__all__ = [
    "EventBus",
    "OverlayPosition",
    "Tracker",
    "TrackerConfig",
    "create_tracker",
    "create_world",
]
