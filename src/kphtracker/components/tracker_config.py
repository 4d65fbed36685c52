"""Pass-through configuration owned by the plugin settings screen."""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Any

from kphtracker.constants import (
    DEFAULT_RECENT_WINDOW_MINUTES,
    DEFAULT_RETENTION_HOURS,
    DEFAULT_SWEEP_INTERVAL_TICKS,
    MAX_RECENT_WINDOW_MINUTES,
    MAX_RETENTION_HOURS,
    MIN_RECENT_WINDOW_MINUTES,
    MIN_RETENTION_HOURS,
)


class OverlayPosition(Enum):
    TOP_LEFT = auto()
    TOP_RIGHT = auto()
    BOTTOM_LEFT = auto()
    BOTTOM_RIGHT = auto()


def _clamp(value: Any, low: int, high: int | None, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < low:
        return low
    if high is not None and number > high:
        return high
    return number


@dataclass
class TrackerConfig:
    """Singleton component with the user-facing tracker settings.

    Numeric settings are clamped into their allowed ranges on construction and
    on every ``configure`` call.
    """

    show_overlay: bool = True
    auto_track_slayer_task: bool = True
    auto_track_last_killed: bool = True
    show_slayer_info: bool = True
    show_time_estimate: bool = True
    retention_hours: int = DEFAULT_RETENTION_HOURS
    show_total_kph: bool = True
    show_recent_kph: bool = True
    recent_window_minutes: int = DEFAULT_RECENT_WINDOW_MINUTES
    show_kill_count: bool = True
    use_recent_kph_for_estimate: bool = False
    show_gp_tracking: bool = True
    show_avg_gp_per_kill: bool = True
    show_gp_per_hour: bool = True
    overlay_position: OverlayPosition = OverlayPosition.TOP_LEFT
    sweep_interval_ticks: int = DEFAULT_SWEEP_INTERVAL_TICKS

    def __post_init__(self) -> None:
        self._normalize()

    def _normalize(self) -> None:
        self.retention_hours = _clamp(
            self.retention_hours, MIN_RETENTION_HOURS, MAX_RETENTION_HOURS, DEFAULT_RETENTION_HOURS
        )
        self.recent_window_minutes = _clamp(
            self.recent_window_minutes,
            MIN_RECENT_WINDOW_MINUTES,
            MAX_RECENT_WINDOW_MINUTES,
            DEFAULT_RECENT_WINDOW_MINUTES,
        )
        self.sweep_interval_ticks = _clamp(
            self.sweep_interval_ticks, 1, None, DEFAULT_SWEEP_INTERVAL_TICKS
        )
        if not isinstance(self.overlay_position, OverlayPosition):
            try:
                self.overlay_position = OverlayPosition[str(self.overlay_position).upper()]
            except KeyError:
                self.overlay_position = OverlayPosition.TOP_LEFT

    def configure(self, **changes: Any) -> None:
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise TypeError(f"unknown tracker setting(s): {', '.join(unknown)}")
        for key, value in changes.items():
            setattr(self, key, value)
        self._normalize()
