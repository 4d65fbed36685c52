"""Line models for the tracker overlay and side panel.

Drawing belongs to the host UI; these builders decide which lines appear,
what they say and which colour tier they use.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from kphtracker.components.tracker_config import TrackerConfig
from kphtracker.constants import (
    COLOR_CYAN,
    COLOR_GREEN,
    COLOR_HIGHLIGHT,
    COLOR_ORANGE,
    COLOR_RED,
    COLOR_SLAYER,
    COLOR_TEXT,
    COLOR_TITLE,
    COLOR_WHITE,
    COLOR_YELLOW,
    GP_PER_HOUR_HIGH,
    GP_PER_HOUR_LOW,
    GP_PER_HOUR_MEDIUM,
    KPH_HIGH,
    KPH_MEDIUM,
    PROGRESS_TIERS,
)
from kphtracker.systems.tracking_system import TrackingSystem
from kphtracker.utils.formatting import (
    format_duration_minutes,
    format_gp,
    format_kph,
    format_percentage,
)

Color = Tuple[int, int, int]

OVERLAY_TITLE = "NPC KPH Tracker"


@dataclass(frozen=True, slots=True)
class OverlayLine:
    label: str
    value: str = ""
    color: Color = COLOR_TEXT
    is_title: bool = False


@dataclass(frozen=True, slots=True)
class PanelRow:
    name: str
    kills: int
    kph: str
    recent_kph: str
    total_gold: str
    is_tracked: bool


def kph_color(kph: float) -> Color:
    if kph >= KPH_HIGH:
        return COLOR_GREEN
    if kph >= KPH_MEDIUM:
        return COLOR_YELLOW
    if kph > 0:
        return COLOR_ORANGE
    return COLOR_RED


def progress_color(progress: float) -> Color:
    high, medium, low = PROGRESS_TIERS
    if progress >= high:
        return COLOR_GREEN
    if progress >= medium:
        return COLOR_YELLOW
    if progress >= low:
        return COLOR_ORANGE
    return COLOR_RED


def gold_per_hour_color(gp_per_hour: float) -> Color:
    if gp_per_hour >= GP_PER_HOUR_HIGH:
        return COLOR_GREEN
    if gp_per_hour >= GP_PER_HOUR_MEDIUM:
        return COLOR_YELLOW
    if gp_per_hour >= GP_PER_HOUR_LOW:
        return COLOR_ORANGE
    if gp_per_hour > 0:
        return COLOR_WHITE
    return COLOR_RED


def build_overlay_lines(
    tracking: TrackingSystem,
    config: TrackerConfig,
    now: Optional[datetime] = None,
) -> List[OverlayLine]:
    """Lines for the overlay, or an empty list when nothing should be shown."""
    if not config.show_overlay or not tracking.is_tracking:
        return []
    data = tracking.tracked_ledger(now)
    if data is None or data.kills == 0:
        return []

    task = tracking.slayer_task()
    is_slayer_task = task is not None and tracking.tracked_is_slayer_task()
    lines: List[OverlayLine] = [OverlayLine(OVERLAY_TITLE, color=COLOR_TITLE, is_title=True)]

    display_name = f"{data.name} (Slayer)" if is_slayer_task else data.name
    lines.append(OverlayLine("Tracking:", display_name, COLOR_SLAYER if is_slayer_task else COLOR_HIGHLIGHT))

    if config.show_slayer_info and is_slayer_task:
        lines.append(OverlayLine("Task Progress:", f"{task.completed}/{task.original_amount}", COLOR_CYAN))
        lines.append(OverlayLine("Remaining:", str(task.remaining), COLOR_ORANGE))
        lines.append(
            OverlayLine(
                "Progress:",
                format_percentage(task.progress_percentage),
                progress_color(task.progress_percentage),
            )
        )

    if config.show_kill_count:
        lines.append(OverlayLine("Kills:", str(data.kills), COLOR_WHITE))

    if config.show_total_kph:
        lines.append(OverlayLine("Total KPH:", format_kph(data.kills_per_hour), kph_color(data.kills_per_hour)))

    if config.show_recent_kph:
        lines.append(
            OverlayLine(
                f"Recent KPH ({data.recent_window_minutes}m):",
                format_kph(data.recent_kills_per_hour),
                kph_color(data.recent_kills_per_hour),
            )
        )

    if config.show_time_estimate and is_slayer_task:
        estimate = tracking.estimated_time_remaining(now=now)
        if estimate is not None:
            lines.append(OverlayLine("Est. Time:", estimate, COLOR_GREEN))

    if config.show_gp_tracking:
        if data.total_gold > 0:
            lines.append(OverlayLine("Total GP:", format_gp(data.total_gold), COLOR_YELLOW))
        if config.show_avg_gp_per_kill and data.average_gold_per_kill > 0:
            lines.append(OverlayLine("Avg GP/Kill:", format_gp(int(data.average_gold_per_kill)), COLOR_GREEN))
        if config.show_gp_per_hour and data.gold_per_hour > 0:
            lines.append(
                OverlayLine(
                    "GP/Hour:",
                    format_gp(int(data.gold_per_hour)),
                    gold_per_hour_color(data.gold_per_hour),
                )
            )

    if data.first_kill is not None:
        lines.append(OverlayLine("Session:", format_duration_minutes(data.session_minutes), COLOR_CYAN))

    return lines


def build_panel_rows(tracking: TrackingSystem, now: Optional[datetime] = None) -> List[PanelRow]:
    """One summary row per tracked NPC, most kills first."""
    tracked = tracking.tracked_npc
    snapshots = sorted(tracking.ledgers(now).values(), key=lambda s: (-s.kills, s.name))
    return [
        PanelRow(
            name=snap.name,
            kills=snap.kills,
            kph=format_kph(snap.kills_per_hour),
            recent_kph=format_kph(snap.recent_kills_per_hour),
            total_gold=format_gp(snap.total_gold),
            is_tracked=snap.name == tracked,
        )
        for snap in snapshots
    ]
