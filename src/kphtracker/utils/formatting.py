"""Text formatting shared by the overlay and panel read models."""
from __future__ import annotations


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def _decimal(value: float) -> str:
    text = f"{value:,.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_kph(kph: float) -> str:
    if kph <= 0:
        return "0"
    return _decimal(kph)


def format_gp(gp: float) -> str:
    """Abbreviate gold amounts: ``1.5M``, ``12.3K``, ``999``."""
    if gp >= 1_000_000:
        return _decimal(gp / 1_000_000) + "M"
    if gp >= 1_000:
        return _decimal(gp / 1_000) + "K"
    return f"{int(gp):,}"


def format_duration_minutes(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes}m"
    return f"{minutes // 60}h {minutes % 60}m"


def format_estimated_time(hours: float) -> str:
    if hours < 1:
        minutes = _round_half_up(hours * 60)
        if minutes < 60:
            return f"{minutes}m"
        return "1h 0m"
    whole_hours = int(hours)
    minutes = _round_half_up((hours - whole_hours) * 60)
    if minutes == 60:
        # 1h 59.7m rounds up into the next hour
        whole_hours += 1
        minutes = 0
    return f"{whole_hours}h {minutes}m"


def format_percentage(value: float) -> str:
    return f"{value:.1f}%"
