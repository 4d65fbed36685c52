from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Optional


def truncate_to_minute(timestamp: datetime) -> datetime:
    return timestamp.replace(second=0, microsecond=0)


def whole_minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


@dataclass(frozen=True, slots=True)
class LedgerSnapshot:
    """Immutable view of a ledger handed to renderers."""

    name: str
    kills: int
    total_gold: int
    first_kill: Optional[datetime]
    last_kill: Optional[datetime]
    kills_per_hour: float
    recent_kills_per_hour: float
    recent_window_minutes: int
    gold_per_hour: float
    average_gold_per_kill: float
    session_minutes: int


@dataclass(slots=True)
class KillLedger:
    """Kill history for a single NPC name, bucketed to the minute.

    buckets: minute-truncated timestamp -> kills observed in that minute.
    total_kills: always equals ``sum(buckets.values())``.
    total_gold: gold attributed to this NPC. Retention pruning leaves it untouched.
    first_kill / last_kill: smallest and largest bucket key, ``None`` when empty.
    """

    buckets: Dict[datetime, int] = field(default_factory=dict)
    total_kills: int = 0
    total_gold: int = 0
    first_kill: Optional[datetime] = None
    last_kill: Optional[datetime] = None

    def add_kill(self, timestamp: datetime) -> None:
        key = truncate_to_minute(timestamp)
        self.buckets[key] = self.buckets.get(key, 0) + 1
        self.total_kills += 1
        if self.first_kill is None or key < self.first_kill:
            self.first_kill = key
        if self.last_kill is None or key > self.last_kill:
            self.last_kill = key

    def add_gold(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"gold amount must be non-negative, got {amount}")
        self.total_gold += amount

    def remove_older_than(self, cutoff: datetime) -> None:
        for key in [k for k in self.buckets if k < cutoff]:
            del self.buckets[key]
        self._recalculate()

    def _recalculate(self) -> None:
        self.total_kills = sum(self.buckets.values())
        if self.buckets:
            self.first_kill = min(self.buckets)
            self.last_kill = max(self.buckets)
        else:
            self.first_kill = None
            self.last_kill = None

    def _span_hours(self) -> float:
        if self.first_kill is None or self.last_kill is None:
            return 0.0
        return whole_minutes_between(self.first_kill, self.last_kill) / 60.0

    def kills_per_hour(self) -> float:
        if self.total_kills == 0:
            return 0.0
        hours = self._span_hours()
        if hours <= 0.0:
            return 0.0
        return self.total_kills / hours

    def recent_kills_per_hour(self, window_minutes: int, now: datetime) -> float:
        if window_minutes <= 0:
            return 0.0
        cutoff = now - timedelta(minutes=window_minutes)
        recent = sum(count for key, count in self.buckets.items() if key > cutoff)
        if recent == 0:
            return 0.0
        return recent / (window_minutes / 60.0)

    def gold_per_hour(self) -> float:
        if self.total_gold == 0 or self.total_kills == 0:
            return 0.0
        hours = self._span_hours()
        if hours <= 0.0:
            return 0.0
        return self.total_gold / hours

    def average_gold_per_kill(self) -> float:
        if self.total_kills == 0:
            return 0.0
        return self.total_gold / self.total_kills

    def session_minutes(self, now: datetime) -> int:
        if self.first_kill is None:
            return 0
        return max(0, whole_minutes_between(self.first_kill, now))

    def reset(self) -> None:
        self.buckets.clear()
        self.total_kills = 0
        self.total_gold = 0
        self.first_kill = None
        self.last_kill = None

    def snapshot(self, name: str, now: datetime, window_minutes: int) -> LedgerSnapshot:
        return LedgerSnapshot(
            name=name,
            kills=self.total_kills,
            total_gold=self.total_gold,
            first_kill=self.first_kill,
            last_kill=self.last_kill,
            kills_per_hour=self.kills_per_hour(),
            recent_kills_per_hour=self.recent_kills_per_hour(window_minutes, now),
            recent_window_minutes=window_minutes,
            gold_per_hour=self.gold_per_hour(),
            average_gold_per_kill=self.average_gold_per_kill(),
            session_minutes=self.session_minutes(now),
        )
