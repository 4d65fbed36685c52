from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True, slots=True)
class SlayerTaskSnapshot:
    name: str
    original_amount: int
    remaining: int
    completed: int
    progress_percentage: float


@dataclass(slots=True)
class SlayerTaskData:
    """An assigned slayer task and its remaining kill count."""

    task_name: str
    original_amount: int
    remaining: int

    def decrement_remaining(self) -> bool:
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True

    def completed(self) -> int:
        return self.original_amount - self.remaining

    def progress_percentage(self) -> float:
        if self.original_amount == 0:
            return 0.0
        return self.completed() / self.original_amount * 100.0

    def matches(self, npc_name: str | None, aliases: Iterable[str] = ()) -> bool:
        """Case-insensitive check whether ``npc_name`` counts towards this task."""
        if not npc_name:
            return False
        task = self.task_name.lower()
        npc = npc_name.lower()
        if task in npc or npc in task:
            return True
        return any(alias in npc for alias in aliases)

    def snapshot(self) -> SlayerTaskSnapshot:
        return SlayerTaskSnapshot(
            name=self.task_name,
            original_amount=self.original_amount,
            remaining=self.remaining,
            completed=self.completed(),
            progress_percentage=self.progress_percentage(),
        )


@dataclass
class SlayerTaskState:
    """Singleton component holding the active task, or None when there is no task."""
    task: Optional[SlayerTaskData] = None
