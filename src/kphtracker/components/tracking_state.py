from dataclasses import dataclass
from typing import Optional


@dataclass
class TrackingState:
    """Singleton component describing which NPC the overlay follows."""
    tracked_npc: Optional[str] = None
    is_tracking: bool = False
    tick_count: int = 0

    def select(self, name: Optional[str]) -> None:
        self.tracked_npc = name
        self.is_tracking = name is not None

    @property
    def active(self) -> bool:
        return self.is_tracking and self.tracked_npc is not None
