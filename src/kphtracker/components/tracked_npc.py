from dataclasses import dataclass


@dataclass(slots=True)
class TrackedNpc:
    """Marks a ledger entity with the NPC display name it aggregates."""
    name: str
