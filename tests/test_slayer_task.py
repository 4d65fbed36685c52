import pytest

from kphtracker.components.slayer_task import SlayerTaskData
from kphtracker.events.bus import (
    EVENT_SLAYER_TASK_ASSIGNED,
    EVENT_SLAYER_TASK_CHANGED,
    EVENT_SLAYER_TASK_CLEARED,
    EVENT_SLAYER_TASK_ENDED,
    EVENT_SLAYER_TASK_PROGRESS,
    EventBus,
)
from kphtracker.systems.slayer_task_system import SlayerTaskSystem
from kphtracker.world import create_world


def _system(**kwargs):
    bus = EventBus()
    world = create_world()
    return SlayerTaskSystem(world, bus, **kwargs), bus


def test_progress_after_matching_kills():
    task = SlayerTaskData("Gargoyles", 50, 50)
    for _ in range(30):
        task.decrement_remaining()
    assert task.completed() == 30
    assert task.progress_percentage() == pytest.approx(60.0)


def test_remaining_never_below_zero():
    task = SlayerTaskData("Drakes", 3, 3)
    for _ in range(10):
        task.decrement_remaining()
    assert task.remaining == 0
    assert task.progress_percentage() == pytest.approx(100.0)


def test_progress_zero_for_empty_task():
    task = SlayerTaskData("Wyrms", 0, 0)
    assert task.progress_percentage() == 0.0


@pytest.mark.parametrize(
    "npc_name",
    ["Gargoyle", "gargoyles", "Grotesque Guardians"],
)
def test_matches_name_and_aliases(npc_name):
    system, _ = _system()
    system.on_task_observed("Gargoyles", 10)
    assert system.matches(npc_name)


def test_matches_rejects_unrelated_names():
    system, _ = _system()
    assert not system.matches("Gargoyle")
    system.on_task_observed("Bloodvelds", 10)
    assert system.matches("Mutated Bloodveld")
    assert not system.matches("Abyssal demon")
    assert not system.matches(None)


def test_custom_aliases_extend_defaults():
    system, _ = _system(aliases={"Hydras": ["Ancient hydra"], "Turoth": ["Turoth guardian"]})
    assert "alchemical hydra" in system.aliases_for("hydras")
    assert "ancient hydra" in system.aliases_for("Hydras")
    system.on_task_observed("Turoth", 5)
    assert system.matches("Turoth guardian")


def test_new_task_starts_full_and_resync_overwrites_remaining():
    system, bus = _system()
    assigned = []
    bus.subscribe(EVENT_SLAYER_TASK_ASSIGNED, lambda sender, **kw: assigned.append(kw))

    system.on_task_observed("Gargoyles", 50)
    system.on_matching_kill()
    system.on_matching_kill()
    assert system.current_task.remaining == 48

    system.on_task_observed("Gargoyles", 45)
    assert system.current_task.remaining == 45
    assert system.current_task.original_amount == 50
    assert assigned == [{"name": "Gargoyles", "amount": 50}]

    system.on_task_observed("Drakes", 120)
    snap = system.snapshot()
    assert (snap.name, snap.original_amount, snap.remaining) == ("Drakes", 120, 120)
    assert len(assigned) == 2


def test_task_name_comparison_is_case_sensitive():
    system, bus = _system()
    assigned = []
    bus.subscribe(EVENT_SLAYER_TASK_ASSIGNED, lambda sender, **kw: assigned.append(kw))
    system.on_task_observed("Gargoyles", 50)
    system.on_task_observed("gargoyles", 40)
    assert len(assigned) == 2
    assert system.current_task.original_amount == 40


def test_matching_kill_without_task_is_noop():
    system, bus = _system()
    progress = []
    bus.subscribe(EVENT_SLAYER_TASK_PROGRESS, lambda sender, **kw: progress.append(kw))
    assert system.on_matching_kill() is False
    assert progress == []


def test_matching_kill_emits_progress():
    system, bus = _system()
    progress = []
    bus.subscribe(EVENT_SLAYER_TASK_PROGRESS, lambda sender, **kw: progress.append(kw))
    system.on_task_observed("Wyrms", 2)
    system.on_matching_kill()
    system.on_matching_kill()
    system.on_matching_kill()
    assert progress == [
        {"name": "Wyrms", "remaining": 1, "completed": 1},
        {"name": "Wyrms", "remaining": 0, "completed": 2},
    ]


def test_creature_id_resolution_via_bus():
    system, bus = _system()
    bus.emit(EVENT_SLAYER_TASK_CHANGED, creature_id=30, size=50)
    assert system.current_task.task_name == "Gargoyles"

    bus.emit(EVENT_SLAYER_TASK_CHANGED, creature_id=999, size=50)
    assert system.current_task is None


def test_integrator_can_extend_task_names():
    system, bus = _system(task_names={90: "Araxytes"})
    bus.emit(EVENT_SLAYER_TASK_CHANGED, creature_id=90, size=12)
    assert system.current_task.task_name == "Araxytes"
    assert system.resolve_task_name(1) == "Crawling Hands"


@pytest.mark.parametrize(
    "payload",
    [
        {"creature_id": 30, "size": 0},
        {"creature_id": 0, "size": 25},
        {"creature_id": -4, "size": 25},
        {"name": "Gargoyles", "size": -1},
        {"size": 10},
    ],
)
def test_non_positive_or_unresolved_task_clears(payload):
    system, bus = _system()
    system.on_task_observed("Drakes", 10)
    bus.emit(EVENT_SLAYER_TASK_CHANGED, **payload)
    assert system.current_task is None


def test_malformed_size_is_ignored():
    system, bus = _system()
    system.on_task_observed("Drakes", 10)
    bus.emit(EVENT_SLAYER_TASK_CHANGED, name="Drakes", size="lots")
    assert system.current_task.remaining == 10


def test_cleared_event_ends_task_once():
    system, bus = _system()
    ended = []
    bus.subscribe(EVENT_SLAYER_TASK_ENDED, lambda sender, **kw: ended.append(kw["name"]))
    system.on_task_observed("Hydras", 100)
    bus.emit(EVENT_SLAYER_TASK_CLEARED)
    bus.emit(EVENT_SLAYER_TASK_CLEARED)
    assert system.snapshot() is None
    assert ended == ["Hydras"]
