from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Mapping

from esper import World

from kphtracker.components.tracker_config import TrackerConfig
from kphtracker.events.bus import EventBus
from kphtracker.systems.inventory_value_system import InventoryValueSystem
from kphtracker.systems.slayer_task_system import SlayerTaskSystem
from kphtracker.systems.tracking_system import TrackingSystem
from kphtracker.utils.tracker_state import (
    get_inventory_sampler,
    get_slayer_task_state,
    get_tracker_lock,
    get_tracking_state,
)


def create_world(config: TrackerConfig | None = None) -> World:
    """Create a world holding the tracker's singleton components."""
    world = World()
    world.create_entity(config or TrackerConfig())
    get_tracking_state(world)
    get_slayer_task_state(world)
    get_inventory_sampler(world)
    get_tracker_lock(world)
    return world


@dataclass
class Tracker:
    """Bundle of the world, bus and systems that make up one tracker instance."""
    world: World
    event_bus: EventBus
    config: TrackerConfig
    slayer_tasks: SlayerTaskSystem
    inventory: InventoryValueSystem
    tracking: TrackingSystem


def create_tracker(
    event_bus: EventBus | None = None,
    config: TrackerConfig | None = None,
    *,
    clock: Callable[[], datetime] | None = None,
    initial_inventory_value: int | None = None,
    task_names: Mapping[int, str] | None = None,
    aliases: Mapping[str, Iterable[str]] | None = None,
) -> Tracker:
    event_bus = event_bus or EventBus()
    config = config or TrackerConfig()
    world = create_world(config)
    slayer_tasks = SlayerTaskSystem(world, event_bus, task_names=task_names, aliases=aliases)
    inventory = InventoryValueSystem(world, event_bus)
    if initial_inventory_value is not None:
        inventory.prime(initial_inventory_value)
    tracking = TrackingSystem(
        world,
        event_bus,
        slayer_tasks=slayer_tasks,
        inventory=inventory,
        clock=clock,
    )
    return Tracker(
        world=world,
        event_bus=event_bus,
        config=config,
        slayer_tasks=slayer_tasks,
        inventory=inventory,
        tracking=tracking,
    )
