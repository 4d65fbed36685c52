from __future__ import annotations

from threading import RLock
from typing import Callable, Type, TypeVar

from esper import World

from kphtracker.components.inventory_value import InventoryValueSampler
from kphtracker.components.slayer_task import SlayerTaskState
from kphtracker.components.tracker_config import TrackerConfig
from kphtracker.components.tracking_state import TrackingState

T = TypeVar("T")


def _ensure_singleton(world: World, component_type: Type[T], factory: Callable[[], T]) -> T:
    for _, component in world.get_component(component_type):
        return component
    component = factory()
    world.create_entity(component)
    return component


def get_tracker_lock(world: World) -> RLock:
    """Lock shared by every system mutating or reading tracker state on ``world``."""
    lock = getattr(world, "tracker_lock", None)
    if lock is None:
        lock = RLock()
        setattr(world, "tracker_lock", lock)
    return lock


def get_tracker_config(world: World) -> TrackerConfig:
    return _ensure_singleton(world, TrackerConfig, TrackerConfig)


def get_tracking_state(world: World) -> TrackingState:
    return _ensure_singleton(world, TrackingState, TrackingState)


def get_slayer_task_state(world: World) -> SlayerTaskState:
    return _ensure_singleton(world, SlayerTaskState, SlayerTaskState)


def get_inventory_sampler(world: World) -> InventoryValueSampler:
    return _ensure_singleton(world, InventoryValueSampler, InventoryValueSampler)
