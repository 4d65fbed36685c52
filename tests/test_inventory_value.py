from kphtracker.components.inventory_value import InventoryValueSampler, inventory_value
from kphtracker.events.bus import (
    EVENT_INVENTORY_CHANGED,
    EVENT_INVENTORY_VALUE_SAMPLED,
    EventBus,
)
from kphtracker.systems.inventory_value_system import InventoryValueSystem
from kphtracker.world import create_world


def test_sample_reports_signed_deltas():
    sampler = InventoryValueSampler(previous_value=1000)
    assert sampler.sample(1500) == 500
    assert sampler.sample(1200) == -300
    assert sampler.previous_value == 1200


def test_explicit_baseline_counts_as_primed():
    sampler = InventoryValueSampler(previous_value=0)
    assert sampler.primed is True
    assert sampler.sample(300) == 300
    assert InventoryValueSampler().primed is False


def test_first_sample_only_sets_baseline():
    sampler = InventoryValueSampler()
    assert sampler.sample(25_000) == 0
    assert sampler.sample(26_000) == 1000


def test_prime_without_value_rearms_baseline():
    sampler = InventoryValueSampler(previous_value=10)
    sampler.prime()
    assert sampler.sample(500) == 0
    sampler.prime(100)
    assert sampler.sample(150) == 50


def test_inventory_value_skips_empty_slots_and_unknown_prices():
    prices = {995: 1, 4151: 1_500_000, 536: 2_000}
    items = [(995, 10_000), (-1, 0), (0, 5), (4151, 1), (536, 3), (1234, 7)]
    assert inventory_value(items, prices.get) == 10_000 + 1_500_000 + 6_000


def test_system_emits_total_from_items():
    bus = EventBus()
    InventoryValueSystem(create_world(), bus)
    totals = []
    bus.subscribe(EVENT_INVENTORY_VALUE_SAMPLED, lambda sender, **kw: totals.append(kw["total"]))

    bus.emit(EVENT_INVENTORY_CHANGED, items=[(536, 2), (-1, 1)], prices={536: 2_000})
    bus.emit(EVENT_INVENTORY_CHANGED, total="7500")
    bus.emit(EVENT_INVENTORY_CHANGED, total="not a number")
    bus.emit(EVENT_INVENTORY_CHANGED)

    assert totals == [4_000, 7_500]


def test_system_sample_uses_shared_sampler():
    system = InventoryValueSystem(create_world(), EventBus())
    system.prime(1000)
    assert system.sample(1500) == 500
    assert system.previous_value == 1500
