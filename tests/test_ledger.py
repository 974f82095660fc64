"""Tests for per-planet resource accounting."""

import pytest

from colony.errors import InsufficientResources
from colony.models import ResourceKind, ResourceLedger, Resources


def create_ledger(minerals=80, capacity=100):
    """Ledger with only minerals in play."""
    return ResourceLedger(
        capacity=Resources(minerals=capacity, gas=capacity, energy=capacity),
        available=Resources(minerals=minerals),
        planet_id="alpha",
    )


def assert_invariant(ledger):
    for kind in ResourceKind:
        available = ledger.available.get(kind)
        reserved = ledger.reserved.get(kind)
        assert available >= 0
        assert reserved >= 0
        assert available + reserved <= ledger.capacity.get(kind)


def test_reserve_moves_available_to_reserved():
    """Test the basic reservation scenario (80 available, cost 50)."""
    ledger = create_ledger()

    ledger.reserve(Resources(minerals=50))

    assert ledger.available.minerals == 30
    assert ledger.reserved.minerals == 50
    assert_invariant(ledger)


def test_reserve_insufficient_raises_without_change():
    """Test that a failed reservation leaves the ledger untouched."""
    ledger = create_ledger()

    with pytest.raises(InsufficientResources) as exc_info:
        ledger.reserve(Resources(minerals=90))

    assert exc_info.value.planet_id == "alpha"
    assert "minerals 90/80" in str(exc_info.value)
    assert ledger.available.minerals == 80
    assert ledger.reserved.is_zero()


def test_reserve_is_all_or_nothing_across_kinds():
    """Test that a multi-kind cost is not partially applied."""
    ledger = ResourceLedger(
        capacity=Resources(minerals=100, gas=100),
        available=Resources(minerals=100, gas=20),
    )

    with pytest.raises(InsufficientResources):
        ledger.reserve(Resources(minerals=10, gas=50))

    assert ledger.available == Resources(minerals=100, gas=20)
    assert ledger.reserved.is_zero()


def test_can_afford_is_dry_run():
    """Test that can_afford never mutates."""
    ledger = create_ledger()

    assert ledger.can_afford(Resources(minerals=80))
    assert not ledger.can_afford(Resources(minerals=81))
    assert ledger.available.minerals == 80
    assert ledger.reserved.is_zero()


def test_refund_restores_available():
    """Test that cancelling right after reserving restores the old balance."""
    ledger = create_ledger()
    reserved = ledger.reserve(Resources(minerals=50))

    wasted = ledger.refund(reserved)

    assert wasted.is_zero()
    assert ledger.available.minerals == 80
    assert ledger.reserved.minerals == 0


def test_refund_after_capacity_shrink_never_raises():
    """Test refund after storage shrank keeps the invariant and reports waste."""
    ledger = create_ledger()
    reserved = ledger.reserve(Resources(minerals=50))

    trimmed = ledger.set_capacity(Resources(minerals=60, gas=100, energy=100))
    assert trimmed.minerals == 20
    assert ledger.available.minerals == 10
    assert_invariant(ledger)

    wasted = ledger.refund(reserved)

    assert ledger.available.minerals + wasted.minerals == 60
    assert ledger.reserved.minerals == 0
    assert_invariant(ledger)


def test_refund_more_than_reserved_is_programming_error():
    """Test that releasing more than reserved raises ValueError."""
    ledger = create_ledger()
    ledger.reserve(Resources(minerals=10))

    with pytest.raises(ValueError, match="only 10 reserved"):
        ledger.refund(Resources(minerals=20))


def test_consume_does_not_return_resources():
    """Test that consuming a reservation spends it for good."""
    ledger = create_ledger()
    reserved = ledger.reserve(Resources(minerals=50))

    ledger.consume(reserved)

    assert ledger.available.minerals == 30
    assert ledger.reserved.minerals == 0


def test_produce_clamps_to_free_space():
    """Test that production beyond storage is wasted."""
    ledger = create_ledger()
    ledger.reserve(Resources(minerals=50))

    wasted = ledger.produce(Resources(minerals=40, gas=10))

    # 100 capacity - 30 available - 50 reserved = 20 free
    assert ledger.available.minerals == 50
    assert wasted.minerals == 20
    assert ledger.available.gas == 10
    assert wasted.gas == 0
    assert_invariant(ledger)


def test_fill_tops_up_to_capacity():
    """Test that fill leaves room only for reservations."""
    ledger = create_ledger()
    ledger.reserve(Resources(minerals=30))

    ledger.fill()

    assert ledger.available == Resources(minerals=70, gas=100, energy=100)
    assert_invariant(ledger)


def test_set_capacity_below_reserved_rejected():
    """Test that storage cannot shrink below reservations."""
    ledger = create_ledger()
    ledger.reserve(Resources(minerals=50))

    with pytest.raises(ValueError, match="below reserved"):
        ledger.set_capacity(Resources(minerals=40))


def test_starting_stock_must_fit():
    """Test ledger validation of the starting stock."""
    with pytest.raises(ValueError, match="exceeds capacity"):
        ResourceLedger(capacity=Resources(minerals=10), available=Resources(minerals=11))
