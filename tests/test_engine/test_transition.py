"""Tests for the transition clock."""

import numpy as np
import pytest

from mandala.engine.config import FIXED_DURATION
from mandala.engine.transition import TransitionClock
from mandala.errors import ContractViolation


def test_value_halfway_and_after_end():
    clock = TransitionClock.timed(start_time=4.0, duration=4.0, start_value=3.0, end_value=5.0)
    assert clock.value(4.0) == 3.0
    assert clock.value(6.0) == 4.0
    assert clock.value(8.0) == 5.0
    assert clock.value(20.0) == 5.0


@pytest.mark.parametrize("duration", [0.05, 1.0, 3.7])
def test_percent_monotonic_bounded_and_saturating(duration):
    clock = TransitionClock.timed(10.0, duration, 0.0, 1.0)
    times = np.linspace(10.0, 10.0 + duration, 101)
    percents = [clock.percent_elapsed(t) for t in times]
    assert all(0.0 <= p <= 1.0 for p in percents)
    assert all(b >= a for a, b in zip(percents, percents[1:]))
    assert percents[0] == 0.0
    assert percents[-1] == 1.0
    for t in (10.0 + duration, 10.0 + duration * 1.5, 1e6):
        assert clock.percent_elapsed(t) == 1.0


def test_value_frozen_after_end():
    clock = TransitionClock.timed(0.0, 2.0, 1.0, 0.0)
    assert clock.value(2.0) == clock.value(3.0) == clock.value(100.0) == 0.0


def test_fixed_clock_is_static():
    clock = TransitionClock.fixed(0.75)
    assert clock.start_time == 0.0
    assert clock.duration == FIXED_DURATION
    assert clock.value(0.0) == 0.75
    assert clock.value(0.05) == 0.75
    assert clock.value(50.0) == 0.75


def test_fixed_clock_at_start_time():
    clock = TransitionClock.fixed(0.2, start_time=5.0)
    assert clock.value(5.0) == 0.2
    assert clock.end_time == pytest.approx(5.0 + FIXED_DURATION)


def test_time_before_start_is_a_contract_violation():
    clock = TransitionClock.timed(4.0, 1.0, 0.0, 1.0)
    with pytest.raises(ContractViolation):
        clock.percent_elapsed(3.9)
    with pytest.raises(ContractViolation):
        clock.value(0.0)


def test_settled():
    clock = TransitionClock.timed(0.0, 1.0, 0.0, 1.0)
    assert not clock.is_settled(0.5)
    assert clock.is_settled(1.0)
    assert clock.is_settled(2.0)


def test_out_of_range_target_extrapolates_to_target():
    clock = TransitionClock.timed(0.0, 1.0, 0.0, 2.5)
    assert clock.value(0.5) == 1.25
    assert clock.value(1.0) == 2.5
