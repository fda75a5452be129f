"""Tests for the sample feed."""

import math
import threading

import pytest

from mandala.engine.config import MandalaConfig
from mandala.engine.mandala import Mandala
from mandala.errors import ContractViolation
from mandala.feed import SampleFeed
from mandala.svg.path_data import parse_path_data
from tests.conftest import TRIANGLE_D, closed_state, open_state


@pytest.fixture
def mandala() -> Mandala:
    return Mandala(parse_path_data(TRIANGLE_D), (0, 0), 1, 3, open_state(), closed_state())


def test_drain_applies_every_sample(mandala):
    feed = SampleFeed(smoothing_duration=1.0)
    feed.publish(0.0, 0.2)
    feed.publish(0.1, 0.6)
    assert feed.pending() == 2

    assert feed.drain(mandala, 1.0) == 2
    assert feed.pending() == 0
    assert feed.received == 2
    # The last sample is the target; the first one was re-based at the same instant
    assert mandala.current_value(1.0) == 0.0
    assert mandala.current_value(2.0) == 0.6


def test_drain_with_nothing_pending_leaves_clock(mandala):
    clock = mandala.clock
    assert SampleFeed().drain(mandala, 5.0) == 0
    assert mandala.clock is clock


def test_bounded_queue_drops_overflow():
    feed = SampleFeed(maxsize=1)
    assert feed.publish(0.0, 0.5)
    assert not feed.publish(0.1, 0.7)
    assert feed.dropped == 1
    assert feed.pending() == 1


def test_zero_smoothing_snaps(mandala):
    feed = SampleFeed(smoothing_duration=0.0)
    feed.publish(0.0, 1.0)
    feed.drain(mandala, 3.0)
    assert mandala.current_value(3.0) == 1.0


def test_negative_smoothing_rejected():
    with pytest.raises(ValueError):
        SampleFeed(smoothing_duration=-0.1)


def test_non_finite_sample_reaches_contract_policy(mandala):
    feed = SampleFeed()
    feed.publish(0.0, math.nan)
    with pytest.raises(ContractViolation):
        feed.drain(mandala, 1.0)

    release = Mandala(
        parse_path_data(TRIANGLE_D), (0, 0), 1, 3, open_state(), closed_state(),
        config=MandalaConfig(strict_contracts=False),
    )
    feed.publish(0.0, math.nan)
    feed.publish(0.1, 0.4)
    assert feed.drain(release, 1.0) == 2
    assert release.current_value(1.5) == 0.4


def test_publish_from_producer_thread(mandala):
    feed = SampleFeed(smoothing_duration=0.5)

    def produce():
        for i in range(50):
            feed.publish(i * 0.01, i / 49)

    producer = threading.Thread(target=produce)
    producer.start()
    producer.join()

    assert feed.drain(mandala, 10.0) == 50
    assert mandala.current_value(10.5) == 1.0
