"""Sample feed — hands openness samples from a producer thread to the update loop.

The producer (a sensor decoder, a network listener) calls ``publish`` from its
own thread. The update loop calls ``drain`` once per tick; every pending sample
turns into exactly one ``start_transition`` call, so the last sample of a tick
is the one that ends up on screen.
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass

from mandala.engine.mandala import Mandala

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sample:
    timestamp: float  # [sec] producer clock, informational
    value: float  # openness, nominally [0, 1]


class SampleFeed:
    """Single-producer / single-consumer channel of openness samples."""

    def __init__(self, smoothing_duration: float = 0.5, maxsize: int = 0) -> None:
        if smoothing_duration < 0:
            raise ValueError(f"smoothing_duration must be >= 0, got {smoothing_duration}")
        self.smoothing_duration = smoothing_duration
        self._queue: queue.Queue[Sample] = queue.Queue(maxsize=maxsize)
        self.received = 0
        self.dropped = 0

    def publish(self, timestamp: float, value: float) -> bool:
        """Producer side. Returns False when the queue is full and the sample was dropped."""
        try:
            self._queue.put_nowait(Sample(timestamp, value))
        except queue.Full:
            self.dropped += 1
            logger.debug("Sample queue full, dropped sample at %.3f", timestamp)
            return False
        return True

    def pending(self) -> int:
        return self._queue.qsize()

    def drain(self, mandala: Mandala, now: float) -> int:
        """Consumer side: apply every pending sample at ``now``. Never blocks.

        Non-finite values are passed on as well; the mandala's contract policy
        decides whether they raise or are ignored.

        Returns the number of samples applied.
        """
        applied = 0
        while True:
            try:
                sample = self._queue.get_nowait()
            except queue.Empty:
                break
            mandala.start_transition(now, self.smoothing_duration, sample.value)
            applied += 1
        self.received += applied
        return applied
