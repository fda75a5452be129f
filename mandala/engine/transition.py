"""Transition clock — one timed linear animation of the openness value."""

from __future__ import annotations

from dataclasses import dataclass

from mandala.engine.config import FIXED_DURATION
from mandala.errors import ContractViolation


@dataclass(frozen=True)
class TransitionClock:
    """Linear slide from ``start_value`` to ``end_value`` over ``duration`` seconds.

    The clock is immutable; re-targeting builds a new one. Duration is not
    validated here: a zero-duration ``timed`` clock divides by zero, so static
    poses use ``fixed`` instead.
    """

    start_time: float  # [sec] when the transition started
    duration: float  # [sec]
    start_value: float  # value at start_time
    end_value: float  # value from start_time + duration onwards

    @classmethod
    def timed(cls, start_time: float, duration: float, start_value: float, end_value: float) -> TransitionClock:
        return cls(start_time, duration, start_value, end_value)

    @classmethod
    def fixed(cls, value: float, start_time: float = 0.0, duration: float = FIXED_DURATION) -> TransitionClock:
        """A static pose: a short transition that starts and ends at ``value``."""
        return cls(start_time, duration, value, value)

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def percent_elapsed(self, now: float) -> float:
        """Fraction of the duration elapsed at ``now``, clamped to [0, 1]."""
        if now < self.start_time:
            raise ContractViolation(f"time {now} is before transition start {self.start_time}")
        if now >= self.end_time:
            return 1.0
        return min(1.0, max(0.0, (now - self.start_time) / self.duration))

    def value(self, now: float) -> float:
        return self.start_value + (self.end_value - self.start_value) * self.percent_elapsed(now)

    def is_settled(self, now: float) -> bool:
        return self.percent_elapsed(now) >= 1.0
