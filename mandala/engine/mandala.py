"""Mandala — N petals arranged evenly around a hub, animated between two states.

The only temporal state is one TransitionClock. It is either running
(percent < 1) or settled (percent == 1, value frozen at its target), and
``start_transition`` is the only way to start it running again. Each call
re-bases the new transition on the value the old one has reached at that
moment, so retargeting mid-flight never jumps.
"""

from __future__ import annotations

import logging
import math
from typing import Union

from mandala.engine.config import MandalaConfig
from mandala.engine.mesh import MutableMesh, TriangleSink
from mandala.engine.petal_source import PetalSource, StaticPetal
from mandala.engine.state import MandalaState
from mandala.engine.transform import Transform
from mandala.engine.transition import TransitionClock
from mandala.errors import ContractViolation, PathGrammarError, TessellationError
from mandala.svg.path_data import Outline

logger = logging.getLogger(__name__)

Vector = Union[float, tuple[float, float]]


def _pair(value: Vector) -> tuple[float, float]:
    if isinstance(value, (int, float)):
        return (float(value), float(value))
    x, y = value
    return (float(x), float(y))


class Mandala:
    """A flower-like set of petals with clock-smoothed open/close animation.

    Args:
        petals: Petal source (StaticPetal, FramePetals) or a bare Outline.
        position: Hub position in sink coordinates.
        center_scale: Scale applied to the whole mandala around the hub.
        petal_count: Number of petals N; petal k is turned by k * 360 / N degrees.
        open_state: Pose and color at openness 1.
        closed_state: Pose and color at openness 0.
        initial_value: Openness shown until the first transition.
        config: Tessellation tolerance and contract policy.
    """

    def __init__(
        self,
        petals: PetalSource | Outline,
        position: Vector,
        center_scale: Vector,
        petal_count: int,
        open_state: MandalaState,
        closed_state: MandalaState,
        initial_value: float = 0.0,
        config: MandalaConfig | None = None,
    ) -> None:
        if petal_count < 0:
            raise ValueError(f"petal_count must be >= 0, got {petal_count}")
        self.config = config or MandalaConfig()
        self.petals: PetalSource = StaticPetal(petals) if isinstance(petals, Outline) else petals
        self.open_state = open_state
        self.closed_state = closed_state

        self.center = Transform.translate(*_pair(position)) @ Transform.scale(*_pair(center_scale))
        angle = 360.0 / petal_count if petal_count else 0.0
        self.slot_rotations: tuple[Transform, ...] = tuple(
            Transform.rotate(angle * k) for k in range(petal_count)
        )

        self._frame_index: int | None = None
        self._petal = MutableMesh(self.petals.outline(None), tolerance=self.config.tolerance)
        self._clock = TransitionClock.fixed(initial_value, duration=self.config.fixed_duration)

    @property
    def petal_count(self) -> int:
        return len(self.slot_rotations)

    @property
    def clock(self) -> TransitionClock:
        return self._clock

    def _violation(self, message: str) -> None:
        if self.config.strict_contracts:
            raise ContractViolation(message)
        logger.warning("Contract violation ignored: %s", message)

    def _clock_time(self, now: float) -> float:
        """Apply the backdated-time policy: raise in strict mode, else clamp to the clock start."""
        if not math.isfinite(now) or now < self._clock.start_time:
            self._violation(f"time {now} is before transition start {self._clock.start_time}")
            return self._clock.start_time
        return now

    def start_transition(self, now: float, duration: float, target: float) -> None:
        """Animate from the value shown at ``now`` to ``target`` over ``duration`` seconds.

        For continuous motion from a sampled source, pick ``duration`` slightly
        longer than the expected interval between samples: the display lags by
        up to that much, but jitter in sample arrival is smoothed out. When a
        sample is later than ``duration``, the animation holds at the previous
        target until the next one arrives.

        A duration of 0 jumps straight to ``target``.
        """
        if not math.isfinite(target):
            self._violation(f"non-finite transition target {target!r}")
            return
        now = self._clock_time(now)
        current = self._clock.value(now)

        if not math.isfinite(duration) or duration < 0:
            self._violation(f"invalid transition duration {duration!r}")
            duration = 0.0

        if duration == 0:
            self._clock = TransitionClock.fixed(target, start_time=now, duration=self.config.fixed_duration)
        else:
            self._clock = TransitionClock.timed(now, duration, current, target)
        logger.debug("Start transition at %.3fs: current %.4f target %.4f over %.3fs", now, current, target, duration)

    def current_percent(self, now: float) -> float:
        """Fraction [0, 1] of the current transition that has elapsed."""
        return self._clock.percent_elapsed(self._clock_time(now))

    def current_value(self, now: float) -> float:
        """Openness at ``now``: 0 is closed, 1 is open."""
        return self._clock.value(self._clock_time(now))

    def is_settled(self, now: float) -> bool:
        return self.current_percent(now) >= 1.0

    def current_state(self, now: float) -> MandalaState:
        return MandalaState.interpolate(self.closed_state, self.open_state, self.current_value(now))

    def petal_transform(self, slot: int, state: MandalaState) -> Transform:
        """Full transform of petal ``slot``: center @ slot @ translate @ scale @ rotate."""
        return self.center @ self.slot_rotations[slot] @ state.translate @ state.scale @ state.rotate

    def _select_frame(self, frame_index: int | None) -> None:
        if frame_index == self._frame_index:
            return
        try:
            outline = self.petals.outline(frame_index)
        except (IndexError, PathGrammarError) as e:
            # Keep drawing the last good frame
            logger.warning("Petal frame %s unavailable, keeping previous shape: %s", frame_index, e)
            return
        self._petal.update_path(outline)
        self._frame_index = frame_index

    def draw(self, now: float, sink: TriangleSink, frame_index: int | None = None) -> int:
        """Tessellate every petal at its interpolated pose into ``sink``.

        Returns the number of triangles emitted. A petal whose outline cannot
        be tessellated is skipped for this frame.
        """
        state = self.current_state(now)
        self._select_frame(frame_index)
        self._petal.set_color(state.color)

        emitted = 0
        skipped = 0
        error: TessellationError | None = None
        for slot in range(self.petal_count):
            self._petal.set_transform(self.petal_transform(slot, state))
            try:
                emitted += self._petal.tessellate(sink)
            except TessellationError as e:
                skipped += 1
                error = e

        if skipped:
            logger.warning("Skipped %d/%d petals this frame: %s", skipped, self.petal_count, error)
        return emitted
