"""MandalaState — one endpoint of the open/closed animation."""

from __future__ import annotations

from dataclasses import dataclass

from mandala.engine.color import Color
from mandala.engine.transform import Transform


@dataclass(frozen=True, eq=False)
class MandalaState:
    """Petal color plus the three local pose transforms.

    The pose is applied to each petal as ``translate @ scale @ rotate``, so
    ``rotate`` turns the petal about its own origin before it is scaled and
    pushed outwards.
    """

    color: Color
    rotate: Transform
    translate: Transform
    scale: Transform

    @classmethod
    def from_pose(
        cls,
        color: Color,
        rotate_degrees: float = 0.0,
        translate: tuple[float, float] = (0.0, 0.0),
        scale: tuple[float, float] = (1.0, 1.0),
    ) -> MandalaState:
        return cls(
            color=color,
            rotate=Transform.rotate(rotate_degrees),
            translate=Transform.translate(*translate),
            scale=Transform.scale(*scale),
        )

    @property
    def pose(self) -> Transform:
        return self.translate @ self.scale @ self.rotate

    @staticmethod
    def interpolate(closed: MandalaState, open_: MandalaState, weight: float) -> MandalaState:
        """Blend every channel and every matrix element independently.

        Weight 0 gives ``closed``, weight 1 gives ``open_``; weights outside
        [0, 1] extrapolate. Interpolating colors channel by channel can pass
        through brighter or greyer mid-tones, so choose endpoint colors with
        that in mind.
        """
        return MandalaState(
            color=closed.color.lerp(open_.color, weight),
            rotate=closed.rotate.lerp(open_.rotate, weight),
            translate=closed.translate.lerp(open_.translate, weight),
            scale=closed.scale.lerp(open_.scale, weight),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MandalaState):
            return NotImplemented
        return (
            self.color == other.color
            and self.rotate == other.rotate
            and self.translate == other.translate
            and self.scale == other.scale
        )

    __hash__ = None  # type: ignore[assignment]
