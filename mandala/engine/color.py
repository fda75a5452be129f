"""RGBA color with unbounded float channels."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """Four independent float channels.

    No range is enforced: interpolating towards an out-of-range target can
    push channels outside [0, 1], and sinks decide how to clip.
    """

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_rgb255(cls, r: float, g: float, b: float, a: float = 1.0) -> Color:
        """Build from 0-255 channel values; alpha stays in [0, 1]."""
        return cls(r / 255.0, g / 255.0, b / 255.0, a)

    def lerp(self, other: Color, weight: float) -> Color:
        """Per-channel linear interpolation; weight 0 gives self, 1 gives other."""
        return Color(
            r=self.r + (other.r - self.r) * weight,
            g=self.g + (other.g - self.g) * weight,
            b=self.b + (other.b - self.b) * weight,
            a=self.a + (other.a - self.a) * weight,
        )

    def clipped(self) -> Color:
        """Channels clamped to [0, 1], for sinks that need displayable values."""
        return Color(*(min(1.0, max(0.0, v)) for v in self.as_tuple()))

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)


RED = Color(1.0, 0.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)

# Default open and closed petal colors
CRIMSON = Color.from_rgb255(220, 20, 60)
TURQUOISE = Color.from_rgb255(64, 224, 208, a=0.2)
