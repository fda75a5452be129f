"""Mandala preset models — open/closed endpoints and layout as JSON."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from mandala.engine.color import CRIMSON, TURQUOISE, Color
from mandala.engine.state import MandalaState
from mandala.errors import PathSourceError


class ColorModel(BaseModel):
    r: float
    g: float
    b: float
    a: float = 1.0

    def to_color(self) -> Color:
        return Color(self.r, self.g, self.b, self.a)

    @classmethod
    def from_color(cls, color: Color) -> ColorModel:
        return cls(r=color.r, g=color.g, b=color.b, a=color.a)


class PoseModel(BaseModel):
    color: ColorModel
    rotate_degrees: float = Field(default=0.0, description="Petal turn about its own origin")
    translate: tuple[float, float] = Field(default=(0.0, 0.0), description="Offset from the hub")
    scale: tuple[float, float] = Field(default=(1.0, 1.0), description="Petal stretch (x, y)")

    def to_state(self) -> MandalaState:
        return MandalaState.from_pose(
            self.color.to_color(),
            rotate_degrees=self.rotate_degrees,
            translate=self.translate,
            scale=self.scale,
        )


class MandalaPreset(BaseModel):
    """Everything needed to build a Mandala except the petal shape."""

    petal_count: int = Field(default=12, ge=0)
    position: tuple[float, float] = (512.0, 512.0)
    center_scale: tuple[float, float] = (2.0, 2.0)
    initial_value: float = 0.0
    open: PoseModel = Field(
        default_factory=lambda: PoseModel(
            color=ColorModel.from_color(CRIMSON),
            rotate_degrees=90.0,
            translate=(50.0, 0.0),
            scale=(1.0, 1.0),
        )
    )
    closed: PoseModel = Field(
        default_factory=lambda: PoseModel(
            color=ColorModel.from_color(TURQUOISE),
            rotate_degrees=0.0,
            translate=(0.0, 0.0),
            scale=(0.1, 1.0),
        )
    )

    def to_states(self) -> tuple[MandalaState, MandalaState]:
        """Returns (open, closed)."""
        return self.open.to_state(), self.closed.to_state()

    @classmethod
    def load(cls, path: str | Path) -> MandalaPreset:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PathSourceError(f"Can not read preset '{path}': {e}") from e
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise ValueError(f"Invalid preset '{path}': {e}") from e
