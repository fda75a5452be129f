"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from mandala.engine.color import Color
from mandala.engine.state import MandalaState
from mandala.engine.transform import Transform

SAMPLES_DIR = Path(__file__).resolve().parent.parent / "samples"

# Petal outlines with known triangle counts (no curves, so no flattening)
TRIANGLE_D = "M 0 0 L 10 0 L 5 20 Z"  # 1 triangle
PENTAGON_D = "M 10 0 L 20 8 L 16 20 L 4 20 L 0 8 Z"  # convex, 3 triangles
SQUARE_WITH_HOLE_D = "M 0 0 L 10 0 L 10 10 L 0 10 Z M 3 3 L 7 3 L 7 7 L 3 7 Z"  # 8 triangles
FLAT_D = "M 0 0 L 10 0 L 20 0 Z"  # zero area

# Curved petal
PETAL_D = "M 0 0 C 20 -15 45 -12 70 0 C 45 12 20 15 0 0 Z"

PETAL_SVG = f'''<svg xmlns="http://www.w3.org/2000/svg" viewBox="-10 -30 90 60">
  <title>Petal</title>
  <g transform="translate(0 0)">
    <path d="{PETAL_D}" fill="#dc143c"/>
  </g>
</svg>'''

TWO_PATH_SVG = f'''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <circle cx="12" cy="12" r="10"/>
  <path d="{TRIANGLE_D}"/>
  <path d="{PENTAGON_D}"/>
</svg>'''

NO_PATH_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <circle cx="12" cy="12" r="10"/>
</svg>'''

COLOR_CLOSED = Color(0.0, 1.0, 1.0, 0.1)
COLOR_OPEN = Color(1.0, 0.0, 0.0, 1.0)


def open_state() -> MandalaState:
    return MandalaState(
        color=COLOR_OPEN,
        rotate=Transform.rotate(90),
        translate=Transform.translate(50.0, 0.0),
        scale=Transform.scale(1.0, 1.0),
    )


def closed_state() -> MandalaState:
    return MandalaState(
        color=COLOR_CLOSED,
        rotate=Transform.rotate(0.0),
        translate=Transform.translate(0.0, 0.0),
        scale=Transform.scale(0.1, 1.0),
    )


@pytest.fixture
def petal_svg() -> str:
    return PETAL_SVG


@pytest.fixture
def states() -> tuple[MandalaState, MandalaState]:
    """(open, closed) endpoint pair."""
    return open_state(), closed_state()
