"""Curve flattening — turn outline segments into polyline rings within a tolerance.

Each curve is split into n uniform parameter steps, with n chosen from a bound
on the curve's second derivative so that the chord error stays below the
tolerance: err <= M / (8 n^2) for a curve whose second derivative is bounded
by M.
"""

from __future__ import annotations

import logging
import math
from typing import Union

import numpy as np
from numpy.typing import NDArray
from svgpathtools import Arc, CubicBezier, Line, QuadraticBezier

from mandala.svg.path_data import Outline
from mandala.utils.geometry import drop_repeated_points

logger = logging.getLogger(__name__)

Segment = Union[Line, QuadraticBezier, CubicBezier, Arc]

# Upper bound on subdivisions of a single segment. At tolerance 0.01 this is
# only reached by curves hundreds of units long.
_MAX_STEPS = 1024


def segment_steps(segment: Segment, tolerance: float) -> int:
    """Number of straight pieces needed to keep ``segment`` within ``tolerance``."""
    if isinstance(segment, Line):
        return 1

    if isinstance(segment, QuadraticBezier):
        dd = abs(segment.start - 2 * segment.control + segment.end)
        # B'' = 2 (p0 - 2 p1 + p2)
        n = math.sqrt(2 * dd / (8 * tolerance))
    elif isinstance(segment, CubicBezier):
        dd = max(
            abs(segment.start - 2 * segment.control1 + segment.control2),
            abs(segment.control1 - 2 * segment.control2 + segment.end),
        )
        # |B''| <= 6 max(|p0 - 2 p1 + p2|, |p1 - 2 p2 + p3|)
        n = math.sqrt(6 * dd / (8 * tolerance))
    elif isinstance(segment, Arc):
        r = max(segment.radius.real, segment.radius.imag)
        sweep = abs(math.radians(segment.delta))
        if r <= tolerance:
            return 1
        step = 2 * math.acos(1 - tolerance / r)
        n = sweep / step
    else:
        raise TypeError(f"Unknown segment type: {type(segment).__name__}")

    steps = max(1, math.ceil(n))
    if steps > _MAX_STEPS:
        logger.debug(
            "Capping %s at %d steps (%d needed for tolerance %g)",
            type(segment).__name__, _MAX_STEPS, steps, tolerance,
        )
        return _MAX_STEPS
    return int(steps)


def flatten_segment(segment: Segment, tolerance: float) -> NDArray[np.complex128]:
    """Sample a segment at uniform t, excluding its end point."""
    n = segment_steps(segment, tolerance)
    if n == 1:
        return np.array([segment.start], dtype=np.complex128)
    t = np.arange(n, dtype=np.float64) / n
    points = np.asarray(segment.point(t), dtype=np.complex128)
    # Arc evaluation at t=0 is only approximately the start point
    points[0] = segment.start
    return points


def flatten_outline(outline: Outline, tolerance: float) -> list[NDArray[np.float64]]:
    """Flatten every subpath into a closed ring (Nx2, implicit closing edge).

    Open subpaths are closed implicitly, as fill rendering does. Rings with
    fewer than 3 distinct points are dropped.
    """
    if tolerance <= 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")

    rings: list[NDArray[np.float64]] = []
    for subpath in outline.subpaths:
        pieces = [flatten_segment(seg, tolerance) for seg in subpath]
        pieces.append(np.array([subpath.end], dtype=np.complex128))
        points = np.concatenate(pieces)
        ring = drop_repeated_points(np.column_stack([points.real, points.imag]))
        if len(ring) >= 3:
            rings.append(ring)
    return rings
