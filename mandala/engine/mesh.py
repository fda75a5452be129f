"""Tessellation — petal outlines to colored triangles.

MutableMesh owns one outline plus the color and transform to draw it with.
Fill triangulation runs once per (outline, tolerance) in the outline's own
coordinates and is cached; each ``tessellate`` call only maps the cached
triangles through the current transform and pushes them into a sink.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

import numpy as np
import shapely
from numpy.typing import NDArray
from shapely.errors import GEOSException
from shapely.geometry import Polygon
from shapely.ops import unary_union

from mandala.engine.color import RED, Color
from mandala.engine.config import DEFAULT_TOLERANCE
from mandala.engine.transform import Transform
from mandala.errors import TessellationError
from mandala.svg.flatten import flatten_outline
from mandala.svg.parser import load_svg
from mandala.svg.path_data import Outline

logger = logging.getLogger(__name__)

Vertex = tuple[float, float]


@dataclass(frozen=True)
class Triangle:
    """Three vertices in sink coordinates, all carrying one color."""

    vertices: tuple[Vertex, Vertex, Vertex]
    color: Color


@runtime_checkable
class TriangleSink(Protocol):
    """Anything that accepts colored triangles in a common coordinate space."""

    def add_triangle(self, triangle: Triangle) -> None: ...


class Mesh:
    """Collecting sink: keeps every triangle it receives, in order."""

    def __init__(self) -> None:
        self.triangles: list[Triangle] = []

    def add_triangle(self, triangle: Triangle) -> None:
        self.triangles.append(triangle)

    def extend(self, other: Mesh) -> None:
        self.triangles.extend(other.triangles)

    def clear(self) -> None:
        self.triangles.clear()

    def vertices(self) -> NDArray[np.float64]:
        """All vertices as a (T, 3, 2) array."""
        if not self.triangles:
            return np.empty((0, 3, 2))
        return np.array([t.vertices for t in self.triangles], dtype=np.float64)

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self):
        return iter(self.triangles)


def _polygon_parts(geom) -> list[Polygon]:
    if isinstance(geom, Polygon):
        return [] if geom.is_empty else [geom]
    if hasattr(geom, "geoms"):
        return [p for g in geom.geoms for p in _polygon_parts(g)]
    return []


def fill_polygon(outline: Outline, tolerance: float):
    """Filled area of an outline under the even-odd rule, as a shapely geometry."""
    rings = flatten_outline(outline, tolerance)
    if not rings:
        raise TessellationError("Outline has no closed area to fill")

    try:
        area = None
        for ring in rings:
            poly = Polygon(ring)
            if not poly.is_valid:
                # Self-intersecting ring: split into its valid pieces
                poly = unary_union(_polygon_parts(shapely.make_valid(poly)))
            area = poly if area is None else area.symmetric_difference(poly)
    except GEOSException as e:
        raise TessellationError(f"Outline geometry could not be resolved: {e}") from e

    parts = _polygon_parts(area)
    if not parts or sum(p.area for p in parts) < tolerance * tolerance:
        raise TessellationError("Outline is degenerate (zero area within tolerance)")
    return parts[0] if len(parts) == 1 else unary_union(parts)


def triangulate(outline: Outline, tolerance: float) -> NDArray[np.float64]:
    """Constrained Delaunay triangulation of the filled outline, as (T, 3, 2).

    No Steiner points are added: a simple polygon with v vertices gives v - 2
    triangles.
    """
    area = fill_polygon(outline, tolerance)
    try:
        triangles = shapely.constrained_delaunay_triangles(area)
    except GEOSException as e:
        raise TessellationError(f"Triangulation failed: {e}") from e

    result = [np.asarray(tri.exterior.coords, dtype=np.float64)[:3] for tri in _polygon_parts(triangles)]
    if not result:
        raise TessellationError("Triangulation produced no triangles")
    return np.stack(result)


class MutableMesh:
    """A renderable petal outline with a runtime color and transform.

    ``set_color`` and ``set_transform`` only record the new value; it is used
    by the next ``tessellate`` call.
    """

    def __init__(
        self,
        outline: Outline,
        color: Color = RED,
        transform: Transform | None = None,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        self._outline = outline
        self._color = color
        self._transform = transform or Transform.identity()
        self.tolerance = tolerance
        self._cache: dict[float, NDArray[np.float64]] = {}
        # Failure message per tolerance for outlines that can not be filled
        self._failures: dict[float, str] = {}

    @classmethod
    def from_svg(cls, path: str | Path, color: Color = RED) -> MutableMesh:
        return cls(load_svg(path), color=color)

    @property
    def outline(self) -> Outline:
        return self._outline

    @property
    def color(self) -> Color:
        return self._color

    @property
    def transform(self) -> Transform:
        return self._transform

    def set_color(self, color: Color) -> MutableMesh:
        self._color = color
        return self

    def set_transform(self, transform: Transform) -> MutableMesh:
        self._transform = transform
        return self

    def update_path(self, outline: Outline) -> MutableMesh:
        """Swap the geometry; color and transform are kept."""
        if outline is not self._outline:
            self._outline = outline
            self._cache.clear()
            self._failures.clear()
        return self

    def local_triangles(self, tolerance: float | None = None) -> NDArray[np.float64]:
        """Triangles in outline coordinates (before the transform)."""
        tol = self.tolerance if tolerance is None else tolerance
        cached = self._cache.get(tol)
        if cached is None:
            if tol in self._failures:
                raise TessellationError(self._failures[tol])
            try:
                cached = triangulate(self._outline, tol)
            except TessellationError as e:
                self._failures[tol] = str(e)
                raise
            cached.setflags(write=False)
            self._cache[tol] = cached
            logger.debug("Tessellated outline at tolerance %g: %d triangles", tol, len(cached))
        return cached

    def triangle_count(self, tolerance: float | None = None) -> int:
        return len(self.local_triangles(tolerance))

    def tessellate(self, sink: TriangleSink, tolerance: float | None = None) -> int:
        """Emit the outline as triangles mapped through the current transform.

        Returns the number of triangles added to ``sink``.
        """
        local = self.local_triangles(tolerance)
        mapped = self._transform.apply(local.reshape(-1, 2)).reshape(-1, 3, 2)
        color = self._color
        for tri in mapped.tolist():
            sink.add_triangle(Triangle(vertices=(tuple(tri[0]), tuple(tri[1]), tuple(tri[2])), color=color))
        return len(mapped)
