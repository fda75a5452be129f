"""Offline preview — draw a triangle Mesh to a PNG with matplotlib."""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection

from mandala.engine.color import BLACK, Color
from mandala.engine.mesh import Mesh

logger = logging.getLogger(__name__)


def render_png(
    mesh: Mesh,
    out_path: str | Path,
    canvas: tuple[float, float] = (1024.0, 1024.0),
    background: Color = BLACK,
    dpi: int = 100,
) -> Path:
    """Render mesh triangles on a canvas-sized figure, y axis pointing down like SVG."""
    out_path = Path(out_path)
    width, height = canvas

    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_aspect("equal")
    ax.axis("off")
    fig.patch.set_facecolor(background.clipped().as_tuple())

    if len(mesh):
        colors = [t.color.clipped().as_tuple() for t in mesh]
        collection = PolyCollection(mesh.vertices(), facecolors=colors, edgecolors="none", antialiased=True)
        ax.add_collection(collection)

    fig.savefig(out_path, dpi=dpi, facecolor=fig.get_facecolor())
    plt.close(fig)
    logger.debug("Wrote %s (%d triangles)", out_path, len(mesh))
    return out_path
