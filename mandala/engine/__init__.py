"""Mandala petal animation engine."""

from mandala.engine.color import Color
from mandala.engine.config import MandalaConfig
from mandala.engine.mandala import Mandala
from mandala.engine.mesh import Mesh, MutableMesh, Triangle, TriangleSink
from mandala.engine.petal_source import FramePetals, PetalSource, StaticPetal
from mandala.engine.state import MandalaState
from mandala.engine.transform import Transform
from mandala.engine.transition import TransitionClock

__all__ = [
    "Color",
    "FramePetals",
    "Mandala",
    "MandalaConfig",
    "MandalaState",
    "Mesh",
    "MutableMesh",
    "PetalSource",
    "StaticPetal",
    "Transform",
    "TransitionClock",
    "Triangle",
    "TriangleSink",
]
