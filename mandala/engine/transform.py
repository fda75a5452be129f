"""2D affine transforms as read-only 3x3 matrices.

Composition uses ``@`` and follows matrix order: in ``a @ b`` the right
operand is applied to points first. ``+``, ``-`` and scalar ``*`` combine
matrices element by element; they exist for animation blending between two
poses, not as general matrix algebra.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray


class Transform:
    __slots__ = ("_m",)

    def __init__(self, matrix: ArrayLike) -> None:
        m = np.array(matrix, dtype=np.float64)
        if m.shape != (3, 3):
            raise ValueError(f"Transform needs a 3x3 matrix, got shape {m.shape}")
        m.setflags(write=False)
        self._m = m

    @classmethod
    def identity(cls) -> Transform:
        return cls(np.eye(3))

    @classmethod
    def translate(cls, x: float, y: float) -> Transform:
        return cls([[1.0, 0.0, x], [0.0, 1.0, y], [0.0, 0.0, 1.0]])

    @classmethod
    def scale(cls, sx: float, sy: float | None = None) -> Transform:
        if sy is None:
            sy = sx
        return cls([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])

    @classmethod
    def rotate(cls, degrees: float) -> Transform:
        """Rotation about the origin; positive angles turn +x towards +y."""
        rad = math.radians(degrees)
        c, s = math.cos(rad), math.sin(rad)
        return cls([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])

    @classmethod
    def compose(cls, transforms: Iterable[Transform]) -> Transform:
        """Left-to-right product: compose([a, b, c]) == a @ b @ c."""
        result = cls.identity()
        for t in transforms:
            result = result @ t
        return result

    @property
    def matrix(self) -> NDArray[np.float64]:
        return self._m

    def apply(self, points: ArrayLike) -> NDArray[np.float64]:
        """Map an Nx2 array of points through the transform."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return pts @ self._m[:2, :2].T + self._m[:2, 2]

    def __matmul__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        return Transform(self._m @ other._m)

    def __add__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        return Transform(self._m + other._m)

    def __sub__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        return Transform(self._m - other._m)

    def __mul__(self, weight: float) -> Transform:
        if isinstance(weight, Transform):
            raise TypeError("use @ to compose transforms")
        return Transform(self._m * float(weight))

    __rmul__ = __mul__

    def lerp(self, other: Transform, weight: float) -> Transform:
        """Element-wise linear interpolation; weight 0 gives self, 1 gives other."""
        return self + (other - self) * weight

    def isclose(self, other: Transform, atol: float = 1e-9) -> bool:
        return bool(np.allclose(self._m, other._m, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ", ".join("[" + ", ".join(f"{v:g}" for v in row) + "]" for row in self._m)
        return f"Transform([{rows}])"
