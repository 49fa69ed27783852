
import numbers
from abc import ABC, abstractmethod
import numpy as np
from typing import Any, Tuple

from .errors import UnsupportedValueType


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


class PointOps(ABC):
    """
    Capability interface for point-like values.

    The resampler and the interpolator only talk to points through this
    interface, so any point type works as long as an implementation exists.
    Values are converted once with `coerce` on the way in and `restore` on
    the way out.
    """

    def coerce(self, value):
        return value

    def restore(self, value):
        return value

    @abstractmethod
    def displacement(self, pos, target) -> Tuple[Any, float]:
        """Returns (direction, distance) from pos to target, direction being unit length."""
        raise NotImplementedError

    def distance(self, a, b) -> float:
        return self.displacement(a, b)[1]

    @abstractmethod
    def advance(self, pos, direction, step: float):
        """pos + direction * step"""
        raise NotImplementedError

    @abstractmethod
    def lerp(self, a, b, t: float):
        raise NotImplementedError

    def equal(self, a, b) -> bool:
        return a == b

    def polyline_length(self, points) -> float:
        total = 0.0
        for last, current in zip(points, points[1:]):
            total += self.distance(last, current)
        return total

    @abstractmethod
    def to_xy(self, value) -> Tuple[float, float]:
        """Planar projection used for previews."""
        raise NotImplementedError


class ScalarOps(PointOps):
    """Real numbers; the direction is the sign of the difference."""

    def coerce(self, value):
        return float(value)

    def displacement(self, pos, target):
        signed = target - pos
        sign = 1.0 if signed > 0 else (-1.0 if signed < 0 else 0.0)
        return sign, sign * signed

    def distance(self, a, b):
        return abs(b - a)

    def advance(self, pos, direction, step):
        return pos + direction * step

    def lerp(self, a, b, t):
        return a + (b - a) * t

    def polyline_length(self, points):
        return float(np.abs(np.diff(np.asarray(points, dtype=np.float64))).sum())

    def to_xy(self, value):
        return float(value), 0.0


class VectorOps(PointOps):
    """
    2D/3D vectors backed by numpy arrays.
    `as_tuple` selects whether results are handed back as tuples or arrays.
    """

    def __init__(self, as_tuple: bool = False):
        self.as_tuple = as_tuple

    def coerce(self, value):
        vec = np.array(value, dtype=np.float64)
        vec.setflags(write=False)
        return vec

    def restore(self, value):
        if self.as_tuple:
            return tuple(float(c) for c in value)
        return np.array(value)

    def displacement(self, pos, target):
        offset = target - pos
        distance = float(np.linalg.norm(offset))
        if distance == 0.0:
            # zero-length segment, never stepped along
            return np.zeros_like(offset), 0.0
        return offset / distance, distance

    def distance(self, a, b):
        return float(np.linalg.norm(b - a))

    def advance(self, pos, direction, step):
        return pos + direction * step

    def lerp(self, a, b, t):
        return a + (b - a) * t

    def equal(self, a, b):
        return bool(np.array_equal(a, b))

    def polyline_length(self, points):
        pts = np.asarray(points, dtype=np.float64)
        return float(np.sqrt(np.sum(np.diff(pts, axis=0) ** 2, axis=1)).sum())

    def to_xy(self, value):
        return float(value[0]), float(value[1])


SCALAR = ScalarOps()
ARRAY_VECTOR = VectorOps(as_tuple=False)
TUPLE_VECTOR = VectorOps(as_tuple=True)


def point_ops(value, operation: str) -> PointOps:
    """
    Picks the PointOps implementation for a sequence from its first element.
    Mixed-type sequences are not checked element by element.
    """
    if _is_real(value):
        return SCALAR
    if isinstance(value, np.ndarray):
        if value.ndim == 1 and value.shape[0] in (2, 3) and np.issubdtype(value.dtype, np.number) \
                and not np.issubdtype(value.dtype, np.complexfloating):
            return ARRAY_VECTOR
    elif isinstance(value, tuple) and len(value) in (2, 3) and all(_is_real(c) for c in value):
        return TUPLE_VECTOR
    raise UnsupportedValueType(value, operation)
