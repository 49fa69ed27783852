
import logging
import numpy as np
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .errors import InvalidArgument
from .interpolate import Lerper
from .path_sampler import PathSampler, _check_positive
from .points import PointOps, point_ops
from .settings import PathSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ConstantSpeedPath:
    """
    A curve re-parameterized to move at (approximately) constant speed.

    Calling it with u in [0, 1] walks the resampled points at a uniform rate.
    `length` is the estimate for the source curve, `step` the spacing of the
    resampled points.
    """
    lerper: Lerper
    length: float
    step: float
    cumulative: np.ndarray

    @classmethod
    def from_points(cls, points: Sequence, length: float, step: float,
                    ops: Optional[PointOps] = None) -> "ConstantSpeedPath":
        lerper = Lerper.from_points(points, ops)
        gaps = [lerper.ops.distance(a, b) for a, b in zip(lerper.points, lerper.points[1:])]
        cumulative = np.concatenate(([0.0], np.cumsum(gaps)))
        cumulative.setflags(write=False)
        return cls(lerper=lerper, length=float(length), step=float(step), cumulative=cumulative)

    @property
    def points(self) -> list:
        return [self.lerper.ops.restore(p) for p in self.lerper.points]

    @property
    def total_distance(self) -> float:
        """Length of the resampled polyline."""
        return float(self.cumulative[-1])

    def __call__(self, u: float):
        return self.lerper(u)

    def at_distance(self, distance: float):
        """Point reached after travelling `distance` along the path from its start."""
        index = float(np.interp(distance, self.cumulative, np.arange(len(self.cumulative))))
        return self.lerper(index / (len(self.cumulative) - 1))

    def duration(self, speed: float) -> float:
        _check_positive("speed", speed, "duration")
        return self.total_distance / speed


class PathBuilder:
    """
    Builds constant-speed paths out of parametric functions f(t), t in [0, 1]:
    bake -> length -> linear resampling -> interpolation.
    """

    @staticmethod
    def lerper(points: Sequence, ops: Optional[PointOps] = None) -> Lerper:
        return Lerper.from_points(points, ops)

    @staticmethod
    def _close(resampled: list, last, ops: PointOps) -> list:
        # the walk never emits the final vertex
        if len(resampled) < 2 or ops.distance(ops.coerce(resampled[-1]), ops.coerce(last)) > 0:
            resampled.append(last)
        return resampled

    @staticmethod
    def path(func: Callable,
             minimum_speed: float,
             accuracy: int,
             length_accuracy: Optional[int] = None,
             ops: Optional[PointOps] = None) -> ConstantSpeedPath:
        """
        Resamples func so it moves `minimum_speed` per resampled point.

        `length_accuracy` lets the length pass use a different sample count
        than the shape pass; the curve is then baked a second time at
        `accuracy` samples.
        """
        _check_positive("minimum_speed", minimum_speed, "path")
        data = PathSampler.bake(func, length_accuracy or accuracy)
        ops = ops or point_ops(data[0], "path")
        length = PathSampler.length(data, ops)
        if length_accuracy and length_accuracy != accuracy:
            data = PathSampler.bake(func, accuracy)

        resampled, carry_out = PathSampler.resample_linear(data, minimum_speed, total_length=length, ops=ops)
        resampled = PathBuilder._close(resampled, data[-1], ops)
        logger.debug("path: length=%g, %d samples -> %d points (carry_out=%g)",
                     length, len(data), len(resampled), carry_out)

        return ConstantSpeedPath.from_points(resampled, length, minimum_speed, ops)

    @staticmethod
    def chain(funcs: Sequence[Callable],
              minimum_speed: float,
              accuracy: int,
              length_accuracy: Optional[int] = None,
              ops: Optional[PointOps] = None) -> ConstantSpeedPath:
        """
        Like `path`, for consecutive curve pieces (each piece starting where
        the previous one ends). The spacing stays constant across the joins.
        """
        if not funcs:
            raise InvalidArgument("Expected at least 1 function in 'chain', got 0")
        _check_positive("minimum_speed", minimum_speed, "chain")

        length = 0.0
        segments = []
        for func in funcs:
            data = PathSampler.bake(func, length_accuracy or accuracy)
            ops = ops or point_ops(data[0], "chain")
            length += PathSampler.length(data, ops)
            if length_accuracy and length_accuracy != accuracy:
                data = PathSampler.bake(func, accuracy)
            segments.append(data)

        resampled, carry_out = PathSampler.resample_chain(segments, minimum_speed, ops=ops)
        resampled = PathBuilder._close(resampled, segments[-1][-1], ops)
        logger.debug("chain: %d pieces, length=%g -> %d points (carry_out=%g)",
                     len(segments), length, len(resampled), carry_out)

        return ConstantSpeedPath.from_points(resampled, length, minimum_speed, ops)

    @staticmethod
    def from_settings(func: Callable, settings: PathSettings, ops: Optional[PointOps] = None) -> ConstantSpeedPath:
        return PathBuilder.path(func,
                                settings.minimum_speed,
                                settings.get_samples(),
                                settings.get_length_samples(),
                                ops)
