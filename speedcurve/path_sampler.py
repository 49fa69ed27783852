
import logging
import math
import numbers
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .errors import InvalidArgument
from .points import PointOps, point_ops

logger = logging.getLogger(__name__)


def _check_positive(name: str, value, operation: str):
    if not isinstance(value, numbers.Real) or isinstance(value, bool) or not value > 0:
        raise InvalidArgument(f"Expected '{name}' to be a positive number in '{operation}', got {value!r}")


class PathSampler:
    """
    Discrete sampling of parametric functions and polylines:
    baking a function into samples, measuring a polyline, and resampling
    it into points spaced by a fixed distance.
    """

    @staticmethod
    def bake(func: Callable, samples: int) -> list:
        """
        Evaluates func at `samples` equidistant parameters in [0, 1].
        f(0) and f(1) are always the first and last samples.
        """
        if not isinstance(samples, numbers.Integral) or isinstance(samples, bool) or samples < 2:
            raise InvalidArgument(f"A minimum of 2 samples is required, got {samples!r}")

        last = int(samples) - 1
        return [func(i / last) for i in range(last + 1)]

    @staticmethod
    def length(points: Sequence, ops: Optional[PointOps] = None) -> float:
        """
        Sum of the distances between consecutive points.
        It never overestimates the length of the sampled curve; more samples
        get closer to it, but a small sample count is usually a good
        approximation already.
        """
        if len(points) == 0:
            raise InvalidArgument("Expected at least 1 point in 'length', got 0")

        ops = ops or point_ops(points[0], "length")
        data = [ops.coerce(p) for p in points]
        return ops.polyline_length(data)

    @staticmethod
    def resample_linear(points: Sequence,
                        delta: float,
                        total_length: Optional[float] = None,
                        carry_in: Optional[float] = None,
                        ops: Optional[PointOps] = None) -> Tuple[list, float]:
        """
        Walks the polyline defined by `points` and returns new points spaced
        by `delta` along it, together with the carry-out: the distance still
        owed when the end of the polyline was reached.

        Passing that carry-out as `carry_in` of the next connected polyline
        keeps the spacing continuous across the join. Without `carry_in` the
        polyline is the first of its chain and its start point is emitted.
        `total_length` is only a sizing hint.
        """
        _check_positive("delta", delta, "resample_linear")
        if len(points) < 2:
            raise InvalidArgument(f"Expected '2' points or more in 'resample_linear', got '{len(points)}'")
        if carry_in is not None:
            if not isinstance(carry_in, numbers.Real) or isinstance(carry_in, bool) or carry_in < 0:
                raise InvalidArgument(f"Expected 'carry_in' to be a non-negative number, got {carry_in!r}")

        ops = ops or point_ops(points[0], "resample_linear")
        data = [ops.coerce(p) for p in points]

        expected = None
        if total_length is not None:
            expected = max(0, math.ceil((total_length - (carry_in or 0.0)) / delta))

        pos = data[0]
        resampled = []
        if carry_in is None:
            resampled.append(pos)
        # one-shot step used right after a vertex, None means a full delta
        step_override = carry_in

        target_index = 1
        n_points = len(data)

        while target_index < n_points:
            target = data[target_index]
            step = delta if step_override is None else step_override
            step_override = None

            direction, distance = ops.displacement(pos, target)
            distance_left = distance - step

            if distance_left > 0:
                advanced = ops.advance(pos, direction, step)
                if step == delta and ops.equal(advanced, pos):
                    # below the float resolution at pos, the walk would never move
                    raise InvalidArgument(
                        f"'delta' {delta!r} is too small to move from {ops.restore(pos)!r} in 'resample_linear'")
                pos = advanced
                resampled.append(pos)
            else:
                # land on the vertex, the overshoot is paid on the next segment
                pos = target
                target_index += 1
                step_override = -distance_left

        carry_out = step_override if step_override is not None else 0.0

        if expected is not None:
            logger.debug("resample_linear: expected ~%d points, produced %d (delta=%g, carry_out=%g)",
                         expected, len(resampled), delta, carry_out)

        return [ops.restore(p) for p in resampled], carry_out

    @staticmethod
    def resample_chain(segments: Iterable[Sequence],
                       delta: float,
                       carry_in: Optional[float] = None,
                       ops: Optional[PointOps] = None) -> Tuple[list, float]:
        """
        Resamples connected polylines one after the other, threading each
        carry-out into the next segment so the spacing survives the joins.
        """
        _check_positive("delta", delta, "resample_chain")

        resampled: List = []
        carry = carry_in
        count = 0
        for index, segment in enumerate(segments):
            count += 1
            points, carry = PathSampler.resample_linear(segment, delta, carry_in=carry, ops=ops)
            resampled.extend(points)
            logger.debug("resample_chain: segment %d -> %d points, carry=%g", index, len(points), carry)

        if count == 0:
            raise InvalidArgument("Expected at least 1 segment in 'resample_chain', got 0")
        return resampled, carry
