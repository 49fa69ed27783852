
import math
import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .errors import InvalidArgument
from .points import PointOps, point_ops


@dataclass(frozen=True, eq=False)
class Lerper:
    """
    Continuous function over [0, 1] built from discrete points by
    piecewise-linear interpolation.

    The points are assumed equidistant: with uneven spacing the output moves
    faster along the longer intervals. Holds no mutable state, so one
    instance can be evaluated from several threads.
    """
    points: Tuple
    ops: PointOps

    @classmethod
    def from_points(cls, points: Sequence, ops: Optional[PointOps] = None) -> "Lerper":
        if len(points) < 2:
            raise InvalidArgument(f"Expected '2' samples or more, got '{len(points)}'")
        ops = ops or point_ops(points[0], "lerper")
        return cls(points=tuple(ops.coerce(p) for p in points), ops=ops)

    def __len__(self) -> int:
        return len(self.points)

    def __call__(self, u: float):
        samples = len(self.points)
        if samples == 2:
            return self.ops.restore(self.ops.lerp(self.points[0], self.points[1], u))

        # continuous 0-based index of u
        x = u * (samples - 1)
        lo = int(np.clip(math.floor(x), 0, samples - 1))
        hi = int(np.clip(math.ceil(x), 0, samples - 1))
        start = self.points[lo]
        finish = self.points[hi]

        if self.ops.equal(start, finish):
            # empty interval
            return self.ops.restore(start)
        return self.ops.restore(self.ops.lerp(start, finish, x - lo))
