"""Fixed-interval route resampling.

Walks an ordered polyline and inserts linearly interpolated points so that
samples fall every `interval_m` meters of cumulative route distance. The
interval grid is anchored at the route start, not reset at each drawn vertex,
so segment lengths that are not multiples of the interval do not drift.

Every drawn vertex is kept, unmodified and in order. An interpolated point
that lands within 1 mm of the previous output point is a duplicate and dropped;
one that lands within 1 mm before a drawn vertex is replaced by that vertex.
"""

import logging
from collections.abc import Sequence

from firebreak_planner.constants import ResampleConfig
from firebreak_planner.core.errors import InvalidInputError
from firebreak_planner.model.coordinate import Coordinate

logger = logging.getLogger(__name__)


def resample(points: Sequence[Coordinate], interval_m: float) -> list[Coordinate]:
    """Insert interpolated points every `interval_m` meters along a route.

    Args:
        points: Ordered route vertices
        interval_m: Sampling interval in meters (must be positive)

    Returns:
        Ordered list containing every input point plus interpolated samples.
        Input with fewer than 2 points is returned unchanged.

    Raises:
        InvalidInputError: If interval_m is not positive.
    """
    if not interval_m > 0:
        raise InvalidInputError(f"Resampling interval must be positive, got {interval_m}")
    if len(points) < 2:
        return list(points)

    tolerance = ResampleConfig.DUPLICATE_TOLERANCE_M
    output: list[Coordinate] = [points[0]]
    last_is_vertex = True
    accumulated = 0.0

    for start, end in zip(points[:-1], points[1:]):
        segment_m = start.distance_to(other=end)

        # Distance from this vertex to the next global interval mark
        to_next_mark = interval_m - (accumulated % interval_m)
        along = to_next_mark
        while along < segment_m:
            sample = start.interpolate(other=end, ratio=along / segment_m)
            if output[-1].distance_to(other=sample) > tolerance:
                output.append(sample)
                last_is_vertex = False
            along += interval_m

        if end != output[-1]:
            if not last_is_vertex and output[-1].distance_to(other=end) <= tolerance:
                output[-1] = end
            else:
                output.append(end)
        last_is_vertex = True

        accumulated += segment_m

    logger.debug(f"Resampled {len(points)} vertices to {len(output)} points at {interval_m}m")
    return output
