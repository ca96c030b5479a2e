"""Overlap join of slope and vegetation segmentations.

Both segmentations describe the same route but were produced independently,
so their boundaries do not line up. A two-pointer walk consumes the shorter
remainder at each step and books those meters into the matching
(slope category, vegetation type) cell.
"""

import logging
from collections.abc import Sequence

from firebreak_planner.constants import CompatibilityConfig, SlopeConfig, VegetationConfig
from firebreak_planner.core.errors import LengthMismatchError
from firebreak_planner.model.overlap_matrix import OverlapMatrix
from firebreak_planner.model.slope_segment import SlopeSegment
from firebreak_planner.model.vegetation_segment import VegetationSegment

logger = logging.getLogger(__name__)

# Remainders below this are treated as exhausted (float noise from subtraction)
_EPSILON_M = 1e-9


def join_overlap(
    slope_segments: Sequence[SlopeSegment],
    vegetation_segments: Sequence[VegetationSegment],
    tolerance_m: float = CompatibilityConfig.LENGTH_TOLERANCE_M,
) -> OverlapMatrix:
    """Build the slope x vegetation distance matrix of a route.

    Args:
        slope_segments: Ordered slope segments of the route
        vegetation_segments: Ordered vegetation segments of the same route
        tolerance_m: Allowed difference between the two total distances

    Returns:
        OverlapMatrix with every category/type cell present.

    Raises:
        LengthMismatchError: If the two totals differ by more than tolerance_m.
    """
    slope_total = sum(s.distance_m for s in slope_segments)
    vegetation_total = sum(s.distance_m for s in vegetation_segments)
    if abs(slope_total - vegetation_total) > tolerance_m:
        raise LengthMismatchError(
            slope_distance_m=slope_total,
            vegetation_distance_m=vegetation_total,
            tolerance_m=tolerance_m,
        )

    cells = {cat: {veg: 0.0 for veg in VegetationConfig.TYPES} for cat in SlopeConfig.CATEGORIES}

    i = j = 0
    slope_left = slope_segments[0].distance_m if slope_segments else 0.0
    vegetation_left = vegetation_segments[0].distance_m if vegetation_segments else 0.0

    while i < len(slope_segments) and j < len(vegetation_segments):
        step = min(slope_left, vegetation_left)
        category = slope_segments[i].category
        vegetation_type = vegetation_segments[j].vegetation_type
        cells[category][vegetation_type] += step
        slope_left -= step
        vegetation_left -= step

        if slope_left <= _EPSILON_M:
            i += 1
            if i < len(slope_segments):
                slope_left = slope_segments[i].distance_m
        if vegetation_left <= _EPSILON_M:
            j += 1
            if j < len(vegetation_segments):
                vegetation_left = vegetation_segments[j].distance_m

    logger.debug(
        f"Overlap join: {len(slope_segments)} slope x {len(vegetation_segments)} vegetation segments, "
        f"{slope_total:.1f}m vs {vegetation_total:.1f}m"
    )
    return OverlapMatrix(cells=cells)
