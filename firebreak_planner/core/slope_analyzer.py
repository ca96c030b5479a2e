"""Slope segmentation of a drawn route.

Turns an ordered list of route vertices into a TrackAnalysis:
- Resample every 100m (drawn vertices preserved)
- Look up elevation of every sample (bounded-concurrent, order preserved)
- Per step: haversine distance, slope = atan(|dz| / distance), category
- Merge contiguous steps of the same category (distance-weighted slope)
- Aggregate totals, max raw-step slope, weighted average, distribution

Categories use the inclusive 10/20/30° thresholds of SlopeConfig; terrain
levels are derived from the same table.
"""

import logging
from collections.abc import Sequence
from math import atan, degrees

from firebreak_planner.constants import (
    ConcurrencyConfig,
    ResampleConfig,
    SlopeConfig,
    TerrainConfig,
)
from firebreak_planner.core.errors import InvalidInputError
from firebreak_planner.core.providers import ElevationProvider
from firebreak_planner.core.resampler import resample
from firebreak_planner.core.sampling import fetch_in_order
from firebreak_planner.model.coordinate import Coordinate
from firebreak_planner.model.slope_segment import SlopeSegment
from firebreak_planner.model.track_analysis import TrackAnalysis

logger = logging.getLogger(__name__)


def calculate_slope_deg(start_elevation_m: float, end_elevation_m: float, distance_m: float) -> float:
    """Absolute slope between two points in degrees (0 for zero distance)."""
    if distance_m == 0:
        return 0.0
    return degrees(atan(abs(end_elevation_m - start_elevation_m) / distance_m))


def categorize_slope(slope_deg: float) -> str:
    """Classify a slope angle into a category.

    Args:
        slope_deg: Slope in degrees

    Returns:
        "flat" (<= 10°), "medium" (<= 20°), "steep" (<= 30°) or "very_steep".
    """
    for category, upper in SlopeConfig.CATEGORY_THRESHOLDS.items():
        if upper is None or slope_deg <= upper:
            return category
    return SlopeConfig.CATEGORIES[-1]


def derive_terrain_level(max_slope_deg: float) -> str:
    """Terrain level required by a route, from its steepest step.

    Mirrors categorize_slope: <= 10° easy, <= 20° moderate, <= 30° difficult, else extreme.
    """
    return TerrainConfig.CATEGORY_TO_TERRAIN[categorize_slope(slope_deg=max_slope_deg)]


class SlopeAnalyzer:
    """Computes slope segmentation using an injected elevation provider.

    Example:
        analyzer = SlopeAnalyzer(elevation_provider=TerrainRGBElevationProvider())
        analysis = await analyzer.analyze(points)
        print(f"{analysis.total_distance_m:.0f}m, max {analysis.max_slope_deg:.1f}°")
    """

    def __init__(
        self,
        elevation_provider: ElevationProvider,
        interval_m: float = ResampleConfig.SLOPE_INTERVAL_M,
        max_concurrency: int = ConcurrencyConfig.MAX_CONCURRENT_REQUESTS,
    ):
        """Initialize with an elevation provider.

        Args:
            elevation_provider: Source of elevations
            interval_m: Sampling interval in meters
            max_concurrency: Concurrent elevation lookups
        """
        self._provider = elevation_provider
        self._interval_m = interval_m
        self._max_concurrency = max_concurrency

    @property
    def provider(self) -> ElevationProvider:
        """Access the elevation provider."""
        return self._provider

    async def analyze(self, points: Sequence[Coordinate]) -> TrackAnalysis:
        """Analyze the slope profile of a route.

        Args:
            points: Ordered route vertices (at least 2)

        Returns:
            TrackAnalysis covering the whole route.

        Raises:
            InvalidInputError: If fewer than 2 points are given.
            ProviderError: If any elevation lookup fails.
        """
        if len(points) < 2:
            raise InvalidInputError(f"Slope analysis needs at least 2 points, got {len(points)}")

        samples = resample(points=points, interval_m=self._interval_m)
        elevations = await fetch_in_order(
            items=samples,
            fetch=self._provider.get_elevation,
            max_concurrency=self._max_concurrency,
        )

        raw_segments: list[SlopeSegment] = []
        max_slope = 0.0
        for i in range(len(samples) - 1):
            start, end = samples[i], samples[i + 1]
            distance = start.distance_to(other=end)
            if distance <= ResampleConfig.DUPLICATE_TOLERANCE_M:
                continue

            slope = calculate_slope_deg(
                start_elevation_m=elevations[i],
                end_elevation_m=elevations[i + 1],
                distance_m=distance,
            )
            max_slope = max(max_slope, slope)
            raw_segments.append(
                SlopeSegment(
                    start=start,
                    end=end,
                    distance_m=distance,
                    coords=(start, end),
                    slope_deg=slope,
                    category=categorize_slope(slope_deg=slope),
                    start_elevation_m=elevations[i],
                    end_elevation_m=elevations[i + 1],
                )
            )

        segments = merge_slope_segments(raw_segments)
        analysis = summarize_slope_segments(segments=segments, max_slope_deg=max_slope)
        logger.info(
            f"Slope analysis: {len(samples)} samples, {len(segments)} segments, "
            f"{analysis.total_distance_m:.0f}m, max {analysis.max_slope_deg:.1f}°"
        )
        return analysis


def merge_slope_segments(raw_segments: Sequence[SlopeSegment]) -> list[SlopeSegment]:
    """Merge contiguous segments that share a category."""
    merged: list[SlopeSegment] = []
    for segment in raw_segments:
        if merged and merged[-1].category == segment.category:
            merged[-1] = merged[-1].merged_with(other=segment)
        else:
            merged.append(segment)
    return merged


def summarize_slope_segments(segments: Sequence[SlopeSegment], max_slope_deg: float) -> TrackAnalysis:
    """Aggregate merged segments into a TrackAnalysis.

    Args:
        segments: Ordered, merged slope segments
        max_slope_deg: Steepest raw step (merged slopes are averages)
    """
    total = sum(s.distance_m for s in segments)
    weighted = sum(s.slope_deg * s.distance_m for s in segments)
    distribution = {category: 0.0 for category in SlopeConfig.CATEGORIES}
    for segment in segments:
        distribution[segment.category] += segment.distance_m

    return TrackAnalysis(
        total_distance_m=total,
        segments=tuple(segments),
        max_slope_deg=max_slope_deg,
        average_slope_deg=weighted / total if total > 0 else 0.0,
        slope_distribution=distribution,
    )


async def analyze_slope(
    points: Sequence[Coordinate],
    elevation_provider: ElevationProvider,
    max_concurrency: int = ConcurrencyConfig.MAX_CONCURRENT_REQUESTS,
) -> TrackAnalysis:
    """Convenience wrapper: SlopeAnalyzer(provider).analyze(points)."""
    analyzer = SlopeAnalyzer(elevation_provider=elevation_provider, max_concurrency=max_concurrency)
    return await analyzer.analyze(points=points)
