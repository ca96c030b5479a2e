"""Vegetation segmentation of a drawn route.

Mirrors the slope analysis with a 200m interval:
- Resample every 200m (drawn vertices preserved)
- Look up the landcover label at the midpoint of every step
- Classify label -> (vegetation type, confidence) from a fixed table
- Merge contiguous steps of the same type (distance-weighted confidence)
- Aggregate distribution, predominant type and mean confidence
"""

import logging
from collections.abc import Sequence

from firebreak_planner.constants import (
    ConcurrencyConfig,
    ResampleConfig,
    VegetationConfig,
)
from firebreak_planner.core.errors import InvalidInputError
from firebreak_planner.core.providers import LandcoverProvider
from firebreak_planner.core.resampler import resample
from firebreak_planner.core.sampling import fetch_in_order
from firebreak_planner.model.coordinate import Coordinate
from firebreak_planner.model.vegetation_analysis import VegetationAnalysis
from firebreak_planner.model.vegetation_segment import VegetationSegment

logger = logging.getLogger(__name__)


def classify_landcover(landcover_class: str) -> tuple[str, float]:
    """Map a raw landcover label to (vegetation type, confidence).

    Forest-like labels are heavyforest (0.9), scrub/shrub mediumscrub (0.85),
    grass grassland (0.9), agricultural lightshrub (0.7), snow/ice grassland
    with low confidence (0.3). Anything else falls back to mediumscrub (0.4).
    """
    return VegetationConfig.LANDCOVER_CLASSES.get(landcover_class.strip().lower(), VegetationConfig.UNKNOWN_CLASS)


def predominant_vegetation(distribution: dict[str, float]) -> str:
    """Vegetation type with the largest distance.

    Ties go to the type listed first in VegetationConfig.TYPES.
    """
    best = VegetationConfig.TYPES[0]
    for vegetation_type in VegetationConfig.TYPES:
        if distribution.get(vegetation_type, 0.0) > distribution.get(best, 0.0):
            best = vegetation_type
    return best


class VegetationAnalyzer:
    """Computes vegetation segmentation using an injected landcover provider.

    Example:
        analyzer = VegetationAnalyzer(landcover_provider=LandcoverRasterProvider())
        analysis = await analyzer.analyze(points)
        print(analysis.predominant_vegetation, analysis.overall_confidence)
    """

    def __init__(
        self,
        landcover_provider: LandcoverProvider,
        interval_m: float = ResampleConfig.VEGETATION_INTERVAL_M,
        max_concurrency: int = ConcurrencyConfig.MAX_CONCURRENT_REQUESTS,
    ):
        self._provider = landcover_provider
        self._interval_m = interval_m
        self._max_concurrency = max_concurrency

    @property
    def provider(self) -> LandcoverProvider:
        """Access the landcover provider."""
        return self._provider

    async def analyze(self, points: Sequence[Coordinate]) -> VegetationAnalysis:
        """Analyze the vegetation along a route.

        Args:
            points: Ordered route vertices (at least 2)

        Returns:
            VegetationAnalysis covering the whole route.

        Raises:
            InvalidInputError: If fewer than 2 points are given.
            ProviderError: If any landcover lookup fails.
        """
        if len(points) < 2:
            raise InvalidInputError(f"Vegetation analysis needs at least 2 points, got {len(points)}")

        samples = resample(points=points, interval_m=self._interval_m)

        steps: list[tuple[Coordinate, Coordinate, float]] = []
        for start, end in zip(samples[:-1], samples[1:]):
            distance = start.distance_to(other=end)
            if distance > ResampleConfig.DUPLICATE_TOLERANCE_M:
                steps.append((start, end, distance))

        labels = await fetch_in_order(
            items=[start.midpoint(other=end) for start, end, _ in steps],
            fetch=self._provider.get_landcover_class,
            max_concurrency=self._max_concurrency,
        )

        raw_segments: list[VegetationSegment] = []
        for (start, end, distance), label in zip(steps, labels):
            vegetation_type, confidence = classify_landcover(landcover_class=label)
            raw_segments.append(
                VegetationSegment(
                    start=start,
                    end=end,
                    distance_m=distance,
                    coords=(start, end),
                    vegetation_type=vegetation_type,
                    confidence=confidence,
                    landcover_class=label,
                )
            )

        segments = merge_vegetation_segments(raw_segments)
        sample_confidences = [s.confidence for s in raw_segments]
        analysis = summarize_vegetation_segments(segments=segments, sample_confidences=sample_confidences)
        logger.info(
            f"Vegetation analysis: {len(steps)} samples, {len(segments)} segments, "
            f"mostly {analysis.predominant_vegetation} (confidence {analysis.overall_confidence:.2f})"
        )
        return analysis


def merge_vegetation_segments(raw_segments: Sequence[VegetationSegment]) -> list[VegetationSegment]:
    """Merge contiguous segments that share a vegetation type."""
    merged: list[VegetationSegment] = []
    for segment in raw_segments:
        if merged and merged[-1].vegetation_type == segment.vegetation_type:
            merged[-1] = merged[-1].merged_with(other=segment)
        else:
            merged.append(segment)
    return merged


def summarize_vegetation_segments(
    segments: Sequence[VegetationSegment],
    sample_confidences: Sequence[float],
) -> VegetationAnalysis:
    """Aggregate merged segments into a VegetationAnalysis.

    Args:
        segments: Ordered, merged vegetation segments
        sample_confidences: Confidence of every individual sample (unweighted mean)
    """
    distribution = {vegetation_type: 0.0 for vegetation_type in VegetationConfig.TYPES}
    for segment in segments:
        distribution[segment.vegetation_type] += segment.distance_m

    return VegetationAnalysis(
        total_distance_m=sum(s.distance_m for s in segments),
        segments=tuple(segments),
        predominant_vegetation=predominant_vegetation(distribution=distribution),
        vegetation_distribution=distribution,
        overall_confidence=sum(sample_confidences) / len(sample_confidences) if sample_confidences else 0.0,
    )


async def analyze_vegetation(
    points: Sequence[Coordinate],
    landcover_provider: LandcoverProvider,
    max_concurrency: int = ConcurrencyConfig.MAX_CONCURRENT_REQUESTS,
) -> VegetationAnalysis:
    """Convenience wrapper: VegetationAnalyzer(provider).analyze(points)."""
    analyzer = VegetationAnalyzer(landcover_provider=landcover_provider, max_concurrency=max_concurrency)
    return await analyzer.analyze(points=points)
