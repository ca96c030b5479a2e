"""Route analysis pipeline.

One call turns a drawn route and an equipment catalog into a RouteReport:
1. Slope and vegetation analysis (run concurrently, independent samplings)
2. Overlap join of the two segmentations
3. Compatibility evaluation of the catalog

Any provider failure fails the whole analysis; no partial report is built.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from firebreak_planner.constants import ConcurrencyConfig
from firebreak_planner.core.compatibility import (
    CompatibilityEngine,
    CompatibilityParameters,
    EquipmentReport,
)
from firebreak_planner.core.errors import InvalidInputError
from firebreak_planner.core.overlap import join_overlap
from firebreak_planner.core.providers import ElevationProvider, LandcoverProvider
from firebreak_planner.core.slope_analyzer import SlopeAnalyzer
from firebreak_planner.core.vegetation_analyzer import VegetationAnalyzer
from firebreak_planner.model.coordinate import Coordinate
from firebreak_planner.model.equipment import EquipmentSpec
from firebreak_planner.model.overlap_matrix import OverlapMatrix
from firebreak_planner.model.track_analysis import TrackAnalysis
from firebreak_planner.model.vegetation_analysis import VegetationAnalysis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteReport:
    """Everything computed for one route.

    Attributes:
        track_analysis: Slope segmentation
        vegetation_analysis: Vegetation segmentation
        overlap: Slope category x vegetation type distances
        equipment: Ranked equipment results and the conditions used
    """

    track_analysis: TrackAnalysis
    vegetation_analysis: VegetationAnalysis
    overlap: OverlapMatrix
    equipment: EquipmentReport

    @property
    def total_distance_m(self) -> float:
        return self.track_analysis.total_distance_m


class RouteAnalyzer:
    """Runs the full analysis pipeline with injected providers.

    Example:
        analyzer = RouteAnalyzer(
            elevation_provider=TerrainRGBElevationProvider(),
            landcover_provider=LandcoverRasterProvider(),
        )
        report = await analyzer.analyze_route(points, catalog=default_catalog())
    """

    def __init__(
        self,
        elevation_provider: ElevationProvider,
        landcover_provider: LandcoverProvider,
        parameters: Optional[CompatibilityParameters] = None,
        max_concurrency: int = ConcurrencyConfig.MAX_CONCURRENT_REQUESTS,
    ):
        self._slope_analyzer = SlopeAnalyzer(elevation_provider=elevation_provider, max_concurrency=max_concurrency)
        self._vegetation_analyzer = VegetationAnalyzer(
            landcover_provider=landcover_provider,
            max_concurrency=max_concurrency,
        )
        self._engine = CompatibilityEngine(parameters=parameters)

    @property
    def engine(self) -> CompatibilityEngine:
        return self._engine

    async def analyze_route(
        self,
        points: Sequence[Coordinate],
        catalog: Sequence[EquipmentSpec],
        vegetation_override: Optional[str] = None,
    ) -> RouteReport:
        """Analyze a route and rank the catalog for clearing it.

        Args:
            points: Ordered route vertices (at least 2)
            catalog: Equipment to evaluate
            vegetation_override: Vegetation type to evaluate against instead
                of the route's predominant type

        Returns:
            RouteReport for the route.

        Raises:
            InvalidInputError: If the route has fewer than 2 points.
            ProviderError: If any elevation or landcover lookup fails.
            LengthMismatchError: If the two segmentations disagree on length.
        """
        if len(points) < 2:
            raise InvalidInputError(f"Route needs at least 2 points, got {len(points)}")

        track_analysis, vegetation_analysis = await asyncio.gather(
            self._slope_analyzer.analyze(points=points),
            self._vegetation_analyzer.analyze(points=points),
        )

        overlap = join_overlap(
            slope_segments=track_analysis.segments,
            vegetation_segments=vegetation_analysis.segments,
        )
        equipment = self._engine.analyze_equipment(
            route_distance_m=track_analysis.total_distance_m,
            track_analysis=track_analysis,
            catalog=catalog,
            vegetation_analysis=vegetation_analysis,
            vegetation=vegetation_override,
        )

        logger.info(
            f"Route analyzed: {track_analysis.total_distance_m:.0f}m, terrain {equipment.effective_terrain}, "
            f"vegetation {equipment.effective_vegetation}"
        )
        return RouteReport(
            track_analysis=track_analysis,
            vegetation_analysis=vegetation_analysis,
            overlap=overlap,
            equipment=equipment,
        )
