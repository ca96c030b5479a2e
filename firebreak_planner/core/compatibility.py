"""Compatibility engine - Rank equipment for clearing a route.

Pure function of (route distance, slope analysis, vegetation, catalog):
- Terrain level derived from the route's maximum slope
- Vegetation supplied by the caller or the predominant type of the route
- Per equipment: compatibility level, clearing time and cost
- Results ranked full < partial < incompatible < unevaluated

Machinery may be partially compatible when only a small share of the route
exceeds its rated terrain; aircraft and hand crews use strict membership.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import cmp_to_key
from math import ceil
from typing import Optional

from firebreak_planner.constants import (
    CompatibilityConfig,
    EquipmentConfig,
    SlopeConfig,
    TerrainConfig,
    VegetationConfig,
)
from firebreak_planner.core.errors import InvalidInputError
from firebreak_planner.core.slope_analyzer import derive_terrain_level
from firebreak_planner.core.validators import validate_equipment
from firebreak_planner.model.calculation_result import CalculationResult
from firebreak_planner.model.equipment import (
    Aircraft,
    EquipmentSpec,
    HandCrew,
    Machinery,
    MachineryPerformance,
)
from firebreak_planner.model.track_analysis import TrackAnalysis
from firebreak_planner.model.vegetation_analysis import VegetationAnalysis

logger = logging.getLogger(__name__)

_LEVEL_ORDER = {level: i for i, level in enumerate(CompatibilityConfig.LEVELS)}
_UNEVALUATED_ORDER = len(CompatibilityConfig.LEVELS)


@dataclass(frozen=True)
class CompatibilityParameters:
    """Business rules of the compatibility evaluation.

    Attributes:
        terrain_factors: Time multiplier per terrain level
        vegetation_factors: Time multiplier per vegetation type
        partial_tolerance: Largest over-limit share still rated partial (inclusive)
        penalty_scale: Partial time multiplier is 1 + penalty_scale x over-limit share
        tie_threshold_hours: Times closer than this are ranked by cost
    """

    terrain_factors: dict[str, float] = field(default_factory=lambda: dict(TerrainConfig.FACTORS))
    vegetation_factors: dict[str, float] = field(default_factory=lambda: dict(VegetationConfig.FACTORS))
    partial_tolerance: float = CompatibilityConfig.PARTIAL_TOLERANCE
    penalty_scale: float = CompatibilityConfig.PENALTY_SCALE
    tie_threshold_hours: float = CompatibilityConfig.TIE_THRESHOLD_HOURS

    @classmethod
    def with_overrides(
        cls,
        terrain_factors: Optional[dict[str, float]] = None,
        vegetation_factors: Optional[dict[str, float]] = None,
        partial_tolerance: float = CompatibilityConfig.PARTIAL_TOLERANCE,
        penalty_scale: float = CompatibilityConfig.PENALTY_SCALE,
        tie_threshold_hours: float = CompatibilityConfig.TIE_THRESHOLD_HOURS,
    ) -> "CompatibilityParameters":
        """Create parameters, merging partial factor tables over the defaults.

        Raises:
            InvalidInputError: If an override names an unknown level/type or a
                factor is not positive.
        """
        merged_terrain = {**TerrainConfig.FACTORS, **(terrain_factors or {})}
        merged_vegetation = {**VegetationConfig.FACTORS, **(vegetation_factors or {})}
        if set(merged_terrain) != set(TerrainConfig.LEVELS):
            raise InvalidInputError(f"Unknown terrain levels in factors: {set(merged_terrain) - set(TerrainConfig.LEVELS)}")
        if set(merged_vegetation) != set(VegetationConfig.TYPES):
            raise InvalidInputError(
                f"Unknown vegetation types in factors: {set(merged_vegetation) - set(VegetationConfig.TYPES)}"
            )
        if any(f <= 0 for f in [*merged_terrain.values(), *merged_vegetation.values()]):
            raise InvalidInputError("Terrain and vegetation factors must be positive")
        return cls(
            terrain_factors=merged_terrain,
            vegetation_factors=merged_vegetation,
            partial_tolerance=partial_tolerance,
            penalty_scale=penalty_scale,
            tie_threshold_hours=tie_threshold_hours,
        )


@dataclass(frozen=True)
class EquipmentReport:
    """Ranked equipment results of one route plus the conditions they were computed for.

    Attributes:
        results: Ranked CalculationResults
        effective_terrain: Terrain level derived from the route's max slope
        effective_vegetation: Vegetation type the evaluation used
        terrain_factor: Factor applied for effective_terrain
        vegetation_factor: Factor applied for effective_vegetation
        validation_errors: "<name>: <problems>" for every invalid catalog entry
        timestamp: UTC time of the evaluation
    """

    results: tuple[CalculationResult, ...]
    effective_terrain: str
    effective_vegetation: str
    terrain_factor: float
    vegetation_factor: float
    validation_errors: tuple[str, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def best_options(self) -> list[CalculationResult]:
        """Best compatible result per equipment type."""
        return best_options(results=self.results)


@dataclass(frozen=True)
class _Conditions:
    route_distance_m: float
    track: TrackAnalysis
    terrain: str
    vegetation: str
    terrain_factor: float
    vegetation_factor: float


def over_limit_fraction(track_analysis: TrackAnalysis, highest_terrain_rank: int) -> float:
    """Share of the route (0-1) in slope categories above a terrain rank.

    Each slope category implies a terrain level (flat -> easy ... very_steep
    -> extreme); meters in categories whose level outranks the equipment's
    highest allowed level count as over the limit.
    """
    total = track_analysis.total_distance_m
    if total <= 0:
        return 0.0
    over = sum(
        track_analysis.slope_distribution.get(category, 0.0)
        for category in SlopeConfig.CATEGORIES
        if TerrainConfig.RANKS[TerrainConfig.CATEGORY_TO_TERRAIN[category]] > highest_terrain_rank
    )
    return over / total


def select_performance(rows: Sequence[MachineryPerformance], max_slope_deg: float) -> MachineryPerformance:
    """Pick the performance row for a route's max slope.

    Args:
        rows: Rows of one vegetation type, ordered by slope_max_deg
        max_slope_deg: Route maximum slope

    Returns:
        The row with the smallest slope_max_deg >= max_slope_deg, or the row
        with the largest slope_max_deg if none qualifies.
    """
    for row in rows:
        if row.slope_max_deg >= max_slope_deg:
            return row
    worst = rows[-1]
    logger.warning(
        f"No performance row covers {max_slope_deg:.1f}°, using worst case {worst.slope_max_deg:.1f}° "
        f"({worst.vegetation_type})"
    )
    return worst


def _compare_results(a: CalculationResult, b: CalculationResult, tie_threshold_hours: float) -> int:
    level_a = _LEVEL_ORDER.get(a.compatibility_level, _UNEVALUATED_ORDER)
    level_b = _LEVEL_ORDER.get(b.compatibility_level, _UNEVALUATED_ORDER)
    if level_a != level_b:
        return level_a - level_b
    if abs(a.time_hours - b.time_hours) < tie_threshold_hours:
        return (a.cost > b.cost) - (a.cost < b.cost)
    return (a.time_hours > b.time_hours) - (a.time_hours < b.time_hours)


def rank_results(
    results: Sequence[CalculationResult],
    tie_threshold_hours: float = CompatibilityConfig.TIE_THRESHOLD_HOURS,
) -> list[CalculationResult]:
    """Order results: full, partial, incompatible, unevaluated.

    Within a level results are ordered by time; times closer than
    tie_threshold_hours are ordered by cost. The sort is stable.
    """
    return sorted(results, key=cmp_to_key(lambda a, b: _compare_results(a, b, tie_threshold_hours)))


def best_options(results: Sequence[CalculationResult]) -> list[CalculationResult]:
    """First compatible result of every equipment type, in the given (ranked) order."""
    best: dict[str, CalculationResult] = {}
    for result in results:
        if result.compatible and result.equipment_type not in best:
            best[result.equipment_type] = result
    return list(best.values())


class CompatibilityEngine:
    """Evaluates an equipment catalog against an analyzed route.

    The engine holds only its parameters; catalogs and analyses are passed in
    whole on every call.

    Example:
        engine = CompatibilityEngine()
        report = engine.analyze_equipment(
            route_distance_m=track.total_distance_m,
            track_analysis=track,
            vegetation_analysis=vegetation,
            catalog=default_catalog(),
        )
        for result in report.results:
            print(result)
    """

    def __init__(self, parameters: Optional[CompatibilityParameters] = None):
        self._parameters = parameters or CompatibilityParameters()

    @property
    def parameters(self) -> CompatibilityParameters:
        return self._parameters

    def evaluate(
        self,
        route_distance_m: float,
        track_analysis: TrackAnalysis,
        catalog: Sequence[EquipmentSpec],
        vegetation_analysis: Optional[VegetationAnalysis] = None,
        vegetation: Optional[str] = None,
    ) -> list[CalculationResult]:
        """Ranked results only. See analyze_equipment."""
        report = self.analyze_equipment(
            route_distance_m=route_distance_m,
            track_analysis=track_analysis,
            catalog=catalog,
            vegetation_analysis=vegetation_analysis,
            vegetation=vegetation,
        )
        return list(report.results)

    def analyze_equipment(
        self,
        route_distance_m: float,
        track_analysis: TrackAnalysis,
        catalog: Sequence[EquipmentSpec],
        vegetation_analysis: Optional[VegetationAnalysis] = None,
        vegetation: Optional[str] = None,
    ) -> EquipmentReport:
        """Evaluate every catalog entry against the route.

        Args:
            route_distance_m: Length of the route to clear
            track_analysis: Slope analysis of the route
            catalog: Equipment to evaluate
            vegetation_analysis: Vegetation analysis (used when vegetation is None)
            vegetation: Vegetation type chosen by the caller

        Returns:
            EquipmentReport with ranked results.

        Raises:
            InvalidInputError: If no vegetation is available, the vegetation
                type is unknown, or the distance is negative.
        """
        if route_distance_m < 0:
            raise InvalidInputError(f"Route distance must not be negative, got {route_distance_m}")
        if vegetation is None:
            if vegetation_analysis is None:
                raise InvalidInputError("Either vegetation or vegetation_analysis is required")
            vegetation = vegetation_analysis.predominant_vegetation
        if vegetation not in VegetationConfig.TYPES:
            raise InvalidInputError(f"Unknown vegetation type: {vegetation}")

        terrain = derive_terrain_level(max_slope_deg=track_analysis.max_slope_deg)
        conditions = _Conditions(
            route_distance_m=route_distance_m,
            track=track_analysis,
            terrain=terrain,
            vegetation=vegetation,
            terrain_factor=self._parameters.terrain_factors[terrain],
            vegetation_factor=self._parameters.vegetation_factors[vegetation],
        )

        results: list[CalculationResult] = []
        validation_errors: list[str] = []
        for spec in catalog:
            errors = validate_equipment(spec=spec) + self._missing_rate_errors(spec=spec, vegetation=vegetation)
            if errors:
                logger.warning(f"Skipping invalid equipment {spec.id!r}: {', '.join(errors)}")
                validation_errors.append(f"{spec.name or spec.id}: {', '.join(errors)}")
                results.append(self._unevaluated(spec=spec, errors=errors))
            elif isinstance(spec, Machinery):
                results.append(self._evaluate_machinery(spec=spec, conditions=conditions))
            elif isinstance(spec, Aircraft):
                results.append(self._evaluate_aircraft(spec=spec, conditions=conditions))
            elif isinstance(spec, HandCrew):
                results.append(self._evaluate_hand_crew(spec=spec, conditions=conditions))
            else:
                raise InvalidInputError(f"Unsupported equipment type: {type(spec).__name__}")

        ranked = rank_results(results=results, tie_threshold_hours=self._parameters.tie_threshold_hours)
        logger.info(
            f"Evaluated {len(catalog)} equipment for {route_distance_m:.0f}m ({terrain}, {vegetation}): "
            f"{sum(r.compatible for r in ranked)} compatible, {len(validation_errors)} invalid"
        )
        return EquipmentReport(
            results=tuple(ranked),
            effective_terrain=terrain,
            effective_vegetation=vegetation,
            terrain_factor=conditions.terrain_factor,
            vegetation_factor=conditions.vegetation_factor,
            validation_errors=tuple(validation_errors),
        )

    @staticmethod
    def _missing_rate_errors(spec: EquipmentSpec, vegetation: str) -> list[str]:
        """Machinery cleared by the nominal formula needs a positive nominal rate."""
        if (
            isinstance(spec, Machinery)
            and vegetation in spec.allowed_vegetation
            and spec.clearing_rate_m_per_h <= 0
            and spec.performances
            and not spec.performances_for(vegetation_type=vegetation)
        ):
            return [f"no clearing rate for {vegetation}"]
        return []

    @staticmethod
    def _unevaluated(spec: EquipmentSpec, errors: list[str]) -> CalculationResult:
        return CalculationResult(
            equipment_id=spec.id,
            name=spec.name,
            equipment_type=spec.equipment_type,
            time_hours=0.0,
            cost=0.0,
            compatibility_level=None,
            note="Equipment configuration invalid",
            validation_errors=tuple(errors),
        )

    @staticmethod
    def _environment_compatible(spec: EquipmentSpec, conditions: _Conditions) -> tuple[bool, bool]:
        """(terrain ok, vegetation ok) under strict membership."""
        terrain_ok = spec.highest_terrain_rank >= TerrainConfig.RANKS[conditions.terrain]
        vegetation_ok = conditions.vegetation in spec.allowed_vegetation
        return terrain_ok, vegetation_ok

    def _evaluate_machinery(self, spec: Machinery, conditions: _Conditions) -> CalculationResult:
        terrain_ok, vegetation_ok = self._environment_compatible(spec=spec, conditions=conditions)

        over_fraction: Optional[float] = None
        multiplier = 1.0
        note: Optional[str] = None
        if terrain_ok:
            level = "full" if vegetation_ok else "incompatible"
            if not vegetation_ok:
                note = "Terrain/vegetation not permitted"
        else:
            over_fraction = over_limit_fraction(
                track_analysis=conditions.track,
                highest_terrain_rank=spec.highest_terrain_rank,
            )
            if not vegetation_ok:
                level = "incompatible"
                note = "Terrain/vegetation not permitted"
            elif over_fraction == 0:
                level = "full"
            elif over_fraction <= self._parameters.partial_tolerance:
                level = "partial"
                multiplier = 1 + self._parameters.penalty_scale * over_fraction
                note = f"~{round(over_fraction * 100)}% of route exceeds rated terrain; applying time penalty."
            else:
                level = "incompatible"
                note = "Too much difficult terrain"

        max_slope = conditions.track.max_slope_deg
        slope_compatible = spec.max_slope_deg is None or max_slope <= spec.max_slope_deg
        if not slope_compatible:
            level = "incompatible"
            note = "Slope exceeds capability"

        time_hours = 0.0
        cost = 0.0
        if level != "incompatible":
            cost_per_hour = spec.cost_per_hour
            rows = spec.performances_for(vegetation_type=conditions.vegetation)
            if rows:
                row = select_performance(rows=rows, max_slope_deg=max_slope)
                rate = row.meters_per_hour
                if row.cost_per_hour is not None:
                    cost_per_hour = row.cost_per_hour
            else:
                rate = spec.clearing_rate_m_per_h / (conditions.terrain_factor * conditions.vegetation_factor)
            time_hours = conditions.route_distance_m / rate * multiplier
            cost = time_hours * cost_per_hour if cost_per_hour is not None else 0.0

        return CalculationResult(
            equipment_id=spec.id,
            name=spec.name,
            equipment_type=EquipmentConfig.MACHINERY,
            time_hours=time_hours,
            cost=cost,
            compatibility_level=level,
            over_limit_fraction=over_fraction,
            note=note,
            slope_compatible=slope_compatible,
            max_slope_exceeded_deg=None if slope_compatible else max_slope,
        )

    def _evaluate_aircraft(self, spec: Aircraft, conditions: _Conditions) -> CalculationResult:
        terrain_ok, vegetation_ok = self._environment_compatible(spec=spec, conditions=conditions)
        compatible = terrain_ok and vegetation_ok

        drops = 0
        time_hours = 0.0
        if compatible:
            drops = ceil(conditions.route_distance_m / spec.drop_length_m)
            time_hours = drops * (spec.turnaround_minutes / 60)
        cost = time_hours * spec.cost_per_hour if compatible and spec.cost_per_hour is not None else 0.0

        return CalculationResult(
            equipment_id=spec.id,
            name=spec.name,
            equipment_type=EquipmentConfig.AIRCRAFT,
            time_hours=time_hours,
            cost=cost,
            compatibility_level="full" if compatible else "incompatible",
            drops_count=drops,
            note=None if compatible else "Terrain/vegetation not permitted",
        )

    def _evaluate_hand_crew(self, spec: HandCrew, conditions: _Conditions) -> CalculationResult:
        terrain_ok, vegetation_ok = self._environment_compatible(spec=spec, conditions=conditions)
        compatible = terrain_ok and vegetation_ok

        time_hours = 0.0
        if compatible:
            effective_rate = (spec.crew_size * spec.clearing_rate_per_person_m_per_h) / (
                conditions.terrain_factor * conditions.vegetation_factor
            )
            time_hours = conditions.route_distance_m / effective_rate
        cost = time_hours * spec.cost_per_hour if compatible and spec.cost_per_hour is not None else 0.0

        return CalculationResult(
            equipment_id=spec.id,
            name=spec.name,
            equipment_type=EquipmentConfig.HAND_CREW,
            time_hours=time_hours,
            cost=cost,
            compatibility_level="full" if compatible else "incompatible",
            note=None if compatible else "Terrain/vegetation not permitted",
        )
