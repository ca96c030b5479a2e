"""Data model classes for route analysis and equipment evaluation.

Every class is an immutable dataclass:
- Coordinate: Geometry atom (lat, lon)
- BaseRouteSegment: Base class for a stretch of route with distance and polyline
- SlopeSegment / VegetationSegment: Merged stretches of one slope category / vegetation type
- TrackAnalysis / VegetationAnalysis: Aggregated segmentation of a whole route
- OverlapMatrix: Slope category x vegetation type distances
- EquipmentSpec: Machinery, Aircraft and HandCrew specifications
- CalculationResult: Time, cost and compatibility of one equipment item
"""

from firebreak_planner.model.base_segment import BaseRouteSegment
from firebreak_planner.model.calculation_result import CalculationResult
from firebreak_planner.model.coordinate import Coordinate
from firebreak_planner.model.equipment import (
    Aircraft,
    EquipmentSpec,
    HandCrew,
    Machinery,
    MachineryPerformance,
    equipment_from_dict,
)
from firebreak_planner.model.overlap_matrix import OverlapMatrix
from firebreak_planner.model.slope_segment import SlopeSegment
from firebreak_planner.model.track_analysis import TrackAnalysis
from firebreak_planner.model.vegetation_analysis import VegetationAnalysis
from firebreak_planner.model.vegetation_segment import VegetationSegment

__all__ = [
    "Coordinate",
    "BaseRouteSegment",
    "SlopeSegment",
    "VegetationSegment",
    "TrackAnalysis",
    "VegetationAnalysis",
    "OverlapMatrix",
    "EquipmentSpec",
    "Machinery",
    "MachineryPerformance",
    "Aircraft",
    "HandCrew",
    "equipment_from_dict",
    "CalculationResult",
]
