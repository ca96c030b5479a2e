"""Core foundation classes for route analysis and equipment recommendation.

This module provides the algorithmic backbone of the planner:
- GeoCalculator: Haversine distance and linear interpolation
- Errors: InvalidInputError, ProviderError, LengthMismatchError
- resample (import from resampler module)
- SlopeAnalyzer / VegetationAnalyzer (import from slope_analyzer / vegetation_analyzer)
- join_overlap (import from overlap module)
- CompatibilityEngine (import from compatibility module)
- RouteAnalyzer (import from route_analyzer module)
"""

from firebreak_planner.core.errors import (
    FireBreakError,
    InvalidInputError,
    LengthMismatchError,
    ProviderError,
)
from firebreak_planner.core.geo_calculator import GeoCalculator

# Analyzers depend on model.coordinate, which depends on GeoCalculator.
# Import them directly from their modules to avoid a circular import.

__all__ = [
    # Geo calculator
    "GeoCalculator",
    # Errors
    "FireBreakError",
    "InvalidInputError",
    "ProviderError",
    "LengthMismatchError",
]
