"""Error kinds raised by the route analysis engine.

- InvalidInputError: malformed route or parameters (caller mistake)
- ProviderError: elevation/landcover lookup failed (propagated, never swallowed)
- LengthMismatchError: two segmentations of one route disagree on its length
"""


class FireBreakError(Exception):
    """Base class for all planner errors."""


class InvalidInputError(FireBreakError, ValueError):
    """Route or parameter is malformed (fewer than 2 points, non-positive interval, ...)."""


class ProviderError(FireBreakError):
    """An elevation or landcover provider could not answer for a coordinate."""


class LengthMismatchError(FireBreakError):
    """Slope and vegetation segmentations cover different total distances."""

    def __init__(self, slope_distance_m: float, vegetation_distance_m: float, tolerance_m: float):
        self.slope_distance_m = slope_distance_m
        self.vegetation_distance_m = vegetation_distance_m
        self.tolerance_m = tolerance_m
        super().__init__(
            f"Slope segments cover {slope_distance_m:.3f}m but vegetation segments cover "
            f"{vegetation_distance_m:.3f}m (tolerance {tolerance_m}m)"
        )
