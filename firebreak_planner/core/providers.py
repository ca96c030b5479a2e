"""Provider interfaces for per-coordinate terrain lookups.

The analyzers depend only on these two capabilities, so the algorithmic
core runs without any HTTP client or image decoder. Production
implementations live in elevation_service and landcover_service.

Both lookups are awaited. Implementations raise ProviderError when they
cannot answer; they never substitute a made-up value.
"""

from typing import Protocol, runtime_checkable

from firebreak_planner.model.coordinate import Coordinate


@runtime_checkable
class ElevationProvider(Protocol):
    """Returns ground elevation for a coordinate."""

    async def get_elevation(self, coordinate: Coordinate) -> float:
        """Elevation in meters above sea level.

        Raises:
            ProviderError: On network or decoding failure.
        """
        ...


@runtime_checkable
class LandcoverProvider(Protocol):
    """Returns the raw landcover label for a coordinate."""

    async def get_landcover_class(self, coordinate: Coordinate) -> str:
        """Landcover label such as "wood", "scrub", "grass", "crop" or "snow".

        Raises:
            ProviderError: On network or decoding failure.
        """
        ...
