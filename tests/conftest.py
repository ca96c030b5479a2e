"""Shared pytest fixtures for firebreak_planner tests.

Provides mock providers and reusable test data for all firebreak_planner tests.
All fixtures use explicit values with documented rationale.

COORDINATE SYSTEM:
    Tests use coordinates near the equator (lat~0) and prime meridian (lon~0)
    where the math is simple: 1 degree ≈ 111,320 meters in both directions.
    This avoids needing GeoCalculator in the mocks (which would test with tested code).
    GeoCalculator uses R = 6,371 km (1° ≈ 111,195 m), so distances derived from
    METERS_PER_DEGREE are ~0.1% long; tests compare with tolerances accordingly.
"""

import pytest

from firebreak_planner.core.errors import ProviderError
from firebreak_planner.model.coordinate import Coordinate
from firebreak_planner.model.track_analysis import TrackAnalysis
from firebreak_planner.model.vegetation_analysis import VegetationAnalysis

METERS_PER_DEGREE = 111_320


def deg(meters: float) -> float:
    """Convert meters to degrees near the equator."""
    return meters / METERS_PER_DEGREE


# =============================================================================
# MOCK PROVIDERS
# =============================================================================


class MockElevationProvider:
    """Mock elevation returning synthetic elevation based on simple linear formula.

    Elevation formula:
        elevation = base_elev + (lat * METERS_PER_DEGREE * slope_ns_pct / 100)
                              - (lon * METERS_PER_DEGREE * slope_ew_pct / 100)

    Going north (positive lat): elevation rises if slope_ns > 0
    Going east (positive lon): elevation drops if slope_ew > 0

    A route leg that only changes latitude sees slope_ns_pct, one that only
    changes longitude sees slope_ew_pct. Slope angles: 10% ≈ 5.7° (flat),
    20% ≈ 11.3° (medium), 50% ≈ 26.6° (steep), 100% = 45° (very_steep).
    """

    def __init__(self, base_elevation: float = 500.0, slope_ns_pct: float = 0.0, slope_ew_pct: float = 0.0) -> None:
        self.base_elevation = base_elevation
        self.slope_ns_pct = slope_ns_pct
        self.slope_ew_pct = slope_ew_pct
        self.calls: list[Coordinate] = []

    def elevation(self, coordinate: Coordinate) -> float:
        return (
            self.base_elevation
            + coordinate.lat * METERS_PER_DEGREE * self.slope_ns_pct / 100
            - coordinate.lon * METERS_PER_DEGREE * self.slope_ew_pct / 100
        )

    async def get_elevation(self, coordinate: Coordinate) -> float:
        self.calls.append(coordinate)
        return self.elevation(coordinate)


class MockLandcoverProvider:
    """Mock landcover returning labels by longitude band.

    Args:
        bands: (upper longitude, label) pairs in ascending order; a coordinate
            gets the label of the first band whose upper bound exceeds its
            longitude, or the last label beyond every bound.

    Example:
        MockLandcoverProvider(bands=[(deg(600), "grass"), (1.0, "wood")])
        -> first 600m grassland, then heavyforest
    """

    def __init__(self, bands: list[tuple[float, str]]) -> None:
        self.bands = bands
        self.calls: list[Coordinate] = []

    def label(self, coordinate: Coordinate) -> str:
        for upper, label in self.bands:
            if coordinate.lon < upper:
                return label
        return self.bands[-1][1]

    async def get_landcover_class(self, coordinate: Coordinate) -> str:
        self.calls.append(coordinate)
        return self.label(coordinate)


class FailingProvider:
    """Provider failing with ProviderError after `succeed_count` lookups."""

    def __init__(self, succeed_count: int = 0) -> None:
        self.succeed_count = succeed_count
        self.call_count = 0

    def _maybe_fail(self) -> None:
        self.call_count += 1
        if self.call_count > self.succeed_count:
            raise ProviderError(f"lookup {self.call_count} failed")

    async def get_elevation(self, coordinate: Coordinate) -> float:
        self._maybe_fail()
        return 100.0

    async def get_landcover_class(self, coordinate: Coordinate) -> str:
        self._maybe_fail()
        return "grass"


# =============================================================================
# ANALYSIS BUILDERS
# =============================================================================


def make_track(
    distribution: dict[str, float],
    max_slope_deg: float,
    average_slope_deg: float = 0.0,
) -> TrackAnalysis:
    """TrackAnalysis without segments for compatibility scenarios."""
    full = {"flat": 0.0, "medium": 0.0, "steep": 0.0, "very_steep": 0.0, **distribution}
    return TrackAnalysis(
        total_distance_m=sum(full.values()),
        segments=(),
        max_slope_deg=max_slope_deg,
        average_slope_deg=average_slope_deg,
        slope_distribution=full,
    )


def make_vegetation(predominant: str, total_distance_m: float = 1000.0) -> VegetationAnalysis:
    """VegetationAnalysis fully covered by one vegetation type."""
    distribution = {"grassland": 0.0, "lightshrub": 0.0, "mediumscrub": 0.0, "heavyforest": 0.0}
    distribution[predominant] = total_distance_m
    return VegetationAnalysis(
        total_distance_m=total_distance_m,
        segments=(),
        predominant_vegetation=predominant,
        vegetation_distribution=distribution,
        overall_confidence=0.9,
    )


# =============================================================================
# PROVIDER FIXTURES
# =============================================================================


@pytest.fixture
def flat_elevation() -> MockElevationProvider:
    """Level ground everywhere: every step is 0°."""
    return MockElevationProvider(base_elevation=500.0)


@pytest.fixture
def mixed_elevation() -> MockElevationProvider:
    """Flat east-west, 50% (≈26.6°, steep) north-south."""
    return MockElevationProvider(base_elevation=500.0, slope_ns_pct=50.0, slope_ew_pct=0.0)


@pytest.fixture
def grass_landcover() -> MockLandcoverProvider:
    """Grass everywhere."""
    return MockLandcoverProvider(bands=[(180.0, "grass")])


@pytest.fixture
def grass_then_wood_landcover() -> MockLandcoverProvider:
    """Grass for the first 600m east of the meridian, wood beyond."""
    return MockLandcoverProvider(bands=[(deg(600), "grass"), (180.0, "wood")])


# =============================================================================
# ROUTE FIXTURES
# =============================================================================


@pytest.fixture
def straight_route() -> list[Coordinate]:
    """Two points, ~1km due east along the equator."""
    return [Coordinate(lat=0.0, lon=0.0), Coordinate(lat=0.0, lon=deg(1000))]


@pytest.fixture
def l_shaped_route() -> list[Coordinate]:
    """1km east (flat leg), then 300m north (sloped leg under mixed_elevation)."""
    return [
        Coordinate(lat=0.0, lon=0.0),
        Coordinate(lat=0.0, lon=deg(1000)),
        Coordinate(lat=deg(300), lon=deg(1000)),
    ]


@pytest.fixture
def zigzag_route() -> list[Coordinate]:
    """Five vertices with leg lengths that are not multiples of 100m or 200m."""
    return [
        Coordinate(lat=0.0, lon=0.0),
        Coordinate(lat=0.0, lon=deg(250)),
        Coordinate(lat=deg(130), lon=deg(250)),
        Coordinate(lat=deg(130), lon=deg(720)),
        Coordinate(lat=deg(-40), lon=deg(905)),
    ]
