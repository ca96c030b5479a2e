"""Tests for firebreak_planner core building blocks.

Tests: GeoCalculator, resample, fetch_in_order
Focus: Exact geometry on near-equator coordinates, order guarantees

Note: Fixtures are defined in conftest.py (routes, deg helper).
"""

import asyncio
from math import cos, radians

import pytest
from hypothesis import assume, given, settings, strategies as st

from conftest import deg
from firebreak_planner.constants import ResampleConfig
from firebreak_planner.core.errors import InvalidInputError
from firebreak_planner.core.geo_calculator import GeoCalculator
from firebreak_planner.core.resampler import resample
from firebreak_planner.core.sampling import fetch_in_order
from firebreak_planner.model.coordinate import Coordinate


# =============================================================================
# GEO CALCULATOR
# =============================================================================


class TestGeoCalculator:
    """GeoCalculator - geodesic calculations on Earth's surface."""

    def test_haversine_distance_one_degree_latitude(self) -> None:
        """1 degree latitude ≈ 111km."""
        dist = GeoCalculator.haversine_distance_m(lat1=-35.0, lon1=149.0, lat2=-34.0, lon2=149.0)
        assert 110_000 < dist < 112_000

    def test_haversine_distance_one_degree_longitude(self) -> None:
        """1 degree longitude at 35°S ≈ 91km."""
        dist = GeoCalculator.haversine_distance_m(lat1=-35.0, lon1=149.0, lat2=-35.0, lon2=150.0)
        expected = 111_195 * cos(radians(35))
        assert abs(dist - expected) < 500

    def test_haversine_zero_distance(self) -> None:
        assert GeoCalculator.haversine_distance_m(lat1=1.0, lon1=2.0, lat2=1.0, lon2=2.0) == 0.0

    def test_haversine_symmetric(self) -> None:
        forward = GeoCalculator.haversine_distance_m(lat1=0.0, lon1=0.0, lat2=0.01, lon2=0.02)
        backward = GeoCalculator.haversine_distance_m(lat1=0.01, lon1=0.02, lat2=0.0, lon2=0.0)
        assert forward == pytest.approx(backward)

    def test_interpolate_endpoints(self) -> None:
        assert GeoCalculator.interpolate(lat1=0.0, lon1=0.0, lat2=1.0, lon2=2.0, ratio=0.0) == (0.0, 0.0)
        assert GeoCalculator.interpolate(lat1=0.0, lon1=0.0, lat2=1.0, lon2=2.0, ratio=1.0) == (1.0, 2.0)

    def test_interpolate_quarter(self) -> None:
        lat, lon = GeoCalculator.interpolate(lat1=0.0, lon1=0.0, lat2=0.004, lon2=-0.008, ratio=0.25)
        assert lat == pytest.approx(0.001)
        assert lon == pytest.approx(-0.002)


# =============================================================================
# RESAMPLER
# =============================================================================


class TestResample:
    """resample - fixed-interval sampling that keeps every drawn vertex."""

    def test_straight_route_gets_interval_points(self, straight_route: list[Coordinate]) -> None:
        """~999m at 100m: marks at 100..900 plus both vertices."""
        samples = resample(points=straight_route, interval_m=100.0)
        assert len(samples) == 11
        assert samples[0] == straight_route[0]
        assert samples[-1] == straight_route[-1]

    def test_spacing_equals_interval(self, straight_route: list[Coordinate]) -> None:
        samples = resample(points=straight_route, interval_m=100.0)
        gaps = [a.distance_to(other=b) for a, b in zip(samples[:-1], samples[1:])]
        for gap in gaps[:-1]:
            assert gap == pytest.approx(100.0, abs=0.01)
        assert gaps[-1] < 100.0

    def test_interval_grid_is_anchored_at_route_start(self) -> None:
        """Marks continue across vertices: with 150m legs the second mark is 50m into leg two."""
        points = [
            Coordinate(lat=0.0, lon=0.0),
            Coordinate(lat=0.0, lon=deg(150)),
            Coordinate(lat=0.0, lon=deg(300)),
        ]
        first_leg = points[0].distance_to(other=points[1])

        samples = resample(points=points, interval_m=100.0)

        assert samples == [points[0], samples[1], points[1], samples[3], points[2]]
        assert points[0].distance_to(other=samples[1]) == pytest.approx(100.0, abs=0.01)
        assert points[1].distance_to(other=samples[3]) == pytest.approx(200.0 - first_leg, abs=0.01)

    def test_short_route_keeps_only_vertices(self) -> None:
        points = [Coordinate(lat=0.0, lon=0.0), Coordinate(lat=0.0, lon=deg(40))]
        assert resample(points=points, interval_m=100.0) == points

    def test_every_vertex_preserved_in_order(self, zigzag_route: list[Coordinate]) -> None:
        samples = resample(points=zigzag_route, interval_m=100.0)
        indices = [samples.index(p) for p in zigzag_route]
        assert indices == sorted(indices)

    def test_repeated_vertex_collapsed(self) -> None:
        a = Coordinate(lat=0.0, lon=0.0)
        b = Coordinate(lat=0.0, lon=deg(50))
        samples = resample(points=[a, a, b], interval_m=100.0)
        assert samples == [a, b]

    def test_degenerate_input_returned_unchanged(self) -> None:
        single = [Coordinate(lat=0.0, lon=0.0)]
        assert resample(points=single, interval_m=100.0) == single
        assert resample(points=[], interval_m=100.0) == []

    @pytest.mark.parametrize("interval", [0.0, -100.0])
    def test_non_positive_interval_rejected(self, straight_route: list[Coordinate], interval: float) -> None:
        with pytest.raises(InvalidInputError, match="positive"):
            resample(points=straight_route, interval_m=interval)

    def test_no_consecutive_duplicates(self, zigzag_route: list[Coordinate]) -> None:
        samples = resample(points=zigzag_route, interval_m=ResampleConfig.VEGETATION_INTERVAL_M)
        for a, b in zip(samples[:-1], samples[1:]):
            assert a.distance_to(other=b) > ResampleConfig.DUPLICATE_TOLERANCE_M


# Small box around (0, 0): legs up to ~2km
_coordinates = st.builds(
    Coordinate,
    lat=st.floats(min_value=-0.01, max_value=0.01, allow_nan=False),
    lon=st.floats(min_value=-0.01, max_value=0.01, allow_nan=False),
)


class TestResampleProperties:
    """Property-based checks over random routes."""

    @given(points=st.lists(_coordinates, min_size=2, max_size=6), interval=st.floats(min_value=10.0, max_value=500.0))
    @settings(max_examples=100, deadline=None)
    def test_vertices_preserved_as_subsequence(self, points: list[Coordinate], interval: float) -> None:
        assume(all(a != b for a, b in zip(points[:-1], points[1:])))
        samples = resample(points=points, interval_m=interval)

        remaining = iter(samples)
        assert all(any(sample == point for sample in remaining) for point in points)

    @given(points=st.lists(_coordinates, min_size=2, max_size=6), interval=st.floats(min_value=10.0, max_value=500.0))
    @settings(max_examples=100, deadline=None)
    def test_gaps_never_exceed_interval(self, points: list[Coordinate], interval: float) -> None:
        samples = resample(points=points, interval_m=interval)
        for a, b in zip(samples[:-1], samples[1:]):
            assert a.distance_to(other=b) <= interval + 2 * ResampleConfig.DUPLICATE_TOLERANCE_M

    @given(points=st.lists(_coordinates, min_size=2, max_size=6), interval=st.floats(min_value=10.0, max_value=500.0))
    @settings(max_examples=100, deadline=None)
    def test_route_length_unchanged(self, points: list[Coordinate], interval: float) -> None:
        original = sum(a.distance_to(other=b) for a, b in zip(points[:-1], points[1:]))
        samples = resample(points=points, interval_m=interval)
        resampled = sum(a.distance_to(other=b) for a, b in zip(samples[:-1], samples[1:]))
        assert resampled == pytest.approx(original, abs=0.01 + 1e-6 * original)


# =============================================================================
# ORDERED BOUNDED FETCH
# =============================================================================


class TestFetchInOrder:
    """fetch_in_order - concurrent lookups, results in input order."""

    def test_results_follow_input_order(self) -> None:
        """Later items finish first; results are still index-aligned."""

        async def slow_for_small(n: int) -> int:
            await asyncio.sleep(0.001 * (10 - n))
            return n * n

        results = asyncio.run(fetch_in_order(items=list(range(10)), fetch=slow_for_small, max_concurrency=10))
        assert results == [n * n for n in range(10)]

    def test_concurrency_window_respected(self) -> None:
        active = 0
        peak = 0

        async def tracked(n: int) -> int:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.001)
            active -= 1
            return n

        results = asyncio.run(fetch_in_order(items=list(range(20)), fetch=tracked, max_concurrency=3))
        assert results == list(range(20))
        assert peak == 3

    def test_empty_items(self) -> None:
        async def never(n: int) -> int:
            raise AssertionError("should not be called")

        assert asyncio.run(fetch_in_order(items=[], fetch=never)) == []

    def test_failure_propagates(self) -> None:
        async def fail_on_three(n: int) -> int:
            if n == 3:
                raise RuntimeError("lookup failed")
            return n

        with pytest.raises(RuntimeError, match="lookup failed"):
            asyncio.run(fetch_in_order(items=list(range(5)), fetch=fail_on_three))

    def test_window_below_one_rejected(self) -> None:
        async def identity(n: int) -> int:
            return n

        with pytest.raises(InvalidInputError):
            asyncio.run(fetch_in_order(items=[1], fetch=identity, max_concurrency=0))
