"""Fire Break Planner - Estimate fire-break clearing operations along a drawn route.

A route analysis and equipment recommendation engine featuring:
- Fixed-interval route resampling that never drops a drawn vertex
- Slope and vegetation segmentation from pluggable elevation/landcover providers
- Slope x vegetation overlap distribution
- Ranked machinery, aircraft and hand crew estimates with compatibility verdicts

Modules:
    core: Algorithms (geo math, resampling, segmentation, overlap, compatibility, providers)
    model: Immutable data structures (Coordinate, segments, analyses, equipment, results)

Example:
    from firebreak_planner.core.route_analyzer import RouteAnalyzer
    from firebreak_planner.core.elevation_service import TerrainRGBElevationProvider
    from firebreak_planner.core.landcover_service import LandcoverRasterProvider
    from firebreak_planner.default_catalog import default_catalog
"""
