"""Built-in equipment catalog.

Standard clearing resources with typical rates and costs. Values can be
adjusted per region; the surrounding application may replace the catalog
entirely (see equipment_from_dict for JSON catalogs).
"""

from firebreak_planner.constants import TerrainConfig, VegetationConfig
from firebreak_planner.model.equipment import Aircraft, EquipmentSpec, HandCrew, Machinery

_ALL_TERRAIN = frozenset(TerrainConfig.LEVELS)
_ALL_VEGETATION = frozenset(VegetationConfig.TYPES)
_UP_TO_DIFFICULT = frozenset({"easy", "moderate", "difficult"})
_UP_TO_MODERATE = frozenset({"easy", "moderate"})


def default_machinery() -> list[Machinery]:
    return [
        Machinery(
            id="dozer-d6",
            name="Caterpillar D6 Dozer",
            allowed_terrain=_UP_TO_DIFFICULT,
            allowed_vegetation=frozenset({"grassland", "lightshrub", "mediumscrub"}),
            cost_per_hour=180.0,
            description="Medium dozer suitable for most terrain types",
            clearing_rate_m_per_h=1200.0,
        ),
        Machinery(
            id="dozer-d8",
            name="Caterpillar D8 Dozer",
            allowed_terrain=_ALL_TERRAIN,
            allowed_vegetation=_ALL_VEGETATION,
            cost_per_hour=250.0,
            description="Heavy dozer for difficult terrain and heavy vegetation",
            clearing_rate_m_per_h=1800.0,
        ),
        Machinery(
            id="grader-140m",
            name="Motor Grader 140M",
            allowed_terrain=_UP_TO_MODERATE,
            allowed_vegetation=frozenset({"grassland"}),
            cost_per_hour=120.0,
            description="Motor grader for maintaining existing trails and light clearing",
            clearing_rate_m_per_h=2500.0,
        ),
        Machinery(
            id="dozer-d4",
            name="Caterpillar D4 Dozer",
            allowed_terrain=_UP_TO_DIFFICULT,
            allowed_vegetation=frozenset({"grassland", "lightshrub"}),
            cost_per_hour=140.0,
            description="Light dozer for sensitive areas and narrow fire breaks",
            clearing_rate_m_per_h=800.0,
        ),
    ]


def default_aircraft() -> list[Aircraft]:
    return [
        Aircraft(
            id="helicopter-light",
            name="Light Helicopter (AS350)",
            allowed_terrain=_UP_TO_DIFFICULT,
            allowed_vegetation=frozenset({"grassland", "lightshrub", "mediumscrub"}),
            cost_per_hour=3500.0,
            description="Light helicopter for water/retardant drops on smaller fire breaks",
            drop_length_m=100.0,
            turnaround_minutes=15.0,
        ),
        Aircraft(
            id="helicopter-medium",
            name="Medium Helicopter (Bell 212)",
            allowed_terrain=_ALL_TERRAIN,
            allowed_vegetation=_ALL_VEGETATION,
            cost_per_hour=5000.0,
            description="Medium helicopter with larger capacity for longer fire breaks",
            drop_length_m=150.0,
            turnaround_minutes=20.0,
        ),
        Aircraft(
            id="fixed-wing-light",
            name="Air Tractor AT-802F",
            allowed_terrain=_UP_TO_MODERATE,
            allowed_vegetation=frozenset({"grassland", "lightshrub", "mediumscrub"}),
            cost_per_hour=4200.0,
            description="Fixed-wing aircraft for large area coverage",
            drop_length_m=300.0,
            turnaround_minutes=25.0,
        ),
    ]


def default_hand_crews() -> list[HandCrew]:
    return [
        HandCrew(
            id="standard-crew",
            name="Standard Hand Crew",
            allowed_terrain=_ALL_TERRAIN,
            allowed_vegetation=_ALL_VEGETATION,
            cost_per_hour=420.0,  # Whole crew
            description="Standard 6-person crew with mixed hand tools and chainsaws",
            crew_size=6,
            clearing_rate_per_person_m_per_h=50.0,
        ),
        HandCrew(
            id="rapid-response",
            name="Rapid Response Crew",
            allowed_terrain=_UP_TO_DIFFICULT,
            allowed_vegetation=frozenset({"grassland", "lightshrub"}),
            cost_per_hour=320.0,
            description="Smaller, faster crew for quick initial attack",
            crew_size=4,
            clearing_rate_per_person_m_per_h=60.0,
        ),
        HandCrew(
            id="heavy-crew",
            name="Heavy Clearing Crew",
            allowed_terrain=_UP_TO_DIFFICULT,
            allowed_vegetation=frozenset({"mediumscrub", "heavyforest"}),
            cost_per_hour=650.0,
            description="Large crew with power tools for heavy vegetation clearing",
            crew_size=10,
            clearing_rate_per_person_m_per_h=45.0,
        ),
    ]


def default_catalog() -> list[EquipmentSpec]:
    """Machinery, aircraft and hand crews of the standard configuration."""
    return [*default_machinery(), *default_aircraft(), *default_hand_crews()]
