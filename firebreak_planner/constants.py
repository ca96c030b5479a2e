"""Configuration constants for Fire Break Planner.

All configurable parameters are centralized here for easy tuning.

Classes:
    ResampleConfig: Sampling intervals along a drawn route
    SlopeConfig: Slope category thresholds and display labels
    TerrainConfig: Terrain levels, ranks and clearing factors
    VegetationConfig: Vegetation taxonomy, factors and landcover lookup
    CompatibilityConfig: Partial-tolerance and ranking rules
    EquipmentConfig: Equipment type identifiers
    ConcurrencyConfig: Provider request window
    ElevationTileConfig: Terrain-RGB tile service parameters
    LandcoverConfig: Landcover raster paths and class codes
"""

from pathlib import Path

# Package root directory (where firebreak_planner/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of firebreak_planner/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Data directory outside package (downloaded separately, not shipped with package)
DATA_DIR = PROJECT_ROOT / "data"


class ResampleConfig:
    """Fixed sampling intervals along a route (meters)."""

    SLOPE_INTERVAL_M = 100.0
    VEGETATION_INTERVAL_M = 200.0

    # Points closer than this to the previous output point are duplicates (1 mm)
    DUPLICATE_TOLERANCE_M = 0.001


class SlopeConfig:
    """Slope categorization thresholds (degrees).

    Single source of truth for category boundaries. Upper bounds are inclusive:
    10.0° is still "flat", 10.01° is "medium". Terrain levels and display labels
    are derived from the same table so they can never disagree.
    """

    CATEGORY_THRESHOLDS = {
        "flat": 10.0,
        "medium": 20.0,
        "steep": 30.0,
        "very_steep": None,  # open ended
    }
    CATEGORIES = list(CATEGORY_THRESHOLDS.keys())

    CATEGORY_LABELS = {
        "flat": "Flat (0-10°)",
        "medium": "Medium (10-20°)",
        "steep": "Steep (20-30°)",
        "very_steep": "Very Steep (30°+)",
    }
    assert set(CATEGORY_LABELS.keys()) == set(CATEGORIES)


class TerrainConfig:
    """Terrain levels in ascending difficulty order."""

    RANKS = {
        "easy": 0,
        "moderate": 1,
        "difficult": 2,
        "extreme": 3,
    }
    LEVELS = list(RANKS.keys())

    # Slope category -> implied terrain level
    CATEGORY_TO_TERRAIN = {
        "flat": "easy",
        "medium": "moderate",
        "steep": "difficult",
        "very_steep": "extreme",
    }
    assert set(CATEGORY_TO_TERRAIN.keys()) == set(SlopeConfig.CATEGORIES)
    assert set(CATEGORY_TO_TERRAIN.values()) == set(LEVELS)

    # Divisor applied to nominal clearing rates
    FACTORS = {
        "easy": 1.0,  # Flat, accessible terrain
        "moderate": 1.3,  # Rolling hills, some obstacles
        "difficult": 1.7,  # Steep slopes, rocky terrain
        "extreme": 2.2,  # Very steep, inaccessible areas
    }
    assert set(FACTORS.keys()) == set(LEVELS)


class VegetationConfig:
    """Vegetation taxonomy, clearing factors and landcover classification."""

    # Fixed enumeration order, also used to break predominance ties
    TYPES = ["grassland", "lightshrub", "mediumscrub", "heavyforest"]

    FACTORS = {
        "grassland": 1.0,  # very light
        "lightshrub": 1.1,  # <10cm diameter
        "mediumscrub": 1.5,  # 10-50cm
        "heavyforest": 2.0,  # 50cm+
    }
    assert set(FACTORS.keys()) == set(TYPES)

    # Raw landcover label -> (vegetation type, confidence)
    LANDCOVER_CLASSES = {
        "wood": ("heavyforest", 0.9),
        "forest": ("heavyforest", 0.9),
        "scrub": ("mediumscrub", 0.85),
        "shrub": ("mediumscrub", 0.85),
        "grass": ("grassland", 0.9),
        "grassland": ("grassland", 0.9),
        "crop": ("lightshrub", 0.7),
        "farmland": ("lightshrub", 0.7),
        "agriculture": ("lightshrub", 0.7),
        # Low-confidence placeholder, nothing to clear on snow
        "snow": ("grassland", 0.3),
        "ice": ("grassland", 0.3),
    }
    assert {veg for veg, _ in LANDCOVER_CLASSES.values()} <= set(TYPES)

    UNKNOWN_CLASS = ("mediumscrub", 0.4)


class CompatibilityConfig:
    """Partial-tolerance relaxation and ranking defaults."""

    # Fraction of route distance allowed above a machine's rated terrain (inclusive)
    PARTIAL_TOLERANCE = 0.15

    # Time multiplier for partial compatibility: 1 + PENALTY_SCALE * over_fraction
    PENALTY_SCALE = 2.0

    # Results closer than this in time are ordered by cost
    TIE_THRESHOLD_HOURS = 0.1

    LEVELS = ["full", "partial", "incompatible"]

    # Totals of independently segmented analyses must agree within this (meters)
    LENGTH_TOLERANCE_M = 1.0


class EquipmentConfig:
    """Equipment type identifiers."""

    MACHINERY = "machinery"
    AIRCRAFT = "aircraft"
    HAND_CREW = "hand_crew"
    TYPES = [MACHINERY, AIRCRAFT, HAND_CREW]


class ConcurrencyConfig:
    """Bounded-parallel provider lookups."""

    # Maximum in-flight elevation/landcover requests per analysis
    MAX_CONCURRENT_REQUESTS = 8


class ElevationTileConfig:
    """Mapbox Terrain-RGB tile service."""

    TOKEN_ENV_VAR = "MAPBOX_TOKEN"
    TILE_URL_TEMPLATE = "https://api.mapbox.com/v4/mapbox.terrain-rgb/{z}/{x}/{y}.pngraw?access_token={token}"
    ZOOM = 13  # Balance detail vs tile count
    TILE_SIZE_PX = 256
    REQUEST_TIMEOUT_S = 30

    # elevation = OFFSET_M + (R * 65536 + G * 256 + B) * SCALE_M
    OFFSET_M = -10000.0
    SCALE_M = 0.1

    # Half the web-mercator world width (EPSG:3857 meters)
    MERCATOR_HALF_WORLD_M = 20037508.342789244


class LandcoverConfig:
    """Landcover raster (ESA WorldCover 10m class codes)."""

    RASTER_PATH = DATA_DIR / "landcover.tif"

    TILE_SIZE_DEG = 3

    # Public WorldCover tiles, named by 3x3 degree south-west corner (e.g. "S36E147")
    DOWNLOAD_URL_TEMPLATE = (
        "https://esa-worldcover.s3.eu-central-1.amazonaws.com/v200/2021/map/ESA_WorldCover_10m_2021_v200_{tile}_Map.tif"
    )
    DOWNLOAD_TIMEOUT_S = 180

    # WorldCover class code -> landcover label understood by VegetationConfig
    CLASS_LABELS = {
        10: "wood",  # Tree cover
        20: "scrub",  # Shrubland
        30: "grass",  # Grassland
        40: "crop",  # Cropland
        50: "built",  # Built-up
        60: "bare",  # Bare / sparse vegetation
        70: "snow",  # Snow and ice
        80: "water",  # Permanent water bodies
        90: "wetland",  # Herbaceous wetland
        95: "mangrove",  # Mangroves
        100: "moss",  # Moss and lichen
    }
    UNKNOWN_LABEL = "unknown"
