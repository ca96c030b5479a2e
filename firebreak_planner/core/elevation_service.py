"""Terrain-RGB elevation provider.

Looks up ground elevation from web-mercator Terrain-RGB raster tiles:
- WGS84 -> EPSG:3857 with pyproj, then tile/pixel addressing at a fixed zoom
- Tiles downloaded with requests and decoded with rasterio into NumPy arrays
- Decoded tiles cached per provider instance (thread-safe)
- elevation = -10000 + (R * 65536 + G * 256 + B) * 0.1

The access token is read from the MAPBOX_TOKEN environment variable unless
passed explicitly. Every failure surfaces as ProviderError; there is no
fallback elevation.
"""

import asyncio
import logging
import os
import threading
import warnings
from math import floor
from typing import Optional

import numpy as np
import requests
from pyproj import Transformer
from rasterio.errors import NotGeoreferencedWarning, RasterioError
from rasterio.io import MemoryFile

from firebreak_planner.constants import ElevationTileConfig
from firebreak_planner.core.errors import ProviderError
from firebreak_planner.model.coordinate import Coordinate

logger = logging.getLogger(__name__)

_TO_MERCATOR = Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True)


def lonlat_to_tile_pixel(
    lon: float,
    lat: float,
    zoom: int = ElevationTileConfig.ZOOM,
    tile_size: int = ElevationTileConfig.TILE_SIZE_PX,
) -> tuple[int, int, int, int]:
    """Locate the tile and pixel containing a WGS84 coordinate.

    Args:
        lon: Longitude in decimal degrees
        lat: Latitude in decimal degrees
        zoom: Tile zoom level
        tile_size: Tile edge length in pixels

    Returns:
        Tuple of (tile_x, tile_y, pixel_x, pixel_y).
    """
    half_world = ElevationTileConfig.MERCATOR_HALF_WORLD_M
    x, y = _TO_MERCATOR.transform(lon, lat)
    n_tiles = 2**zoom

    # Fractional tile position, origin at the north-west corner of the world
    fx = (x + half_world) / (2 * half_world) * n_tiles
    fy = (half_world - y) / (2 * half_world) * n_tiles

    tile_x = min(max(int(floor(fx)), 0), n_tiles - 1)
    tile_y = min(max(int(floor(fy)), 0), n_tiles - 1)
    pixel_x = min(max(int((fx - tile_x) * tile_size), 0), tile_size - 1)
    pixel_y = min(max(int((fy - tile_y) * tile_size), 0), tile_size - 1)
    return tile_x, tile_y, pixel_x, pixel_y


def decode_terrain_rgb(red, green, blue):
    """Decode Terrain-RGB channel values (scalars or arrays) to meters."""
    r = np.asarray(red, dtype=np.float64)
    g = np.asarray(green, dtype=np.float64)
    b = np.asarray(blue, dtype=np.float64)
    return ElevationTileConfig.OFFSET_M + (r * 65536 + g * 256 + b) * ElevationTileConfig.SCALE_M


class TerrainRGBElevationProvider:
    """ElevationProvider backed by Terrain-RGB tiles.

    Example:
        provider = TerrainRGBElevationProvider()  # token from MAPBOX_TOKEN
        elevation = await provider.get_elevation(Coordinate(lat=-35.3, lon=149.1))
    """

    def __init__(
        self,
        token: Optional[str] = None,
        zoom: int = ElevationTileConfig.ZOOM,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the provider.

        Args:
            token: Tile service access token (default: MAPBOX_TOKEN environment variable)
            zoom: Tile zoom level
            session: Optional requests session for connection reuse
        """
        self._token = token or os.environ.get(ElevationTileConfig.TOKEN_ENV_VAR, "")
        self._zoom = zoom
        self._session = session or requests.Session()
        self._tiles: dict[tuple[int, int, int], np.ndarray] = {}
        self._tile_lock = threading.Lock()

    @property
    def cached_tile_count(self) -> int:
        """Number of decoded tiles held in memory."""
        return len(self._tiles)

    def _tile_url(self, tile_x: int, tile_y: int) -> str:
        if not self._token:
            raise ProviderError(
                f"No elevation tile token configured; set {ElevationTileConfig.TOKEN_ENV_VAR} or pass token="
            )
        return ElevationTileConfig.TILE_URL_TEMPLATE.format(z=self._zoom, x=tile_x, y=tile_y, token=self._token)

    def _fetch_tile_array(self, tile_x: int, tile_y: int) -> np.ndarray:
        """Download and decode one tile into an elevation array (rows x cols)."""
        url = self._tile_url(tile_x=tile_x, tile_y=tile_y)
        try:
            response = self._session.get(url, timeout=ElevationTileConfig.REQUEST_TIMEOUT_S)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ProviderError(f"Elevation tile {self._zoom}/{tile_x}/{tile_y} download failed: {exc}") from exc

        try:
            with warnings.catch_warnings():
                # Raw PNG tiles carry no georeference
                warnings.simplefilter("ignore", NotGeoreferencedWarning)
                with MemoryFile(response.content) as memfile:
                    with memfile.open() as dataset:
                        if dataset.count < 3:
                            raise ProviderError(
                                f"Elevation tile {self._zoom}/{tile_x}/{tile_y} has {dataset.count} bands, expected RGB"
                            )
                        rgb = dataset.read(indexes=[1, 2, 3])
        except RasterioError as exc:
            raise ProviderError(f"Elevation tile {self._zoom}/{tile_x}/{tile_y} could not be decoded: {exc}") from exc

        logger.debug(f"Decoded elevation tile {self._zoom}/{tile_x}/{tile_y} ({rgb.shape[1]}x{rgb.shape[2]})")
        return decode_terrain_rgb(rgb[0], rgb[1], rgb[2])

    def _tile(self, tile_x: int, tile_y: int) -> np.ndarray:
        """Cached tile array (download on first access)."""
        key = (self._zoom, tile_x, tile_y)
        with self._tile_lock:
            cached = self._tiles.get(key)
        if cached is not None:
            return cached

        array = self._fetch_tile_array(tile_x=tile_x, tile_y=tile_y)
        with self._tile_lock:
            self._tiles.setdefault(key, array)
            return self._tiles[key]

    def elevation_at(self, coordinate: Coordinate) -> float:
        """Blocking elevation lookup.

        Raises:
            ProviderError: If the tile cannot be downloaded or decoded.
        """
        tile_x, tile_y, pixel_x, pixel_y = lonlat_to_tile_pixel(
            lon=coordinate.lon,
            lat=coordinate.lat,
            zoom=self._zoom,
        )
        array = self._tile(tile_x=tile_x, tile_y=tile_y)
        if pixel_y >= array.shape[0] or pixel_x >= array.shape[1]:
            raise ProviderError(f"Pixel ({pixel_x}, {pixel_y}) outside tile of shape {array.shape}")
        return float(array[pixel_y, pixel_x])

    async def get_elevation(self, coordinate: Coordinate) -> float:
        """Elevation in meters, looked up off the event loop."""
        return await asyncio.to_thread(self.elevation_at, coordinate)
