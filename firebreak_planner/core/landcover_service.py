"""Landcover provider backed by an ESA WorldCover GeoTIFF.

- Categorical raster (one class code per pixel) loaded lazily and thread-safe
- WGS84 coordinates transformed to the raster CRS with rasterio.warp
- Class code -> landcover label ("wood", "scrub", "grass", ...); unknown
  codes map to "unknown" so the classifier applies its low-confidence default
- Out-of-coverage and nodata pixels raise ProviderError

Data Source:
    ESA WorldCover 10m v200 (2021), 3x3 degree tiles
    https://esa-worldcover.org
"""

import asyncio
import logging
import re
import threading
import time
from pathlib import Path
from typing import Callable, Optional

import numpy as np
import rasterio
import requests
from rasterio.errors import RasterioError
from rasterio.warp import transform

from firebreak_planner.constants import LandcoverConfig
from firebreak_planner.core.errors import InvalidInputError, ProviderError
from firebreak_planner.model.coordinate import Coordinate

logger = logging.getLogger(__name__)

_TILE_NAME = re.compile(r"(?P<ns>[NS])(?P<lat>\d{2})(?P<ew>[EW])(?P<lon>\d{3})")


def parse_tile_name(tile: str) -> tuple[int, int]:
    """South-west corner (lat, lon) of a WorldCover tile name such as "S36E147".

    Raises:
        InvalidInputError: If the name is malformed or not on the 3 degree grid.
    """
    match = _TILE_NAME.fullmatch(tile)
    if match is None:
        raise InvalidInputError(f"Invalid WorldCover tile name {tile!r}, expected e.g. 'S36E147'")
    lat = int(match["lat"]) * (-1 if match["ns"] == "S" else 1)
    lon = int(match["lon"]) * (-1 if match["ew"] == "W" else 1)
    if lat % LandcoverConfig.TILE_SIZE_DEG or lon % LandcoverConfig.TILE_SIZE_DEG:
        raise InvalidInputError(f"Tile {tile!r} is not on the {LandcoverConfig.TILE_SIZE_DEG} degree grid")
    if not -90 <= lat < 90 or not -180 <= lon < 180:
        raise InvalidInputError(f"Tile {tile!r} is outside the world")
    return lat, lon


def download_landcover_tile(
    tile: str,
    target_path: Path = LandcoverConfig.RASTER_PATH,
    progress_callback: Optional[Callable[[float], None]] = None,
) -> Path:
    """Download a WorldCover tile if not already present.

    The tile is streamed to a ".part" file next to target_path and renamed
    once complete, so an interrupted download never leaves a truncated raster.

    Args:
        tile: Tile name by south-west corner (e.g. "S36E147")
        target_path: Local path to save the GeoTIFF
        progress_callback: Optional callback receiving progress 0.0-1.0.

    Returns:
        Path to the downloaded (or existing) raster.

    Raises:
        InvalidInputError: If the tile name is invalid.
        requests.RequestException: If download fails.
    """
    parse_tile_name(tile)
    if target_path.exists():
        logger.info(f"Landcover raster already exists at {target_path}")
        return target_path

    target_path.parent.mkdir(parents=True, exist_ok=True)
    partial_path = target_path.with_name(target_path.name + ".part")
    url = LandcoverConfig.DOWNLOAD_URL_TEMPLATE.format(tile=tile)
    logger.info(f"Downloading WorldCover tile {tile} from {url}...")

    try:
        response = requests.get(url, stream=True, timeout=LandcoverConfig.DOWNLOAD_TIMEOUT_S)
        response.raise_for_status()

        total_size = int(response.headers.get("content-length", 0))
        downloaded = 0
        with open(partial_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                f.write(chunk)
                downloaded += len(chunk)
                if progress_callback and total_size > 0:
                    progress_callback(downloaded / total_size)
    except BaseException:
        partial_path.unlink(missing_ok=True)
        raise

    if total_size > 0 and downloaded != total_size:
        partial_path.unlink(missing_ok=True)
        raise requests.ConnectionError(f"Tile {tile} truncated: got {downloaded} of {total_size} bytes")

    partial_path.replace(target_path)
    logger.info(f"Landcover raster downloaded to {target_path} ({downloaded / 1024 / 1024:.1f} MB)")
    return target_path

    target_path.parent.mkdir(parents=True, exist_ok=True)
    url = LandcoverConfig.DOWNLOAD_URL_TEMPLATE.format(tile=tile)
    logger.info(f"Downloading WorldCover tile {tile} from {url}...")

    response = requests.get(url, stream=True, timeout=LandcoverConfig.DOWNLOAD_TIMEOUT_S)
    response.raise_for_status()

    total_size = int(response.headers.get("content-length", 0))
    downloaded = 0

    with open(target_path, "wb") as f:
        for chunk in response.iter_content(chunk_size=8192):
            f.write(chunk)
            downloaded += len(chunk)
            if progress_callback and total_size > 0:
                progress_callback(downloaded / total_size)

    logger.info(f"Landcover raster downloaded to {target_path}")
    return target_path


class LandcoverRasterProvider:
    """LandcoverProvider reading class codes from a categorical GeoTIFF.

    The raster is read into memory on first lookup and reused afterwards.

    Example:
        provider = LandcoverRasterProvider(raster_path=Path("data/landcover.tif"))
        label = await provider.get_landcover_class(Coordinate(lat=-35.3, lon=149.1))
    """

    def __init__(
        self,
        raster_path: Path = LandcoverConfig.RASTER_PATH,
        class_labels: Optional[dict[int, str]] = None,
    ):
        self._raster_path = raster_path
        self._class_labels = class_labels or LandcoverConfig.CLASS_LABELS
        self._load_lock = threading.Lock()
        self._crs: Optional[str] = None
        self._array: Optional[np.ndarray] = None
        self._nodata = None
        self._transform = None

    @property
    def is_loaded(self) -> bool:
        """Check if the raster has been fully loaded into memory."""
        return self._transform is not None

    def _ensure_loaded(self) -> None:
        """Load the raster on first access (thread-safe)."""
        if self.is_loaded:
            return

        with self._load_lock:
            if self.is_loaded:
                return

            if not self._raster_path.exists():
                raise ProviderError(
                    f"Landcover raster not found at {self._raster_path}. Run download_landcover_tile() first."
                )

            logger.info(f"Loading landcover raster from {self._raster_path}...")
            start_time = time.time()
            try:
                with rasterio.open(self._raster_path) as dataset:
                    self._crs = dataset.crs.to_string() if dataset.crs else "EPSG:4326"
                    self._array = dataset.read(1)
                    self._nodata = dataset.nodata
                    # Set _transform LAST - this is what is_loaded checks
                    self._transform = dataset.transform
            except RasterioError as exc:
                raise ProviderError(f"Landcover raster {self._raster_path} could not be read: {exc}") from exc

            elapsed = time.time() - start_time
            logger.info(f"Landcover raster loaded in {elapsed:.2f}s (shape: {self._array.shape}, CRS: {self._crs})")

    def class_code_at(self, coordinate: Coordinate) -> int:
        """Raw class code at a coordinate (blocking).

        Raises:
            ProviderError: If outside coverage or on a nodata pixel.
        """
        self._ensure_loaded()

        if self._crs != "EPSG:4326":
            xs, ys = transform("EPSG:4326", self._crs, [coordinate.lon], [coordinate.lat])
            x, y = xs[0], ys[0]
        else:
            x, y = coordinate.lon, coordinate.lat

        col, row = ~self._transform * (x, y)
        col, row = int(np.floor(col)), int(np.floor(row))

        if row < 0 or row >= self._array.shape[0] or col < 0 or col >= self._array.shape[1]:
            raise ProviderError(f"Coordinate outside landcover coverage: {coordinate} (row={row}, col={col})")

        code = self._array[row, col]
        if self._nodata is not None and code == self._nodata:
            raise ProviderError(f"No landcover data at {coordinate} (nodata={self._nodata})")
        return int(code)

    def landcover_label_at(self, coordinate: Coordinate) -> str:
        """Landcover label at a coordinate (blocking)."""
        code = self.class_code_at(coordinate=coordinate)
        label = self._class_labels.get(code)
        if label is None:
            logger.debug(f"Unknown landcover class code {code} at {coordinate}")
            return LandcoverConfig.UNKNOWN_LABEL
        return label

    async def get_landcover_class(self, coordinate: Coordinate) -> str:
        """Landcover label, looked up off the event loop."""
        return await asyncio.to_thread(self.landcover_label_at, coordinate)
