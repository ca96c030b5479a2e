"""Crop a downloaded WorldCover tile to a planning region.

Developer utility: a full 3x3 degree WorldCover tile is ~100 MB. Cropping it to
the region actually being planned keeps LandcoverRasterProvider start-up fast.

To create a cropped raster:
1. Download a tile: download_landcover_tile("S36E147", target_path=INPUT_FILE)
2. Update the REGION_* bounds below
3. Run: python scripts/crop_landcover_to_region.py
"""

import logging
from pathlib import Path

import rasterio
from rasterio.mask import mask
from shapely.geometry import box

from firebreak_planner.constants import LandcoverConfig
from firebreak_planner.core.landcover_service import download_landcover_tile

logger = logging.getLogger(__name__)

TILE = "S36E147"
INPUT_FILE = Path.home() / "Downloads" / f"worldcover_{TILE}.tif"
OUTPUT_FILE = LandcoverConfig.RASTER_PATH

# Region bounding box in degrees (WGS84, the WorldCover native CRS)
REGION_WEST_DEG = 148.8
REGION_EAST_DEG = 149.4
REGION_SOUTH_DEG = -35.6
REGION_NORTH_DEG = -35.1


def crop_landcover_to_region() -> None:
    """Crop the WorldCover tile to the region and save as compressed GeoTIFF."""
    download_landcover_tile(tile=TILE, target_path=INPUT_FILE)

    region = box(REGION_WEST_DEG, REGION_SOUTH_DEG, REGION_EAST_DEG, REGION_NORTH_DEG)
    geo = [region.__geo_interface__]

    with rasterio.open(INPUT_FILE) as src:
        logger.info(f"Input CRS: {src.crs}, bounds: {src.bounds}, shape: {src.width} x {src.height}")

        out_image, out_transform = mask(dataset=src, shapes=geo, crop=True)
        out_meta = src.meta.copy()
        out_meta.update(
            {
                "driver": "GTiff",
                "height": out_image.shape[1],
                "width": out_image.shape[2],
                "transform": out_transform,
                "compress": "lzw",  # Class codes compress well
            }
        )
        logger.info(f"Output shape: {out_meta['width']} x {out_meta['height']}")

        OUTPUT_FILE.parent.mkdir(parents=True, exist_ok=True)
        with rasterio.open(OUTPUT_FILE, "w", **out_meta) as dest:
            dest.write(out_image)

    logger.info(f"Saved cropped landcover to {OUTPUT_FILE}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    crop_landcover_to_region()
