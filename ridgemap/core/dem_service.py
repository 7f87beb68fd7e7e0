"""Digital Elevation Model (DEM) service for local GeoTIFF rasters.

An alternative elevation source to the SRTM tile set, for users who already
hold a DEM of their region:
- Cell lookup on a pre-loaded NumPy array via the raster's affine transform
- Automatic coordinate transformation from WGS84 to the DEM's native CRS
- Thread-safe lazy loading
"""

import logging
import math
import threading
import time
from pathlib import Path
from typing import Optional

import numpy as np
import rasterio
from rasterio.transform import rowcol
from rasterio.warp import transform as warp_transform

logger = logging.getLogger(__name__)

GEOGRAPHIC_CRS = "EPSG:4326"


class DEMService:
    """Elevation sampling from a GeoTIFF raster.

    The raster band is read into memory on first access and cached for fast
    subsequent queries.

    Example:
        dem = DEMService(dem_path=Path("scotland.tif"))
        elevation = dem.get_elevation(lon=-5.0036, lat=56.7969)
    """

    def __init__(self, dem_path: Path) -> None:
        self._dem_path = Path(dem_path)
        self._load_lock = threading.Lock()
        self._dem_crs: Optional[str] = None
        self._dem_array: Optional[np.ndarray] = None
        self._dem_transform = None
        self._dem_nodata = None

    @property
    def dem_path(self) -> Path:
        return self._dem_path

    @property
    def is_loaded(self) -> bool:
        """Check if DEM data has been fully loaded into memory."""
        return self._dem_transform is not None

    def _ensure_loaded(self) -> None:
        """Load DEM into memory on first access (thread-safe)."""
        # Fast path: already loaded
        if self.is_loaded:
            return

        # Slow path: acquire lock and load (or wait for another thread to finish)
        with self._load_lock:
            # Double-check after acquiring lock
            if self.is_loaded:
                return

            if not self._dem_path.exists():
                raise FileNotFoundError(f"DEM file not found at {self._dem_path}")

            logger.info(f"Loading DEM from {self._dem_path}...")
            start_time = time.time()

            with rasterio.open(self._dem_path) as dem:
                self._dem_crs = dem.crs.to_string() if dem.crs else GEOGRAPHIC_CRS
                self._dem_array = dem.read(1)
                self._dem_nodata = dem.nodata
                # Set _dem_transform LAST - this is what is_loaded checks
                self._dem_transform = dem.transform

            elapsed = time.time() - start_time
            logger.info(f"DEM loaded in {elapsed:.2f}s (shape: {self._dem_array.shape}, CRS: {self._dem_crs})")

    def _to_dem_crs(self, lon: float, lat: float) -> tuple[float, float]:
        if self._dem_crs == GEOGRAPHIC_CRS:
            return lon, lat
        xs, ys = warp_transform(GEOGRAPHIC_CRS, self._dem_crs, [lon], [lat])
        return xs[0], ys[0]

    def get_elevation(self, lon: float, lat: float) -> float | None:
        """Value of the raster cell containing a point.

        Args:
            lon: Longitude in decimal degrees (WGS84)
            lat: Latitude in decimal degrees (WGS84)

        Returns:
            Elevation in meters, or None outside the raster or over nodata.
        """
        self._ensure_loaded()

        row, col = rowcol(self._dem_transform, *self._to_dem_crs(lon, lat))
        rows, cols = self._dem_array.shape
        if not (0 <= row < rows and 0 <= col < cols):
            logger.debug(f"lon={lon}, lat={lat} falls outside {self._dem_path.name}")
            return None

        value = float(self._dem_array[row, col])
        if value == self._dem_nodata or math.isnan(value):
            return None
        return value
