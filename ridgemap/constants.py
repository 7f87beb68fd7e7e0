"""Configuration constants for RidgeMap.

All configurable parameters are centralized here for easy tuning.

Classes:
    CacheConfig: SRTM tile cache location and download source
    ProjectionConfig: Named projection definitions
    SamplingConfig: Default bounding box and grid density
    RenderConfig: Canvas, normalization and line styling
    OutputConfig: SVG file output settings
"""

from pathlib import Path

# Package root directory (where ridgemap/ lives)
PACKAGE_DIR = Path(__file__).parent

# Same location as the ridge_map Python library, so tiles are shared
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "srtm"


class CacheConfig:
    """SRTM .hgt tile cache and remote tile source."""

    CACHE_DIR = DEFAULT_CACHE_DIR

    # Public AWS terrain tiles, gzipped SRTM tiles grouped by latitude band
    # Example: https://s3.amazonaws.com/elevation-tiles-prod/skadi/N56/N56W005.hgt.gz
    DOWNLOAD_URL = "https://s3.amazonaws.com/elevation-tiles-prod/skadi/{lat_band}/{name}.hgt.gz"
    DOWNLOAD_TIMEOUT_S = 60
    DOWNLOAD_CHUNK_BYTES = 8192

    # SRTM void marker (no data)
    HGT_VOID = -32768


class ProjectionConfig:
    """Named projection definitions understood by the projection adapter."""

    GEOGRAPHIC = "lnglat"

    # Any other string is passed through as a custom PROJ/EPSG definition
    NAMED = {
        "lnglat": "EPSG:4326",
        "equirectangular": "EPSG:4326",  # Same as lnglat
        "web-mercator": "EPSG:3857",
        # Spherical mercator; proj is picky about the exact parameter set
        "mercator": (
            "+proj=merc +a=6378137 +b=6378137 +lat_ts=0 +lon_0=0 +x_0=0 +y_0=0 "
            "+k=1 +units=m +nadgrids=@null +wktext +no_defs +type=crs"
        ),
    }


class SamplingConfig:
    """Default region and grid density."""

    # Ben Nevis, Scotland (lng1, lat1, lng2, lat2)
    DEFAULT_BBOX = (-5.091141, 56.756959, -4.914158, 56.833387)

    DEFAULT_VIEWPOINT = "south"

    DEFAULT_LINES = 80  # Number of ridge lines drawn
    DEFAULT_POINTS = 300  # Samples per ridge line

    # Elevation lookups run concurrently; tile reads are I/O bound
    MAX_WORKERS = 16


class RenderConfig:
    """Canvas size, normalization and line styling."""

    CANVAS_WIDTH = 100.0
    CANVAS_RANGE = 100.0  # Normalized drawing range (0-100)

    DEFAULT_VERTICAL_RATIO = 40.0  # Higher = more vertical exaggeration
    ROW_COMPRESSION = 20.0  # Elevation height is scaled by ROW_COMPRESSION / rows

    DEFAULT_WATER_NTILE = 0.0  # Meters removed from the bottom of each line, 0 disables
    DEFAULT_LAKE_FLATNESS = 0.0  # Flatness threshold in meters, 0 disables

    DEFAULT_LINE_COLOR = "black"
    DEFAULT_LINE_WIDTH = 0.1  # Relative to a canvas of width 100
    DEFAULT_BACKGROUND_COLOR = "#fff"

    # Boolean operations leave float noise; extremes are compared at this precision
    EXTREME_ROUND_DIGITS = 2


class OutputConfig:
    """SVG output settings."""

    DEFAULT_FILENAME = "ridge-map.svg"
    OPTIMIZE = True
    OPTIMIZE_PRECISION = 3  # Decimal places kept when optimizing


assert RenderConfig.CANVAS_WIDTH > 0
assert RenderConfig.ROW_COMPRESSION > 0
assert SamplingConfig.DEFAULT_VIEWPOINT in ("south", "west", "north", "east")
assert all(name == name.lower() for name in ProjectionConfig.NAMED), "Projection names must be lowercase"
