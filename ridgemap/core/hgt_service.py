"""SRTM .hgt tile set for point elevation queries.

Provides elevation lookup from SRTM height tiles:
- Tiles cached on local disk (default ~/.cache/srtm/)
- Missing tiles downloaded on demand from the public AWS terrain tiles
- Bilinear interpolation between the four surrounding samples
- Thread-safe lazy tile loading

Tile format:
    Square grid of big-endian signed 16-bit integers, 1201x1201 (3 arc-second)
    or 3601x3601 (1 arc-second). The first row is the north edge and the
    file is named after its south-west corner, e.g. N56W005.hgt.
"""

import gzip
import logging
import math
import threading
from pathlib import Path
from typing import Optional

import numpy as np
import requests

from ridgemap.constants import CacheConfig

logger = logging.getLogger(__name__)


def tile_name(lon: float, lat: float) -> str:
    """Return the SRTM tile name containing a point, e.g. 'N56W005'."""
    lat_floor = math.floor(lat)
    lon_floor = math.floor(lon)
    ns = "N" if lat_floor >= 0 else "S"
    ew = "E" if lon_floor >= 0 else "W"
    return f"{ns}{abs(lat_floor):02d}{ew}{abs(lon_floor):03d}"


def download_tile(
    name: str,
    target_path: Path,
    url_template: str = CacheConfig.DOWNLOAD_URL,
) -> Path:
    """Download a gzipped SRTM tile and store it uncompressed.

    Args:
        name: Tile name, e.g. 'N56W005'
        target_path: Local .hgt path to write
        url_template: URL with {lat_band} and {name} placeholders

    Returns:
        Path to the downloaded tile.

    Raises:
        requests.RequestException: If the download fails (including 404).
    """
    url = url_template.format(lat_band=name[:3], name=name)
    logger.info(f"Downloading SRTM tile {name} from {url}...")

    response = requests.get(url, stream=True, timeout=CacheConfig.DOWNLOAD_TIMEOUT_S)
    response.raise_for_status()

    compressed = bytearray()
    for chunk in response.iter_content(chunk_size=CacheConfig.DOWNLOAD_CHUNK_BYTES):
        compressed.extend(chunk)

    data = gzip.decompress(bytes(compressed)) if url.endswith(".gz") else bytes(compressed)

    target_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target_path.with_suffix(".part")
    tmp_path.write_bytes(data)
    tmp_path.replace(target_path)

    logger.info(f"SRTM tile {name} saved to {target_path} ({len(data) / 1024 / 1024:.1f} MB)")
    return target_path


class HGTTile:
    """A single loaded SRTM tile.

    Attributes:
        lat: Latitude of the south-west corner
        lon: Longitude of the south-west corner
        data: Square elevation array, first row = north edge
    """

    def __init__(self, lat: int, lon: int, data: np.ndarray) -> None:
        if data.ndim != 2 or data.shape[0] != data.shape[1] or data.shape[0] < 2:
            raise ValueError(f"HGT tile must be a square grid, got shape {data.shape}")
        self.lat = lat
        self.lon = lon
        self.data = data

    @classmethod
    def from_file(cls, path: Path) -> "HGTTile":
        """Load a tile from an uncompressed .hgt file.

        Raises:
            ValueError: If the file size does not describe a square grid.
        """
        raw = np.fromfile(path, dtype=">i2")
        size = int(round(math.sqrt(raw.size)))
        if size * size != raw.size:
            raise ValueError(f"{path} is not a valid HGT tile ({raw.size} samples)")

        name = path.stem.upper()
        lat = int(name[1:3]) * (1 if name[0] == "N" else -1)
        lon = int(name[4:7]) * (1 if name[3] == "E" else -1)
        return cls(lat=lat, lon=lon, data=raw.reshape(size, size))

    @property
    def size(self) -> int:
        return self.data.shape[0]

    def get_elevation(self, lon: float, lat: float) -> float | None:
        """Bilinearly interpolated elevation, or None over a void."""
        last = self.size - 1
        row = (self.lat + 1 - lat) * last
        col = (lon - self.lon) * last
        row = min(max(row, 0.0), float(last))
        col = min(max(col, 0.0), float(last))

        r0, c0 = int(row), int(col)
        r1, c1 = min(r0 + 1, last), min(c0 + 1, last)
        window = self.data[[r0, r0, r1, r1], [c0, c1, c0, c1]].astype(np.float64)
        if np.any(window == CacheConfig.HGT_VOID):
            return None

        dr, dc = row - r0, col - c0
        top = window[0] * (1 - dc) + window[1] * dc
        bottom = window[2] * (1 - dc) + window[3] * dc
        return float(top * (1 - dr) + bottom * dr)


class HGTTileSet:
    """Elevation source backed by cached (or downloaded) SRTM tiles.

    Tiles are loaded on first access and kept in memory. A tile that cannot
    be found locally or downloaded is remembered as unavailable for the
    lifetime of the tile set, so the region around it reads as no data.

    Example:
        tiles = HGTTileSet(cache_dir=Path("~/.cache/srtm").expanduser())
        elevation = tiles.get_elevation(lon=-5.0036, lat=56.7969)
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        download_url: Optional[str] = CacheConfig.DOWNLOAD_URL,
    ) -> None:
        """Initialize the tile set.

        Args:
            cache_dir: Directory holding .hgt files (created if missing)
            download_url: URL template for missing tiles, None disables downloads
        """
        self._cache_dir = Path(cache_dir or CacheConfig.CACHE_DIR).expanduser().resolve()
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        self._download_url = download_url
        self._tiles: dict[str, HGTTile] = {}
        self._unavailable: set[str] = set()
        self._load_lock = threading.Lock()

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def _tile(self, name: str) -> HGTTile | None:
        # Fast path: already resolved
        tile = self._tiles.get(name)
        if tile is not None or name in self._unavailable:
            return tile

        with self._load_lock:
            # Double-check after acquiring lock
            if name in self._tiles:
                return self._tiles[name]
            if name in self._unavailable:
                return None

            path = self._cache_dir / f"{name}.hgt"
            try:
                if not path.exists():
                    if not self._download_url:
                        raise FileNotFoundError(f"{path} not cached and downloads are disabled")
                    download_tile(name=name, target_path=path, url_template=self._download_url)
                tile = HGTTile.from_file(path)
            except (OSError, ValueError) as e:
                # requests.RequestException is an OSError
                logger.warning(f"SRTM tile {name} unavailable, treating as no data: {e}")
                self._unavailable.add(name)
                return None

            self._tiles[name] = tile
            logger.debug(f"Loaded SRTM tile {name} ({tile.size}x{tile.size})")
            return tile

    def get_elevation(self, lon: float, lat: float) -> float | None:
        """Get elevation at a point.

        Args:
            lon: Longitude in decimal degrees (WGS84)
            lat: Latitude in decimal degrees (WGS84)

        Returns:
            Elevation in meters, or None if no data is available.
        """
        tile = self._tile(tile_name(lon=lon, lat=lat))
        if tile is None:
            return None
        return tile.get_elevation(lon=lon, lat=lat)
