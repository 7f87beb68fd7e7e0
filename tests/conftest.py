"""Shared pytest fixtures for ridgemap tests.

Provides mock elevation sources, small hand-computed elevation grids and a
synthetic GeoTIFF. All fixtures use explicit values with documented rationale.

GRID CONVENTION:
    Raw grids are indexed [row][col] with row 0 nearest the viewer (south
    viewpoint). After normalization the order is reversed: farthest first.
"""

import threading
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
import rasterio
from rasterio.transform import from_origin


# =============================================================================
# MOCK ELEVATION SOURCES
# =============================================================================


class MockElevationSource:
    """Elevation source returning values from a formula.

    Records every (lon, lat) query so tests can check what was sampled.
    """

    def __init__(self, formula: Callable[[float, float], float | None]) -> None:
        self._formula = formula
        self._lock = threading.Lock()
        self.calls: list[tuple[float, float]] = []

    def get_elevation(self, lon: float, lat: float) -> float | None:
        with self._lock:
            self.calls.append((lon, lat))
        return self._formula(lon, lat)


class FailingElevationSource:
    """Elevation source that raises for every point west of lon=0.5."""

    def get_elevation(self, lon: float, lat: float) -> float | None:
        if lon < 0.5:
            raise OSError(f"tile unavailable at {lon}, {lat}")
        return 100.0


# =============================================================================
# ELEVATION SOURCE FIXTURES
# =============================================================================


@pytest.fixture
def linear_source() -> MockElevationSource:
    """Elevation = lon * 1000 + lat, so every cell is identifiable."""
    return MockElevationSource(lambda lon, lat: lon * 1000 + lat)


@pytest.fixture
def gappy_source() -> MockElevationSource:
    """500m everywhere except no data (None) north of lat=0.5."""
    return MockElevationSource(lambda lon, lat: None if lat >= 0.5 else 500.0)


@pytest.fixture
def failing_source() -> FailingElevationSource:
    return FailingElevationSource()


@pytest.fixture
def cone_source() -> MockElevationSource:
    """A single 1000m cone centered at (0.5, 0.5), 0m beyond radius 0.4."""

    def cone(lon: float, lat: float) -> float:
        dist = ((lon - 0.5) ** 2 + (lat - 0.5) ** 2) ** 0.5
        return max(0.0, 1000.0 * (1 - dist / 0.4))

    return MockElevationSource(cone)


# =============================================================================
# ELEVATION GRID FIXTURES
# =============================================================================


@pytest.fixture
def flat_grid_2x2() -> np.ndarray:
    """2x2 grid of zeros: no elevation range at all."""
    return np.zeros((2, 2))


@pytest.fixture
def high_front_grid_3x5() -> np.ndarray:
    """3 rows x 5 cols, nearest row (row 0) at 100m, the other two at 0m.

    Normalized with vertical_ratio=40 (see TestNormalizer for the arithmetic):
        farthest row y=62.5, middle row y=81.25, nearest row y=0
    The nearest silhouette covers the whole canvas.
    """
    grid = np.zeros((3, 5))
    grid[0, :] = 100.0
    return grid


@pytest.fixture
def partial_occlusion_grid() -> np.ndarray:
    """2 rows x 3 cols: nearest row peaks at its first point only.

    Normalized with vertical_ratio=40:
        nearest row y = [0, 100, 100] (a triangle from the top-left corner)
        farthest row y = 75 everywhere
    The nearer triangle hides the farther line for x < 37.5.
    """
    return np.array([[100.0, 0.0, 0.0], [0.0, 0.0, 0.0]])


@pytest.fixture
def water_grid() -> np.ndarray:
    """2 rows x 3 cols: nearest row at 0m, farthest row at 100m.

    Normalized with vertical_ratio=40:
        farthest row y=0, base_y=80; nearest row y=base_y=100
        one_meter = 0.8
    """
    return np.array([[0.0, 0.0, 0.0], [100.0, 100.0, 100.0]])


@pytest.fixture
def rolling_grid() -> np.ndarray:
    """12 x 40 grid of overlapping sine ridges for structural checks."""
    rows, cols = np.mgrid[0:12, 0:40]
    return 400 + 300 * np.sin(cols / 4.0 + rows) + 150 * np.cos(rows / 2.0)


# =============================================================================
# GEOTIFF FIXTURE
# =============================================================================


@pytest.fixture
def cone_geotiff(tmp_path: Path) -> Path:
    """20x20 GeoTIFF over lon 0..1, lat 0..1 (EPSG:4326) holding a 1000m cone.

    The bottom-right cell is nodata (-9999).
    """
    size = 20
    cell = 1.0 / size
    centers = (np.arange(size) + 0.5) * cell
    lon, lat = np.meshgrid(centers, centers[::-1])
    dist = np.sqrt((lon - 0.5) ** 2 + (lat - 0.5) ** 2)
    data = np.clip(1000.0 * (1 - dist / 0.4), 0, None).astype(np.float32)
    data[-1, -1] = -9999.0

    path = tmp_path / "cone.tif"
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=size,
        width=size,
        count=1,
        dtype="float32",
        crs="EPSG:4326",
        transform=from_origin(0.0, 1.0, cell, cell),
        nodata=-9999.0,
    ) as dst:
        dst.write(data, 1)
    return path
