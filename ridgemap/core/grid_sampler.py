"""Elevation grid sampling over a projected bounding box.

Each grid cell is positioned in the chosen projection, converted back to
WGS84 and looked up in an elevation source. Lookups are independent and run
on a thread pool; the grid is only returned once every cell has resolved.

Missing data never fails the batch: a cell whose lookup returns None or
raises an I/O error reads as 0 m.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Protocol

import numpy as np

from ridgemap.constants import ProjectionConfig, SamplingConfig
from ridgemap.core.projection import ProjectionAdapter

logger = logging.getLogger(__name__)


class ElevationSource(Protocol):
    """Anything that can answer point elevation queries."""

    def get_elevation(self, lon: float, lat: float) -> float | None: ...


class GridSampler:
    """Samples a rows x cols elevation grid between two projected corners.

    Row i lies at pos1.y + i * yStep and column j at pos1.x + j * xStep, so
    row 0 runs along the first corner's edge and the far edges are exclusive.

    Example:
        sampler = GridSampler(source=HGTTileSet(), projection="lnglat")
        grid = sampler.sample(pos1=(-5.09, 56.75), pos2=(-4.91, 56.83), rows=80, cols=300)
    """

    def __init__(
        self,
        source: ElevationSource,
        projection: Optional[str] = ProjectionConfig.GEOGRAPHIC,
        max_workers: int = SamplingConfig.MAX_WORKERS,
    ) -> None:
        """Initialize the sampler.

        Args:
            source: Elevation source queried for every cell
            projection: Projection the corner positions are expressed in
            max_workers: Thread pool size for concurrent lookups
        """
        self._source = source
        self._projection = projection or ProjectionConfig.GEOGRAPHIC
        self._max_workers = max(1, max_workers)

    @property
    def source(self) -> ElevationSource:
        return self._source

    def _lookup(self, lon: float, lat: float) -> float:
        try:
            elevation = self._source.get_elevation(lon=lon, lat=lat)
        except (OSError, ValueError) as e:
            logger.debug(f"Elevation lookup failed at lon={lon}, lat={lat}, using 0m: {e}")
            return 0.0
        if elevation is None or np.isnan(elevation):
            return 0.0
        return float(elevation)

    def cell_coordinates(
        self,
        pos1: tuple[float, float],
        pos2: tuple[float, float],
        rows: int,
        cols: int,
    ) -> list[tuple[float, float]]:
        """Geographic (lon, lat) of every cell, row-major.

        Args:
            pos1: First projected corner (x, y)
            pos2: Second projected corner (x, y)
            rows: Number of grid rows
            cols: Number of grid columns
        """
        x_step = (pos2[0] - pos1[0]) / cols if cols else 0.0
        y_step = (pos2[1] - pos1[1]) / rows if rows else 0.0

        coords = []
        for i in range(rows):
            y = pos1[1] + i * y_step
            for j in range(cols):
                x = pos1[0] + j * x_step
                coords.append(ProjectionAdapter.convert(self._projection, ProjectionConfig.GEOGRAPHIC, (x, y)))
        return coords

    def sample(
        self,
        pos1: tuple[float, float],
        pos2: tuple[float, float],
        rows: int,
        cols: int,
    ) -> np.ndarray:
        """Sample the elevation grid.

        Args:
            pos1: First projected corner (x, y)
            pos2: Second projected corner (x, y)
            rows: Number of grid rows
            cols: Number of grid columns

        Returns:
            Float array of shape (rows, cols), elevation in meters.

        Raises:
            ValueError: If rows or cols is negative.
        """
        if rows < 0 or cols < 0:
            raise ValueError(f"Grid size must be non-negative, got {rows}x{cols}")

        start_time = time.time()
        coords = self.cell_coordinates(pos1=pos1, pos2=pos2, rows=rows, cols=cols)

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            elevations = list(executor.map(lambda c: self._lookup(lon=c[0], lat=c[1]), coords))

        grid = np.array(elevations, dtype=np.float64).reshape(rows, cols)
        elapsed = time.time() - start_time
        logger.info(f"Sampled {rows}x{cols} elevation grid in {elapsed:.2f}s")
        return grid
