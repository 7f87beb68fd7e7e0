"""RidgeMap - Skyline ridge-line maps from elevation data.

Typical use:
    ridge_map = RidgeMap(bbox=(-5.091141, 56.756959, -4.914158, 56.833387), viewpoint="south")
    ridge_map.get_elevation_data(num=80, points=300)
    ridge_map.generate(lake_flatness=2, water_ntile=10)
    ridge_map.save("ben-nevis.svg")

Pipeline: GridSampler -> ViewpointRotator -> Normalizer -> OcclusionCuller
-> LakeFlattener (optional) -> SceneAssembler -> SVG writer.
"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

import numpy as np

from ridgemap.constants import OutputConfig, ProjectionConfig, RenderConfig, SamplingConfig
from ridgemap.core.grid_sampler import ElevationSource, GridSampler
from ridgemap.core.hgt_service import HGTTileSet
from ridgemap.core.lake_flattener import LakeFlattener
from ridgemap.core.normalizer import Normalizer
from ridgemap.core.occlusion import OcclusionCuller
from ridgemap.core.projection import ProjectionAdapter
from ridgemap.core.rotation import ViewpointRotator
from ridgemap.model.bounding_box import BoundingBox
from ridgemap.model.scene import Scene
from ridgemap.model.viewpoint import Viewpoint
from ridgemap.render.scene_assembler import SceneAssembler
from ridgemap.render.svg_writer import write_svg

logger = logging.getLogger(__name__)


def canvas_size(pos1: tuple[float, float], pos2: tuple[float, float]) -> tuple[float, float]:
    """Canvas (width, height) keeping the projected bounding box aspect ratio.

    The width is fixed at CANVAS_WIDTH. A bounding box with no extent on an
    axis gets a square canvas.
    """
    width = RenderConfig.CANVAS_WIDTH
    dx = abs(pos2[0] - pos1[0])
    dy = abs(pos2[1] - pos1[1])
    if dx == 0 or dy == 0 or not np.isfinite(dx / dy):
        logger.warning(f"Degenerate projected extent ({dx} x {dy}), using a square canvas")
        return width, width
    return width, width * dy / dx


class RidgeMap:
    """Ridge map of a bounding box seen from a cardinal direction.

    Attributes:
        bbox: Geographic bounding box
        projection: Projection name or definition
        viewpoint: Cardinal viewpoint
        pos1: First bbox corner in the projection
        pos2: Second bbox corner in the projection
    """

    def __init__(
        self,
        bbox: Optional[Sequence[float] | BoundingBox] = None,
        projection: Optional[str] = None,
        viewpoint: str | Viewpoint | None = None,
    ) -> None:
        """Set up the map, converting the bbox into the projection.

        Args:
            bbox: (lng1, lat1, lng2, lat2), defaults to Ben Nevis, Scotland
            projection: 'lnglat' (default), 'equirectangular', 'web-mercator',
                'mercator' or a custom cylindrical PROJ definition
            viewpoint: 'south' (default), 'west', 'north' or 'east'

        Raises:
            UnsupportedProjectionError: If the projection cannot be resolved.
            ValueError: If the bbox or viewpoint is invalid.
        """
        if bbox is None:
            bbox = SamplingConfig.DEFAULT_BBOX
        self.bbox = bbox if isinstance(bbox, BoundingBox) else BoundingBox.from_sequence(bbox)
        self.projection = projection or ProjectionConfig.GEOGRAPHIC
        self.viewpoint = Viewpoint.parse(viewpoint or SamplingConfig.DEFAULT_VIEWPOINT)

        # Fail fast on bad projections, before any sampling
        ProjectionAdapter.validate(self.projection)
        self.pos1 = ProjectionAdapter.convert(ProjectionConfig.GEOGRAPHIC, self.projection, self.bbox.corner1)
        self.pos2 = ProjectionAdapter.convert(ProjectionConfig.GEOGRAPHIC, self.projection, self.bbox.corner2)

        self._data: Optional[np.ndarray] = None
        self._scene: Optional[Scene] = None

    @property
    def data(self) -> Optional[np.ndarray]:
        """Rotated elevation grid (row 0 nearest the viewer), None until sampled."""
        return self._data

    @property
    def scene(self) -> Optional[Scene]:
        """Generated scene, None until generate() has run."""
        return self._scene

    def get_elevation_data(
        self,
        num: int = SamplingConfig.DEFAULT_LINES,
        points: int = SamplingConfig.DEFAULT_POINTS,
        source: Optional[ElevationSource] = None,
        cache: Optional[Path | str] = None,
        max_workers: int = SamplingConfig.MAX_WORKERS,
    ) -> np.ndarray:
        """Sample elevation data for the bounding box.

        Args:
            num: Number of ridge lines
            points: Number of samples per line
            source: Elevation source, defaults to SRTM tiles
            cache: SRTM tile cache directory (used when no source is given)
            max_workers: Concurrent elevation lookups

        Returns:
            The rotated grid, shape (num, points).
        """
        if num < 0 or points < 0:
            raise ValueError(f"Line and point counts must be non-negative, got {num} lines x {points} points")

        if source is None:
            source = HGTTileSet(cache_dir=Path(cache) if cache else None)

        # Grid is sampled south to north; east/west views turn it a quarter
        rows, cols = (points, num) if self.viewpoint.swaps_axes else (num, points)

        sampler = GridSampler(source=source, projection=self.projection, max_workers=max_workers)
        grid = sampler.sample(pos1=self.pos1, pos2=self.pos2, rows=rows, cols=cols)
        self._data = ViewpointRotator.rotate(grid, self.viewpoint)
        self._scene = None
        return self._data

    def set_elevation_data(self, grid: np.ndarray) -> None:
        """Use an already sampled grid (row 0 nearest the viewer)."""
        grid = np.asarray(grid, dtype=np.float64)
        if grid.ndim != 2:
            raise ValueError(f"Elevation grid must be 2D, got {grid.ndim}D")
        self._data = grid
        self._scene = None

    def generate(
        self,
        lake_flatness: float = RenderConfig.DEFAULT_LAKE_FLATNESS,
        vertical_ratio: float = RenderConfig.DEFAULT_VERTICAL_RATIO,
        water_ntile: float = RenderConfig.DEFAULT_WATER_NTILE,
        line_color: str = RenderConfig.DEFAULT_LINE_COLOR,
        line_width: float = RenderConfig.DEFAULT_LINE_WIDTH,
        background_color: Optional[str] = RenderConfig.DEFAULT_BACKGROUND_COLOR,
    ) -> Scene:
        """Generate the ridge lines.

        Args:
            lake_flatness: Remove stretches whose elevation changes by less than
                this many meters between neighbouring points, 0 disables
            vertical_ratio: Vertical exaggeration of elevation changes
            water_ntile: Remove the bottom N meters of every line, 0 disables
            line_color: Any CSS color
            line_width: Stroke width on a canvas of width 100
            background_color: Background fill, None for transparent

        Returns:
            The generated scene.

        Raises:
            RuntimeError: If no elevation data has been loaded.
        """
        if self._data is None:
            raise RuntimeError("No elevation data, call get_elevation_data() first")

        width, height = canvas_size(self.pos1, self.pos2)
        terrain = Normalizer.normalize(self._data, vertical_ratio=vertical_ratio)

        regions = OcclusionCuller(width=width, height=height).cull(terrain, water_ntile=water_ntile)
        if lake_flatness > 0:
            regions = LakeFlattener(height=height).flatten(regions, threshold=lake_flatness, one_meter=terrain.one_meter)

        self._scene = SceneAssembler.assemble(
            regions,
            width=width,
            height=height,
            background_color=background_color,
            line_color=line_color,
            line_width=line_width,
        )
        return self._scene

    def save(self, name: Path | str = OutputConfig.DEFAULT_FILENAME, optimize: bool = OutputConfig.OPTIMIZE) -> Path:
        """Write the generated map as SVG.

        Args:
            name: Output file name
            optimize: Shrink the SVG output

        Raises:
            RuntimeError: If generate() has not run.
        """
        if self._scene is None:
            raise RuntimeError("Nothing to save, call generate() first")
        return write_svg(self._scene, path=name, optimize=optimize)

    def __repr__(self) -> str:
        return f"RidgeMap({self.bbox!r}, projection={self.projection!r}, viewpoint={self.viewpoint.value})"
