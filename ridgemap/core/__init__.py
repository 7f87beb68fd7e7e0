"""Core pipeline for turning elevation data into ridge lines.

This module provides the geometric backbone of ridge map generation:
- ProjectionAdapter: Coordinate conversion between projections (pyproj)
- HGTTileSet / DEMService: Elevation sources (SRTM tiles, GeoTIFF)
- GridSampler: Concurrent elevation grid sampling
- ViewpointRotator: Quarter-turn rotation towards the viewer
- Normalizer: Elevation to 0-100 canvas coordinates
- OcclusionCuller: Back-to-front hidden geometry removal (shapely)
- LakeFlattener: Removal of flat lake and river stretches
- StrokeExtractor: Top boundary of culled polygons
"""

from ridgemap.core.dem_service import DEMService
from ridgemap.core.grid_sampler import ElevationSource, GridSampler
from ridgemap.core.hgt_service import HGTTile, HGTTileSet
from ridgemap.core.lake_flattener import LakeFlattener
from ridgemap.core.normalizer import Normalizer
from ridgemap.core.occlusion import OcclusionCuller
from ridgemap.core.projection import ProjectionAdapter, UnsupportedProjectionError
from ridgemap.core.rotation import ViewpointRotator
from ridgemap.core.stroke_extractor import StrokeExtractor

__all__ = [
    # Projection
    "ProjectionAdapter",
    "UnsupportedProjectionError",
    # Elevation sources
    "ElevationSource",
    "HGTTile",
    "HGTTileSet",
    "DEMService",
    # Pipeline stages
    "GridSampler",
    "ViewpointRotator",
    "Normalizer",
    "OcclusionCuller",
    "LakeFlattener",
    "StrokeExtractor",
]
