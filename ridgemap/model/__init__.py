"""Data model classes for ridge map generation.

Follows the flow of data through the pipeline:
- BoundingBox: Geographic region (two lng/lat corners)
- Viewpoint: Cardinal direction the map is seen from
- CanvasPoint: Normalized ridge point with its zero-elevation baseline
- NormalizedTerrain: All ridge lines plus the one-meter scale
- VisibleRegion: Polygon parts of a ridge left after occlusion culling
- Scene: Background and strokes handed to the SVG writer
"""

from ridgemap.model.bounding_box import BoundingBox
from ridgemap.model.canvas_point import CanvasPoint, NormalizedTerrain
from ridgemap.model.scene import BackgroundRect, Scene, StrokePath
from ridgemap.model.viewpoint import Viewpoint
from ridgemap.model.visible_region import RegionKind, VisibleRegion

__all__ = [
    "BoundingBox",
    "Viewpoint",
    "CanvasPoint",
    "NormalizedTerrain",
    "RegionKind",
    "VisibleRegion",
    "BackgroundRect",
    "StrokePath",
    "Scene",
]
