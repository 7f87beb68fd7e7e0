"""RidgeMap - Skyline ridge-line maps from elevation data.

Turns a grid of elevation samples into non-overlapping ridge strokes as seen
from a cardinal direction, written as SVG:
- Elevation sampled from SRTM tiles (or a local GeoTIFF) over a bounding box
- Hidden geometry removed by back-to-front polygon subtraction
- Optional water and flat-lake removal

Modules:
    core: Pipeline stages (projection, sampling, normalization, culling, strokes)
    model: Data structures (BoundingBox, Viewpoint, CanvasPoint, VisibleRegion, Scene)
    render: Scene assembly and SVG output

Example:
    from ridgemap import RidgeMap

    ridge_map = RidgeMap(bbox=(-5.091141, 56.756959, -4.914158, 56.833387))
    ridge_map.get_elevation_data()
    ridge_map.generate()
    ridge_map.save("ridge-map.svg")
"""

from ridgemap.ridge_map import RidgeMap

__all__ = ["RidgeMap"]
