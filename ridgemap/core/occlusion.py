"""Occlusion culling of ridge silhouettes.

Every ridge line becomes a filled silhouette: its ridge points closed down to
the bottom corners of the canvas. Each silhouette has the union of all nearer
silhouettes subtracted from it, leaving only what the viewer can actually see.
Optionally the bottom N meters of every line are cut away as water.
A row lying on the bottom edge has no silhouette area; its bare ridge line is
culled the same way and kept as a line.

Culling of one row reads only the original silhouettes of nearer rows, never
their culled results, so rows are independent of each other.
"""

import logging
from collections.abc import Sequence

from shapely.geometry import LineString, Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union
from shapely.validation import make_valid

from ridgemap.model.canvas_point import CanvasPoint, NormalizedTerrain
from ridgemap.model.visible_region import VisibleRegion

logger = logging.getLogger(__name__)


def build_silhouette(row: Sequence[CanvasPoint], width: float, height: float) -> BaseGeometry:
    """Filled silhouette of one ridge line in canvas units.

    Ridge points are scaled from 0-100 to the canvas and closed through the
    bottom-right and bottom-left corners. Points lying on the bottom edge
    make the ring touch itself, so the shape is repaired; a row with no area
    comes back without polygonal parts.
    """
    ridge = [(p.x * width / 100, p.y * height / 100) for p in row]
    if len(ridge) < 2:
        return Polygon()
    polygon = Polygon([*ridge, (width, height), (0.0, height)])
    if not polygon.is_valid:
        # Keep polygonal parts only, overlay ops reject mixed collections
        return VisibleRegion.from_geometry(make_valid(polygon)).geometry
    return polygon


def ridge_line(row: Sequence[CanvasPoint], width: float, height: float) -> LineString:
    """Ridge points of one row as an open line in canvas units."""
    ridge = [(p.x * width / 100, p.y * height / 100) for p in row]
    if len(ridge) < 2:
        return LineString()
    return LineString(ridge)


def water_cutoff(row: Sequence[CanvasPoint], one_meter: float, water_ntile: float, height: float) -> float:
    """Canvas y above which a row is considered submerged."""
    return (row[0].base_y - one_meter * water_ntile) * height / 100


class OcclusionCuller:
    """Removes hidden geometry from ridge silhouettes.

    Example:
        culler = OcclusionCuller(width=100, height=56)
        regions = culler.cull(terrain, water_ntile=0)
    """

    def __init__(self, width: float, height: float) -> None:
        """Initialize with the canvas size.

        Args:
            width: Canvas width
            height: Canvas height
        """
        self._width = width
        self._height = height

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def silhouettes(self, terrain: NormalizedTerrain) -> list[BaseGeometry]:
        """Un-culled silhouettes, farthest first."""
        return [build_silhouette(row, width=self._width, height=self._height) for row in terrain.rows]

    def cull(self, terrain: NormalizedTerrain, water_ntile: float = 0.0) -> list[VisibleRegion]:
        """Cull every row against the rows in front of it.

        Args:
            terrain: Normalized ridge lines, farthest first
            water_ntile: Meters of water removed from the bottom of each row, 0 disables

        Returns:
            One VisibleRegion per row, in the same order as terrain.rows.
        """
        silhouettes = self.silhouettes(terrain)
        regions: list[VisibleRegion] = []

        # Walk front to back, keeping the union of the original nearer silhouettes
        nearer: BaseGeometry = Polygon()
        for i in reversed(range(len(silhouettes))):
            silhouette = silhouettes[i]
            # A ridge on the bottom edge has no area, its line is still drawn
            bare = silhouette.is_empty
            crop = ridge_line(terrain.rows[i], width=self._width, height=self._height) if bare else silhouette
            if not nearer.is_empty and not crop.is_empty:
                crop = crop.difference(nearer)
            if not silhouette.is_empty:
                nearer = silhouette if nearer.is_empty else unary_union([nearer, silhouette])

            if water_ntile > 0 and not crop.is_empty:
                water_y = water_cutoff(
                    terrain.rows[i],
                    one_meter=terrain.one_meter,
                    water_ntile=water_ntile,
                    height=self._height,
                )
                if water_y < self._height:
                    water = box(0.0, max(water_y, 0.0), self._width, self._height)
                    crop = crop.difference(water)

            regions.append(VisibleRegion.from_ridge(crop) if bare else VisibleRegion.from_geometry(crop))

        regions.reverse()

        hidden = sum(1 for r in regions if r.is_empty)
        logger.info(f"Culled {len(regions)} ridge lines ({hidden} fully hidden)")
        return regions
