"""VisibleRegion - The part of a ridge silhouette left after culling.

A region is a tagged variant over zero, one or many disjoint pieces:
- EMPTY: fully hidden by nearer rows (or submerged)
- SINGLE: one contiguous visible piece
- COMPOUND: several disjoint pieces, e.g. when a nearer ridge cuts through

Pieces are normally polygons. A row whose silhouette has no area (a ridge
lying on the bottom edge of the canvas) is carried as bare ridge lines.
"""

from dataclasses import dataclass
from enum import Enum

from shapely.geometry import GeometryCollection, LineString, MultiLineString, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry


class RegionKind(Enum):
    """Shape of a visible region."""

    EMPTY = "empty"
    SINGLE = "single"
    COMPOUND = "compound"


@dataclass(frozen=True)
class VisibleRegion:
    """Disjoint pieces of one ridge line's silhouette.

    Attributes:
        parts: Non-empty polygons, in the order the boolean engine produced them
        lines: Ridge lines of a silhouette without area
    """

    parts: tuple[Polygon, ...] = ()
    lines: tuple[LineString, ...] = ()

    @classmethod
    def from_geometry(cls, geometry: BaseGeometry) -> "VisibleRegion":
        """Collect the polygonal parts of a shapely geometry.

        Lines and points left behind by a boolean operation have no area and
        are dropped.
        """
        return cls(parts=tuple(_polygons(geometry)))

    @classmethod
    def from_ridge(cls, geometry: BaseGeometry) -> "VisibleRegion":
        """Collect the line parts of a culled ridge line."""
        return cls(lines=tuple(_lines(geometry)))

    @property
    def kind(self) -> RegionKind:
        count = len(self.parts) + len(self.lines)
        if count == 0:
            return RegionKind.EMPTY
        if count == 1:
            return RegionKind.SINGLE
        return RegionKind.COMPOUND

    @property
    def is_empty(self) -> bool:
        return not self.parts and not self.lines

    @property
    def geometry(self) -> BaseGeometry:
        """The region as a single shapely geometry."""
        pieces = [*self.parts, *self.lines]
        if not pieces:
            return Polygon()
        if len(pieces) == 1:
            return pieces[0]
        if not self.lines:
            return MultiPolygon(self.parts)
        if not self.parts:
            return MultiLineString(self.lines)
        return GeometryCollection(pieces)

    @property
    def area(self) -> float:
        return sum(part.area for part in self.parts)

    def __repr__(self) -> str:
        return (
            f"VisibleRegion({self.kind.value}, parts={len(self.parts)}, "
            f"lines={len(self.lines)}, area={self.area:.2f})"
        )


def _polygons(geometry: BaseGeometry) -> list[Polygon]:
    if geometry is None or geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        return [geometry] if geometry.area > 0 else []
    if isinstance(geometry, (MultiPolygon, GeometryCollection)):
        polygons = []
        for part in geometry.geoms:
            polygons.extend(_polygons(part))
        return polygons
    return []


def _lines(geometry: BaseGeometry) -> list[LineString]:
    if geometry is None or geometry.is_empty:
        return []
    if isinstance(geometry, LineString):
        return [geometry] if geometry.length > 0 else []
    if isinstance(geometry, (MultiLineString, GeometryCollection)):
        lines = []
        for part in geometry.geoms:
            lines.extend(_lines(part))
        return lines
    return []
