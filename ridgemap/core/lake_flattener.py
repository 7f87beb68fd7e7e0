"""Removal of flat stretches (lakes, rivers) from visible ridge lines.

Elevated lakes render as perfectly straight segments that read as noise.
For each polygon part or bare ridge line, the top line is extracted and
every point is compared with one neighbour (the previous point, or the next
one for the first point).
Contiguous flat runs are then cut out with full-height slices, leaving a
visible gap in the line.
"""

import logging
from collections.abc import Sequence

from shapely.geometry import box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from ridgemap.core.stroke_extractor import Point, StrokeExtractor
from ridgemap.model.visible_region import VisibleRegion

logger = logging.getLogger(__name__)


def neighbour_differences(points: Sequence[Point]) -> list[float]:
    """Absolute y difference of every point to a single neighbour.

    Interior and last points look back one point; the first point looks
    forward. A lone point has difference 0.
    """
    diffs = []
    for i in range(len(points)):
        if i > 0:
            diffs.append(abs(points[i][1] - points[i - 1][1]))
        elif i < len(points) - 1:
            diffs.append(abs(points[i][1] - points[i + 1][1]))
        else:
            diffs.append(0.0)
    return diffs


def flat_runs(points: Sequence[Point], threshold: float) -> list[tuple[Point, Point]]:
    """Pair up the start and end points of every flat run.

    A run starts at the last non-flat point before flat points begin and ends
    at the first non-flat point after them. A line that starts flat opens a
    run at its first point; a run still open at the end closes on the last point.
    """
    if not points:
        return []
    flat = [diff < threshold for diff in neighbour_differences(points)]

    boundaries = []
    if flat[0]:
        boundaries.append(points[0])
    for i in range(len(points) - 1):
        if not flat[i] and flat[i + 1]:
            boundaries.append(points[i])
        if flat[i] and not flat[i + 1]:
            boundaries.append(points[i + 1])
    if len(boundaries) % 2:
        boundaries.append(points[-1])

    return [(boundaries[j], boundaries[j + 1]) for j in range(0, len(boundaries), 2)]


class LakeFlattener:
    """Cuts flat runs out of visible regions.

    Example:
        flattener = LakeFlattener(height=56)
        regions = flattener.flatten(regions, threshold=5, one_meter=terrain.one_meter)
    """

    def __init__(self, height: float) -> None:
        """Initialize with the canvas height.

        Args:
            height: Canvas height (slices span it entirely)
        """
        self._height = height

    def _slices(self, runs: Sequence[tuple[Point, Point]]) -> BaseGeometry:
        """Full-height boxes covering every flat run."""
        return unary_union([box(min(a[0], b[0]), 0.0, max(a[0], b[0]), self._height) for a, b in runs])

    def flatten_region(self, region: VisibleRegion, min_diff: float) -> VisibleRegion:
        """Remove flat runs from every part and line of one region.

        Args:
            region: Visible region to flatten
            min_diff: Minimum neighbour difference of a non-flat point
        """
        parts = []
        for part in region.parts:
            runs = flat_runs(StrokeExtractor.extract_top_of_polygon(part), threshold=min_diff)
            if not runs:
                parts.append(part)
                continue
            parts.extend(VisibleRegion.from_geometry(part.difference(self._slices(runs))).parts)

        lines = []
        for line in region.lines:
            runs = flat_runs(StrokeExtractor.extract_line(line), threshold=min_diff)
            if not runs:
                lines.append(line)
                continue
            lines.extend(VisibleRegion.from_ridge(line.difference(self._slices(runs))).lines)
        return VisibleRegion(parts=tuple(parts), lines=tuple(lines))

    def flatten(self, regions: Sequence[VisibleRegion], threshold: float, one_meter: float) -> list[VisibleRegion]:
        """Remove flat runs from all regions.

        A point is flat when it differs from its neighbour by less than
        threshold * one_meter.

        Args:
            regions: Culled visible regions
            threshold: Flatness threshold in meters
            one_meter: Normalized y units per meter

        Returns:
            New regions in the same order; each may have gained or lost parts.
        """
        min_diff = threshold * one_meter
        flattened = [self.flatten_region(region, min_diff=min_diff) for region in regions]
        before = sum(len(r.parts) + len(r.lines) for r in regions)
        after = sum(len(r.parts) + len(r.lines) for r in flattened)
        logger.info(f"Lake flattening: {before} ridge parts -> {after} parts")
        return flattened
