"""Top-boundary extraction from silhouette polygons.

A visible region's polygon is bounded above by the ridge line and below by
baselines, water cuts and canvas edges. The ridge is the run of vertices
from the leftmost vertex to the rightmost one going along the top.

Boolean operations may start a ring at any vertex, so the leftmost and
rightmost vertices are not necessarily in order: the run can wrap around
the end of the vertex array. Direction depends on the ring's winding,
which shapely reports: a ring counter-clockwise in y-up maths is clockwise
on the y-down canvas.
"""

from collections.abc import Sequence

from shapely.geometry import LineString, Polygon

from ridgemap.constants import RenderConfig

Point = tuple[float, float]


def _round(value: float) -> float:
    return round(value, RenderConfig.EXTREME_ROUND_DIGITS)


def _extreme_indices(vertices: Sequence[Point]) -> tuple[int, int]:
    """Indices of the top-left-most and top-right-most vertices.

    Coordinates are compared rounded so float noise from boolean operations
    cannot make a vertex lower down the page win a tie on x.
    """
    left = right = 0
    for i in range(1, len(vertices)):
        x, y = _round(vertices[i][0]), _round(vertices[i][1])
        left_x, left_y = _round(vertices[left][0]), _round(vertices[left][1])
        right_x, right_y = _round(vertices[right][0]), _round(vertices[right][1])

        if x < left_x or (x == left_x and y < left_y):
            left = i
        if x > right_x or (x == right_x and y < right_y):
            right = i
    return left, right


class StrokeExtractor:
    """Static helpers extracting the top line of a polygon.

    Example:
        stroke = StrokeExtractor.extract_top_of_polygon(region.parts[0])
    """

    @staticmethod
    def extract_top(vertices: Sequence[Point], clockwise: bool) -> list[Point]:
        """Vertices along the top boundary, ordered left to right.

        Args:
            vertices: Ring vertices without the repeated closing vertex
            clockwise: Winding of the ring on the y-down canvas

        Returns:
            Points from the leftmost to the rightmost vertex, empty for no input.
        """
        if not vertices:
            return []

        left, right = _extreme_indices(vertices)
        vertices = list(vertices)

        if clockwise:
            # Walking forward from left reaches right along the top
            if left <= right:
                points = vertices[left : right + 1]
            else:
                points = vertices[left:] + vertices[: right + 1]
        else:
            # Walking forward from right reaches left along the top
            if left >= right:
                points = vertices[right : left + 1]
            else:
                points = vertices[right:] + vertices[: left + 1]
            points.reverse()

        return [(float(x), float(y)) for x, y in points]

    @staticmethod
    def extract_top_of_polygon(polygon: Polygon) -> list[Point]:
        """Top boundary of a shapely polygon's exterior ring."""
        if polygon is None or polygon.is_empty:
            return []
        # shapely repeats the first vertex at the end of the ring
        vertices = [(x, y) for x, y, *_ in polygon.exterior.coords][:-1]
        return StrokeExtractor.extract_top(vertices, clockwise=polygon.exterior.is_ccw)

    @staticmethod
    def extract_line(line: LineString) -> list[Point]:
        """Points of a bare ridge line, ordered left to right."""
        if line is None or line.is_empty:
            return []
        points = [(float(x), float(y)) for x, y, *_ in line.coords]
        if points[0][0] > points[-1][0]:
            points.reverse()
        return points
