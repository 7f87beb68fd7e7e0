"""CanvasPoint - A normalized grid sample ready for drawing.

Coordinates live in a 0-100 space with y growing downward (SVG convention),
so smaller y values are higher on the page.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CanvasPoint:
    """A point on a ridge line in normalized canvas space.

    Attributes:
        x: Horizontal position (0-100)
        y: Ridge-line position (0-100, smaller is higher)
        base_y: Position the point would have at zero elevation
    """

    x: float
    y: float
    base_y: float


@dataclass(frozen=True)
class NormalizedTerrain:
    """Output of the normalizer.

    Attributes:
        rows: Ridge lines, farthest from the viewer first
        one_meter: Normalized y units per meter of elevation
    """

    rows: tuple[tuple[CanvasPoint, ...], ...]
    one_meter: float

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_points(self) -> int:
        return len(self.rows[0]) if self.rows else 0
