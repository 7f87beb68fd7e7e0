"""Scene - Flat description of the final drawing.

A scene is an optional background rectangle followed by open, unfilled
strokes, in drawing order. It is what the SVG writer serializes.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class BackgroundRect:
    """Full-canvas filled rectangle.

    Attributes:
        width: Canvas width
        height: Canvas height
        fill: CSS color
    """

    width: float
    height: float
    fill: str


@dataclass(frozen=True)
class StrokePath:
    """One visible ridge-line segment.

    Attributes:
        points: (x, y) canvas coordinates, left to right
        color: CSS stroke color
        width: Stroke width in canvas units
    """

    points: tuple[tuple[float, float], ...]
    color: str
    width: float


@dataclass
class Scene:
    """Complete drawing handed to the vector output writer.

    Attributes:
        width: Canvas width
        height: Canvas height
        background: Optional background rectangle (drawn first)
        strokes: Ridge strokes, farthest row first
    """

    width: float
    height: float
    background: Optional[BackgroundRect] = None
    strokes: list[StrokePath] = field(default_factory=list)

    def __repr__(self) -> str:
        bg = self.background.fill if self.background else "none"
        return f"Scene({self.width:.1f}x{self.height:.1f}, background={bg}, strokes={len(self.strokes)})"
