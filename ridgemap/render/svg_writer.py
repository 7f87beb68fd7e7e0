"""SVG serialization of ridge map scenes.

Writes the background as a rect and every stroke as an unfilled polyline.
Optimization drops the width/height attributes (the viewBox is kept so the
drawing scales to its container), rounds coordinates and removes repeated
points.
"""

import logging
from pathlib import Path

import svgwrite

from ridgemap.constants import OutputConfig
from ridgemap.model.scene import Scene

logger = logging.getLogger(__name__)


def _fmt(value: float, precision: int | None) -> float:
    if precision is None:
        return value
    rounded = round(value, precision)
    # Avoid "-0" in the output
    return rounded + 0.0


def _compact(points, precision: int | None) -> list[tuple[float, float]]:
    compacted: list[tuple[float, float]] = []
    for x, y in points:
        point = (_fmt(x, precision), _fmt(y, precision))
        if compacted and compacted[-1] == point:
            continue
        compacted.append(point)
    return compacted


def build_drawing(scene: Scene, optimize: bool = OutputConfig.OPTIMIZE) -> svgwrite.Drawing:
    """Convert a scene into an svgwrite drawing.

    Args:
        scene: Scene to draw
        optimize: Shrink the output (see module docstring)
    """
    precision = OutputConfig.OPTIMIZE_PRECISION if optimize else None
    width = _fmt(scene.width, precision)
    height = _fmt(scene.height, precision)

    if optimize:
        dwg = svgwrite.Drawing(size=None, viewBox=f"0 0 {width} {height}", debug=False)
    else:
        dwg = svgwrite.Drawing(size=(width, height), viewBox=f"0 0 {width} {height}", debug=False)

    if scene.background is not None:
        dwg.add(dwg.rect(insert=(0, 0), size=(width, height), fill=scene.background.fill))

    for stroke in scene.strokes:
        points = _compact(stroke.points, precision)
        if len(points) < 2:
            continue
        dwg.add(
            dwg.polyline(
                points=points,
                fill="none",
                stroke=stroke.color,
                stroke_width=stroke.width,
            )
        )
    return dwg


def to_svg(scene: Scene, optimize: bool = OutputConfig.OPTIMIZE) -> str:
    """Serialize a scene to an SVG document string."""
    return build_drawing(scene, optimize=optimize).tostring()


def write_svg(scene: Scene, path: Path | str = OutputConfig.DEFAULT_FILENAME, optimize: bool = OutputConfig.OPTIMIZE) -> Path:
    """Write a scene to an SVG file.

    Args:
        scene: Scene to write
        path: Output file path (parent directories are created)
        optimize: Shrink the output

    Returns:
        Path of the written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    svg = to_svg(scene, optimize=optimize)
    path.write_text(svg, encoding="utf-8")
    logger.info(f"Saved ridge map to {path} ({len(svg) / 1024:.1f} KB)")
    return path
