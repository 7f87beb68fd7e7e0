"""Rendering of culled ridge lines into vector output.

- SceneAssembler: Visible regions to background + strokes
- svg_writer: Scene serialization with svgwrite
"""

from ridgemap.render.scene_assembler import SceneAssembler
from ridgemap.render.svg_writer import build_drawing, to_svg, write_svg

__all__ = [
    "SceneAssembler",
    "build_drawing",
    "to_svg",
    "write_svg",
]
