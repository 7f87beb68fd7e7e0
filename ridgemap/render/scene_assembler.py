"""Assembly of the final scene from visible regions.

Emits an optional background rectangle, then one open stroke per visible
polygon part, following the top of the part, and one per bare ridge line.
Parts whose top line is empty are skipped, so fully hidden rows contribute
nothing.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from ridgemap.constants import RenderConfig
from ridgemap.core.stroke_extractor import StrokeExtractor
from ridgemap.model.scene import BackgroundRect, Scene, StrokePath
from ridgemap.model.visible_region import VisibleRegion

logger = logging.getLogger(__name__)


class SceneAssembler:
    """Static helpers building a Scene."""

    @staticmethod
    def assemble(
        regions: Sequence[VisibleRegion],
        width: float,
        height: float,
        background_color: Optional[str] = RenderConfig.DEFAULT_BACKGROUND_COLOR,
        line_color: str = RenderConfig.DEFAULT_LINE_COLOR,
        line_width: float = RenderConfig.DEFAULT_LINE_WIDTH,
    ) -> Scene:
        """Build the scene.

        Args:
            regions: Visible regions, farthest first
            width: Canvas width
            height: Canvas height
            background_color: Background fill, falsy for a transparent background
            line_color: Stroke color of ridge lines
            line_width: Stroke width of ridge lines

        Returns:
            Scene with background (if any) and strokes in drawing order.
        """
        background = BackgroundRect(width=width, height=height, fill=background_color) if background_color else None
        scene = Scene(width=width, height=height, background=background)

        for region in regions:
            tops = [StrokeExtractor.extract_top_of_polygon(part) for part in region.parts]
            tops += [StrokeExtractor.extract_line(line) for line in region.lines]
            for points in tops:
                if not points:
                    continue
                scene.strokes.append(StrokePath(points=tuple(points), color=line_color, width=line_width))

        logger.info(f"Assembled {scene}")
        return scene
