"""Normalization of raw elevation into drawable canvas coordinates.

Converts a grid of elevations (meters, row 0 nearest the viewer) into ridge
lines in a 0-100 canvas space:
1. Remap elevation onto [0, vertical_ratio]
2. Space rows and columns evenly over 0-100 and stack each row's height on
   its baseline, compressed by ROW_COMPRESSION / rows
3. Fit all positions into 0-100 and flip so high ground is near the top
4. Reverse row order so the farthest row comes first (drawing order)

The one-meter scale follows every rescaling so thresholds given in meters
(water depth, lake flatness) can be applied in canvas units.
"""

import logging

import numpy as np

from ridgemap.constants import RenderConfig
from ridgemap.model.canvas_point import CanvasPoint, NormalizedTerrain

logger = logging.getLogger(__name__)


def _interval(count: int) -> float:
    """Spacing that spreads count positions over the canvas range."""
    return RenderConfig.CANVAS_RANGE / (count - 1) if count > 1 else 0.0


class Normalizer:
    """Static helpers turning elevation grids into canvas points.

    Example:
        terrain = Normalizer.normalize(grid, vertical_ratio=40)
        farthest_row = terrain.rows[0]
    """

    @staticmethod
    def normalize(grid: np.ndarray, vertical_ratio: float = RenderConfig.DEFAULT_VERTICAL_RATIO) -> NormalizedTerrain:
        """Normalize an elevation grid.

        Args:
            grid: Elevations in meters, shape (rows, cols), row 0 nearest
            vertical_ratio: Vertical exaggeration of elevation changes

        Returns:
            NormalizedTerrain with rows ordered farthest first.
        """
        values = np.asarray(grid, dtype=np.float64)
        if values.ndim != 2:
            raise ValueError(f"Elevation grid must be 2D, got {values.ndim}D")
        if values.size == 0:
            logger.warning("Empty elevation grid, nothing to normalize")
            return NormalizedTerrain(rows=(), one_meter=0.0)

        num_lines, num_points = values.shape

        # Remap elevation onto 0-vertical_ratio (flat terrain has no height at all)
        low, high = float(values.min()), float(values.max())
        if high > low:
            one_meter = vertical_ratio / (high - low)
            heights = (values - low) / (high - low) * vertical_ratio
        else:
            logger.warning(f"Flat elevation grid ({low}m everywhere), ridge lines will be straight")
            one_meter = 0.0
            heights = np.zeros_like(values)

        scale = RenderConfig.ROW_COMPRESSION / num_lines
        one_meter *= scale

        xs = np.arange(num_points) * _interval(num_points)
        base = np.repeat((np.arange(num_lines) * _interval(num_lines))[:, None], num_points, axis=1)
        ys = base + heights * scale

        # Fit into the canvas. Baselines join the extent so nothing escapes 0-100,
        # which leaves a uniformly high nearest row clear of the bottom edge
        min_y = min(float(ys.min()), float(base.min()))
        max_y = max(float(ys.max()), float(base.max()))
        span = max_y - min_y
        if span > 0:
            factor = RenderConfig.CANVAS_RANGE / span
            ys = (ys - min_y) * factor
            base = (base - min_y) * factor
            one_meter *= factor
        else:
            ys = np.zeros_like(ys)
            base = np.zeros_like(base)

        # Flip to top-down for SVG
        ys = RenderConfig.CANVAS_RANGE - ys
        base = RenderConfig.CANVAS_RANGE - base

        rows = tuple(
            tuple(
                CanvasPoint(x=float(xs[j]), y=float(ys[i, j]), base_y=float(base[i, j]))
                for j in range(num_points)
            )
            for i in reversed(range(num_lines))
        )
        logger.debug(f"Normalized {num_lines} lines x {num_points} points (one meter = {one_meter:.5f})")
        return NormalizedTerrain(rows=rows, one_meter=one_meter)
