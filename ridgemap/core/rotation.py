"""Viewpoint rotation of the sampled elevation grid.

The grid is always sampled south to north. Rotating it clockwise by the
viewpoint's quarter-turn count makes row 0 the row nearest the viewer.
"""

import numpy as np

from ridgemap.model.viewpoint import Viewpoint


class ViewpointRotator:
    """Static helpers for quarter-turn grid rotation."""

    @staticmethod
    def rotate_clockwise(grid: np.ndarray, turns: int = 1) -> np.ndarray:
        """Rotate a 2D grid clockwise by a number of quarter-turns.

        After one turn, new[i][j] == old[rows - 1 - j][i].

        Returns:
            A new array; the input is left untouched.
        """
        grid = np.asarray(grid)
        if grid.ndim != 2:
            raise ValueError(f"Elevation grid must be 2D, got {grid.ndim}D")
        return np.rot90(grid, k=-(turns % 4)).copy()

    @staticmethod
    def rotate(grid: np.ndarray, viewpoint: Viewpoint | str) -> np.ndarray:
        """Rotate the grid so row 0 faces the given viewpoint."""
        return ViewpointRotator.rotate_clockwise(grid, turns=Viewpoint.parse(viewpoint).rotations)
