"""Viewpoint - Cardinal direction the ridge map is viewed from.

The viewpoint decides how many clockwise quarter-turns are applied to the
sampled elevation grid so that row 0 is always the row nearest the viewer.
"""

from enum import Enum


class Viewpoint(Enum):
    """Cardinal viewpoint of the ridge map.

    Example:
        Viewpoint.parse("north").rotations  # 2
    """

    SOUTH = "south"
    WEST = "west"
    NORTH = "north"
    EAST = "east"

    @property
    def rotations(self) -> int:
        """Number of clockwise quarter-turns applied to the sampled grid."""
        return _ROTATIONS[self]

    @property
    def swaps_axes(self) -> bool:
        """True if lines run north-south (rows and columns swap meaning)."""
        return self.rotations % 2 == 1

    @classmethod
    def parse(cls, value: "str | Viewpoint") -> "Viewpoint":
        """Resolve a viewpoint from its name (case-insensitive).

        Raises:
            ValueError: If the name is not a cardinal direction.
        """
        if isinstance(value, Viewpoint):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(v.value for v in cls)
            raise ValueError(f"Unknown viewpoint '{value}', expected one of: {valid}") from None


_ROTATIONS = {
    Viewpoint.SOUTH: 0,
    Viewpoint.EAST: 1,
    Viewpoint.NORTH: 2,
    Viewpoint.WEST: 3,
}
