"""BoundingBox - Geographic region to draw.

Two (lng, lat) corners in WGS84 decimal degrees. The corners are kept in the
order given: the first corner is the sampling origin.
"""

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """Longitude/latitude bounding box.

    Attributes:
        lng1: Longitude of the first corner
        lat1: Latitude of the first corner
        lng2: Longitude of the second corner
        lat2: Latitude of the second corner

    Example:
        bbox = BoundingBox.from_sequence([-5.09, 56.75, -4.91, 56.83])
    """

    lng1: float
    lat1: float
    lng2: float
    lat2: float

    def __post_init__(self) -> None:
        """Validate corners are distinct."""
        if self.corner1 == self.corner2:
            raise ValueError(f"Bounding box corners must be distinct, got {self.corner1} twice")

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "BoundingBox":
        """Build from a (lng1, lat1, lng2, lat2) sequence."""
        coords = [float(v) for v in values]
        if len(coords) != 4:
            raise ValueError(f"Bounding box needs 4 values (lng1, lat1, lng2, lat2), got {len(coords)}")
        return cls(*coords)

    @property
    def corner1(self) -> tuple[float, float]:
        """Return (lng, lat) of the first corner."""
        return (self.lng1, self.lat1)

    @property
    def corner2(self) -> tuple[float, float]:
        """Return (lng, lat) of the second corner."""
        return (self.lng2, self.lat2)

    def __repr__(self) -> str:
        return f"BoundingBox(({self.lng1:.5f}, {self.lat1:.5f}) -> ({self.lng2:.5f}, {self.lat2:.5f}))"
