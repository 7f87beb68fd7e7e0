"""Projection conversion between geographic and cylindrical coordinates.

Resolves the projection names accepted by RidgeMap ('lnglat', 'equirectangular',
'web-mercator', 'mercator') to concrete definitions and converts (x, y) pairs
with pyproj. Any other string is treated as a custom PROJ/EPSG definition.

Only cylindrical projections make sense for ridge maps: grid rows are sampled
along straight projected lines. Non-cylindrical definitions are not detected.
"""

import logging
from functools import lru_cache

import pyproj
from pyproj.exceptions import CRSError

from ridgemap.constants import ProjectionConfig

logger = logging.getLogger(__name__)


class UnsupportedProjectionError(ValueError):
    """Raised when a projection definition cannot be resolved."""

    def __init__(self, definition: str, reason: str) -> None:
        self.definition = definition
        self.reason = reason
        super().__init__(f"Unsupported projection '{definition}': {reason}")


def resolve_projection(name: str | None) -> str:
    """Map a projection name to its PROJ/EPSG definition.

    Args:
        name: Named projection or custom definition (None means 'lnglat')

    Returns:
        Definition string understood by pyproj.
    """
    if not name:
        name = ProjectionConfig.GEOGRAPHIC
    return ProjectionConfig.NAMED.get(name.strip().lower(), name)


@lru_cache(maxsize=32)
def _crs(definition: str) -> pyproj.CRS:
    try:
        return pyproj.CRS.from_user_input(definition)
    except CRSError as e:
        raise UnsupportedProjectionError(definition=definition, reason=str(e)) from e


@lru_cache(maxsize=32)
def _transformer(definition_from: str, definition_to: str) -> pyproj.Transformer:
    return pyproj.Transformer.from_crs(_crs(definition_from), _crs(definition_to), always_xy=True)


class ProjectionAdapter:
    """Static helpers for converting coordinates between projections.

    Coordinates are always (x, y) ordered, i.e. (lng, lat) for geographic.

    Example:
        x, y = ProjectionAdapter.convert("lnglat", "web-mercator", (-5.0, 56.8))
    """

    @staticmethod
    def convert(
        projection_from: str | None,
        projection_to: str | None,
        coord: tuple[float, float],
    ) -> tuple[float, float]:
        """Convert a coordinate pair from one projection to another.

        Args:
            projection_from: Projection of the given coordinate
            projection_to: Projection to convert into
            coord: (x, y) coordinate

        Returns:
            Converted (x, y). The input is returned unchanged if both
            projections are the same.

        Raises:
            UnsupportedProjectionError: If a definition is malformed.
        """
        if projection_from == projection_to:
            return coord
        definition_from = resolve_projection(projection_from)
        definition_to = resolve_projection(projection_to)
        if definition_from == definition_to:
            return coord
        x, y = _transformer(definition_from, definition_to).transform(coord[0], coord[1])
        return (float(x), float(y))

    @staticmethod
    def validate(projection: str | None) -> str:
        """Check that a projection can be resolved, failing fast at setup.

        Returns:
            The resolved definition string.

        Raises:
            UnsupportedProjectionError: If the definition is malformed.
        """
        definition = resolve_projection(projection)
        _crs(definition)
        logger.debug(f"Projection '{projection}' resolved to '{definition}'")
        return definition
