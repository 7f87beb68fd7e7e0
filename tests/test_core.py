"""Tests for ridgemap core stages before any geometry.

Tests: ProjectionAdapter, ViewpointRotator, Normalizer, GridSampler
Focus: Hand-computed values on tiny grids, properties on random grids

Note: Fixtures are defined in conftest.py (mock sources, small grids).
"""

from typing import TYPE_CHECKING

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st
from hypothesis.extra.numpy import arrays

from ridgemap.core.grid_sampler import GridSampler
from ridgemap.core.normalizer import Normalizer
from ridgemap.core.projection import ProjectionAdapter, UnsupportedProjectionError, resolve_projection
from ridgemap.core.rotation import ViewpointRotator
from ridgemap.model.viewpoint import Viewpoint

if TYPE_CHECKING:
    from conftest import FailingElevationSource, MockElevationSource


grids = arrays(
    dtype=np.float64,
    shape=st.tuples(st.integers(min_value=2, max_value=7), st.integers(min_value=2, max_value=7)),
    elements=st.floats(min_value=-100, max_value=5000, allow_nan=False, allow_infinity=False),
)


# =============================================================================
# PROJECTION
# =============================================================================


class TestProjectionAdapter:
    """ProjectionAdapter - named and custom projection conversion."""

    def test_same_projection_returns_input_unchanged(self) -> None:
        """Identity short-circuit returns the very same object."""
        coord = (-5.0, 56.8)
        assert ProjectionAdapter.convert("mercator", "mercator", coord) is coord

    def test_lnglat_and_equirectangular_are_equivalent(self) -> None:
        coord = (-5.0, 56.8)
        assert ProjectionAdapter.convert("lnglat", "equirectangular", coord) == coord

    def test_web_mercator_origin_and_antimeridian(self) -> None:
        """(0, 0) stays at the origin, 180°E maps to half the world width."""
        x, y = ProjectionAdapter.convert("lnglat", "web-mercator", (0.0, 0.0))
        assert abs(x) < 1e-6 and abs(y) < 1e-6

        x, _ = ProjectionAdapter.convert("lnglat", "web-mercator", (180.0, 0.0))
        assert x == pytest.approx(20037508.34, abs=1.0)

    def test_spherical_mercator_roundtrip(self) -> None:
        lng, lat = ProjectionAdapter.convert(
            "mercator",
            "lnglat",
            ProjectionAdapter.convert("lnglat", "mercator", (-5.0, 56.8)),
        )
        assert lng == pytest.approx(-5.0, abs=1e-9)
        assert lat == pytest.approx(56.8, abs=1e-9)

    def test_custom_definition_is_passed_through(self) -> None:
        assert resolve_projection("EPSG:3395") == "EPSG:3395"
        assert resolve_projection("Web-Mercator") == "EPSG:3857"
        assert resolve_projection(None) == "EPSG:4326"

        x, _ = ProjectionAdapter.convert("lnglat", "+proj=eqc +lon_0=0 +datum=WGS84", (1.0, 0.0))
        assert x == pytest.approx(111319.49, abs=1.0)

    def test_malformed_projection_raises(self) -> None:
        with pytest.raises(UnsupportedProjectionError) as exc_info:
            ProjectionAdapter.convert("lnglat", "+proj=not_a_projection", (0.0, 0.0))
        assert "not_a_projection" in str(exc_info.value)

        with pytest.raises(UnsupportedProjectionError):
            ProjectionAdapter.validate("definitely not a crs")

    def test_unsupported_projection_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            ProjectionAdapter.validate("+proj=not_a_projection")


# =============================================================================
# VIEWPOINT ROTATION
# =============================================================================


class TestViewpointRotator:
    """ViewpointRotator - clockwise quarter-turns."""

    def test_viewpoint_rotation_counts(self) -> None:
        assert Viewpoint.SOUTH.rotations == 0
        assert Viewpoint.EAST.rotations == 1
        assert Viewpoint.NORTH.rotations == 2
        assert Viewpoint.WEST.rotations == 3

    def test_parse_viewpoint(self) -> None:
        assert Viewpoint.parse("North") is Viewpoint.NORTH
        assert Viewpoint.parse(Viewpoint.WEST) is Viewpoint.WEST
        with pytest.raises(ValueError, match="north-east"):
            Viewpoint.parse("north-east")

    def test_single_clockwise_turn(self) -> None:
        """new[i][j] == old[rows - 1 - j][i]."""
        grid = np.array([[1, 2], [3, 4]])
        rotated = ViewpointRotator.rotate(grid, "east")
        assert rotated.tolist() == [[3, 1], [4, 2]]

    def test_rotation_swaps_dimensions(self) -> None:
        grid = np.arange(6).reshape(2, 3)
        assert ViewpointRotator.rotate(grid, Viewpoint.EAST).shape == (3, 2)
        assert ViewpointRotator.rotate(grid, Viewpoint.NORTH).shape == (2, 3)
        assert ViewpointRotator.rotate(grid, Viewpoint.NORTH).tolist() == [[5, 4, 3], [2, 1, 0]]

    def test_rotation_does_not_mutate_input(self) -> None:
        grid = np.arange(6).reshape(2, 3)
        rotated = ViewpointRotator.rotate(grid, "west")
        rotated[0, 0] = 99
        assert grid.tolist() == [[0, 1, 2], [3, 4, 5]]

    @settings(max_examples=50)
    @given(grid=grids, viewpoint=st.sampled_from(list(Viewpoint)))
    def test_four_rotations_restore_grid(self, grid: np.ndarray, viewpoint: Viewpoint) -> None:
        """Four applications of any viewpoint rotation are a full turn."""
        result = grid
        for _ in range(4):
            result = ViewpointRotator.rotate(result, viewpoint)
        assert np.array_equal(result, grid)


# =============================================================================
# NORMALIZER
# =============================================================================


class TestNormalizer:
    """Normalizer - elevation to 0-100 canvas points."""

    def test_hand_computed_3x5(self, high_front_grid_3x5: np.ndarray) -> None:
        """Nearest row high, others flat.

        one_meter = 40/100 * (20/3) * (100 / 266.67) = 1.0
        Unflipped y: nearest 266.67 -> 100, middle 50 -> 18.75, farthest 100 -> 37.5
        """
        terrain = Normalizer.normalize(high_front_grid_3x5, vertical_ratio=40)

        assert terrain.num_rows == 3
        assert terrain.num_points == 5
        assert terrain.one_meter == pytest.approx(1.0)

        farthest, middle, nearest = terrain.rows
        assert all(p.y == pytest.approx(62.5) for p in farthest)
        assert all(p.y == pytest.approx(81.25) for p in middle)
        assert all(p.y == pytest.approx(0.0) for p in nearest)
        assert nearest[0].base_y == pytest.approx(100.0)
        assert [p.x for p in nearest] == pytest.approx([0, 25, 50, 75, 100])

    def test_flat_grid_has_no_height(self, flat_grid_2x2: np.ndarray) -> None:
        """Zero elevation range: one_meter is 0 and ridge == baseline."""
        terrain = Normalizer.normalize(flat_grid_2x2, vertical_ratio=40)

        assert terrain.one_meter == 0.0
        for row in terrain.rows:
            for p in row:
                assert p.y == p.base_y
        assert terrain.rows[0][0].y == pytest.approx(0.0)
        assert terrain.rows[1][0].y == pytest.approx(100.0)

    def test_empty_grid(self) -> None:
        terrain = Normalizer.normalize(np.zeros((0, 5)))
        assert terrain.rows == ()
        assert terrain.one_meter == 0.0

    def test_single_row_does_not_divide_by_zero(self) -> None:
        terrain = Normalizer.normalize(np.array([[0.0, 10.0, 20.0]]))
        assert terrain.num_rows == 1
        assert all(0 <= p.y <= 100 for p in terrain.rows[0])
        assert terrain.rows[0][0].y == pytest.approx(100.0)
        assert terrain.rows[0][2].y == pytest.approx(0.0)

    def test_single_column(self) -> None:
        terrain = Normalizer.normalize(np.array([[5.0], [10.0]]))
        assert [row[0].x for row in terrain.rows] == [0.0, 0.0]

    def test_rejects_non_2d_input(self) -> None:
        with pytest.raises(ValueError):
            Normalizer.normalize(np.zeros(4))

    @settings(max_examples=50)
    @given(grid=grids, vertical_ratio=st.floats(min_value=0, max_value=200))
    def test_all_values_within_canvas(self, grid: np.ndarray, vertical_ratio: float) -> None:
        terrain = Normalizer.normalize(grid, vertical_ratio=vertical_ratio)
        eps = 1e-9
        for row in terrain.rows:
            for p in row:
                assert -eps <= p.y <= 100 + eps
                assert -eps <= p.base_y <= 100 + eps
                assert p.y <= p.base_y + eps, "Ridge is never below its own baseline"

    @settings(max_examples=50)
    @given(grid=grids)
    def test_farthest_row_comes_first(self, grid: np.ndarray) -> None:
        """Baselines move down the page from the farthest to the nearest row."""
        terrain = Normalizer.normalize(grid, vertical_ratio=40)
        bases = [row[0].base_y for row in terrain.rows]
        assert all(a < b for a, b in zip(bases, bases[1:]))
        assert bases[-1] == pytest.approx(100.0)


# =============================================================================
# GRID SAMPLER
# =============================================================================


class TestGridSampler:
    """GridSampler - concurrent elevation sampling."""

    def test_cells_sample_expected_positions(self, linear_source: "MockElevationSource") -> None:
        """Cell (i, j) sits at (pos1.x + j * xStep, pos1.y + i * yStep)."""
        sampler = GridSampler(source=linear_source, projection="lnglat")
        grid = sampler.sample(pos1=(0.0, 0.0), pos2=(1.0, 1.0), rows=2, cols=4)

        assert grid.shape == (2, 4)
        assert len(linear_source.calls) == 8
        # lon = 2 * 0.25, lat = 1 * 0.5
        assert grid[1, 2] == pytest.approx(500.5)
        assert grid[0, 0] == pytest.approx(0.0)
        # Far edges are exclusive
        assert max(lon for lon, _ in linear_source.calls) == pytest.approx(0.75)

    def test_missing_data_reads_as_zero(self, gappy_source: "MockElevationSource") -> None:
        sampler = GridSampler(source=gappy_source)
        grid = sampler.sample(pos1=(0.0, 0.0), pos2=(1.0, 1.0), rows=4, cols=2)

        assert grid[:2].tolist() == [[500.0, 500.0], [500.0, 500.0]]
        assert grid[2:].tolist() == [[0.0, 0.0], [0.0, 0.0]]

    def test_lookup_errors_degrade_to_zero(self, failing_source: "FailingElevationSource") -> None:
        """Failing cells do not abort the batch."""
        sampler = GridSampler(source=failing_source, max_workers=4)
        grid = sampler.sample(pos1=(0.0, 0.0), pos2=(1.0, 1.0), rows=3, cols=4)

        assert grid[:, :2].tolist() == [[0.0, 0.0]] * 3
        assert grid[:, 2:].tolist() == [[100.0, 100.0]] * 3

    def test_projected_corners_are_converted_back(self, linear_source: "MockElevationSource") -> None:
        pos1 = ProjectionAdapter.convert("lnglat", "web-mercator", (-5.0, 56.0))
        pos2 = ProjectionAdapter.convert("lnglat", "web-mercator", (-4.0, 57.0))
        sampler = GridSampler(source=linear_source, projection="web-mercator")
        sampler.sample(pos1=pos1, pos2=pos2, rows=2, cols=2)

        lons = sorted({round(lon, 6) for lon, _ in linear_source.calls})
        lats = sorted({round(lat, 6) for _, lat in linear_source.calls})
        assert lons[0] == pytest.approx(-5.0) and lons[1] == pytest.approx(-4.5)
        assert lats[0] == pytest.approx(56.0)
        # Mercator rows are evenly spaced in y, not in latitude
        assert 56.0 < lats[1] < 57.0 and lats[1] != pytest.approx(56.5, abs=1e-4)

    def test_empty_grid(self, linear_source: "MockElevationSource") -> None:
        sampler = GridSampler(source=linear_source)
        grid = sampler.sample(pos1=(0.0, 0.0), pos2=(1.0, 1.0), rows=0, cols=3)
        assert grid.shape == (0, 3)
        assert linear_source.calls == []

    def test_negative_size_rejected(self, linear_source: "MockElevationSource") -> None:
        with pytest.raises(ValueError):
            GridSampler(source=linear_source).sample(pos1=(0.0, 0.0), pos2=(1.0, 1.0), rows=-1, cols=3)
