"""Unit tests for the terrain profile."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lander.exceptions import NoLandingZone
from lander.geometry import OrientedLine, TerrainProfile, WorldPoint
from lander.simulation import DEFAULT_GROUND, default_terrain

# =============================================================================
# Construction Tests
# =============================================================================


class TestTerrainConstruction:
    """Test validation and derived segments."""

    def test_from_int_points(self):
        terrain = TerrainProfile.from_points([(0, 100), (500, 200), (1000, 100)])
        assert len(terrain.points) == 3
        assert len(terrain.segments) == 2
        assert terrain.points[1] == WorldPoint(500.0, 200.0)
        assert terrain.x_range == (0.0, 1000.0)

    def test_too_few_points(self):
        with pytest.raises(ValueError, match="at least 2"):
            TerrainProfile.from_points([(0, 100)])

    def test_x_must_increase(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            TerrainProfile.from_points([(0, 100), (500, 200), (500, 300)])

    def test_to_array(self):
        arr = default_terrain().to_array()
        assert arr.shape == (len(DEFAULT_GROUND), 2)
        assert_allclose(arr, np.array(DEFAULT_GROUND, dtype=float))


# =============================================================================
# Landing Zone Tests
# =============================================================================


class TestLandingZone:
    """Test flat-segment detection."""

    def test_default_zone(self):
        zone = default_terrain().require_landing_zone()
        assert zone.p1 == WorldPoint(2000.0, 500.0)
        assert zone.p2 == WorldPoint(3500.0, 500.0)

    def test_first_flat_segment_wins(self):
        terrain = TerrainProfile.from_points([(0, 800), (100, 300), (400, 300), (700, 900), (900, 900)])
        zone = terrain.landing_zone()
        assert zone is not None
        assert zone.p1.x == 100.0

    def test_no_flat_segment(self):
        terrain = TerrainProfile.from_points([(0, 100), (1000, 200), (2000, 150)])
        assert terrain.landing_zone() is None
        with pytest.raises(NoLandingZone):
            terrain.require_landing_zone()


# =============================================================================
# Collision Tests
# =============================================================================


class TestGroundCollision:
    """Test point-below-ground detection."""

    @pytest.fixture
    def terrain(self) -> TerrainProfile:
        return default_terrain()

    def test_above_ground(self, terrain):
        assert terrain.ground_collision(WorldPoint(2500.0, 600.0)) is None

    def test_below_ground(self, terrain):
        segment = terrain.ground_collision(WorldPoint(2500.0, 499.0))
        assert segment == terrain.require_landing_zone()

    def test_on_ground_is_not_collision(self, terrain):
        assert terrain.ground_collision(WorldPoint(2500.0, 500.0)) is None

    def test_sloped_segment(self, terrain):
        """Ground between (3500, 500) and (5000, 1500) is 1000 at x=4250."""
        assert_allclose(terrain.ground_height(4250.0), 1000.0)
        assert terrain.ground_collision(WorldPoint(4250.0, 999.0)) is not None
        assert terrain.ground_collision(WorldPoint(4250.0, 1001.0)) is None

    def test_outside_span_never_collides(self, terrain):
        assert terrain.ground_collision(WorldPoint(6999.5, 0.0)) is None
        assert terrain.ground_height(-1.0) is None

    def test_monotone_in_altitude(self, terrain):
        """Lowering a colliding point keeps it colliding."""
        for x in np.linspace(10.0, 6990.0, 40):
            ground = terrain.ground_height(float(x))
            for depth in (0.5, 10.0, 400.0):
                assert terrain.ground_collision(WorldPoint(float(x), ground - depth)) is not None


# =============================================================================
# Intersection Tests
# =============================================================================


class TestTerrainIntersections:
    """Test line-versus-terrain crossing queries."""

    def test_high_line_is_clear(self):
        terrain = default_terrain()
        path = OrientedLine(WorldPoint(100.0, 2900.0), WorldPoint(6000.0, 2800.0))
        assert terrain.intersections(path) == []

    def test_line_through_ridge(self):
        """Only the rising flank of the ridge reaches down to y=600."""
        terrain = default_terrain()
        path = OrientedLine(WorldPoint(6000.0, 600.0), WorldPoint(2500.0, 600.0))
        assert terrain.intersections(path) == [terrain.segments[3]]

    def test_line_over_both_flanks(self):
        terrain = default_terrain()
        path = OrientedLine(WorldPoint(6500.0, 1200.0), WorldPoint(2500.0, 1200.0))
        assert terrain.intersections(path) == [terrain.segments[3], terrain.segments[4]]
