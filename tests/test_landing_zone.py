"""Unit tests for landing-zone resolution."""

import logging

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lander.config import GuidanceConfig
from lander.geometry import OrientedLine, WorldPoint
from lander.gnc.guidance import clamp_to_zone, foot_of_perpendicular, resolve_landing_point


@pytest.fixture
def zone() -> OrientedLine:
    return OrientedLine(WorldPoint(2000.0, 500.0), WorldPoint(3500.0, 500.0))


# =============================================================================
# Foot of Perpendicular Tests
# =============================================================================


class TestFootOfPerpendicular:
    """Test projection onto a line."""

    def test_flat_line_projects_straight_down(self, zone):
        foot = foot_of_perpendicular(zone, WorldPoint(2700.0, 1800.0))
        assert foot == WorldPoint(2700.0, 500.0)

    def test_sloped_line(self):
        diagonal = OrientedLine(WorldPoint(0.0, 0.0), WorldPoint(10.0, 10.0))
        foot = foot_of_perpendicular(diagonal, WorldPoint(0.0, 10.0))
        assert_allclose([foot.x, foot.y], [5.0, 5.0])

    def test_projection_beyond_segment(self, zone):
        """The foot lies on the infinite extension of the line."""
        foot = foot_of_perpendicular(zone, WorldPoint(6000.0, 300.0))
        assert foot == WorldPoint(6000.0, 500.0)


# =============================================================================
# Landing Point Tests
# =============================================================================


class TestResolveLandingPoint:
    """Test target selection on the landing zone."""

    def test_impact_inside_zone(self, zone):
        target = resolve_landing_point(zone, WorldPoint(2700.0, 420.0))
        assert target == WorldPoint(2700.0, 500.0)

    def test_impact_left_of_zone(self, zone):
        target = resolve_landing_point(zone, WorldPoint(100.0, 1800.0))
        assert target == WorldPoint(2100.0, 500.0)

    def test_impact_right_of_zone(self, zone):
        target = resolve_landing_point(zone, WorldPoint(6000.0, 300.0))
        assert target == WorldPoint(3400.0, 500.0)

    def test_custom_margin(self, zone):
        config = GuidanceConfig(landing_margin=300.0)
        target = resolve_landing_point(zone, WorldPoint(0.0, 0.0), config)
        assert target == WorldPoint(2300.0, 500.0)

    def test_always_inside_margins(self, zone):
        """Any impact point maps into [min + margin, max - margin] on the zone."""
        rng = np.random.default_rng(7)
        margin = GuidanceConfig().landing_margin
        for x, y in rng.uniform([-5000.0, -1000.0], [12000.0, 4000.0], size=(200, 2)):
            target = resolve_landing_point(zone, WorldPoint(float(x), float(y)))
            assert 2000.0 + margin <= target.x <= 3500.0 - margin
            assert target.y == 500.0

    def test_narrow_zone_targets_middle(self, caplog):
        narrow = OrientedLine(WorldPoint(1000.0, 500.0), WorldPoint(1150.0, 500.0))
        with caplog.at_level(logging.WARNING, logger="lander.gnc.guidance.landing_zone"):
            target = clamp_to_zone(narrow, WorldPoint(1140.0, 500.0), margin=100.0)
        assert target == WorldPoint(1075.0, 500.0)
        assert "less than twice" in caplog.text
