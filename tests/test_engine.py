"""Tests for the guidance engine entry points.

Covers the full predict -> resolve -> route -> steer chain on small
hand-checked scenarios and on the default descent scenario.
"""

import pytest
from numpy.testing import assert_allclose

from lander.config import GuidanceConfig
from lander.dynamics import ShipState
from lander.exceptions import InvalidSetpoint, NoLandingZone
from lander.geometry import TerrainProfile, WorldPoint
from lander.gnc import GuidanceResult, Setpoint, compute_guidance, compute_setpoint
from lander.simulation import default_ship, default_terrain

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def flat_terrain() -> TerrainProfile:
    return TerrainProfile.from_points([(0, 500), (7000, 500)])


@pytest.fixture
def settling_ship() -> ShipState:
    """At rest 10 m above flat ground, upright, engine off."""
    return ShipState(x=3500.0, y=510.0, horizontal_speed=0.0, vertical_speed=0.0, fuel=500.0)


# =============================================================================
# Setpoint Tests
# =============================================================================


class TestSetpoint:
    """Test the setpoint tuple."""

    def test_unpacks(self):
        rotate, power = Setpoint(orientation=-14.6, power=3.5)
        assert rotate == -14.6
        assert power == 3.5

    def test_rounded(self):
        assert Setpoint(orientation=-14.6, power=3.4).rounded() == (-15, 3)
        assert Setpoint(orientation=0.2, power=0.0).rounded() == (0, 0)

    def test_invalid_setpoint_error(self):
        err = InvalidSetpoint(120.0, 2.0)
        assert isinstance(err, ValueError)
        assert err.orientation == 120.0


# =============================================================================
# Engine Tests
# =============================================================================


class TestComputeSetpoint:
    """Test the per-cycle setpoint."""

    def test_settling_ship_holds_command(self, settling_ship, flat_terrain):
        """Already over its target, the lander keeps its current command."""
        setpoint = compute_setpoint(settling_ship, flat_terrain)
        assert setpoint == Setpoint(orientation=0.0, power=0.0)

    def test_no_landing_zone(self, settling_ship):
        terrain = TerrainProfile.from_points([(0, 100), (3000, 400), (7000, 200)])
        with pytest.raises(NoLandingZone):
            compute_setpoint(settling_ship, terrain)

    def test_default_scenario_in_range(self):
        setpoint = compute_setpoint(default_ship(), default_terrain())
        assert -90.0 <= setpoint.orientation <= 90.0
        assert 0.0 <= setpoint.power <= 4.0

    def test_far_ship_commands_thrust(self, flat_terrain):
        """Off course, the controller burns at command power to turn the lander."""
        ship = ShipState(x=1000.0, y=2500.0, horizontal_speed=60.0, vertical_speed=0.0, fuel=800.0)
        result = compute_guidance(ship, flat_terrain)
        command_power = GuidanceConfig().command_power
        assert result.trace.arrows
        assert result.trace.arrows[0].power == command_power
        assert result.setpoint.power in (0.0, command_power)
        assert result.trace.arrows[-1].commanded.to_external_input() == pytest.approx(result.setpoint.orientation)

    def test_state_not_mutated(self):
        ship = default_ship()
        before = ship.to_game_input()
        compute_setpoint(ship, default_terrain())
        assert ship.to_game_input() == before

    def test_deterministic(self):
        terrain = default_terrain()
        assert compute_setpoint(default_ship(), terrain) == compute_setpoint(default_ship(), terrain)


class TestComputeGuidance:
    """Test the diagnostic trace."""

    def test_trace_of_settling_ship(self, settling_ship, flat_terrain):
        result = compute_guidance(settling_ship, flat_terrain)

        assert isinstance(result, GuidanceResult)
        trace = result.trace
        assert trace.inertial_landing_ok
        assert trace.landing_zone == flat_terrain.segments[0]
        assert trace.landing_point == WorldPoint(3500.0, 500.0)
        assert len(trace.legs) == 1
        assert trace.clearance is None
        assert trace.obstructions == []
        assert trace.arrows == []
        assert trace.path_array.shape == (len(trace.predicted_path), 2)

    def test_resting_ship_converges_from_altitude(self, flat_terrain):
        """At rest 1000 m over the zone, the controller reaches the landing point."""
        ship = ShipState(x=3500.0, y=1500.0, horizontal_speed=0.0, vertical_speed=0.0, fuel=500.0)
        config = GuidanceConfig()
        result = compute_guidance(ship, flat_terrain, config)

        trace = result.trace
        assert trace.landing_point == WorldPoint(3500.0, 500.0)
        final = trace.leg_results[-1]
        assert final.reached
        assert 0 < final.iterations <= config.max_leg_iterations
        assert final.final_state.y < ship.y
        assert result.setpoint == Setpoint(orientation=0.0, power=0.0)

    def test_landing_point_inside_margins(self):
        terrain = default_terrain()
        config = GuidanceConfig()
        trace = compute_guidance(default_ship(), terrain, config).trace
        zone = terrain.require_landing_zone()
        assert zone.p1.x + config.landing_margin <= trace.landing_point.x <= zone.p2.x - config.landing_margin
        assert_allclose(trace.landing_point.y, 500.0)

    def test_route_over_ridge(self):
        """A low approach from the right is routed over the ridge."""
        terrain = default_terrain()
        ship = ShipState(x=6500.0, y=1200.0, horizontal_speed=0.0, vertical_speed=0.0, fuel=800.0)
        trace = compute_guidance(ship, terrain).trace
        assert trace.clearance is not None
        assert trace.clearance.y > 1500.0
        assert len(trace.legs) == 2
        assert trace.obstructions

    def test_leg_results_in_flight_order(self):
        terrain = default_terrain()
        ship = ShipState(x=6500.0, y=1200.0, horizontal_speed=0.0, vertical_speed=0.0, fuel=800.0)
        trace = compute_guidance(ship, terrain).trace
        assert [r.leg for r in trace.leg_results] == list(reversed(trace.legs))

    def test_to_dataframe(self):
        trace = compute_guidance(default_ship(), default_terrain()).trace
        df = trace.to_dataframe()
        assert df.height == len(trace.arrows)
        assert {"x", "y", "signed_error", "error", "commanded_tilt", "power", "mode"} <= set(df.columns)
