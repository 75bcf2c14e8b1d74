"""Descent guidance engine.

Runs the full guidance chain once per control cycle:

    1. predict      - where the lander ends up if nothing changes
    2. resolve      - nearest safe touchdown point on the landing zone
    3. route        - direct leg, or two legs over the highest obstruction
    4. steer        - heading-convergence controller over the legs

and returns the orientation/power setpoint in the game's convention, plus a
trace of plain data a renderer may draw. Nothing survives between calls.

Example:
    >>> from lander.gnc import compute_guidance, compute_setpoint
    >>>
    >>> rotate, power = compute_setpoint(ship, terrain)
    >>>
    >>> result = compute_guidance(ship, terrain)
    >>> result.trace.landing_point, result.trace.legs
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.config import DEFAULT_CONFIG, GuidanceConfig
from lander.dynamics.state import ShipState
from lander.environment.world import MAX_POWER, MAX_TILT_DEG, MIN_POWER, MIN_TILT_DEG
from lander.exceptions import InvalidSetpoint
from lander.geometry.primitives import OrientedLine, WorldPoint
from lander.geometry.terrain import TerrainProfile
from lander.gnc.control.heading import ControllerArrow, HeadingController, LegResult
from lander.gnc.guidance.flight_plan import FlightLeg, route
from lander.gnc.guidance.landing_zone import resolve_landing_point
from lander.gnc.guidance.trajectory import predict

logger = logging.getLogger(__name__)

# =============================================================================
# Outputs
# =============================================================================


class Setpoint(NamedTuple):
    """Command for the game loop."""
    orientation: float  # Tilt [degrees], -90 to 90
    power: float        # Thrust power, 0 to 4

    def rounded(self) -> tuple[int, int]:
        """Integer (rotate, power) pair for the game protocol."""
        return int(round(self.orientation)), int(round(self.power))


@beartype
@dataclass
class GuidanceTrace:
    """Diagnostic geometry from one guidance call.

    Attributes:
        predicted_path: Unsteered trajectory, one point per step
        impact_point: End of the unsteered trajectory
        inertial_landing_ok: True if the unsteered lander would land safely
        landing_zone: Flat segment targeted
        landing_point: Touchdown target on the zone
        legs: Routed legs in reverse execution order
        obstructions: Terrain segments blocking the direct line
        clearance: Clearance waypoint, if any
        arrows: Per-iteration controller records
        leg_results: Per-leg controller outcomes, in the order flown
    """
    predicted_path: list[WorldPoint]
    impact_point: WorldPoint
    inertial_landing_ok: bool
    landing_zone: OrientedLine
    landing_point: WorldPoint
    legs: list[FlightLeg]
    obstructions: list[OrientedLine]
    clearance: WorldPoint | None
    arrows: list[ControllerArrow]
    leg_results: list[LegResult]

    @property
    def path_array(self) -> NDArray[np.float64]:
        """Predicted path as an (N, 2) array."""
        return np.array([[p.x, p.y] for p in self.predicted_path], dtype=np.float64).reshape(-1, 2)

    def to_dataframe(self):
        """Convert the controller iterations to a Polars DataFrame."""
        import polars as pl

        return pl.DataFrame({
            "x": [a.position.x for a in self.arrows],
            "y": [a.position.y for a in self.arrows],
            "line_of_sight": [a.line_of_sight for a in self.arrows],
            "inertial": [a.inertial for a in self.arrows],
            "signed_error": [a.signed_error for a in self.arrows],
            "error": [a.error for a in self.arrows],
            "commanded_tilt": [a.commanded.to_external_input() for a in self.arrows],
            "power": [a.power for a in self.arrows],
            "mode": [a.mode.name for a in self.arrows],
        })


@beartype
@dataclass
class GuidanceResult:
    """Setpoint plus the trace that produced it."""
    setpoint: Setpoint
    trace: GuidanceTrace


# =============================================================================
# Engine
# =============================================================================


def _validated(orientation: float, power: float) -> Setpoint:
    if not (MIN_TILT_DEG <= orientation <= MAX_TILT_DEG and MIN_POWER <= power <= MAX_POWER):
        raise InvalidSetpoint(orientation, power)
    return Setpoint(orientation=float(orientation), power=float(power))


@beartype
def compute_guidance(
    state: ShipState,
    terrain: TerrainProfile,
    config: GuidanceConfig = DEFAULT_CONFIG,
) -> GuidanceResult:
    """Compute this cycle's setpoint and its diagnostic trace.

    Args:
        state: Lander snapshot from the game loop (not modified)
        terrain: Ground profile
        config: Engine tuning

    Returns:
        GuidanceResult with the setpoint and trace

    Raises:
        NoLandingZone: If the terrain has no flat segment
        PredictionDivergence: If the unsteered trajectory never resolves
    """
    zone = terrain.require_landing_zone()
    snapshot = state.copy()

    prediction = predict(snapshot, terrain, config)
    landing_point = resolve_landing_point(zone, prediction.impact_point, config)
    plan = route(snapshot.position, landing_point, terrain, config)

    controller = HeadingController(config=config)
    leg_results = controller.steer(snapshot, plan.legs, terrain)
    setpoint = _validated(controller.commanded.to_external_input(), controller.power)

    logger.debug(
        "Setpoint tilt=%.1f power=%.1f via %d leg(s) toward (%.1f, %.1f)",
        setpoint.orientation, setpoint.power, len(plan.legs), landing_point.x, landing_point.y,
    )

    trace = GuidanceTrace(
        predicted_path=prediction.path,
        impact_point=prediction.impact_point,
        inertial_landing_ok=prediction.is_safe_landing(zone, config),
        landing_zone=zone,
        landing_point=landing_point,
        legs=plan.legs,
        obstructions=plan.obstructions,
        clearance=plan.clearance,
        arrows=controller.arrows,
        leg_results=leg_results,
    )
    return GuidanceResult(setpoint=setpoint, trace=trace)


@beartype
def compute_setpoint(
    state: ShipState,
    terrain: TerrainProfile,
    config: GuidanceConfig = DEFAULT_CONFIG,
) -> Setpoint:
    """Orientation/power setpoint for this control cycle.

    See `compute_guidance` for arguments and errors.
    """
    return compute_guidance(state, terrain, config).setpoint
