"""Lander - Descent guidance for a 2D Mars lander.

This package computes, once per control cycle, the orientation and thrust
setpoint that brings a lander down safely onto the flat segment of a
polyline terrain.

Example:
    >>> from lander import ShipState, TerrainProfile, compute_setpoint
    >>>
    >>> terrain = TerrainProfile.from_points([
    ...     (0, 1500), (1000, 2000), (2000, 500), (3500, 500), (5000, 1500), (6999, 1000),
    ... ])
    >>> ship = ShipState.from_game_input(5000, 2500, -50, 0, 1000, 90, 0)
    >>> rotate, power = compute_setpoint(ship, terrain).rounded()
    >>> print(rotate, power)
"""

__version__ = "0.1.0"

# Configuration and errors
from lander.config import (
    DEFAULT_CONFIG,
    GuidanceConfig,
)

# Dynamics
from lander.dynamics import (
    VERTICAL,
    Angle,
    ShipState,
    StepDirection,
    step,
)

# Environment
from lander.environment import (
    MARS_GRAVITY,
    WorldBounds,
)
from lander.exceptions import (
    DegenerateGeometry,
    GuidanceError,
    GuidanceTimeout,
    InvalidSetpoint,
    NoLandingZone,
    PredictionDivergence,
)

# Geometry
from lander.geometry import (
    OrientedLine,
    TerrainProfile,
    WorldPoint,
)

# Guidance engine
from lander.gnc import (
    FlightLeg,
    FlightPlan,
    GuidanceResult,
    GuidanceTrace,
    HeadingController,
    Setpoint,
    TrajectoryPrediction,
    compute_guidance,
    compute_setpoint,
    predict,
    resolve_landing_point,
    route,
)

__all__ = [
    "__version__",
    # Config
    "GuidanceConfig",
    "DEFAULT_CONFIG",
    # Errors
    "GuidanceError",
    "DegenerateGeometry",
    "NoLandingZone",
    "PredictionDivergence",
    "GuidanceTimeout",
    "InvalidSetpoint",
    # Environment
    "MARS_GRAVITY",
    "WorldBounds",
    # Geometry
    "WorldPoint",
    "OrientedLine",
    "TerrainProfile",
    # Dynamics
    "Angle",
    "VERTICAL",
    "ShipState",
    "StepDirection",
    "step",
    # Guidance
    "TrajectoryPrediction",
    "predict",
    "resolve_landing_point",
    "FlightLeg",
    "FlightPlan",
    "route",
    "HeadingController",
    # Engine
    "Setpoint",
    "GuidanceTrace",
    "GuidanceResult",
    "compute_guidance",
    "compute_setpoint",
]
