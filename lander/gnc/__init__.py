"""GNC (Guidance, Navigation, Control) module for the lander.

Provides the descent guidance stages, the heading controller, and the engine
that chains them into one setpoint per control cycle.

Example:
    >>> from lander.gnc import compute_setpoint
    >>>
    >>> rotate, power = compute_setpoint(ship, terrain)
"""

from lander.gnc.control import (
    HeadingController,
)
from lander.gnc.engine import (
    GuidanceResult,
    GuidanceTrace,
    Setpoint,
    compute_guidance,
    compute_setpoint,
)
from lander.gnc.guidance import (
    FlightLeg,
    FlightPlan,
    TrajectoryPrediction,
    predict,
    resolve_landing_point,
    route,
)

__all__ = [
    # Engine
    "compute_guidance",
    "compute_setpoint",
    "GuidanceResult",
    "GuidanceTrace",
    "Setpoint",
    # Control
    "HeadingController",
    # Guidance
    "TrajectoryPrediction",
    "predict",
    "resolve_landing_point",
    "FlightLeg",
    "FlightPlan",
    "route",
]
