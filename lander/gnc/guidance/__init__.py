"""Guidance stages for powered descent.

Prediction, targeting and routing, in the order the engine runs them:

    predict -> resolve_landing_point -> route
"""

from lander.gnc.guidance.flight_plan import (
    FlightLeg,
    FlightPlan,
    highest_obstruction,
    route,
)
from lander.gnc.guidance.landing_zone import (
    clamp_to_zone,
    foot_of_perpendicular,
    resolve_landing_point,
)
from lander.gnc.guidance.trajectory import (
    TrajectoryPrediction,
    predict,
)

__all__ = [
    # Prediction
    "TrajectoryPrediction",
    "predict",
    # Targeting
    "resolve_landing_point",
    "foot_of_perpendicular",
    "clamp_to_zone",
    # Routing
    "FlightLeg",
    "FlightPlan",
    "highest_obstruction",
    "route",
]
