"""Control algorithms for the lander.

Provides the heading-convergence controller that turns a flight plan into an
orientation and power command.
"""

from lander.gnc.control.heading import (
    ControllerArrow,
    CorrectionMode,
    GuidanceMemory,
    HeadingController,
    LegOutcome,
    LegResult,
    wrap_angle,
)

__all__ = [
    "HeadingController",
    "GuidanceMemory",
    "CorrectionMode",
    "ControllerArrow",
    "LegResult",
    "LegOutcome",
    "wrap_angle",
]
