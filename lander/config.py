"""Guidance engine configuration.

All tuning constants of the engine in one place. The angle-step and damping
values were tuned by observation and are not known to be optimal.

Example:
    >>> from lander.config import GuidanceConfig
    >>>
    >>> config = GuidanceConfig(hover_margin=300.0, damping=0.8)
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype

from lander.environment.world import MARS_GRAVITY, MAX_POWER, MIN_POWER, WorldBounds


@beartype
@dataclass(frozen=True)
class GuidanceConfig:
    """Configuration for trajectory prediction, routing and steering.

    Attributes:
        gravity: Downward acceleration per step [m/s^2]
        bounds: World box; leaving it ends a prediction (fly-away)
        max_prediction_steps: Step ceiling for the trajectory predictor
        landing_margin: Inward offset of the target from the zone edges [m]
        hover_margin: Lift of the clearance waypoint above an obstruction [m]
        max_leg_iterations: Controller iteration cap per flight leg
        max_step_angle: Largest direct heading correction per iteration [rad]
        damping: Share of the latest command kept when blending back toward
            the previous one while converging
        command_power: Thrust power commanded by the controller (0 to 4)
        heading_tolerance: Heading error at or below which the engine idles [rad]
        proximity_tolerance: Per-axis distance at which a leg is complete [m]
        max_landing_hspeed: Largest safe horizontal touchdown speed [m/s]
        max_landing_vspeed: Largest safe vertical touchdown speed [m/s]
    """
    gravity: float = MARS_GRAVITY
    bounds: WorldBounds = field(default_factory=WorldBounds)
    max_prediction_steps: int = 100_000
    landing_margin: float = 100.0
    hover_margin: float = 150.0
    max_leg_iterations: int = 60
    max_step_angle: float = float(np.radians(15.0))
    damping: float = 0.9
    command_power: float = 4.0
    heading_tolerance: float = float(np.radians(2.0))
    proximity_tolerance: float = 50.0
    max_landing_hspeed: float = 20.0
    max_landing_vspeed: float = 40.0

    def __post_init__(self) -> None:
        """Validate tuning ranges."""
        if self.gravity < 0:
            raise ValueError(f"gravity must be non-negative, got {self.gravity}")
        if self.max_prediction_steps < 1:
            raise ValueError("max_prediction_steps must be at least 1")
        if self.max_leg_iterations < 1:
            raise ValueError("max_leg_iterations must be at least 1")
        if self.landing_margin < 0 or self.hover_margin < 0:
            raise ValueError("margins must be non-negative")
        if not 0.0 < self.max_step_angle <= np.pi:
            raise ValueError(f"max_step_angle must be in (0, pi], got {self.max_step_angle}")
        if not 0.0 <= self.damping < 1.0:
            raise ValueError(f"damping must be in [0, 1), got {self.damping}")
        if not MIN_POWER <= self.command_power <= MAX_POWER:
            raise ValueError(f"command_power must be in [0, 4], got {self.command_power}")
        if not 0.0 <= self.heading_tolerance < np.pi:
            raise ValueError(f"heading_tolerance must be in [0, pi), got {self.heading_tolerance}")
        if self.proximity_tolerance <= 0:
            raise ValueError("proximity_tolerance must be positive")


DEFAULT_CONFIG = GuidanceConfig()
