"""Dynamics module for the 2D lander.

This module provides the lander state, the orientation encoding shared with
the game loop, and the one-step equations of motion.

Example:
    >>> from lander.dynamics import Angle, ShipState, StepDirection, step
    >>>
    >>> state = ShipState.from_game_input(2500, 2700, 0, 0, 550, 0, 0)
    >>> nxt = step(state, Angle.from_external_input(-15.0), 4.0)
"""

from lander.dynamics.ship import (
    StepDirection,
    step,
)
from lander.dynamics.state import (
    VERTICAL,
    Angle,
    ShipState,
)

__all__ = [
    # State
    "Angle",
    "ShipState",
    "VERTICAL",
    # Equations of motion
    "StepDirection",
    "step",
]
