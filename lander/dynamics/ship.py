"""One-step lander dynamics.

Each step is one second of explicit Euler integration:

    hs' = hs + cos(angle) * power
    vs' = vs + sin(angle) * power - g
    x'  = x + hs'
    y'  = y + vs'

The step function is pure: it never mutates its input, so the authoritative
simulation and the controller's speculative look-ahead can share it without
leaking state into each other. The `direction` tag tells them apart:

- FORWARD: fuel-accounting simulation. Fuel drops by the power used and an
  empty tank forces zero power.
- REVERSE: speculative look-ahead for the controller. Same kinematics, no
  fuel bookkeeping.

Example:
    >>> from lander.dynamics import ShipState, StepDirection, step, VERTICAL
    >>>
    >>> s0 = ShipState(x=2500.0, y=2000.0, horizontal_speed=0.0,
    ...                vertical_speed=0.0, fuel=500.0)
    >>> s1 = step(s0, VERTICAL, 4.0, StepDirection.FORWARD)
    >>> s1.fuel
    496.0
"""

from enum import Enum, auto

import numpy as np
from beartype import beartype
from numba import njit

from lander.dynamics.state import Angle, ShipState
from lander.environment.world import MARS_GRAVITY, MAX_POWER, MIN_POWER

# =============================================================================
# Step Direction
# =============================================================================


class StepDirection(Enum):
    """Which simulation role a step is taken for."""

    FORWARD = auto()  # Fuel-accounting simulation
    REVERSE = auto()  # Speculative look-ahead, fuel untouched


# =============================================================================
# Numba-Optimized Integration
# =============================================================================


@njit(cache=True, fastmath=True)
def _euler_step_core(
    x: float, y: float,
    hs: float, vs: float,
    fuel: float,
    angle: float,
    power: float,
    gravity: float,
    consume_fuel: bool,
) -> tuple[float, float, float, float, float, float]:
    """Numba-optimized unit-time Euler step.

    Returns (x, y, hs, vs, fuel, effective_power).
    """
    if consume_fuel and fuel <= 0.0:
        power = 0.0

    hs_new = hs + np.cos(angle) * power
    vs_new = vs + np.sin(angle) * power - gravity
    x_new = x + hs_new
    y_new = y + vs_new

    if consume_fuel:
        fuel = max(fuel - power, 0.0)

    return x_new, y_new, hs_new, vs_new, fuel, power


# =============================================================================
# Step
# =============================================================================


@beartype
def step(
    state: ShipState,
    orientation: Angle,
    power: float,
    direction: StepDirection = StepDirection.FORWARD,
    gravity: float = MARS_GRAVITY,
) -> ShipState:
    """Advance a lander state by one second under a fixed command.

    Args:
        state: State to advance (not modified)
        orientation: Commanded orientation for this step
        power: Commanded thrust power, 0 to 4
        direction: FORWARD for real simulation, REVERSE for look-ahead
        gravity: Downward acceleration [m/s^2]

    Returns:
        New state carrying the commanded orientation and the power actually used
    """
    if not MIN_POWER <= power <= MAX_POWER:
        raise ValueError(f"Power must be in [0, 4], got {power}")

    x, y, hs, vs, fuel, used_power = _euler_step_core(
        float(state.x), float(state.y),
        float(state.horizontal_speed), float(state.vertical_speed),
        float(state.fuel),
        float(orientation.radians),
        float(power),
        float(gravity),
        direction is StepDirection.FORWARD,
    )

    return ShipState(
        x=float(x),
        y=float(y),
        horizontal_speed=float(hs),
        vertical_speed=float(vs),
        fuel=float(fuel),
        orientation=orientation,
        power=float(used_power),
    )
