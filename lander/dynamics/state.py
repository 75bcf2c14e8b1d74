"""Lander state representation.

Orientation conventions:
- External (tilt): signed degrees in [-90, 90]; 0 fires the engine straight
  down (thrust up), -90 and +90 are the horizontal extremes. This is the
  convention the game loop reads and writes.
- Internal (thrust direction): radians in [0, pi] measured from +x; pi/2 is
  vertical thrust. tilt = -90 maps to 0, tilt = +90 maps to pi.

The two must never be mixed; `Angle` is the only place they meet.

Example:
    >>> from lander.dynamics import Angle, ShipState
    >>>
    >>> Angle.from_external_input(0.0).radians == np.pi / 2
    True
    >>> ship = ShipState.from_game_input(5000, 2500, -50, 0, 1000, 90, 0)
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype

from lander.environment.world import MAX_POWER, MAX_TILT_DEG, MIN_POWER, MIN_TILT_DEG
from lander.geometry.primitives import WorldPoint

# Decimal places kept when converting back to the tilt convention
TILT_DECIMALS = 9

# =============================================================================
# Angle
# =============================================================================


@beartype
@dataclass(frozen=True)
class Angle:
    """Orientation held in internal radians on [0, pi].

    Attributes:
        radians: Thrust direction from +x [rad]
    """
    radians: float

    def __post_init__(self) -> None:
        """Validate range."""
        if not 0.0 <= self.radians <= np.pi:
            raise ValueError(f"Internal angle must be in [0, pi], got {self.radians}")

    @classmethod
    def from_external_input(cls, tilt_deg: float) -> "Angle":
        """Create from the game's tilt convention.

        Args:
            tilt_deg: Tilt in degrees, -90 to 90
        """
        if not MIN_TILT_DEG <= tilt_deg <= MAX_TILT_DEG:
            raise ValueError(f"Tilt must be in [-90, 90] degrees, got {tilt_deg}")
        return cls((tilt_deg + 90.0) / 180.0 * np.pi)

    @classmethod
    def from_internal_radians(cls, radians: float) -> "Angle":
        """Create from internal radians, which must already be on [0, pi]."""
        return cls(float(radians))

    @classmethod
    def fold_and_clamp(cls, radians: float) -> "Angle":
        """Map any radians value onto [0, pi].

        A negative value is shifted up by pi once, then the result is clamped.
        Headings pointing below the horizon therefore land on their mirror
        above it: -pi/4 and 3pi/4 both become 3pi/4. Callers rely on this
        exact fold point, ambiguity included, so it suits orientations but not
        headings of travel, which need the full circle.
        """
        if radians < 0.0:
            radians += np.pi
        return cls(float(np.clip(radians, 0.0, np.pi)))

    def to_external_input(self) -> float:
        """Tilt in degrees, -90 to 90.

        Rounded to `TILT_DECIMALS` places so that any tilt given with fewer
        decimals comes back exactly from `from_external_input`. The radians
        round trip alone drifts by about 1e-13 degrees.
        """
        return round(float(self.radians / np.pi * 180.0 - 90.0), TILT_DECIMALS)

    @property
    def degrees(self) -> float:
        """Internal angle in degrees, 0 to 180."""
        return float(np.degrees(self.radians))

    @property
    def thrust_direction(self) -> tuple[float, float]:
        """Unit thrust vector (cos, sin) of the internal angle."""
        return float(np.cos(self.radians)), float(np.sin(self.radians))


VERTICAL = Angle(np.pi / 2)


# =============================================================================
# Ship State
# =============================================================================


@beartype
@dataclass
class ShipState:
    """Kinematic state of the lander.

    Each component that simulates the ship owns its own instance; use
    `copy()` before handing one to another component.

    Attributes:
        x: Horizontal position [m]
        y: Altitude [m]
        horizontal_speed: Velocity along x [m/s]
        vertical_speed: Velocity along y, positive up [m/s]
        fuel: Remaining fuel [l], never negative
        orientation: Current orientation
        power: Current thrust power, 0 to 4
    """
    x: float
    y: float
    horizontal_speed: float
    vertical_speed: float
    fuel: float
    orientation: Angle = VERTICAL
    power: float = 0.0

    def __post_init__(self) -> None:
        """Validate power and clamp fuel."""
        if not MIN_POWER <= self.power <= MAX_POWER:
            raise ValueError(f"Power must be in [0, 4], got {self.power}")
        self.fuel = max(0.0, self.fuel)

    @classmethod
    def from_game_input(
        cls,
        x: float | int,
        y: float | int,
        hs: float | int,
        vs: float | int,
        fuel: float | int,
        rotate: float | int,
        power: float | int,
    ) -> "ShipState":
        """Create from one game input line (X Y hSpeed vSpeed fuel rotate power).

        Args:
            x, y: Position [m]
            hs, vs: Horizontal and vertical speed [m/s]
            fuel: Remaining fuel [l]
            rotate: Tilt in degrees, -90 to 90
            power: Thrust power, 0 to 4
        """
        return cls(
            x=float(x),
            y=float(y),
            horizontal_speed=float(hs),
            vertical_speed=float(vs),
            fuel=float(fuel),
            orientation=Angle.from_external_input(float(rotate)),
            power=float(power),
        )

    def to_game_input(self) -> tuple[float, float, float, float, float, float, float]:
        """Inverse of `from_game_input`."""
        return (
            self.x,
            self.y,
            self.horizontal_speed,
            self.vertical_speed,
            self.fuel,
            self.orientation.to_external_input(),
            self.power,
        )

    def copy(self) -> "ShipState":
        """Create a copy of this state."""
        return ShipState(
            x=self.x,
            y=self.y,
            horizontal_speed=self.horizontal_speed,
            vertical_speed=self.vertical_speed,
            fuel=self.fuel,
            orientation=self.orientation,
            power=self.power,
        )

    @property
    def position(self) -> WorldPoint:
        """Current position as a point."""
        return WorldPoint(self.x, self.y)

    @property
    def speed(self) -> float:
        """Speed magnitude [m/s]."""
        return float(np.hypot(self.horizontal_speed, self.vertical_speed))

    @property
    def tilt(self) -> float:
        """Orientation in the game's tilt degrees."""
        return self.orientation.to_external_input()
