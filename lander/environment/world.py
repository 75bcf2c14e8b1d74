"""Mars Lander world model.

The world is a flat 2D box with constant downward gravity. Positions are in
world units with y increasing upward; one simulation step is one second.

Example:
    >>> from lander.environment import WorldBounds, MARS_GRAVITY
    >>>
    >>> bounds = WorldBounds()
    >>> bounds.contains(3500.0, 2500.0)
    True
"""

from dataclasses import dataclass

from beartype import beartype

# =============================================================================
# Constants
# =============================================================================

MARS_GRAVITY: float = 3.711  # [m/s^2]
WORLD_WIDTH: float = 7000.0  # [m]
WORLD_HEIGHT: float = 3000.0  # [m]

# Actuator limits of the lander
MIN_TILT_DEG: float = -90.0
MAX_TILT_DEG: float = 90.0
MIN_POWER: float = 0.0
MAX_POWER: float = 4.0


# =============================================================================
# World Bounds
# =============================================================================


@beartype
@dataclass(frozen=True)
class WorldBounds:
    """Axis-aligned box the lander must stay inside.

    Attributes:
        width: Extent along x, starting at 0 [m]
        height: Extent along y, starting at 0 [m]
    """
    width: float = WORLD_WIDTH
    height: float = WORLD_HEIGHT

    def __post_init__(self) -> None:
        """Validate extents."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"World extents must be positive, got {self.width}x{self.height}")

    def contains(self, x: float, y: float) -> bool:
        """True if (x, y) lies inside the box, edges included."""
        return 0.0 <= x <= self.width and 0.0 <= y <= self.height
