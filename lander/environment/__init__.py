"""Environment models for the Mars lander world.

Provides the gravity constant, actuator limits, and world bounds.
"""

from lander.environment.world import (
    MARS_GRAVITY,
    MAX_POWER,
    MAX_TILT_DEG,
    MIN_POWER,
    MIN_TILT_DEG,
    WORLD_HEIGHT,
    WORLD_WIDTH,
    WorldBounds,
)

__all__ = [
    # Constants
    "MARS_GRAVITY",
    "WORLD_WIDTH",
    "WORLD_HEIGHT",
    "MIN_TILT_DEG",
    "MAX_TILT_DEG",
    "MIN_POWER",
    "MAX_POWER",
    # Bounds
    "WorldBounds",
]
