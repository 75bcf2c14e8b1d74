"""Reference game loop for exercising the guidance engine end to end."""

from lander.simulation.scenarios import (
    DEFAULT_GROUND,
    DEFAULT_SHIP,
    default_ship,
    default_terrain,
)
from lander.simulation.simulator import (
    FlightStatus,
    SimConfig,
    SimulationResult,
    Simulator,
)

__all__ = [
    # Simulator
    "Simulator",
    "SimConfig",
    "SimulationResult",
    "FlightStatus",
    # Scenarios
    "DEFAULT_GROUND",
    "DEFAULT_SHIP",
    "default_ship",
    "default_terrain",
]
