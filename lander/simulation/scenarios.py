"""Built-in descent scenarios.

Example:
    >>> from lander.simulation.scenarios import default_ship, default_terrain
    >>>
    >>> terrain = default_terrain()
    >>> ship = default_ship()
"""

from lander.dynamics.state import ShipState
from lander.geometry.terrain import TerrainProfile

# Cavern-free ridge with the landing zone between x=2000 and x=3500
DEFAULT_GROUND: list[tuple[int, int]] = [
    (0, 1500),
    (1000, 2000),
    (2000, 500),
    (3500, 500),
    (5000, 1500),
    (6999, 1000),
]

# X Y hSpeed vSpeed fuel rotate power
DEFAULT_SHIP: tuple[int, ...] = (5000, 2500, -50, 0, 1000, 90, 0)


def default_terrain() -> TerrainProfile:
    """Terrain of the default scenario."""
    return TerrainProfile.from_points(DEFAULT_GROUND)


def default_ship() -> ShipState:
    """Initial lander state of the default scenario."""
    return ShipState.from_game_input(*DEFAULT_SHIP)
