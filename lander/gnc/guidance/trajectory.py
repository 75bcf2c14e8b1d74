"""Ballistic trajectory prediction.

Answers "where does the lander end up if nothing changes": the current
orientation and power are held fixed and the dynamics are stepped forward
until the lander sinks below the terrain or leaves the world.

Example:
    >>> from lander.gnc.guidance import predict
    >>>
    >>> prediction = predict(ship, terrain)
    >>> prediction.impact_point, prediction.terminal.vertical_speed
"""

import logging
from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.config import DEFAULT_CONFIG, GuidanceConfig
from lander.dynamics.ship import StepDirection, step
from lander.dynamics.state import VERTICAL, ShipState
from lander.exceptions import PredictionDivergence
from lander.geometry.primitives import OrientedLine, WorldPoint
from lander.geometry.terrain import TerrainProfile

logger = logging.getLogger(__name__)


@beartype
@dataclass
class TrajectoryPrediction:
    """Result of an unsteered trajectory prediction.

    Attributes:
        path: Predicted positions, one per step, ending at the terminal point
        terminal: State at the last step
        impact_segment: Terrain segment hit, or None if the lander flew away
    """
    path: list[WorldPoint]
    terminal: ShipState
    impact_segment: OrientedLine | None = None

    @property
    def impact_point(self) -> WorldPoint:
        """Terminal position (ground impact or world exit)."""
        return self.terminal.position

    @property
    def flew_away(self) -> bool:
        """True if the prediction ended by leaving the world."""
        return self.impact_segment is None

    @property
    def steps(self) -> int:
        """Number of steps simulated."""
        return len(self.path)

    @property
    def path_array(self) -> NDArray[np.float64]:
        """Predicted positions as an (N, 2) array."""
        return np.array([[p.x, p.y] for p in self.path], dtype=np.float64).reshape(-1, 2)

    def is_safe_landing(
        self,
        landing_zone: OrientedLine,
        config: GuidanceConfig = DEFAULT_CONFIG,
    ) -> bool:
        """True if the unsteered lander would touch down safely.

        Requires impact on the landing zone, an upright orientation, and
        speeds within the touchdown limits.
        """
        if self.impact_segment is None or self.impact_segment != landing_zone:
            return False
        t = self.terminal
        return (
            abs(t.horizontal_speed) < config.max_landing_hspeed
            and abs(t.vertical_speed) < config.max_landing_vspeed
            and t.orientation == VERTICAL
        )


@beartype
def predict(
    initial: ShipState,
    terrain: TerrainProfile,
    config: GuidanceConfig = DEFAULT_CONFIG,
) -> TrajectoryPrediction:
    """Step the lander forward under its current command until it lands or leaves.

    Args:
        initial: Starting state (not modified)
        terrain: Ground profile
        config: Gravity, world bounds and step ceiling

    Returns:
        TrajectoryPrediction with the sampled path and terminal state

    Raises:
        PredictionDivergence: If neither impact nor exit happens within
            `config.max_prediction_steps` steps
    """
    orientation = initial.orientation
    power = initial.power
    state = initial.copy()
    path: list[WorldPoint] = []

    for _ in range(config.max_prediction_steps):
        state = step(state, orientation, power, StepDirection.FORWARD, config.gravity)
        point = state.position
        path.append(point)

        segment = terrain.ground_collision(point)
        if segment is not None:
            logger.debug("Predicted impact at (%.1f, %.1f) after %d steps", point.x, point.y, len(path))
            return TrajectoryPrediction(path=path, terminal=state, impact_segment=segment)

        if not config.bounds.contains(point.x, point.y):
            logger.debug("Predicted fly-away at (%.1f, %.1f) after %d steps", point.x, point.y, len(path))
            return TrajectoryPrediction(path=path, terminal=state, impact_segment=None)

    raise PredictionDivergence(
        f"Trajectory did not resolve within {config.max_prediction_steps} steps",
        steps=config.max_prediction_steps,
    )
