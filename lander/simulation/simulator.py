"""Step-driven reference simulation of the game loop.

The guidance engine never owns the physics tick. This simulator plays the
game loop's part so the engine can be exercised end to end:

- holds the truth state
- rate-limits each setpoint (tilt +/-15 deg, power +/-1 per step)
- integrates one forward step per cycle
- detects landing, crash and fly-away

Example:
    >>> from lander.simulation import Simulator, default_ship, default_terrain
    >>>
    >>> sim = Simulator(state=default_ship(), terrain=default_terrain())
    >>> result = sim.run(max_steps=500)
    >>> result.status
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.config import DEFAULT_CONFIG, GuidanceConfig
from lander.dynamics.ship import StepDirection, step
from lander.dynamics.state import Angle, ShipState
from lander.exceptions import GuidanceTimeout, NoLandingZone
from lander.geometry.terrain import TerrainProfile
from lander.gnc.engine import Setpoint, compute_setpoint

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class SimConfig:
    """Game-loop configuration.

    Attributes:
        max_tilt_rate: Largest tilt change per step [degrees]
        max_power_rate: Largest power change per step
        guidance_budget: Wall-clock limit per guidance call [s], None to disable
        integer_commands: Round setpoints to integers as the game protocol does
    """
    max_tilt_rate: float = 15.0
    max_power_rate: float = 1.0
    guidance_budget: float | None = None
    integer_commands: bool = True


class FlightStatus(Enum):
    """Terminal classification of a simulated flight."""

    FLYING = auto()
    LANDED = auto()
    CRASHED = auto()
    FLOWN_AWAY = auto()


# =============================================================================
# Simulator
# =============================================================================


def _approach(current: float, target: float, max_delta: float) -> float:
    """Move current toward target by at most max_delta."""
    if abs(target - current) <= max_delta:
        return target
    return current + max_delta if target > current else current - max_delta


@beartype
@dataclass
class Simulator:
    """Truth-state simulator driving the guidance engine once per step.

    Attributes:
        state: Current truth state
        terrain: Ground profile
        config: Game-loop limits
        guidance_config: Configuration handed to the engine
    """
    state: ShipState
    terrain: TerrainProfile
    config: SimConfig = field(default_factory=SimConfig)
    guidance_config: GuidanceConfig = DEFAULT_CONFIG

    # Internal
    _status: FlightStatus = field(default=FlightStatus.FLYING, init=False)
    _history: list[ShipState] = field(default_factory=list, init=False, repr=False)
    _setpoints: list[Setpoint] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        """Record the initial state."""
        self.state = self.state.copy()
        self._history = [self.state.copy()]

    def get_state(self) -> ShipState:
        """Get current truth state.

        Returns a copy to prevent external modification.
        """
        return self.state.copy()

    @property
    def status(self) -> FlightStatus:
        return self._status

    def get_history(self) -> list[ShipState]:
        """Get recorded state history."""
        return list(self._history)

    def neutral_setpoint(self) -> Setpoint:
        """Hold the current tilt and power."""
        return Setpoint(orientation=self.state.tilt, power=self.state.power)

    def apply_rate_limits(self, setpoint: Setpoint) -> tuple[Angle, float]:
        """Actuator command actually reachable from the current state this step."""
        tilt, power = setpoint
        if self.config.integer_commands:
            tilt, power = setpoint.rounded()

        tilt = _approach(self.state.tilt, float(tilt), self.config.max_tilt_rate)
        power = _approach(self.state.power, float(power), self.config.max_power_rate)
        tilt = float(np.clip(tilt, -90.0, 90.0))
        power = float(np.clip(power, 0.0, 4.0))
        return Angle.from_external_input(tilt), power

    def step(self, setpoint: Setpoint) -> ShipState:
        """Apply one setpoint and propagate physics by one second.

        Args:
            setpoint: Desired (tilt, power) from guidance

        Returns:
            New truth state
        """
        if self._status is not FlightStatus.FLYING:
            raise RuntimeError(f"Flight already ended: {self._status.name}")

        orientation, power = self.apply_rate_limits(setpoint)
        self.state = step(
            self.state, orientation, power, StepDirection.FORWARD, self.guidance_config.gravity
        )
        self._history.append(self.state.copy())
        self._setpoints.append(setpoint)
        self._status = self.classify(self.state)
        return self.state

    def classify(self, state: ShipState) -> FlightStatus:
        """Terminal status of a state."""
        if not self.guidance_config.bounds.contains(state.x, state.y):
            return FlightStatus.FLOWN_AWAY

        segment = self.terrain.ground_collision(state.position)
        if segment is None:
            return FlightStatus.FLYING

        cfg = self.guidance_config
        landed = (
            segment == self.terrain.landing_zone()
            and round(state.tilt) == 0
            and abs(state.horizontal_speed) <= cfg.max_landing_hspeed
            and abs(state.vertical_speed) <= cfg.max_landing_vspeed
        )
        return FlightStatus.LANDED if landed else FlightStatus.CRASHED

    def guide(self) -> Setpoint:
        """Ask the engine for this cycle's setpoint.

        Raises:
            GuidanceTimeout: If the call overran `config.guidance_budget`
        """
        start = time.perf_counter()
        try:
            setpoint = compute_setpoint(self.get_state(), self.terrain, self.guidance_config)
        except NoLandingZone:
            logger.debug("No landing zone, holding current command")
            setpoint = self.neutral_setpoint()
        elapsed = time.perf_counter() - start

        budget = self.config.guidance_budget
        if budget is not None and elapsed > budget:
            raise GuidanceTimeout(elapsed, budget)
        return setpoint

    def run(self, max_steps: int = 1000) -> "SimulationResult":
        """Alternate guidance and physics until the flight ends.

        Args:
            max_steps: Stop after this many steps even if still flying

        Returns:
            SimulationResult with the recorded history
        """
        for _ in range(max_steps):
            if self._status is not FlightStatus.FLYING:
                break
            self.step(self.guide())

        logger.info(
            "Flight ended %s after %d steps at (%.1f, %.1f), hs=%.1f vs=%.1f fuel=%.0f",
            self._status.name, len(self._history) - 1,
            self.state.x, self.state.y,
            self.state.horizontal_speed, self.state.vertical_speed, self.state.fuel,
        )
        return SimulationResult(
            states=self.get_history(),
            setpoints=list(self._setpoints),
            status=self._status,
        )


# =============================================================================
# Results
# =============================================================================


@beartype
@dataclass
class SimulationResult:
    """Results from a completed simulation.

    Attributes:
        states: Truth states, initial state first
        setpoints: Setpoint requested at each step
        status: Terminal classification
    """
    states: list[ShipState]
    setpoints: list[Setpoint]
    status: FlightStatus

    @property
    def position(self) -> NDArray[np.float64]:
        """Position history [m], shape (N, 2)."""
        return np.array([[s.x, s.y] for s in self.states], dtype=np.float64).reshape(-1, 2)

    @property
    def fuel(self) -> NDArray[np.float64]:
        """Fuel history [l]."""
        return np.array([s.fuel for s in self.states], dtype=np.float64)

    @property
    def steps(self) -> int:
        """Number of physics steps taken."""
        return len(self.states) - 1

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        return pl.DataFrame({
            "step": list(range(len(self.states))),
            "x": [s.x for s in self.states],
            "y": [s.y for s in self.states],
            "hs": [s.horizontal_speed for s in self.states],
            "vs": [s.vertical_speed for s in self.states],
            "fuel": [s.fuel for s in self.states],
            "tilt": [s.tilt for s in self.states],
            "power": [s.power for s in self.states],
        })
