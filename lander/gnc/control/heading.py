"""Heading-convergence controller.

Steers a privately simulated copy of the lander along each flight leg by
comparing two headings every iteration:

- inertial heading: direction of travel one look-ahead step under the
  current command
- line-of-sight heading: direction from the lander to the leg's target

Both are raw `atan2` headings on (-pi, pi]. Their difference is wrapped onto
the same interval, so a lander falling toward a target below it reads zero
error while one climbing away from it reads pi.

When the error grows (or grows faster than before) the commanded orientation
is turned by at most `max_step_angle`, in whichever direction brings the
look-ahead heading closer to the line of sight. While the error is closing
steadily the command is instead blended back toward its previous value,
which damps oscillation once tracking is good. The engine only burns while
the error exceeds `heading_tolerance`; on course, the lander coasts.

Example:
    >>> from lander.gnc.control import HeadingController
    >>>
    >>> ctrl = HeadingController()
    >>> results = ctrl.steer(ship, plan.legs, terrain)
    >>> tilt = ctrl.commanded.to_external_input()
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np
from beartype import beartype

from lander.config import DEFAULT_CONFIG, GuidanceConfig
from lander.dynamics.ship import StepDirection, step
from lander.dynamics.state import Angle, ShipState
from lander.geometry.primitives import WorldPoint
from lander.geometry.terrain import TerrainProfile
from lander.gnc.guidance.flight_plan import FlightLeg

logger = logging.getLogger(__name__)


def wrap_angle(radians: float) -> float:
    """Wrap an angle difference onto (-pi, pi]."""
    return float(np.pi - np.mod(np.pi - radians, 2.0 * np.pi))


# =============================================================================
# Controller Memory and Records
# =============================================================================


class CorrectionMode(Enum):
    """How the command was updated in one iteration."""

    DIRECT = auto()  # Turned toward the line of sight
    DAMPED = auto()  # Blended toward the previous command


class LegOutcome(Enum):
    """Why a leg stopped."""

    REACHED = auto()
    ITERATION_CAP = auto()
    GROUND = auto()  # Simulated lander sank below the terrain
    OUT_OF_BOUNDS = auto()


@beartype
@dataclass
class GuidanceMemory:
    """Scratch state carried across iterations of one guidance call.

    Attributes:
        previous_error: Angular error of the last iteration [rad]
        previous_error_rate: Change of error over the last iteration [rad]
        previous_orientation: Command in force before the last update
    """
    previous_error: float | None = None
    previous_error_rate: float | None = None
    previous_orientation: Angle | None = None

    def reset(self) -> None:
        """Forget all history."""
        self.previous_error = None
        self.previous_error_rate = None
        self.previous_orientation = None


@beartype
@dataclass(frozen=True)
class ControllerArrow:
    """Diagnostic record of one controller iteration.

    Attributes:
        position: Simulated lander position at the start of the iteration
        line_of_sight: Heading toward the target [rad, (-pi, pi]]
        inertial: Heading of travel [rad, (-pi, pi]]
        signed_error: line_of_sight - inertial, wrapped onto (-pi, pi]
        error: Absolute angular error [rad]
        commanded: Command after the update
        power: Power after the update
        mode: Correction applied
    """
    position: WorldPoint
    line_of_sight: float
    inertial: float
    signed_error: float
    error: float
    commanded: Angle
    power: float
    mode: CorrectionMode


@beartype
@dataclass
class LegResult:
    """Outcome of flying one leg.

    Attributes:
        leg: The leg flown
        iterations: Controller iterations spent on it
        reached: True if the proximity window was entered
        final_state: Simulated state when the leg ended. A leg cut short by
            the terrain or the world edge keeps the last state inside both.
        outcome: Why the leg ended
    """
    leg: FlightLeg
    iterations: int
    reached: bool
    final_state: ShipState
    outcome: LegOutcome


# =============================================================================
# Heading Controller
# =============================================================================


@beartype
@dataclass
class HeadingController:
    """Iterative line-of-sight steering over a list of flight legs.

    Attributes:
        config: Step limit, damping, power, tolerances and iteration cap
    """
    config: GuidanceConfig = DEFAULT_CONFIG

    # Internal state
    _memory: GuidanceMemory = field(default_factory=GuidanceMemory, init=False, repr=False)
    _commanded: Angle | None = field(default=None, init=False, repr=False)
    _power: float = field(default=0.0, init=False, repr=False)
    _arrows: list[ControllerArrow] = field(default_factory=list, init=False, repr=False)

    @beartype
    def reset(self, state: ShipState) -> None:
        """Start a new guidance call holding the state's current command."""
        self._memory.reset()
        self._commanded = state.orientation
        self._power = state.power
        self._arrows = []

    @property
    def commanded(self) -> Angle:
        """Orientation currently commanded."""
        if self._commanded is None:
            raise RuntimeError("Controller has not been reset with a state")
        return self._commanded

    @property
    def power(self) -> float:
        """Power currently commanded."""
        return self._power

    @property
    def memory(self) -> GuidanceMemory:
        return self._memory

    @property
    def arrows(self) -> list[ControllerArrow]:
        """Per-iteration diagnostics since the last reset."""
        return list(self._arrows)

    def is_near(self, position: WorldPoint, target: WorldPoint) -> bool:
        """True if within the proximity tolerance of target on both axes."""
        tol = self.config.proximity_tolerance
        return abs(position.x - target.x) <= tol and abs(position.y - target.y) <= tol

    def _inertial_heading(self, state: ShipState, orientation: Angle, power: float) -> float:
        """Heading of travel over one look-ahead step under a command."""
        ahead = step(state, orientation, power, StepDirection.REVERSE, self.config.gravity)
        return state.position.heading_to(ahead.position)

    def _turn(self, state: ShipState, current: Angle, size: float, power: float, line_of_sight: float) -> Angle:
        """Turn `current` by `size`, whichever way leaves the smaller error."""
        best: Angle | None = None
        best_error = np.inf
        for sign in (1.0, -1.0):
            candidate = Angle.from_internal_radians(np.clip(current.radians + sign * size, 0.0, np.pi))
            heading = self._inertial_heading(state, candidate, power)
            error = abs(wrap_angle(line_of_sight - heading))
            if error < best_error:
                best, best_error = candidate, error
        return best

    @beartype
    def update(self, state: ShipState, target: WorldPoint) -> ShipState:
        """Run one steering iteration toward `target`.

        Args:
            state: Simulated lander state (not modified)
            target: Waypoint being steered toward

        Returns:
            Simulated state one look-ahead step later, under the new command
        """
        cfg = self.config
        current = self.commanded
        position = state.position

        inertial = self._inertial_heading(state, current, self._power)
        line_of_sight = position.heading_to(target)
        signed_error = wrap_angle(line_of_sight - inertial)
        error = abs(signed_error)
        power = cfg.command_power if error > cfg.heading_tolerance else 0.0

        mem = self._memory
        rate = None if mem.previous_error is None else error - mem.previous_error
        diverging = (
            mem.previous_error is None
            or error > mem.previous_error
            or (
                rate is not None
                and mem.previous_error_rate is not None
                and rate > mem.previous_error_rate
            )
        )

        if diverging:
            size = min(error, cfg.max_step_angle)
            updated = self._turn(state, current, size, power, line_of_sight)
            mode = CorrectionMode.DIRECT
        else:
            previous = mem.previous_orientation or current
            blended = previous.radians + cfg.damping * (current.radians - previous.radians)
            updated = Angle.from_internal_radians(np.clip(blended, 0.0, np.pi))
            mode = CorrectionMode.DAMPED

        mem.previous_orientation = current
        mem.previous_error = error
        mem.previous_error_rate = rate
        self._commanded = updated
        self._power = power

        self._arrows.append(ControllerArrow(
            position=position,
            line_of_sight=line_of_sight,
            inertial=inertial,
            signed_error=signed_error,
            error=error,
            commanded=updated,
            power=power,
            mode=mode,
        ))

        return step(state, updated, power, StepDirection.REVERSE, cfg.gravity)

    def _escape(self, state: ShipState, terrain: TerrainProfile) -> LegOutcome | None:
        """Outcome if the simulated lander has left the flyable region."""
        if not self.config.bounds.contains(state.x, state.y):
            return LegOutcome.OUT_OF_BOUNDS
        if terrain.ground_collision(state.position) is not None:
            return LegOutcome.GROUND
        return None

    @beartype
    def fly_leg(self, state: ShipState, leg: FlightLeg, terrain: TerrainProfile) -> LegResult:
        """Iterate toward the leg's target.

        The leg ends when the lander comes within the proximity window, when
        a step would carry it under the terrain or out of the world, or when
        the iteration cap runs out.
        """
        target = leg.target
        if self.is_near(state.position, target):
            return LegResult(leg=leg, iterations=0, reached=True, final_state=state, outcome=LegOutcome.REACHED)

        cap = self.config.max_leg_iterations
        for i in range(1, cap + 1):
            ahead = self.update(state, target)
            if self.is_near(ahead.position, target):
                logger.debug("Leg to (%.1f, %.1f) reached after %d iterations", target.x, target.y, i)
                return LegResult(leg=leg, iterations=i, reached=True, final_state=ahead, outcome=LegOutcome.REACHED)

            outcome = self._escape(ahead, terrain)
            if outcome is not None:
                logger.debug(
                    "Leg to (%.1f, %.1f) stopped after %d iterations: %s at (%.1f, %.1f)",
                    target.x, target.y, i, outcome.name, ahead.x, ahead.y,
                )
                return LegResult(leg=leg, iterations=i, reached=False, final_state=state, outcome=outcome)
            state = ahead

        logger.debug(
            "Leg to (%.1f, %.1f) not reached within %d iterations, ended at (%.1f, %.1f)",
            target.x, target.y, cap, state.x, state.y,
        )
        return LegResult(leg=leg, iterations=cap, reached=False, final_state=state, outcome=LegOutcome.ITERATION_CAP)

    @beartype
    def steer(self, state: ShipState, legs: list[FlightLeg], terrain: TerrainProfile) -> list[LegResult]:
        """Fly all legs, popping from the tail, on a private copy of `state`.

        Args:
            state: Lander snapshot (not modified)
            legs: Legs in reverse execution order, as returned by `route`
            terrain: Ground profile the simulated lander must stay above

        Returns:
            One LegResult per leg, in the order flown
        """
        self.reset(state)
        simulated = state.copy()
        pending = list(legs)
        results: list[LegResult] = []

        while pending:
            leg = pending.pop()
            result = self.fly_leg(simulated, leg, terrain)
            results.append(result)
            simulated = result.final_state

        return results
