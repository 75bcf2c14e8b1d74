"""Error kinds raised by the descent-guidance engine.

Geometry failures with a well-defined fallback are handled where they occur;
only the conditions below reach the caller.
"""


class GuidanceError(Exception):
    """Base exception for all guidance engine errors."""
    pass


class DegenerateGeometry(GuidanceError, ValueError):
    """Parallel or vertical lines where an algebraic solution was requested."""
    pass


class NoLandingZone(GuidanceError):
    """The terrain has no flat segment to land on."""
    pass


class PredictionDivergence(GuidanceError):
    """Trajectory prediction hit its step ceiling without resolving."""

    def __init__(self, message: str, steps: int):
        self.steps = steps
        super().__init__(message)


class GuidanceTimeout(GuidanceError):
    """A guidance call overran the control cycle's wall-clock budget.

    Raised by the outer loop, never by the engine itself.
    """

    def __init__(self, elapsed: float, budget: float):
        self.elapsed = elapsed
        self.budget = budget
        super().__init__(
            f"Guidance took {elapsed * 1e3:.1f} ms, budget is {budget * 1e3:.1f} ms"
        )


class InvalidSetpoint(GuidanceError, ValueError):
    """The engine produced a setpoint outside the actuator ranges."""

    def __init__(self, orientation: float, power: float):
        self.orientation = orientation
        self.power = power
        super().__init__(
            f"Setpoint out of range: orientation={orientation}, power={power}"
        )
