"""Obstruction-aware flight-plan routing.

The direct line from the lander to its touchdown target is tested against the
terrain. If the terrain cuts it, a clearance waypoint is placed above the
highest point of the crossed segments and the route becomes two legs.

Legs are stored in reverse execution order: the controller consumes them by
popping from the tail, so a two-leg plan reads

    [clearance -> target, origin -> clearance]

and is flown origin -> clearance first, then clearance -> target.

Example:
    >>> from lander.gnc.guidance import route
    >>>
    >>> plan = route(ship.position, landing_point, terrain)
    >>> for leg in plan.execution_order():
    ...     print(leg.origin, "->", leg.target)
"""

import logging
from dataclasses import dataclass, field

from beartype import beartype

from lander.config import DEFAULT_CONFIG, GuidanceConfig
from lander.geometry.primitives import OrientedLine, WorldPoint
from lander.geometry.terrain import TerrainProfile

logger = logging.getLogger(__name__)


@beartype
@dataclass(frozen=True)
class FlightLeg:
    """One straight leg of a flight plan.

    Attributes:
        origin: Waypoint the leg starts from
        target: Waypoint the leg steers toward
    """
    origin: WorldPoint
    target: WorldPoint

    def as_line(self) -> OrientedLine:
        """The leg as a line segment (origin and target must differ)."""
        return OrientedLine(self.origin, self.target)

    @property
    def length(self) -> float:
        """Leg length [m]."""
        return self.origin.distance_to(self.target)


@beartype
@dataclass
class FlightPlan:
    """Routed path from the lander to its touchdown target.

    Attributes:
        legs: Legs in reverse execution order (last flown first)
        obstructions: Terrain segments crossed by the direct line
        clearance: Inserted waypoint, or None for a direct route
    """
    legs: list[FlightLeg]
    obstructions: list[OrientedLine] = field(default_factory=list)
    clearance: WorldPoint | None = None

    @property
    def is_direct(self) -> bool:
        """True if no clearance waypoint was needed."""
        return self.clearance is None

    def execution_order(self) -> list[FlightLeg]:
        """Legs in the order they are flown."""
        return list(reversed(self.legs))


@beartype
def highest_obstruction(obstructions: list[OrientedLine]) -> WorldPoint:
    """Highest endpoint among the given segments (first one wins ties)."""
    if not obstructions:
        raise ValueError("No obstructions to choose from")
    peaks = [segment.endpoint("y", "max") for segment in obstructions]
    return max(peaks, key=lambda p: p.y)


@beartype
def route(
    origin: WorldPoint,
    target: WorldPoint,
    terrain: TerrainProfile,
    config: GuidanceConfig = DEFAULT_CONFIG,
) -> FlightPlan:
    """Route from `origin` to `target` around at most one terrain obstruction.

    Args:
        origin: Current lander position
        target: Touchdown target
        terrain: Ground profile
        config: Supplies the hover margin above the obstruction

    Returns:
        FlightPlan with one leg (clear line of flight) or two legs (via a
        clearance waypoint)
    """
    if origin == target:
        return FlightPlan(legs=[FlightLeg(origin, target)])

    direct = OrientedLine(origin, target)
    obstructions = terrain.intersections(direct)
    if not obstructions:
        logger.debug("Direct route, %.1f m", direct.length)
        return FlightPlan(legs=[FlightLeg(origin, target)])

    peak = highest_obstruction(obstructions)
    clearance = peak.offset(dy=config.hover_margin)
    logger.debug(
        "Route blocked by %d segment(s), clearing peak (%.1f, %.1f) at y=%.1f",
        len(obstructions), peak.x, peak.y, clearance.y,
    )
    return FlightPlan(
        legs=[FlightLeg(clearance, target), FlightLeg(origin, clearance)],
        obstructions=obstructions,
        clearance=clearance,
    )
