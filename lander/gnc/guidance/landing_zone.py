"""Landing-zone resolution.

Turns a predicted impact point into the nearest safe touchdown target on the
landing zone: the foot of the perpendicular from the impact point, kept at
least `landing_margin` away from either edge of the zone.
"""

import logging

import numpy as np
from beartype import beartype

from lander.config import DEFAULT_CONFIG, GuidanceConfig
from lander.geometry.primitives import (
    OrientedLine,
    WorldPoint,
    intersection,
    is_vertical,
    perpendicular_through,
)

logger = logging.getLogger(__name__)


@beartype
def foot_of_perpendicular(line: OrientedLine, point: WorldPoint) -> WorldPoint:
    """Projection of `point` onto the infinite extension of `line`."""
    normal = perpendicular_through(line, point)
    if is_vertical(normal):
        # Tangential case: no slope to intersect with, the coincident point is the foot
        return line.coincident(point)
    return intersection(line, normal)


@beartype
def clamp_to_zone(landing_zone: OrientedLine, point: WorldPoint, margin: float) -> WorldPoint:
    """Pull a point on the zone's line back inside the zone, `margin` from its edges.

    If the zone is narrower than twice the margin its midpoint is returned.
    """
    axis = "y" if landing_zone.vertical else "x"
    lo = landing_zone.endpoint(axis, "min").coordinate(axis)
    hi = landing_zone.endpoint(axis, "max").coordinate(axis)

    if hi - lo < 2.0 * margin:
        logger.warning(
            "Landing zone is %.1f m wide, less than twice the %.1f m margin; targeting its middle",
            hi - lo, margin,
        )
        value = (lo + hi) / 2.0
    else:
        value = float(np.clip(point.coordinate(axis), lo + margin, hi - margin))

    if axis == "x":
        return WorldPoint(value, landing_zone.y_at(value))
    return WorldPoint(landing_zone.intercept, value)


@beartype
def resolve_landing_point(
    landing_zone: OrientedLine,
    impact_point: WorldPoint,
    config: GuidanceConfig = DEFAULT_CONFIG,
) -> WorldPoint:
    """Nearest safe touchdown point on the landing zone.

    Args:
        landing_zone: Flat terrain segment to land on
        impact_point: Where the lander is predicted to end up
        config: Supplies the edge margin

    Returns:
        Target point on the zone, at least `config.landing_margin` inside its edges
    """
    foot = foot_of_perpendicular(landing_zone, impact_point)
    return clamp_to_zone(landing_zone, foot, config.landing_margin)
