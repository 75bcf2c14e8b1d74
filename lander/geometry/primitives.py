"""2D geometry primitives for terrain and flight-path computations.

Lines are stored as affine functions y = slope * x + intercept. A vertical
line has no such form; it is flagged with `vertical` and its intercept holds
the constant x instead.

The same OrientedLine serves two roles:
- infinite line: `intersection`, `perpendicular_through`, `y_at`
- bounded segment: `point_on_segment`, `segments_intersect_within_bounds`

Example:
    >>> from lander.geometry import WorldPoint, OrientedLine, intersection
    >>>
    >>> a = OrientedLine(WorldPoint(0.0, 0.0), WorldPoint(10.0, 10.0))
    >>> b = OrientedLine(WorldPoint(0.0, 10.0), WorldPoint(10.0, 0.0))
    >>> intersection(a, b)
    WorldPoint(x=5.0, y=5.0)
"""

from dataclasses import dataclass, field
from typing import Literal

import numpy as np
from beartype import beartype

from lander.exceptions import DegenerateGeometry

Axis = Literal["x", "y"]

# =============================================================================
# Points
# =============================================================================


@beartype
@dataclass(frozen=True)
class WorldPoint:
    """Immutable point in world coordinates (y up).

    Integer coordinates are accepted and stored as floats, so
    `WorldPoint(0, 0) == WorldPoint(0.0, 0.0)`.

    Attributes:
        x: Horizontal coordinate [m]
        y: Vertical coordinate [m]
    """
    x: float | int
    y: float | int

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def coordinate(self, axis: Axis) -> float:
        """Coordinate along the given axis."""
        return self.x if axis == "x" else self.y

    def distance_to(self, other: "WorldPoint") -> float:
        """Euclidean distance to another point."""
        return float(np.hypot(other.x - self.x, other.y - self.y))

    def heading_to(self, other: "WorldPoint") -> float:
        """Angle of the vector self -> other, in radians from +x (-pi, pi]."""
        return float(np.arctan2(other.y - self.y, other.x - self.x))

    def is_above(self, other: "WorldPoint") -> bool:
        return self.y > other.y

    def is_right_of(self, other: "WorldPoint") -> bool:
        return self.x > other.x

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> "WorldPoint":
        """Point translated by (dx, dy)."""
        return WorldPoint(self.x + dx, self.y + dy)


# =============================================================================
# Lines
# =============================================================================


@beartype
@dataclass(frozen=True)
class OrientedLine:
    """Line through two distinct points, kept in affine form.

    Attributes:
        p1: First defining point
        p2: Second defining point
        slope: Slope `a` of y = a*x + b (0.0 when vertical)
        intercept: Intercept `b`, or the constant x when vertical
        vertical: True if p1 and p2 share the same x
    """
    p1: WorldPoint
    p2: WorldPoint
    slope: float = field(init=False)
    intercept: float = field(init=False)
    vertical: bool = field(init=False)

    def __post_init__(self) -> None:
        """Derive the affine form, rejecting zero-length lines."""
        if self.p1 == self.p2:
            raise DegenerateGeometry(f"Line needs two distinct points, got {self.p1} twice")

        dx = self.p2.x - self.p1.x
        if dx == 0.0:
            slope, intercept, vertical = 0.0, self.p1.x, True
        else:
            slope = (self.p2.y - self.p1.y) / dx
            intercept = self.p2.y - slope * self.p2.x
            vertical = False

        # Frozen dataclass: derived fields are set once here
        object.__setattr__(self, "slope", float(slope))
        object.__setattr__(self, "intercept", float(intercept))
        object.__setattr__(self, "vertical", vertical)

    def y_at(self, x: float) -> float:
        """Evaluate the affine function at x.

        Raises:
            DegenerateGeometry: If the line is vertical
        """
        if self.vertical:
            raise DegenerateGeometry("A vertical line has no affine function")
        return self.slope * x + self.intercept

    def coincident(self, point: WorldPoint) -> WorldPoint:
        """Point on this line sharing `point`'s x coordinate."""
        return WorldPoint(point.x, self.y_at(point.x))

    def endpoint(self, axis: Axis, extreme: Literal["min", "max"]) -> WorldPoint:
        """Endpoint with the smallest or largest coordinate on `axis`.

        Ties resolve to p1.
        """
        a, b = self.p1.coordinate(axis), self.p2.coordinate(axis)
        if extreme == "min":
            return self.p1 if a <= b else self.p2
        return self.p1 if a >= b else self.p2

    def extent(self, axis: Axis) -> float:
        """Length of the segment's projection on `axis`."""
        return abs(self.p2.coordinate(axis) - self.p1.coordinate(axis))

    @property
    def length(self) -> float:
        """Segment length [m]."""
        return self.p1.distance_to(self.p2)

    @property
    def is_flat(self) -> bool:
        """True for a horizontal run (both endpoints at the same height)."""
        return self.p1.y == self.p2.y


# =============================================================================
# Predicates and Constructions
# =============================================================================


@beartype
def is_vertical(line: OrientedLine) -> bool:
    """True if the line's slope is undefined."""
    return line.vertical


@beartype
def are_parallel(a: OrientedLine, b: OrientedLine) -> bool:
    """True if the lines never cross at a single point (includes coincident lines)."""
    if a.vertical or b.vertical:
        return a.vertical and b.vertical
    return a.slope == b.slope


@beartype
def intersection(a: OrientedLine, b: OrientedLine) -> WorldPoint:
    """Intersection of two infinite lines.

    Callers must rule out parallel lines first (see `are_parallel`).

    Raises:
        DegenerateGeometry: If the lines are parallel or both vertical
    """
    if a.vertical and b.vertical:
        raise DegenerateGeometry("Both lines are vertical")
    if a.vertical:
        return WorldPoint(a.intercept, b.y_at(a.intercept))
    if b.vertical:
        return WorldPoint(b.intercept, a.y_at(b.intercept))
    if a.slope == b.slope:
        raise DegenerateGeometry(f"Lines are parallel (slope {a.slope})")

    x = (b.intercept - a.intercept) / (a.slope - b.slope)
    return WorldPoint(x, a.y_at(x))


@beartype
def perpendicular_through(line: OrientedLine, point: WorldPoint) -> OrientedLine:
    """Normal to `line` passing through `point` and its foot of perpendicular.

    The result is vertical when `line` is horizontal.
    """
    if line.vertical:
        return OrientedLine(point, point.offset(dx=1.0))
    if line.slope == 0.0:
        return OrientedLine(point, point.offset(dy=1.0))
    return OrientedLine(point, point.offset(dx=1.0, dy=-1.0 / line.slope))


@beartype
def point_on_segment(point: WorldPoint, line: OrientedLine, axis: Axis) -> bool:
    """True if `point` lies strictly between the line's endpoints on `axis`."""
    lo = line.endpoint(axis, "min").coordinate(axis)
    hi = line.endpoint(axis, "max").coordinate(axis)
    return lo < point.coordinate(axis) < hi


def _within_span(point: WorldPoint, line: OrientedLine) -> bool:
    # An axis with zero extent cannot bound strictly; the point is on the line already.
    return all(
        point_on_segment(point, line, axis)
        for axis in ("x", "y")
        if line.extent(axis) > 0.0
    )


@beartype
def segments_intersect_within_bounds(a: OrientedLine, b: OrientedLine) -> bool:
    """True if the two segments cross strictly inside both of their spans.

    Parallel segments (including collinear overlaps) never count as crossing.
    """
    if are_parallel(a, b):
        return False
    point = intersection(a, b)
    return _within_span(point, a) and _within_span(point, b)
