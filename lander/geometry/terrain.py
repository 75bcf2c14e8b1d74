"""Terrain profile: the ground polyline under the lander.

The terrain is a left-to-right chain of points with strictly increasing x,
so it never overhangs. Its landing zone is the first flat segment.

Example:
    >>> from lander.geometry import TerrainProfile
    >>>
    >>> terrain = TerrainProfile.from_points([
    ...     (0, 1500), (1000, 2000), (2000, 500), (3500, 500), (6999, 1000),
    ... ])
    >>> terrain.landing_zone().p1
    WorldPoint(x=2000.0, y=500.0)
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.exceptions import NoLandingZone
from lander.geometry.primitives import (
    OrientedLine,
    WorldPoint,
    segments_intersect_within_bounds,
)


@beartype
@dataclass(frozen=True)
class TerrainProfile:
    """Ground polyline.

    Attributes:
        points: Vertices ordered by increasing x
        segments: Lines between consecutive vertices (derived)
    """
    points: tuple[WorldPoint, ...]
    segments: tuple[OrientedLine, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate ordering and build the segment chain."""
        if len(self.points) < 2:
            raise ValueError(f"Terrain needs at least 2 points, got {len(self.points)}")
        for prev, point in zip(self.points, self.points[1:]):
            if not point.x > prev.x:
                raise ValueError(
                    f"Terrain x must be strictly increasing, got {prev.x} then {point.x}"
                )

        segments = tuple(
            OrientedLine(prev, point) for prev, point in zip(self.points, self.points[1:])
        )
        object.__setattr__(self, "segments", segments)

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float | int]]) -> "TerrainProfile":
        """Build a profile from (x, y) pairs, ints or floats."""
        return cls(tuple(WorldPoint(float(x), float(y)) for x, y in points))

    def to_array(self) -> NDArray[np.float64]:
        """Vertices as an (N, 2) array."""
        return np.array([[p.x, p.y] for p in self.points], dtype=np.float64)

    @property
    def x_range(self) -> tuple[float, float]:
        """Horizontal span covered by the terrain."""
        return self.points[0].x, self.points[-1].x

    # -------------------------------------------------------------------------
    # Landing zone
    # -------------------------------------------------------------------------

    def landing_zone(self) -> OrientedLine | None:
        """First flat segment, scanning left to right, or None."""
        for segment in self.segments:
            if segment.is_flat:
                return segment
        return None

    def require_landing_zone(self) -> OrientedLine:
        """First flat segment.

        Raises:
            NoLandingZone: If no segment is flat
        """
        zone = self.landing_zone()
        if zone is None:
            raise NoLandingZone("Terrain has no flat segment to land on")
        return zone

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def segment_under(self, x: float) -> OrientedLine | None:
        """First segment whose x-span contains x."""
        for segment in self.segments:
            if segment.p1.x <= x <= segment.p2.x:
                return segment
        return None

    def ground_height(self, x: float) -> float | None:
        """Terrain height at x, or None outside the terrain span."""
        segment = self.segment_under(x)
        return None if segment is None else segment.y_at(x)

    def ground_collision(self, point: WorldPoint) -> OrientedLine | None:
        """Segment the point has sunk below, or None.

        A point collides when the ground directly beneath it is higher than
        the point itself. Points outside the terrain span never collide.
        """
        segment = self.segment_under(point.x)
        if segment is not None and segment.y_at(point.x) > point.y:
            return segment
        return None

    def intersections(self, line: OrientedLine) -> list[OrientedLine]:
        """Segments crossed by `line` strictly inside both spans, left to right."""
        return [
            segment for segment in self.segments
            if segments_intersect_within_bounds(line, segment)
        ]
