"""Geometry kernel for terrain and flight-path computations.

Example:
    >>> from lander.geometry import TerrainProfile, OrientedLine, WorldPoint
    >>>
    >>> terrain = TerrainProfile.from_points([(0, 500), (7000, 500)])
    >>> path = OrientedLine(WorldPoint(100.0, 2000.0), WorldPoint(6000.0, 600.0))
    >>> terrain.intersections(path)
    []
"""

from lander.geometry.primitives import (
    Axis,
    OrientedLine,
    WorldPoint,
    are_parallel,
    intersection,
    is_vertical,
    perpendicular_through,
    point_on_segment,
    segments_intersect_within_bounds,
)
from lander.geometry.terrain import TerrainProfile

__all__ = [
    # Primitives
    "Axis",
    "WorldPoint",
    "OrientedLine",
    # Operations
    "intersection",
    "perpendicular_through",
    "is_vertical",
    "are_parallel",
    "point_on_segment",
    "segments_intersect_within_bounds",
    # Terrain
    "TerrainProfile",
]
