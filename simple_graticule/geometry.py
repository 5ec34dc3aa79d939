"""
Planar geometry value types for the graticule.

Coordinates follow the map convention used by the overlay: ``x`` is the
longitude-like axis and ``y`` the latitude-like axis. No geographic meaning
is implied; both are plain Cartesian units.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A position in map units or in pixels, depending on context."""

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class Bounds:
    """
    Axis-aligned viewport rectangle in map units.

    Attributes:
        south: Lower y edge
        west: Lower x edge
        north: Upper y edge
        east: Upper x edge
    """

    south: float
    west: float
    north: float
    east: float

    @classmethod
    def from_extent(cls, extent) -> "Bounds":
        """
        Build bounds from an extent ordered [west, east, south, north].

        Example:
            >>> Bounds.from_extent([-10, 10, -5, 5]).north
            5
        """
        west, east, south, north = extent
        return cls(south=south, west=west, north=north, east=east)

    @property
    def width(self) -> float:
        return self.east - self.west

    @property
    def height(self) -> float:
        return self.north - self.south

    @property
    def center(self) -> Point:
        return Point((self.west + self.east) / 2, (self.south + self.north) / 2)

    @property
    def is_degenerate(self) -> bool:
        """True when an edge is not finite or the rectangle is inverted."""
        edges = (self.south, self.west, self.north, self.east)
        if not all(math.isfinite(edge) for edge in edges):
            return True
        return self.west > self.east or self.south > self.north

    def pad(self, ratio: float) -> "Bounds":
        """
        Grow (positive ratio) or shrink (negative ratio) every side.

        Each side moves by ``ratio`` times the rectangle's extent along
        that axis.
        """
        dx = abs(self.width) * ratio
        dy = abs(self.height) * ratio
        return Bounds(
            south=self.south - dy,
            west=self.west - dx,
            north=self.north + dy,
            east=self.east + dx,
        )

    def clamp(
        self,
        min_x: float,
        max_x: float,
        min_y: float,
        max_y: float
    ) -> "Bounds":
        return Bounds(
            south=max(self.south, min_y),
            west=max(self.west, min_x),
            north=min(self.north, max_y),
            east=min(self.east, max_x),
        )

    def to_extent(self) -> list:
        """Return [west, east, south, north]."""
        return [self.west, self.east, self.south, self.north]
