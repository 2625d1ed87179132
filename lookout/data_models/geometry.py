"""
lookout/data_models/geometry.py

Immutable geometry value objects.

Contains:
- CoordinatesType: Coordinate space a region is expressed in
- Location: A point / offset vector
- RectangleSize: A width and height
- Region: A positioned rectangle
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class CoordinatesType(StrEnum):
    """Coordinate space of a region."""
    SCREENSHOT_AS_IS = "screenshot_as_is"   # Pixels of the captured image
    CONTEXT_AS_IS = "context_as_is"         # Current context, ignoring scroll
    CONTEXT_RELATIVE = "context_relative"   # Current context, scroll-adjusted


class Location(BaseModel):
    """A point, also used as an offset vector."""
    model_config = ConfigDict(frozen=True)

    ZERO: ClassVar[Location]

    x: float = 0
    y: float = 0

    def offset(self, dx: float, dy: float) -> Location:
        """Return this location translated by (dx, dy)."""
        return Location(x=self.x + dx, y=self.y + dy)

    def offset_by_location(self, other: Location) -> Location:
        """Return this location translated by another location."""
        return self.offset(other.x, other.y)

    def offset_negative(self, other: Location) -> Location:
        """Return this location translated by the negation of another location."""
        return self.offset(-other.x, -other.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


Location.ZERO = Location(x=0, y=0)


class RectangleSize(BaseModel):
    """A width and height."""
    model_config = ConfigDict(frozen=True)

    width: float = 0
    height: float = 0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class Region(BaseModel):
    """
    A rectangle positioned at (left, top).

    All operations return new instances; a region is never mutated.
    """
    model_config = ConfigDict(frozen=True)

    EMPTY: ClassVar[Region]

    left: float = 0
    top: float = 0
    width: float = 0
    height: float = 0
    coordinates_type: CoordinatesType = CoordinatesType.SCREENSHOT_AS_IS

    @classmethod
    def from_location_and_size(
        cls,
        location: Location,
        size: RectangleSize,
        coordinates_type: CoordinatesType = CoordinatesType.SCREENSHOT_AS_IS,
    ) -> Region:
        return cls(
            left=location.x,
            top=location.y,
            width=size.width,
            height=size.height,
            coordinates_type=coordinates_type,
        )

    @property
    def location(self) -> Location:
        return Location(x=self.left, y=self.top)

    @property
    def size(self) -> RectangleSize:
        return RectangleSize(width=self.width, height=self.height)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def is_empty(self) -> bool:
        return self.left == 0 and self.top == 0 and self.width == 0 and self.height == 0

    def offset(self, dx: float, dy: float) -> Region:
        """Return this region translated by (dx, dy), keeping its size."""
        return self.model_copy(update={"left": self.left + dx, "top": self.top + dy})

    def offset_by_location(self, location: Location) -> Region:
        return self.offset(location.x, location.y)

    def offset_negative(self, location: Location) -> Region:
        return self.offset(-location.x, -location.y)

    def contains(self, other: Region | Location) -> bool:
        """
        Check whether a region lies entirely inside this region, or a location is inside it.

        Edges are inclusive, so a region contains itself.
        """
        if isinstance(other, Location):
            return self.left <= other.x <= self.right and self.top <= other.y <= self.bottom
        return (
            self.left <= other.left
            and self.top <= other.top
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersect(self, other: Region) -> Region:
        """Return the overlapping part of two regions, or EMPTY if they do not overlap."""
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return Region.EMPTY
        return self.model_copy(
            update={"left": left, "top": top, "width": right - left, "height": bottom - top}
        )

    def __str__(self) -> str:
        return f"({self.left}, {self.top}) {self.width}x{self.height}, {self.coordinates_type}"


Region.EMPTY = Region()
