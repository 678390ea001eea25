"""
Rectangle and point primitives shared by the coordinate engine.

Room placements are stored as *normalized* rectangles: every value is a
fraction of the hosting floor-plan image's width or height, so the same
rectangle is meaningful at any rendering resolution.  Pixel rectangles
always carry the image dimensions they are relative to.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from shapely.geometry import Polygon, box


@dataclass(frozen=True)
class Point:
    """An (x, y) pair in either normalized or pixel space."""

    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class NormalizedRectangle:
    """Axis-aligned rectangle in unit-square coordinates."""

    x: float
    y: float
    width: float
    height: float

    @property
    def x_end(self) -> float:
        return self.x + self.width

    @property
    def y_end(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self) -> Point:
        return Point(self.center_x, self.center_y)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def polygon(self) -> Polygon:
        """Rectangle as a Shapely polygon."""
        return box(self.x, self.y, self.x_end, self.y_end)

    @classmethod
    def from_dict(cls, data: dict) -> "NormalizedRectangle":
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class PixelRectangle:
    """Rectangle in pixel offsets of an image of known size."""

    x: float
    y: float
    width: float
    height: float
    image_width: float
    image_height: float

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "image_width": self.image_width,
            "image_height": self.image_height,
        }


Rectangle = Union[NormalizedRectangle, PixelRectangle]


def rectangles_intersect(a: Rectangle, b: Rectangle) -> bool:
    """True when the rectangles share a positive area (touching edges don't count)."""
    return not (
        a.x + a.width <= b.x
        or b.x + b.width <= a.x
        or a.y + a.height <= b.y
        or b.y + b.height <= a.y
    )


def overlap_area(a: NormalizedRectangle, b: NormalizedRectangle) -> float:
    """Area of the intersection of two rectangles, ``0.0`` when disjoint."""
    if not rectangles_intersect(a, b):
        return 0.0
    return a.polygon.intersection(b.polygon).area


def rectangle_center(rect: Rectangle) -> Point:
    return Point(rect.x + rect.width / 2, rect.y + rect.height / 2)


def point_distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def snap_to_grid(point: Point, grid_size: float) -> Point:
    """Snap *point* to the nearest multiple of *grid_size* on both axes."""
    if grid_size <= 0:
        raise ValueError(f"Grid size must be positive (got {grid_size})")
    return Point(
        math.floor(point.x / grid_size + 0.5) * grid_size,
        math.floor(point.y / grid_size + 0.5) * grid_size,
    )


def clamp_rectangle(rect: NormalizedRectangle) -> NormalizedRectangle:
    """Clip a normalized rectangle so it lies inside the unit square."""
    x = max(0.0, min(rect.x, 1.0))
    y = max(0.0, min(rect.y, 1.0))
    width = max(0.0, min(rect.width, 1.0 - x))
    height = max(0.0, min(rect.height, 1.0 - y))
    return NormalizedRectangle(x, y, width, height)


def bounding_box(rectangles: Iterable[NormalizedRectangle]) -> Optional[NormalizedRectangle]:
    """
    Smallest rectangle enclosing every rectangle in *rectangles*.

    Returns ``None`` for an empty input.
    """
    rects = list(rectangles)
    if not rects:
        return None

    min_x = min(r.x for r in rects)
    min_y = min(r.y for r in rects)
    max_x = max(r.x_end for r in rects)
    max_y = max(r.y_end for r in rects)
    return NormalizedRectangle(min_x, min_y, max_x - min_x, max_y - min_y)


def scale_rectangle(rect: PixelRectangle, factor: float) -> PixelRectangle:
    """Zoom a pixel rectangle; the image dimensions scale with it."""
    return PixelRectangle(
        x=rect.x * factor,
        y=rect.y * factor,
        width=rect.width * factor,
        height=rect.height * factor,
        image_width=rect.image_width * factor,
        image_height=rect.image_height * factor,
    )


def translate_rectangle(rect: PixelRectangle, offset_x: float, offset_y: float) -> PixelRectangle:
    """Pan a pixel rectangle by the given offsets."""
    return PixelRectangle(
        x=rect.x + offset_x,
        y=rect.y + offset_y,
        width=rect.width,
        height=rect.height,
        image_width=rect.image_width,
        image_height=rect.image_height,
    )
