"""
Pixel <-> normalized coordinate conversion.

Normalized values are what the system of record stores; pixel values are
what a canvas draws at a given image size.  Normalizing never rounds.
Denormalizing rounds to whole pixels unless asked not to.
"""

import math
from typing import Optional

from .geometry import NormalizedRectangle, PixelRectangle, Point


def _check_image_size(image_width: float, image_height: float) -> None:
    if image_width <= 0 or image_height <= 0:
        raise ValueError(
            f"Image dimensions must be positive (got {image_width}x{image_height})"
        )


def _round_pixel(value: float) -> int:
    # half-up, so 2.5 -> 3 rather than banker's rounding
    return int(math.floor(value + 0.5))


def normalize(rect: PixelRectangle, image_width: Optional[float] = None,
              image_height: Optional[float] = None) -> NormalizedRectangle:
    """
    Convert a pixel rectangle to unit-square coordinates.

    The image dimensions default to the ones carried by *rect*.
    """
    if image_width is None:
        image_width = rect.image_width
    if image_height is None:
        image_height = rect.image_height
    _check_image_size(image_width, image_height)

    return NormalizedRectangle(
        x=rect.x / image_width,
        y=rect.y / image_height,
        width=rect.width / image_width,
        height=rect.height / image_height,
    )


def denormalize(rect: NormalizedRectangle, image_width: float, image_height: float,
                round_pixels: bool = True) -> PixelRectangle:
    """
    Convert a normalized rectangle to pixels of an image of the given size.

    With ``round_pixels`` (the default) every value is rounded to the
    nearest whole pixel, which is what display and storage expect.
    """
    _check_image_size(image_width, image_height)

    values = (
        rect.x * image_width,
        rect.y * image_height,
        rect.width * image_width,
        rect.height * image_height,
    )
    if round_pixels:
        values = tuple(_round_pixel(v) for v in values)

    x, y, width, height = values
    return PixelRectangle(x, y, width, height, image_width, image_height)


def normalize_point(point: Point, image_width: float, image_height: float) -> Point:
    _check_image_size(image_width, image_height)
    return Point(point.x / image_width, point.y / image_height)


def denormalize_point(point: Point, image_width: float, image_height: float) -> Point:
    _check_image_size(image_width, image_height)
    return Point(point.x * image_width, point.y * image_height)
