"""
Structural validation of normalized room coordinates.

Every check runs, so a rectangle that breaks several rules gets one
message per broken rule and a drawing surface can flag them all at once.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List

from .geometry import NormalizedRectangle

logger = logging.getLogger(__name__)

# 0.5% of the image extent
MIN_DIMENSION = 0.005
MIN_ASPECT_RATIO = 0.1
MAX_ASPECT_RATIO = 10.0


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"valid": self.valid, "errors": list(self.errors)}


def _aspect_ratio(rect: NormalizedRectangle) -> float:
    if rect.height == 0:
        return math.inf
    return rect.width / rect.height


def validate_room_coordinates(rect: NormalizedRectangle) -> ValidationResult:
    """Check range, minimum size, containment and aspect ratio of *rect*."""
    errors: List[str] = []

    # NaN fails every comparison, so each check tests the accepted range
    if not (0 <= rect.x <= 1):
        errors.append(f"X coordinate must be between 0 and 1 (got {rect.x})")

    if not (0 <= rect.y <= 1):
        errors.append(f"Y coordinate must be between 0 and 1 (got {rect.y})")

    if not (0 <= rect.width <= 1):
        errors.append(f"Width must be between 0 and 1 (got {rect.width})")

    if not (0 <= rect.height <= 1):
        errors.append(f"Height must be between 0 and 1 (got {rect.height})")

    if not rect.width >= MIN_DIMENSION:
        errors.append(f"Width must be at least {MIN_DIMENSION} (0.5% of image)")

    if not rect.height >= MIN_DIMENSION:
        errors.append(f"Height must be at least {MIN_DIMENSION} (0.5% of image)")

    if not rect.x + rect.width <= 1.0:
        errors.append("Room extends beyond right edge of image (x + width > 1.0)")

    if not rect.y + rect.height <= 1.0:
        errors.append("Room extends beyond bottom edge of image (y + height > 1.0)")

    aspect = _aspect_ratio(rect)
    if not (MIN_ASPECT_RATIO <= aspect <= MAX_ASPECT_RATIO):
        errors.append(
            f"Aspect ratio is too extreme ({aspect:.2f}). "
            f"Should be between {MIN_ASPECT_RATIO} and {MAX_ASPECT_RATIO:g}"
        )

    if errors:
        logger.debug("Rejected coordinates %s: %d problem(s)", rect, len(errors))

    return ValidationResult(valid=not errors, errors=errors)
