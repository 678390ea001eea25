"""
Coordinate & Overlap Engine.

Pure, stateless geometry for room annotations drawn over a floor-plan
image: pixel/normalized conversion, structural validation, overlap
detection against sibling rooms, and point/neighbour queries.  Callers
hand in rectangles and get verdicts back; nothing is persisted here.
"""

from .geometry import (
    NormalizedRectangle,
    PixelRectangle,
    Point,
    bounding_box,
    clamp_rectangle,
    overlap_area,
    point_distance,
    rectangle_center,
    rectangles_intersect,
    scale_rectangle,
    snap_to_grid,
    translate_rectangle,
)
from .conversion import normalize, denormalize, normalize_point, denormalize_point
from .validator import (
    MIN_DIMENSION,
    MIN_ASPECT_RATIO,
    MAX_ASPECT_RATIO,
    ValidationResult,
    validate_room_coordinates,
)
from .overlap import DEFAULT_OVERLAP_TOLERANCE, OverlapResult, check_room_overlap, overlap_fraction
from .queries import (
    DEFAULT_NEIGHBOR_DISTANCE,
    distance_between_rooms,
    find_neighbors,
    find_room_at_point,
    is_point_in_room,
)

__all__ = [
    "NormalizedRectangle",
    "PixelRectangle",
    "Point",
    "bounding_box",
    "clamp_rectangle",
    "overlap_area",
    "point_distance",
    "rectangle_center",
    "rectangles_intersect",
    "scale_rectangle",
    "snap_to_grid",
    "translate_rectangle",
    "normalize",
    "denormalize",
    "normalize_point",
    "denormalize_point",
    "MIN_DIMENSION",
    "MIN_ASPECT_RATIO",
    "MAX_ASPECT_RATIO",
    "ValidationResult",
    "validate_room_coordinates",
    "DEFAULT_OVERLAP_TOLERANCE",
    "OverlapResult",
    "check_room_overlap",
    "overlap_fraction",
    "DEFAULT_NEIGHBOR_DISTANCE",
    "distance_between_rooms",
    "find_neighbors",
    "find_room_at_point",
    "is_point_in_room",
]
