"""Point and neighbour lookups over the rooms of one floor."""

from typing import Hashable, Iterable, List, Optional, Sequence, Tuple

from .geometry import NormalizedRectangle, Point, point_distance

DEFAULT_NEIGHBOR_DISTANCE = 0.1

FloorRoom = Tuple[Hashable, NormalizedRectangle]


def is_point_in_room(point: Point, rect: NormalizedRectangle) -> bool:
    """Inclusive bounds test; points on the border count as inside."""
    return (
        rect.x <= point.x <= rect.x + rect.width
        and rect.y <= point.y <= rect.y + rect.height
    )


def find_room_at_point(point: Point, floor_rooms: Sequence[FloorRoom]) -> Optional[FloorRoom]:
    """
    Return the first ``(id, rectangle)`` in *floor_rooms* containing *point*.

    When rooms overlap, the order of *floor_rooms* decides which one wins.
    """
    for room_id, rect in floor_rooms:
        if is_point_in_room(point, rect):
            return room_id, rect
    return None


def distance_between_rooms(a: NormalizedRectangle, b: NormalizedRectangle) -> float:
    """Euclidean distance between the centres of two rooms."""
    return point_distance(a.center, b.center)


def find_neighbors(
    room_id: Hashable,
    rect: NormalizedRectangle,
    floor_rooms: Iterable[FloorRoom],
    max_distance: float = DEFAULT_NEIGHBOR_DISTANCE,
) -> List[FloorRoom]:
    """All other rooms whose centre lies within *max_distance* of *rect*'s centre."""
    if max_distance < 0:
        raise ValueError(f"max_distance must be non-negative (got {max_distance})")

    return [
        (other_id, other)
        for other_id, other in floor_rooms
        if other_id != room_id and distance_between_rooms(rect, other) <= max_distance
    ]
