"""
Overlap detection between a candidate room and its siblings on a floor.

An overlap is measured as a fraction of the *smaller* rectangle's area,
so a sliver room sitting entirely inside a large one still counts as a
full conflict.  Fractions up to the tolerance are accepted, which lets
hand-drawn neighbours nudge across a shared wall.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

from .geometry import NormalizedRectangle, overlap_area

logger = logging.getLogger(__name__)

DEFAULT_OVERLAP_TOLERANCE = 0.05

Sibling = Tuple[Hashable, NormalizedRectangle]


@dataclass
class OverlapResult:
    has_overlap: bool
    overlapping_rooms: List[Sibling] = field(default_factory=list)
    # sibling id -> overlap as a percentage of the smaller area
    overlap_percentages: Dict[Hashable, float] = field(default_factory=dict)

    @property
    def overlapping_ids(self) -> List[Hashable]:
        return [room_id for room_id, _ in self.overlapping_rooms]


def overlap_fraction(a: NormalizedRectangle, b: NormalizedRectangle) -> float:
    """Intersection area of *a* and *b* divided by the smaller of their areas."""
    area = overlap_area(a, b)
    if area <= 0:
        return 0.0
    # one rectangle lies wholly inside the other
    if a.polygon.covers(b.polygon) or b.polygon.covers(a.polygon):
        return 1.0
    return area / min(a.area, b.area)


def check_room_overlap(
    candidate: NormalizedRectangle,
    siblings: Iterable[Sibling],
    exclude_id: Optional[Hashable] = None,
    tolerance: float = DEFAULT_OVERLAP_TOLERANCE,
) -> OverlapResult:
    """
    Compare *candidate* against every ``(id, rectangle)`` in *siblings*.

    Parameters
    ----------
    candidate : NormalizedRectangle
        Proposed placement.
    siblings : iterable of (id, NormalizedRectangle)
        Rooms already placed on the same floor.
    exclude_id :
        Id to skip, used when a room is moved against its own old placement.
    tolerance : float
        Largest accepted overlap fraction, in ``(0, 1]``.  A sibling that
        contains the candidate, or lies inside it, is flagged at any
        tolerance, 1 included.
    """
    if not 0 < tolerance <= 1:
        raise ValueError(f"Overlap tolerance must be in (0, 1] (got {tolerance})")

    overlapping: List[Sibling] = []
    percentages: Dict[Hashable, float] = {}

    for room_id, rect in siblings:
        if exclude_id is not None and room_id == exclude_id:
            continue

        fraction = overlap_fraction(candidate, rect)
        if fraction > tolerance or fraction == 1.0:
            overlapping.append((room_id, rect))
            percentages[room_id] = fraction * 100

    if overlapping:
        logger.debug("Candidate %s overlaps %d sibling(s)", candidate, len(overlapping))

    return OverlapResult(
        has_overlap=bool(overlapping),
        overlapping_rooms=overlapping,
        overlap_percentages=percentages,
    )
