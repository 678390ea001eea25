"""
Room persistence around the coordinate engine.

Every placement change follows the same path: lock the floor, read the
sibling rooms, validate the rectangle, check it for overlap, then write.
The floor lock keeps two writers on one floor from both passing the
overlap check against a snapshot that misses the other's room.
"""

import logging
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from models import Floor, Room, RoomCoordinateHistory
from services.coordinate_engine import (
    DEFAULT_NEIGHBOR_DISTANCE,
    NormalizedRectangle,
    OverlapResult,
    Point,
    check_room_overlap,
    find_neighbors,
    find_room_at_point,
    validate_room_coordinates,
)

logger = logging.getLogger(__name__)


class CoordinateValidationError(ValueError):
    """The rectangle itself is malformed; ``errors`` lists every problem."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class RoomOverlapError(Exception):
    """The rectangle is valid but the spot is taken by other rooms."""

    def __init__(self, result: OverlapResult, rooms_by_id: dict):
        self.result = result
        self.conflicts = [
            {
                "id": room_id,
                "room_number": rooms_by_id[room_id].room_number,
                "overlap_percentage": result.overlap_percentages[room_id],
            }
            for room_id in result.overlapping_ids
        ]
        numbers = ", ".join(c["room_number"] for c in self.conflicts)
        super().__init__(f"Room overlaps with existing rooms: {numbers}")


class DuplicateRoomNumberError(Exception):
    def __init__(self, room_number: str):
        self.room_number = room_number
        super().__init__(f"Room number {room_number} already exists on this floor")


def is_room_number_conflict(error: IntegrityError) -> bool:
    """True when *error* is the unique (floor, room number) constraint firing."""
    message = str(error.orig)
    # PostgreSQL names the constraint, SQLite names the columns
    return "unique_floor_room_number" in message or (
        "UNIQUE" in message and "rooms.room_number" in message
    )


# ---------- Queries ----------

async def list_rooms(db: AsyncSession, floor_id: str) -> List[Room]:
    """Rooms of one floor in a stable order (room number, then id)."""
    result = await db.execute(
        select(Room)
        .where(Room.floor_id == floor_id)
        .order_by(Room.room_number, Room.id)
    )
    return list(result.scalars().all())


async def get_room(db: AsyncSession, room_id: str) -> Optional[Room]:
    result = await db.execute(select(Room).where(Room.id == room_id))
    return result.scalars().first()


async def get_coordinate_history(db: AsyncSession, room_id: str) -> List[RoomCoordinateHistory]:
    result = await db.execute(
        select(RoomCoordinateHistory)
        .where(RoomCoordinateHistory.room_id == room_id)
        .order_by(RoomCoordinateHistory.changed_at.desc())
    )
    return list(result.scalars().all())


async def find_room_at(db: AsyncSession, floor_id: str, point: Point) -> Optional[Room]:
    """Room on the floor containing *point*; ties go to the lowest room number."""
    rooms = await list_rooms(db, floor_id)
    match = find_room_at_point(point, [(room.id, room.rectangle) for room in rooms])
    if match is None:
        return None
    rooms_by_id = {room.id: room for room in rooms}
    return rooms_by_id[match[0]]


async def find_room_neighbors(db: AsyncSession, room: Room,
                              max_distance: float = DEFAULT_NEIGHBOR_DISTANCE) -> List[Room]:
    siblings = await list_rooms(db, room.floor_id)
    rooms_by_id = {other.id: other for other in siblings}
    neighbors = find_neighbors(
        room.id,
        room.rectangle,
        [(other.id, other.rectangle) for other in siblings],
        max_distance,
    )
    return [rooms_by_id[room_id] for room_id, _ in neighbors]


# ---------- Placement ----------

async def _lock_floor(db: AsyncSession, floor_id: str) -> None:
    # no-op on SQLite, a row lock on databases that support it
    await db.execute(select(Floor.id).where(Floor.id == floor_id).with_for_update())


async def _room_number_taken(db: AsyncSession, floor_id: str, room_number: str) -> bool:
    result = await db.execute(
        select(Room.id).where(Room.floor_id == floor_id, Room.room_number == room_number)
    )
    return result.first() is not None


async def _check_placement(db: AsyncSession, floor_id: str, rect: NormalizedRectangle,
                           exclude_id: Optional[str] = None) -> None:
    """Raise unless *rect* is valid and clear of the floor's other rooms."""
    validation = validate_room_coordinates(rect)
    if not validation.valid:
        raise CoordinateValidationError(validation.errors)

    siblings = await list_rooms(db, floor_id)
    overlap = check_room_overlap(
        rect,
        [(room.id, room.rectangle) for room in siblings],
        exclude_id=exclude_id,
    )
    if overlap.has_overlap:
        error = RoomOverlapError(overlap, {room.id: room for room in siblings})
        logger.warning("Placement rejected on floor %s: %s", floor_id, error)
        raise error


async def create_room(db: AsyncSession, floor: Floor, data: dict) -> Room:
    """Validate, overlap-check and insert a room in one transaction."""
    rect = NormalizedRectangle.from_dict(data["coordinates"])
    room_number = data["room_number"].strip()

    try:
        await _lock_floor(db, floor.id)
        if await _room_number_taken(db, floor.id, room_number):
            raise DuplicateRoomNumberError(room_number)
        await _check_placement(db, floor.id, rect)

        room = Room(
            floor_id=floor.id,
            room_number=room_number,
            room_type=data.get("room_type"),
            bed_type=data.get("bed_type"),
            capacity=data.get("capacity"),
            base_price=data.get("base_price"),
            currency=data.get("currency"),
            room_metadata=data.get("metadata") or {},
        )
        room.rectangle = rect
        db.add(room)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if is_room_number_conflict(e):
            # lost a race for the room number against another writer
            raise DuplicateRoomNumberError(room_number) from e
        raise
    except Exception:
        await db.rollback()
        raise

    await db.refresh(room)
    logger.info("Room created: %s (floor %s, number %s)", room.id, floor.id, room.room_number)
    return room


async def update_room(db: AsyncSession, room: Room, changes: dict) -> Room:
    """Update the non-geometric fields of a room."""
    new_number = changes.get("room_number")
    if new_number is not None:
        new_number = new_number.strip()
        if new_number != room.room_number and await _room_number_taken(db, room.floor_id, new_number):
            raise DuplicateRoomNumberError(new_number)
        room.room_number = new_number

    for field in ("room_type", "bed_type", "capacity", "status", "base_price", "currency"):
        if changes.get(field) is not None:
            setattr(room, field, changes[field])
    if changes.get("metadata") is not None:
        room.room_metadata = changes["metadata"]

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if new_number is not None and is_room_number_conflict(e):
            raise DuplicateRoomNumberError(new_number) from e
        raise
    await db.refresh(room)
    logger.info("Room updated: %s", room.id)
    return room


async def update_room_coordinates(db: AsyncSession, room: Room, coordinates: dict,
                                  change_reason: Optional[str] = None) -> Room:
    """Move or resize a room, checking overlap against every room but itself."""
    rect = NormalizedRectangle.from_dict(coordinates)
    old = room.rectangle

    try:
        await _lock_floor(db, room.floor_id)
        await _check_placement(db, room.floor_id, rect, exclude_id=room.id)

        db.add(RoomCoordinateHistory(
            room_id=room.id,
            old_x_coordinate=old.x,
            old_y_coordinate=old.y,
            old_width=old.width,
            old_height=old.height,
            new_x_coordinate=rect.x,
            new_y_coordinate=rect.y,
            new_width=rect.width,
            new_height=rect.height,
            change_reason=change_reason,
        ))
        room.rectangle = rect
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(room)
    logger.info("Room coordinates updated: %s", room.id)
    return room


async def delete_room(db: AsyncSession, room: Room) -> None:
    room_id = room.id
    await db.delete(room)
    await db.commit()
    logger.info("Room deleted: %s", room_id)
