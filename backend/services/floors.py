import logging
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from models import Floor, Room

logger = logging.getLogger(__name__)


class DuplicateFloorNumberError(Exception):
    def __init__(self, floor_number: int):
        self.floor_number = floor_number
        super().__init__(f"Floor number {floor_number} already exists for this hotel")


class FloorNotEmptyError(Exception):
    def __init__(self, room_count: int):
        self.room_count = room_count
        super().__init__(f"Cannot delete floor with {room_count} rooms. Delete rooms first.")


async def list_floors(db: AsyncSession, hotel_id: str):
    result = await db.execute(
        select(Floor)
        .where(Floor.hotel_id == hotel_id)
        .order_by(Floor.display_order, Floor.floor_number)
    )
    return result.scalars().all()


async def get_floor(db: AsyncSession, floor_id: str, with_rooms: bool = False):
    query = select(Floor).where(Floor.id == floor_id)
    if with_rooms:
        query = query.options(selectinload(Floor.rooms))
    result = await db.execute(query)
    return result.scalars().first()


async def create_floor(db: AsyncSession, hotel_id: str, data: dict) -> Floor:
    """Create a floor; floor numbers are unique within a hotel."""
    existing = await db.execute(
        select(Floor.id).where(
            Floor.hotel_id == hotel_id,
            Floor.floor_number == data["floor_number"],
        )
    )
    if existing.first() is not None:
        raise DuplicateFloorNumberError(data["floor_number"])

    display_order = data.get("display_order")
    floor = Floor(
        hotel_id=hotel_id,
        floor_number=data["floor_number"],
        name=data["name"].strip(),
        display_order=display_order if display_order is not None else data["floor_number"],
        floor_area_sqm=data.get("floor_area_sqm"),
        notes=data.get("notes"),
    )
    db.add(floor)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        message = str(e.orig)
        if "unique_hotel_floor_number" in message or "floors.floor_number" in message:
            raise DuplicateFloorNumberError(data["floor_number"]) from e
        raise
    await db.refresh(floor)
    logger.info("Floor created: %s (hotel %s)", floor.id, hotel_id)
    return floor


async def update_floor(db: AsyncSession, floor: Floor, changes: dict) -> Floor:
    for field in ("name", "display_order", "floor_area_sqm", "status", "notes"):
        if changes.get(field) is not None:
            setattr(floor, field, changes[field])

    await db.commit()
    await db.refresh(floor)
    logger.info("Floor updated: %s", floor.id)
    return floor


async def delete_floor(db: AsyncSession, floor: Floor) -> None:
    """Delete an empty floor."""
    room_count = (await db.execute(
        select(func.count()).select_from(Room).where(Room.floor_id == floor.id)
    )).scalar_one()
    if room_count > 0:
        raise FloorNotEmptyError(room_count)

    floor_id = floor.id
    await db.delete(floor)
    await db.commit()
    logger.info("Floor deleted: %s", floor_id)
