import logging
import math
import re
import uuid
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from models import Hotel, Floor, RoomStatus

logger = logging.getLogger(__name__)


def slugify(text: str) -> str:
    """Lower-case, ASCII-only, hyphen-separated form of *text*."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "hotel"


async def create_hotel(db: AsyncSession, data: dict) -> Hotel:
    """Create a hotel; the floor-plan image dimensions come from the caller."""
    hotel = Hotel(
        name=data["name"].strip(),
        slug=f"{slugify(data['name'])}-{uuid.uuid4().hex[:8]}",
        description=data.get("description"),
        image_url=data.get("image_url"),
        image_width=int(data["image_width"]),
        image_height=int(data["image_height"]),
    )
    db.add(hotel)
    await db.commit()
    await db.refresh(hotel)
    logger.info("Hotel created: %s (%s)", hotel.id, hotel.name)
    return hotel


async def list_hotels(db: AsyncSession, page: int = 1, limit: int = 10,
                      status=None, search: str = None):
    """Return ``(hotels, total)`` for one page, newest first."""
    query = select(Hotel)
    count_query = select(func.count()).select_from(Hotel)

    filters = []
    if status is not None:
        filters.append(Hotel.status == status)
    if search:
        pattern = f"%{search}%"
        filters.append(or_(Hotel.name.ilike(pattern), Hotel.description.ilike(pattern)))
    if filters:
        query = query.where(*filters)
        count_query = count_query.where(*filters)

    total = (await db.execute(count_query)).scalar_one()
    result = await db.execute(
        query.order_by(Hotel.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return result.scalars().all(), total


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


async def get_hotel(db: AsyncSession, hotel_id: str, with_rooms: bool = False):
    query = select(Hotel).where(Hotel.id == hotel_id)
    if with_rooms:
        query = query.options(selectinload(Hotel.floors).selectinload(Floor.rooms))
    result = await db.execute(query)
    return result.scalars().first()


async def update_hotel(db: AsyncSession, hotel: Hotel, changes: dict) -> Hotel:
    if changes.get("name") is not None:
        hotel.name = changes["name"].strip()
        hotel.slug = f"{slugify(hotel.name)}-{uuid.uuid4().hex[:8]}"
    if "description" in changes:
        hotel.description = changes["description"]
    if changes.get("status") is not None:
        hotel.status = changes["status"]

    await db.commit()
    await db.refresh(hotel)
    logger.info("Hotel updated: %s", hotel.id)
    return hotel


async def delete_hotel(db: AsyncSession, hotel: Hotel) -> None:
    """Delete a hotel; floors and rooms go with it."""
    hotel_id = hotel.id
    await db.delete(hotel)
    await db.commit()
    logger.info("Hotel deleted: %s", hotel_id)


def hotel_stats(hotel: Hotel) -> dict:
    """Room counts by type and status for a hotel loaded with floors and rooms."""
    floors = hotel.floors or []
    rooms = [room for floor in floors for room in floor.rooms]

    rooms_by_type = {}
    rooms_by_status = {}
    for room in rooms:
        rooms_by_type[room.room_type.value] = rooms_by_type.get(room.room_type.value, 0) + 1
        rooms_by_status[room.status.value] = rooms_by_status.get(room.status.value, 0) + 1

    total_rooms = len(rooms)
    occupied = rooms_by_status.get(RoomStatus.OCCUPIED.value, 0)
    occupancy = f"{occupied / total_rooms * 100:.2f}%" if total_rooms else "0%"

    return {
        "hotel_id": hotel.id,
        "hotel_name": hotel.name,
        "total_floors": len(floors),
        "total_rooms": total_rooms,
        "rooms_by_type": rooms_by_type,
        "rooms_by_status": rooms_by_status,
        "occupancy_rate": occupancy,
    }
