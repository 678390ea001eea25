"""
Room routes.

Placement changes (create, move/resize) run through the coordinate
engine: malformed rectangles answer 400 with every problem listed,
rectangles that collide with other rooms on the floor answer 409 with
the blocking rooms and how much they overlap.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from database import get_db
from schemas import (
    RoomCreate,
    RoomUpdate,
    RoomCoordinatesUpdate,
    RoomOut,
    CoordinateHistoryOut,
    NeighborsOut,
)
from services.coordinate_engine import DEFAULT_NEIGHBOR_DISTANCE, Point
from services.floors import get_floor
from services.rooms import (
    CoordinateValidationError,
    DuplicateRoomNumberError,
    RoomOverlapError,
    create_room,
    delete_room,
    find_room_at,
    find_room_neighbors,
    get_coordinate_history,
    get_room,
    list_rooms,
    update_room,
    update_room_coordinates,
)

router = APIRouter(prefix="/api", tags=["rooms"])


def _placement_error(e: Exception) -> HTTPException:
    """Map a rejected placement to its HTTP error."""
    if isinstance(e, CoordinateValidationError):
        return HTTPException(
            status_code=400,
            detail={"message": "Validation failed", "errors": e.errors},
        )
    if isinstance(e, RoomOverlapError):
        return HTTPException(
            status_code=409,
            detail={"message": str(e), "overlapping_rooms": e.conflicts},
        )
    return HTTPException(status_code=409, detail=str(e))


async def _require_room(db: AsyncSession, room_id: str):
    room = await get_room(db, room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


@router.get("/floors/{floor_id}/rooms", response_model=list[RoomOut])
async def get_floor_rooms(floor_id: str, db: AsyncSession = Depends(get_db)):
    if not await get_floor(db, floor_id):
        raise HTTPException(status_code=404, detail="Floor not found")
    return await list_rooms(db, floor_id)


@router.post("/floors/{floor_id}/rooms", response_model=RoomOut, status_code=201)
async def post_room(floor_id: str, req: RoomCreate, db: AsyncSession = Depends(get_db)):
    """Place a new room on a floor."""
    floor = await get_floor(db, floor_id)
    if not floor:
        raise HTTPException(status_code=404, detail="Floor not found")
    try:
        return await create_room(db, floor, req.model_dump())
    except (CoordinateValidationError, RoomOverlapError, DuplicateRoomNumberError) as e:
        raise _placement_error(e)


@router.get("/floors/{floor_id}/rooms/at", response_model=RoomOut)
async def get_room_at_point(
    floor_id: str,
    x: float = Query(..., description="Normalized x of the point"),
    y: float = Query(..., description="Normalized y of the point"),
    db: AsyncSession = Depends(get_db),
):
    """Room whose rectangle contains the point (border included)."""
    if not await get_floor(db, floor_id):
        raise HTTPException(status_code=404, detail="Floor not found")
    room = await find_room_at(db, floor_id, Point(x, y))
    if not room:
        raise HTTPException(status_code=404, detail="No room at this point")
    return room


@router.get("/rooms/{room_id}", response_model=RoomOut)
async def get_room_detail(room_id: str, db: AsyncSession = Depends(get_db)):
    return await _require_room(db, room_id)


@router.put("/rooms/{room_id}", response_model=RoomOut)
async def put_room(room_id: str, req: RoomUpdate, db: AsyncSession = Depends(get_db)):
    """Update room details; coordinates go through PATCH /coordinates."""
    room = await _require_room(db, room_id)
    try:
        return await update_room(db, room, req.model_dump(exclude_unset=True))
    except DuplicateRoomNumberError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/rooms/{room_id}/coordinates", response_model=RoomOut)
async def patch_room_coordinates(room_id: str, req: RoomCoordinatesUpdate,
                                 db: AsyncSession = Depends(get_db)):
    """Move or resize a room (drag & drop)."""
    room = await _require_room(db, room_id)
    try:
        return await update_room_coordinates(
            db, room, req.coordinates.model_dump(), change_reason=req.change_reason,
        )
    except (CoordinateValidationError, RoomOverlapError) as e:
        raise _placement_error(e)


@router.get("/rooms/{room_id}/history", response_model=list[CoordinateHistoryOut])
async def get_room_history(room_id: str, db: AsyncSession = Depends(get_db)):
    """Coordinate changes of a room, newest first."""
    await _require_room(db, room_id)
    return await get_coordinate_history(db, room_id)


@router.get("/rooms/{room_id}/neighbors", response_model=NeighborsOut)
async def get_room_neighbors(
    room_id: str,
    max_distance: float = Query(DEFAULT_NEIGHBOR_DISTANCE, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Rooms on the same floor whose centres lie within max_distance."""
    room = await _require_room(db, room_id)
    neighbors = await find_room_neighbors(db, room, max_distance)
    return {"room_id": room.id, "max_distance": max_distance, "neighbors": neighbors}


@router.delete("/rooms/{room_id}", status_code=204)
async def remove_room(room_id: str, db: AsyncSession = Depends(get_db)):
    room = await _require_room(db, room_id)
    await delete_room(db, room)
    return Response(status_code=204)
