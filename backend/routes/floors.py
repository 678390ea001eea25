from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession
from database import get_db
from schemas import FloorCreate, FloorUpdate, FloorSummary, FloorOut
from services.hotels import get_hotel
from services.floors import (
    DuplicateFloorNumberError,
    FloorNotEmptyError,
    create_floor,
    delete_floor,
    get_floor,
    list_floors,
    update_floor,
)

router = APIRouter(prefix="/api", tags=["floors"])


@router.get("/hotels/{hotel_id}/floors", response_model=list[FloorSummary])
async def get_hotel_floors(hotel_id: str, db: AsyncSession = Depends(get_db)):
    """Floors of a hotel by display order, then floor number."""
    if not await get_hotel(db, hotel_id):
        raise HTTPException(status_code=404, detail="Hotel not found")
    return await list_floors(db, hotel_id)


@router.post("/hotels/{hotel_id}/floors", response_model=FloorSummary, status_code=201)
async def post_floor(hotel_id: str, req: FloorCreate, db: AsyncSession = Depends(get_db)):
    if not await get_hotel(db, hotel_id):
        raise HTTPException(status_code=404, detail="Hotel not found")
    try:
        return await create_floor(db, hotel_id, req.model_dump())
    except DuplicateFloorNumberError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/floors/{floor_id}", response_model=FloorOut)
async def get_floor_detail(floor_id: str, db: AsyncSession = Depends(get_db)):
    floor = await get_floor(db, floor_id, with_rooms=True)
    if not floor:
        raise HTTPException(status_code=404, detail="Floor not found")
    return floor


@router.put("/floors/{floor_id}", response_model=FloorSummary)
async def put_floor(floor_id: str, req: FloorUpdate, db: AsyncSession = Depends(get_db)):
    floor = await get_floor(db, floor_id)
    if not floor:
        raise HTTPException(status_code=404, detail="Floor not found")
    return await update_floor(db, floor, req.model_dump(exclude_unset=True))


@router.delete("/floors/{floor_id}", status_code=204)
async def remove_floor(floor_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a floor; refused while it still has rooms."""
    floor = await get_floor(db, floor_id)
    if not floor:
        raise HTTPException(status_code=404, detail="Floor not found")
    try:
        await delete_floor(db, floor)
    except FloorNotEmptyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Response(status_code=204)
