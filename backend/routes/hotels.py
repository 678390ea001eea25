from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from database import get_db
from models import HotelStatus
from schemas import HotelCreate, HotelUpdate, HotelSummary, HotelOut, HotelList, HotelStats
from services.hotels import (
    create_hotel,
    list_hotels,
    get_hotel,
    update_hotel,
    delete_hotel,
    hotel_stats,
    total_pages,
)

router = APIRouter(prefix="/api/hotels", tags=["hotels"])


@router.get("", response_model=HotelList)
async def get_hotels(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    status: Optional[HotelStatus] = None,
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """List hotels, newest first, with optional status filter and name search."""
    hotels, total = await list_hotels(db, page=page, limit=limit, status=status, search=search)
    return {
        "hotels": hotels,
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages(total, limit),
    }


@router.post("", response_model=HotelSummary, status_code=201)
async def post_hotel(req: HotelCreate, db: AsyncSession = Depends(get_db)):
    """Register a hotel and the size of its floor-plan image."""
    return await create_hotel(db, req.model_dump())


@router.get("/{hotel_id}", response_model=HotelOut)
async def get_hotel_detail(hotel_id: str, db: AsyncSession = Depends(get_db)):
    """Hotel with its floors and their rooms."""
    hotel = await get_hotel(db, hotel_id, with_rooms=True)
    if not hotel:
        raise HTTPException(status_code=404, detail="Hotel not found")
    return hotel


@router.get("/{hotel_id}/stats", response_model=HotelStats)
async def get_hotel_stats(hotel_id: str, db: AsyncSession = Depends(get_db)):
    hotel = await get_hotel(db, hotel_id, with_rooms=True)
    if not hotel:
        raise HTTPException(status_code=404, detail="Hotel not found")
    return hotel_stats(hotel)


@router.put("/{hotel_id}", response_model=HotelSummary)
async def put_hotel(hotel_id: str, req: HotelUpdate, db: AsyncSession = Depends(get_db)):
    hotel = await get_hotel(db, hotel_id)
    if not hotel:
        raise HTTPException(status_code=404, detail="Hotel not found")
    return await update_hotel(db, hotel, req.model_dump(exclude_unset=True))


@router.delete("/{hotel_id}", status_code=204)
async def remove_hotel(hotel_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a hotel together with its floors and rooms."""
    hotel = await get_hotel(db, hotel_id)
    if not hotel:
        raise HTTPException(status_code=404, detail="Hotel not found")
    await delete_hotel(db, hotel)
    return Response(status_code=204)
