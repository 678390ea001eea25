"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from models import HotelStatus, FloorStatus, RoomType, BedType, RoomStatus


# ---------- Coordinates ----------
class CoordinatesIn(BaseModel):
    """Normalized rectangle. Range checks are left to the coordinate validator
    so that every problem is reported together."""
    x: float
    y: float
    width: float
    height: float


class PixelCoordinatesIn(BaseModel):
    x: float
    y: float
    width: float
    height: float
    image_width: float = Field(..., gt=0)
    image_height: float = Field(..., gt=0)


class DenormalizeRequest(BaseModel):
    coordinates: CoordinatesIn
    image_width: float = Field(..., gt=0)
    image_height: float = Field(..., gt=0)
    round_pixels: bool = True


class PixelCoordinatesOut(BaseModel):
    x: float
    y: float
    width: float
    height: float
    image_width: float
    image_height: float


class ValidationOut(BaseModel):
    valid: bool
    errors: list[str] = []


# ---------- Hotel ----------
class HotelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = None
    image_width: int = Field(..., gt=0, description="Floor-plan image width in pixels")
    image_height: int = Field(..., gt=0, description="Floor-plan image height in pixels")


class HotelUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[HotelStatus] = None


class HotelSummary(BaseModel):
    id: str
    name: str
    slug: str
    image_url: Optional[str]
    image_width: int
    image_height: int
    status: HotelStatus
    created_at: datetime

    class Config:
        from_attributes = True


class HotelList(BaseModel):
    hotels: list[HotelSummary]
    page: int
    limit: int
    total: int
    total_pages: int


class HotelStats(BaseModel):
    hotel_id: str
    hotel_name: str
    total_floors: int
    total_rooms: int
    rooms_by_type: dict[str, int] = {}
    rooms_by_status: dict[str, int] = {}
    occupancy_rate: str


# ---------- Floor ----------
class FloorCreate(BaseModel):
    floor_number: int = Field(..., ge=-10, le=200)
    name: str = Field(..., min_length=1, max_length=255)
    display_order: Optional[int] = None
    floor_area_sqm: Optional[float] = Field(None, gt=0)
    notes: Optional[str] = None


class FloorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    display_order: Optional[int] = None
    floor_area_sqm: Optional[float] = Field(None, gt=0)
    status: Optional[FloorStatus] = None
    notes: Optional[str] = None


class FloorSummary(BaseModel):
    id: str
    hotel_id: str
    floor_number: int
    name: str
    display_order: int
    floor_area_sqm: Optional[float]
    status: FloorStatus
    notes: Optional[str]

    class Config:
        from_attributes = True


# ---------- Room ----------
class RoomCreate(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=50)
    room_type: RoomType = RoomType.STANDARD
    bed_type: BedType = BedType.DOUBLE
    capacity: int = Field(2, ge=1, le=20)
    coordinates: CoordinatesIn
    base_price: Optional[float] = Field(None, gt=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    metadata: dict = {}


class RoomUpdate(BaseModel):
    room_number: Optional[str] = Field(None, min_length=1, max_length=50)
    room_type: Optional[RoomType] = None
    bed_type: Optional[BedType] = None
    capacity: Optional[int] = Field(None, ge=1, le=20)
    status: Optional[RoomStatus] = None
    base_price: Optional[float] = Field(None, gt=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    metadata: Optional[dict] = None


class RoomCoordinatesUpdate(BaseModel):
    coordinates: CoordinatesIn
    change_reason: Optional[str] = Field(None, max_length=255)


class RoomOut(BaseModel):
    id: str
    floor_id: str
    room_number: str
    room_type: RoomType
    bed_type: BedType
    capacity: int
    status: RoomStatus
    x_coordinate: float
    y_coordinate: float
    width: float
    height: float
    x_end: float
    y_end: float
    center_x: float
    center_y: float
    area: float
    base_price: Optional[float]
    currency: str
    metadata: dict = Field({}, validation_alias="room_metadata")

    class Config:
        from_attributes = True


class FloorOut(FloorSummary):
    rooms: list[RoomOut] = []


class HotelOut(HotelSummary):
    description: Optional[str]
    image_aspect_ratio: Optional[float]
    floors: list[FloorOut] = []


class CoordinateHistoryOut(BaseModel):
    id: str
    room_id: str
    old_x_coordinate: Optional[float]
    old_y_coordinate: Optional[float]
    old_width: Optional[float]
    old_height: Optional[float]
    new_x_coordinate: Optional[float]
    new_y_coordinate: Optional[float]
    new_width: Optional[float]
    new_height: Optional[float]
    change_reason: Optional[str]
    changed_at: datetime

    class Config:
        from_attributes = True


class OverlappingRoomOut(BaseModel):
    id: str
    room_number: str
    overlap_percentage: float


class NeighborsOut(BaseModel):
    room_id: str
    max_distance: float
    neighbors: list[RoomOut]
