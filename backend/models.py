"""SQLAlchemy ORM models for hotels, floors, rooms and coordinate history."""

import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Float, Integer, DateTime, Text, Numeric, JSON, ForeignKey,
    UniqueConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import relationship
from database import Base
from services.coordinate_engine import NormalizedRectangle
import enum


def generate_uuid():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


# 12 significant digits, 10 after the point; read back as plain floats
Coordinate = Numeric(12, 10, asdecimal=False)


class HotelStatus(enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class FloorStatus(enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"


class RoomType(enum.Enum):
    STANDARD = "standard"
    DELUXE = "deluxe"
    SUITE = "suite"
    PRESIDENTIAL = "presidential"
    ACCESSIBLE = "accessible"


class BedType(enum.Enum):
    SINGLE = "single"
    DOUBLE = "double"
    QUEEN = "queen"
    KING = "king"
    TWIN = "twin"
    SOFA_BED = "sofa_bed"


class RoomStatus(enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"
    OUT_OF_ORDER = "out_of_order"
    CLEANING = "cleaning"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    slug = Column(String(300), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    image_width = Column(Integer, nullable=False)  # pixels
    image_height = Column(Integer, nullable=False)  # pixels
    status = Column(SAEnum(HotelStatus, values_callable=_enum_values), default=HotelStatus.ACTIVE)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    floors = relationship(
        "Floor", back_populates="hotel",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by=lambda: [Floor.display_order, Floor.floor_number],
    )

    @property
    def image_aspect_ratio(self):
        if not self.image_height:
            return None
        return self.image_width / self.image_height


class Floor(Base):
    __tablename__ = "floors"
    __table_args__ = (
        UniqueConstraint("hotel_id", "floor_number", name="unique_hotel_floor_number"),
    )

    id = Column(String, primary_key=True, default=generate_uuid)
    hotel_id = Column(String, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False, index=True)
    floor_number = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    display_order = Column(Integer, nullable=False, default=0)
    floor_area_sqm = Column(Float, nullable=True)
    status = Column(SAEnum(FloorStatus, values_callable=_enum_values), default=FloorStatus.ACTIVE)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    hotel = relationship("Hotel", back_populates="floors")
    rooms = relationship(
        "Room", back_populates="floor",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by=lambda: Room.room_number,
    )


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("floor_id", "room_number", name="unique_floor_room_number"),
    )

    id = Column(String, primary_key=True, default=generate_uuid)
    floor_id = Column(String, ForeignKey("floors.id", ondelete="CASCADE"), nullable=False, index=True)
    room_number = Column(String(50), nullable=False)
    room_type = Column(SAEnum(RoomType, values_callable=_enum_values), default=RoomType.STANDARD, index=True)
    bed_type = Column(SAEnum(BedType, values_callable=_enum_values), default=BedType.DOUBLE)
    capacity = Column(Integer, default=2)
    status = Column(SAEnum(RoomStatus, values_callable=_enum_values), default=RoomStatus.AVAILABLE, index=True)

    # Normalized coordinates (fractions of the floor-plan image)
    x_coordinate = Column(Coordinate, nullable=False)
    y_coordinate = Column(Coordinate, nullable=False)
    width = Column(Coordinate, nullable=False)
    height = Column(Coordinate, nullable=False)

    base_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    currency = Column(String(3), default="USD")
    room_metadata = Column("metadata", JSON, default=dict)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    floor = relationship("Floor", back_populates="rooms")
    coordinate_history = relationship(
        "RoomCoordinateHistory", back_populates="room",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by=lambda: RoomCoordinateHistory.changed_at.desc(),
    )

    @property
    def rectangle(self) -> NormalizedRectangle:
        return NormalizedRectangle(
            x=float(self.x_coordinate),
            y=float(self.y_coordinate),
            width=float(self.width),
            height=float(self.height),
        )

    @rectangle.setter
    def rectangle(self, rect: NormalizedRectangle):
        self.x_coordinate = rect.x
        self.y_coordinate = rect.y
        self.width = rect.width
        self.height = rect.height

    @property
    def x_end(self):
        return self.rectangle.x_end

    @property
    def y_end(self):
        return self.rectangle.y_end

    @property
    def center_x(self):
        return self.rectangle.center_x

    @property
    def center_y(self):
        return self.rectangle.center_y

    @property
    def area(self):
        return self.rectangle.area


class RoomCoordinateHistory(Base):
    __tablename__ = "room_coordinate_history"

    id = Column(String, primary_key=True, default=generate_uuid)
    room_id = Column(String, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)

    old_x_coordinate = Column(Coordinate, nullable=True)
    old_y_coordinate = Column(Coordinate, nullable=True)
    old_width = Column(Coordinate, nullable=True)
    old_height = Column(Coordinate, nullable=True)
    new_x_coordinate = Column(Coordinate, nullable=True)
    new_y_coordinate = Column(Coordinate, nullable=True)
    new_width = Column(Coordinate, nullable=True)
    new_height = Column(Coordinate, nullable=True)

    change_reason = Column(String(255), nullable=True)
    changed_at = Column(DateTime, default=utcnow, index=True)

    room = relationship("Room", back_populates="coordinate_history")
