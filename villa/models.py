from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from villa.database import Base

SETTINGS_ROW_ID = 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# Statuses that hold the dates
ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class GalleryCategory(str, Enum):
    EXTERIOR = "exterior"
    INTERIOR = "interior"
    BEDROOM = "bedroom"
    BATHROOM = "bathroom"
    KITCHEN = "kitchen"
    VIEW = "view"


class VillaSettings(Base):
    """Single-row configuration for the whole property (id is always 1)."""

    __tablename__ = "villa_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SETTINGS_ROW_ID)
    price_per_night: Mapped[float] = mapped_column(Float, default=250)
    max_guests: Mapped[int] = mapped_column(Integer, default=8)
    cleaning_fee: Mapped[float] = mapped_column(Float, default=50)
    tax_rate: Mapped[float] = mapped_column(Float, default=0.12)
    min_stay_nights: Mapped[int] = mapped_column(Integer, default=2)

    blackout_dates: Mapped[list["BlackoutDate"]] = relationship(
        back_populates="settings",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="BlackoutDate.day",
    )
    seasonal_rates: Mapped[list["SeasonalRate"]] = relationship(
        back_populates="settings",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="SeasonalRate.position",
    )

    @property
    def unavailable_dates(self) -> list[date]:
        return [b.day for b in self.blackout_dates]


class BlackoutDate(Base):
    __tablename__ = "blackout_dates"
    __table_args__ = (UniqueConstraint("settings_id", "day"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    settings_id: Mapped[int] = mapped_column(ForeignKey("villa_settings.id"), index=True)
    day: Mapped[date] = mapped_column(Date)

    settings: Mapped["VillaSettings"] = relationship(back_populates="blackout_dates")


class SeasonalRate(Base):
    __tablename__ = "seasonal_rates"

    id: Mapped[int] = mapped_column(primary_key=True)
    settings_id: Mapped[int] = mapped_column(ForeignKey("villa_settings.id"), index=True)
    position: Mapped[int] = mapped_column(Integer, default=0)  # Order as submitted
    start_date: Mapped[date] = mapped_column(Date)
    end_date: Mapped[date] = mapped_column(Date)
    price_per_night: Mapped[float] = mapped_column(Float)
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    settings: Mapped["VillaSettings"] = relationship(back_populates="seasonal_rates")


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Guest
    guest_name: Mapped[str] = mapped_column(String(120))
    email: Mapped[str] = mapped_column(String(254), index=True)
    phone: Mapped[str] = mapped_column(String(32))

    # Stay
    check_in: Mapped[date] = mapped_column(Date, index=True)
    check_out: Mapped[date] = mapped_column(Date, index=True)
    guests: Mapped[int] = mapped_column(Integer)
    total_price: Mapped[float] = mapped_column(Float)
    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Lifecycle
    status: Mapped[BookingStatus] = mapped_column(
        SQLEnum(BookingStatus), default=BookingStatus.PENDING, index=True
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus), default=PaymentStatus.PENDING
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )


class GalleryImage(Base):
    __tablename__ = "gallery_images"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    category: Mapped[GalleryCategory] = mapped_column(
        SQLEnum(GalleryCategory), default=GalleryCategory.INTERIOR, index=True
    )
    order: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
