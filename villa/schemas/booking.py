from datetime import date, datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from villa.models import Booking, BookingStatus, PaymentStatus
from villa.schemas.base import CamelModel, blank_to_none


class AvailabilityRequest(CamelModel):
    check_in: Optional[date] = None
    check_out: Optional[date] = None


class AvailabilityOut(CamelModel):
    available: bool
    conflicting_count: int
    has_blackout: bool
    # Older key names, still read by existing clients
    conflicting_bookings: int
    unavailable_dates: bool


class DayStateOut(CamelModel):
    available: bool
    booked: bool
    unavailable: bool


class PriceRequest(CamelModel):
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests: Optional[int] = None


class PriceBreakdown(CamelModel):
    accommodation: float
    cleaning: float
    taxes: float
    total: float


class PriceOut(CamelModel):
    nights: int
    price_per_night: float
    subtotal: float
    cleaning_fee: float
    taxes: float
    total: float
    breakdown: PriceBreakdown


class BookingCreate(CamelModel):
    # Presence is checked by the booking service so that a missing field
    # yields the single "Missing required fields" message
    guest_name: Optional[str] = Field(default=None, max_length=120)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=32)
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests: Optional[int] = Field(default=None, ge=1, le=8)
    special_requests: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("guest_name", "email", "phone", "special_requests", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower() if v else v


class BookingSummary(CamelModel):
    id: int
    guest_name: str
    check_in: date
    check_out: date
    guests: int
    total_price: float
    status: BookingStatus

    @classmethod
    def from_model(cls, booking: Booking) -> "BookingSummary":
        return cls(
            id=booking.id,
            guest_name=booking.guest_name,
            check_in=booking.check_in,
            check_out=booking.check_out,
            guests=booking.guests,
            total_price=booking.total_price,
            status=booking.status,
        )


class BookingCreatedOut(CamelModel):
    message: str = "Booking created successfully"
    booking: BookingSummary


class BookingOut(BookingSummary):
    email: str
    phone: str
    special_requests: Optional[str] = None
    payment_status: PaymentStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, booking: Booking) -> "BookingOut":
        return cls(
            id=booking.id,
            guest_name=booking.guest_name,
            email=booking.email,
            phone=booking.phone,
            check_in=booking.check_in,
            check_out=booking.check_out,
            guests=booking.guests,
            total_price=booking.total_price,
            status=booking.status,
            payment_status=booking.payment_status,
            special_requests=booking.special_requests,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookingPage(CamelModel):
    bookings: list[BookingOut]
    total_pages: int
    current_page: int
    total: int


class BookingStatusUpdate(CamelModel):
    status: BookingStatus
