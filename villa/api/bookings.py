from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from villa.database import get_db
from villa.models import BookingStatus
from villa.schemas.booking import (
    AvailabilityOut,
    AvailabilityRequest,
    BookingCreate,
    BookingCreatedOut,
    BookingOut,
    BookingPage,
    BookingStatusUpdate,
    BookingSummary,
    DayStateOut,
    PriceBreakdown,
    PriceOut,
    PriceRequest,
)
from villa.services.booking_service import BookingService, booking_service

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("/check-availability", response_model=AvailabilityOut)
async def check_availability(payload: AvailabilityRequest, db: AsyncSession = Depends(get_db)):
    verdict = await booking_service.check_availability(db, payload.check_in, payload.check_out)
    return AvailabilityOut(
        available=verdict.available,
        conflicting_count=verdict.conflicting_count,
        has_blackout=verdict.has_blackout,
        conflicting_bookings=verdict.conflicting_count,
        unavailable_dates=verdict.has_blackout,
    )


@router.get("/calendar/{year}/{month}", response_model=dict[str, DayStateOut])
async def month_calendar(year: int, month: int, db: AsyncSession = Depends(get_db)):
    days = await booking_service.get_calendar(db, year, month)
    return {
        day: DayStateOut(available=s.available, booked=s.booked, unavailable=s.unavailable)
        for day, s in days.items()
    }


@router.post("/calculate-price", response_model=PriceOut)
async def calculate_price(payload: PriceRequest, db: AsyncSession = Depends(get_db)):
    quote = await booking_service.calculate_price(
        db, payload.check_in, payload.check_out, payload.guests
    )
    return PriceOut(
        nights=quote.nights,
        price_per_night=quote.price_per_night,
        subtotal=quote.subtotal,
        cleaning_fee=quote.cleaning_fee,
        taxes=quote.taxes,
        total=quote.total,
        breakdown=PriceBreakdown(
            accommodation=quote.subtotal,
            cleaning=quote.cleaning_fee,
            taxes=quote.taxes,
            total=quote.total,
        ),
    )


@router.post("", response_model=BookingCreatedOut, status_code=201)
async def create_booking(payload: BookingCreate, db: AsyncSession = Depends(get_db)):
    booking = await booking_service.create_booking(db, payload)
    return BookingCreatedOut(booking=BookingSummary.from_model(booking))


@router.get("", response_model=BookingPage)
async def list_bookings(
    status: Optional[BookingStatus] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    bookings, total = await BookingService.list_bookings(db, status=status, page=page, limit=limit)
    return BookingPage(
        bookings=[BookingOut.from_model(b) for b in bookings],
        total_pages=BookingService.total_pages(total, limit),
        current_page=page,
        total=total,
    )


@router.get("/{booking_id}", response_model=BookingOut)
async def get_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    booking = await BookingService.get_booking(db, booking_id)
    return BookingOut.from_model(booking)


@router.put("/{booking_id}/status", response_model=BookingOut)
async def update_booking_status(
    booking_id: int, payload: BookingStatusUpdate, db: AsyncSession = Depends(get_db)
):
    booking = await BookingService.update_status(db, booking_id, payload.status)
    return BookingOut.from_model(booking)
