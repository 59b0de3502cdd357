import asyncio
import logging
import math
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from villa.core.config import settings
from villa.core.errors import ConflictError, InternalError, NotFoundError, ValidationError
from villa.domain import availability, pricing
from villa.models import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    BookingStatus,
    PaymentStatus,
)
from villa.schemas.booking import BookingCreate
from villa.services.settings_service import SettingsService

logger = logging.getLogger(__name__)


class BookingService:
    """Availability, pricing and booking lifecycle for the villa."""

    def __init__(self, seasonal_pricing: Optional[bool] = None):
        self.seasonal_pricing = (
            settings.seasonal_pricing_enabled if seasonal_pricing is None else seasonal_pricing
        )
        # Serialises check-and-insert so two overlapping requests cannot both pass
        self._create_lock = asyncio.Lock()

    @staticmethod
    def _require_dates(check_in: Optional[date], check_out: Optional[date]):
        if not check_in or not check_out:
            raise ValidationError("Check-in and check-out are required")
        if check_in >= check_out:
            raise ValidationError("Check-out must be after check-in")

    @staticmethod
    async def active_bookings(db: AsyncSession, start: date, end: date) -> List[Booking]:
        """Pending/confirmed bookings touching [start, end)."""
        stmt = select(Booking).where(
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
            and_(Booking.check_in < end, Booking.check_out > start),
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def check_availability(
        self, db: AsyncSession, check_in: Optional[date], check_out: Optional[date]
    ) -> availability.AvailabilityVerdict:
        self._require_dates(check_in, check_out)

        bookings = await self.active_bookings(db, check_in, check_out)
        villa = await SettingsService.find_settings(db)
        blackout = villa.unavailable_dates if villa else []

        return availability.check_availability(check_in, check_out, bookings, blackout)

    async def get_calendar(
        self, db: AsyncSession, year: int, month: int
    ) -> dict[str, availability.DayState]:
        start, end = availability.month_bounds(year, month)

        bookings = await self.active_bookings(db, start, end)
        villa = await SettingsService.find_settings(db)
        blackout = villa.unavailable_dates if villa else []

        return availability.build_calendar(year, month, bookings, blackout)

    async def calculate_price(
        self,
        db: AsyncSession,
        check_in: Optional[date],
        check_out: Optional[date],
        guests: Optional[int],
    ) -> pricing.PriceQuote:
        if not check_in or not check_out or not guests:
            raise ValidationError("Missing required fields")

        villa = await SettingsService.find_settings(db)
        rules = pricing.PricingRules.from_settings(villa)
        return pricing.calculate_price(
            check_in, check_out, guests, rules, seasonal=self.seasonal_pricing
        )

    async def create_booking(self, db: AsyncSession, data: BookingCreate) -> Booking:
        """
        Validate, check availability, price and persist a pending booking.

        The availability read and the insert run under one lock and one
        session transaction, closing the check-then-act window inside this
        process.
        """
        required = (
            data.guest_name,
            data.email,
            data.phone,
            data.check_in,
            data.check_out,
            data.guests,
        )
        if any(v is None for v in required):
            raise ValidationError("Missing required fields")

        async with self._create_lock:
            verdict = await self.check_availability(db, data.check_in, data.check_out)
            if not verdict.available:
                logger.warning(
                    f"Cannot create booking: dates {data.check_in} - {data.check_out} "
                    f"not available ({verdict.conflicting_count} conflicts, "
                    f"blackout={verdict.has_blackout})"
                )
                raise ConflictError("Dates are not available")

            quote = await self.calculate_price(db, data.check_in, data.check_out, data.guests)

            now = datetime.now(timezone.utc)
            booking = Booking(
                guest_name=data.guest_name,
                email=data.email,
                phone=data.phone,
                check_in=data.check_in,
                check_out=data.check_out,
                guests=data.guests,
                total_price=quote.total,
                special_requests=data.special_requests,
                status=BookingStatus.PENDING,
                payment_status=PaymentStatus.PENDING,
                created_at=now,
                updated_at=now,
            )

            try:
                db.add(booking)
                await db.commit()
                await db.refresh(booking)
            except SQLAlchemyError as e:
                await db.rollback()
                logger.error(f"Error creating booking: {e}", exc_info=True)
                raise InternalError("Could not save booking") from e

        logger.info(
            f"Booking #{booking.id} created: {booking.guest_name} "
            f"({booking.check_in} - {booking.check_out}), total {booking.total_price}"
        )
        return booking

    @staticmethod
    async def list_bookings(
        db: AsyncSession,
        status: Optional[BookingStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[List[Booking], int]:
        """Newest first. Returns (page of bookings, total matching)."""
        stmt = select(Booking)
        count_stmt = select(func.count()).select_from(Booking)
        if status:
            stmt = stmt.where(Booking.status == status)
            count_stmt = count_stmt.where(Booking.status == status)

        stmt = (
            stmt.order_by(Booking.created_at.desc(), Booking.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await db.execute(stmt)
        total = (await db.execute(count_stmt)).scalar_one()
        return list(result.scalars().all()), total

    @staticmethod
    def total_pages(total: int, limit: int) -> int:
        return math.ceil(total / limit)

    @staticmethod
    async def get_booking(db: AsyncSession, booking_id: int) -> Booking:
        booking = await db.get(Booking, booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    @staticmethod
    async def update_status(
        db: AsyncSession, booking_id: int, status: BookingStatus
    ) -> Booking:
        """Overwrite the status; any status may follow any other."""
        booking = await BookingService.get_booking(db, booking_id)
        previous = booking.status

        booking.status = status
        booking.updated_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(booking)

        logger.info(f"Booking #{booking_id} status: {previous.value} -> {status.value}")
        return booking


booking_service = BookingService()
