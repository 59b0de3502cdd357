"""Demo content for a fresh install."""
import logging
from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from villa.models import (
    BlackoutDate,
    Booking,
    BookingStatus,
    GalleryCategory,
    GalleryImage,
    PaymentStatus,
    SeasonalRate,
    VillaSettings,
)
from villa.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

DEMO_GALLERY = [
    ("Villa Exterior", "Stone villa in mountains", "/images/exterior-1.jpg", GalleryCategory.EXTERIOR, 1),
    ("Mountain View", "Vistas from terrace", "/images/view-1.jpg", GalleryCategory.VIEW, 2),
    ("Master Bedroom", "Rustic beams", "/images/bedroom-1.jpg", GalleryCategory.BEDROOM, 3),
]


async def wipe(db: AsyncSession) -> None:
    for model in (Booking, GalleryImage, BlackoutDate, SeasonalRate, VillaSettings):
        await db.execute(delete(model))
    await db.commit()
    # Drop stale identities so the singleton row can be re-created
    db.expunge_all()


async def seed_demo_data(db: AsyncSession, reset: bool = False) -> bool:
    """
    Populate settings, gallery and one confirmed booking.
    Without `reset` nothing happens if any booking or image already exists.
    """
    if reset:
        await wipe(db)
    else:
        bookings = (await db.execute(select(func.count()).select_from(Booking))).scalar_one()
        images = (await db.execute(select(func.count()).select_from(GalleryImage))).scalar_one()
        if bookings or images:
            logger.info("Demo seed skipped: data already present")
            return False

    villa = await SettingsService.find_settings(db)
    if villa is None:
        villa = SettingsService.build_default()
        db.add(villa)
        await db.flush()

    villa.price_per_night = 275
    villa.max_guests = 8
    villa.cleaning_fee = 75
    villa.tax_rate = 0.125
    villa.min_stay_nights = 2
    villa.blackout_dates.clear()
    villa.seasonal_rates.clear()
    await db.flush()
    villa.blackout_dates = [
        BlackoutDate(day=date(2025, 12, 24)),
        BlackoutDate(day=date(2025, 12, 25)),
    ]
    villa.seasonal_rates = [
        SeasonalRate(
            position=0,
            start_date=date(2025, 11, 15),
            end_date=date(2026, 1, 15),
            price_per_night=350,
            description="Holiday Season",
        )
    ]

    db.add_all(
        [
            GalleryImage(
                title=title,
                description=description,
                image_url=url,
                category=category,
                order=order,
            )
            for title, description, url, category, order in DEMO_GALLERY
        ]
    )

    db.add(
        Booking(
            guest_name="John Smith",
            email="john@example.com",
            phone="+1-555-0123",
            check_in=date(2025, 9, 15),
            check_out=date(2025, 9, 18),
            guests=4,
            total_price=950,
            status=BookingStatus.CONFIRMED,
            payment_status=PaymentStatus.PAID,
        )
    )

    await db.commit()
    logger.info("Demo data seeded")
    return True
