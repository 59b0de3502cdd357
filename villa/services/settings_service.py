import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from villa.core.config import settings as env_settings
from villa.models import SETTINGS_ROW_ID, BlackoutDate, SeasonalRate, VillaSettings
from villa.schemas.settings import VillaSettingsUpdate

logger = logging.getLogger(__name__)


class SettingsService:
    @staticmethod
    async def find_settings(db: AsyncSession) -> Optional[VillaSettings]:
        """Read-only lookup; None when the row was never materialised."""
        result = await db.execute(
            select(VillaSettings).where(VillaSettings.id == SETTINGS_ROW_ID)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def build_default() -> VillaSettings:
        return VillaSettings(
            id=SETTINGS_ROW_ID,
            price_per_night=env_settings.default_price_per_night,
            max_guests=env_settings.default_max_guests,
            cleaning_fee=env_settings.default_cleaning_fee,
            tax_rate=env_settings.default_tax_rate,
            min_stay_nights=env_settings.default_min_stay_nights,
            blackout_dates=[],
            seasonal_rates=[],
        )

    @staticmethod
    async def get_settings(db: AsyncSession) -> VillaSettings:
        """
        Get-or-create for the singleton row.
        The first read writes the defaults; later reads return the stored row.
        """
        villa = await SettingsService.find_settings(db)
        if villa:
            return villa

        villa = SettingsService.build_default()
        db.add(villa)
        try:
            await db.commit()
            logger.info("Villa settings initialised with defaults")
        except IntegrityError:
            # Another request created the row first
            await db.rollback()
            villa = await SettingsService.find_settings(db)
        return villa

    @staticmethod
    async def update_settings(db: AsyncSession, data: VillaSettingsUpdate) -> VillaSettings:
        villa = await SettingsService.get_settings(db)

        update_data = data.model_dump(exclude_unset=True)
        blackout = update_data.pop("unavailable_dates", None)
        seasonal = update_data.pop("seasonal_pricing", None)

        for key, value in update_data.items():
            if value is not None:
                setattr(villa, key, value)

        if blackout is not None:
            # Flush the removals first, the new rows may reuse the same days
            villa.blackout_dates.clear()
            await db.flush()
            villa.blackout_dates = [BlackoutDate(day=d) for d in sorted(set(blackout))]

        if seasonal is not None:
            villa.seasonal_rates.clear()
            await db.flush()
            villa.seasonal_rates = [
                SeasonalRate(
                    position=idx,
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    price_per_night=r["price_per_night"],
                    description=r.get("description"),
                )
                for idx, r in enumerate(seasonal)
            ]

        await db.commit()
        logger.info(f"Villa settings updated: {sorted(data.model_fields_set)}")
        return villa
