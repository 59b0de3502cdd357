from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from villa.models import VillaSettings
from villa.schemas.base import CamelModel


class SeasonalRateIn(CamelModel):
    start_date: date
    end_date: date
    price_per_night: float = Field(ge=0)
    description: Optional[str] = None

    @model_validator(mode="after")
    def check_order(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class SeasonalRateOut(CamelModel):
    start_date: date
    end_date: date
    price_per_night: float
    description: Optional[str] = None


class VillaSettingsUpdate(CamelModel):
    """Partial update: only the keys sent are written, lists are replaced."""

    price_per_night: Optional[float] = Field(default=None, ge=0)
    max_guests: Optional[int] = Field(default=None, ge=1)
    cleaning_fee: Optional[float] = Field(default=None, ge=0)
    tax_rate: Optional[float] = Field(default=None, ge=0)
    min_stay_nights: Optional[int] = Field(default=None, ge=1)
    unavailable_dates: Optional[list[date]] = None
    seasonal_pricing: Optional[list[SeasonalRateIn]] = None


class VillaSettingsOut(CamelModel):
    id: int
    price_per_night: float
    max_guests: int
    cleaning_fee: float
    tax_rate: float
    min_stay_nights: int
    unavailable_dates: list[date]
    seasonal_pricing: list[SeasonalRateOut]

    @classmethod
    def from_model(cls, villa: VillaSettings) -> "VillaSettingsOut":
        return cls(
            id=villa.id,
            price_per_night=villa.price_per_night,
            max_guests=villa.max_guests,
            cleaning_fee=villa.cleaning_fee,
            tax_rate=villa.tax_rate,
            min_stay_nights=villa.min_stay_nights,
            unavailable_dates=villa.unavailable_dates,
            seasonal_pricing=[
                SeasonalRateOut(
                    start_date=r.start_date,
                    end_date=r.end_date,
                    price_per_night=r.price_per_night,
                    description=r.description,
                )
                for r in villa.seasonal_rates
            ],
        )
