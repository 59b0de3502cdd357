"""
Price quotes.

`calculate_price` works on a settings snapshot passed in by the caller.
Seasonal windows are ignored unless `seasonal=True`; when applied, a night
takes the rate of the covering window with the latest start date (later
entries win ties) and falls back to the base nightly rate.
"""
import datetime
from dataclasses import dataclass, field
from typing import Optional, Sequence

from villa.core.errors import ValidationError
from villa.domain.calendar import iter_nights

DEFAULT_PRICE_PER_NIGHT = 250.0
DEFAULT_CLEANING_FEE = 50.0
DEFAULT_TAX_RATE = 0.12


@dataclass(frozen=True)
class SeasonalWindow:
    start_date: datetime.date
    end_date: datetime.date
    price_per_night: float
    description: Optional[str] = None

    def covers(self, day: datetime.date) -> bool:
        # Windows are inclusive on both ends, unlike stays
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class PricingRules:
    price_per_night: float = DEFAULT_PRICE_PER_NIGHT
    cleaning_fee: float = DEFAULT_CLEANING_FEE
    tax_rate: float = DEFAULT_TAX_RATE
    seasonal: Sequence[SeasonalWindow] = field(default_factory=tuple)

    @classmethod
    def from_settings(cls, villa) -> "PricingRules":
        """Build rules from a settings row, defaulting anything missing."""
        if villa is None:
            return cls()

        def pick(value, default):
            return default if value is None else value

        return cls(
            price_per_night=pick(villa.price_per_night, DEFAULT_PRICE_PER_NIGHT),
            cleaning_fee=pick(villa.cleaning_fee, DEFAULT_CLEANING_FEE),
            tax_rate=pick(villa.tax_rate, DEFAULT_TAX_RATE),
            seasonal=tuple(
                SeasonalWindow(
                    start_date=r.start_date,
                    end_date=r.end_date,
                    price_per_night=r.price_per_night,
                    description=r.description,
                )
                for r in (villa.seasonal_rates or [])
            ),
        )


@dataclass(frozen=True)
class PriceQuote:
    nights: int
    price_per_night: float
    subtotal: float
    cleaning_fee: float
    taxes: float
    total: float


def count_nights(check_in: datetime.date, check_out: datetime.date) -> int:
    return (check_out - check_in).days


def nightly_rate(day: datetime.date, rules: PricingRules) -> float:
    matching = [
        (w.start_date, idx, w)
        for idx, w in enumerate(rules.seasonal)
        if w.covers(day)
    ]
    if not matching:
        return rules.price_per_night
    _, _, window = max(matching, key=lambda m: (m[0], m[1]))
    return window.price_per_night


def calculate_price(
    check_in: datetime.date,
    check_out: datetime.date,
    guests: int,
    rules: PricingRules,
    seasonal: bool = False,
) -> PriceQuote:
    # Guest count does not affect the price
    nights = count_nights(check_in, check_out)
    if nights < 1:
        raise ValidationError("Check-out must be after check-in")

    if seasonal and rules.seasonal:
        subtotal = sum(nightly_rate(day, rules) for day in iter_nights(check_in, check_out))
        price_per_night = subtotal / nights
    else:
        price_per_night = rules.price_per_night
        subtotal = nights * price_per_night

    taxes = subtotal * rules.tax_rate
    total = subtotal + rules.cleaning_fee + taxes

    return PriceQuote(
        nights=nights,
        price_per_night=price_per_night,
        subtotal=subtotal,
        cleaning_fee=rules.cleaning_fee,
        taxes=taxes,
        total=total,
    )
