"""Rental day proration.

A rental day covers 24 hours. Time past the last full day is forgiven up to
the booking's hour tolerance; beyond that an extra day is billed. Every
rental is billed at least one day.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from booking_core.core.exceptions import InvalidToleranceError, InvalidWindowError
from booking_core.core.utils import ensure_utc

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

DEFAULT_HOUR_TOLERANCE = 1
MIN_HOUR_TOLERANCE = 1
MAX_HOUR_TOLERANCE = 12

CENT = Decimal("0.01")


@dataclass(frozen=True)
class RentalCalculation:
    billed_days: int
    full_days: int
    remainder_hours: float
    exact_duration_hours: float
    exceeds_tolerance: bool
    formatted_duration: str
    formatted_total: str


@dataclass(frozen=True)
class RentalQuote:
    billed_days: int
    daily_rate: Decimal
    rental_amount: Decimal
    extra_day_amount: Decimal


def pluralize(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def validate_tolerance(
    hour_tolerance: Optional[int],
    min_tolerance: int = MIN_HOUR_TOLERANCE,
    max_tolerance: int = MAX_HOUR_TOLERANCE,
) -> int:
    if hour_tolerance is None:
        return DEFAULT_HOUR_TOLERANCE
    if isinstance(hour_tolerance, bool) or not isinstance(hour_tolerance, int):
        raise InvalidToleranceError(hour_tolerance, min_tolerance, max_tolerance)
    if not min_tolerance <= hour_tolerance <= max_tolerance:
        raise InvalidToleranceError(hour_tolerance, min_tolerance, max_tolerance)
    return hour_tolerance


def format_duration(duration_ms: int) -> str:
    """Render an elapsed time as e.g. ``"2 days 3 hours 15 minutes"``.

    Zero components are omitted and seconds are dropped, so anything
    shorter than a minute renders as ``"0 minutes"``.
    """
    days, rest = divmod(duration_ms, MS_PER_DAY)
    hours, rest = divmod(rest, MS_PER_HOUR)
    minutes = rest // MS_PER_MINUTE

    parts = []
    if days:
        parts.append(pluralize(days, "day"))
    if hours:
        parts.append(pluralize(hours, "hour"))
    if minutes:
        parts.append(pluralize(minutes, "minute"))

    return " ".join(parts) if parts else pluralize(0, "minute")


def calculate(
    delivery: datetime,
    collection: datetime,
    hour_tolerance: Optional[int] = DEFAULT_HOUR_TOLERANCE,
    min_tolerance: int = MIN_HOUR_TOLERANCE,
    max_tolerance: int = MAX_HOUR_TOLERANCE,
) -> RentalCalculation:
    """Compute billed rental days for a delivery/collection window.

    Raises InvalidWindowError when collection precedes delivery and
    InvalidToleranceError when the tolerance is outside the allowed range,
    1..12 hours unless narrower bounds are given.
    """
    tolerance = validate_tolerance(hour_tolerance, min_tolerance, max_tolerance)

    # naive values are taken to already be UTC
    delivery = ensure_utc(delivery)
    collection = ensure_utc(collection)

    delta_ms = (collection - delivery) // timedelta(milliseconds=1)
    if delta_ms < 0:
        raise InvalidWindowError(delivery, collection)

    full_days = delta_ms // MS_PER_DAY
    remainder_ms = delta_ms - full_days * MS_PER_DAY
    remainder_hours = remainder_ms / MS_PER_HOUR

    exceeds_tolerance = remainder_hours > tolerance
    billed_days = max(1, full_days + (1 if exceeds_tolerance else 0))

    return RentalCalculation(
        billed_days=billed_days,
        full_days=full_days,
        remainder_hours=remainder_hours,
        exact_duration_hours=delta_ms / MS_PER_HOUR,
        exceeds_tolerance=exceeds_tolerance,
        formatted_duration=format_duration(delta_ms),
        formatted_total=pluralize(billed_days, "day"),
    )


def quote(calculation: RentalCalculation, daily_rate: Decimal) -> RentalQuote:
    daily_rate = Decimal(daily_rate)
    if daily_rate < 0:
        raise ValueError("daily_rate must not be negative")

    rental_amount = (daily_rate * calculation.billed_days).quantize(
        CENT, rounding=ROUND_HALF_UP
    )
    extra_day_amount = (
        daily_rate.quantize(CENT, rounding=ROUND_HALF_UP)
        if calculation.exceeds_tolerance
        else Decimal("0.00")
    )

    return RentalQuote(
        billed_days=calculation.billed_days,
        daily_rate=daily_rate,
        rental_amount=rental_amount,
        extra_day_amount=extra_day_amount,
    )


def tolerance_warning(hour_tolerance: int) -> str:
    return (
        f"Each rental day covers a maximum of 24 hours, with a "
        f"{hour_tolerance}-hour tolerance. The collection time exceeds this "
        f"tolerance and may be counted as an additional rental day."
    )
