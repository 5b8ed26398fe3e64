from datetime import datetime
from decimal import Decimal
from typing import Optional

from loguru import logger

from booking_core.config.settings import Settings
from booking_core.core import rental_days
from booking_core.core.exceptions import (
    BookingNotFoundException,
    InvalidToleranceError,
    InvalidWindowError,
)
from booking_core.db.repositories.booking import BookingRepository
from booking_core.monitoring.metrics import (
    billed_days_histogram,
    rental_days_calculations_total,
    tolerance_exceeded_total,
)
from booking_core.schemas import (
    BookingRentalDaysResponse,
    RentalDaysRequest,
    RentalDaysResponse,
    RentalQuoteRequest,
    RentalQuoteResponse,
)


class RentalDaysService:
    def __init__(self, booking_repo: BookingRepository, settings: Settings):
        self.booking_repo = booking_repo
        self.settings = settings

    def resolve_tolerance(self, hour_tolerance: Optional[int]) -> int:
        if hour_tolerance is None:
            return self.settings.default_hour_tolerance
        return hour_tolerance

    def compute(
        self,
        delivery: datetime,
        collection: datetime,
        hour_tolerance: Optional[int],
        source: str,
    ) -> rental_days.RentalCalculation:
        tolerance = self.resolve_tolerance(hour_tolerance)
        try:
            calculation = rental_days.calculate(
                delivery,
                collection,
                tolerance,
                min_tolerance=self.settings.min_hour_tolerance,
                max_tolerance=self.settings.max_hour_tolerance,
            )
        except InvalidWindowError:
            rental_days_calculations_total.labels(
                source=source, outcome="invalid_window"
            ).inc()
            raise
        except InvalidToleranceError:
            rental_days_calculations_total.labels(
                source=source, outcome="invalid_tolerance"
            ).inc()
            raise

        rental_days_calculations_total.labels(source=source, outcome="ok").inc()
        billed_days_histogram.labels(source=source).observe(calculation.billed_days)
        if calculation.exceeds_tolerance:
            tolerance_exceeded_total.labels(source=source).inc()

        return calculation

    def to_response(
        self, calculation: rental_days.RentalCalculation, hour_tolerance: Optional[int]
    ) -> RentalDaysResponse:
        tolerance = self.resolve_tolerance(hour_tolerance)
        return RentalDaysResponse(
            billed_days=calculation.billed_days,
            full_days=calculation.full_days,
            remainder_hours=calculation.remainder_hours,
            exact_duration_hours=calculation.exact_duration_hours,
            exceeds_tolerance=calculation.exceeds_tolerance,
            formatted_duration=calculation.formatted_duration,
            formatted_total=calculation.formatted_total,
            hour_tolerance=tolerance,
            warning=(
                rental_days.tolerance_warning(tolerance)
                if calculation.exceeds_tolerance
                else None
            ),
        )

    def quote_response(
        self,
        calculation: rental_days.RentalCalculation,
        daily_rate: Decimal,
        currency: str,
    ) -> RentalQuoteResponse:
        rental_quote = rental_days.quote(calculation, daily_rate)
        return RentalQuoteResponse(
            billed_days=rental_quote.billed_days,
            daily_rate=rental_quote.daily_rate,
            rental_amount=rental_quote.rental_amount,
            extra_day_amount=rental_quote.extra_day_amount,
            currency=currency,
        )

    def calculate(self, request: RentalDaysRequest) -> RentalDaysResponse:
        calculation = self.compute(
            request.delivery_datetime,
            request.collection_datetime,
            request.rental_day_hour_tolerance,
            source="adhoc",
        )
        return self.to_response(calculation, request.rental_day_hour_tolerance)

    def quote(self, request: RentalQuoteRequest) -> RentalQuoteResponse:
        calculation = self.compute(
            request.delivery_datetime,
            request.collection_datetime,
            request.rental_day_hour_tolerance,
            source="adhoc",
        )
        return self.quote_response(
            calculation, request.daily_rate, self.settings.default_currency
        )

    def for_booking(self, booking_id: str) -> BookingRentalDaysResponse:
        booking = self.booking_repo.get_by_id(booking_id)
        if not booking:
            logger.warning(f"Booking {booking_id} not found")
            raise BookingNotFoundException()

        calculation = self.compute(
            booking.delivery_datetime,
            booking.collection_datetime,
            booking.rental_day_hour_tolerance,
            source="booking",
        )
        if calculation.exceeds_tolerance:
            logger.warning(
                f"Booking {booking.reference_code} exceeds its "
                f"{booking.rental_day_hour_tolerance}h tolerance: "
                f"{calculation.formatted_duration} billed as {calculation.formatted_total}"
            )

        quote = None
        if booking.daily_rate is not None:
            quote = self.quote_response(calculation, booking.daily_rate, booking.currency)

        return BookingRentalDaysResponse(
            booking_id=booking.id,
            reference_code=booking.reference_code,
            rental_days=self.to_response(
                calculation, booking.rental_day_hour_tolerance
            ),
            quote=quote,
        )
