from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError

from booking_core.config.settings import Settings
from booking_core.core.exceptions import (
    BookingNotFoundException,
    DuplicateReferenceException,
    ExtraDayNotConfirmedException,
)
from booking_core.core.utils import ensure_utc, uuid4
from booking_core.db.models import Booking
from booking_core.db.repositories.booking import BookingRepository
from booking_core.monitoring.metrics import bookings_total
from booking_core.schemas import (
    BookingResponse,
    CreateBookingRequest,
    ScheduleUpdateResponse,
    UpdateScheduleRequest,
)
from booking_core.services.rental_days import RentalDaysService


class BookingService:
    def __init__(
        self,
        booking_repo: BookingRepository,
        rental_days_service: RentalDaysService,
        settings: Settings,
    ):
        self.booking_repo = booking_repo
        self.rental_days_service = rental_days_service
        self.settings = settings

    def get_booking_model(self, booking_id: str) -> Booking:
        booking = self.booking_repo.get_by_id(booking_id)
        if not booking:
            logger.warning(f"Booking {booking_id} not found")
            raise BookingNotFoundException()
        return booking

    def create_booking(self, request: CreateBookingRequest) -> BookingResponse:
        logger.info(f"Creating booking {request.reference_code} for {request.client_name}")

        if self.booking_repo.get_by_reference(request.reference_code):
            logger.warning(f"Reference code {request.reference_code} already exists")
            raise DuplicateReferenceException()

        tolerance = self.rental_days_service.resolve_tolerance(
            request.rental_day_hour_tolerance
        )
        # rejects inverted windows and out-of-range tolerances before anything is stored
        self.rental_days_service.compute(
            request.delivery_datetime,
            request.collection_datetime,
            tolerance,
            source="schedule",
        )

        booking = Booking(
            id=uuid4(),
            reference_code=request.reference_code,
            client_name=request.client_name,
            client_email=request.client_email,
            car_model=request.car_model,
            car_plate=request.car_plate,
            delivery_datetime=ensure_utc(request.delivery_datetime),
            collection_datetime=ensure_utc(request.collection_datetime),
            rental_day_hour_tolerance=tolerance,
            daily_rate=request.daily_rate,
            amount_total=request.amount_total,
            payment_amount_percent=request.payment_amount_percent,
            security_deposit_amount=request.security_deposit_amount,
            currency=request.currency or self.settings.default_currency,
            status=request.status,
        )
        try:
            self.booking_repo.create_booking(booking)
        except IntegrityError:
            # a concurrent request stored the same reference after our lookup
            logger.warning(f"Reference code {request.reference_code} already exists")
            raise DuplicateReferenceException()
        bookings_total.labels(status=booking.status).inc()

        logger.info(f"Booking {booking.id} created successfully")
        return BookingResponse.model_validate(booking)

    def get_booking(self, booking_id: str) -> BookingResponse:
        return BookingResponse.model_validate(self.get_booking_model(booking_id))

    def list_bookings(self, status: Optional[str] = None) -> List[BookingResponse]:
        return [
            BookingResponse.model_validate(booking)
            for booking in self.booking_repo.list_bookings(status)
        ]

    def update_schedule(
        self, booking_id: str, request: UpdateScheduleRequest
    ) -> ScheduleUpdateResponse:
        booking = self.get_booking_model(booking_id)
        logger.info(f"Updating schedule of booking {booking.reference_code}")

        delivery = request.delivery_datetime or booking.delivery_datetime
        collection = request.collection_datetime or booking.collection_datetime
        tolerance = (
            request.rental_day_hour_tolerance
            if request.rental_day_hour_tolerance is not None
            else booking.rental_day_hour_tolerance
        )

        calculation = self.rental_days_service.compute(
            delivery, collection, tolerance, source="schedule"
        )
        if calculation.exceeds_tolerance and not request.confirm_extra_day:
            logger.warning(
                f"Schedule change for {booking.reference_code} exceeds the "
                f"{tolerance}h tolerance and was not confirmed"
            )
            raise ExtraDayNotConfirmedException(calculation.formatted_total)

        booking.delivery_datetime = ensure_utc(delivery)
        booking.collection_datetime = ensure_utc(collection)
        booking.rental_day_hour_tolerance = tolerance
        self.booking_repo.update_booking(booking)

        logger.info(
            f"Booking {booking.reference_code} rescheduled: "
            f"{calculation.formatted_total} ({calculation.formatted_duration})"
        )
        return ScheduleUpdateResponse(
            booking=BookingResponse.model_validate(booking),
            rental_days=self.rental_days_service.to_response(calculation, tolerance),
        )
