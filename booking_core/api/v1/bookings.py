from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.orm import Session

from booking_core.api.dependencies import (
    get_booking_service,
    get_payment_service,
    get_rental_days_service,
    get_session,
)
from booking_core.core.exceptions import (
    BookingNotFoundException,
    DuplicateReferenceException,
    ExtraDayNotConfirmedException,
    RentalCalculationError,
    booking_not_found_exception,
    duplicate_reference_exception,
    extra_day_not_confirmed_exception,
    rental_calculation_exception,
)
from booking_core.schemas import (
    BookingRentalDaysResponse,
    BookingResponse,
    CreateBookingRequest,
    PaymentResponse,
    PaymentStatusResponse,
    RecordPaymentRequest,
    RecordSecurityDepositRequest,
    ScheduleUpdateResponse,
    SecurityDepositResponse,
    UpdateScheduleRequest,
)
from booking_core.services.booking import BookingService
from booking_core.services.payment import PaymentService
from booking_core.services.rental_days import RentalDaysService

router = APIRouter()


@router.post("/bookings", response_model=BookingResponse, status_code=201)
def create_booking(
    request: CreateBookingRequest,
    booking_service: BookingService = Depends(get_booking_service),
    session: Session = Depends(get_session),
):
    try:
        response = booking_service.create_booking(request)
        session.commit()
        return response
    except DuplicateReferenceException:
        session.rollback()
        raise duplicate_reference_exception()
    except RentalCalculationError as e:
        session.rollback()
        raise rental_calculation_exception(e)
    except Exception as e:
        session.rollback()
        logger.exception(f"Error creating booking: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/bookings", response_model=List[BookingResponse])
def list_bookings(
    status: Optional[str] = None,
    booking_service: BookingService = Depends(get_booking_service),
):
    return booking_service.list_bookings(status)


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service),
):
    try:
        return booking_service.get_booking(booking_id)
    except BookingNotFoundException:
        raise booking_not_found_exception()


@router.patch("/bookings/{booking_id}/schedule", response_model=ScheduleUpdateResponse)
def update_schedule(
    booking_id: str,
    request: UpdateScheduleRequest,
    booking_service: BookingService = Depends(get_booking_service),
    session: Session = Depends(get_session),
):
    try:
        response = booking_service.update_schedule(booking_id, request)
        session.commit()
        return response
    except BookingNotFoundException:
        session.rollback()
        raise booking_not_found_exception()
    except ExtraDayNotConfirmedException as e:
        session.rollback()
        raise extra_day_not_confirmed_exception(e)
    except RentalCalculationError as e:
        session.rollback()
        raise rental_calculation_exception(e)
    except Exception as e:
        session.rollback()
        logger.exception(f"Error updating schedule of booking {booking_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get(
    "/bookings/{booking_id}/rental-days", response_model=BookingRentalDaysResponse
)
def get_booking_rental_days(
    booking_id: str,
    rental_days_service: RentalDaysService = Depends(get_rental_days_service),
):
    try:
        return rental_days_service.for_booking(booking_id)
    except BookingNotFoundException:
        raise booking_not_found_exception()
    except RentalCalculationError as e:
        raise rental_calculation_exception(e)


@router.post(
    "/bookings/{booking_id}/payments", response_model=PaymentResponse, status_code=201
)
def record_payment(
    booking_id: str,
    request: RecordPaymentRequest,
    payment_service: PaymentService = Depends(get_payment_service),
    session: Session = Depends(get_session),
):
    try:
        response = payment_service.record_payment(booking_id, request)
        session.commit()
        return response
    except BookingNotFoundException:
        session.rollback()
        raise booking_not_found_exception()
    except Exception as e:
        session.rollback()
        logger.exception(f"Error recording payment for booking {booking_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/bookings/{booking_id}/security-deposits",
    response_model=SecurityDepositResponse,
    status_code=201,
)
def record_security_deposit(
    booking_id: str,
    request: RecordSecurityDepositRequest,
    payment_service: PaymentService = Depends(get_payment_service),
    session: Session = Depends(get_session),
):
    try:
        response = payment_service.record_security_deposit(booking_id, request)
        session.commit()
        return response
    except BookingNotFoundException:
        session.rollback()
        raise booking_not_found_exception()
    except Exception as e:
        session.rollback()
        logger.exception(f"Error recording deposit for booking {booking_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get(
    "/bookings/{booking_id}/payment-status", response_model=PaymentStatusResponse
)
def get_payment_status(
    booking_id: str,
    payment_service: PaymentService = Depends(get_payment_service),
):
    try:
        return payment_service.get_payment_status(booking_id)
    except BookingNotFoundException:
        raise booking_not_found_exception()
