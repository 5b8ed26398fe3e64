from fastapi import APIRouter, Depends

from booking_core.api.dependencies import get_rental_days_service
from booking_core.core.exceptions import (
    RentalCalculationError,
    rental_calculation_exception,
)
from booking_core.schemas import (
    RentalDaysRequest,
    RentalDaysResponse,
    RentalQuoteRequest,
    RentalQuoteResponse,
)
from booking_core.services.rental_days import RentalDaysService

router = APIRouter()


@router.post("/rental-days/calculate", response_model=RentalDaysResponse)
def calculate_rental_days(
    request: RentalDaysRequest,
    rental_days_service: RentalDaysService = Depends(get_rental_days_service),
):
    try:
        return rental_days_service.calculate(request)
    except RentalCalculationError as e:
        raise rental_calculation_exception(e)


@router.post("/rental-days/quote", response_model=RentalQuoteResponse)
def quote_rental(
    request: RentalQuoteRequest,
    rental_days_service: RentalDaysService = Depends(get_rental_days_service),
):
    try:
        return rental_days_service.quote(request)
    except RentalCalculationError as e:
        raise rental_calculation_exception(e)
