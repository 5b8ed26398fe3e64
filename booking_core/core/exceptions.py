from fastapi import HTTPException


class BookingCoreException(Exception):
    pass


class RentalCalculationError(BookingCoreException):
    pass


class InvalidWindowError(RentalCalculationError):
    def __init__(self, delivery, collection):
        self.delivery = delivery
        self.collection = collection
        super().__init__(
            f"Collection {collection.isoformat()} precedes delivery {delivery.isoformat()}"
        )


class InvalidToleranceError(RentalCalculationError):
    def __init__(self, hour_tolerance, min_tolerance: int = 1, max_tolerance: int = 12):
        self.hour_tolerance = hour_tolerance
        self.min_tolerance = min_tolerance
        self.max_tolerance = max_tolerance
        super().__init__(
            f"Hour tolerance must be an integer between {min_tolerance} and "
            f"{max_tolerance}, got {hour_tolerance!r}"
        )


class BookingNotFoundException(BookingCoreException):
    pass


class DuplicateReferenceException(BookingCoreException):
    pass


class ExtraDayNotConfirmedException(BookingCoreException):
    def __init__(self, formatted_total: str):
        self.formatted_total = formatted_total
        super().__init__(
            f"New schedule exceeds the hour tolerance ({formatted_total}); confirmation required"
        )


def rental_calculation_exception(error: RentalCalculationError):
    return HTTPException(status_code=422, detail=str(error))


def booking_not_found_exception():
    return HTTPException(status_code=404, detail="Booking not found")


def duplicate_reference_exception():
    return HTTPException(status_code=409, detail="Reference code already exists")


def extra_day_not_confirmed_exception(error: ExtraDayNotConfirmedException):
    return HTTPException(status_code=409, detail=str(error))
