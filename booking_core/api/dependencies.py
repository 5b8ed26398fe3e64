from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session, sessionmaker

from booking_core.config.settings import Settings
from booking_core.db.database import get_sessionmaker
from booking_core.db.repositories.booking import BookingRepository
from booking_core.db.repositories.payment import PaymentRepository
from booking_core.db.repositories.security_deposit import SecurityDepositRepository
from booking_core.services.booking import BookingService
from booking_core.services.payment import PaymentService
from booking_core.services.rental_days import RentalDaysService


@lru_cache()
def get_settings() -> Settings:
    return Settings()


@lru_cache()
def _cached_sessionmaker(database_url: str) -> sessionmaker:
    return get_sessionmaker(Settings(database_url=database_url))


def get_session(settings: Settings = Depends(get_settings)) -> Session:
    session = _cached_sessionmaker(settings.database_url)()
    try:
        yield session
    finally:
        session.close()


def get_booking_repository(session: Session = Depends(get_session)) -> BookingRepository:
    return BookingRepository(session)


def get_payment_repository(session: Session = Depends(get_session)) -> PaymentRepository:
    return PaymentRepository(session)


def get_security_deposit_repository(
    session: Session = Depends(get_session),
) -> SecurityDepositRepository:
    return SecurityDepositRepository(session)


def get_rental_days_service(
    booking_repo: BookingRepository = Depends(get_booking_repository),
    settings: Settings = Depends(get_settings),
) -> RentalDaysService:
    return RentalDaysService(booking_repo, settings)


def get_booking_service(
    booking_repo: BookingRepository = Depends(get_booking_repository),
    rental_days_service: RentalDaysService = Depends(get_rental_days_service),
    settings: Settings = Depends(get_settings),
) -> BookingService:
    return BookingService(booking_repo, rental_days_service, settings)


def get_payment_service(
    booking_repo: BookingRepository = Depends(get_booking_repository),
    payment_repo: PaymentRepository = Depends(get_payment_repository),
    deposit_repo: SecurityDepositRepository = Depends(get_security_deposit_repository),
    settings: Settings = Depends(get_settings),
) -> PaymentService:
    return PaymentService(booking_repo, payment_repo, deposit_repo, settings)
