from typing import List, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from booking_core.db.models import Booking


class BookingRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, booking_id: str) -> Optional[Booking]:
        return self.session.get(Booking, booking_id)

    def get_by_reference(self, reference_code: str) -> Optional[Booking]:
        return self.session.execute(
            select(Booking).where(Booking.reference_code == reference_code)
        ).scalar_one_or_none()

    def create_booking(self, booking: Booking) -> None:
        self.session.add(booking)
        self.session.flush()
        logger.debug(f"Inserted booking {booking.id} ({booking.reference_code})")

    def update_booking(self, booking: Booking) -> None:
        self.session.merge(booking)
        self.session.flush()

    def list_bookings(self, status: Optional[str] = None) -> List[Booking]:
        query = select(Booking).order_by(Booking.delivery_datetime)
        if status:
            query = query.where(Booking.status == status)
        return list(self.session.execute(query).scalars().all())
