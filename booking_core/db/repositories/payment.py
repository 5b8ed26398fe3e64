from typing import List

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from booking_core.db.models import Payment


class PaymentRepository:
    def __init__(self, session: Session):
        self.session = session

    def create_payment(self, payment: Payment) -> Payment:
        self.session.add(payment)
        self.session.flush()

        logger.info(
            f"Payment recorded: booking={payment.booking_id}, intent={payment.intent}, "
            f"amount={payment.amount} {payment.currency}"
        )
        return payment

    def get_payments(self, booking_id: str) -> List[Payment]:
        return list(
            self.session.execute(
                select(Payment)
                .where(Payment.booking_id == booking_id)
                .order_by(Payment.created_at)
            )
            .scalars()
            .all()
        )
