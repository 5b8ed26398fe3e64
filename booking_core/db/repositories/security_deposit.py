from typing import List

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from booking_core.db.models import SecurityDeposit


class SecurityDepositRepository:
    def __init__(self, session: Session):
        self.session = session

    def create_deposit(self, deposit: SecurityDeposit) -> SecurityDeposit:
        self.session.add(deposit)
        self.session.flush()
        logger.info(
            f"Security deposit recorded: booking={deposit.booking_id}, "
            f"status={deposit.status}, amount={deposit.amount}"
        )
        return deposit

    def get_deposits(self, booking_id: str) -> List[SecurityDeposit]:
        return list(
            self.session.execute(
                select(SecurityDeposit)
                .where(SecurityDeposit.booking_id == booking_id)
                .order_by(SecurityDeposit.created_at)
            )
            .scalars()
            .all()
        )
