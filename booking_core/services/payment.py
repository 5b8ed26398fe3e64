from loguru import logger

from booking_core.config.settings import Settings
from booking_core.core.exceptions import BookingNotFoundException
from booking_core.core.payment_state import DepositRecord, PaymentRecord, reconcile
from booking_core.core.utils import ensure_utc, uuid4
from booking_core.db.models import Booking, Payment, SecurityDeposit
from booking_core.db.repositories.booking import BookingRepository
from booking_core.db.repositories.payment import PaymentRepository
from booking_core.db.repositories.security_deposit import SecurityDepositRepository
from booking_core.monitoring.metrics import (
    payments_recorded_total,
    security_deposits_recorded_total,
)
from booking_core.schemas import (
    PaymentResponse,
    PaymentStatusResponse,
    RecordPaymentRequest,
    RecordSecurityDepositRequest,
    SecurityDepositResponse,
)


class PaymentService:
    def __init__(
        self,
        booking_repo: BookingRepository,
        payment_repo: PaymentRepository,
        deposit_repo: SecurityDepositRepository,
        settings: Settings,
    ):
        self.booking_repo = booking_repo
        self.payment_repo = payment_repo
        self.deposit_repo = deposit_repo
        self.settings = settings

    def _get_booking(self, booking_id: str) -> Booking:
        booking = self.booking_repo.get_by_id(booking_id)
        if not booking:
            logger.warning(f"Booking {booking_id} not found")
            raise BookingNotFoundException()
        return booking

    def record_payment(
        self, booking_id: str, request: RecordPaymentRequest
    ) -> PaymentResponse:
        booking = self._get_booking(booking_id)

        link_status = request.link_status
        if link_status is None and request.paid_at is not None:
            link_status = "paid"

        payment = Payment(
            id=uuid4(),
            booking_id=booking.id,
            intent=request.intent,
            link_status=link_status,
            method=request.method,
            amount=request.amount,
            currency=request.currency or booking.currency,
            paid_at=ensure_utc(request.paid_at) if request.paid_at else None,
            transaction_id=request.transaction_id,
            note=request.note,
        )
        self.payment_repo.create_payment(payment)
        payments_recorded_total.labels(intent=payment.intent or "unknown").inc()

        return PaymentResponse.model_validate(payment)

    def record_security_deposit(
        self, booking_id: str, request: RecordSecurityDepositRequest
    ) -> SecurityDepositResponse:
        booking = self._get_booking(booking_id)

        authorized_at = request.authorized_at
        if authorized_at is not None:
            authorized_at = ensure_utc(authorized_at)

        deposit = SecurityDeposit(
            id=uuid4(),
            booking_id=booking.id,
            amount=request.amount,
            currency=request.currency or booking.currency,
            status=request.status,
            authorized_at=authorized_at,
        )
        self.deposit_repo.create_deposit(deposit)
        security_deposits_recorded_total.labels(status=deposit.status).inc()

        return SecurityDepositResponse.model_validate(deposit)

    def get_payment_status(self, booking_id: str) -> PaymentStatusResponse:
        booking = self._get_booking(booking_id)

        payments = [
            PaymentRecord(
                id=p.id,
                amount=p.amount,
                intent=p.intent,
                link_status=p.link_status,
                paid_at=p.paid_at,
                transaction_id=p.transaction_id,
                created_at=p.created_at,
            )
            for p in self.payment_repo.get_payments(booking.id)
        ]
        deposits = [
            DepositRecord(
                id=d.id,
                amount=d.amount,
                status=d.status,
                authorized_at=d.authorized_at,
            )
            for d in self.deposit_repo.get_deposits(booking.id)
        ]

        summary = reconcile(
            booking.amount_total,
            booking.payment_amount_percent,
            payments,
            deposits,
        )
        logger.debug(
            f"Payment status for {booking.reference_code}: {summary.status}, "
            f"paid {summary.amount_paid} of {summary.amount_total}"
        )

        return PaymentStatusResponse(
            booking_id=booking.id,
            currency=booking.currency,
            status=summary.status,
            amount_total=summary.amount_total,
            amount_paid=summary.amount_paid,
            balance_due=summary.balance_due,
            initial_payment_amount=summary.initial_payment_amount,
            balance_percent=summary.balance_percent,
            initial_payment_id=summary.initial_payment_id,
            initial_payment_status=summary.initial_payment_status,
            balance_settled=summary.balance_settled,
            balance_link_id=summary.balance_link_id,
            security_deposit_id=summary.security_deposit_id,
            security_deposit_status=summary.security_deposit_status,
            paid_payment_ids=summary.paid_payment_ids,
        )
