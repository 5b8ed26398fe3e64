"""Payment and security deposit state for a booking.

Payment records come from several flows (payment links, bank transfers,
manual entries) and carry loosely-typed intents and link statuses. This
module folds them into one summary. Security deposits are authorizations,
so they never count towards the amount paid.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Sequence

from booking_core.core.utils import ensure_utc

SECURITY_DEPOSIT = "security_deposit"
BALANCE_INTENTS = ("balance_payment", "final_payment")
OPEN_LINK_STATUSES = ("pending", "active")
ACTIVE_DEPOSIT_STATUSES = ("pending", "authorized")


@dataclass(frozen=True)
class PaymentRecord:
    id: str
    amount: Decimal
    intent: Optional[str] = None
    link_status: Optional[str] = None
    paid_at: Optional[datetime] = None
    transaction_id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class DepositRecord:
    id: str
    amount: Decimal
    status: str
    authorized_at: Optional[datetime] = None


@dataclass(frozen=True)
class PaymentSummary:
    status: str
    amount_total: Decimal
    amount_paid: Decimal
    balance_due: Decimal
    initial_payment_amount: Decimal
    balance_percent: int
    initial_payment_id: Optional[str]
    initial_payment_status: Optional[str]
    balance_settled: bool
    balance_link_id: Optional[str]
    security_deposit_id: Optional[str]
    security_deposit_status: Optional[str]
    paid_payment_ids: List[str] = field(default_factory=list)


def payment_status(record: PaymentRecord) -> str:
    if record.paid_at is not None or record.link_status == "paid":
        return "paid"
    if record.link_status in OPEN_LINK_STATUSES:
        return "pending"
    if record.link_status in ("expired", "cancelled"):
        return record.link_status
    return "unknown"


def is_security_deposit(record: PaymentRecord) -> bool:
    return record.intent == SECURITY_DEPOSIT


def is_balance(record: PaymentRecord) -> bool:
    return record.intent in BALANCE_INTENTS


def is_settled(record: PaymentRecord) -> bool:
    # a paid flag alone is not enough, the gateway must have reported a transaction
    return (
        record.paid_at is not None
        and record.link_status == "paid"
        and bool(record.transaction_id)
    )


def _creation_order(record: PaymentRecord):
    if record.created_at is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    return ensure_utc(record.created_at)


def reconcile(
    amount_total: Decimal,
    payment_amount_percent: Optional[int],
    payments: Sequence[PaymentRecord],
    security_deposits: Sequence[DepositRecord] = (),
) -> PaymentSummary:
    amount_total = Decimal(amount_total)
    ordered = sorted(payments, key=_creation_order)

    amount_paid = sum(
        (Decimal(p.amount) for p in ordered if p.paid_at and not is_security_deposit(p)),
        Decimal("0"),
    )
    balance_due = amount_total - amount_paid

    if payment_amount_percent:
        initial_payment_amount = amount_total * payment_amount_percent / 100
        balance_percent = 100 - payment_amount_percent
    else:
        initial_payment_amount = amount_total
        balance_percent = 0

    # final_payment doubles as a one-off full payment, so only balance_payment is skipped
    initial = next(
        (p for p in ordered if p.intent not in ("balance_payment", SECURITY_DEPOSIT)),
        None,
    )
    balance_settled = any(is_balance(p) and is_settled(p) for p in ordered)
    balance_link = next(
        (
            p
            for p in ordered
            if is_balance(p) and p.paid_at is None and p.link_status in OPEN_LINK_STATUSES
        ),
        None,
    )
    deposit = next(
        (d for d in security_deposits if d.status in ACTIVE_DEPOSIT_STATUSES),
        None,
    )

    if balance_due <= 0:
        status = "paid"
    elif amount_paid > 0:
        status = "partially_paid"
    else:
        status = "unpaid"

    return PaymentSummary(
        status=status,
        amount_total=amount_total,
        amount_paid=amount_paid,
        balance_due=balance_due,
        initial_payment_amount=initial_payment_amount,
        balance_percent=balance_percent,
        initial_payment_id=initial.id if initial else None,
        initial_payment_status=payment_status(initial) if initial else None,
        balance_settled=balance_settled,
        balance_link_id=balance_link.id if balance_link else None,
        security_deposit_id=deposit.id if deposit else None,
        security_deposit_status=deposit.status if deposit else None,
        paid_payment_ids=[
            p.id for p in ordered if is_settled(p) and not is_security_deposit(p)
        ],
    )
