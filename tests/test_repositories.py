from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from booking_core.db.models import Booking, Payment, SecurityDeposit
from booking_core.db.repositories.booking import BookingRepository
from booking_core.db.repositories.payment import PaymentRepository
from booking_core.db.repositories.security_deposit import SecurityDepositRepository

pytestmark = pytest.mark.db

NOW = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)


def make_booking(id="b1", reference_code="KC-1", tolerance=1, days=2, status="draft"):
    return Booking(
        id=id,
        reference_code=reference_code,
        client_name="Jane Doe",
        car_model="Porsche Macan",
        car_plate="ZH 1",
        delivery_datetime=NOW,
        collection_datetime=NOW + timedelta(days=days),
        rental_day_hour_tolerance=tolerance,
        amount_total=Decimal("500.00"),
        security_deposit_amount=Decimal("0"),
        currency="CHF",
        status=status,
    )


# ---------- BookingRepository ----------


def test_booking_repository_empty(db_session):
    repo = BookingRepository(db_session)

    assert repo.get_by_id("missing") is None
    assert repo.get_by_reference("missing") is None
    assert repo.list_bookings() == []


def test_booking_repository_create_and_get(db_session):
    repo = BookingRepository(db_session)

    repo.create_booking(make_booking())
    db_session.commit()

    booking = repo.get_by_id("b1")
    assert booking is not None
    assert booking.reference_code == "KC-1"
    assert booking.rental_day_hour_tolerance == 1
    assert booking.created_at is not None

    assert repo.get_by_reference("KC-1").id == "b1"


def test_booking_repository_list_filters_by_status(db_session):
    repo = BookingRepository(db_session)
    later = make_booking("b2", "KC-2", days=1, status="confirmed")
    later.delivery_datetime = NOW + timedelta(days=7)
    later.collection_datetime = NOW + timedelta(days=8)
    repo.create_booking(later)
    repo.create_booking(make_booking("b1", "KC-1", days=3, status="draft"))
    db_session.commit()

    assert [b.id for b in repo.list_bookings()] == ["b1", "b2"]
    assert [b.id for b in repo.list_bookings("confirmed")] == ["b2"]


def test_booking_repository_update(db_session):
    repo = BookingRepository(db_session)
    repo.create_booking(make_booking())
    db_session.commit()

    booking = repo.get_by_id("b1")
    booking.rental_day_hour_tolerance = 6
    repo.update_booking(booking)
    db_session.commit()

    assert repo.get_by_id("b1").rental_day_hour_tolerance == 6


@pytest.mark.parametrize("tolerance", [0, 13])
def test_tolerance_check_constraint(db_session, tolerance):
    repo = BookingRepository(db_session)

    with pytest.raises(IntegrityError):
        repo.create_booking(make_booking(tolerance=tolerance))
    db_session.rollback()


def test_reference_code_is_unique(db_session):
    repo = BookingRepository(db_session)
    repo.create_booking(make_booking("b1", "KC-1"))

    with pytest.raises(IntegrityError):
        repo.create_booking(make_booking("b2", "KC-1"))
    db_session.rollback()


# ---------- PaymentRepository ----------


def test_payment_repository_orders_by_creation(db_session):
    repo = PaymentRepository(db_session)

    repo.create_payment(
        Payment(
            id="p2",
            booking_id="b1",
            intent="balance_payment",
            amount=Decimal("700"),
            currency="CHF",
            created_at=NOW + timedelta(hours=1),
        )
    )
    repo.create_payment(
        Payment(
            id="p1",
            booking_id="b1",
            intent="client_payment",
            amount=Decimal("300"),
            currency="CHF",
            paid_at=NOW,
            created_at=NOW,
        )
    )
    repo.create_payment(
        Payment(id="other", booking_id="b2", amount=Decimal("1"), currency="CHF")
    )
    db_session.commit()

    payments = repo.get_payments("b1")
    assert [p.id for p in payments] == ["p1", "p2"]
    assert payments[0].amount == Decimal("300")


# ---------- SecurityDepositRepository ----------


def test_security_deposit_repository(db_session):
    repo = SecurityDepositRepository(db_session)

    repo.create_deposit(
        SecurityDeposit(
            id="d1",
            booking_id="b1",
            amount=Decimal("2000"),
            currency="CHF",
            status="pending",
        )
    )
    db_session.commit()

    deposits = repo.get_deposits("b1")
    assert len(deposits) == 1
    assert deposits[0].status == "pending"
    assert repo.get_deposits("b2") == []
