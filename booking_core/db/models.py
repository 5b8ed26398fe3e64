from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from booking_core.core.rental_days import MAX_HOUR_TOLERANCE, MIN_HOUR_TOLERANCE
from booking_core.core.utils import utcnow


class Base(DeclarativeBase):
    pass


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    reference_code: Mapped[str] = mapped_column(String(50), unique=True)
    client_name: Mapped[str] = mapped_column(String(200))
    client_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    car_model: Mapped[str] = mapped_column(String(100))
    car_plate: Mapped[str] = mapped_column(String(20))
    delivery_datetime: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    collection_datetime: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    rental_day_hour_tolerance: Mapped[int] = mapped_column(Integer, default=1)
    daily_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    amount_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    payment_amount_percent: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True
    )
    security_deposit_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    currency: Mapped[str] = mapped_column(String(3))
    status: Mapped[str] = mapped_column(String(16))  # draft / confirmed / cancelled
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        CheckConstraint(
            f"rental_day_hour_tolerance >= {MIN_HOUR_TOLERANCE} "
            f"AND rental_day_hour_tolerance <= {MAX_HOUR_TOLERANCE}",
            name="ck_bookings_hour_tolerance",
        ),
    )


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    booking_id: Mapped[str] = mapped_column(String(64))
    intent: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    link_status: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    method: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    currency: Mapped[str] = mapped_column(String(3))
    paid_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    transaction_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


Index("ix_payments_booking_id", Payment.booking_id)


class SecurityDeposit(Base):
    __tablename__ = "security_deposits"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    booking_id: Mapped[str] = mapped_column(String(64))
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    currency: Mapped[str] = mapped_column(String(3))
    status: Mapped[str] = mapped_column(String(16))  # pending / authorized / released / captured
    authorized_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


Index("ix_security_deposits_booking_id", SecurityDeposit.booking_id)
