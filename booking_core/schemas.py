from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class RentalDaysRequest(BaseModel):
    delivery_datetime: datetime
    collection_datetime: datetime
    # range is enforced by the calculator so it reports a single error type
    rental_day_hour_tolerance: Optional[int] = None


class RentalQuoteRequest(RentalDaysRequest):
    daily_rate: Decimal = Field(..., ge=0)


class RentalDaysResponse(BaseModel):
    billed_days: int
    full_days: int
    remainder_hours: float
    exact_duration_hours: float
    exceeds_tolerance: bool
    formatted_duration: str
    formatted_total: str
    hour_tolerance: int
    warning: Optional[str] = None


class RentalQuoteResponse(BaseModel):
    billed_days: int
    daily_rate: Decimal
    rental_amount: Decimal
    extra_day_amount: Decimal
    currency: str


class BookingRentalDaysResponse(BaseModel):
    booking_id: str
    reference_code: str
    rental_days: RentalDaysResponse
    quote: Optional[RentalQuoteResponse] = None


class CreateBookingRequest(BaseModel):
    reference_code: str = Field(..., min_length=1, max_length=50)
    client_name: str = Field(..., min_length=1, max_length=200)
    client_email: Optional[str] = Field(None, max_length=255)
    car_model: str = Field(..., min_length=1, max_length=100)
    car_plate: str = Field(..., min_length=1, max_length=20)
    delivery_datetime: datetime
    collection_datetime: datetime
    rental_day_hour_tolerance: Optional[int] = None
    daily_rate: Optional[Decimal] = Field(None, ge=0)
    amount_total: Decimal = Field(Decimal("0"), ge=0)
    payment_amount_percent: Optional[int] = Field(None, ge=1, le=100)
    security_deposit_amount: Decimal = Field(Decimal("0"), ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    status: Literal["draft", "confirmed", "cancelled"] = "draft"


class UpdateScheduleRequest(BaseModel):
    delivery_datetime: Optional[datetime] = None
    collection_datetime: Optional[datetime] = None
    rental_day_hour_tolerance: Optional[int] = None
    confirm_extra_day: bool = False


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    reference_code: str
    client_name: str
    client_email: Optional[str] = None
    car_model: str
    car_plate: str
    delivery_datetime: datetime
    collection_datetime: datetime
    rental_day_hour_tolerance: int
    daily_rate: Optional[Decimal] = None
    amount_total: Decimal
    payment_amount_percent: Optional[int] = None
    security_deposit_amount: Decimal
    currency: str
    status: str


class ScheduleUpdateResponse(BaseModel):
    booking: BookingResponse
    rental_days: RentalDaysResponse


class RecordPaymentRequest(BaseModel):
    amount: Decimal = Field(..., gt=0)
    intent: Optional[str] = Field("client_payment", max_length=32)
    link_status: Optional[
        Literal["pending", "active", "paid", "expired", "cancelled"]
    ] = None
    method: Optional[str] = Field(None, max_length=32)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    paid_at: Optional[datetime] = None
    transaction_id: Optional[str] = Field(None, max_length=128)
    note: Optional[str] = None


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    booking_id: str
    intent: Optional[str] = None
    link_status: Optional[str] = None
    method: Optional[str] = None
    amount: Decimal
    currency: str
    paid_at: Optional[datetime] = None
    transaction_id: Optional[str] = None


class RecordSecurityDepositRequest(BaseModel):
    amount: Decimal = Field(..., gt=0)
    status: Literal["pending", "authorized", "released", "captured"] = "pending"
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    authorized_at: Optional[datetime] = None


class SecurityDepositResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    booking_id: str
    amount: Decimal
    currency: str
    status: str
    authorized_at: Optional[datetime] = None


class PaymentStatusResponse(BaseModel):
    booking_id: str
    currency: str
    status: str
    amount_total: Decimal
    amount_paid: Decimal
    balance_due: Decimal
    initial_payment_amount: Decimal
    balance_percent: int
    initial_payment_id: Optional[str] = None
    initial_payment_status: Optional[str] = None
    balance_settled: bool
    balance_link_id: Optional[str] = None
    security_deposit_id: Optional[str] = None
    security_deposit_status: Optional[str] = None
    paid_payment_ids: List[str] = []


class HealthResponse(BaseModel):
    ok: bool = True
