from .booking import BookingRepository
from .payment import PaymentRepository
from .security_deposit import SecurityDepositRepository

__all__ = [
    "BookingRepository",
    "PaymentRepository",
    "SecurityDepositRepository",
]
