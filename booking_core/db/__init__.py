from .database import get_engine, get_sessionmaker
from .models import Base, Booking, Payment, SecurityDeposit

__all__ = [
    "get_engine",
    "get_sessionmaker",
    "Base",
    "Booking",
    "Payment",
    "SecurityDeposit",
]
