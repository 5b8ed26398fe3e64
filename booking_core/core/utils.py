from datetime import datetime, timezone
from uuid import uuid4 as _uuid4


def uuid4() -> str:
    return str(_uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
