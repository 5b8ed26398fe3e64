from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from booking_core.config.settings import Settings
from booking_core.core.exceptions import InvalidToleranceError
from booking_core.services.rental_days import RentalDaysService

START = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_tolerance_bound_defaults():
    settings = Settings()

    assert settings.min_hour_tolerance == 1
    assert settings.max_hour_tolerance == 12
    assert settings.default_hour_tolerance == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_hour_tolerance": 13},
        {"min_hour_tolerance": 0},
        {"min_hour_tolerance": 6, "max_hour_tolerance": 4},
        {"default_hour_tolerance": 8, "max_hour_tolerance": 6},
    ],
)
def test_tolerance_bounds_must_fit_stored_range(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_tolerance_bounds_read_from_environment(monkeypatch):
    monkeypatch.setenv("MAX_HOUR_TOLERANCE", "6")

    assert Settings().max_hour_tolerance == 6


def test_service_applies_configured_bounds():
    service = RentalDaysService(None, Settings(max_hour_tolerance=6))

    calc = service.compute(START, START + timedelta(days=1, hours=5), 6, source="adhoc")
    assert calc.billed_days == 1

    with pytest.raises(InvalidToleranceError, match="between 1 and 6"):
        service.compute(START, START + timedelta(days=1), 8, source="adhoc")
