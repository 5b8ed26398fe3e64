from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from booking_core.core.rental_days import MAX_HOUR_TOLERANCE, MIN_HOUR_TOLERANCE


def find_env_file() -> str:
    env_file = ".env" if Path("/.dockerenv").exists() else ".env.local"

    current_path = Path.cwd()

    for path in [current_path] + list(current_path.parents):
        env_path = path / env_file
        if env_path.exists():
            return str(env_path)

    return env_file


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=find_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "postgresql+psycopg2://app:app@db:5432/bookings"
    create_schema: bool = True  # create missing tables on startup

    # Rental day policy
    default_hour_tolerance: int = 1  # applied when a booking has none set
    min_hour_tolerance: int = MIN_HOUR_TOLERANCE
    max_hour_tolerance: int = MAX_HOUR_TOLERANCE
    default_currency: str = "CHF"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False  # serialize records for log shippers

    @model_validator(mode="after")
    def check_tolerance_bounds(self) -> "Settings":
        if not (
            MIN_HOUR_TOLERANCE
            <= self.min_hour_tolerance
            <= self.max_hour_tolerance
            <= MAX_HOUR_TOLERANCE
        ):
            raise ValueError(
                f"hour tolerance bounds must satisfy {MIN_HOUR_TOLERANCE} <= min <= max "
                f"<= {MAX_HOUR_TOLERANCE}, got {self.min_hour_tolerance}..{self.max_hour_tolerance}"
            )
        if not self.min_hour_tolerance <= self.default_hour_tolerance <= self.max_hour_tolerance:
            raise ValueError(
                f"default_hour_tolerance {self.default_hour_tolerance} is outside "
                f"{self.min_hour_tolerance}..{self.max_hour_tolerance}"
            )
        return self
