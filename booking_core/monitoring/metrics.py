from prometheus_client import Counter, Histogram, Info
from prometheus_fastapi_instrumentator import Instrumentator

# Business metrics - booking core specific
rental_days_calculations_total = Counter(
    "booking_core_rental_days_calculations_total",
    "Total number of rental day calculations",
    ["source", "outcome"],  # source=adhoc/booking/schedule, outcome=ok/invalid_window/invalid_tolerance
)

tolerance_exceeded_total = Counter(
    "booking_core_tolerance_exceeded_total",
    "Calculations where the collection time exceeded the hour tolerance",
    ["source"],
)

billed_days_histogram = Histogram(
    "booking_core_billed_days",
    "Billed rental days per calculation",
    ["source"],
    buckets=[1, 2, 3, 5, 7, 14, 30, 60, 90],
)

bookings_total = Counter(
    "booking_core_bookings_total",
    "Total number of bookings created",
    ["status"],  # status=draft/confirmed/cancelled
)

payments_recorded_total = Counter(
    "booking_core_payments_recorded_total",
    "Total number of payment records stored",
    ["intent"],
)

security_deposits_recorded_total = Counter(
    "booking_core_security_deposits_recorded_total",
    "Total number of security deposit records stored",
    ["status"],
)

# Application info
app_info = Info("booking_core_app_info", "Application information")


def setup_instrumentator() -> Instrumentator:
    return Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_respect_env_var=False,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics", "/api/v1/health"],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )


def init_app_info(version: str = "1.0.0"):
    app_info.info({"version": version, "service": "booking-core", "component": "api"})
