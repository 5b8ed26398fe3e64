from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from booking_core.api.v1 import bookings, health, rental_days
from booking_core.config.logging import setup_logging
from booking_core.config.settings import Settings
from booking_core.db.database import get_engine
from booking_core.db.models import Base
from booking_core.monitoring.metrics import init_app_info, setup_instrumentator

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting booking-core service")

    settings = Settings()
    if settings.create_schema:
        engine = get_engine(settings.database_url)
        Base.metadata.create_all(engine)
        engine.dispose()

    yield
    logger.info("Shutting down booking-core service")


def create_app() -> FastAPI:
    setup_logging(Settings())

    app = FastAPI(
        title="Booking Core Service",
        description="Rental day proration and payment state for car rental bookings",
        version=VERSION,
        lifespan=lifespan,
    )

    instrumentator = setup_instrumentator()
    instrumentator.instrument(app).expose(app)

    init_app_info(VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(rental_days.router, prefix="/api/v1", tags=["rental-days"])
    app.include_router(bookings.router, prefix="/api/v1", tags=["bookings"])

    return app


def main():
    import uvicorn

    uvicorn.run(
        "booking_core.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_config=None,
    )


app = create_app()


if __name__ == "__main__":
    main()
