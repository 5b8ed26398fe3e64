import logging

import pytest
from loguru import logger

from booking_core.config.logging import setup_logging
from booking_core.config.settings import Settings


@pytest.fixture
def messages():
    setup_logging(Settings())
    captured = []
    sink_id = logger.add(lambda message: captured.append(message.record), level=0)
    yield captured
    logger.remove(sink_id)


def test_uvicorn_records_reach_loguru(messages):
    logging.getLogger("uvicorn").warning("server shutting down")

    record = next(r for r in messages if r["message"] == "server shutting down")
    assert record["level"].name == "WARNING"


def test_stdlib_levels_are_preserved(messages):
    logging.getLogger("booking_core.tests").error("upstream failed")
    logging.getLogger("booking_core.tests").log(5, "custom level")

    levels = {r["message"]: r["level"].name for r in messages}
    assert levels["upstream failed"] == "ERROR"
    assert levels["custom level"] == "Level 5"
