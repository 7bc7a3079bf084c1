"""Tests for loguru configuration and the stdlib intercept."""

import json
import logging

import pytest
from loguru import logger

from src.products_ms.api.utils.app_startup import configure_logging
from src.products_ms.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    LoggingConfig,
)


@pytest.fixture(autouse=True)
def reset_loguru():
    yield
    logger.remove()
    logging.basicConfig(handlers=[], force=True)


def read_records(path) -> list[dict]:
    logger.complete()
    return [json.loads(line) for line in path.read_text().splitlines() if line]


def test_json_file_sink_carries_message_context(tmp_path):
    log_file = tmp_path / "logs" / "products.log"
    config = ConfigData(
        app=AppConfig(environment="test"),
        logging=LoggingConfig(level="DEBUG", format="json", file=str(log_file)),
    )

    configure_logging(config)
    with logger.contextualize(request_id="req-7", pattern='{"cmd":"find_one_product"}'):
        logger.info("message.start")

    records = read_records(log_file)
    start = next(r for r in records if r["record"]["message"] == "message.start")
    assert start["record"]["extra"]["request_id"] == "req-7"
    assert start["record"]["extra"]["pattern"] == '{"cmd":"find_one_product"}'


def test_default_context_outside_messages(tmp_path):
    log_file = tmp_path / "products.log"
    configure_logging(
        ConfigData(logging=LoggingConfig(format="json", file=str(log_file)))
    )

    logger.info("outside")

    records = read_records(log_file)
    outside = next(r for r in records if r["record"]["message"] == "outside")
    assert outside["record"]["extra"]["request_id"] == "-"


def test_stdlib_records_are_intercepted(tmp_path):
    log_file = tmp_path / "products.log"
    configure_logging(
        ConfigData(logging=LoggingConfig(format="json", file=str(log_file)))
    )

    logging.getLogger("products.stdlib").warning("from stdlib")

    records = read_records(log_file)
    intercepted = next(r for r in records if r["record"]["message"] == "from stdlib")
    assert intercepted["record"]["level"]["name"] == "WARNING"
    assert intercepted["record"]["extra"]["logger_name"] == "products.stdlib"


def test_noisy_libraries_are_quietened():
    configure_logging(ConfigData(logging=LoggingConfig(level="DEBUG")))

    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert logging.getLogger("redis").level == logging.WARNING
