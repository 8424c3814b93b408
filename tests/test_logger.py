"""Tests for logging setup."""

import logging
import sys

import pytest
from loguru import logger

from medremind.logger import InterceptHandler, setup_logging


@pytest.fixture
def restore_loguru():
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_setup_logging_writes_main_and_error_files(tmp_path, restore_loguru):
    log_file = tmp_path / "logs" / "medremind.log"
    setup_logging(log_level="DEBUG", log_file=log_file, console_level="WARNING")

    logger.info("提醒扫描 2024-01-01 09:00")
    logger.error("发送提醒失败")
    logger.complete()

    assert "提醒扫描" in log_file.read_text(encoding="utf-8")
    error_text = (tmp_path / "logs" / "medremind_error.log").read_text(encoding="utf-8")
    assert "发送提醒失败" in error_text
    assert "提醒扫描" not in error_text


def test_uvicorn_logs_are_forwarded(tmp_path, restore_loguru):
    log_file = tmp_path / "medremind.log"
    setup_logging(log_level="INFO", log_file=log_file, console_level="CRITICAL")

    uvicorn_logger = logging.getLogger("uvicorn.error")
    assert isinstance(uvicorn_logger.handlers[0], InterceptHandler)

    uvicorn_logger.warning("Application startup complete.")
    assert "Application startup complete." in log_file.read_text(encoding="utf-8")
