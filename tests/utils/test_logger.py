"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
import re
from unittest.mock import patch

import focustimer_cli.utils.logger as logger_mod
from focustimer_cli.utils.logger import get_child_logger, get_logger, log_file_path


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()

    assert (tmp_path / "focustimer.log").exists()
    assert isinstance(logger, logging.Logger)


def test_get_logger_returns_singleton(tmp_path):
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert get_logger() is get_logger()


def test_get_logger_writes_message(tmp_path):
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()
        logger.info("hello from test")
        _flush(logger)

    content = (tmp_path / "focustimer.log").read_text()
    assert "hello from test" in content
    assert "INFO" in content


def test_logger_does_not_propagate(tmp_path):
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert get_logger().propagate is False


def test_single_handler_after_reinitialisation(tmp_path):
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        get_logger()
        logger_mod._logger = None
        logger = get_logger()
    assert len(logger.handlers) == 1


def test_child_logger_shares_file(tmp_path):
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        child = get_child_logger("engine")
        child.warning("phase complete")
        _flush(get_logger())

    assert child.name == "focustimer_cli.engine"
    content = (tmp_path / "focustimer.log").read_text()
    assert "[focustimer_cli.engine] phase complete" in content


def test_log_file_path_follows_user_log_dir(tmp_path):
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert log_file_path() == tmp_path / "focustimer.log"


def test_rotates_at_one_megabyte(tmp_path):
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        [handler] = get_logger().handlers
    assert isinstance(handler, logging.handlers.RotatingFileHandler)
    assert handler.maxBytes == 1024 * 1024
    assert handler.backupCount == 2


def test_lines_carry_milliseconds(tmp_path):
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()
        logger.info("tick")
        _flush(logger)
    line = (tmp_path / "focustimer.log").read_text().splitlines()[-1]
    assert re.match(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3} INFO", line)
