"""Tests for logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

from modpull.core.logging import configure_logging, get_logger, resolve_log_level


class TestResolveLogLevel:
    def test_default_is_warning(self) -> None:
        assert resolve_log_level() == logging.WARNING

    def test_quiet_wins(self) -> None:
        assert resolve_log_level(quiet=True, debug=True, verbose=True) == logging.ERROR

    def test_debug_over_verbose(self) -> None:
        assert resolve_log_level(debug=True, verbose=True) == logging.DEBUG

    def test_verbose(self) -> None:
        assert resolve_log_level(verbose=True) == logging.INFO


def test_log_file_receives_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "modpull.log"
    package_logger = logging.getLogger("modpull")
    before = list(package_logger.handlers)
    try:
        configure_logging(verbose=True, log_file=log_file)
        get_logger("modpull.test").warning("hello from test")
        for handler in package_logger.handlers:
            handler.flush()
        assert "hello from test" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(package_logger.handlers):
            if handler not in before:
                package_logger.removeHandler(handler)
                handler.close()


def test_get_logger_default_name() -> None:
    assert get_logger().name == "modpull"
