"""Tests for structlog configuration."""

from __future__ import annotations

import logging

import pytest
import structlog

from homebase.config.logging import configure_logging, level_for


@pytest.fixture(autouse=True)
def _restore_root_handlers():
    root = logging.getLogger()
    saved = list(root.handlers)
    yield
    root.handlers[:] = saved
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_warning_by_default(self) -> None:
        configure_logging()
        assert logging.getLogger("homebase").level == logging.WARNING

    def test_verbose(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("homebase").level == logging.DEBUG

    def test_quiet_hides_warnings(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("homebase").level == logging.ERROR

    def test_verbose_beats_quiet(self) -> None:
        assert level_for(verbose=True, quiet=True) == logging.DEBUG

    def test_json_lines(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("homebase.test").debug("hello %s", "there")
        err = capsys.readouterr().err
        assert '"event": "hello there"' in err
        assert '"logger": "homebase.test"' in err

    def test_single_stderr_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1
