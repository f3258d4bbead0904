"""Tests for logging setup and performance timing."""
import logging

import pytest
from reconfig.utils.logging_config import (
    get_log_file,
    get_log_level,
    main_logger,
    perf_logger,
    setup_logging,
    timed,
    timed_section_sync,
)


class Parser:
    source = "router.cfg"

    @timed("parse")
    def parse(self, fail=False):
        if fail:
            raise ValueError("bad line")
        return 3


@pytest.fixture
def perf_records(caplog, monkeypatch):
    monkeypatch.setattr(perf_logger, "propagate", True)
    caplog.set_level(logging.INFO, logger="reconfig.perf")
    return caplog


class TestEnvironment:
    """Tests for environment lookups."""

    def test_log_level(self, monkeypatch):
        monkeypatch.setenv("RECONFIG_LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    def test_unknown_log_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("RECONFIG_LOG_LEVEL", "chatty")
        assert get_log_level() == logging.INFO

    def test_log_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RECONFIG_LOG_FILE", str(tmp_path / "x.log"))
        assert get_log_file() == tmp_path / "x.log"


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_loggers(self):
        yield
        for logger in (main_logger, perf_logger):
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
                handler.close()
        perf_logger.propagate = True

    def test_creates_log_files(self, monkeypatch, tmp_path):
        """Main and performance logs are written next to each other."""
        log_file = tmp_path / "logs" / "reconfig.log"
        monkeypatch.setenv("RECONFIG_LOG_FILE", str(log_file))

        setup_logging()

        assert log_file.exists()
        assert (log_file.parent / "reconfig-perf.log").exists()
        assert perf_logger.propagate is False

    def test_repeated_setup_does_not_stack_handlers(self, monkeypatch, tmp_path):
        """Calling setup twice leaves one console and one file handler."""
        monkeypatch.setenv("RECONFIG_LOG_FILE", str(tmp_path / "reconfig.log"))

        setup_logging()
        setup_logging()

        assert len(main_logger.handlers) == 2
        assert len(perf_logger.handlers) == 2


class TestTimed:
    """Tests for the timing decorator and context manager."""

    def test_success_is_logged(self, perf_records):
        """The operation and the instance's source are logged with OK."""
        assert Parser().parse() == 3

        messages = [r.getMessage() for r in perf_records.records]
        assert any("parse" in m and "router.cfg" in m and "OK" in m for m in messages)

    def test_failure_is_logged_and_raised(self, perf_records):
        """Failures are logged as warnings and re-raised."""
        with pytest.raises(ValueError):
            Parser().parse(fail=True)

        failures = [r for r in perf_records.records if r.levelno == logging.WARNING]
        assert len(failures) == 1
        assert "FAIL: bad line" in failures[0].getMessage()

    def test_section_extra_context(self, perf_records):
        """Extra keyword context is appended to the timing line."""
        with timed_section_sync("set", source="<string>", lines=4):
            pass

        message = perf_records.records[-1].getMessage()
        assert "set" in message
        assert "lines=4" in message

    def test_section_failure(self, perf_records):
        with pytest.raises(KeyError):
            with timed_section_sync("set"):
                raise KeyError("missing")

        assert "FAIL" in perf_records.records[-1].getMessage()
