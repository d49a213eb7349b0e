"""Unit tests for logging setup and formatters."""

import io
import json
import logging

import pytest

from scale_advisor.utils.logging import (
    ROOT_LOGGER_NAME,
    AdvisorLogger,
    HumanFormatter,
    JSONFormatter,
    LogMode,
    VerboseFormatter,
    configure_from_cli,
    get_logger,
    setup_logging,
)


def _record(msg: str = "hello", level: int = logging.INFO, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("scale_advisor.test", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Restore the package logger after each test."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestFormatters:
    """Tests for the three formatters."""

    def test_human_plain(self) -> None:
        """Test human format without colors."""
        assert HumanFormatter(use_colors=False).format(_record()) == "[INFO] hello"

    def test_human_colored(self) -> None:
        """Test human format wraps the level in color codes."""
        text = HumanFormatter(use_colors=True).format(_record(level=logging.ERROR))

        assert text.startswith("\033[31m[ERROR]")
        assert text.endswith(" hello")

    def test_verbose_has_timestamp_and_name(self) -> None:
        """Test verbose format includes time and logger name."""
        text = VerboseFormatter(use_colors=False).format(_record())

        assert text.startswith("[INFO][")
        assert text.endswith("] scale_advisor.test: hello")

    def test_json_fields(self) -> None:
        """Test JSON format carries level, time, logger and message."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "scale_advisor.test"
        assert data["msg"] == "hello"
        assert data["ts"].endswith("+00:00")

    def test_json_extra_data(self) -> None:
        """Test structured fields are merged into the JSON line."""
        record = _record(extra_data={"phase": "synthesis", "elapsed_ms": 12})

        data = json.loads(JSONFormatter().format(record))

        assert data["phase"] == "synthesis"
        assert data["elapsed_ms"] == 12


class TestSetupLogging:
    """Tests for setup_logging and configure_from_cli."""

    def test_writes_to_given_stream(self) -> None:
        """Test records go to the configured stream only."""
        stream = io.StringIO()
        setup_logging(mode=LogMode.HUMAN, stream=stream)

        get_logger("scale_advisor.unit").info("ready")

        assert stream.getvalue() == "[INFO] ready\n"
        assert logging.getLogger(ROOT_LOGGER_NAME).propagate is False

    def test_level_filters(self) -> None:
        """Test records below the level are dropped."""
        stream = io.StringIO()
        setup_logging(level=logging.WARNING, stream=stream)

        get_logger().info("hidden")
        get_logger().warning("shown")

        assert stream.getvalue() == "[WARNING] shown\n"

    def test_repeated_setup_replaces_handler(self) -> None:
        """Test setup does not stack handlers."""
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())

        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1

    def test_structured_json(self) -> None:
        """Test structured() adds its keyword data to JSON output."""
        stream = io.StringIO()
        setup_logging(mode=LogMode.JSON, stream=stream)

        logger = get_logger("scale_advisor.pipeline")
        assert isinstance(logger, AdvisorLogger)
        logger.structured(logging.INFO, "Phase done", phase="compilation", elapsed_ms=5)

        data = json.loads(stream.getvalue())
        assert data["msg"] == "Phase done"
        assert data["phase"] == "compilation"
        assert data["elapsed_ms"] == 5

    def test_structured_respects_level(self) -> None:
        """Test structured() emits nothing below the logger level."""
        stream = io.StringIO()
        setup_logging(mode=LogMode.JSON, level=logging.INFO, stream=stream)

        get_logger().structured(logging.DEBUG, "quiet", phase="x")

        assert stream.getvalue() == ""

    @pytest.mark.parametrize(
        ("flags", "level"),
        [
            ({}, logging.INFO),
            ({"verbose": True}, logging.DEBUG),
            ({"quiet": True}, logging.WARNING),
            ({"ci": True}, logging.INFO),
        ],
    )
    def test_configure_from_cli_levels(self, flags: dict, level: int) -> None:
        """Test CLI flags map to log levels."""
        configure_from_cli(**flags)

        assert logging.getLogger(ROOT_LOGGER_NAME).level == level

    def test_ci_mode_uses_json(self) -> None:
        """Test --ci selects the JSON formatter."""
        configure_from_cli(ci=True)

        (handler,) = logging.getLogger(ROOT_LOGGER_NAME).handlers
        assert isinstance(handler.formatter, JSONFormatter)
