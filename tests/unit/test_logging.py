"""Unit tests for structured logging."""
# ruff: noqa: ARG002  # Fixtures used for setup side effects

import logging
from unittest.mock import MagicMock, patch

import pytest
import structlog

from dashsearch.core.logging import (
    LogContext,
    add_environment_info,
    bind_contextvars,
    clear_contextvars,
    get_logger,
    log_database_query,
    setup_logging,
    unbind_contextvars,
)


@pytest.fixture(autouse=True)
def restore_stdlib_logging():
    """Restore handlers and levels changed by setup_logging."""
    root = logging.getLogger()
    sqlalchemy_logger = logging.getLogger("sqlalchemy")
    engine_logger = logging.getLogger("sqlalchemy.engine")
    saved = (
        list(root.handlers),
        root.level,
        list(sqlalchemy_logger.handlers),
        sqlalchemy_logger.level,
        sqlalchemy_logger.propagate,
        engine_logger.level,
    )
    yield
    root.handlers = saved[0]
    root.setLevel(saved[1])
    sqlalchemy_logger.handlers = saved[2]
    sqlalchemy_logger.setLevel(saved[3])
    sqlalchemy_logger.propagate = saved[4]
    engine_logger.setLevel(saved[5])


class TestAddEnvironmentInfo:
    """Tests for add_environment_info processor."""

    def test_adds_environment(self):
        """Test environment is added to event dict."""
        mock_settings = MagicMock()
        mock_settings.ENVIRONMENT = "production"

        with patch("dashsearch.core.logging.get_settings", return_value=mock_settings):
            event_dict = {}
            result = add_environment_info(None, "info", event_dict)

            assert result["environment"] == "production"


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self, patch_settings):
        """Test logging setup with default settings."""
        patch_settings.log_level = "INFO"

        setup_logging()

        assert logging.getLogger().level == logging.INFO
        assert get_logger("test") is not None

    def test_setup_logging_json_format(self, patch_settings):
        """Test logging setup with JSON format."""
        patch_settings.ENVIRONMENT = "production"

        setup_logging(json_format=True)

        assert get_logger("test") is not None

    def test_setup_logging_custom_level(self, patch_settings):
        """Test logging setup with custom log level."""
        setup_logging(log_level="WARNING")

        assert logging.getLogger().level == logging.WARNING

    def test_sqlalchemy_quiet_by_default(self, patch_settings):
        """Test SQLAlchemy engine logging is held at WARNING."""
        setup_logging()

        assert logging.getLogger("sqlalchemy").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("sqlalchemy").propagate is False

    def test_sqlalchemy_engine_echo_in_debug(self, patch_settings):
        """Test DEBUG settings enable SQLAlchemy statement logging."""
        patch_settings.DEBUG = True

        setup_logging()

        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

    def test_json_output_format(self, patch_settings, capsys):
        """Test JSON format renders structlog events as JSON lines."""
        setup_logging(log_level="INFO", json_format=True, add_timestamp=False)

        get_logger("dashsearch.test").info("search_started", terms="foo")

        out = capsys.readouterr().out.strip()
        assert '"event": "search_started"' in out
        assert '"terms": "foo"' in out
        assert '"environment": "test"' in out


class TestLogContext:
    """Tests for LogContext context manager."""

    def test_log_context_binds_values(self):
        """Test that LogContext binds values during block."""
        clear_contextvars()

        with LogContext(dashboard="Customer", search_mode="fuzzy"):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx.get("dashboard") == "Customer"
            assert ctx.get("search_mode") == "fuzzy"

        ctx = structlog.contextvars.get_contextvars()
        assert "dashboard" not in ctx
        assert "search_mode" not in ctx


class TestContextVarsFunctions:
    """Tests for context variable functions."""

    def test_bind_unbind_contextvars(self):
        """Test binding and unbinding context variables."""
        clear_contextvars()

        bind_contextvars(key1="value1", key2="value2")

        ctx = structlog.contextvars.get_contextvars()
        assert ctx.get("key1") == "value1"
        assert ctx.get("key2") == "value2"

        unbind_contextvars("key1")

        ctx = structlog.contextvars.get_contextvars()
        assert "key1" not in ctx
        assert ctx.get("key2") == "value2"

    def test_clear_contextvars(self):
        """Test clearing all context variables."""
        bind_contextvars(key1="value1", key2="value2")

        clear_contextvars()

        assert structlog.contextvars.get_contextvars() == {}


class TestLogHelpers:
    """Tests for logging helper functions."""

    @pytest.fixture
    def mock_logger(self):
        """Create mock logger."""
        return MagicMock()

    def test_log_database_query(self, mock_logger):
        """Test logging database query."""
        log_database_query(mock_logger, "search", "customers", 15.456, row_count=10)

        mock_logger.debug.assert_called_once()
        args, kwargs = mock_logger.debug.call_args
        assert args[0] == "database_query"
        assert kwargs["query_type"] == "search"
        assert kwargs["table"] == "customers"
        assert kwargs["duration_ms"] == 15.46
        assert kwargs["row_count"] == 10
