"""
Tests for the logging module.
"""

import json
import logging

import pytest
import structlog


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_development_mode(self):
        """Test that development mode uses console renderer."""
        from core.logging import configure_logging

        # Should not raise
        configure_logging(json_logs=False, log_level="DEBUG")

    def test_configure_production_mode(self):
        """Test that production mode uses JSON renderer."""
        from core.logging import configure_logging

        # Should not raise
        configure_logging(json_logs=True, log_level="INFO")

    def test_configure_log_level(self):
        """Test that log level is correctly set."""
        from core.logging import configure_logging

        configure_logging(log_level="WARNING")

        assert logging.getLogger().level == logging.WARNING

    def test_quiets_http_client_loggers(self):
        from core.logging import configure_logging

        configure_logging(log_level="DEBUG")

        assert logging.getLogger("openai").level == logging.WARNING
        assert logging.getLogger("urllib3").level == logging.WARNING


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_named_logger(self):
        """Test getting a named logger."""
        from core.logging import get_logger

        logger = get_logger("test.module")

        assert logger is not None
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")

    def test_logger_can_log(self):
        """Test that logger can actually log messages."""
        from core.logging import configure_logging, get_logger

        configure_logging(json_logs=False, log_level="DEBUG")
        logger = get_logger("test")

        # Should not raise
        logger.info("Board imported", board_id="b1", imported=40)
        logger.debug("Embedding cache lookup", hits=3, misses=1)
        logger.warning("Skipped invalid catalog entries", skipped=2)
        logger.error("Request failed", error="test error")


class TestContextBinding:
    """Tests for context binding functions."""

    def test_bind_context(self):
        """Test binding context variables."""
        from core.logging import bind_context, clear_context

        clear_context()
        bind_context(request_id="abc", path="/api/ai/rank-products")

        ctx = structlog.contextvars.get_contextvars()
        assert ctx.get("request_id") == "abc"
        assert ctx.get("path") == "/api/ai/rank-products"

        clear_context()

    def test_clear_context(self):
        """Test clearing context variables."""
        from core.logging import bind_context, clear_context

        bind_context(request_id="123")
        clear_context()

        assert "request_id" not in structlog.contextvars.get_contextvars()

    def test_unbind_specific_context(self):
        """Test unbinding specific context variables."""
        from core.logging import bind_context, clear_context, unbind_context

        clear_context()
        bind_context(request_id="abc", method="POST", board_id="b1")

        unbind_context("board_id")

        ctx = structlog.contextvars.get_contextvars()
        assert ctx.get("request_id") == "abc"
        assert "board_id" not in ctx

        clear_context()


class TestJSONOutput:
    """Tests for JSON logging output."""

    def test_json_output_is_valid_json(self, capsys):
        """Test that JSON output is valid JSON."""
        from core.logging import configure_logging, get_logger

        configure_logging(json_logs=True, log_level="INFO")
        logger = get_logger("json_test")

        logger.info("Test message", key="value")

        captured = capsys.readouterr()

        if captured.out:
            for line in captured.out.strip().split("\n"):
                if line:
                    data = json.loads(line)
                    assert "event" in data or "message" in data


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
