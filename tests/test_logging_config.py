import logging

import pytest

from twitter_mcp.logging_config import mcp_logger, setup_logging


@pytest.fixture
def restore_tool_logger():
    level, handlers = mcp_logger.level, list(mcp_logger.handlers)
    yield
    for handler in mcp_logger.handlers:
        if handler not in handlers:
            mcp_logger.removeHandler(handler)
            handler.close()
    mcp_logger.setLevel(level)


def test_tool_logger_follows_configured_level(tmp_path, restore_tool_logger):
    setup_logging(tmp_path, "WARNING")

    assert mcp_logger.level == logging.WARNING
    assert not mcp_logger.isEnabledFor(logging.INFO)


def test_tool_calls_are_written_as_json(tmp_path, restore_tool_logger):
    setup_logging(tmp_path, "DEBUG")

    mcp_logger.info("Tool call", extra={"tool_name": "get_trends", "success": True})
    for handler in mcp_logger.handlers:
        handler.flush()

    written = (tmp_path / "mcp_tools.log").read_text(encoding="utf-8")
    assert mcp_logger.level == logging.DEBUG
    assert '"tool_name": "get_trends"' in written
