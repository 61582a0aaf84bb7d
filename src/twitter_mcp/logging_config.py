"""Logging configuration for the MCP server with daily rotating JSON tool logs."""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON logs."""

    def format(self, record):
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "tool_name": getattr(record, "tool_name", None),
            "input_params": getattr(record, "input_params", None),
            "output_data": getattr(record, "output_data", None),
            "execution_time_ms": getattr(record, "execution_time_ms", None),
            "success": getattr(record, "success", None),
            "error": getattr(record, "error", None),
            "message": record.getMessage(),
        }

        # Remove None values to keep logs clean
        log_data = {k: v for k, v in log_data.items() if v is not None}

        return json.dumps(log_data, ensure_ascii=False, default=str)


# Tool-call logger; handlers are attached by setup_logging()
mcp_logger = logging.getLogger("mcp_tools")


def setup_logging(log_dir: Path, level: str = "INFO") -> logging.Logger:
    """
    Set up logging for the server process.

    Module loggers go to stderr: stdout carries the MCP stdio stream and
    anything written there corrupts the protocol. Tool calls additionally go
    to a daily rotating JSON file under ``log_dir``.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    log_dir.mkdir(parents=True, exist_ok=True)

    # Configure daily rotating file handler
    log_file = log_dir / "mcp_tools.log"
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(log_file),
        when="midnight",
        interval=1,
        backupCount=30,  # Keep 30 days of logs
        encoding="utf-8",
        utc=True,
    )

    # Set filename suffix for rotated files (YYYY-MM-DD)
    handler.suffix = "%Y-%m-%d"
    handler.setFormatter(JSONFormatter())

    mcp_logger.setLevel(level)
    mcp_logger.addHandler(handler)

    # Prevent duplicate logs from propagating to root logger
    mcp_logger.propagate = False

    return mcp_logger
