"""Decorator for automatically logging dispatched tool calls."""

import json
import time
from functools import wraps
from typing import Any, Callable

from .logging_config import mcp_logger

# Base64 media can be megabytes long
MAX_PARAM_CHARS = 200
MAX_OUTPUT_CHARS = 10000


def _shorten(value: Any) -> Any:
    if isinstance(value, str) and len(value) > MAX_PARAM_CHARS:
        return f"{value[:MAX_PARAM_CHARS]}... ({len(value)} chars)"
    if isinstance(value, dict):
        return {k: _shorten(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_shorten(v) for v in value]
    return value


def log_tool_calls(func: Callable) -> Callable:
    """
    Decorator for ``Dispatcher.dispatch`` that logs each call with its input,
    the resulting envelope and the execution time.
    """

    @wraps(func)
    async def wrapper(self, call, *args, **kwargs):
        start_time = time.time()
        tool_name = call.name
        input_params = _shorten(dict(call.arguments or {}))

        mcp_logger.info(
            f"Tool {tool_name} started",
            extra={"tool_name": tool_name, "input_params": input_params},
        )

        try:
            envelope = await func(self, call, *args, **kwargs)
        except Exception as e:
            execution_time_ms = int((time.time() - start_time) * 1000)
            mcp_logger.error(
                f"Tool {tool_name} failed with error: {str(e)}",
                extra={
                    "tool_name": tool_name,
                    "input_params": input_params,
                    "execution_time_ms": execution_time_ms,
                    "success": False,
                    "error": str(e),
                },
            )
            raise

        execution_time_ms = int((time.time() - start_time) * 1000)

        # Truncate large outputs
        output_data = envelope.text
        if len(output_data) > MAX_OUTPUT_CHARS:
            output_data = json.dumps({"_truncated": True, "_size": len(output_data)})

        mcp_logger.info(
            f"Tool {tool_name} completed" + (" with error" if envelope.is_error else " successfully"),
            extra={
                "tool_name": tool_name,
                "input_params": input_params,
                "output_data": output_data,
                "execution_time_ms": execution_time_ms,
                "success": not envelope.is_error,
                "error": envelope.text if envelope.is_error else None,
            },
        )
        return envelope

    return wrapper
