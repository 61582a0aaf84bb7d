"""Routing of tool calls to handlers behind the uniform envelope."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .arguments import is_blank
from .envelope import Envelope
from .errors import NotReadyError, ValidationError
from .log_decorator import log_tool_calls
from .registry import ToolRegistry
from .session import SessionManager

logger = logging.getLogger("twitter_mcp.dispatcher")


@dataclass(frozen=True)
class ToolCall:
    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


class Dispatcher:
    """
    Validates tool calls, resolves their handler and wraps every outcome in an
    ``Envelope``. ``dispatch`` never raises.

    Calls arriving concurrently are not serialized: they interleave at the
    handlers' await points and share the read-only session handle.
    """

    def __init__(self, registry: ToolRegistry, sessions: SessionManager):
        self.registry = registry
        self.sessions = sessions

    @log_tool_calls
    async def dispatch(self, call: ToolCall) -> Envelope:
        spec = self.registry.get(call.name)
        if spec is None:
            return Envelope.error("Unknown tool")

        arguments: Dict[str, Any] = dict(call.arguments or {})

        # Checked before anything touches the network
        for name, message in spec.required.items():
            if is_blank(arguments.get(name)):
                return Envelope.error(message)

        client = None
        if spec.requires_session:
            try:
                client = self.sessions.current_handle()
            except NotReadyError as e:
                logger.error(f"{spec.name} called before the Twitter session was ready")
                return Envelope.error(str(e))

        try:
            args = spec.parse(arguments)
        except ValidationError as e:
            return Envelope.error(str(e))
        except Exception as e:
            logger.exception(f"Could not parse arguments for {spec.name}: {e}")
            message = str(e).strip() or f"{_failure_text(spec.failure_message, None)}. Please try again later."
            return Envelope.error(message)

        try:
            result = await spec.handler(client, args)
        except ValidationError as e:
            return Envelope.error(str(e))
        except Exception as e:
            logger.exception(f"Error in {spec.name}: {e}")
            message = str(e).strip() or f"{_failure_text(spec.failure_message, args)}. Please try again later."
            return Envelope.error(message)

        return Envelope.success(result)


def _failure_text(template: str, args: Any) -> str:
    """Fill ``{field}`` placeholders of a failure message from the parsed arguments."""
    try:
        return template.format(**vars(args))
    except (KeyError, IndexError, TypeError):
        return template
