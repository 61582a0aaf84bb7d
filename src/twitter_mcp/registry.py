"""Static table of the tools this server exposes."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Mapping, Optional

Handler = Callable[[Any, Any], Awaitable[Any]]
Parser = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True)
class ToolSpec:
    """
    Everything the dispatcher needs to run one tool.

    ``required`` maps each required argument to the message returned when it
    is missing. ``parse`` turns the raw argument bag into the handler's typed
    arguments. ``failure_message`` is used when an error carries no text.
    """

    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: Handler
    parse: Parser
    failure_message: str
    required: Dict[str, str] = field(default_factory=dict)
    requires_session: bool = True


class ToolRegistry:
    def __init__(self):
        self._tools: Dict[str, ToolSpec] = {}

    def register(self, spec: ToolSpec) -> ToolSpec:
        if spec.name in self._tools:
            raise ValueError(f"Tool {spec.name} is already registered")
        missing = set(spec.input_schema.get("required", [])) - set(spec.required)
        if missing:
            raise ValueError(f"Tool {spec.name} has no message for required arguments: {sorted(missing)}")
        self._tools[spec.name] = spec
        return spec

    def tool(
        self,
        name: str,
        *,
        description: str,
        schema: Dict[str, Any],
        parse: Parser,
        failure_message: str,
        required: Optional[Dict[str, str]] = None,
        requires_session: bool = True,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a handler under ``name``."""

        def decorator(handler: Handler) -> Handler:
            self.register(
                ToolSpec(
                    name=name,
                    description=description,
                    input_schema=schema,
                    handler=handler,
                    parse=parse,
                    failure_message=failure_message,
                    required=dict(required or {}),
                    requires_session=requires_session,
                )
            )
            return handler

        return decorator

    def get(self, name: str) -> Optional[ToolSpec]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


# Tools register themselves here on import of twitter_mcp.tools
registry = ToolRegistry()
