"""The uniform response wrapper returned for every tool call."""

import json
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Envelope:
    """
    A single text content item: pretty-printed JSON for structured results,
    the message itself for plain confirmations, ``Error: ...`` for failures.
    """

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, result: Any) -> "Envelope":
        if isinstance(result, str):
            return cls(text=result)
        return cls(text=json.dumps(result, indent=2, ensure_ascii=False, default=str))

    @classmethod
    def error(cls, message: str) -> "Envelope":
        return cls(text=f"Error: {message}", is_error=True)

    def to_dict(self) -> Dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}]}
