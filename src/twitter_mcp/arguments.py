"""
Coercion of the untyped argument bag received from the transport.

Every tool parses its raw arguments into a frozen dataclass with these
helpers before its handler runs, so handlers never see loosely-typed values.
"""

import base64
import binascii
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence

from social_clients import MediaAttachment

from .errors import ValidationError

DEFAULT_COUNT = 10
MAX_COUNT = 50

IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
VIDEO_TYPES = ("video/mp4", "video/quicktime")
MAX_IMAGES = 4


def is_blank(value: Any) -> bool:
    """True for absent values, whitespace-only strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def parse_count(value: Any) -> int:
    """
    Parse a requested item count.

    Absent, zero and non-numeric values fall back to the default of 10;
    everything else is clamped to [1, 50].
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_COUNT
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_COUNT
    except OverflowError:
        # Integers too large for a float
        return MAX_COUNT if value > 0 else 1
    if math.isnan(number) or number == 0:
        return DEFAULT_COUNT
    if math.isinf(number):
        return MAX_COUNT if number > 0 else 1
    return max(1, min(int(number), MAX_COUNT))


def normalize_username(value: Any) -> str:
    """Strip surrounding whitespace and one leading ``@``. Case is preserved."""
    username = str(value).strip()
    if username.startswith("@"):
        username = username[1:].strip()
    return username


def require_username(value: Any, message: str = "Username is required") -> str:
    username = normalize_username(value) if value is not None else ""
    if not username:
        raise ValidationError(message)
    return username


def parse_choice(value: Any, choices: Sequence[str], field: str) -> str:
    """Return ``value`` if it is one of ``choices``; absent means the first choice."""
    if is_blank(value):
        return choices[0]
    choice = str(value).strip()
    if choice not in choices:
        raise ValidationError(f"Invalid {field} '{choice}'. Expected one of: {', '.join(choices)}")
    return choice


def parse_date(value: Any, field: str = "date") -> Optional[str]:
    """Validate an optional ``YYYY-MM-DD`` date and return it zero-padded."""
    if is_blank(value):
        return None
    text = str(value).strip()
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"Invalid {field} '{text}'. Expected format YYYY-MM-DD")
    return parsed.date().isoformat()


def optional_str(value: Any) -> Optional[str]:
    if is_blank(value):
        return None
    return str(value).strip()


def parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


@dataclass(frozen=True)
class MediaSpec:
    """A validated, still-encoded media item. Decoded only at submission."""

    data: str
    mime_type: str

    @property
    def is_video(self) -> bool:
        return self.mime_type in VIDEO_TYPES

    def decode(self) -> MediaAttachment:
        return MediaAttachment(data=_b64decode(self.data), mime_type=self.mime_type)


def _b64decode(data: str) -> bytes:
    # Transport encodings may wrap lines
    return base64.b64decode("".join(data.split()), validate=True)


def parse_media(value: Any, field: str = "media") -> List[MediaSpec]:
    """
    Validate a list of ``{data, media_type}`` objects.

    The mime type decides the category; a post carries up to 4 images or a
    single video. Data must be valid base64.
    """
    if is_blank(value):
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{field} must be an array of media objects")

    specs = []
    for index, item in enumerate(value, start=1):
        if not isinstance(item, Mapping):
            raise ValidationError(f"{field} item {index} must be an object with data and media_type")

        data = item.get("data")
        mime_type = str(item.get("media_type") or "").strip().lower()
        if is_blank(data) or not isinstance(data, str):
            raise ValidationError(f"{field} item {index} is missing base64 data")
        if mime_type not in IMAGE_TYPES + VIDEO_TYPES:
            raise ValidationError(
                f"{field} item {index} has unsupported media_type '{mime_type}'. "
                f"Supported: {', '.join(IMAGE_TYPES + VIDEO_TYPES)}"
            )
        try:
            _b64decode(data)
        except (binascii.Error, ValueError):
            raise ValidationError(f"{field} item {index} is not valid base64 data")

        specs.append(MediaSpec(data=data, mime_type=mime_type))

    videos = [spec for spec in specs if spec.is_video]
    if videos and len(specs) > 1:
        raise ValidationError(f"{field} may contain a single video and nothing else")
    if len(specs) > MAX_IMAGES:
        raise ValidationError(f"{field} may contain at most {MAX_IMAGES} images")
    return specs
