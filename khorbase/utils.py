"""Small helpers for strings, times and JSON."""

from __future__ import annotations

import json
import re
from datetime import datetime, timedelta, timezone
from typing import Any

_EPOCH = datetime(1970, 1, 1)
_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)

_TAG_RE = re.compile(r"<[^>]*(>|\Z)")
_NBSP_RE = re.compile(r"&nbsp;")


def escape_string(s: str) -> str:
    """Escape single quotes and newlines; drop carriage returns."""
    return s.replace("\r", "").replace("'", "\\'").replace("\n", "\\n")


def epoch_diff(moment: datetime) -> timedelta:
    """Time elapsed from the Unix epoch to ``moment``."""
    epoch = _EPOCH_UTC if moment.tzinfo is not None else _EPOCH
    return moment - epoch


def epoch_microseconds_to_datetime(microseconds: int) -> datetime:
    return _EPOCH + timedelta(microseconds=microseconds)


def epoch_milliseconds_to_datetime(milliseconds: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=milliseconds)


def clear_html_tags(source: str) -> str:
    """Strip HTML tags, trim line breaks and turn ``&nbsp;`` into spaces."""
    stripped = _TAG_RE.sub("", source).strip("\r\n")
    return _NBSP_RE.sub(" ", stripped)


def json_string(value: Any) -> str:
    """Serialise ``value`` as compact JSON with sorted keys."""
    return json.dumps(value, separators=(",", ":"), sort_keys=True)


def parse_json(text: str) -> Any:
    """Parse a JSON document; raises ValueError when it is malformed."""
    return json.loads(text)


def compact_uuid(uuid: str) -> str:
    """Remove the dashes from a textual UUID."""
    return uuid.replace("-", "")