"""
RFC-3339 timestamp handling (SSOT).

Every date-bearing field and query parameter goes through this module so that
the whole API surface encodes timestamps the same way.

Rules:
- Output is second precision: YYYY-MM-DDTHH:MM:SSZ or YYYY-MM-DDTHH:MM:SS+HH:MM
- Naive datetimes are treated as UTC
- Parsing accepts "Z", numeric offsets and fractional seconds of any length
"""

import re
from datetime import datetime, timezone

# Go servers emit up to nine fractional digits; datetime keeps six.
_FRACTION_RE = re.compile(r"\.(\d+)")


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an RFC-3339 string."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    offset = value.utcoffset()
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if not offset:
        return f"{text}Z"

    offset_seconds = offset.total_seconds()
    sign = "+" if offset_seconds >= 0 else "-"
    # Sub-minute offsets are truncated toward zero
    hours, minutes = divmod(int(abs(offset_seconds)) // 60, 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def parse_timestamp(text: str) -> datetime:
    """
    Parse an RFC-3339 string into a timezone-aware datetime.

    Raises:
        ValueError: If the text is not a valid RFC-3339 timestamp
    """
    if not isinstance(text, str):
        raise ValueError(f"Expected timestamp string, got {type(text).__name__}")

    normalized = text.strip()
    if normalized[-1:] in ("Z", "z"):
        normalized = normalized[:-1] + "+00:00"
    normalized = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), normalized, count=1)

    parsed = datetime.fromisoformat(normalized)
    if parsed.tzinfo is None:
        raise ValueError(f"Timestamp has no UTC offset: {text!r}")
    return parsed
