"""Time rendering helpers for ``-time<...>`` tokens.

Patterns use the ``SimpleDateFormat`` letter vocabulary (``yyyy-MM-dd
HH:mm:ss:SSS``) so existing log layouts keep their exact shape.
"""

from __future__ import annotations

import re
import time
from datetime import UTC, date, datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_FIELD_RE = re.compile(r"'((?:[^']|'')*)'|([A-Za-z])\2*|[^A-Za-z']+|'")
_OFFSET_ZONE_RE = re.compile(r"^(?:GMT|UTC)(?P<sign>[+-])(?P<h>\d{1,2})(?::?(?P<m>\d{2}))?$", re.IGNORECASE)

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

PROCESS_START_MS = time.time_ns() // 1_000_000


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


@lru_cache(maxsize=64)
def resolve_zone(zone_id: str) -> tzinfo:
    """Resolve a zone id; unknown ids fall back to UTC."""
    zid = zone_id.strip()
    if zid.upper() in ("UTC", "GMT", "Z"):
        return UTC

    m = _OFFSET_ZONE_RE.match(zid)
    if m:
        hours = int(m.group("h"))
        minutes = int(m.group("m") or 0)
        if hours > 23 or minutes > 59:
            return UTC
        delta = timedelta(hours=hours, minutes=minutes)
        if m.group("sign") == "-":
            delta = -delta
        return timezone(delta)

    try:
        return ZoneInfo(zid)
    except (ZoneInfoNotFoundError, ValueError):
        return UTC


def _offset_parts(dt: datetime) -> tuple[str, int, int]:
    offset = dt.utcoffset() or timedelta(0)
    total = int(offset.total_seconds()) // 60
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total), 60)
    return sign, hours, minutes


def _render_field(letter: str, n: int, dt: datetime) -> str | None:
    """Render one pattern field; None for letters with no meaning."""
    if letter == "y":
        if n == 2:
            return f"{dt.year % 100:02d}"
        return f"{dt.year:0{n}d}"
    if letter == "M":
        if n >= 4:
            return _MONTHS[dt.month - 1]
        if n == 3:
            return _MONTHS[dt.month - 1][:3]
        return f"{dt.month:0{n}d}"
    if letter == "d":
        return f"{dt.day:0{n}d}"
    if letter == "H":
        return f"{dt.hour:0{n}d}"
    if letter == "k":
        return f"{dt.hour or 24:0{n}d}"
    if letter == "K":
        return f"{dt.hour % 12:0{n}d}"
    if letter == "h":
        return f"{dt.hour % 12 or 12:0{n}d}"
    if letter == "m":
        return f"{dt.minute:0{n}d}"
    if letter == "s":
        return f"{dt.second:0{n}d}"
    if letter == "S":
        return f"{dt.microsecond // 1000:0{n}d}"
    if letter == "E":
        name = _DAYS[dt.weekday()]
        return name if n >= 4 else name[:3]
    if letter == "u":
        return f"{dt.isoweekday():0{n}d}"
    if letter == "D":
        return f"{dt.timetuple().tm_yday:0{n}d}"
    if letter == "w":
        return f"{dt.isocalendar().week:0{n}d}"
    if letter == "a":
        return "AM" if dt.hour < 12 else "PM"
    if letter == "G":
        return "AD"
    if letter == "z":
        return dt.tzname() or "UTC"
    if letter == "Z":
        sign, hours, minutes = _offset_parts(dt)
        return f"{sign}{hours:02d}{minutes:02d}"
    if letter == "X":
        sign, hours, minutes = _offset_parts(dt)
        if hours == 0 and minutes == 0:
            return "Z"
        if n == 1:
            return f"{sign}{hours:02d}"
        if n == 2:
            return f"{sign}{hours:02d}{minutes:02d}"
        return f"{sign}{hours:02d}:{minutes:02d}"
    return None


def format_datetime(pattern: str, dt: datetime) -> str:
    """Render ``dt`` with a SimpleDateFormat-style pattern.

    Unknown letters are copied through as literal text.
    """
    out: list[str] = []
    for m in _FIELD_RE.finditer(pattern):
        text = m.group(0)
        if m.group(2):
            rendered = _render_field(m.group(2), len(text), dt)
            out.append(text if rendered is None else rendered)
        elif text.startswith("'") and len(text) > 1:
            quoted = m.group(1)
            out.append(quoted.replace("''", "'") if quoted else "'")
        else:
            out.append(text)
    return "".join(out)


def format_timestamp(pattern: str, timestamp_ms: int, zone_id: str) -> str:
    """Render an epoch-milliseconds timestamp in the given zone."""
    seconds, millis = divmod(timestamp_ms, 1000)
    dt = datetime.fromtimestamp(seconds, tz=UTC).replace(microsecond=millis * 1000)
    return format_datetime(pattern, dt.astimezone(resolve_zone(zone_id)))


def format_elapsed(pattern: str, elapsed_ms: int, today: date | None = None) -> str:
    """Render an elapsed duration through the reduced START substitution.

    Year, month and day come from today's date; hours, minutes, seconds and
    millis are the decomposition of ``elapsed_ms``.
    """
    elapsed_ms = max(0, elapsed_ms)
    today = today or date.today()
    hours = elapsed_ms // 3_600_000
    minutes = (elapsed_ms % 3_600_000) // 60_000
    seconds = (elapsed_ms % 60_000) // 1000
    millis = elapsed_ms % 1000
    return (
        pattern.replace("yyyy", f"{today.year:04d}")
        .replace("MM", f"{today.month:02d}")
        .replace("dd", f"{today.day:02d}")
        .replace("HH", f"{hours:02d}")
        .replace("mm", f"{minutes:02d}")
        .replace("ss", f"{seconds:02d}")
        .replace("SSS", f"{millis:03d}")
    )
