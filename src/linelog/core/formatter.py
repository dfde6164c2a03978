"""Pattern-based rendering of log records.

A pattern is plain text with tokens::

    -type -message -thread -class -method -file -line -module
    -time<TIMEFMT, ZONE>      absolute time in ZONE, or elapsed time when ZONE is START
    -native<onTrue, onFalse>  chosen by the call site's native flag

All tokens are replaced in one left-to-right pass. Substituted values are
never scanned again, so token-like text inside a message or a thread name is
written verbatim. Malformed tokens are left as literal text.

Examples::

    "-time<HH:mm:ss:SSS, UTC> [-type] - [-method] > -message"
    -> "12:04:53:294 [INFO] - handle > request done"

    "[-time<ss:SSS, START>] -type | -message"
    -> "[194:846] ERROR | cannot connect"
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from .models import LogRecord
from .time_format import PROCESS_START_MS, format_elapsed, format_timestamp, now_ms

_TOKEN_RE = re.compile(
    r"-time<(?P<time_fmt>[^,>]+),\s*(?P<zone>[^>]+)>"
    r"|-native<(?P<on_true>[^,>]+),\s*(?P<on_false>[^>]+)>"
    r"|-(?P<name>type|thread|class|method|file|line|module|message)"
)
_SIMPLE_RE = re.compile(r"-(type|thread|class|method|file|line|module|message)")


class Preset(str, Enum):
    """Named layouts."""

    MINIMAL = "[-time<HH:mm:ss:SSS, UTC>] -type | -message"
    DEFAULT = (
        "[-time<yyyy-MM-dd HH:mm:ss, UTC>] -type | [Thread: -thread] | "
        "[-class.-method] > -message"
    )
    DETAILED = (
        "[-time<yyyy-MM-dd HH:mm:ss:SSS, UTC>] -type | [Thread: -thread] | "
        "[File: -file, Line: -line] | [-class.-method] > -message"
    )
    COMPACT = "[-time<HH:mm:ss:SSS, UTC>] -type | [-class.-method] > -message"

    def __str__(self) -> str:
        return self.value


def resolve_pattern(pattern: str | Preset) -> str:
    """Map a preset name (case-insensitive) to its pattern; pass anything else through."""
    if isinstance(pattern, Preset):
        return pattern.value
    preset = Preset.__members__.get(pattern.strip().upper())
    return preset.value if preset is not None else pattern


def _simple_value(record: LogRecord, name: str) -> str:
    if name == "message":
        return record.message
    if name == "type":
        return record.level.value
    if name == "thread":
        return record.thread
    if name == "class":
        return record.class_name
    if name == "method":
        return record.method_name
    if name == "file":
        return record.file_name
    if name == "line":
        return record.line
    return record.module


@dataclass(frozen=True, slots=True)
class PatternFormatter:
    """Render LogRecords through a pattern.

    ``start_ms`` anchors ``START``-relative time tokens; ``clock`` supplies the
    current epoch milliseconds for them.
    """

    start_ms: int = PROCESS_START_MS
    clock: Callable[[], int] = field(default=now_ms)

    def format(self, record: LogRecord, pattern: str | Preset) -> str:
        """Render ``record`` with ``pattern``.

        Raises ValueError when the record is missing or the pattern is empty.
        """
        if record is None or not pattern:
            raise ValueError("record and pattern must not be None or empty")
        text = pattern.value if isinstance(pattern, Preset) else pattern

        def token_sub(m: re.Match[str]) -> str:
            name = m.group("name")
            if name is not None:
                return _simple_value(record, name)
            if m.group("on_true") is not None:
                branch = m.group("on_true") if record.is_native else m.group("on_false")
                # Branch text comes from the pattern, so its simple tokens still expand.
                return _SIMPLE_RE.sub(lambda s: _simple_value(record, s.group(1)), branch)
            time_fmt, zone = m.group("time_fmt"), m.group("zone")
            if zone.strip().upper() == "START":
                return format_elapsed(time_fmt, self.clock() - self.start_ms)
            return format_timestamp(time_fmt, record.timestamp, zone)

        return _TOKEN_RE.sub(token_sub, text)


_DEFAULT_FORMATTER = PatternFormatter()


def format_record(record: LogRecord, pattern: str | Preset = Preset.DEFAULT) -> str:
    """Render with the process-wide formatter (START measured from import time)."""
    return _DEFAULT_FORMATTER.format(record, pattern)
