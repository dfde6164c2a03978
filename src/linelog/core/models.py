"""Core data models for the logging pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .callsite import CallSite, CallStack
    from .sinks import Sink

UNKNOWN_THREAD = "<unknown thread>"
UNKNOWN_CLASS = "<unknown class>"
UNKNOWN_METHOD = "<unknown method>"
UNKNOWN_FILE = "<unknown file>"
UNKNOWN_LINE = "<unknown line>"
UNKNOWN_MODULE = "<unknown module>"

_ALIASES = {"WARNING": "WARN"}


class Severity(str, Enum):
    """Ordered severity levels; NONE is only valid as a filter threshold."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    FATAL = "FATAL"
    NONE = "NONE"

    @property
    def rank(self) -> int:
        """Ordinal position used for threshold filtering."""
        return _RANKS[self]

    @classmethod
    def parse(cls, value: str | Severity) -> Severity:
        """Parse a severity name (case-insensitive, WARNING accepted for WARN)."""
        if isinstance(value, Severity):
            return value
        name = value.strip().upper()
        name = _ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError as e:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"Invalid severity {value!r}. Allowed: {allowed}") from e

    def __str__(self) -> str:
        return self.value

    # str comparison would order alphabetically; compare by rank instead.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_RANKS: dict[Severity, int] = {s: i for i, s in enumerate(Severity)}


@dataclass(frozen=True, slots=True)
class LogRecord:
    """Immutable record of a single log call.

    The accessors below never raise: missing thread or call-site data is
    reported through the ``<unknown ...>`` placeholders.
    """

    level: Severity
    message: str
    timestamp: int  # epoch milliseconds
    thread_name: str | None
    call_site: CallSite | None
    call_stack: CallStack

    def __post_init__(self) -> None:
        if not isinstance(self.level, Severity):
            raise ValueError(f"level must be a Severity, got {self.level!r}")
        if self.level is Severity.NONE:
            raise ValueError("Log level cannot be NONE")

    @property
    def thread(self) -> str:
        return self.thread_name or UNKNOWN_THREAD

    @property
    def class_name(self) -> str:
        return self.call_site.class_name if self.call_site else UNKNOWN_CLASS

    @property
    def method_name(self) -> str:
        return self.call_site.method_name if self.call_site else UNKNOWN_METHOD

    @property
    def file_name(self) -> str:
        return self.call_site.file_name if self.call_site else UNKNOWN_FILE

    @property
    def line(self) -> str:
        return str(self.call_site.line_number) if self.call_site else UNKNOWN_LINE

    @property
    def module(self) -> str:
        if self.call_site and self.call_site.module_name:
            return self.call_site.module_name
        return UNKNOWN_MODULE

    @property
    def is_native(self) -> bool:
        return self.call_site is not None and self.call_site.is_native

    def __str__(self) -> str:
        """The record rendered with the DEFAULT preset."""
        from .formatter import Preset, format_record

        return format_record(self, Preset.DEFAULT)

    def show_info(self, sink: Sink) -> None:
        """Write ``str(self)`` to a byte sink as UTF-8."""
        sink.write(str(self).encode("utf-8"))
