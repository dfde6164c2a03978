"""In-process logging with call-site capture, pattern formatting and level-filtered sinks."""

from __future__ import annotations

__version__ = "0.1.0"

from .core import (
    BufferSink,
    CallSite,
    CallStack,
    ConsoleSink,
    FileSink,
    LogEngine,
    LoggerSettings,
    LogRecord,
    PatternFormatter,
    Preset,
    Severity,
    Sink,
    SinkRouter,
    format_record,
)
from .process_logger import ProcessLogger, get_process_logger, set_process_logger

__all__ = [
    "BufferSink",
    "CallSite",
    "CallStack",
    "ConsoleSink",
    "FileSink",
    "LogEngine",
    "LogRecord",
    "LoggerSettings",
    "PatternFormatter",
    "Preset",
    "ProcessLogger",
    "Severity",
    "Sink",
    "SinkRouter",
    "format_record",
    "get_process_logger",
    "set_process_logger",
]
