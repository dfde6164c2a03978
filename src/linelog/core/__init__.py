"""Core logging pipeline: records, call sites, formatting, sinks and routing."""

from __future__ import annotations

from .callsite import CallSite, CallStack
from .config import LoggerSettings, build_engine, build_router, resolve_settings
from .engine import LogEngine
from .formatter import PatternFormatter, Preset, format_record, resolve_pattern
from .models import LogRecord, Severity
from .router import SinkRouter
from .sinks import BufferSink, ConsoleSink, FileSink, Sink

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
    "Severity",
    "Sink",
    "SinkRouter",
    "build_engine",
    "build_router",
    "format_record",
    "resolve_pattern",
    "resolve_settings",
]
