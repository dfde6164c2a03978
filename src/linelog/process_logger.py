"""Process-wide logger.

``ProcessLogger`` wires one router and one engine behind a lock. Most code
should build and pass its own instance; ``get_process_logger()`` exists for
callers that want a shared default, created lazily on first use.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from .core.config import LoggerSettings, build_router, resolve_settings
from .core.engine import LogEngine
from .core.models import LogRecord, Severity
from .core.router import SinkRouter
from .core.sinks import ConsoleSink, Sink


class ProcessLogger:
    """Synchronized facade over a LogEngine and its SinkRouter.

    ``log`` adds one frame between the caller and the engine, so the engine's
    stack offset is the configured offset plus one.
    """

    def __init__(self, settings: LoggerSettings | None = None, sinks: Iterable[Sink] | None = None):
        settings = resolve_settings(settings)
        sink_list = list(sinks) if sinks is not None else [ConsoleSink()]
        self._lock = threading.RLock()
        self._router = build_router(settings, sink_list)
        self._engine = LogEngine(self._router, stack_offset=settings.stack_offset + 1)

    @property
    def engine(self) -> LogEngine:
        return self._engine

    @property
    def router(self) -> SinkRouter:
        return self._router

    def log(self, level: Severity, message: str) -> None:
        with self._lock:
            self._engine.log(level, message)

    def last_record(self) -> LogRecord | None:
        with self._lock:
            return self._engine.last_record()

    def all_records(self) -> list[LogRecord]:
        with self._lock:
            return self._engine.all_records()

    def all_records_array(self) -> tuple[LogRecord, ...]:
        with self._lock:
            return self._engine.all_records_array()

    def close(self) -> None:
        with self._lock:
            self.router.close()


_instance: ProcessLogger | None = None
_instance_lock = threading.Lock()


def get_process_logger() -> ProcessLogger:
    """Return the shared logger, creating it (stdout, env settings) on first use."""
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                _instance = ProcessLogger()
    return _instance


def set_process_logger(process_logger: ProcessLogger | None) -> ProcessLogger | None:
    """Install ``process_logger`` as the shared instance; return the previous one.

    Passing None makes the next ``get_process_logger()`` build a fresh default.
    """
    global _instance
    with _instance_lock:
        previous, _instance = _instance, process_logger
    return previous
