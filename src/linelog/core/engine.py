"""Log engine: capture, record construction, history and dispatch.

``log()`` runs synchronously on the calling thread. A slow sink therefore
stalls every caller of the engine.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from .callsite import CallStack
from .models import LogRecord, Severity
from .router import SinkRouter
from .time_format import now_ms

logger = logging.getLogger(__name__)

Observer = Callable[[LogRecord], None]


def _entry_point_marker(engine_type: type) -> str:
    """Qualified name of the class in the MRO that defines ``log``."""
    for klass in engine_type.__mro__:
        if "log" in vars(klass):
            return f"{klass.__module__}.{klass.__qualname__}"
    return f"{engine_type.__module__}.{engine_type.__qualname__}"


class LogEngine:
    """Creates LogRecords, keeps the history and feeds the router.

    ``stack_offset`` is the number of frames between the ``log`` entry point
    and the caller that should be reported: 1 when application code calls
    ``log`` directly, one more for every wrapper in between.
    """

    def __init__(self, router: SinkRouter | None = None, *, stack_offset: int = 1):
        if stack_offset < 0:
            raise ValueError("stack_offset must be >= 0")
        self._router = router
        self._stack_offset = stack_offset
        self._history: list[LogRecord] = []
        self._observer: Observer | None = None
        self._lock = threading.RLock()
        self._marker = _entry_point_marker(type(self))

        if router is None or not router.has_sinks():
            logger.warning("LogEngine created without an output sink")
            self.log(Severity.WARN, "LogEngine created without an output sink.")

    @property
    def router(self) -> SinkRouter | None:
        return self._router

    @property
    def stack_offset(self) -> int:
        return self._stack_offset

    @property
    def observer(self) -> Observer | None:
        """Callback invoked with every new record, after dispatch."""
        return self._observer

    @observer.setter
    def observer(self, callback: Observer | None) -> None:
        self._observer = callback

    def log(self, level: Severity, message: str) -> None:
        """Record ``message`` at ``level`` and dispatch it.

        Raises ValueError for the NONE level.
        """
        if not isinstance(level, Severity) or level is Severity.NONE:
            raise ValueError(f"Cannot log with level {level!r}")

        stack = CallStack.capture()
        record = LogRecord(
            level=level,
            message=str(message),
            timestamp=now_ms(),
            thread_name=threading.current_thread().name,
            call_site=stack.resolve_caller(self._marker, "log", self._stack_offset),
            call_stack=stack,
        )

        with self._lock:
            self._history.append(record)
            if self._router is not None:
                self._router.dispatch(record)

        observer = self._observer
        if observer is not None:
            try:
                observer(record)
            except Exception:
                logger.warning("Log observer failed", exc_info=True)

    def last_record(self) -> LogRecord | None:
        with self._lock:
            return self._history[-1] if self._history else None

    def all_records(self) -> list[LogRecord]:
        """Snapshot of the history, oldest first."""
        with self._lock:
            return list(self._history)

    def all_records_array(self) -> tuple[LogRecord, ...]:
        with self._lock:
            return tuple(self._history)
