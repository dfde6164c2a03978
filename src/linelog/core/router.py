"""Level-filtered fan-out of formatted records to byte sinks."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from .formatter import PatternFormatter, Preset
from .models import LogRecord, Severity
from .sinks import Sink

logger = logging.getLogger(__name__)


class SinkRouter:
    """Owns a severity threshold, a pattern and an ordered list of sinks.

    A record is written iff ``record.level.rank >= threshold.rank``. Each
    accepted record is formatted once and the same UTF-8 line is written to
    every sink. Failures are reported per sink and never stop delivery to the
    remaining sinks.
    """

    def __init__(
        self,
        threshold: Severity = Severity.INFO,
        pattern: str | Preset = Preset.COMPACT,
        *,
        sinks: Iterable[Sink] = (),
        formatter: PatternFormatter | None = None,
    ):
        self.threshold = threshold
        self.pattern = pattern.value if isinstance(pattern, Preset) else pattern
        self._formatter = formatter or PatternFormatter()
        self._sinks: list[Sink] = []
        self._lock = threading.Lock()
        for sink in sinks:
            self.add_sink(sink)

    @property
    def sinks(self) -> tuple[Sink, ...]:
        with self._lock:
            return tuple(self._sinks)

    def add_sink(self, sink: Sink | None) -> None:
        """Register a sink; None is ignored."""
        if sink is None:
            return
        with self._lock:
            self._sinks.append(sink)

    def set_single_sink(self, sink: Sink) -> None:
        """Replace all registered sinks with ``sink``."""
        with self._lock:
            self._sinks = [sink]

    def remove_all_sinks(self) -> None:
        with self._lock:
            self._sinks.clear()

    def has_sinks(self) -> bool:
        with self._lock:
            return bool(self._sinks)

    def accepts(self, record: LogRecord) -> bool:
        return record.level.rank >= self.threshold.rank

    def dispatch(self, record: LogRecord | None) -> bool:
        """Write ``record`` to every sink if it passes the threshold.

        Returns True when the record was accepted and formatted.
        """
        if record is None or not self.accepts(record):
            return False

        try:
            line = self._formatter.format(record, self.pattern) + "\n"
        except ValueError as e:
            logger.error("Cannot format log record: %s", e)
            return False

        data = line.encode("utf-8")
        for sink in self.sinks:
            try:
                sink.write(data)
            except Exception:
                logger.warning("Failed to write log line to %r", sink, exc_info=True)
        return True

    def close(self) -> None:
        """Close every sink; a failing close does not stop the others."""
        for sink in self.sinks:
            try:
                sink.close()
            except Exception:
                logger.warning("Failed to close %r", sink, exc_info=True)

    def __enter__(self) -> SinkRouter:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SinkRouter(threshold={self.threshold.value}, sinks={len(self.sinks)})"
