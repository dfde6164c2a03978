from __future__ import annotations

from collections.abc import Callable

import pytest

from linelog.core.callsite import CallSite, CallStack
from linelog.core.models import LogRecord, Severity
from linelog.core.sinks import BufferSink

# 2024-12-19T12:34:56.789Z
FIXED_TS = 1734611696789


@pytest.fixture
def call_site() -> CallSite:
    return CallSite(
        class_name="app.service.Worker",
        method_name="run",
        file_name="service.py",
        line_number=42,
        module_name="app",
    )


@pytest.fixture
def make_record(call_site: CallSite) -> Callable[..., LogRecord]:
    def _make(
        level: Severity = Severity.INFO,
        message: str = "hello",
        *,
        timestamp: int = FIXED_TS,
        thread_name: str | None = "main",
        site: CallSite | None = call_site,
    ) -> LogRecord:
        stack = CallStack((site,)) if site is not None else CallStack()
        return LogRecord(
            level=level,
            message=message,
            timestamp=timestamp,
            thread_name=thread_name,
            call_site=site,
            call_stack=stack,
        )

    return _make


@pytest.fixture
def buffer_sink() -> BufferSink:
    return BufferSink()
