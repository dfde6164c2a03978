from __future__ import annotations

import pytest

from linelog.core.callsite import CallStack
from linelog.core.models import (
    UNKNOWN_CLASS,
    UNKNOWN_FILE,
    UNKNOWN_LINE,
    UNKNOWN_METHOD,
    UNKNOWN_MODULE,
    UNKNOWN_THREAD,
    LogRecord,
    Severity,
)

RECORD_LEVELS = [s for s in Severity if s is not Severity.NONE]


def test_severity_order() -> None:
    assert [s.rank for s in Severity] == list(range(7))
    assert Severity.DEBUG < Severity.INFO < Severity.WARN < Severity.ERROR
    assert Severity.ERROR < Severity.CRITICAL < Severity.FATAL < Severity.NONE
    # Ordered by rank, not alphabetically.
    assert not Severity.WARN > Severity.CRITICAL
    assert max(Severity.ERROR, Severity.DEBUG, Severity.FATAL) is Severity.FATAL


def test_severity_parse() -> None:
    assert Severity.parse("warn") is Severity.WARN
    assert Severity.parse(" Warning ") is Severity.WARN
    assert Severity.parse("fatal") is Severity.FATAL
    assert Severity.parse(Severity.DEBUG) is Severity.DEBUG
    with pytest.raises(ValueError):
        Severity.parse("verbose")


@pytest.mark.parametrize("level", RECORD_LEVELS)
def test_record_accepts_real_levels(make_record, level: Severity) -> None:
    record = make_record(level)
    assert record.level is level


def test_record_rejects_none_level() -> None:
    with pytest.raises(ValueError):
        LogRecord(
            level=Severity.NONE,
            message="x",
            timestamp=0,
            thread_name="main",
            call_site=None,
            call_stack=CallStack(),
        )


def test_record_is_immutable(make_record) -> None:
    record = make_record()
    with pytest.raises(AttributeError):
        record.message = "changed"  # type: ignore[misc]


def test_record_accessors_with_call_site(make_record) -> None:
    record = make_record()
    assert record.class_name == "app.service.Worker"
    assert record.method_name == "run"
    assert record.file_name == "service.py"
    assert record.line == "42"
    assert record.module == "app"
    assert record.thread == "main"
    assert record.is_native is False


def test_record_placeholders_without_call_site(make_record) -> None:
    record = make_record(site=None, thread_name="")
    assert record.class_name == UNKNOWN_CLASS
    assert record.method_name == UNKNOWN_METHOD
    assert record.file_name == UNKNOWN_FILE
    assert record.line == UNKNOWN_LINE
    assert record.module == UNKNOWN_MODULE
    assert record.thread == UNKNOWN_THREAD
    assert record.is_native is False


def test_record_str_uses_default_layout(make_record) -> None:
    record = make_record(Severity.WARN, "disk low")
    assert str(record) == (
        "[2024-12-19 12:34:56] WARN | [Thread: main] | [app.service.Worker.run] > disk low"
    )


def test_show_info_writes_utf8(make_record, buffer_sink) -> None:
    record = make_record(Severity.ERROR, "naïve ✓")
    record.show_info(buffer_sink)
    assert buffer_sink.getvalue() == str(record).encode("utf-8")
    assert buffer_sink.getvalue().endswith("naïve ✓".encode("utf-8"))
