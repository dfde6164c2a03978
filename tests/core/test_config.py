from __future__ import annotations

import pytest
from pydantic import ValidationError

from linelog.core.config import LoggerSettings, build_engine, build_router, resolve_settings
from linelog.core.formatter import Preset
from linelog.core.models import Severity
from linelog.core.sinks import BufferSink


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LINELOG_THRESHOLD", "LINELOG_PATTERN", "LINELOG_STACK_OFFSET"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = LoggerSettings()
    assert settings.threshold is Severity.INFO
    assert settings.pattern == Preset.COMPACT.value
    assert settings.stack_offset == 1


def test_threshold_and_preset_are_parsed() -> None:
    settings = LoggerSettings(threshold="warning", pattern="detailed")
    assert settings.threshold is Severity.WARN
    assert settings.pattern == Preset.DETAILED.value


def test_custom_pattern_is_kept() -> None:
    assert LoggerSettings(pattern="-type -message").pattern == "-type -message"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"threshold": "LOUD"},
        {"pattern": ""},
        {"stack_offset": -1},
    ],
)
def test_invalid_settings_raise(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        LoggerSettings(**kwargs)


def test_settings_are_frozen() -> None:
    settings = LoggerSettings()
    with pytest.raises(ValidationError):
        settings.threshold = Severity.ERROR  # type: ignore[misc]


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINELOG_THRESHOLD", "error")
    monkeypatch.setenv("LINELOG_PATTERN", "minimal")
    monkeypatch.setenv("LINELOG_STACK_OFFSET", "3")

    settings = resolve_settings(LoggerSettings(threshold=Severity.DEBUG))

    assert settings.threshold is Severity.ERROR
    assert settings.pattern == Preset.MINIMAL.value
    assert settings.stack_offset == 3


def test_no_env_returns_given_settings() -> None:
    base = LoggerSettings(threshold=Severity.FATAL)
    assert resolve_settings(base) is base


@pytest.mark.parametrize(
    "name,value",
    [
        ("LINELOG_THRESHOLD", "chatty"),
        ("LINELOG_STACK_OFFSET", "two"),
        ("LINELOG_STACK_OFFSET", "-1"),
    ],
)
def test_invalid_env_raises(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        resolve_settings()


def test_build_router_uses_settings() -> None:
    sink = BufferSink()
    router = build_router(LoggerSettings(threshold="error", pattern="-message"), [sink])
    assert router.threshold is Severity.ERROR
    assert router.pattern == "-message"
    assert router.sinks == (sink,)


def test_build_engine_adds_extra_frames() -> None:
    settings = LoggerSettings(stack_offset=2)
    engine = build_engine(settings, [BufferSink()], extra_frames=1)
    assert engine.stack_offset == 3
    assert engine.router is not None and engine.router.has_sinks()


def test_built_engine_writes_lines() -> None:
    sink = BufferSink()
    engine = build_engine(LoggerSettings(threshold="debug", pattern="-type -method -message"), [sink])
    engine.log(Severity.DEBUG, "configured")
    assert sink.lines() == ["DEBUG test_built_engine_writes_lines configured"]
