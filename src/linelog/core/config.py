"""Logger configuration and pipeline factories."""

from __future__ import annotations

import os
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .engine import LogEngine
from .formatter import Preset, resolve_pattern
from .models import Severity
from .router import SinkRouter
from .sinks import Sink


class LoggerSettings(BaseModel):
    """Threshold, pattern and caller-resolution settings for one pipeline."""

    model_config = ConfigDict(frozen=True)

    threshold: Severity = Field(default=Severity.INFO, description="Minimum severity written to sinks.")
    pattern: str = Field(
        default=Preset.COMPACT.value,
        description="Line pattern or preset name (minimal, default, detailed, compact).",
    )
    stack_offset: int = Field(
        default=1,
        ge=0,
        description="Frames between the engine's log() and the reported caller.",
    )

    @field_validator("threshold", mode="before")
    @classmethod
    def _parse_threshold(cls, value: object) -> object:
        if isinstance(value, str):
            return Severity.parse(value)
        return value

    @field_validator("pattern", mode="before")
    @classmethod
    def _resolve_pattern(cls, value: object) -> object:
        if isinstance(value, str):
            if not value:
                raise ValueError("pattern must not be empty")
            return resolve_pattern(value)
        return value


def resolve_settings(settings: LoggerSettings | None = None) -> LoggerSettings:
    """Return settings with LINELOG_* environment overrides applied."""
    if settings is None:
        settings = LoggerSettings()

    updates: dict[str, object] = {}

    threshold = os.getenv("LINELOG_THRESHOLD")
    if threshold:
        updates["threshold"] = Severity.parse(threshold)

    pattern = os.getenv("LINELOG_PATTERN")
    if pattern:
        updates["pattern"] = resolve_pattern(pattern)

    offset = os.getenv("LINELOG_STACK_OFFSET")
    if offset:
        try:
            value = int(offset)
        except ValueError as exc:
            raise ValueError("LINELOG_STACK_OFFSET must be an integer") from exc
        if value < 0:
            raise ValueError("LINELOG_STACK_OFFSET must be >= 0")
        updates["stack_offset"] = value

    if not updates:
        return settings
    return settings.model_copy(update=updates)


def build_router(settings: LoggerSettings, sinks: Iterable[Sink] = ()) -> SinkRouter:
    """Create a router configured from ``settings``."""
    return SinkRouter(settings.threshold, settings.pattern, sinks=sinks)


def build_engine(
    settings: LoggerSettings,
    sinks: Iterable[Sink] = (),
    *,
    extra_frames: int = 0,
) -> LogEngine:
    """Create an engine and router from ``settings``.

    ``extra_frames`` accounts for wrappers that sit between the application
    and the engine's ``log``.
    """
    router = build_router(settings, sinks)
    return LogEngine(router, stack_offset=settings.stack_offset + extra_frames)
