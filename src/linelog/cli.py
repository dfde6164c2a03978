from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from linelog.core.config import LoggerSettings, build_engine, resolve_settings
from linelog.core.models import Severity
from linelog.core.sinks import ConsoleSink, FileSink, Sink


def _configure_logging() -> None:
    """Send the library's own diagnostics (sink failures etc.) to stderr."""
    level_name = os.getenv("LINELOG_DIAGNOSTIC_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_severity(s: str) -> Severity:
    try:
        return Severity.parse(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _emit(args: argparse.Namespace) -> None:
    overrides: dict[str, object] = {}
    if args.threshold is not None:
        overrides["threshold"] = args.threshold
    if args.pattern is not None:
        overrides["pattern"] = args.pattern
    settings = resolve_settings()
    if overrides:
        settings = LoggerSettings(**{**settings.model_dump(), **overrides})

    sinks: list[Sink] = []
    if not args.no_console:
        sinks.append(ConsoleSink())
    if args.file:
        sinks.append(FileSink(args.file))

    engine = build_engine(settings, sinks)
    with engine.router:
        engine.log(args.level, args.message)
        record = engine.last_record()
        if args.stack and record is not None:
            record.call_stack.write_to(ConsoleSink())


def main(argv: Sequence[str] | None = None) -> None:
    p = argparse.ArgumentParser(description="Emit a log line through a configured pipeline.")
    p.add_argument("message")
    p.add_argument("--level", type=_parse_severity, default=Severity.INFO, help="Record severity (default: INFO)")
    p.add_argument(
        "--threshold",
        type=_parse_severity,
        default=None,
        help="Minimum severity written to sinks (default: LINELOG_THRESHOLD or INFO)",
    )
    p.add_argument("--pattern", default=None, help="Line pattern or preset: minimal, default, detailed, compact")
    p.add_argument("--file", default=None, help="Also append the line to this file")
    p.add_argument("--no-console", action="store_true", help="Do not write to stdout")
    p.add_argument("--stack", action="store_true", help="Print the captured call stack after the line")

    args = p.parse_args(argv)
    _configure_logging()

    if args.level is Severity.NONE:
        print("Error: NONE is a filter threshold, not a record level", file=sys.stderr)
        raise SystemExit(2)

    try:
        _emit(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
