"""Byte sinks that formatted log lines are written to."""

from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Any, Protocol, TextIO, runtime_checkable


@runtime_checkable
class Sink(Protocol):
    """Sink interface: ordered byte appends plus close.

    Any binary file object (``open(path, "ab")``, ``sys.stdout.buffer``,
    ``io.BytesIO``) satisfies it.
    """

    def write(self, data: bytes) -> Any:
        """Append raw bytes."""
        ...

    def close(self) -> None:
        """Release the sink."""
        ...


class ConsoleSink:
    """Write to a text console stream (stdout by default).

    The stream is resolved on every write so redirected or captured
    ``sys.stdout`` objects are honoured. Closing only flushes; the process
    owns the console.
    """

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    def _target(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, data: bytes) -> None:
        stream = self._target()
        buffer = getattr(stream, "buffer", None)
        if buffer is not None:
            stream.flush()
            buffer.write(data)
            buffer.flush()
        else:
            stream.write(data.decode("utf-8"))
            stream.flush()

    def close(self) -> None:
        self._target().flush()

    def __repr__(self) -> str:
        name = getattr(self._target(), "name", "stdout")
        return f"ConsoleSink({name})"


class FileSink:
    """Append-only file sink; creates parent directories and flushes per write."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self._path, "ab")

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._file.closed

    def write(self, data: bytes) -> None:
        self._file.write(data)
        self._file.flush()

    def close(self) -> None:
        self._file.close()

    def __repr__(self) -> str:
        return f"FileSink({str(self._path)!r})"


class BufferSink:
    """Thread-safe in-memory sink, mostly useful for tests and previews."""

    def __init__(self) -> None:
        self._chunks: list[bytes] = []
        self._lock = threading.Lock()
        self.closed = False

    def write(self, data: bytes) -> None:
        if self.closed:
            raise ValueError("write to closed BufferSink")
        with self._lock:
            self._chunks.append(bytes(data))

    def close(self) -> None:
        self.closed = True

    def getvalue(self) -> bytes:
        with self._lock:
            return b"".join(self._chunks)

    def lines(self) -> list[str]:
        """Decoded lines without their terminators."""
        return self.getvalue().decode("utf-8").splitlines()
