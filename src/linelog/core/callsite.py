"""Call-site capture and caller resolution.

A log call captures the whole Python call stack as a tuple of ``CallSite``
values (innermost first). The caller that issued the log call is then found
by locating the logging entry point in that stack and stepping a configurable
number of frames outward, so wrappers around the engine can be skipped.
"""

from __future__ import annotations

import inspect
import os
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from types import FrameType

from .sinks import Sink


@dataclass(frozen=True, slots=True)
class CallSite:
    """Source location of one stack frame."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    is_native: bool = False
    module_name: str | None = None
    module_version: str | None = None
    class_loader_name: str | None = None

    @classmethod
    def from_frame(cls, frame: FrameType) -> CallSite:
        """Build a CallSite from a live frame."""
        code = frame.f_code
        module = frame.f_globals.get("__name__") or ""
        qualname = getattr(code, "co_qualname", code.co_name)
        owner, _, method = qualname.rpartition(".")
        class_name = f"{module}.{owner}" if owner else module

        top_level = module.partition(".")[0] or None
        version = None
        if top_level is not None:
            version = getattr(sys.modules.get(top_level), "__version__", None)
            if version is not None:
                version = str(version)

        loader = frame.f_globals.get("__loader__")
        return cls(
            class_name=class_name,
            method_name=method,
            file_name=os.path.basename(code.co_filename),
            line_number=frame.f_lineno or 0,
            # Code without a source file behind it (frozen modules, exec'd strings).
            is_native=code.co_filename.startswith("<"),
            module_name=top_level,
            module_version=version,
            class_loader_name=type(loader).__name__ if loader is not None else None,
        )

    def __str__(self) -> str:
        if self.is_native:
            return f"{self.class_name}.{self.method_name}(Native Method)"
        return f"{self.class_name}.{self.method_name}({self.file_name}:{self.line_number})"


@dataclass(frozen=True, slots=True)
class CallStack:
    """Immutable snapshot of the frames active at a log call.

    Index 0 is the innermost frame, i.e. the logging entry point itself.
    """

    frames: tuple[CallSite, ...] = ()

    @classmethod
    def capture(cls) -> CallStack:
        """Capture the stack of whoever called ``capture``."""
        frame = inspect.currentframe()
        frame = frame.f_back if frame is not None else None
        sites: list[CallSite] = []
        try:
            while frame is not None:
                sites.append(CallSite.from_frame(frame))
                frame = frame.f_back
        finally:
            del frame
        return cls(tuple(sites))

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[CallSite]:
        return iter(self.frames)

    def __getitem__(self, index: int) -> CallSite:
        if index < 0 or index >= len(self.frames):
            raise IndexError(f"stack index out of range: {index}")
        return self.frames[index]

    def call_site_at(self, index: int) -> CallSite:
        """Return the frame at ``index`` (IndexError when out of range)."""
        return self[index]

    def resolve_caller(self, class_name: str, method_name: str, offset: int) -> CallSite | None:
        """Return the frame ``offset`` positions past the first marker frame.

        Returns None when no frame matches the marker or when the offset runs
        past the outermost frame.
        """
        for i, site in enumerate(self.frames):
            if site.method_name == method_name and site.class_name == class_name:
                target = i + offset
                if 0 <= target < len(self.frames):
                    return self.frames[target]
                return None
        return None

    def render(self) -> str:
        """Render one frame per line, innermost first."""
        return "".join(f"{site}\n" for site in self.frames)

    def write_to(self, sink: Sink) -> None:
        """Write the rendered stack to a byte sink as UTF-8."""
        sink.write(self.render().encode("utf-8"))

    def __str__(self) -> str:
        return self.render()
