from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, Union


class Sink(Protocol):
    """Destination for log lines: anything with a ``write`` method."""

    def write(self, data: Any, /) -> Any: ...


def write_line(out: Sink, line: str) -> None:
    """
    Write `line` to `out` in a single ``write`` call.

    Text streams (``io.TextIOBase``, e.g. ``sys.stderr``) get the string; all
    other sinks get UTF-8 bytes. The sink is flushed when it supports it, but
    never closed.
    """
    if isinstance(out, io.TextIOBase):
        out.write(line)
    else:
        out.write(line.encode("utf-8"))
    flush = getattr(out, "flush", None)
    if callable(flush):
        flush()


@dataclass
class FileSink:
    """
    Appends log lines to a file, opening it for each write.

    Usage example
    -------------
        logger = Logger(FileSink(Path("logs/app.jsonl")), flags=Flags.JSON)
    """

    path: Path

    def write(self, data: Union[bytes, str]) -> int:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("ab") as f:
            return f.write(data)
