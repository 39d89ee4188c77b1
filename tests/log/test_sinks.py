from __future__ import annotations

import io
from pathlib import Path

from taglog.log.sinks import FileSink, write_line


def test_write_line_text_stream_gets_str() -> None:
    buf = io.StringIO()
    write_line(buf, "héllo\n")
    assert buf.getvalue() == "héllo\n"


def test_write_line_binary_stream_gets_utf8() -> None:
    buf = io.BytesIO()
    write_line(buf, "héllo\n")
    assert buf.getvalue() == "héllo\n".encode("utf-8")


def test_write_line_flushes_but_does_not_close() -> None:
    class Sink:
        def __init__(self) -> None:
            self.events: list[str] = []

        def write(self, data: bytes) -> int:
            self.events.append("write")
            return len(data)

        def flush(self) -> None:
            self.events.append("flush")

        def close(self) -> None:
            self.events.append("close")

    sink = Sink()
    write_line(sink, "x\n")
    assert sink.events == ["write", "flush"]


def test_file_sink_appends_and_creates_parents(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "app.log"
    sink = FileSink(path)

    assert sink.write(b"one\n") == 4
    sink.write("two\n")

    assert path.read_text(encoding="utf-8") == "one\ntwo\n"
