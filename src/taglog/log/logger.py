from __future__ import annotations

import os
import sys
import time
from typing import Any, NoReturn, Optional

from taglog.errors import FormattedError, format_error

from .config import Flags, LoggerConfig
from .diagnostics import logger as _diag
from .render import format_timestamp, render_json, render_text
from .sinks import FileSink, Sink, write_line


class LogPanic(RuntimeError):
    """Raised by `panicf` after the line was written; `line` is the exact text."""

    def __init__(self, line: str) -> None:
        super().__init__(line)
        self.line = line


class Logger:
    """
    Writes one line per call: a formatted message plus the tags of its cause chain.

    Formatting is printf-style; ``%w`` takes an exception, renders its message
    and makes it the cause whose chain is searched for tags.

    Concurrency
    -----------
    Each call does exactly one ``write`` on the sink. Setters are not
    synchronized; reconfigure only while no other thread is logging.

    Usage example
    -------------
        logger = Logger(sys.stderr, prefix="api: ", flags=Flags.TIMESTAMP)
        logger.printf("processing request: %w", err)
    """

    def __init__(self, out: Optional[Sink] = None, prefix: str = "", flags: Flags = Flags(0)) -> None:
        self._out: Sink = out if out is not None else sys.stderr
        self._prefix = prefix
        self._flags = Flags(flags)

    def __repr__(self) -> str:
        return f"Logger(out={self._out!r}, prefix={self._prefix!r}, flags={self._flags!r})"

    @classmethod
    def from_config(cls, cfg: LoggerConfig, *, out: Optional[Sink] = None) -> "Logger":
        """Build a logger from `cfg`; `out` overrides ``cfg.output``."""
        if out is None and cfg.output is not None:
            out = FileSink(cfg.output)
        return cls(out, prefix=cfg.prefix, flags=cfg.flags)

    @property
    def flags(self) -> Flags:
        return self._flags

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def output(self) -> Sink:
        return self._out

    def set_flags(self, flags: Flags) -> None:
        self._flags = Flags(flags)

    def set_prefix(self, prefix: str) -> None:
        self._prefix = prefix

    def set_output(self, out: Sink) -> None:
        """Set where lines are written. One write per line, ending in a newline."""
        self._out = out

    def printf(self, format: str, *args: Any) -> str:
        """Log a message and return the line written."""
        return self._write(format, args, 2)

    def fatalf(self, format: str, *args: Any) -> NoReturn:
        """Log a message and exit the process with status 1."""
        self._write(format, args, 2)
        sys.exit(1)

    def panicf(self, format: str, *args: Any) -> NoReturn:
        """Log a message and raise `LogPanic` carrying the line."""
        raise LogPanic(self._write(format, args, 2))

    def _caller_location(self, calldepth: int) -> Optional[str]:
        # calldepth counts frames above _write; one more for this frame.
        try:
            frame = sys._getframe(calldepth + 1)
        except ValueError:
            return None
        path = frame.f_code.co_filename
        if not self._flags & Flags.PATH:
            path = os.path.basename(path)
        return f"{path}:{frame.f_lineno}"

    def _format(self, format: str, args: tuple[Any, ...]) -> FormattedError:
        try:
            return format_error(format, *args)
        except (TypeError, ValueError, KeyError) as error:
            # Misuse is reported, like logging.Handler.handleError, and the line still goes out.
            _diag.error("format log message %r with args %r: %s", format, args, error)
        cause = next((arg for arg in args if isinstance(arg, BaseException)), None)
        return FormattedError(f"{format} {args!r}" if args else format, cause)

    def _write(self, format: str, args: tuple[Any, ...], calldepth: int) -> str:
        flags = self._flags

        timestamp = None
        if flags & Flags.TIMESTAMP:
            timestamp = format_timestamp(time.time_ns(), utc=bool(flags & Flags.UTC))

        location = None
        if flags & (Flags.FILE | Flags.PATH):
            location = self._caller_location(calldepth)

        err = self._format(format, args)

        if flags & Flags.JSON:
            line = render_json(err, timestamp=timestamp, location=location)
            if line is None:
                return str(err)
            write_line(self._out, line + "\n")
            return line

        line = render_text(err, prefix=self._prefix, timestamp=timestamp, location=location)
        write_line(self._out, line)
        return line


_std: Optional[Logger] = None


def default_logger() -> Logger:
    """Return the process-wide logger, building it from the environment on first use."""
    global _std
    if _std is None:
        _std = Logger.from_config(LoggerConfig.from_env())
    return _std


def reset_default() -> None:
    """Forget the process-wide logger; the next call rebuilds it."""
    global _std
    _std = None


def set_flags(flags: Flags) -> None:
    """Set flags on the default logger. Default is no flags."""
    default_logger().set_flags(flags)


def set_prefix(prefix: str) -> None:
    """Set the prefix of the default logger. Default is the empty string."""
    default_logger().set_prefix(prefix)


def set_output(out: Sink) -> None:
    """Set the output of the default logger. Default is standard error."""
    default_logger().set_output(out)


def printf(format: str, *args: Any) -> str:
    """Log a message to the default logger."""
    return default_logger()._write(format, args, 2)


def fatalf(format: str, *args: Any) -> NoReturn:
    """Log a message to the default logger and exit with status 1."""
    default_logger()._write(format, args, 2)
    sys.exit(1)


def panicf(format: str, *args: Any) -> NoReturn:
    """Log a message to the default logger and raise `LogPanic`."""
    raise LogPanic(default_logger()._write(format, args, 2))
