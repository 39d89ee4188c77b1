"""
log subpackage: print errors with the tags found along their cause chain.

Key primitives
--------------
- Logger: printf / fatalf / panicf, text or single-line JSON output
- Flags: TIMESTAMP, UTC, FILE, PATH, JSON
- LoggerConfig / load_config(): environment and YAML configuration
- printf() and friends: the process-wide default logger (standard error, no flags)
- configure_diagnostics(): where taglog reports its own problems
"""

from .config import ConfigError, Flags, LoggerConfig, load_config
from .diagnostics import configure_diagnostics
from .logger import (
    LogPanic,
    Logger,
    default_logger,
    fatalf,
    panicf,
    printf,
    reset_default,
    set_flags,
    set_output,
    set_prefix,
)
from .render import format_timestamp, render_json, render_text
from .sinks import FileSink, Sink, write_line

__all__ = [
    "ConfigError",
    "FileSink",
    "Flags",
    "LogPanic",
    "Logger",
    "LoggerConfig",
    "Sink",
    "configure_diagnostics",
    "default_logger",
    "fatalf",
    "format_timestamp",
    "load_config",
    "panicf",
    "printf",
    "render_json",
    "render_text",
    "reset_default",
    "set_flags",
    "set_output",
    "set_prefix",
    "write_line",
]
