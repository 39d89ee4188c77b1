from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .diagnostics import logger as _diag


class ConfigError(ValueError):
    """Raised when logger configuration is missing or invalid."""


class Flags(enum.IntFlag):
    """Fields written for each log message; combine with ``|``."""

    TIMESTAMP = 1  # RFC 3339 timestamp with nanoseconds, local time zone
    UTC = 2  # with TIMESTAMP: print in UTC
    FILE = 4  # file name and line number of the caller
    PATH = 8  # full path and line number of the caller, supersedes FILE
    # One JSON object per line with fields "message", "timestamp", "file",
    # "level" ("info" or "error", depending on whether the message wraps an
    # error) and all tags found along the cause chain.
    JSON = 16

    @classmethod
    def parse(cls, text: str) -> "Flags":
        """
        Parse flags from comma/pipe separated names or an integer.

        Usage example
        -------------
            Flags.parse("timestamp,utc")  # Flags.TIMESTAMP | Flags.UTC
            Flags.parse("20")             # Flags.FILE | Flags.JSON
        """
        text = text.strip()
        if not text:
            return cls(0)
        if text.isdigit():
            value = int(text)
            if value & ~sum(member.value for member in cls):
                raise ConfigError(f"Unknown flag bits in {value}")
            return cls(value)

        flags = cls(0)
        for name in text.replace("|", ",").split(","):
            name = name.strip().upper()
            if not name:
                continue
            try:
                flags |= cls[name]
            except KeyError:
                raise ConfigError(f"Unknown log flag: {name.lower()!r}") from None
        return flags


@dataclass(frozen=True)
class LoggerConfig:
    """
    Configuration for a Logger.

    Parameters
    ----------
    prefix
        Written verbatim before the caller location and message (text mode only).
    flags
        Which fields to write, see `Flags`.
    output
        File to append log lines to. None writes to standard error.
    env_prefix
        Prefix of the environment variables read by `from_env`.

    Usage example
    -------------
        cfg = LoggerConfig(prefix="api: ", flags=Flags.TIMESTAMP | Flags.UTC)
        logger = Logger.from_config(cfg)
    """

    prefix: str = ""
    flags: Flags = Flags(0)
    output: Optional[Path] = None

    env_prefix: str = field(default="TAGLOG_", repr=False)

    @classmethod
    def from_env(cls, *, default: Optional["LoggerConfig"] = None) -> "LoggerConfig":
        """
        Create config from environment variables.

        Supported variables (prefix controlled by env_prefix on `default`):
        - <PFX>PREFIX: string
        - <PFX>FLAGS: names like "timestamp,utc,json" or an integer
        - <PFX>OUTPUT: path

        Notes
        -----
        Invalid flags keep the value from `default` and log a warning.

        Usage example
        -------------
            cfg = LoggerConfig.from_env(default=LoggerConfig(env_prefix="MYAPP_LOG_"))
        """
        base = default if default is not None else cls()
        pfx = base.env_prefix

        prefix = os.getenv(f"{pfx}PREFIX", base.prefix)

        flags = base.flags
        flags_raw = os.getenv(f"{pfx}FLAGS")
        if flags_raw is not None:
            try:
                flags = Flags.parse(flags_raw)
            except ConfigError as error:
                _diag.warning("Ignoring %sFLAGS=%r: %s", pfx, flags_raw, error)

        output = base.output
        output_raw = os.getenv(f"{pfx}OUTPUT", "").strip()
        if output_raw:
            output = Path(output_raw)

        return cls(prefix=prefix, flags=flags, output=output, env_prefix=pfx)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LoggerConfig":
        """Build a config from a parsed ``log:`` section."""
        unknown = set(data) - {"prefix", "flags", "output"}
        if unknown:
            raise ConfigError(f"Unknown log config keys: {', '.join(sorted(unknown))}")

        prefix = data.get("prefix", "")
        if prefix is None:
            prefix = ""
        if not isinstance(prefix, str):
            raise ConfigError("log.prefix must be a string")

        raw_flags = data.get("flags", [])
        if isinstance(raw_flags, int) and not isinstance(raw_flags, bool):
            flags = Flags.parse(str(raw_flags))
        elif isinstance(raw_flags, str):
            flags = Flags.parse(raw_flags)
        elif isinstance(raw_flags, list):
            flags = Flags.parse(",".join(str(name) for name in raw_flags))
        elif raw_flags is None:
            flags = Flags(0)
        else:
            raise ConfigError("log.flags must be a list of names, a string or an integer")

        output = data.get("output")
        return cls(prefix=prefix, flags=flags, output=Path(str(output)) if output else None)


def load_config(root: Path) -> LoggerConfig:
    """
    Load logger config from ``taglog.yaml`` in `root` if present.

    Expected layout::

        log:
          prefix: "api: "
          flags: [timestamp, utc, json]
          output: logs/app.log
    """
    config_path = root / "taglog.yaml"
    if not config_path.exists():
        return LoggerConfig()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as error:
        raise ConfigError(f"Invalid YAML in {config_path}: {error}") from error

    if raw is None:
        return LoggerConfig()
    if not isinstance(raw, dict):
        raise ConfigError("Config must be a YAML mapping at top level.")
    section = raw.get("log") or {}
    if not isinstance(section, dict):
        raise ConfigError("Config section 'log' must be a mapping.")
    return LoggerConfig.from_mapping(section)
