"""
Turn a formatted message and its cause chain into one log line.

Both renderers are pure: the caller resolves the timestamp and caller
location up front, so the output depends only on the arguments.
"""

from __future__ import annotations

import dataclasses
import json
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import numpy as np

from taglog.errors import Tagger, iter_chain, unwrap

from .diagnostics import logger as _diag


def format_timestamp(ns: int, *, utc: bool = False) -> str:
    """
    Format nanoseconds since the epoch as RFC 3339 with nanoseconds.

    Trailing zero digits of the fraction are trimmed (no fraction at all on a
    whole second); a zero offset is written as ``Z``.

    Usage example
    -------------
        format_timestamp(time.time_ns(), utc=True)  # '2024-05-01T12:00:00.123456789Z'
    """
    seconds, nanos = divmod(ns, 1_000_000_000)
    if utc:
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    else:
        moment = datetime.fromtimestamp(seconds).astimezone()

    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if nanos:
        text += f".{nanos:09d}".rstrip("0")

    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def render_text(
    err: BaseException,
    *,
    prefix: str = "",
    timestamp: Optional[str] = None,
    location: Optional[str] = None,
) -> str:
    """
    Render `err` as ``[timestamp ][prefix][location: ]message[ (k=v ...)]`` plus newline.

    Tags are collected from every link below `err`, outer links first.
    """
    parts: list[str] = []
    if timestamp is not None:
        parts.append(timestamp + " ")
    parts.append(prefix)
    if location is not None:
        parts.append(location + ": ")
    parts.append(str(err))

    sep = " ("
    for link in iter_chain(unwrap(err)):
        if not isinstance(link, Tagger):
            continue
        for key, value in link.tags().items():
            parts.append(f"{sep}{key}={value}")
            sep = " "
    if sep != " (":
        parts.append(")")

    line = "".join(parts)
    if not line.endswith("\n"):
        line += "\n"
    return line


def _json_default(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_json(
    err: BaseException,
    *,
    timestamp: Optional[str] = None,
    location: Optional[str] = None,
) -> Optional[str]:
    """
    Render `err` as a single-line JSON object (without trailing newline).

    Fields: "message", optional "timestamp" and "file", "level" ("info" when
    `err` has no cause, else "error"), then every tag found along the chain as
    a top-level field. Deeper links win on key collisions.

    Returns
    -------
    line
        The JSON text, or None if the document could not be serialized. The
        failure is reported on the "taglog" diagnostics logger.
    """
    message = str(err)
    doc: dict[str, Any] = {"message": message}
    if timestamp is not None:
        doc["timestamp"] = timestamp
    if location is not None:
        doc["file"] = location

    cause = unwrap(err)
    doc["level"] = "info" if cause is None else "error"
    for link in iter_chain(cause):
        if isinstance(link, Tagger):
            doc.update(link.tags())

    try:
        return json.dumps(
            doc,
            default=_json_default,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError) as error:
        _diag.error("marshal json for message %r: %s", message, error)
        return None
