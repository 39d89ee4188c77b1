from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from .types import FormattedError, TaggedError

# One printf-style conversion; only its type character and argument slot matter here.
_CONVERSION_RE = re.compile(
    r"%(?:\((?P<key>[^)]*)\))?[#0 +\-]*(?P<width>\*|\d+)?(?:\.(?P<precision>\*|\d+))?[hlL]?(?P<type>.)",
    re.DOTALL,
)


def _format_values(args: tuple[Any, ...]) -> Any:
    # Same rule as logging.LogRecord: a lone non-empty mapping feeds %(key)s conversions.
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        return args[0]
    return args


def _resolve_wrap(format: str, values: Any) -> tuple[str, Optional[BaseException]]:
    """Rewrite the ``%w`` conversion to ``%s`` and return the argument it refers to."""
    wrapped: Optional[BaseException] = None
    parts: list[str] = []
    pos = 0
    index = 0
    for match in _CONVERSION_RE.finditer(format):
        kind = match.group("type")
        if kind == "%":
            continue
        key = match.group("key")
        arg_index = -1
        if key is None:
            index += (match.group("width") == "*") + (match.group("precision") == "*")
            arg_index = index
            index += 1
        if kind != "w":
            continue

        if wrapped is not None:
            raise ValueError("format string has more than one %w conversion")
        try:
            arg = values[key] if key is not None else values[arg_index]
        except (IndexError, KeyError, TypeError) as exc:
            raise TypeError("not enough arguments for %w conversion") from exc
        if not isinstance(arg, BaseException):
            raise TypeError(f"%w requires an exception, not {type(arg).__name__}")
        wrapped = arg

        parts.append(format[pos : match.end() - 1])
        parts.append("s")
        pos = match.end()
    parts.append(format[pos:])
    return "".join(parts), wrapped


def format_error(format: str, *args: Any) -> FormattedError:
    """
    Format a message printf-style, with ``%w`` wrapping an exception argument.

    ``%w`` renders like ``%s`` and makes its argument the immediate cause of the
    returned error. The format is always processed, so ``%%`` is a literal
    ``%`` with or without arguments.

    Usage example
    -------------
        err = format_error("open %s: %w", path, exc)
        assert err.unwrap() is exc
    """
    values = _format_values(args)
    format, cause = _resolve_wrap(format, values)
    return FormattedError(format % values, cause)


def errorf(format: str, *args: Any) -> TaggedError:
    """Format a new TaggedError with empty tags (see `format_error`)."""
    return TaggedError(format_error(format, *args))


def from_error(err: BaseException) -> TaggedError:
    """Wrap an existing error as a TaggedError with empty tags."""
    if not isinstance(err, BaseException):
        raise TypeError(f"from_error requires an exception, not {type(err).__name__}")
    return TaggedError(err)
