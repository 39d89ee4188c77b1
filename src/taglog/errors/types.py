from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from .chain import unwrap

Tags = Mapping[str, Any]


@runtime_checkable
class Tagger(Protocol):
    """Anything in a cause chain that exposes key/value tags."""

    def tags(self) -> Tags: ...


class FormattedError(Exception):
    """
    An error produced by formatting a message, optionally wrapping a cause.

    The message is fixed at construction; `unwrap()` returns the error that was
    substituted for the ``%w`` conversion, or None.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def unwrap(self) -> Optional[BaseException]:
        return self.cause


class TaggedError(Exception):
    """
    An error carrying tags, wrapping another error.

    The message is always the wrapped error's message; tags never appear in it.
    Tagging is copy-on-write: `tag()` returns a new TaggedError and leaves the
    receiver (and every other link in the chain) untouched.

    Usage example
    -------------
        err = errorf("connect: %w", exc).tag("address", "10.0.0.1:5432")
        log.printf("open resource: %w", err)
    """

    def __init__(self, err: BaseException, tags: Optional[Tags] = None) -> None:
        super().__init__(str(err))
        self.err = err
        self._tags: dict[str, Any] = dict(tags or {})
        self.__cause__ = self.unwrap()

    def __str__(self) -> str:
        return str(self.err)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, tags={self._tags!r})"

    def unwrap(self) -> Optional[BaseException]:
        """Return the immediate cause, skipping the wrapped error unless it has tags."""
        if isinstance(self.err, Tagger):
            return self.err
        return unwrap(self.err)

    def tags(self) -> Tags:
        """Return this link's own tags (read-only)."""
        return MappingProxyType(self._tags)

    def tag(self, key: str, value: Any) -> "TaggedError":
        """Return a copy of this error with `key` set to `value`."""
        return type(self)(self.err, {**self._tags, key: value})

    def with_tags(self, tags: Optional[Tags] = None, **kwargs: Any) -> "TaggedError":
        """Return a copy of this error with several tags set at once."""
        return type(self)(self.err, {**self._tags, **(tags or {}), **kwargs})
