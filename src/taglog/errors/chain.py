"""The cause-chain relation shared by errors and the log renderer."""

from __future__ import annotations

from typing import Iterator, Optional


def unwrap(err: Optional[BaseException]) -> Optional[BaseException]:
    """
    Return the immediate cause of `err`, or None at the end of the chain.

    Links that define ``unwrap()`` decide for themselves; any other exception
    falls back to its explicit ``__cause__`` (``raise X from Y``).
    """
    if err is None:
        return None
    method = getattr(err, "unwrap", None)
    if callable(method):
        return method()
    return err.__cause__


def iter_chain(err: Optional[BaseException]) -> Iterator[BaseException]:
    """
    Yield `err` and each of its causes, outermost first.

    Stops at the first link already seen, so a cyclic chain ends instead of
    looping forever.
    """
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = unwrap(err)
