from __future__ import annotations

from typing import Optional

from taglog.errors.chain import iter_chain, unwrap


def _raise_from(outer: BaseException, cause: BaseException) -> BaseException:
    try:
        raise outer from cause
    except BaseException as exc:
        return exc


def test_unwrap_follows_explicit_cause() -> None:
    root = ValueError("root")
    err = _raise_from(RuntimeError("outer"), root)

    assert unwrap(err) is root
    assert unwrap(root) is None
    assert unwrap(None) is None


def test_unwrap_ignores_implicit_context() -> None:
    try:
        try:
            raise ValueError("first")
        except ValueError:
            raise RuntimeError("second")
    except RuntimeError as exc:
        err = exc

    assert err.__context__ is not None
    assert unwrap(err) is None


def test_unwrap_prefers_unwrap_method() -> None:
    target = KeyError("k")

    class Custom(Exception):
        def unwrap(self) -> Optional[BaseException]:
            return target

    err = _raise_from(Custom("c"), ValueError("ignored"))
    assert unwrap(err) is target


def test_iter_chain_walks_outer_to_inner() -> None:
    root = ValueError("root")
    mid = _raise_from(RuntimeError("mid"), root)
    top = _raise_from(OSError("top"), mid)

    assert list(iter_chain(top)) == [top, mid, root]
    assert list(iter_chain(None)) == []


def test_iter_chain_stops_on_cycle() -> None:
    a = ValueError("a")
    b = ValueError("b")
    a.__cause__ = b
    b.__cause__ = a

    assert list(iter_chain(a)) == [a, b]
