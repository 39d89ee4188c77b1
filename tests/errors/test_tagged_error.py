from __future__ import annotations

import pytest

from taglog.errors import TaggedError, Tagger, errorf, from_error


def test_message_is_wrapped_message_without_tags() -> None:
    root = TimeoutError("timeout")
    err = errorf("connect: %w", root).tag("address", "10.0.0.1:5432")

    assert str(err) == "connect: timeout"
    assert "address" not in str(err)
    assert dict(err.tags()) == {"address": "10.0.0.1:5432"}


def test_unwrap_returns_wrapped_cause() -> None:
    inner = ValueError("inner")
    err = errorf("outer: %w", inner)

    assert inner.args[0] in str(err)
    assert err.unwrap() is inner
    assert str(err.unwrap()) == "inner"
    assert err.__cause__ is inner


def test_errorf_without_wrap_has_no_cause() -> None:
    err = errorf("plain %d", 3)

    assert str(err) == "plain 3"
    assert err.unwrap() is None
    assert dict(err.tags()) == {}


def test_tag_is_copy_on_write() -> None:
    base = errorf("boom")
    tagged = base.tag("id", 1)
    retagged = tagged.tag("id", 2).tag("user", "ana")

    assert dict(base.tags()) == {}
    assert dict(tagged.tags()) == {"id": 1}
    assert dict(retagged.tags()) == {"id": 2, "user": "ana"}
    assert tagged.err is base.err


def test_tags_are_read_only() -> None:
    err = errorf("boom").tag("id", 1)
    with pytest.raises(TypeError):
        err.tags()["id"] = 2  # type: ignore[index]


def test_with_tags_merges_mapping_and_keywords() -> None:
    err = errorf("boom").tag("a", 1).with_tags({"b": 2}, c=3)

    assert list(err.tags().items()) == [("a", 1), ("b", 2), ("c", 3)]


def test_from_error_plain_exception() -> None:
    root = OSError("disk full")
    err = from_error(root).tag("path", "/tmp/x")

    assert str(err) == "disk full"
    assert err.err is root
    assert err.unwrap() is None


def test_from_error_keeps_tagged_error_in_chain() -> None:
    inner = errorf("inner").tag("a", 1)
    outer = from_error(inner).tag("b", 2)

    assert str(outer) == "inner"
    assert outer.unwrap() is inner


def test_from_error_rejects_non_exceptions() -> None:
    with pytest.raises(TypeError, match="requires an exception"):
        from_error("nope")  # type: ignore[arg-type]


def test_tagger_protocol() -> None:
    assert isinstance(errorf("x"), Tagger)
    assert not isinstance(ValueError("x"), Tagger)


def test_tagged_error_can_be_raised_and_caught() -> None:
    err = errorf("connect: %w", ConnectionRefusedError("refused")).tag("port", 5432)

    with pytest.raises(TaggedError, match="connect: refused") as info:
        raise err
    assert info.value.tags()["port"] == 5432
    assert "port" in repr(info.value)
