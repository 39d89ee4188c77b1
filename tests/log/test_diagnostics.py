from __future__ import annotations

import logging
from typing import Iterator

import pytest
from rich.logging import RichHandler

from taglog.log.diagnostics import configure_diagnostics, logger


@pytest.fixture
def restore_diagnostics() -> Iterator[None]:
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_configure_diagnostics_installs_rich_handler(restore_diagnostics: None) -> None:
    configured = configure_diagnostics(logging.INFO)

    assert configured is logging.getLogger("taglog")
    assert configured.level == logging.INFO
    assert configured.propagate is False
    assert len(configured.handlers) == 1
    assert isinstance(configured.handlers[0], RichHandler)


def test_configure_diagnostics_replaces_handlers(restore_diagnostics: None) -> None:
    configure_diagnostics()
    configure_diagnostics(logging.ERROR, rich_tracebacks=True)

    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.ERROR
