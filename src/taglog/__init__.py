"""
taglog: log errors together with key/value tags collected from their cause chain.

Example
-------
    from taglog import errorf, log

    try:
        connect(address)
    except OSError as exc:
        err = errorf("connect to remote: %w", exc).tag("address", address)
        log.printf("open resource: %w", err)

    # open resource: connect to remote: timed out (address=10.0.0.1:5432)
"""

from . import errors, log
from .errors import TaggedError, Tagger, errorf, from_error
from .version import __version__

__all__ = [
    "TaggedError",
    "Tagger",
    "__version__",
    "errorf",
    "errors",
    "from_error",
    "log",
]
