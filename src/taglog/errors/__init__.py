"""
errors subpackage: errors that carry key/value tags along their cause chain.

Key primitives
--------------
- TaggedError: wraps an error, adds tags; message is the wrapped error's message
- errorf(): printf-style formatting with ``%w`` to wrap a cause
- from_error(): tag an existing exception
- Tagger: protocol for any chain link that exposes tags
- unwrap() / iter_chain(): the cause-chain relation used by the logger
"""

from .chain import iter_chain, unwrap
from .types import FormattedError, TaggedError, Tagger, Tags
from .wrap import errorf, format_error, from_error

__all__ = [
    "FormattedError",
    "TaggedError",
    "Tagger",
    "Tags",
    "errorf",
    "format_error",
    "from_error",
    "iter_chain",
    "unwrap",
]
