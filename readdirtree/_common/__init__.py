"""Common components with no I/O.

This internal package holds pure helpers used by the async implementation
(path string handling and content encoders). It should NOT be imported
directly by users.

Important: This package must NEVER import from aio to avoid
circular dependencies.
"""

from .paths import (
    normalize_separators,
    extname,
    strip_extension,
    join_name,
    to_bytes,
)
from .encoding import encode_content

__all__ = [
    'normalize_separators',
    'extname',
    'strip_extension',
    'join_name',
    'to_bytes',
    'encode_content',
]
