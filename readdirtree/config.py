"""Configuration system for readdirtree.

This module defines how callers specify a listing: output shape, recursion,
which metadata to collect, filtering and content loading. It also defines
the per-call traversal context that is threaded through every recursive
directory read.
"""

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, List, Optional, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from .aio.core.adapter import AsyncFileSystemAccess
    from .aio.error_policies import ErrorPolicy


class ListMode(Enum):
    """Shape of the returned collection."""
    LIST = 1    # Flat sequence of files (and folders if kept)
    TREE = 2    # Folders carry their children in ``content``


LIST = ListMode.LIST
TREE = ListMode.TREE


# Encodings accepted for file content, with their aliases
ENCODINGS = frozenset({
    'ascii',
    'base64',
    'binary',
    'hex',
    'ucs2',
    'ucs-2',
    'utf16le',
    'utf-16le',
    'utf8',
    'utf-8',
    'latin1',
})

DEFAULT_ENCODING = 'base64'


# progress(item, position_from_end, total) -> True to stop the directory pass
ProgressCallback = Callable[[Any, int, int], Optional[bool]]


@dataclass
class ListOptions:
    """Complete configuration for a directory listing.

    This is the primary way callers specify what they want back from
    ``list_directory``. Defaults produce a recursive flat list of files
    with canonical, forward-slash paths.
    """

    # Output shape
    mode: ListMode = ListMode.LIST

    # Recursion into subdirectories
    recursive: bool = True

    # Metadata collection
    stats: bool = False          # Attach os.stat_result to every item
    ignore_folders: bool = True  # Drop empty folders (LIST: drop all folders)
    extensions: bool = False     # Attach lowercase extension
    deep: bool = False           # Attach recursion depth

    # Path handling
    real_path: bool = True        # Resolve ., .. and symlinks
    normalize_path: bool = True   # Backslashes to forward slashes

    # Filtering (substring match on the full name)
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)

    # Content loading
    read_content: bool = False
    encoding: str = DEFAULT_ENCODING

    # Error handling (None means a quiet continue-on-errors policy)
    error_policy: Optional['ErrorPolicy'] = None

    # Convenience constructors for common configurations

    @classmethod
    def tree(cls, **kwargs) -> 'ListOptions':
        """Create options for a nested tree listing.

        Args:
            **kwargs: Any other option to override

        Returns:
            ListOptions in TREE mode
        """
        kwargs.setdefault('mode', ListMode.TREE)
        return cls(**kwargs)

    @classmethod
    def shallow(cls, **kwargs) -> 'ListOptions':
        """Create options that only list the given directory.

        Args:
            **kwargs: Any other option to override

        Returns:
            Non-recursive ListOptions
        """
        kwargs.setdefault('recursive', False)
        return cls(**kwargs)

    @classmethod
    def everything(cls, **kwargs) -> 'ListOptions':
        """Create options that keep folders and collect all metadata.

        Args:
            **kwargs: Any other option to override

        Returns:
            ListOptions with stats, extensions and depth enabled
        """
        kwargs.setdefault('ignore_folders', False)
        kwargs.setdefault('stats', True)
        kwargs.setdefault('extensions', True)
        kwargs.setdefault('deep', True)
        return cls(**kwargs)

    def with_overrides(self, **kwargs) -> 'ListOptions':
        """Return a copy of these options with some fields replaced."""
        return replace(self, **kwargs)

    @property
    def needs_enrichment(self) -> bool:
        """Whether items must be stat'ed after the shallow listing.

        When only names are wanted the listing is returned as-is and no
        per-item metadata calls are made.
        """
        return (
            self.stats
            or self.recursive
            or not self.ignore_folders
            or self.read_content
            or self.mode == ListMode.TREE
        )

    def validate(self) -> List[str]:
        """Validate options for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.mode, ListMode):
            errors.append(f"mode must be a ListMode, got {self.mode!r}")

        if self.encoding not in ENCODINGS:
            errors.append(f"unknown encoding {self.encoding!r}")

        for name in ('include', 'exclude'):
            values = getattr(self, name)
            if isinstance(values, (str, bytes)):
                errors.append(f"{name} must be a list of strings, not a single string")
            elif not all(isinstance(value, str) for value in values):
                errors.append(f"{name} must only contain strings")

        return errors


@dataclass
class TraversalContext:
    """Per-call state threaded through every recursive directory read.

    One context is created per top-level ``list_directory`` call, so two
    concurrent calls with different ``normalize_path`` settings never see
    each other's separator.
    """

    options: ListOptions
    access: 'AsyncFileSystemAccess'
    policy: 'ErrorPolicy'
    progress: Optional[ProgressCallback] = None
    separator: str = '/'

    # Canonical paths of the directories on the current recursion chain
    ancestors: Set[str] = field(default_factory=set)

    @classmethod
    def create(
        cls,
        options: ListOptions,
        access: 'AsyncFileSystemAccess',
        policy: 'ErrorPolicy',
        progress: Optional[ProgressCallback] = None
    ) -> 'TraversalContext':
        """Build a context, picking the separator from the options."""
        separator = '/' if options.normalize_path else os.sep
        return cls(
            options=options,
            access=access,
            policy=policy,
            progress=progress,
            separator=separator,
        )
