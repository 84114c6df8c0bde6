"""Asynchronous implementation of readdirtree.

All filesystem calls are awaited one after the other: a listing never has
more than one I/O operation in flight.
"""

# Core abstractions
from .core import (
    ItemDescriptor,
    FileItem,
    FolderItem,
    DirectoryError,
    Listing,
    ListResult,
    AsyncFileSystemAccess,
    OsFileSystemAccess,
    AsyncListingTraverser,
)

# Error policies
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)

# High-level API
from .api import (
    list_directory,
    list_tree,
    list_files,
    walk_items,
    get_paths,
    find_items,
    count_items,
    calculate_size,
    stat,
    read_file,
)

# Configuration (re-exported for convenience)
from ..config import (
    ListMode,
    ListOptions,
    LIST,
    TREE,
)

__all__ = [
    # Items and results
    'ItemDescriptor',
    'FileItem',
    'FolderItem',
    'DirectoryError',
    'Listing',
    'ListResult',
    # Filesystem access
    'AsyncFileSystemAccess',
    'OsFileSystemAccess',
    # Traversal
    'AsyncListingTraverser',
    # Error policies
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'ThresholdPolicy',
    # Configuration
    'ListMode',
    'ListOptions',
    'LIST',
    'TREE',
    # High-level API
    'list_directory',
    'list_tree',
    'list_files',
    'walk_items',
    'get_paths',
    'find_items',
    'count_items',
    'calculate_size',
    'stat',
    'read_file',
]
