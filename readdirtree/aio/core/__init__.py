"""Core components of the async listing engine.

Item descriptors and results, the filesystem access abstraction, the
shallow directory reader and the recursive traverser.
"""

from .items import (
    ItemDescriptor,
    FileItem,
    FolderItem,
    DirectoryError,
    Listing,
    ListResult,
)
from .adapter import AsyncFileSystemAccess, OsFileSystemAccess
from .reader import build_entry, read_directory, resolve_path
from .traverser import AsyncListingTraverser

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
    # Reading and traversal
    'build_entry',
    'read_directory',
    'resolve_path',
    'AsyncListingTraverser',
]
