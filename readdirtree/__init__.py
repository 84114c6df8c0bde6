"""readdirtree - Recursive async directory listing.

readdirtree walks a directory subtree and returns a structured
description of its files and folders, as a flat list or a nested tree,
with optional stats, extensions, depth, filtering and file content.

Usage:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from readdirtree import list_directory, ListOptions, TREE

    result = await list_directory('/data', ListOptions(mode=TREE))
    if result.ok:
        ...
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

# Library logging stays silent unless the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

from . import aio
from .aio import (
    list_directory,
    list_tree,
    list_files,
    walk_items,
    get_paths,
    find_items,
    count_items,
    calculate_size,
    ItemDescriptor,
    FileItem,
    FolderItem,
    DirectoryError,
    Listing,
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)
from .config import (
    ListMode,
    ListOptions,
    LIST,
    TREE,
    ENCODINGS,
    DEFAULT_ENCODING,
)

__all__ = [
    "__version__",
    "aio",
    # Entry points
    "list_directory",
    "list_tree",
    "list_files",
    # Result helpers
    "walk_items",
    "get_paths",
    "find_items",
    "count_items",
    "calculate_size",
    # Items and results
    "ItemDescriptor",
    "FileItem",
    "FolderItem",
    "DirectoryError",
    "Listing",
    # Error policies
    "ErrorPolicy",
    "FailFastPolicy",
    "ContinueOnErrorsPolicy",
    "CollectErrorsPolicy",
    "ThresholdPolicy",
    # Configuration
    "ListMode",
    "ListOptions",
    "LIST",
    "TREE",
    "ENCODINGS",
    "DEFAULT_ENCODING",
]
