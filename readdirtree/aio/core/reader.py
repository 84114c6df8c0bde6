"""Shallow directory reading.

Resolves a directory path, lists its raw entries and turns each entry
into an ``ItemDescriptor``, applying the early extension and exclusion
filters. Nothing here recurses or fetches per-item metadata.
"""

import errno
import logging
import os
from typing import List, Optional, Tuple

from ...config import TraversalContext
from ..._common.paths import extname, join_name, normalize_separators, strip_extension
from .items import ItemDescriptor

logger = logging.getLogger(__name__)


async def resolve_path(path: str, context: TraversalContext) -> str:
    """Canonicalize and reformat a directory path.

    Canonicalization failures are not errors: the original path is used.

    Args:
        path: Path as given by the caller or built from a parent item
        context: Per-call traversal context

    Returns:
        Path to list
    """
    options = context.options
    resolved = path

    if options.real_path:
        try:
            resolved = await context.access.realpath(path)
        except (OSError, RuntimeError) as e:
            logger.debug("Could not canonicalize '%s', using it as-is: %s", path, e)
            resolved = path

    if options.normalize_path:
        resolved = normalize_separators(resolved)

    return resolved


def passes_extension_filter(ext: str, include: List[str]) -> bool:
    """Early include check, on the extension only.

    Entries without an extension (usually folders) always pass so that
    recursion can reach matching files below them.
    """
    if not include:
        return True
    if not ext:
        return True
    return ext in include or any(len(value) == 0 for value in include)


def is_excluded(full_name: str, exclude: List[str]) -> bool:
    """Check whether a full name contains any exclude substring."""
    for value in exclude:
        if value in full_name:
            return True
    return False


def build_entry(
    parent_path: str,
    name_raw: bytes,
    context: TraversalContext,
    depth: int
) -> Optional[ItemDescriptor]:
    """Create the descriptor of one directory entry.

    Args:
        parent_path: Resolved path of the directory being read
        name_raw: Entry name exactly as listed by the OS
        context: Per-call traversal context
        depth: Depth of the directory being read

    Returns:
        The descriptor, or None when the entry is filtered out
    """
    options = context.options
    name = os.fsdecode(name_raw)
    ext = extname(name)

    if not passes_extension_filter(ext, options.include):
        return None

    separator = context.separator
    full_name = join_name(parent_path, name, separator)
    if is_excluded(full_name, options.exclude):
        return None

    path_raw = os.fsencode(parent_path)
    item = ItemDescriptor(
        name=name,
        name_raw=name_raw,
        title=strip_extension(name),
        path=parent_path,
        path_raw=path_raw,
        full_name=full_name,
        full_name_raw=join_name(path_raw, name_raw, os.fsencode(separator)),
    )

    if options.extensions:
        item.extension = ext.lower()
    if options.deep:
        item.depth = depth

    return item


async def read_directory(
    path: str,
    context: TraversalContext,
    depth: int
) -> Tuple[str, List[ItemDescriptor]]:
    """List the immediate children of a directory.

    Args:
        path: Directory to read
        context: Per-call traversal context
        depth: Depth of this directory from the listing root

    Returns:
        Tuple of (resolved path, descriptors in listing order)

    Raises:
        OSError: If the directory cannot be opened or listed, or if its
            canonical path is one of its own ancestors
    """
    resolved = await resolve_path(path, context)

    if resolved in context.ancestors:
        raise OSError(errno.ELOOP, "Directory revisits one of its ancestors", resolved)

    names = await context.access.list_names(resolved)
    logger.debug("Read %d entries from '%s' (depth %d)", len(names), resolved, depth)

    items = []
    # Bytewise order keeps results stable across platforms and runs
    for name_raw in sorted(names):
        item = build_entry(resolved, name_raw, context, depth)
        if item is not None:
            items.append(item)

    return resolved, items
