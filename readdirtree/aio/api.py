"""High-level async API for readdirtree.

``list_directory`` is the entry point. The other functions are
conveniences around it: preset modes, and helpers that walk a result
without touching the filesystem again.
"""

import os
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..config import DEFAULT_ENCODING, ListMode, ListOptions, ProgressCallback, TraversalContext
from .._common.encoding import encode_content
from .core import (
    AsyncFileSystemAccess,
    AsyncListingTraverser,
    DirectoryError,
    FileItem,
    FolderItem,
    ItemDescriptor,
    ListResult,
    OsFileSystemAccess,
)
from .error_policies import ContinueOnErrorsPolicy

PathLike = Union[str, bytes, os.PathLike]


async def list_directory(
    path: PathLike,
    options: Optional[ListOptions] = None,
    progress: Optional[ProgressCallback] = None,
    *,
    access: Optional[AsyncFileSystemAccess] = None
) -> ListResult:
    """List a directory tree asynchronously.

    Filesystem failures never raise: an unreadable root comes back as a
    ``DirectoryError`` and per-item failures are stored in ``item.error``.
    Check ``result.ok`` (or ``isinstance``) to tell the two apart.

    ``Listing.aborted`` covers the pass over the root directory only. A
    subfolder whose pass was stopped by ``progress`` is marked with
    ``FolderItem.aborted``; in LIST mode that folder only appears in the
    result when ``ignore_folders`` is False.

    Args:
        path: Directory to list
        options: Listing options (defaults: recursive flat list of files)
        progress: Called as ``progress(item, position_from_end, total)``
            after each item; return True to stop that directory's pass
        access: Filesystem adapter (defaults to the local filesystem)

    Returns:
        Listing on success, DirectoryError if the directory could not be read

    Raises:
        ValueError: If the options are invalid

    Example:
        >>> result = await list_directory('/data', ListOptions(stats=True))
        >>> if result.ok:
        ...     for item in result:
        ...         print(item.full_name, item.stats.st_size)
    """
    options = options or ListOptions()
    errors = options.validate()
    if errors:
        raise ValueError(f"Invalid options: {', '.join(errors)}")

    policy = options.error_policy or ContinueOnErrorsPolicy(verbose=False)
    access = access or OsFileSystemAccess()

    context = TraversalContext.create(options, access, policy, progress)
    traverser = AsyncListingTraverser(context)
    return await traverser.traverse(os.fsdecode(path))


async def list_tree(
    path: PathLike,
    options: Optional[ListOptions] = None,
    progress: Optional[ProgressCallback] = None,
    *,
    access: Optional[AsyncFileSystemAccess] = None
) -> ListResult:
    """List a directory as a nested tree.

    Same as ``list_directory`` with ``mode`` forced to TREE.
    """
    options = (options or ListOptions()).with_overrides(mode=ListMode.TREE)
    return await list_directory(path, options, progress, access=access)


async def list_files(
    path: PathLike,
    options: Optional[ListOptions] = None,
    progress: Optional[ProgressCallback] = None,
    *,
    access: Optional[AsyncFileSystemAccess] = None
) -> ListResult:
    """List only the files below a directory, as a flat list."""
    options = (options or ListOptions()).with_overrides(
        mode=ListMode.LIST,
        ignore_folders=True
    )
    return await list_directory(path, options, progress, access=access)


def walk_items(
    items: Union[ListResult, Iterable[ItemDescriptor]],
    level: int = 0
) -> Iterator[Tuple[ItemDescriptor, int]]:
    """Walk a result depth-first, descending into folder content.

    Args:
        items: A Listing, a DirectoryError, or a sequence of items
        level: Nesting level of ``items``

    Yields:
        Tuples of (item, nesting level)

    Example:
        >>> for item, level in walk_items(await list_tree('/path')):
        ...     print(f"{'  ' * level}{item.name}")
    """
    if isinstance(items, DirectoryError):
        return

    for item in items:
        yield item, level
        content = getattr(item, 'content', None)
        if content is not None and not isinstance(content, DirectoryError):
            yield from walk_items(content, level + 1)


def get_paths(result: ListResult) -> List[str]:
    """Get the full names of all items, including nested ones."""
    return [item.full_name for item, _ in walk_items(result)]


def find_items(
    result: ListResult,
    predicate: Callable[[ItemDescriptor], bool]
) -> List[ItemDescriptor]:
    """Find items matching a predicate, including nested ones."""
    return [item for item, _ in walk_items(result) if predicate(item)]


def count_items(result: ListResult) -> Dict[str, int]:
    """Count the items of a result.

    Returns:
        Dictionary with files, directories, errors and total counts
    """
    counts = {'files': 0, 'directories': 0, 'errors': 0, 'total': 0}

    for item, _ in walk_items(result):
        counts['total'] += 1
        if item.error is not None:
            counts['errors'] += 1
        if isinstance(item, FolderItem):
            counts['directories'] += 1
            if isinstance(item.content, DirectoryError):
                counts['errors'] += 1
        elif isinstance(item, FileItem):
            counts['files'] += 1

    return counts


def calculate_size(result: ListResult) -> int:
    """Sum the sizes of all files that carry stats.

    Requires a listing made with ``stats=True``.
    """
    return sum(
        item.stats.st_size
        for item, _ in walk_items(result)
        if isinstance(item, FileItem) and item.stats is not None
    )


async def stat(
    path: PathLike,
    access: Optional[AsyncFileSystemAccess] = None
) -> os.stat_result:
    """Get stat information for a single path.

    Raises:
        OSError: If the path cannot be stat'ed
    """
    access = access or OsFileSystemAccess()
    return await access.stat(path)


async def read_file(
    path: PathLike,
    encoding: str = DEFAULT_ENCODING,
    access: Optional[AsyncFileSystemAccess] = None
) -> str:
    """Read a file and return its content in the given encoding.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the encoding is not supported
    """
    access = access or OsFileSystemAccess()
    data = await access.read_bytes(path)
    return encode_content(data, encoding)


__all__ = [
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
