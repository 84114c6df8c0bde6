"""Recursive listing traversal.

Coordinates the shallow directory reader, per-item metadata enrichment
and the final include filter across nesting levels. Work is strictly
sequential: each item (including any nested directory listing it
triggers) is fully processed before the next one starts.

Descent uses an explicit stack of suspended directory passes rather than
Python recursion, so tree depth is bounded by the filesystem only.
"""

import inspect
import logging
import stat as stat_module
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ...config import ListMode, TraversalContext
from ..._common.encoding import encode_content
from .items import DirectoryError, FolderItem, ItemDescriptor, ListResult, Listing
from .reader import read_directory

logger = logging.getLogger(__name__)


@dataclass
class DirectoryPass:
    """Enrichment state of one directory, kept on the traversal stack.

    Items are visited from last to first. While a subfolder is being
    listed the pass is suspended with that folder in ``pending``.

    Attributes:
        path: Resolved path of the directory
        depth: Depth of the directory from the listing root
        items: Snapshot of the descriptors returned by the reader
        index: Index of the next item to visit (counts down)
        kept: Surviving items, in visit order
        flattened: Nested LIST-mode items, in visit order
        aborted: True once the progress callback stopped the pass
        pending: Folder waiting for its nested listing
    """

    path: str
    depth: int
    items: List[ItemDescriptor]
    index: int = -1
    kept: List[ItemDescriptor] = field(default_factory=list)
    flattened: List[ItemDescriptor] = field(default_factory=list)
    aborted: bool = False
    pending: Optional[FolderItem] = None

    def __post_init__(self):
        self.index = len(self.items) - 1

    @property
    def done(self) -> bool:
        return self.aborted or self.index < 0

    @property
    def position(self) -> int:
        """Position from the end of the item being visited (1-based)."""
        return len(self.items) - self.index


class AsyncListingTraverser:
    """Walks a directory tree and builds the listing result.

    One traverser serves one top-level call; the context it holds carries
    the options, the filesystem adapter, the error policy and the
    progress callback down every nesting level.
    """

    def __init__(self, context: TraversalContext):
        """Initialize traverser.

        Args:
            context: Per-call traversal context
        """
        self.context = context
        self.options = context.options

    async def traverse(self, path: str, depth: int = 0) -> ListResult:
        """List a directory, descending into subfolders as configured.

        Args:
            path: Directory to list
            depth: Depth of this directory from the listing root

        Returns:
            A Listing, or a DirectoryError if the directory could not be read
        """
        stack: List[DirectoryPass] = []
        result = await self.open_directory(path, depth, stack)

        while stack:
            current = stack[-1]

            if result is not None:
                # A nested listing finished; resume its parent
                folder = current.pending
                current.pending = None
                self.attach(folder, result, current)
                result = None
                await self.finish_item(folder, current)

            if current.done:
                stack.pop()
                result = self.close_directory(current)
                continue

            item, descend = await self.enrich_item(current.items[current.index], current.depth)
            if descend:
                current.pending = item
                result = await self.open_directory(item.full_name, current.depth + 1, stack)
                continue

            await self.finish_item(item, current)

        return result

    async def open_directory(
        self,
        path: str,
        depth: int,
        stack: List[DirectoryPass]
    ) -> Optional[ListResult]:
        """Read a directory and start its pass.

        Returns:
            The finished result when there is nothing to enrich or the
            directory could not be read, otherwise None with a new pass
            pushed on ``stack``
        """
        try:
            resolved, items = await read_directory(path, self.context, depth)
        except (OSError, ValueError) as e:
            await self.context.policy.handle(e, 'read_directory', path)
            return DirectoryError(error=e, path=path)

        if not self.options.needs_enrichment:
            return Listing(items=self.only_include(items), path=resolved)

        self.context.ancestors.add(resolved)
        stack.append(DirectoryPass(path=resolved, depth=depth, items=items))
        return None

    def close_directory(self, current: DirectoryPass) -> Listing:
        """Build the listing of a finished pass.

        Surviving items come back in listing order, followed (LIST mode)
        by the flattened contents of subfolders in the order they were
        visited.
        """
        self.context.ancestors.discard(current.path)
        current.kept.reverse()
        items = self.only_include(current.kept + current.flattened)
        return Listing(items=items, path=current.path, aborted=current.aborted)

    async def finish_item(self, item: ItemDescriptor, current: DirectoryPass):
        """Report an enriched item to the progress callback and keep it."""
        position = current.position
        current.index -= 1

        progress = self.context.progress
        if progress is not None:
            answer = progress(item, position, len(current.items))
            if inspect.isawaitable(answer):
                answer = await answer
            if answer:
                # The triggering item goes too; unvisited items are dropped
                logger.debug(
                    "Progress callback stopped '%s' after %d of %d items",
                    current.path, position, len(current.items)
                )
                current.aborted = True
                return

        if not self._should_drop(item):
            current.kept.append(item)

    def attach(self, folder: FolderItem, result: ListResult, current: DirectoryPass):
        """Store a nested listing on its folder (TREE) or parent pass (LIST)."""
        if isinstance(result, DirectoryError):
            if self.options.mode == ListMode.LIST:
                # Keeps the folder in the flat list, flagged
                folder.error = result.error
            else:
                folder.content = result
            return

        folder.aborted = result.aborted
        if self.options.mode == ListMode.LIST:
            current.flattened.extend(result.items)
        else:
            # Empty folders render as leaves
            folder.content = result.items or None

    async def enrich_item(
        self,
        item: ItemDescriptor,
        depth: int
    ) -> Tuple[ItemDescriptor, bool]:
        """Classify one item and load what was asked for.

        Failures are recorded on the item and never raised (unless the
        error policy re-raises them).

        Args:
            item: Descriptor to enrich
            depth: Depth of the directory holding the item

        Returns:
            Tuple of (enriched item, whether its folder must be listed next)
        """
        options = self.options
        access = self.context.access
        policy = self.context.policy

        try:
            stat_result = await access.stat(item.full_name_raw)
        except (OSError, ValueError) as e:
            item.error = e
            await policy.handle(e, 'stat', item.full_name)
            return item, False

        item = item.promote(stat_module.S_ISDIR(stat_result.st_mode))
        if options.stats:
            item.stats = stat_result

        if options.read_content and not item.is_directory:
            try:
                data = await access.read_bytes(item.full_name_raw)
            except (OSError, ValueError) as e:
                item.error = e
                await policy.handle(e, 'read_file', item.full_name)
                return item, False
            item.data = encode_content(data, options.encoding)

        return item, bool(item.is_directory and options.recursive)

    def only_include(self, items: List[ItemDescriptor]) -> List[ItemDescriptor]:
        """Keep only items whose full name matches an include substring.

        In TREE mode, folders that carry content are always kept so that
        matching descendants keep their ancestors.
        """
        include = self.options.include
        if not include:
            return items

        tree = self.options.mode == ListMode.TREE
        result = []
        for item in items:
            if tree and item.is_directory and getattr(item, 'content', None) is not None:
                result.append(item)
            elif any(value in item.full_name for value in include):
                result.append(item)
        return result

    def _should_drop(self, item: ItemDescriptor) -> bool:
        """Empty, error-free folders are dropped when ignoring folders."""
        return bool(
            item.is_directory
            and self.options.ignore_folders
            and getattr(item, 'content', None) is None
            and item.error is None
        )
