#!/usr/bin/env python3
"""
Basic listing example for readdirtree.

This example demonstrates:
- Flat recursive listing with stats
- Nested tree listing with a progress callback
- Handling of per-item and per-directory errors
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from readdirtree import (
    list_directory,
    list_tree,
    walk_items,
    count_items,
    calculate_size,
    ListOptions,
    FolderItem,
)


def print_tree(result):
    for item, level in walk_items(result):
        marker = "/" if isinstance(item, FolderItem) else ""
        suffix = f"  [error: {item.error}]" if item.error else ""
        print(f"{'  ' * level}{item.name}{marker}{suffix}")


async def main():
    """Demonstrate flat and nested listings."""
    root_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()

    print(f"Listing: {root_path}")
    print("-" * 50)

    result = await list_directory(root_path, ListOptions(stats=True, extensions=True))
    if not result.ok:
        print(f"Cannot list {result.path}: {result.error}")
        return

    by_extension = {}
    for item in result:
        by_extension[item.extension or "(none)"] = by_extension.get(item.extension or "(none)", 0) + 1

    print(f"\nFlat Listing Summary:")
    print(f"  Files: {len(result):,}")
    print(f"  Total Size: {calculate_size(result) / 1024 / 1024:.1f} MB")
    print(f"\nTop extensions:")
    for ext, count in sorted(by_extension.items(), key=lambda x: x[1], reverse=True)[:5]:
        print(f"  {ext}: {count}")

    seen = 0

    def progress(item, position, total):
        nonlocal seen
        seen += 1
        # Stop early on very large trees
        return seen > 500

    tree = await list_tree(root_path, ListOptions(recursive=True), progress)
    counts = count_items(tree)

    print(f"\nTree ({counts['directories']} folders, {counts['files']} files, "
          f"{counts['errors']} errors{', truncated' if tree.aborted else ''}):")
    print_tree(tree)


if __name__ == "__main__":
    print("readdirtree - Basic Listing Example")
    print("=" * 50)
    asyncio.run(main())
