"""Tests for depth information on listed items.

Depth is only attached when the ``deep`` option is enabled and grows by
exactly one per directory level.
"""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from readdirtree import list_directory, list_tree, walk_items, ListOptions


class TestDepthTracking:
    """Test suite for depth tracking features."""

    @staticmethod
    def create_test_tree() -> Path:
        """Create a test directory structure with known depth.

        Structure:
        root/
        ├── file1.txt (depth 0)
        ├── dir1/ (depth 0)
        │   ├── file2.txt (depth 1)
        │   └── subdir1/ (depth 1)
        │       ├── file3.txt (depth 2)
        │       └── deepdir/ (depth 2)
        │           └── file4.txt (depth 3)
        └── dir2/ (depth 0)
            └── file5.txt (depth 1)
        """
        root = Path(os.path.realpath(tempfile.mkdtemp(prefix="depth_test_")))

        (root / "file1.txt").write_text("Root file")
        dir1 = root / "dir1"
        dir1.mkdir()
        dir2 = root / "dir2"
        dir2.mkdir()

        (dir1 / "file2.txt").write_text("Level 1 file")
        (dir2 / "file5.txt").write_text("Another level 1 file")
        subdir1 = dir1 / "subdir1"
        subdir1.mkdir()

        (subdir1 / "file3.txt").write_text("Level 2 file")
        deepdir = subdir1 / "deepdir"
        deepdir.mkdir()

        (deepdir / "file4.txt").write_text("Level 3 file")

        return root

    @pytest.fixture
    def tree(self):
        root = self.create_test_tree()
        yield root
        shutil.rmtree(root, ignore_errors=True)

    @pytest.mark.asyncio
    async def test_depth_absent_by_default(self, tree):
        result = await list_directory(tree)

        assert all(item.depth is None for item in result)

    @pytest.mark.asyncio
    async def test_depth_values_flat(self, tree):
        result = await list_directory(tree, ListOptions(deep=True, ignore_folders=False))

        depths = {item.name: item.depth for item in result}
        assert depths == {
            "file1.txt": 0,
            "dir1": 0,
            "dir2": 0,
            "file2.txt": 1,
            "subdir1": 1,
            "file5.txt": 1,
            "file3.txt": 2,
            "deepdir": 2,
            "file4.txt": 3,
        }

    @pytest.mark.asyncio
    async def test_depth_matches_path_levels(self, tree):
        result = await list_directory(tree, ListOptions(deep=True))

        for item in result:
            relative = Path(item.full_name).relative_to(tree)
            assert item.depth == len(relative.parts) - 1

    @pytest.mark.asyncio
    async def test_depth_matches_tree_nesting(self, tree):
        result = await list_tree(tree, ListOptions(deep=True))

        seen = 0
        for item, level in walk_items(result):
            assert item.depth == level
            seen += 1
        assert seen == 9

    @pytest.mark.asyncio
    async def test_depth_on_shallow_listing(self, tree):
        result = await list_directory(tree, ListOptions.shallow(deep=True))

        assert {item.depth for item in result} == {0}
