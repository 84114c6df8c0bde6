"""Tests for the progress callback and early termination."""

import os
from pathlib import Path

import pytest

from readdirtree import list_directory, list_tree, ListOptions, FileItem


@pytest.fixture
def flat_root(tmp_path):
    base = Path(os.path.realpath(tmp_path))
    for name in ("a.txt", "b.txt", "c.txt"):
        (base / name).write_text(name)
    return base


@pytest.fixture
def nested_root(tmp_path):
    base = Path(os.path.realpath(tmp_path))
    (base / "top.txt").write_text("t")
    (base / "inner").mkdir()
    for name in ("x.txt", "y.txt", "z.txt"):
        (base / "inner" / name).write_text(name)
    return base


class TestProgressCalls:

    @pytest.mark.asyncio
    async def test_called_once_per_item_in_reverse_order(self, flat_root):
        calls = []

        def progress(item, position, total):
            calls.append((item.name, position, total))
            return False

        result = await list_directory(flat_root, progress=progress)

        assert calls == [("c.txt", 1, 3), ("b.txt", 2, 3), ("a.txt", 3, 3)]
        assert [item.name for item in result] == ["a.txt", "b.txt", "c.txt"]
        assert result.aborted is False

    @pytest.mark.asyncio
    async def test_receives_enriched_items(self, flat_root):
        seen = []

        def progress(item, position, total):
            seen.append(item)

        await list_directory(flat_root, ListOptions(stats=True), progress)

        assert all(isinstance(item, FileItem) for item in seen)
        assert all(item.stats is not None for item in seen)

    @pytest.mark.asyncio
    async def test_nested_directories_report_their_own_totals(self, nested_root):
        calls = []

        def progress(item, position, total):
            calls.append((item.name, position, total))

        await list_directory(nested_root, progress=progress)

        # Root has 2 entries; inner is visited (and fully listed) first
        assert calls == [
            ("top.txt", 1, 2),
            ("z.txt", 1, 3),
            ("y.txt", 2, 3),
            ("x.txt", 3, 3),
            ("inner", 2, 2),
        ]

    @pytest.mark.asyncio
    async def test_async_callback(self, flat_root):
        calls = []

        async def progress(item, position, total):
            calls.append(item.name)
            return False

        result = await list_directory(flat_root, progress=progress)

        assert calls == ["c.txt", "b.txt", "a.txt"]
        assert len(result) == 3


class TestAbort:

    @pytest.mark.asyncio
    async def test_abort_on_first_item(self, flat_root):
        result = await list_directory(flat_root, progress=lambda item, i, total: True)

        assert result.ok
        assert result.aborted is True
        assert len(result) == 0

    @pytest.mark.asyncio
    async def test_abort_keeps_visited_items(self, flat_root):
        visited = []

        def progress(item, position, total):
            visited.append(item.name)
            return position == 2

        result = await list_directory(flat_root, progress=progress)

        # c visited and kept, b triggered the stop, a never visited
        assert visited == ["c.txt", "b.txt"]
        assert [item.name for item in result] == ["c.txt"]
        assert result.aborted is True

    @pytest.mark.asyncio
    async def test_abort_in_subdirectory_does_not_stop_parent(self, nested_root):
        def progress(item, position, total):
            return item.name == "z.txt"

        result = await list_tree(nested_root, progress=progress)

        # inner's pass stopped at its first item, leaving it empty
        assert [item.name for item in result] == ["top.txt"]
        assert result.aborted is False

    @pytest.mark.asyncio
    async def test_stopped_subfolder_is_marked_in_tree(self, nested_root):
        def progress(item, position, total):
            return item.name == "y.txt"

        result = await list_tree(nested_root, ListOptions(ignore_folders=False), progress)

        inner = result[0]
        assert inner.name == "inner"
        assert inner.aborted is True
        assert [item.name for item in inner.content] == ["z.txt"]
        assert inner.to_dict()["aborted"] is True
        assert result.aborted is False

    @pytest.mark.asyncio
    async def test_stopped_subfolder_is_marked_in_flat_list(self, nested_root):
        def progress(item, position, total):
            return item.name == "z.txt"

        result = await list_directory(nested_root, ListOptions(ignore_folders=False), progress)

        by_name = {item.name: item for item in result}
        assert by_name["inner"].aborted is True
        assert "x.txt" not in by_name
        assert result.aborted is False

    @pytest.mark.asyncio
    async def test_completed_subfolder_is_not_marked(self, nested_root):
        result = await list_tree(nested_root, ListOptions(ignore_folders=False))

        assert result[0].aborted is False
        assert "aborted" not in result[0].to_dict()

    @pytest.mark.asyncio
    async def test_aborting_directory_keeps_flattened_children(self, nested_root):
        def progress(item, position, total):
            return item.name == "inner"

        result = await list_directory(nested_root, progress=progress)

        # The folder's children were already listed when it stopped the pass
        assert [item.name for item in result] == ["top.txt", "x.txt", "y.txt", "z.txt"]
        assert result.aborted is True

    @pytest.mark.asyncio
    async def test_callback_errors_propagate(self, flat_root):
        def progress(item, position, total):
            raise KeyError("boom")

        with pytest.raises(KeyError):
            await list_directory(flat_root, progress=progress)
