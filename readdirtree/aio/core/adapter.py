"""Async filesystem access abstraction.

Defines the few OS primitives the traversal engine needs (list, stat,
read, canonicalize) so that they can be swapped for fakes in tests or
for other storage backends.
"""

import asyncio
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Set, Union

PathArg = Union[str, bytes]


class AsyncFileSystemAccess(ABC):
    """Abstract base class for async filesystem access.

    Every method may raise ``OSError``; the traversal engine decides
    whether a failure is item-level or directory-level.
    """

    @abstractmethod
    async def list_names(self, path: PathArg) -> List[bytes]:
        """List the raw names of a directory's children.

        Args:
            path: Directory to list

        Returns:
            Child names as bytes, excluding ``.`` and ``..``
        """
        pass

    @abstractmethod
    async def stat(self, path: PathArg) -> os.stat_result:
        """Get metadata for a path, following symlinks.

        Args:
            path: File or directory

        Returns:
            Stat result
        """
        pass

    @abstractmethod
    async def read_bytes(self, path: PathArg) -> bytes:
        """Read the whole content of a file.

        Args:
            path: File to read

        Returns:
            File content
        """
        pass

    @abstractmethod
    async def realpath(self, path: str) -> str:
        """Canonicalize a path (resolve ``.``, ``..`` and symlinks).

        Args:
            path: Path to resolve

        Returns:
            Canonical path

        Raises:
            OSError: If the path does not exist
        """
        pass

    def supports_capability(self, capability: str) -> bool:
        """Check if the adapter supports a specific capability."""
        return capability in self._define_capabilities()

    def _define_capabilities(self) -> Set[str]:
        """Define adapter capabilities.

        Override in subclasses to declare supported features.
        """
        return {
            'list_names',
            'stat',
            'read_bytes',
            'realpath',
        }

    async def close(self):
        """Clean up adapter resources.

        Override if the adapter holds handles or connections.
        """
        pass

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


class OsFileSystemAccess(AsyncFileSystemAccess):
    """Local filesystem access through the ``os`` module.

    Blocking calls run in the default executor so the event loop stays
    responsive. Calls are awaited one at a time by the traverser, so at
    most one operation is in flight per listing.
    """

    async def list_names(self, path: PathArg) -> List[bytes]:
        return await asyncio.to_thread(os.listdir, os.fsencode(path))

    async def stat(self, path: PathArg) -> os.stat_result:
        return await asyncio.to_thread(os.stat, path)

    async def read_bytes(self, path: PathArg) -> bytes:
        def _read(target: PathArg) -> bytes:
            with open(target, 'rb') as handle:
                return handle.read()

        return await asyncio.to_thread(_read, path)

    async def realpath(self, path: str) -> str:
        resolved = await asyncio.to_thread(Path(path).resolve, True)
        return str(resolved)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
