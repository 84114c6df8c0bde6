"""Item descriptors and listing results.

An ``ItemDescriptor`` is created for every directory entry that survives
the early filters. Metadata enrichment then promotes it to a ``FileItem``
or a ``FolderItem``. A listing call returns either a ``Listing`` (success)
or a ``DirectoryError`` (the directory itself could not be read).
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, List, Optional, Union


@dataclass
class ItemDescriptor:
    """Common description of a file or folder.

    Attributes:
        name: Entry file name
        name_raw: Entry file name exactly as returned by the OS
        title: File name without extension
        path: Resolved path of the parent directory
        path_raw: Parent path as bytes
        full_name: Parent path, separator and name
        full_name_raw: Full name as bytes, used for further I/O
        extension: Lowercase extension with dot (only with ``extensions``)
        depth: Levels below the listing root (only with ``deep``)
        is_directory: Set once metadata has been fetched
        error: Set when an operation on this item failed
        custom: Free slot for callers, never touched by readdirtree
    """

    name: str
    name_raw: bytes
    title: str
    path: str
    path_raw: bytes
    full_name: str
    full_name_raw: bytes
    extension: Optional[str] = None
    depth: Optional[int] = None
    is_directory: Optional[bool] = None
    error: Optional[BaseException] = None
    custom: Any = None

    def promote(self, is_directory: bool) -> 'ItemDescriptor':
        """Return a FileItem or FolderItem carrying this item's fields.

        Args:
            is_directory: Classification from the metadata call

        Returns:
            New item of the specialised type
        """
        target = FolderItem if is_directory else FileItem
        values = {f.name: getattr(self, f.name) for f in fields(ItemDescriptor)}
        values['is_directory'] = is_directory
        return target(**values)

    def to_dict(self, raw: bool = False, stats: bool = False) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary.

        Unset optional fields are left out. Errors are rendered as strings
        and nested folder content is converted recursively.

        Args:
            raw: Include the byte fields (hex encoded)
            stats: Include a summary of the stat result

        Returns:
            Dictionary representation
        """
        result: Dict[str, Any] = {
            'name': self.name,
            'title': self.title,
            'path': self.path,
            'full_name': self.full_name,
        }
        if raw:
            result['name_raw'] = self.name_raw.hex()
            result['path_raw'] = self.path_raw.hex()
            result['full_name_raw'] = self.full_name_raw.hex()
        for key in ('extension', 'depth', 'is_directory', 'custom'):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.error is not None:
            result['error'] = f"{type(self.error).__name__}: {self.error}"
        return result

    def __repr__(self) -> str:
        """Short representation for debugging."""
        return f"{self.__class__.__name__}({self.full_name!r})"


@dataclass(repr=False)
class FileItem(ItemDescriptor):
    """A file entry.

    Attributes:
        data: File content, encoded as configured (only with ``read_content``)
        stats: Raw stat result (only with ``stats``)
    """

    data: Optional[str] = None
    stats: Optional[os.stat_result] = None

    def to_dict(self, raw: bool = False, stats: bool = False) -> Dict[str, Any]:
        result = super().to_dict(raw=raw, stats=stats)
        if self.data is not None:
            result['data'] = self.data
        if stats and self.stats is not None:
            result['stats'] = _stat_summary(self.stats)
        return result


@dataclass(repr=False)
class FolderItem(ItemDescriptor):
    """A folder entry.

    Attributes:
        content: Children (TREE mode only), or the error that prevented
            reading this folder
        stats: Raw stat result (only with ``stats``)
        aborted: True when the progress callback stopped the pass over
            this folder, so its children are incomplete
    """

    content: Optional[Union[List[ItemDescriptor], 'DirectoryError']] = None
    stats: Optional[os.stat_result] = None
    aborted: bool = False

    def to_dict(self, raw: bool = False, stats: bool = False) -> Dict[str, Any]:
        result = super().to_dict(raw=raw, stats=stats)
        if isinstance(self.content, DirectoryError):
            result['content'] = self.content.to_dict()
        elif self.content is not None:
            result['content'] = [item.to_dict(raw=raw, stats=stats) for item in self.content]
        if self.aborted:
            result['aborted'] = True
        if stats and self.stats is not None:
            result['stats'] = _stat_summary(self.stats)
        return result


@dataclass
class DirectoryError:
    """A directory that could not be listed.

    Returned in place of a listing, never raised.

    Attributes:
        error: The OS error raised by the listing call
        path: Path that was requested
    """

    error: BaseException
    path: str

    ok = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            'error': f"{type(self.error).__name__}: {self.error}",
            'path': self.path,
        }


@dataclass
class Listing:
    """Successful listing of a directory.

    Behaves like a read-only sequence of items.

    Attributes:
        items: Files and folders, flat (LIST) or nested (TREE)
        path: Resolved path of the listed directory
        aborted: True when the progress callback stopped the pass
    """

    items: List[ItemDescriptor] = field(default_factory=list)
    path: str = ''
    aborted: bool = False

    ok = True

    def __iter__(self) -> Iterator[ItemDescriptor]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def to_list(self, raw: bool = False, stats: bool = False) -> List[Dict[str, Any]]:
        """Convert every item to a dictionary."""
        return [item.to_dict(raw=raw, stats=stats) for item in self.items]


ListResult = Union[Listing, DirectoryError]


def _stat_summary(stat_result: os.stat_result) -> Dict[str, Any]:
    """Pick the portable fields of a stat result."""
    return {
        'size': stat_result.st_size,
        'mode': stat_result.st_mode,
        'modified_time': stat_result.st_mtime,
        'accessed_time': stat_result.st_atime,
        'changed_time': stat_result.st_ctime,
    }
