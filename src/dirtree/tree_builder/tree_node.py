"""Node types making up a built directory tree."""

import os
from typing import Any, Iterable, Optional, Tuple

from dirtree.types import EntryType


class TreeNode:
    """Base class for every entry recorded in a directory tree.

    Nodes form a strict ownership hierarchy: a Directory owns its entries, and no node
    refers back to its parent. Nodes are not modified once the builder returns them.

    Attributes:
        name (str): Base name of the entry, never a full path.
        entry_type (EntryType): Kind of entry this node represents.
    """

    entry_type: EntryType

    def __init__(self, name: str) -> None:
        self.name = name

    @property
    def is_dir(self) -> bool:
        return self.entry_type is EntryType.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.entry_type is EntryType.SYMLINK

    def _key(self) -> Tuple[Any, ...]:
        return (self.entry_type, self.name)

    def __eq__(self, other: Any) -> bool:
        """Compare nodes structurally.

        Metadata is deliberately left out, so two trees built from the same layout
        compare equal even though timestamps differ.
        """
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class Directory(TreeNode):
    """A directory and the entries retained inside it.

    Attributes:
        name (str): Base name of the directory.
        entries (tuple[TreeNode, ...]): Retained children, in the order the builder
            produced them.

    Example:
        >>> sub = Directory("sub", [RegularFile("b.txt")])
        >>> root = Directory("root", [RegularFile("a.txt"), sub])
        >>> [entry.name for entry in root.entries]
        ['a.txt', 'sub']
        >>> root.is_dir
        True
    """

    entry_type = EntryType.DIRECTORY

    def __init__(self, name: str, entries: Iterable[TreeNode] = ()) -> None:
        super().__init__(name)
        self.entries: Tuple[TreeNode, ...] = tuple(entries)

    def _key(self) -> Tuple[Any, ...]:
        return (self.entry_type, self.name, self.entries)

    def __repr__(self) -> str:
        return f"Directory({self.name!r}, {list(self.entries)!r})"


class RegularFile(TreeNode):
    """A regular file, or any other entry that is neither a directory nor a link.

    Attributes:
        name (str): Base name of the file.
        metadata (Optional[os.stat_result]): Filesystem metadata, or None when it
            could not be read.

    Example:
        >>> node = RegularFile("notes.txt")
        >>> node.metadata is None
        True
    """

    entry_type = EntryType.FILE

    def __init__(self, name: str, metadata: Optional[os.stat_result] = None) -> None:
        super().__init__(name)
        self.metadata = metadata

    @property
    def size(self) -> Optional[int]:
        """Size in bytes, or None when metadata is unavailable."""
        if self.metadata is None:
            return None
        return self.metadata.st_size


class Symlink(TreeNode):
    """A symbolic link, recorded as a leaf and never followed.

    Attributes:
        name (str): Base name of the link.
        target (str): The link's target text as stored in the link. It may point to a
            path that no longer exists.
        metadata (Optional[os.stat_result]): Metadata of the link itself, or None.

    Example:
        >>> link = Symlink("latest", "releases/v2")
        >>> link.target
        'releases/v2'
        >>> link.is_symlink
        True
    """

    entry_type = EntryType.SYMLINK

    def __init__(self, name: str, target: str, metadata: Optional[os.stat_result] = None) -> None:
        super().__init__(name)
        self.target = target
        self.metadata = metadata

    def _key(self) -> Tuple[Any, ...]:
        return (self.entry_type, self.name, self.target)

    def __repr__(self) -> str:
        return f"Symlink({self.name!r}, {self.target!r})"
