from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryType(Enum):
    """Enumeration of entry kinds recorded in a built tree.

    Attributes:
        FILE: Regular file (or any other non-directory, non-link entry)
        DIRECTORY: Directory
        SYMLINK: Symbolic link, never followed during traversal
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
