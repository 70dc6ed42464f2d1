"""Identity of a directory on disk, used to detect traversal loops."""

import os
from typing import Any


class FileIdentifier:
    """Identifies a directory by the device and inode it lives on.

    Two paths that reach the same directory (for example through a bind mount) share
    an identifier even though their text differs, which makes this a canonical key
    for the set of directories currently being walked.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.

    Example:
        >>> FileIdentifier(1, 42) == FileIdentifier(1, 42)
        True
        >>> len({FileIdentifier(1, 42), FileIdentifier(1, 42), FileIdentifier(2, 42)})
        2
    """

    def __init__(self, device_id: int, inode_number: int):
        self.device_id = device_id
        self.inode_number = inode_number

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileIdentifier":
        """Build an identifier from the result of a stat call."""
        return cls(stat_result.st_dev, stat_result.st_ino)

    @property
    def is_known(self) -> bool:
        """False when the platform reported no inode, so the identifier cannot be trusted."""
        return self.inode_number != 0

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FileIdentifier):
            return False
        return self.device_id == other.device_id and self.inode_number == other.inode_number

    def __hash__(self) -> int:
        return hash((self.device_id, self.inode_number))

    def __repr__(self) -> str:
        return f"FileIdentifier(device_id={self.device_id}, inode_number={self.inode_number})"
