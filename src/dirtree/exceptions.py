from typing import Optional

from dirtree.types import PathType


class TreeBuildError(Exception):
    """
    Base class for all failures raised while building a directory tree.

    Every build failure is tied to the filesystem path that caused it, so callers can
    report a short message naming the offending path without exposing internals.

    Attributes:
        path (str): The path involved in the failure.
        message (str): Human-readable description including the path.

    Example:
        >>> error = TreeBuildError("/tmp/x", "Something went wrong")
        >>> error.path
        '/tmp/x'
        >>> str(error)
        'Something went wrong: /tmp/x'
    """

    def __init__(self, path: PathType, message: str = "Unable to build tree") -> None:
        """
        Initialize the exception with the offending path.

        Args:
            path (PathType): Path that caused the failure.
            message (str, optional): Description of the failure, without the path.
                The path is appended to it.
        """
        self.path = str(path)
        self.message = f"{message}: {self.path}"
        super().__init__(self.message)


class PathNotFoundError(TreeBuildError):
    """
    Exception raised when the root path does not exist.

    Example:
        >>> str(PathNotFoundError("/no/such/dir"))
        'Path does not exist: /no/such/dir'
    """

    def __init__(self, path: PathType) -> None:
        super().__init__(path, "Path does not exist")


class PathNotDirectoryError(TreeBuildError):
    """
    Exception raised when the root path exists but is not a directory.

    Example:
        >>> str(PathNotDirectoryError("/etc/hostname"))
        'Path is not a directory: /etc/hostname'
    """

    def __init__(self, path: PathType) -> None:
        super().__init__(path, "Path is not a directory")


class ReadDirError(TreeBuildError):
    """
    Exception raised when the contents of a directory cannot be enumerated.

    This covers permission errors as well as directories removed between the moment they
    were seen and the moment they were listed.

    Attributes:
        reason (Optional[str]): Operating system error text, when available.

    Example:
        >>> str(ReadDirError("/root/secret", "Permission denied"))
        'Cannot read directory (Permission denied): /root/secret'
    """

    def __init__(self, path: PathType, reason: Optional[str] = None) -> None:
        self.reason = reason
        message = f"Cannot read directory ({reason})" if reason else "Cannot read directory"
        super().__init__(path, message)


class SymlinkResolutionError(TreeBuildError):
    """
    Exception raised when the target of a symbolic link cannot be read.

    A dangling link is not an error: its target text is still readable. This is raised
    only when reading the link itself fails.

    Example:
        >>> str(SymlinkResolutionError("/tmp/link"))
        'Cannot read symbolic link target: /tmp/link'
    """

    def __init__(self, path: PathType) -> None:
        super().__init__(path, "Cannot read symbolic link target")


class DepthExceededError(TreeBuildError):
    """
    Exception raised when traversal reaches the configured maximum depth.

    Attributes:
        max_depth (int): The depth limit that was reached.

    Example:
        >>> error = DepthExceededError("/tmp/a/b", 2)
        >>> str(error)
        'Maximum depth 2 reached, contents not listed: /tmp/a/b'
    """

    def __init__(self, path: PathType, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(path, f"Maximum depth {max_depth} reached, contents not listed")


class DirectoryLoopError(TreeBuildError):
    """
    Exception raised when a directory is reached again from inside itself.

    Symbolic links are never followed, so this only happens through bind mounts or
    similar filesystem-level aliasing.

    Example:
        >>> str(DirectoryLoopError("/mnt/loop"))
        'Directory loop detected, contents not listed: /mnt/loop'
    """

    def __init__(self, path: PathType) -> None:
        super().__init__(path, "Directory loop detected, contents not listed")
