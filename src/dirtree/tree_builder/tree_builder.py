"""Directory walking with filtering, depth limits and failure tolerance.

This module provides the TreeBuilder class, which walks a directory and produces an
in-memory tree of Directory, RegularFile and Symlink nodes. Dotfiles, platform-hidden
entries and entries matching exclusion rules are filtered out while walking, so
excluded children never appear in the result.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set, Union

from dirtree.exceptions import (
    DepthExceededError,
    DirectoryLoopError,
    PathNotDirectoryError,
    PathNotFoundError,
    ReadDirError,
    SymlinkResolutionError,
    TreeBuildError,
)
from dirtree.exclusion_rules.base_rules import BaseExclusionRules
from dirtree.tree_builder.error_action import ErrorAction
from dirtree.tree_builder.file_identifier import FileIdentifier
from dirtree.tree_builder.hidden_attribute import is_hidden
from dirtree.tree_builder.tree_node import Directory, RegularFile, Symlink, TreeNode
from dirtree.types import EntryType, PathType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildWarning:
    """A failure that was tolerated while building, with the subtree omitted."""

    path: str
    message: str

    @classmethod
    def from_error(cls, error: TreeBuildError) -> "BuildWarning":
        return cls(path=error.path, message=error.message)


class TreeBuilder:
    """Builds a tree representation of a directory.

    The builder performs one synchronous, depth-first traversal per call to build().
    Each directory is listed completely and its handle closed before any of its
    subdirectories is entered.

    Symbolic Link Behavior:
        Symbolic links are checked before directories and are always recorded as leaf
        Symlink nodes carrying their target text. They are never followed, so a link
        pointing at an ancestor cannot cause infinite recursion. Dangling links are
        recorded like any other link.

    Filtering:
        Unless show_hidden is set, entries whose name starts with "." and entries the
        platform flags as hidden are excluded, whether they are files or directories.
        Exclusion rules, when given, are matched against the entry's path relative to
        the root using forward slashes; directories are also tried with a trailing "/".

    Failure Handling:
        Failures at the root always raise. Below the root, error_action decides:
        - RAISE: abort the whole build by raising the error
        - WARN (default): omit the failing subtree and record a BuildWarning
        - IGNORE: omit the failing subtree silently
        Failures on a single entry while it is being classified (for example, the file
        disappearing between listing and inspection) always skip that entry silently.
        Unreadable file metadata is never a failure; the node's metadata is None.
        Reaching max_depth is not a failure either; it is recorded in depth_exceeded.

    Attributes:
        root_path (Path): The path the tree is built from.
        show_hidden (bool): Keep dotfiles and platform-hidden entries.
        max_depth (Optional[int]): Number of levels below the root to list, or None.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for excluding entries.
        error_action (ErrorAction): How to handle failures below the root.
        sort_entries (bool): Sort children by name instead of enumeration order.
        warnings (List[BuildWarning]): Tolerated failures from the most recent build.
        depth_exceeded (List[DepthExceededError]): One record per directory left unlisted
            by max_depth in the most recent build. These are never raised or turned into
            warnings, whatever error_action is.

    Example:
        >>> builder = TreeBuilder(".", max_depth=1)  # doctest: +SKIP
        >>> tree = builder.build()  # doctest: +SKIP
        >>> [entry.name for entry in tree.entries]  # doctest: +SKIP
        ['README.md', 'src', 'tests']
    """

    def __init__(
        self,
        root_path: PathType,
        *,
        show_hidden: bool = False,
        max_depth: Optional[int] = None,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        error_action: Union[str, ErrorAction] = ErrorAction.WARN,
        sort_entries: bool = True,
    ) -> None:
        """Initialize a TreeBuilder.

        Args:
            root_path: Directory to build the tree from. Can be any path-like object.
            show_hidden: Whether to keep dotfiles and hidden entries. Defaults to False.
            max_depth: Number of levels below the root to list. None (default) means
                unbounded. Directories at the limit are kept without their contents.
            exclusion_rules: Rules for excluding entries. Defaults to None.
            error_action: How to handle failures below the root, as an ErrorAction or
                one of "ignore", "warn", "raise". Defaults to WARN.
            sort_entries: Whether to sort children by name. Defaults to True; when False
                children keep the platform's enumeration order.

        Raises:
            ValueError: If error_action or max_depth is invalid.
        """
        if isinstance(error_action, str) and not isinstance(error_action, ErrorAction):
            try:
                error_action = ErrorAction(error_action.lower())
            except ValueError:
                raise ValueError(
                    f"Invalid error_action: {error_action}. Must be one of: 'ignore', 'warn', 'raise'"
                )
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")

        self.root_path = Path(root_path)
        self.show_hidden = show_hidden
        self.max_depth = max_depth
        self.exclusion_rules = exclusion_rules
        self.error_action = error_action
        self.sort_entries = sort_entries
        self.warnings: List[BuildWarning] = []
        self.depth_exceeded: List[DepthExceededError] = []

    @property
    def truncated_paths(self) -> List[str]:
        """Paths of the directories left unlisted by max_depth in the most recent build."""
        return [error.path for error in self.depth_exceeded]

    def build(self) -> Directory:
        """Walk the root path and return its tree.

        Returns:
            The root Directory. Its name is the base name of the resolved root path.

        Raises:
            PathNotFoundError: If the root path doesn't exist.
            PathNotDirectoryError: If the root path isn't a directory.
            ReadDirError: If the root directory can't be listed, or a subdirectory
                can't be listed and error_action is RAISE.
            SymlinkResolutionError: If a link can't be read and error_action is RAISE.
            DirectoryLoopError: If a directory contains itself and error_action is RAISE.
        """
        self.warnings = []
        self.depth_exceeded = []

        if not self.root_path.exists():
            raise PathNotFoundError(self.root_path)
        if not self.root_path.is_dir():
            raise PathNotDirectoryError(self.root_path)

        # A root given as a symlink is resolved so the root is always a real directory
        resolved_root = self.root_path.resolve()
        visited: Set[FileIdentifier] = set()
        root_id = self._get_file_identifier(resolved_root)
        if root_id is not None:
            visited.add(root_id)

        entries = self._build_entries(self._list_directory(resolved_root), "", 0, visited)
        name = resolved_root.name or str(resolved_root)
        logger.debug("Built tree for %s with %d top-level entries", resolved_root, len(entries))
        return Directory(name, entries)

    def _list_directory(self, path: Path) -> List[os.DirEntry]:
        """List a directory, releasing the handle before returning."""
        try:
            with os.scandir(path) as dir_entries:
                entries = list(dir_entries)
        except OSError as e:
            raise ReadDirError(path, e.strerror) from e

        if self.sort_entries:
            entries.sort(key=lambda entry: entry.name)
        return entries

    def _build_entries(
        self,
        dir_entries: List[os.DirEntry],
        relative_dir: str,
        depth: int,
        visited: Set[FileIdentifier],
    ) -> List[TreeNode]:
        nodes: List[TreeNode] = []

        for entry in dir_entries:
            relative_path = f"{relative_dir}/{entry.name}" if relative_dir else entry.name

            try:
                entry_type = self._classify(entry)
                if self._is_excluded(entry, entry_type, relative_path):
                    continue
            except OSError as e:
                # The entry vanished or became unreadable after the listing
                logger.debug("Skipping unreadable entry %s: %s", entry.path, e)
                continue

            node: Optional[TreeNode]
            if entry_type is EntryType.SYMLINK:
                node = self._build_symlink(entry)
            elif entry_type is EntryType.DIRECTORY:
                node = self._build_directory(Path(entry.path), entry.name, relative_path, depth + 1, visited)
            else:
                node = self._build_file(entry)

            if node is not None:
                nodes.append(node)

        return nodes

    def _classify(self, entry: os.DirEntry) -> EntryType:
        # Symlinks first: a link to a directory must stay a link
        if entry.is_symlink():
            return EntryType.SYMLINK
        if entry.is_dir(follow_symlinks=False):
            return EntryType.DIRECTORY
        return EntryType.FILE

    def _is_excluded(self, entry: os.DirEntry, entry_type: EntryType, relative_path: str) -> bool:
        if not self.show_hidden:
            if entry.name.startswith("."):
                return True
            if is_hidden(entry.stat(follow_symlinks=False)):
                return True

        if self.exclusion_rules is not None:
            if self.exclusion_rules.exclude(relative_path):
                return True
            if entry_type is EntryType.DIRECTORY and self.exclusion_rules.exclude(relative_path + "/"):
                return True

        return False

    def _build_directory(
        self,
        path: Path,
        name: str,
        relative_path: str,
        depth: int,
        visited: Set[FileIdentifier],
    ) -> Optional[Directory]:
        if self.max_depth is not None and depth >= self.max_depth:
            self._depth_reached(path)
            return Directory(name)

        file_id = self._get_file_identifier(path)
        if file_id is not None and file_id in visited:
            self._handle_error(DirectoryLoopError(path))
            return Directory(name)

        try:
            dir_entries = self._list_directory(path)
        except ReadDirError as error:
            self._handle_error(error)
            return None

        # Only directories on the current branch are tracked, so the same directory
        # may still appear under unrelated branches
        if file_id is not None:
            visited.add(file_id)
        try:
            entries = self._build_entries(dir_entries, relative_path, depth, visited)
        finally:
            if file_id is not None:
                visited.discard(file_id)

        return Directory(name, entries)

    def _build_symlink(self, entry: os.DirEntry) -> Optional[Symlink]:
        try:
            target = os.readlink(entry.path)
        except OSError:
            self._handle_error(SymlinkResolutionError(entry.path))
            return None
        return Symlink(entry.name, target, self._read_metadata(entry))

    def _build_file(self, entry: os.DirEntry) -> RegularFile:
        return RegularFile(entry.name, self._read_metadata(entry))

    def _read_metadata(self, entry: os.DirEntry) -> Optional[os.stat_result]:
        try:
            return entry.stat(follow_symlinks=False)
        except OSError as e:
            logger.debug("Metadata unavailable for %s: %s", entry.path, e)
            return None

    def _get_file_identifier(self, path: Path) -> Optional[FileIdentifier]:
        """Get a FileIdentifier for a directory, or None if it can't be identified.

        Note:
            Some platforms and filesystems report an inode number of 0; such
            identifiers are unusable for loop detection and are discarded.
        """
        try:
            file_id = FileIdentifier.from_stat(path.stat())
        except OSError:
            return None
        return file_id if file_id.is_known else None

    def _depth_reached(self, path: Path) -> None:
        # A limit the caller asked for is not a failure, so error_action does not apply
        self.depth_exceeded.append(DepthExceededError(path, self.max_depth or 0))
        logger.debug("Maximum depth %s reached at %s", self.max_depth, path)

    def _handle_error(self, error: TreeBuildError) -> None:
        if self.error_action is ErrorAction.RAISE:
            raise error
        if self.error_action is ErrorAction.WARN:
            self.warnings.append(BuildWarning.from_error(error))
        logger.debug("Omitted from tree: %s", error)


def build_tree(path: PathType, **options) -> Directory:
    """Build the tree for a directory in one call.

    Args:
        path: Directory to walk.
        **options: Keyword arguments accepted by TreeBuilder.

    Returns:
        The root Directory.

    Raises:
        TreeBuildError: If the build fails; see TreeBuilder.build().
    """
    return TreeBuilder(path, **options).build()
