"""Tests for custom exceptions."""

from pathlib import Path

import pytest

from dirtree.exceptions import (
    DepthExceededError,
    DirectoryLoopError,
    PathNotDirectoryError,
    PathNotFoundError,
    ReadDirError,
    SymlinkResolutionError,
    TreeBuildError,
)


@pytest.mark.parametrize(
    "error_class",
    [PathNotFoundError, PathNotDirectoryError, ReadDirError, SymlinkResolutionError, DirectoryLoopError],
)
def test_errors_carry_path(error_class):
    error = error_class(Path("/some/where"))

    assert isinstance(error, TreeBuildError)
    assert error.path == str(Path("/some/where"))
    assert str(error).endswith(f": {Path('/some/where')}")


def test_messages():
    assert str(PathNotFoundError("/x")) == "Path does not exist: /x"
    assert str(PathNotDirectoryError("/x")) == "Path is not a directory: /x"
    assert str(ReadDirError("/x")) == "Cannot read directory: /x"
    assert str(ReadDirError("/x", "Permission denied")) == "Cannot read directory (Permission denied): /x"
    assert str(SymlinkResolutionError("/x")) == "Cannot read symbolic link target: /x"
    assert str(DirectoryLoopError("/x")) == "Directory loop detected, contents not listed: /x"


def test_depth_exceeded_error():
    error = DepthExceededError("/a/b", 3)
    assert error.max_depth == 3
    assert str(error) == "Maximum depth 3 reached, contents not listed: /a/b"


def test_read_dir_error_reason():
    assert ReadDirError("/x", "Permission denied").reason == "Permission denied"
    assert ReadDirError("/x").reason is None
