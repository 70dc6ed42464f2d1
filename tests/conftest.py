"""Test configuration and fixtures for dirtree."""

import os

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def sample_tree(tmp_path):
    """Create the layout used throughout the tests.

    root/
    ├── a.txt
    ├── .hidden.txt
    └── sub/
        └── b.txt
    """
    (tmp_path / "a.txt").write_text("alpha")
    (tmp_path / ".hidden.txt").write_text("hidden")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_text("beta")
    return tmp_path


@pytest.fixture
def symlinks_supported(tmp_path):
    """Skip the test when the platform or environment can't create symlinks."""
    probe = tmp_path / ".symlink_probe"
    try:
        os.symlink(tmp_path, probe)
    except (OSError, NotImplementedError):
        pytest.skip("Symlink creation not supported on this platform/environment")
    probe.unlink()


@pytest.fixture
def unreadable_dirs_supported():
    """Skip the test when permission bits are not enforced (Windows, or running as root)."""
    if os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0):
        pytest.skip("Directory permissions are not enforced in this environment")


@pytest.fixture
def undecodable_tree(tmp_path):
    """Create a directory holding aaa/ and a file named b"zz\\xff.txt", which is not valid UTF-8.

    Skips where the filesystem only accepts UTF-8 (or Unicode) names.
    """
    if os.name == "nt":
        pytest.skip("File names are Unicode on this platform")
    (tmp_path / "aaa").mkdir()
    try:
        with open(os.path.join(os.fsencode(tmp_path), b"zz\xff.txt"), "wb"):
            pass
    except OSError:
        pytest.skip("Filesystem rejects file names that are not valid UTF-8")
    return tmp_path
