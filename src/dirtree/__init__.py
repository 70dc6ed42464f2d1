"""Directory tree visualization utilities.

This package walks a directory and renders its structure as a box-drawing
tree diagram, followed by a summary of file and directory counts.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dirtree")
except PackageNotFoundError:
    __version__ = "unknown"
