"""Directory tree construction with configurable filtering.

This package provides the node types making up a directory tree and the builder
that walks the filesystem to produce one.
"""

from .error_action import ErrorAction
from .tree_builder import BuildWarning, TreeBuilder, build_tree
from .tree_node import Directory, RegularFile, Symlink, TreeNode

__all__ = [
    "BuildWarning",
    "Directory",
    "ErrorAction",
    "RegularFile",
    "Symlink",
    "TreeBuilder",
    "TreeNode",
    "build_tree",
]
