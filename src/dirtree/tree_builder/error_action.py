"""Error action enum for handling failures below the root during traversal."""

from enum import Enum


class ErrorAction(str, Enum):
    """Action to take when part of the tree cannot be built.

    Failures at the root are always fatal; these values only govern what happens
    to subdirectories and individual links further down.

    Values:
        IGNORE: Omit the failing subtree silently
        WARN: Omit the failing subtree and record a warning (default behavior)
        RAISE: Abort the whole build by raising the error
    """

    IGNORE = "ignore"
    WARN = "warn"
    RAISE = "raise"
