"""Implementation of exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import GitIgnoreSpec

from dirtree.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Implementation of exclusion rules using .gitignore pattern syntax.

    Patterns are matched with the pathspec library, following Git's own rules:
    globs, directory-only patterns ending in "/", negation with "!", "**" and
    comment lines. Patterns from files and patterns added one by one are kept in the
    order they were supplied, so a later negation can re-include an earlier match.

    Attributes:
        spec (GitIgnoreSpec): Compiled matcher for all patterns added so far.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("!keep.log")
        >>> rules.exclude("server.log")
        True
        >>> rules.exclude("keep.log")
        False
        >>> rules.add_rule("build/")
        >>> rules.exclude("build/")
        True
        >>> rules.exclude("build")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules, optionally loading patterns from files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = GitIgnoreSpec.from_lines(self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        """Check if a path matches the loaded patterns.

        Args:
            path: Path relative to the tree root, using "/" as separator.

        Returns:
            bool: True if the last pattern matching the path is not a negation.
        """
        return self.spec.match_file(path)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns of one or more .gitignore-style files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8") as f:
                self._lines.extend(f.read().splitlines())

        self._compile()

    def add_rule(self, rule: str) -> None:
        """Append a single .gitignore pattern, such as "*.pyc" or "!important.txt"."""
        self._lines.append(rule)
        self._compile()

    def has_rules(self) -> bool:
        """Check whether any effective pattern has been added.

        Blank lines and comments do not count.
        """
        return any(pattern.include is not None for pattern in self.spec.patterns)

    def _compile(self) -> None:
        self.spec = GitIgnoreSpec.from_lines(self._lines)
