from abc import ABC, abstractmethod
from typing import Sequence, Union

from dirtree.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for entry exclusion rules.

    The tree builder consults an exclusion rules object for every entry it meets, on top
    of its own dotfile and hidden-attribute filtering. Paths are given relative to the
    root of the tree using forward slashes, and directories are checked a second time
    with a trailing slash so that directory-only patterns can match them.

    File loading and individual rule addition are optional capabilities; the default
    implementations raise NotImplementedError.

    Example:
        >>> class SuffixRules(BaseExclusionRules):
        ...     def __init__(self, suffix: str):
        ...         self.suffix = suffix
        ...     def exclude(self, path: str) -> bool:
        ...         return path.endswith(self.suffix)
        >>> rules = SuffixRules(".tmp")
        >>> rules.exclude("build/cache.tmp")
        True
        >>> rules.exclude("main.py")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded from the tree.

        Args:
            path (str): Path of the entry relative to the tree root, using "/" as
                separator. Directories may be passed with a trailing "/".

        Returns:
            bool: True if the entry should be excluded, False if it should be kept.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load exclusion rules from one or more files.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
