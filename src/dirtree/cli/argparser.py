"""Command-line argument parsing for dirtree.

This module defines the command-line interface for dirtree,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from dirtree import __version__
from dirtree.exclusion_rules.base_rules import BaseExclusionRules


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create an argparse action that feeds exclusion options into a rules object.

    Rules are added while the command line is parsed, so -e/--exclude files and
    -i/--ignore patterns keep the relative order in which they were given.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-e", "--exclude"):
                try:
                    exclusion_rules.load_rules(Path(str(values)))
                except FileNotFoundError as e:
                    parser.error(str(e))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            collected = getattr(namespace, self.dest, None) or []
            setattr(namespace, self.dest, collected + [values])

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with dirtree's options.
    """
    description = """
    dirtree: print the contents of a directory as a tree.

    Walks PATH (the current directory by default) and prints every retained entry
    with box-drawing connectors, followed by a count of files and directories.
    Dotfiles and entries the platform marks as hidden are left out unless -a is given.
    Symbolic links are never followed; they are counted as files and only printed
    with -l.
    """

    epilog = """
    Examples:
      # Tree of the current directory
      dirtree

      # Include dotfiles and hidden entries
      dirtree -a /path/to/project

      # Only the first two levels
      dirtree -d 2 /path/to/project

      # Exclude entries using gitignore-style files and patterns
      dirtree -e .gitignore -i "*.log" -i "!keep.log" /path/to/project

      # Show symbolic links with their targets and file sizes
      dirtree -l -S /path/to/project

      # Stop at the first unreadable directory instead of skipping it
      dirtree -E fail /path/to/project

      # Write the tree to a file using ASCII connectors
      dirtree -A -o tree.txt /path/to/project
    """

    parser = argparse.ArgumentParser(
        prog="dirtree",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"dirtree {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to display (default: the current working directory). Printed verbatim as the first line.",
    )
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Show dotfiles and entries marked hidden by the platform.",
    )
    parser.add_argument(
        "-d",
        "--max-depth",
        type=int,
        metavar="DEPTH",
        help="Descend at most DEPTH levels below the root (default: unlimited).",
    )
    parser.add_argument(
        "-1",
        "--no-recursive",
        action="store_true",
        help="List only the immediate contents of the root (same as -d 1).",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="Exclusion file with gitignore-style patterns (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Gitignore-style pattern to exclude, such as '*.pyc', 'build/' or '!keep.log'. Can be specified "
            "multiple times; patterns apply in the order given, mixed with -e/--exclude files."
        ),
    )
    parser.add_argument(
        "-l",
        "--show-links",
        action="store_true",
        help="Print symbolic links as 'name → target' (they are always counted as files).",
    )
    parser.add_argument(
        "-S",
        "--size",
        action="store_true",
        help="Append the size of each file.",
    )
    parser.add_argument(
        "-U",
        "--unsorted",
        action="store_true",
        help="Keep the order in which the filesystem lists entries instead of sorting by name.",
    )
    parser.add_argument(
        "-A",
        "--ascii",
        action="store_true",
        help="Use ASCII characters instead of box-drawing characters.",
    )
    parser.add_argument(
        "-E",
        "--on-error",
        choices=["ignore", "warn", "fail"],
        default="warn",
        help=(
            "What to do when a directory or link below the root can't be read: skip it silently, "
            "skip it with a warning, or stop (default: warn). With 'fail', a directory loop also stops; "
            "reaching --max-depth never does."
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debugging details to stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle and fills in
    max_depth when --no-recursive is given.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.max_depth is not None and args.max_depth < 1:
        raise ValueError("--max-depth must be at least 1")

    if args.no_recursive:
        if args.max_depth not in (None, 1):
            raise ValueError("--no-recursive can't be combined with --max-depth other than 1")
        args.max_depth = 1
