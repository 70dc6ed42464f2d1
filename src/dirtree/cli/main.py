"""Command-line interface for dirtree.

This module wires the argument parser, tree builder and tree renderer together and
translates failures into messages and exit codes. Tracebacks are never shown; every
error is reported as a single "Error: ..." line naming the path involved.

Signal Handling Notes:
    - SIGPIPE: Handled when the output pipe is closed (e.g., when piping to `head`)
      on Unix-like systems
    - SIGINT: Handled for a clean exit on Ctrl+C

Exit Codes:
    0: Successful completion
    1: The tree could not be built, or another runtime error occurred
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Tree of the current directory
    $ dirtree

    # Tree of another directory including dotfiles, two levels deep
    $ dirtree -a -d 2 /path/to/dir
"""

import logging
import os
import sys
from typing import List, Optional

from dirtree.cli.argparser import create_parser, validate_args
from dirtree.cli.safe_writer import SafeWriter
from dirtree.cli.signal_handler import setup_signal_handling, signal_handler
from dirtree.exclusion_rules.git_rules import GitIgnoreExclusionRules
from dirtree.tree_builder.error_action import ErrorAction
from dirtree.tree_builder.tree_builder import TreeBuilder
from dirtree.tree_renderer import TreeRenderer

ERROR_ACTIONS = {
    "ignore": ErrorAction.IGNORE,
    "warn": ErrorAction.WARN,
    "fail": ErrorAction.RAISE,
}


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the dirtree command-line interface.

    Args:
        argv: Arguments to parse instead of sys.argv[1:].

    Exit codes:
        0: Successful completion
        1: The tree could not be built, or another runtime error occurred
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        exclusion_rules = GitIgnoreExclusionRules()
        parser = create_parser(exclusion_rules)
        args = parser.parse_args(argv)

        try:
            validate_args(args)
        except ValueError as e:
            parser.error(str(e))

        configure_logging(args.verbose)

        root_path = args.path if args.path is not None else os.getcwd()

        builder = TreeBuilder(
            root_path,
            show_hidden=args.all,
            max_depth=args.max_depth,
            exclusion_rules=exclusion_rules if exclusion_rules.has_rules() else None,
            error_action=ERROR_ACTIONS[args.on_error],
            sort_entries=not args.unsorted,
        )
        tree = builder.build()

        for warning in builder.warnings:
            print(f"Warning: {warning.message}", file=sys.stderr)

        renderer = TreeRenderer(show_symlinks=args.show_links, show_size=args.size, ascii=args.ascii)
        output = args.output if args.output else sys.stdout.fileno()

        with SafeWriter(output) as safe_writer:
            try:
                for line in renderer.stream(root_path, tree):
                    safe_writer.write_line(line)
            except BrokenPipeError:
                pass  # SafeWriter will close in the context manager

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
