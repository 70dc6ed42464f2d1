"""Rendering of built directory trees as box-drawing diagrams.

This module turns a Directory produced by the tree builder into text similar to the
Unix 'tree' command: the root path, one line per entry with connectors showing the
nesting, and a closing summary of file and directory counts.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from anytree.render import AbstractStyle, AsciiStyle, ContStyle

from dirtree.tree_builder.tree_node import Directory, RegularFile, Symlink, TreeNode
from dirtree.types import PathType

SIZE_UNITS = (
    (1024 * 1024 * 1024, "GB"),
    (1024 * 1024, "MB"),
    (1024, "KB"),
)


def format_size(size: Optional[int]) -> str:
    """Format a byte count with the largest unit it strictly exceeds.

    Values are truncated, not rounded.

    Example:
        >>> format_size(512)
        '512 B'
        >>> format_size(1024)
        '1024 B'
        >>> format_size(5 * 1024 * 1024 + 1)
        '5 MB'
        >>> format_size(None)
        'NA'
    """
    if size is None:
        return "NA"
    for factor, unit in SIZE_UNITS:
        if size > factor:
            return f"{size // factor} {unit}"
    return f"{size} B"


@dataclass(frozen=True)
class RenderResult:
    """Complete rendering of a tree together with its counts."""

    text: str
    file_count: int
    dir_count: int


class TreeRenderer:
    """Renders a Directory tree line by line.

    Entries are visited depth-first in pre-order, in the order the builder stored them;
    the renderer never sorts. A directory's line is followed by all of its descendants
    before the next sibling is printed.

    Counting:
        file_count covers every RegularFile and Symlink in the tree and dir_count every
        Directory including the root, regardless of which lines are printed.

    Symbolic Links:
        By default symbolic links are counted as files but not printed. With
        show_symlinks they are printed as "name → target". Connectors are chosen among
        the printed siblings only, so the last printed line of a directory always uses
        the closing connector.

    Attributes:
        style (AbstractStyle): Connector glyphs (anytree ContStyle, or AsciiStyle).
        show_symlinks (bool): Print symbolic links with their target.
        show_size (bool): Append the size of each regular file.
        file_count (int): Files counted by the most recent rendering.
        dir_count (int): Directories counted by the most recent rendering.

    Example:
        >>> tree = Directory("project", [
        ...     RegularFile("a.txt"),
        ...     Directory("sub", [RegularFile("b.txt")]),
        ... ])
        >>> for line in TreeRenderer().stream("project", tree):
        ...     print(line)
        project
        ├── a.txt
        └── sub
            └── b.txt
        2 files, 2 directories
    """

    def __init__(
        self,
        *,
        show_symlinks: bool = False,
        show_size: bool = False,
        ascii: bool = False,
        style: Optional[AbstractStyle] = None,
    ) -> None:
        """Initialize a TreeRenderer.

        Args:
            show_symlinks: Print symbolic links as "name → target". Defaults to False.
            show_size: Append " [<size>]" to regular files. Defaults to False.
            ascii: Use ASCII connectors instead of box-drawing characters.
            style: Explicit anytree style; takes precedence over ascii.
        """
        if style is None:
            style = AsciiStyle() if ascii else ContStyle()
        self.style = style
        self.show_symlinks = show_symlinks
        self.show_size = show_size
        self.file_count = 0
        self.dir_count = 0

    def stream(self, root_path: PathType, tree: Directory) -> Iterator[str]:
        """Generate the diagram one line at a time, without trailing newlines.

        The first line is root_path exactly as given and the last line is the summary.
        Counts are final once the generator is exhausted.

        Args:
            root_path: Path to print on the first line.
            tree: Root Directory to render.

        Yields:
            Lines of the diagram.
        """
        self.file_count = 0
        self.dir_count = 1

        yield str(root_path)
        yield from self._render_entries(tree, "")
        yield self.summary()

    def render(self, root_path: PathType, tree: Directory) -> RenderResult:
        """Render the whole diagram at once.

        Args:
            root_path: Path to print on the first line.
            tree: Root Directory to render.

        Returns:
            The text (lines joined with newlines, no trailing newline) and the counts.
        """
        text = "\n".join(self.stream(root_path, tree))
        return RenderResult(text=text, file_count=self.file_count, dir_count=self.dir_count)

    def summary(self) -> str:
        return f"{self.file_count} files, {self.dir_count} directories"

    def _render_entries(self, directory: Directory, prefix: str) -> Iterator[str]:
        printed: List[TreeNode] = []
        for entry in directory.entries:
            if isinstance(entry, Symlink):
                self.file_count += 1
                if self.show_symlinks:
                    printed.append(entry)
            else:
                printed.append(entry)

        for index, entry in enumerate(printed):
            is_last = index == len(printed) - 1
            connector = self.style.end if is_last else self.style.cont
            yield f"{prefix}{connector}{self._label(entry)}"

            if isinstance(entry, Directory):
                self.dir_count += 1
                child_prefix = prefix + (self.style.empty if is_last else self.style.vertical)
                yield from self._render_entries(entry, child_prefix)
            elif isinstance(entry, RegularFile):
                self.file_count += 1

    def _label(self, entry: TreeNode) -> str:
        if isinstance(entry, Symlink):
            return f"{entry.name} → {entry.target}"
        if isinstance(entry, RegularFile) and self.show_size:
            return f"{entry.name} [{format_size(entry.size)}]"
        return entry.name


def stream_tree(root_path: PathType, tree: Directory, **options) -> Iterator[str]:
    """Generate the diagram for a tree line by line; see TreeRenderer.stream()."""
    return TreeRenderer(**options).stream(root_path, tree)


def render_tree(root_path: PathType, tree: Directory, **options) -> RenderResult:
    """Render a tree in one call.

    Args:
        root_path: Path to print on the first line.
        tree: Root Directory to render.
        **options: Keyword arguments accepted by TreeRenderer.

    Returns:
        The rendered text and the file and directory counts.

    Example:
        >>> result = render_tree("/data", Directory("data", [RegularFile("x.csv")]))
        >>> print(result.text)
        /data
        └── x.csv
        1 files, 1 directories
        >>> result.file_count, result.dir_count
        (1, 1)
    """
    return TreeRenderer(**options).render(root_path, tree)
