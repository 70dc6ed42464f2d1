"""Tests for tree rendering."""

import os

import pytest
from anytree.render import AsciiStyle

from dirtree.tree_builder.tree_builder import TreeBuilder
from dirtree.tree_builder.tree_node import Directory, RegularFile, Symlink
from dirtree.tree_renderer import RenderResult, TreeRenderer, format_size, render_tree, stream_tree


@pytest.fixture
def nested_tree():
    """A tree exercising continuation prefixes under both kinds of ancestors."""
    return Directory(
        "root",
        [
            Directory(
                "src",
                [
                    Directory("pkg", [RegularFile("__init__.py"), RegularFile("core.py")]),
                    RegularFile("main.py"),
                ],
            ),
            Directory("docs", [Directory("img", [RegularFile("logo.png")])]),
            RegularFile("setup.cfg"),
        ],
    )


def fake_stat(size):
    return os.stat_result((0o100644, 0, 0, 1, 0, 0, size, 0, 0, 0))


def test_render_scenario(sample_tree):
    tree = TreeBuilder(sample_tree).build()
    result = render_tree(str(sample_tree), tree)

    assert result.text.splitlines() == [
        str(sample_tree),
        "├── a.txt",
        "└── sub",
        "    └── b.txt",
        "2 files, 2 directories",
    ]
    assert result.file_count == 2
    assert result.dir_count == 2
    assert ".hidden.txt" not in result.text


def test_nested_prefixes(nested_tree):
    lines = list(stream_tree("root", nested_tree))
    assert lines == [
        "root",
        "├── src",
        "│   ├── pkg",
        "│   │   ├── __init__.py",
        "│   │   └── core.py",
        "│   └── main.py",
        "├── docs",
        "│   └── img",
        "│       └── logo.png",
        "└── setup.cfg",
        "5 files, 5 directories",
    ]


def test_last_sibling_uses_elbow(nested_tree):
    lines = list(stream_tree("root", nested_tree))
    top_level = [line for line in lines[1:-1] if not line.startswith(("│", " "))]
    assert [line[:4] for line in top_level] == ["├── ", "├── ", "└── "]


def test_root_path_printed_verbatim():
    lines = list(stream_tree("./some/../path/", Directory("path")))
    assert lines[0] == "./some/../path/"


def test_empty_root():
    result = render_tree("/empty", Directory("empty"))
    assert result.text == "/empty\n0 files, 1 directories"
    assert (result.file_count, result.dir_count) == (0, 1)


def test_empty_subdirectory_has_no_dangling_connectors():
    tree = Directory("root", [Directory("empty"), RegularFile("z.txt")])
    assert list(stream_tree("root", tree)) == [
        "root",
        "├── empty",
        "└── z.txt",
        "1 files, 2 directories",
    ]


def test_symlinks_counted_but_hidden_by_default():
    tree = Directory("root", [RegularFile("a.txt"), Symlink("link", "a.txt")])
    result = render_tree("root", tree)

    assert result.text.splitlines() == ["root", "└── a.txt", "2 files, 1 directories"]
    assert result.file_count == 2


def test_hidden_symlink_does_not_leave_a_dangling_tee():
    tree = Directory("root", [RegularFile("a.txt"), Directory("d", [Symlink("only_link", "x")]), Symlink("z", "a")])
    assert list(stream_tree("root", tree)) == [
        "root",
        "├── a.txt",
        "└── d",
        "3 files, 2 directories",
    ]


def test_show_symlinks():
    tree = Directory("root", [RegularFile("a.txt"), Symlink("link", "a.txt")])
    lines = list(stream_tree("root", tree, show_symlinks=True))
    assert lines == ["root", "├── a.txt", "└── link → a.txt", "2 files, 1 directories"]


def test_dangling_symlink_counted(sample_tree, symlinks_supported):
    os.symlink(sample_tree / "gone.txt", sample_tree / "dangling")

    tree = TreeBuilder(sample_tree).build()
    result = render_tree(sample_tree, tree, show_symlinks=True)

    assert result.file_count == 3
    assert f"dangling → {sample_tree / 'gone.txt'}" in result.text


def test_ascii_style():
    tree = Directory("root", [Directory("d", [RegularFile("x")]), RegularFile("y")])
    assert list(stream_tree("root", tree, ascii=True)) == [
        "root",
        "|-- d",
        "|   +-- x",
        "+-- y",
        "2 files, 2 directories",
    ]


def test_explicit_style_takes_precedence():
    renderer = TreeRenderer(style=AsciiStyle())
    assert isinstance(renderer.style, AsciiStyle)


def test_show_size():
    tree = Directory("root", [RegularFile("big.bin", fake_stat(3 * 1024 * 1024 + 5)), RegularFile("unknown")])
    lines = list(stream_tree("root", tree, show_size=True))
    assert lines[1:3] == ["├── big.bin [3 MB]", "└── unknown [NA]"]


@pytest.mark.parametrize(
    "size,expected",
    [
        (0, "0 B"),
        (1024, "1024 B"),
        (1025, "1 KB"),
        (1024 * 1024 + 1, "1 MB"),
        (5 * 1024 * 1024 * 1024 + 1, "5 GB"),
        (None, "NA"),
    ],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


def test_rendering_is_idempotent(nested_tree):
    renderer = TreeRenderer()
    first = renderer.render("root", nested_tree)
    second = renderer.render("root", nested_tree)
    assert first == second
    assert first.text.encode("utf-8") == second.text.encode("utf-8")


def test_counts_match_tree(nested_tree):
    def count(node):
        if isinstance(node, Directory):
            files, dirs = 0, 1
            for entry in node.entries:
                f, d = count(entry)
                files, dirs = files + f, dirs + d
            return files, dirs
        return 1, 0

    result = render_tree("root", nested_tree)
    assert (result.file_count, result.dir_count) == count(nested_tree)


def test_renderer_counts_available_after_streaming(nested_tree):
    renderer = TreeRenderer()
    lines = list(renderer.stream("root", nested_tree))
    assert lines[-1] == renderer.summary() == "5 files, 5 directories"
    assert isinstance(renderer.render("root", nested_tree), RenderResult)
