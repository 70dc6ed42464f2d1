import pytest

from dirtree.exclusion_rules.base_rules import BaseExclusionRules
from dirtree.exclusion_rules.git_rules import GitIgnoreExclusionRules


@pytest.fixture
def temp_treeignore(tmp_path):
    path = tmp_path / "treeignore"
    path.write_text("# generated files\n*.pyc\n__pycache__/\nbuild/\n*.log\n!keep.log\n")
    return path


@pytest.fixture
def temp_extra_ignore(tmp_path):
    path = tmp_path / "extra"
    path.write_text("docs/*.md\n")
    return path


@pytest.mark.parametrize(
    "path,expected",
    [
        ("module.pyc", True),
        ("pkg/module.pyc", True),
        ("module.py", False),
        ("__pycache__/", True),
        ("pkg/__pycache__/", True),
        ("__pycache__", False),
        ("build/", True),
        ("build/out.bin", True),
        ("server.log", True),
        ("keep.log", False),
        ("logs/keep.log", False),
    ],
)
def test_exclude_from_file(temp_treeignore, path, expected):
    rules = GitIgnoreExclusionRules(temp_treeignore)
    assert rules.exclude(path) is expected


def test_load_multiple_files(temp_treeignore, temp_extra_ignore):
    rules = GitIgnoreExclusionRules([temp_treeignore, temp_extra_ignore])
    assert rules.exclude("docs/index.md")
    assert not rules.exclude("docs/img/logo.png")
    assert rules.exclude("module.pyc")


def test_load_rules_incrementally(temp_treeignore, temp_extra_ignore):
    rules = GitIgnoreExclusionRules(temp_treeignore)
    assert not rules.exclude("docs/index.md")
    rules.load_rules(str(temp_extra_ignore))
    assert rules.exclude("docs/index.md")


def test_missing_rules_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Rules file not found"):
        GitIgnoreExclusionRules(tmp_path / "nope")


def test_add_rule_order_matters():
    rules = GitIgnoreExclusionRules()
    rules.add_rule("!important.txt")
    rules.add_rule("*.txt")
    assert rules.exclude("important.txt")

    rules = GitIgnoreExclusionRules()
    rules.add_rule("*.txt")
    rules.add_rule("!important.txt")
    assert not rules.exclude("important.txt")


def test_mixed_file_and_pattern_rules(temp_treeignore):
    rules = GitIgnoreExclusionRules()
    rules.add_rule("*.md")
    rules.load_rules(temp_treeignore)
    rules.add_rule("!build/")
    assert rules.exclude("README.md")
    assert not rules.exclude("build/")


def test_has_rules(tmp_path):
    assert not GitIgnoreExclusionRules().has_rules()

    comments_only = tmp_path / "comments"
    comments_only.write_text("# nothing here\n\n")
    assert not GitIgnoreExclusionRules(comments_only).has_rules()

    rules = GitIgnoreExclusionRules()
    rules.add_rule("*.tmp")
    assert rules.has_rules()


def test_base_rules_optional_capabilities():
    class NeverExclude(BaseExclusionRules):
        def exclude(self, path: str) -> bool:
            return False

    rules = NeverExclude()
    assert not rules.exclude("anything")
    with pytest.raises(NotImplementedError):
        rules.load_rules("file")
    with pytest.raises(NotImplementedError):
        rules.add_rule("*.txt")


def test_base_rules_is_abstract():
    with pytest.raises(TypeError):
        BaseExclusionRules()
