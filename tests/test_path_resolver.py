from __future__ import annotations

from pathlib import Path

import pytest

from tree_store.storage.errors import InvalidName
from tree_store.storage.paths import PathResolver, is_valid_name


@pytest.mark.parametrize("name", ["", "..", "a/b", "a\\b", "/etc", "..\\x", "../escape", None, 42])
def test_invalid_names_are_rejected(name: object) -> None:
    assert is_valid_name(name) is False


@pytest.mark.parametrize("name", ["Default_Group", "doc1.json", "no-extension", "...", "with space"])
def test_plain_names_are_accepted(name: str) -> None:
    assert is_valid_name(name) is True


@pytest.mark.parametrize(
    ("group", "file"),
    [("..", "x.json"), ("g", ".."), ("g/../..", "x.json"), ("g", "..\\secret"), ("", "x.json"), ("g", "")],
)
def test_resolve_rejects_without_touching_disk(tmp_path: Path, group: str, file: str) -> None:
    root = tmp_path / "missing-root"
    resolver = PathResolver(root)

    with pytest.raises(InvalidName):
        resolver.resolve(group, file)

    assert not root.exists()


def test_resolve_joins_under_root(tmp_path: Path) -> None:
    resolver = PathResolver(tmp_path)
    path = resolver.resolve("NewGroup", "doc1.json")

    assert path == tmp_path / "NewGroup" / "doc1.json"
    assert path.is_absolute()
    assert tmp_path in path.parents
    assert not path.parent.exists()


def test_invalid_name_reports_offending_field(tmp_path: Path) -> None:
    with pytest.raises(InvalidName) as excinfo:
        PathResolver(tmp_path).resolve("ok", "../x")
    assert excinfo.value.field == "file"
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize(("group", "file"), [(".", "."), ("G", "."), (".", "x.json")])
def test_resolve_rejects_current_directory_marker(tmp_path: Path, group: str, file: str) -> None:
    resolver = PathResolver(tmp_path / "root")

    with pytest.raises(InvalidName):
        resolver.resolve(group, file)


def test_resolve_group_stays_below_root(tmp_path: Path) -> None:
    resolver = PathResolver(tmp_path)

    assert resolver.resolve_group("Second_Group") == tmp_path / "Second_Group"
    with pytest.raises(InvalidName):
        resolver.resolve_group(".")
