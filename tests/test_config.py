from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from tree_store.config import Settings
from tree_store.storage.documents import DocumentStore


def test_relative_data_dir_is_anchored_at_project_root(tmp_path: Path) -> None:
    settings = Settings(project_root=tmp_path, data_dir=Path("tree-data"))
    assert settings.storage_root == tmp_path / "tree-data"


def test_absolute_data_dir_is_kept(tmp_path: Path) -> None:
    settings = Settings(project_root=Path("/elsewhere"), data_dir=tmp_path)
    assert settings.storage_root == tmp_path


def test_invalid_default_group_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(default_group="../outside")


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TREE_STORE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TREE_STORE_PORT", "8080")
    settings = Settings()
    assert settings.storage_root == tmp_path
    assert settings.port == 8080


def test_seed_file_replaces_sample_tree(tmp_path: Path) -> None:
    seed_file = tmp_path / "seed.yml"
    seed_file.write_text("name: Custom_Root\nchildren:\n  - name: Leaf\n    size: 1\n", encoding="utf-8")
    settings = Settings(project_root=tmp_path, data_dir=Path("data"), seed_file=seed_file)

    store = DocumentStore.from_settings(settings)
    store.ensure_seeded()

    result = store.load_document(None, None)
    assert result.document == {"name": "Custom_Root", "children": [{"name": "Leaf", "size": 1}]}


def test_empty_seed_file_is_rejected(tmp_path: Path) -> None:
    seed_file = tmp_path / "seed.yml"
    seed_file.write_text("", encoding="utf-8")
    settings = Settings(project_root=tmp_path, data_dir=Path("data"), seed_file=seed_file)

    with pytest.raises(ValueError):
        DocumentStore.from_settings(settings)
