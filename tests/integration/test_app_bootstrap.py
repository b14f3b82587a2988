"""
Integration tests for bootstrapping an application's on-disk footprint.

Coverage:
- layout assessment before and after generation
- config manager and JSON store living inside a generated layout
- application context loading the generated config
- manifest export/import driving a second generation
"""

from __future__ import annotations

import json
import os
import stat
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from appcontext.configmanager import ConfigManager
from appcontext.context import AppContext
from appcontext.jsonstore import JsonStore
from appcontext.pathspec import (
    CONFIG_FILE_TEMPLATE,
    JSON_STORAGE_TEMPLATE,
    LOG_FILE_TEMPLATE,
    PROJECTS_TEMPLATE,
    Layout,
    filesystem_path,
    new_custom_path,
    with_group_category,
    with_name,
)

if TYPE_CHECKING:
    from pathlib import Path


@dataclass
class Settings:
    theme: str = "light"
    retries: int = 3


@dataclass
class Project:
    title: str
    tags: list[str] = field(default_factory=list)


@pytest.fixture
def xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setenv("TMPDIR", str(tmp_path / "tmp"))
    return tmp_path


def _layout() -> Layout:
    return Layout.build(
        "app",
        [
            new_custom_path(CONFIG_FILE_TEMPLATE, with_name("config.toml")),
            new_custom_path(PROJECTS_TEMPLATE, with_name("projects")),
            new_custom_path(JSON_STORAGE_TEMPLATE, with_name("projects.json")),
            new_custom_path(LOG_FILE_TEMPLATE, with_name("app.log")),
        ],
        app_version="1.0.0",
    )


@pytest.mark.integration
def test_assessment_clears_after_generation(xdg_home: Path) -> None:
    layout = _layout()

    before, before_status = layout.assess()
    layout.generate()
    after, after_status = layout.assess()

    assert before == [
        f"mandatory path does not exist: {xdg_home / 'config' / 'app' / 'config.toml'}"
    ]
    assert before_status is not None and before_status.count == 1
    assert after == []
    assert after_status is None
    assert (xdg_home / "state" / "app" / "logs" / "app.log").is_file()


@pytest.mark.integration
def test_stores_operate_inside_generated_layout(xdg_home: Path) -> None:
    layout = _layout()
    layout.generate()
    config_entry = layout.config_paths[0]
    storage_entry = layout.data_paths[1]

    manager = ConfigManager("app", Settings())
    assert manager.path == filesystem_path(config_entry)
    assert manager.load() == Settings()
    manager.set(Settings(theme="dark", retries=1))
    manager.save()

    store_path = filesystem_path(storage_entry)
    store = JsonStore.load(store_path, Project, auto_save=True)
    assert store.count() == 0
    store.insert("p1", Project("first", ["x"]))
    store.insert("p2", Project("second"))

    with open(store_path, encoding="utf-8") as handle:
        persisted = json.load(handle)
    assert persisted == {
        "p1": {"title": "first", "tags": ["x"]},
        "p2": {"title": "second", "tags": []},
    }
    assert stat.S_IMODE(os.stat(store_path).st_mode) == 0o600
    assert layout.assess() == ([], None)

    context = AppContext("app", default_config=Settings())
    assert context.load_config() == Settings(theme="dark", retries=1)


@pytest.mark.integration
def test_manifest_drives_generation_of_a_copy(xdg_home: Path) -> None:
    original = _layout()
    manifest_path = xdg_home / "manifest" / "layout.json"
    original.export(manifest_path)

    restored = Layout.import_manifest(manifest_path)
    restored.generate()

    assert restored == original
    assert original.assess() == ([], None)


@pytest.mark.integration
def test_group_category_moves_the_whole_entry(xdg_home: Path) -> None:
    grouped = new_custom_path(
        JSON_STORAGE_TEMPLATE, with_name("shared.json"), with_group_category("acme")
    )
    layout = Layout.build("app", [grouped])

    layout.generate()

    assert (xdg_home / "data" / "acme" / "app" / "storage" / "shared.json").is_file()
