"""
appcontext - unit tests for the typed configuration manager

File: tests/unit/configmanager/test_manager.py
Last updated: 2026-10-17

Purpose
- Validate path resolution, load/save semantics and validation hooks.

What this test file should cover
- Default XDG path, forced path consistency, project groups.
- Save/load for every supported format.
- Candidate search during load and rollback on decode/validation failure.
- Save refusal for invalid values and wrapped write failures.

Functional requirements
- Offline operation; XDG variables point into ``tmp_path``.

Non-functional requirements
- Deterministic and non-flaky.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from appcontext.configmanager import (
    ConfigLoadError,
    ConfigManager,
    ConfigPathError,
    ConfigSaveError,
    ConfigValidationError,
    SerializationFormat,
    UnsupportedFormatError,
)
from appcontext.configmanager import manager as manager_module

if TYPE_CHECKING:
    from pathlib import Path


@dataclass
class ServiceConfig:
    name: str = "demo"
    port: int = 8080
    hosts: list[str] = field(default_factory=lambda: ["localhost"])

    def validate(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"port out of range: {self.port}")


def _environ(tmp_path: Path) -> dict[str, str]:
    return {"HOME": str(tmp_path / "home"), "XDG_CONFIG_HOME": str(tmp_path / "config")}


def test_default_path_is_config_file_under_xdg_config_home(tmp_path: Path) -> None:
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))

    assert manager.path == os.path.join(str(tmp_path / "config"), "myapp", "config.toml")
    assert manager.format is SerializationFormat.TOML
    assert manager.app_name == "myapp"


def test_project_group_sits_between_home_and_app(tmp_path: Path) -> None:
    manager = ConfigManager(
        "myapp",
        ServiceConfig(),
        fmt="yaml",
        project_group="acme",
        environ=_environ(tmp_path),
    )

    assert manager.path == os.path.join(str(tmp_path / "config"), "acme", "myapp", "config.yaml")


def test_empty_app_name_cannot_resolve_a_path(tmp_path: Path) -> None:
    with pytest.raises(ConfigPathError, match="application name is empty"):
        ConfigManager("", ServiceConfig(), environ=_environ(tmp_path))


def test_unsupported_format_fails_at_construction(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedFormatError):
        ConfigManager("myapp", ServiceConfig(), fmt="ini", environ=_environ(tmp_path))


def test_forced_path_must_match_format(tmp_path: Path) -> None:
    with pytest.raises(ConfigPathError, match="does not match serialization format"):
        ConfigManager("myapp", ServiceConfig(), fmt="json", force_path=tmp_path / "cfg.toml")


def test_forced_path_must_not_be_a_directory(tmp_path: Path) -> None:
    directory = tmp_path / "cfg.toml"
    directory.mkdir()

    with pytest.raises(ConfigPathError, match="is a directory"):
        ConfigManager("myapp", ServiceConfig(), force_path=directory)


def test_create_writes_default_when_missing(tmp_path: Path) -> None:
    manager = ConfigManager("myapp", ServiceConfig(), create=True, environ=_environ(tmp_path))

    text = (tmp_path / "config" / "myapp" / "config.toml").read_text(encoding="utf-8")
    assert 'name = "demo"' in text
    assert manager.config == ServiceConfig()


def test_create_does_not_overwrite_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "config" / "myapp" / "config.toml"
    target.parent.mkdir(parents=True)
    target.write_text('name = "kept"\nport = 1\nhosts = []\n', encoding="utf-8")

    ConfigManager("myapp", ServiceConfig(), create=True, environ=_environ(tmp_path))

    assert 'name = "kept"' in target.read_text(encoding="utf-8")


@pytest.mark.parametrize("fmt", list(SerializationFormat))
def test_saved_config_loads_back_equal(tmp_path: Path, fmt: SerializationFormat) -> None:
    environ = _environ(tmp_path)
    writer = ConfigManager("myapp", ServiceConfig(), fmt=fmt, environ=environ)
    writer.set(ServiceConfig(name="prod", port=443, hosts=["a.example", "b.example"]))
    writer.save()

    reader = ConfigManager("myapp", ServiceConfig(), fmt=fmt, environ=environ)
    loaded = reader.load()

    assert loaded == ServiceConfig(name="prod", port=443, hosts=["a.example", "b.example"])
    assert reader.config == loaded


@dataclass
class ProfileConfig:
    name: str = "demo"
    nickname: str | None = None


@pytest.mark.parametrize("fmt", list(SerializationFormat))
def test_optional_fields_set_to_none_round_trip(tmp_path: Path, fmt: SerializationFormat) -> None:
    environ = _environ(tmp_path)
    writer = ConfigManager("myapp", ProfileConfig(name="prod"), fmt=fmt, environ=environ)
    writer.save()

    reader = ConfigManager("myapp", ProfileConfig(nickname="stale"), fmt=fmt, environ=environ)

    assert reader.load() == ProfileConfig(name="prod")


def test_config_returns_a_copy(tmp_path: Path) -> None:
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))

    snapshot = manager.config
    snapshot.hosts.append("mutated")

    assert manager.config.hosts == ["localhost"]


def test_set_rejects_values_of_another_type(tmp_path: Path) -> None:
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))

    with pytest.raises(TypeError):
        manager.set({"name": "x"})  # type: ignore[arg-type]

    assert manager.config == ServiceConfig()


def test_update_commits_in_place_mutation(tmp_path: Path) -> None:
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))

    def bump(cfg: ServiceConfig) -> None:
        cfg.port += 1

    result = manager.update(bump)

    assert result.port == 8081
    assert manager.config.port == 8081


def test_update_keeps_value_when_mutation_raises(tmp_path: Path) -> None:
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))

    def broken(cfg: ServiceConfig) -> None:
        cfg.port = 1
        raise RuntimeError("abort")

    with pytest.raises(RuntimeError, match="abort"):
        manager.update(broken)

    assert manager.config.port == 8080


def test_concurrent_updates_are_serialized(tmp_path: Path) -> None:
    manager = ConfigManager("myapp", ServiceConfig(port=1), environ=_environ(tmp_path))

    def bump(cfg: ServiceConfig) -> ServiceConfig:
        return ServiceConfig(name=cfg.name, port=cfg.port + 1, hosts=cfg.hosts)

    workers = [
        threading.Thread(target=lambda: [manager.update(bump) for _ in range(50)])
        for _ in range(4)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join(timeout=10)

    assert all(not worker.is_alive() for worker in workers)
    assert manager.config.port == 201


def test_load_skips_unusable_candidates_and_adopts_first_readable(tmp_path: Path) -> None:
    good = tmp_path / "alt" / "settings.toml"
    good.parent.mkdir()
    good.write_text('name = "alt"\nport = 9000\nhosts = ["x"]\n', encoding="utf-8")
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))

    loaded = manager.load(tmp_path / "missing.toml", tmp_path / "wrong.json", good)

    assert loaded == ServiceConfig(name="alt", port=9000, hosts=["x"])
    assert manager.path == str(good)


def test_load_reports_every_skipped_candidate(tmp_path: Path) -> None:
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))

    with pytest.raises(ConfigLoadError, match="failed to load config") as info:
        manager.load(tmp_path / "one.toml", tmp_path / "two.yaml")

    message = str(info.value)
    assert "one.toml" in message
    assert "two.yaml" in message
    assert manager.config == ServiceConfig()


def test_load_decode_failure_keeps_previous_value(tmp_path: Path) -> None:
    broken = tmp_path / "broken.toml"
    broken.write_text("name = \n", encoding="utf-8")
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))
    original_path = manager.path

    with pytest.raises(ConfigLoadError, match="failed to decode"):
        manager.load(broken)

    assert manager.config == ServiceConfig()
    assert manager.path == original_path


def test_load_type_mismatch_is_a_load_error(tmp_path: Path) -> None:
    mistyped = tmp_path / "mistyped.json"
    mistyped.write_text('{"name": "x", "port": "not-a-number"}', encoding="utf-8")
    manager = ConfigManager("myapp", ServiceConfig(), fmt="json", environ=_environ(tmp_path))

    with pytest.raises(ConfigLoadError):
        manager.load(mistyped)

    assert manager.config == ServiceConfig()


def test_load_validation_failure_keeps_previous_value(tmp_path: Path) -> None:
    invalid = tmp_path / "invalid.toml"
    invalid.write_text('name = "x"\nport = 0\nhosts = []\n', encoding="utf-8")
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))

    with pytest.raises(ConfigValidationError, match="port out of range"):
        manager.load(invalid)

    assert manager.config == ServiceConfig()


def test_save_refuses_invalid_value(tmp_path: Path) -> None:
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))
    manager.set(ServiceConfig(port=70000))

    with pytest.raises(ConfigValidationError, match="validation failed before save"):
        manager.save()

    assert not os.path.exists(manager.path)


def test_explicit_validator_overrides_value_method(tmp_path: Path) -> None:
    def no_demo(cfg: ServiceConfig) -> None:
        if cfg.name == "demo":
            raise ValueError("demo name is reserved")

    manager = ConfigManager(
        "myapp", ServiceConfig(), validator=no_demo, environ=_environ(tmp_path)
    )

    with pytest.raises(ConfigValidationError, match="demo name is reserved"):
        manager.save()


def test_plain_mapping_config_has_no_validation(tmp_path: Path) -> None:
    manager = ConfigManager(
        "myapp",
        {"level": "info"},
        value_type=dict[str, str],
        fmt="json",
        environ=_environ(tmp_path),
    )
    manager.save()

    assert manager.load() == {"level": "info"}


def test_write_failure_is_wrapped(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))

    def failing_write(path: object, data: object) -> None:
        raise OSError("read-only filesystem")

    monkeypatch.setattr(manager_module, "atomic_write", failing_write)

    with pytest.raises(ConfigSaveError, match="atomic save to .* failed"):
        manager.save()


def test_set_path_enforces_format(tmp_path: Path) -> None:
    manager = ConfigManager("myapp", ServiceConfig(), environ=_environ(tmp_path))

    with pytest.raises(ConfigPathError):
        manager.set_path(tmp_path / "other.yaml")

    manager.set_path(tmp_path / "other.toml")
    manager.save()

    assert (tmp_path / "other.toml").is_file()
