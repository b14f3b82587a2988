"""
appcontext - application context.

File: src/appcontext/context.py
Last updated: 2026-10-17

Purpose
- Bundle what one application needs at startup: its name, its XDG locations, an
  optional typed config manager and a logger.

Functional requirements
- ``load_config`` tries the caller's paths in order, then the default config file,
  and stops at the first success. When every candidate fails, the error lists each
  failed candidate with its reason.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final

import structlog

from appcontext import xdg
from appcontext.configmanager import ConfigManager, ConfigManagerError, SerializationFormat
from appcontext.configmanager.errors import ConfigLoadError
from appcontext.utils.fs import PathLike
from appcontext.utils.values import ValidatorFunc


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<unset>"


_UNSET: Final = _Unset()


@dataclass(frozen=True, slots=True)
class AppPaths:
    """XDG resolver bound to one application."""

    app_name: str
    project_group: str | None = None
    environ: Mapping[str, str] | None = field(default=None, repr=False)

    def location(
        self,
        kind: xdg.BaseDir | str,
        *,
        sub_dirs: Sequence[str] = (),
        file_name: str | None = None,
    ) -> str:
        return xdg.location(
            kind,
            self.app_name,
            project_group=self.project_group,
            sub_dirs=sub_dirs,
            file_name=file_name,
            environ=self.environ,
        )

    def config_dir(self) -> str:
        return self.location(xdg.BaseDir.CONFIG)

    def data_dir(self) -> str:
        return self.location(xdg.BaseDir.DATA)

    def cache_dir(self) -> str:
        return self.location(xdg.BaseDir.CACHE)

    def state_dir(self) -> str:
        return self.location(xdg.BaseDir.STATE)

    def runtime_dir(self) -> str:
        return self.location(xdg.BaseDir.RUNTIME)


class AppContext:
    """
    Startup bundle for one application.

    Passing ``default_config`` attaches a ``ConfigManager`` for the application;
    the remaining config keywords are forwarded to it.
    """

    def __init__(
        self,
        app_name: str,
        *,
        default_config: Any = _UNSET,
        value_type: Any | None = None,
        fmt: SerializationFormat | str = SerializationFormat.TOML,
        project_group: str | None = None,
        validator: ValidatorFunc | None = None,
        logger: Any | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.app_name = app_name
        self.paths = AppPaths(app_name, project_group=project_group, environ=environ)
        self.logger = logger if logger is not None else structlog.get_logger(__name__)
        self.config: ConfigManager[Any] | None = None
        self._default_config_path = ""
        if not isinstance(default_config, _Unset):
            self.config = ConfigManager(
                app_name,
                default_config,
                value_type=value_type,
                fmt=fmt,
                project_group=project_group,
                validator=validator,
                environ=environ,
                logger=logger,
            )
            self._default_config_path = self.config.path

    @property
    def default_config_path(self) -> str:
        return self._default_config_path

    def load_config(self, *extra_paths: PathLike) -> Any:
        """
        Load the config from the first of ``extra_paths`` that works, falling back
        to the default config file. Returns a copy of the loaded value.
        """

        if self.config is None:
            raise ConfigLoadError(f"no config manager attached to context {self.app_name!r}")

        candidates = [os.fspath(item) for item in extra_paths]
        candidates.append(self._default_config_path)
        failures: list[str] = []
        for candidate in candidates:
            try:
                value = self.config.load(candidate)
            except ConfigManagerError as exc:
                failures.append(f"failed to load from {candidate or '<empty>'}: {exc}")
                continue
            self.logger.info("context_config_loaded", app_name=self.app_name, path=candidate)
            return value

        raise ConfigLoadError("collected errors: " + "; ".join(failures))


__all__ = ["AppContext", "AppPaths"]
