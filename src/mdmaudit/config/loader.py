# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered configuration loading with predictable precedence."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from ..errors import ConfigError
from .files import PYPROJECT_TABLE, ConfigFile, Sections, merge_sections
from .models import Config

PROJECT_CONFIG_NAME: Final[str] = ".mdmaudit.toml"


class ConfigLoader:
    """Layer configuration files in order; later files win key by key."""

    def __init__(self, *, files: Sequence[ConfigFile] = ()) -> None:
        self._files = tuple(files)

    @classmethod
    def for_root(cls, root: Path, *, explicit: Path | None = None) -> ConfigLoader:
        """Build a loader for documents under ``root``.

        Args:
            root: Analysis root used to discover configuration files.
            explicit: Optional configuration file supplied on the command line.

        Returns:
            ConfigLoader: Loader ordered pyproject, project file, explicit file.

        Raises:
            ConfigError: If ``explicit`` does not exist.
        """

        files = [
            ConfigFile(root / "pyproject.toml", table=PYPROJECT_TABLE),
            ConfigFile(root / PROJECT_CONFIG_NAME),
        ]
        if explicit is not None:
            if not explicit.is_file():
                raise ConfigError(f"Configuration file not found: {explicit}")
            files.append(ConfigFile(explicit))
        return cls(files=files)

    @property
    def files(self) -> tuple[ConfigFile, ...]:
        """Return the files consulted, lowest precedence first."""

        return self._files

    def load(self) -> Config:
        """Return the layered configuration; unset keys keep their defaults.

        Raises:
            ConfigError: If a file is invalid or the combined sections fail validation.
        """

        sections: Sections = {}
        for config_file in self._files:
            sections = merge_sections(sections, config_file.sections())
        try:
            return Config.model_validate(sections)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_config(root: Path, *, explicit: Path | None = None) -> Config:
    """Load configuration for ``root`` from its pyproject, project file and ``explicit``."""
    return ConfigLoader.for_root(root, explicit=explicit).load()


__all__ = ["ConfigLoader", "PROJECT_CONFIG_NAME", "load_config"]
